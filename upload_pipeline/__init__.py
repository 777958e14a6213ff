"""
Team video upload pipeline
Publishes training and match videos to the team's channel on the video platform.
"""

from .core.auth import AccessToken, EnvironmentSessionProvider, StaticSessionProvider, TokenProvider
from .core.config import AppConfig, ConfigLoader
from .core.errors import (
    AuthError,
    ClassifiedError,
    ConfigError,
    NetworkError,
    QuotaExceededError,
    ServerError,
    ValidationError,
)
from .core.progress import ProgressStream, UploadPhase, UploadProgress
from .core.upload_manager import UploadManager, UploadOutcome
from .core.youtube import MediaMetadata, MetadataPatch, PrivacyStatus, RemoteResource

__all__ = [
    "AccessToken",
    "AppConfig",
    "AuthError",
    "ClassifiedError",
    "ConfigError",
    "ConfigLoader",
    "EnvironmentSessionProvider",
    "MediaMetadata",
    "MetadataPatch",
    "NetworkError",
    "PrivacyStatus",
    "ProgressStream",
    "QuotaExceededError",
    "RemoteResource",
    "ServerError",
    "StaticSessionProvider",
    "TokenProvider",
    "UploadManager",
    "UploadOutcome",
    "UploadPhase",
    "UploadProgress",
    "ValidationError",
]
