"""
Error taxonomy for the upload pipeline
"""

from .error_classifier import (
    AuthError,
    ClassifiedError,
    ConfigError,
    NetworkError,
    QuotaExceededError,
    ServerError,
    ValidationError,
    classify,
)

__all__ = [
    "AuthError",
    "ClassifiedError",
    "ConfigError",
    "NetworkError",
    "QuotaExceededError",
    "ServerError",
    "ValidationError",
    "classify",
]
