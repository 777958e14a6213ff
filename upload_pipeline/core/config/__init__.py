"""
Configuration module for the upload pipeline
"""

from .app_config import AppConfig, MetadataDefaults, PlatformEndpoints
from .config_loader import ConfigLoader, ConfigValidationError

__all__ = ["AppConfig", "ConfigLoader", "ConfigValidationError", "MetadataDefaults", "PlatformEndpoints"]
