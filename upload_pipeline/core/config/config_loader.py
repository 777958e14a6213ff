"""
Configuration Loader
Loads and validates YAML configuration files
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from ..errors import ConfigError
from .app_config import AppConfig, MetadataDefaults, PlatformEndpoints

PRIVACY_VALUES = ("private", "unlisted", "public")


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""
    pass


class ConfigLoader:
    """
    Loads and validates configuration from YAML files.

    Responsibilities:
    - Read YAML configuration file
    - Validate proxy, platform, defaults and storage sections
    - Reject any client secret in the file
    - Return validated AppConfig instance

    Every section is optional: a missing proxy URL is reported by the
    token provider when a call actually needs it.
    """

    def __init__(self, config_path: Path):
        """
        Initialize ConfigLoader with path to config file.

        Args:
            config_path: Path to YAML configuration file
        """
        self._config_path = config_path

    def load(self) -> AppConfig:
        """
        Load and validate configuration from YAML file.

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_data = self._load_yaml()
        return self.from_dict(config_data)

    def from_dict(self, config_data: Dict[str, Any]) -> AppConfig:
        """Validate an already-parsed mapping."""
        self._reject_secrets(config_data)

        proxy = self._validate_proxy(config_data)
        channel = self._validate_channel(config_data)
        endpoints = self._validate_platform(config_data)
        defaults = self._validate_defaults(config_data)
        request_timeout = self._validate_request_timeout(config_data)
        storage_root = self._validate_storage(config_data)

        return AppConfig(
            proxy_base_url=proxy["base_url"],
            token_path=proxy["token_path"],
            channel_field=proxy["channel_field"],
            channel=channel,
            endpoints=endpoints,
            defaults=defaults,
            request_timeout=request_timeout,
            storage_root=storage_root
        )

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML file and return parsed data."""
        if not self._config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

            if data is None:
                raise ConfigValidationError("Configuration file is empty")

            if not isinstance(data, dict):
                raise ConfigValidationError(
                    "Configuration must be a YAML mapping/dictionary"
                )

            return data

        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax: {e}")

    def _reject_secrets(self, config: Dict[str, Any]):
        """OAuth client secrets belong to the token proxy, never to this client."""
        def walk(node: Any, path: str):
            if isinstance(node, dict):
                for key, value in node.items():
                    if "secret" in str(key).lower():
                        raise ConfigValidationError(
                            f"Field '{path}{key}' looks like a client secret. "
                            "Secrets must stay on the token proxy."
                        )
                    walk(value, f"{path}{key}.")

        walk(config, "")

    def _validate_proxy(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate proxy section."""
        defaults = {"base_url": None, "token_path": "/token", "channel_field": "channelIdentity"}

        proxy = config.get("proxy")
        if proxy is None:
            return defaults
        if not isinstance(proxy, dict):
            raise ConfigValidationError(f"proxy must be a mapping, got {type(proxy).__name__}")

        base_url = proxy.get("base_url")
        if base_url is not None:
            if not isinstance(base_url, str):
                raise ConfigValidationError(
                    f"Field 'proxy.base_url' must be a string, got {type(base_url).__name__}"
                )
            base_url = base_url.strip() or None
            if base_url and not base_url.startswith(("http://", "https://")):
                raise ConfigValidationError(f"Field 'proxy.base_url' must be an http(s) URL, got {base_url!r}")

        token_path = self._optional_string(proxy, "token_path", "proxy.token_path", defaults["token_path"])
        channel_field = self._optional_string(proxy, "channel_field", "proxy.channel_field", defaults["channel_field"])

        return {"base_url": base_url, "token_path": token_path, "channel_field": channel_field}

    def _validate_channel(self, config: Dict[str, Any]) -> Optional[str]:
        """Validate channel field (optional)."""
        if "channel" not in config or config["channel"] is None:
            return None

        channel = config["channel"]

        # Team ids are often written unquoted in YAML
        if isinstance(channel, int) and not isinstance(channel, bool):
            channel = str(channel)

        if not isinstance(channel, str):
            raise ConfigValidationError(
                f"Field 'channel' must be a string, got {type(channel).__name__}"
            )

        if not channel.strip():
            raise ConfigValidationError("Field 'channel' cannot be empty")

        return channel.strip()

    def _validate_platform(self, config: Dict[str, Any]) -> PlatformEndpoints:
        """Validate platform section."""
        base = PlatformEndpoints()
        platform = config.get("platform")
        if platform is None:
            return base
        if not isinstance(platform, dict):
            raise ConfigValidationError(f"platform must be a mapping, got {type(platform).__name__}")

        values = {}
        for key in ("upload_url", "resources_url", "watch_base", "embed_base"):
            values[key] = self._optional_string(platform, key, f"platform.{key}", getattr(base, key))
        values["api_base_url"] = self._optional_string(platform, "api_base_url", "platform.api_base_url", None)

        return PlatformEndpoints(**values)

    def _validate_defaults(self, config: Dict[str, Any]) -> MetadataDefaults:
        """Validate defaults section for metadata fields."""
        base = MetadataDefaults()
        defaults = config.get("defaults")
        if defaults is None:
            return base
        if not isinstance(defaults, dict):
            raise ConfigValidationError(f"defaults must be a mapping, got {type(defaults).__name__}")

        tags = defaults.get("tags", base.tags)
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ConfigValidationError("defaults.tags must be a list of strings")

        category_id = defaults.get("category_id", base.category_id)
        if isinstance(category_id, int) and not isinstance(category_id, bool):
            category_id = str(category_id)
        if not isinstance(category_id, str) or not category_id.strip():
            raise ConfigValidationError("defaults.category_id must be a non-empty string")

        language = self._optional_string(defaults, "language", "defaults.language", base.language)

        made_for_kids = defaults.get("made_for_kids", base.made_for_kids)
        if not isinstance(made_for_kids, bool):
            raise ConfigValidationError(
                f"defaults.made_for_kids must be boolean, got {type(made_for_kids).__name__}"
            )

        privacy = defaults.get("privacy", base.privacy)
        if privacy not in PRIVACY_VALUES:
            raise ConfigValidationError(
                f"defaults.privacy must be one of {', '.join(PRIVACY_VALUES)}, got {privacy!r}"
            )

        return MetadataDefaults(
            tags=self._strip_tags(tags),
            category_id=category_id.strip(),
            language=language,
            made_for_kids=made_for_kids,
            privacy=privacy
        )

    def _validate_request_timeout(self, config: Dict[str, Any]) -> Optional[float]:
        """Validate request_timeout field (optional)."""
        timeout = config.get("request_timeout")
        if timeout is None:
            return None
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigValidationError(
                f"Field 'request_timeout' must be a positive number or null, got {timeout!r}"
            )
        return float(timeout)

    def _validate_storage(self, config: Dict[str, Any]) -> str:
        """Validate storage section."""
        storage = config.get("storage")
        if not isinstance(storage, dict):
            return "./storage"

        root = storage.get("root", "./storage")
        if not isinstance(root, str) or not root.strip():
            raise ConfigValidationError(f"storage.root must be a non-empty string, got {root!r}")
        return root.strip()

    def _optional_string(self, section: Dict[str, Any], key: str, label: str, default: Optional[str]) -> Optional[str]:
        value = section.get(key)
        if value is None:
            return default
        if not isinstance(value, str) or not value.strip():
            raise ConfigValidationError(f"Field '{label}' must be a non-empty string")
        return value.strip()

    @staticmethod
    def _strip_tags(tags: List[str]) -> List[str]:
        return [t.strip() for t in tags if t.strip()]
