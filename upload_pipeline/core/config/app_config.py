"""
Application Configuration Model
Represents a validated configuration state
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class PlatformEndpoints:
    """Addresses of the video platform. Defaults target the YouTube Data API v3."""
    upload_url: str = "https://www.googleapis.com/upload/youtube/v3/videos"
    resources_url: str = "https://www.googleapis.com/youtube/v3/videos"
    api_base_url: Optional[str] = None
    watch_base: str = "https://www.youtube.com/watch"
    embed_base: str = "https://www.youtube.com/embed"

    def watch_url(self, resource_id: str) -> str:
        return f"{self.watch_base}?v={resource_id}"

    def embed_url(self, resource_id: str) -> str:
        return f"{self.embed_base.rstrip('/')}/{resource_id}"


@dataclass(frozen=True)
class MetadataDefaults:
    """Values applied to metadata fields the caller leaves empty."""
    tags: List[str] = field(default_factory=lambda: ["futbol", "entrenamiento"])
    category_id: str = "17"  # Sports
    language: str = "es"
    made_for_kids: bool = False
    privacy: str = "unlisted"
    embeddable: bool = True
    license: str = "youtube"


class AppConfig:
    """
    Immutable configuration object for the upload pipeline.

    Represents a VALID configuration state only.
    All validation must be performed before instantiation.
    """

    def __init__(
        self,
        proxy_base_url: Optional[str] = None,
        token_path: str = "/token",
        channel_field: str = "channelIdentity",
        channel: Optional[str] = None,
        endpoints: Optional[PlatformEndpoints] = None,
        defaults: Optional[MetadataDefaults] = None,
        request_timeout: Optional[float] = None,
        storage_root: str = "./storage"
    ):
        """
        Initialize AppConfig with validated values.

        Args:
            proxy_base_url: Base URL of the token proxy (None = not configured)
            token_path: Path of the token exchange endpoint under the proxy
            channel_field: JSON field carrying the channel identity in the token request
            channel: Default channel identity (optional, callers may pass their own)
            endpoints: Video platform addresses
            defaults: Metadata defaults
            request_timeout: Seconds before an HTTP call gives up (None = transport default)
            storage_root: Root directory for logs, temp files and the upload ledger
        """
        self._proxy_base_url = proxy_base_url
        self._token_path = token_path
        self._channel_field = channel_field
        self._channel = channel
        self._endpoints = endpoints or PlatformEndpoints()
        self._defaults = defaults or MetadataDefaults()
        self._request_timeout = request_timeout
        self._storage_root = storage_root

    @property
    def proxy_base_url(self) -> Optional[str]:
        """Base URL of the trusted token proxy."""
        return self._proxy_base_url

    @property
    def token_path(self) -> str:
        return self._token_path

    @property
    def token_url(self) -> Optional[str]:
        """Full token exchange URL, or None when the proxy is not configured."""
        if not self._proxy_base_url:
            return None
        return f"{self._proxy_base_url.rstrip('/')}/{self._token_path.lstrip('/')}"

    @property
    def channel_field(self) -> str:
        return self._channel_field

    @property
    def channel(self) -> Optional[str]:
        """Default channel identity."""
        return self._channel

    @property
    def endpoints(self) -> PlatformEndpoints:
        return self._endpoints

    @property
    def defaults(self) -> MetadataDefaults:
        return self._defaults

    @property
    def request_timeout(self) -> Optional[float]:
        return self._request_timeout

    @property
    def storage_root(self) -> str:
        """Root directory for storage."""
        return self._storage_root

    def with_overrides(self, proxy_base_url: Optional[str] = None, channel: Optional[str] = None) -> "AppConfig":
        """Return a copy with caller-supplied proxy URL / channel taking precedence."""
        return AppConfig(
            proxy_base_url=proxy_base_url or self._proxy_base_url,
            token_path=self._token_path,
            channel_field=self._channel_field,
            channel=channel or self._channel,
            endpoints=self._endpoints,
            defaults=self._defaults,
            request_timeout=self._request_timeout,
            storage_root=self._storage_root
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"AppConfig(proxy_base_url={self.proxy_base_url!r}, "
            f"channel={self.channel!r}, "
            f"upload_url={self.endpoints.upload_url!r}, "
            f"storage_root={self.storage_root!r})"
        )
