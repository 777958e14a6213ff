"""
Remote Resource Domain Model
A video as the platform reports it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import PlatformEndpoints


@dataclass(frozen=True)
class RemoteResource:
    """
    Platform-assigned id, public URLs and the last-known snapshot of the
    applied metadata (which may differ from what was requested).
    """
    resource_id: str
    url: str
    embed_url: str
    snippet: Dict[str, Any] = field(default_factory=dict)
    status: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, item: Dict[str, Any], endpoints: PlatformEndpoints) -> "RemoteResource":
        resource_id = item["id"]
        return cls(
            resource_id=resource_id,
            url=endpoints.watch_url(resource_id),
            embed_url=endpoints.embed_url(resource_id),
            snippet=dict(item.get("snippet") or {}),
            status=dict(item.get("status") or {})
        )

    @property
    def title(self) -> str:
        return self.snippet.get("title", "")

    @property
    def description(self) -> str:
        return self.snippet.get("description", "")

    @property
    def tags(self) -> List[str]:
        return list(self.snippet.get("tags") or [])

    @property
    def category_id(self) -> Optional[str]:
        return self.snippet.get("categoryId")

    @property
    def privacy_status(self) -> Optional[str]:
        return self.status.get("privacyStatus")

    @property
    def made_for_kids(self) -> bool:
        return bool(self.status.get("selfDeclaredMadeForKids", False))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.resource_id,
            "url": self.url,
            "embed_url": self.embed_url,
            "title": self.title,
            "privacy_status": self.privacy_status,
            "tags": self.tags,
            "category_id": self.category_id,
        }
