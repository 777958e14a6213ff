"""
Media Metadata Domain Model
Caller intent for a video: what goes into snippet/status on the platform.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import MetadataDefaults
from ..errors import ValidationError


class PrivacyStatus(str, Enum):
    PRIVATE = "private"
    UNLISTED = "unlisted"
    PUBLIC = "public"

    @classmethod
    def parse(cls, value: Any) -> "PrivacyStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValidationError(f"Invalid privacy status {value!r}; expected one of: {allowed}")


@dataclass(frozen=True)
class MediaMetadata:
    """
    Metadata of a video to upload.
    Title and privacy are mandatory; every other field falls back to the
    configured defaults when left as None.
    """
    title: str
    privacy: PrivacyStatus
    description: str = ""
    tags: Optional[List[str]] = None
    category_id: Optional[str] = None
    made_for_kids: Optional[bool] = None
    default_language: Optional[str] = None
    default_audio_language: Optional[str] = None

    def validate(self) -> "MediaMetadata":
        if not self.title or not str(self.title).strip():
            raise ValidationError("A title is required to upload a video.")
        PrivacyStatus.parse(self.privacy)
        return self

    def with_defaults(self, defaults: MetadataDefaults) -> "MediaMetadata":
        """Fill empty optional fields from the configured defaults."""
        return replace(
            self,
            title=str(self.title or "").strip(),
            privacy=PrivacyStatus.parse(self.privacy),
            description=self.description or "",
            tags=list(self.tags) if self.tags is not None else list(defaults.tags),
            category_id=self.category_id or defaults.category_id,
            made_for_kids=self.made_for_kids if self.made_for_kids is not None else defaults.made_for_kids,
            default_language=self.default_language or defaults.language,
            default_audio_language=self.default_audio_language or defaults.language
        )

    def to_resource_body(self) -> Dict[str, Any]:
        """Platform request body: the `metadata` part of an upload."""
        snippet: Dict[str, Any] = {
            "title": self.title,
            "description": self.description or "",
            "tags": list(self.tags or []),
        }
        if self.category_id:
            snippet["categoryId"] = self.category_id
        if self.default_language:
            snippet["defaultLanguage"] = self.default_language
        if self.default_audio_language:
            snippet["defaultAudioLanguage"] = self.default_audio_language

        return {
            "snippet": snippet,
            "status": {
                "privacyStatus": PrivacyStatus.parse(self.privacy).value,
                "selfDeclaredMadeForKids": bool(self.made_for_kids),
            },
        }


@dataclass(frozen=True)
class MetadataPatch:
    """
    Partial metadata for an update. None means "keep what the server holds".
    """
    title: Optional[str] = None
    description: Optional[str] = None
    privacy: Optional[PrivacyStatus] = None
    tags: Optional[List[str]] = None
    category_id: Optional[str] = None
    made_for_kids: Optional[bool] = None
    default_language: Optional[str] = None
    default_audio_language: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.__dataclass_fields__)

    def changed_fields(self) -> List[str]:
        return [name for name in self.__dataclass_fields__ if getattr(self, name) is not None]
