"""
Resource Mutator
Read, update and delete of an existing video.
"""

import logging
from typing import Any, Dict

from ..config import MetadataDefaults
from ..errors import ValidationError, classify
from .media_metadata import MetadataPatch, PrivacyStatus
from .platform_api import YouTubeApi
from .remote_resource import RemoteResource

logger = logging.getLogger(__name__)


class ResourceMutator:
    """
    Metadata writes follow merge-then-PUT: the platform requires the full
    snippet/status objects on every write and resets whatever is left out,
    so the current video is read first and the caller's changes are merged
    over it.

    The token behind `api` must belong to the channel that owns the video;
    the platform answers 401/403 otherwise, surfaced as AuthError.
    """

    def __init__(self, api: YouTubeApi, defaults: MetadataDefaults):
        self._api = api
        self._defaults = defaults

    def read(self, resource_id: str) -> RemoteResource:
        item = self._api.get(resource_id)
        if item is None:
            raise classify(404, {"error": {"message": f"Video not found: {resource_id}"}})
        return RemoteResource.from_api(item, self._api.endpoints)

    def update(self, resource_id: str, changes: MetadataPatch) -> RemoteResource:
        if not resource_id:
            raise ValidationError("A video id is required to update a video.")
        if changes.title is not None and not changes.title.strip():
            raise ValidationError("The video title cannot be empty.")

        current = self._api.get(resource_id)
        if current is None:
            logger.warning(f"Video {resource_id} not readable, updating with defaults for unset fields")
            current = {}

        resource = self._merge(resource_id, current, changes)
        logger.info(f"Updating video {resource_id}: {', '.join(changes.changed_fields()) or 'no changes'}")
        logger.debug(f"Update body: {resource}")

        response = self._api.update(resource)
        if not response.get("id"):
            response = dict(resource)
        return RemoteResource.from_api(response, self._api.endpoints)

    def delete(self, resource_id: str) -> bool:
        """
        Delete a video. Idempotent: an already-deleted video is not an error.

        Returns:
            bool: True if this call deleted it, False if it was already gone
        """
        if not resource_id:
            raise ValidationError("A video id is required to delete a video.")

        deleted = self._api.delete(resource_id)
        if deleted:
            logger.info(f"Video deleted: {resource_id}")
        else:
            logger.info(f"Video {resource_id} was already deleted")
        return deleted

    def _merge(self, resource_id: str, current: Dict[str, Any], changes: MetadataPatch) -> Dict[str, Any]:
        snippet = current.get("snippet") or {}
        status = current.get("status") or {}
        defaults = self._defaults

        title = changes.title.strip() if changes.title is not None else snippet.get("title")
        if not title:
            raise ValidationError("A title is required: the video has none and the update does not set one.")

        privacy = changes.privacy if changes.privacy is not None else status.get("privacyStatus", defaults.privacy)
        made_for_kids = changes.made_for_kids if changes.made_for_kids is not None else status.get(
            "selfDeclaredMadeForKids", defaults.made_for_kids)

        return {
            "id": resource_id,
            "snippet": {
                "title": title,
                "description": self._pick(changes.description, snippet.get("description"), ""),
                "tags": list(self._pick(changes.tags, snippet.get("tags"), defaults.tags)),
                "categoryId": self._pick(changes.category_id, snippet.get("categoryId"), defaults.category_id),
                "defaultLanguage": self._pick(changes.default_language, snippet.get("defaultLanguage"),
                                              defaults.language),
                "defaultAudioLanguage": self._pick(changes.default_audio_language,
                                                   snippet.get("defaultAudioLanguage"), defaults.language),
            },
            "status": {
                "privacyStatus": PrivacyStatus.parse(privacy).value,
                "selfDeclaredMadeForKids": bool(made_for_kids),
                "embeddable": status.get("embeddable", defaults.embeddable),
                "license": status.get("license", defaults.license),
            },
        }

    @staticmethod
    def _pick(change, server_value, default):
        if change is not None:
            return change
        if server_value is not None and server_value != []:
            return server_value
        return default
