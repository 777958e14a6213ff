"""
Upload Client
Sends the whole asset to the platform in one multipart POST.
"""

import logging
from typing import Optional

from ..auth import AccessToken
from ..config import PlatformEndpoints
from ..errors import classify
from ..progress import ProgressStream, UploadPhase
from .platform_api import SessionFactory, YouTubeApi
from .remote_resource import RemoteResource

logger = logging.getLogger(__name__)


class UploadClient:
    """
    Issues the upload POST.

    - No chunking and no resumable protocol: one request carries the asset.
    - No retries: a classified error is raised and the caller decides.
    - Progress is reported at phase transitions only.
    """

    def __init__(
        self,
        endpoints: PlatformEndpoints,
        session_factory: Optional[SessionFactory] = None,
        timeout: Optional[float] = None
    ):
        self._endpoints = endpoints
        self._session_factory = session_factory
        self._timeout = timeout

    def send(self, token: AccessToken, body, progress: Optional[ProgressStream] = None) -> RemoteResource:
        """
        Upload a MultipartBody with the given token.

        Returns:
            RemoteResource: Created video with the snapshot the server reports back
        """
        progress = progress or ProgressStream()
        api = YouTubeApi(token, self._endpoints, self._session_factory, self._timeout)

        logger.info(f"Uploading video ({len(body)} bytes) to {self._endpoints.upload_url}...")
        progress.emit(UploadPhase.TRANSFER_STARTED)

        response = api.insert(body)
        progress.emit(UploadPhase.TRANSFER_ACKNOWLEDGED)

        if not response.get("id"):
            logger.error(f"Upload response without a video id: {response}")
            raise classify(None, {"error": "The platform did not return the id of the uploaded video."})

        resource = RemoteResource.from_api(response, self._endpoints)
        progress.emit(UploadPhase.RESPONSE_PARSED, resource.resource_id)

        logger.info(f"Upload successful! Video ID: {resource.resource_id} (privacy: {resource.privacy_status})")
        return resource
