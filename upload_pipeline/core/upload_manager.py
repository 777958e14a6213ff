"""
Upload Manager
Main orchestrator for video publication: token → encode → upload → reconcile,
plus read / update / delete / list of published videos.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .auth import TokenProvider
from .config import AppConfig
from .encoding import AssetEncoder, asset_source_for
from .errors import ValidationError
from .progress import ProgressStream, UploadPhase
from .youtube import (
    ChannelVideoLister,
    ConsistencyVerifier,
    MediaMetadata,
    MetadataPatch,
    ReconcileResult,
    RemoteResource,
    ResourceMutator,
    UploadClient,
    VideoPage,
    YouTubeApi,
)
from .youtube.channel_videos import ServiceFactory
from .youtube.platform_api import SessionFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadOutcome:
    resource: RemoteResource
    reconciliation: ReconcileResult


class UploadManager:
    """
    Public entry point of the pipeline.

    Every operation fetches exactly one fresh token from the proxy and runs
    as a single sequential call chain. Concurrent calls for the same video
    are not coordinated.
    """

    def __init__(
        self,
        config: AppConfig,
        token_provider: TokenProvider,
        storage=None,
        session_factory: Optional[SessionFactory] = None,
        service_factory: Optional[ServiceFactory] = None,
        temp_dir: Optional[Path] = None
    ):
        self._config = config
        self._tokens = token_provider
        self._storage = storage
        self._session_factory = session_factory

        if temp_dir is None and storage is not None:
            temp_dir = storage.cache_path

        # Components
        self._encoder = AssetEncoder(temp_dir=temp_dir)
        self._uploader = UploadClient(config.endpoints, session_factory, config.request_timeout)
        self._lister = ChannelVideoLister(config.endpoints, service_factory)

    def upload(
        self,
        channel: str,
        asset: Any,
        metadata: MediaMetadata,
        progress: Optional[ProgressStream] = None,
        mime_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> UploadOutcome:
        """
        Publish one video.

        Args:
            channel: Channel identity the proxy mints the token for
            asset: bytes / BytesIO (in memory), a path or file:// URI, or an AssetSource
            metadata: Caller intent; empty optional fields take the configured defaults
            progress: Stream to publish UploadProgress events on

        Returns:
            UploadOutcome: Created video and the privacy reconciliation result
        """
        progress = progress or ProgressStream()

        # Validate locally before any network call
        if metadata is None:
            raise ValidationError("Video metadata is required.")
        metadata = metadata.with_defaults(self._config.defaults).validate()
        source = asset_source_for(asset, mime_type=mime_type, filename=filename)

        token = self._tokens.fetch(channel)
        progress.emit(UploadPhase.TOKEN_ACQUIRED)

        with self._encoder.build(source, metadata) as body:
            progress.emit(UploadPhase.ENCODED)
            resource = self._uploader.send(token, body, progress)

        verifier = ConsistencyVerifier(self._api_for(token))
        reconciliation = verifier.reconcile(resource.resource_id, metadata)

        progress.emit(UploadPhase.COMPLETED, resource.resource_id)
        logger.info(f"✅ PUBLISHED: {metadata.title} -> {resource.url}")

        if self._storage is not None:
            self._storage.record_event(
                "upload", token.channel, resource.resource_id,
                title=metadata.title,
                privacy=reconciliation.intended_privacy if reconciliation.succeeded else resource.privacy_status,
                reconciled=reconciliation.succeeded,
                url=resource.url
            )

        return UploadOutcome(resource=resource, reconciliation=reconciliation)

    def read(self, channel: str, resource_id: str) -> RemoteResource:
        token = self._tokens.fetch(channel)
        return self._mutator_for(token).read(resource_id)

    def update(self, channel: str, resource_id: str, changes: MetadataPatch) -> RemoteResource:
        token = self._tokens.fetch(channel)
        resource = self._mutator_for(token).update(resource_id, changes)

        if self._storage is not None:
            self._storage.record_event(
                "update", token.channel, resource_id,
                title=resource.title, privacy=resource.privacy_status, url=resource.url
            )
        return resource

    def delete(self, channel: str, resource_id: str) -> bool:
        token = self._tokens.fetch(channel)
        deleted = self._mutator_for(token).delete(resource_id)

        if self._storage is not None:
            self._storage.record_event(
                "delete", token.channel, resource_id,
                status="deleted" if deleted else "already_deleted"
            )
        return deleted

    def list_videos(
        self,
        channel: str,
        platform_channel_id: Optional[str] = None,
        max_results: int = 50,
        page_token: Optional[str] = None
    ) -> VideoPage:
        token = self._tokens.fetch(channel)
        return self._lister.list_videos(token, platform_channel_id, max_results, page_token)

    def _api_for(self, token) -> YouTubeApi:
        return YouTubeApi(token, self._config.endpoints, self._session_factory, self._config.request_timeout)

    def _mutator_for(self, token) -> ResourceMutator:
        return ResourceMutator(self._api_for(token), self._config.defaults)
