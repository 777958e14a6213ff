"""
Video platform integration module
"""

from .channel_videos import ChannelVideo, ChannelVideoLister, VideoPage
from .consistency_verifier import ConsistencyVerifier, ReconcileResult
from .media_metadata import MediaMetadata, MetadataPatch, PrivacyStatus
from .platform_api import YouTubeApi
from .remote_resource import RemoteResource
from .resource_mutator import ResourceMutator
from .upload_client import UploadClient

__all__ = [
    "ChannelVideo",
    "ChannelVideoLister",
    "ConsistencyVerifier",
    "MediaMetadata",
    "MetadataPatch",
    "PrivacyStatus",
    "ReconcileResult",
    "RemoteResource",
    "ResourceMutator",
    "UploadClient",
    "VideoPage",
    "YouTubeApi",
]
