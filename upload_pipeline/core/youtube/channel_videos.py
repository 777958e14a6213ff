"""
Channel Video Lister
Lists the videos of a channel through its uploads playlist.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from google.auth.exceptions import TransportError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from ..auth import AccessToken
from ..config import PlatformEndpoints
from ..errors import classify

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[AccessToken], Any]


@dataclass(frozen=True)
class ChannelVideo:
    """
    One video of a channel listing.
    Immutable dataclass, serializable for the ledger/report.
    """
    video_id: str
    title: str
    description: str
    thumbnail: str
    published_at: str
    privacy_status: str
    url: str
    embed_url: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class VideoPage:
    videos: List[ChannelVideo] = field(default_factory=list)
    next_page_token: Optional[str] = None
    prev_page_token: Optional[str] = None


def discovery_service(token: AccessToken, endpoints: Optional[PlatformEndpoints] = None):
    """Google API client for the YouTube Data API, authorized with the access token."""
    client_options = None
    if endpoints is not None and endpoints.api_base_url:
        client_options = {"api_endpoint": endpoints.api_base_url}
    # static_discovery=False prevents the 'file_cache' warning in logs
    return build(
        'youtube', 'v3',
        credentials=Credentials(token=token.value),
        client_options=client_options,
        static_discovery=False
    )


class ChannelVideoLister:
    """
    Pages through the uploads playlist of the channel behind a token.

    Responsibilities:
    - Resolve the uploads playlist (by channel id, or the token's own channel).
    - Map playlist items to ChannelVideo.
    - Classify API and transport failures.
    """

    def __init__(self, endpoints: PlatformEndpoints, service_factory: Optional[ServiceFactory] = None):
        self._endpoints = endpoints
        self._service_factory = service_factory or (lambda token: discovery_service(token, endpoints))

    def list_videos(
        self,
        token: AccessToken,
        platform_channel_id: Optional[str] = None,
        max_results: int = 50,
        page_token: Optional[str] = None
    ) -> VideoPage:
        service = self._service_factory(token)
        uploads_playlist_id = self._resolve_uploads_playlist(service, platform_channel_id)

        try:
            response = service.playlistItems().list(
                part="snippet,contentDetails,status",
                playlistId=uploads_playlist_id,
                maxResults=max(1, min(max_results, 50)),
                pageToken=page_token
            ).execute()
        except HttpError as e:
            raise classify(e.resp.status, e.content) from e
        except (HttpLib2Error, TransportError, OSError) as e:
            raise classify(None, e) from e

        videos = [self._to_video(item) for item in response.get("items", [])]
        videos = [v for v in videos if v is not None]
        logger.info(f"Listed {len(videos)} videos from playlist {uploads_playlist_id}")

        return VideoPage(
            videos=videos,
            next_page_token=response.get("nextPageToken"),
            prev_page_token=response.get("prevPageToken")
        )

    def _resolve_uploads_playlist(self, service, platform_channel_id: Optional[str]) -> str:
        """Uses channels().list to find the playlist that holds every upload."""
        if platform_channel_id:
            request = service.channels().list(part="contentDetails", id=platform_channel_id)
        else:
            request = service.channels().list(part="contentDetails", mine=True)

        try:
            response = request.execute()
        except HttpError as e:
            raise classify(e.resp.status, e.content) from e
        except (HttpLib2Error, TransportError, OSError) as e:
            raise classify(None, e) from e

        items = response.get("items", [])
        uploads = items[0].get("contentDetails", {}).get("relatedPlaylists", {}).get("uploads") if items else None
        if not uploads:
            raise classify(404, {"error": {"message": "Could not find the list of videos of the channel."}})
        return uploads

    def _to_video(self, item: Dict[str, Any]) -> Optional[ChannelVideo]:
        snippet = item.get("snippet", {})
        details = item.get("contentDetails", {})
        video_id = details.get("videoId") or snippet.get("resourceId", {}).get("videoId")
        if not video_id:
            return None

        thumbnails = snippet.get("thumbnails", {})
        thumbnail = next(
            (thumbnails[size]["url"] for size in ("high", "medium", "default") if size in thumbnails),
            ""
        )

        return ChannelVideo(
            video_id=video_id,
            title=snippet.get("title") or "Untitled",
            description=snippet.get("description", ""),
            thumbnail=thumbnail,
            published_at=snippet.get("publishedAt", ""),
            privacy_status=item.get("status", {}).get("privacyStatus", "public"),
            url=self._endpoints.watch_url(video_id),
            embed_url=self._endpoints.embed_url(video_id)
        )
