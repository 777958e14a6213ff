"""
Video Platform REST API
Bearer-authorized calls against the videos resource, one HTTP request per
method. Every failure leaves through the error classifier.
Plain REST rather than the discovery client: upload and resource URLs are
configured separately. Channel listing in channel_videos uses discovery.
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests
from google.auth.transport.requests import AuthorizedSession
from google.oauth2.credentials import Credentials

from ..auth import AccessToken
from ..config import PlatformEndpoints
from ..errors import classify

logger = logging.getLogger(__name__)

SessionFactory = Callable[[AccessToken], requests.Session]

RESOURCE_PARTS = "snippet,status"


def authorized_session(token: AccessToken) -> requests.Session:
    """
    requests session that sends the access token as a bearer header.
    Refresh on 401 is disabled: tokens come from the proxy, never refreshed here.
    """
    credentials = Credentials(token=token.value)
    return AuthorizedSession(credentials, refresh_status_codes=())


class YouTubeApi:
    """
    Thin client for the platform's videos endpoints, bound to one access token.
    """

    def __init__(
        self,
        token: AccessToken,
        endpoints: PlatformEndpoints,
        session_factory: Optional[SessionFactory] = None,
        timeout: Optional[float] = None
    ):
        self._token = token
        self._endpoints = endpoints
        self._session = (session_factory or authorized_session)(token)
        self._timeout = timeout

    @property
    def token(self) -> AccessToken:
        return self._token

    @property
    def endpoints(self) -> PlatformEndpoints:
        return self._endpoints

    def insert(self, body) -> Dict[str, Any]:
        """POST a multipart body to the upload endpoint. Returns the created video."""
        response = self._send(
            "POST",
            self._endpoints.upload_url,
            params={"uploadType": "multipart", "part": RESOURCE_PARTS},
            data=body,
            headers=body.headers
        )
        return self._json(response)

    def get(self, resource_id: str, part: str = RESOURCE_PARTS) -> Optional[Dict[str, Any]]:
        """Read one video. Returns None when the platform lists no such video."""
        response = self._send(
            "GET",
            self._endpoints.resources_url,
            params={"id": resource_id, "part": part}
        )
        items = self._json(response).get("items") or []
        return items[0] if items else None

    def update(self, resource: Dict[str, Any], part: str = RESOURCE_PARTS) -> Dict[str, Any]:
        """PUT the given parts of a video. The platform requires the full part objects."""
        response = self._send(
            "PUT",
            self._endpoints.resources_url,
            params={"part": part},
            json=resource
        )
        return self._json(response)

    def delete(self, resource_id: str) -> bool:
        """DELETE a video. Returns False when it was already gone (404)."""
        response = self._send(
            "DELETE",
            self._endpoints.resources_url,
            params={"id": resource_id},
            allow_status=(404,)
        )
        return response.status_code != 404

    def _send(self, method: str, url: str, allow_status=(), **kwargs) -> requests.Response:
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed before a response: {e}")
            raise classify(None, e) from e

        if not response.ok and response.status_code not in allow_status:
            error = classify(response.status_code, response.text)
            logger.error(f"{method} {url} -> HTTP {response.status_code}: {error.message}")
            raise error

        return response

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise classify(response.status_code, response.text) from e
        return data if isinstance(data, dict) else {}
