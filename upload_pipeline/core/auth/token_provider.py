"""
Token Provider
Exchanges the caller's session credential for a short-lived platform token
through the trusted backend proxy. The proxy holds the channel's refresh
token and client secret; this side only ever sees the access token.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..config import AppConfig
from ..errors import AuthError, ConfigError, classify
from .session_provider import SessionProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    """
    Bearer credential for the video platform, scoped to one channel.
    Never cached or persisted: fetched fresh for every public operation.
    """
    value: str
    channel: str
    expires_in: Optional[int] = None

    def __repr__(self) -> str:
        return f"AccessToken(channel={self.channel!r}, expires_in={self.expires_in}, value='***')"


class TokenProvider:
    """
    Fetches access tokens from the token proxy.

    Responsibilities:
    - Fail fast on missing proxy / channel configuration.
    - Require an active caller session.
    - Make exactly one proxy call per fetch (no cache, no refresh logic).
    """

    def __init__(
        self,
        config: AppConfig,
        session_provider: SessionProvider,
        http: Optional[requests.Session] = None
    ):
        self._config = config
        self._sessions = session_provider
        self._http = http or requests.Session()

    def fetch(self, channel_identity: str) -> AccessToken:
        """
        Mint a fresh access token for the given channel.

        Raises:
            ConfigError: Proxy URL or channel identity missing
            AuthError: No active session, or the proxy refused it
            NetworkError: The proxy could not be reached
        """
        token_url = self._config.token_url
        if not token_url:
            raise ConfigError("The token proxy URL is not configured.")

        channel = str(channel_identity).strip() if channel_identity is not None else ""
        if not channel:
            raise ConfigError("No channel is assigned: a channel identity is required to upload.")

        session_token = self._sessions.get_session_token()
        if not session_token:
            raise AuthError("There is no active session. Sign in and try again.")

        logger.info(f"Requesting access token from proxy: {token_url}")

        try:
            response = self._http.post(
                token_url,
                json={self._config.channel_field: channel},
                headers={
                    "Authorization": f"Bearer {session_token}",
                    "Content-Type": "application/json",
                },
                timeout=self._config.request_timeout
            )
        except requests.RequestException as e:
            logger.error(f"Token proxy unreachable: {e}")
            raise classify(None, e) from e

        if not response.ok:
            error = classify(response.status_code, response.text)
            logger.error(f"Token proxy refused the request: {error.message}")
            raise error

        try:
            data = response.json()
        except ValueError as e:
            raise classify(response.status_code, response.text) from e

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            logger.error(f"Token proxy response without access_token: {response.text}")
            raise classify(response.status_code, {"error": "The token proxy did not return an access token."})

        expires_in = data.get("expires_in")
        logger.info(f"Access token obtained for channel {channel}")
        return AccessToken(
            value=access_token,
            channel=channel,
            expires_in=int(expires_in) if isinstance(expires_in, (int, float)) else None
        )
