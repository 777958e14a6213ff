"""
Caller session sources
The token proxy authenticates the caller with the session credential of the
backing app (the signed-in coach/analyst), never with a platform secret.
"""

import os
from typing import Optional


class SessionProvider:
    """Interface: returns the caller's session credential, or None when signed out."""

    def get_session_token(self) -> Optional[str]:
        raise NotImplementedError


class StaticSessionProvider(SessionProvider):
    """Session credential supplied once by the caller (e.g. from the app's auth layer)."""

    def __init__(self, session_token: Optional[str]):
        self._session_token = session_token

    def get_session_token(self) -> Optional[str]:
        if self._session_token and self._session_token.strip():
            return self._session_token.strip()
        return None


class EnvironmentSessionProvider(SessionProvider):
    """Reads the session credential from an environment variable on every call."""

    def __init__(self, variable: str = "UPLOAD_PIPELINE_SESSION_TOKEN"):
        self._variable = variable

    def get_session_token(self) -> Optional[str]:
        value = os.environ.get(self._variable, "").strip()
        return value or None

    def __repr__(self) -> str:
        return f"EnvironmentSessionProvider(variable={self._variable!r})"
