"""
Token acquisition through the backend proxy
"""

from .session_provider import EnvironmentSessionProvider, SessionProvider, StaticSessionProvider
from .token_provider import AccessToken, TokenProvider

__all__ = [
    "AccessToken",
    "EnvironmentSessionProvider",
    "SessionProvider",
    "StaticSessionProvider",
    "TokenProvider",
]
