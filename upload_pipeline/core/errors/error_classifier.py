"""
Error Classifier
Maps transport failures and platform/proxy error payloads to a fixed taxonomy.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Markers the platform uses when a channel hits its upload limit
QUOTA_MARKERS = ("uploadLimitExceeded", "exceeded the number of videos")

QUOTA_REMEDIATION = (
    "The channel has reached the number of videos it is allowed to upload. "
    "Delete some older videos or ask an administrator to raise the channel's limit, "
    "then try again."
)


class ClassifiedError(Exception):
    """
    Base class of every error surfaced by the upload pipeline.

    Attributes:
        kind: Taxonomy name (class name of the concrete error)
        message: Human-readable text, safe to show to end users
        retriable: Whether the caller may retry the same call later
        status: HTTP status that produced the error, if any
        reason: Machine reason reported by the platform, if any
        raw: Raw diagnostic payload (logged, never shown)
    """

    kind = "ServerError"
    retriable = True

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        raw: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.reason = reason
        self.raw = raw

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "retriable": self.retriable,
        }

    def __repr__(self) -> str:
        return f"{self.kind}(message={self.message!r}, status={self.status}, retriable={self.retriable})"


class ConfigError(ClassifiedError):
    """Proxy endpoint or channel identity is not configured."""
    kind = "ConfigError"
    retriable = False


class AuthError(ClassifiedError):
    """No caller session, or the proxy/platform refused the credentials."""
    kind = "AuthError"
    retriable = False


class QuotaExceededError(ClassifiedError):
    """The platform reported an upload-limit breach for the channel."""
    kind = "QuotaExceededError"
    retriable = False


class NetworkError(ClassifiedError):
    """The request never completed at the transport level."""
    kind = "NetworkError"
    retriable = True


class ValidationError(ClassifiedError):
    """Malformed request: caller bug or rejected input."""
    kind = "ValidationError"
    retriable = False


class ServerError(ClassifiedError):
    """5xx from the remote side, or a failure nothing else explains."""
    kind = "ServerError"
    retriable = True


def classify(http_status: Optional[int], body: Any = None) -> ClassifiedError:
    """
    Classify a failed call.

    Args:
        http_status: Response status, or None when no response was received
        body: Response body (dict, JSON text or bytes) or the transport exception

    Returns:
        ClassifiedError: The error to raise. Never raises itself.
    """
    if http_status is None and isinstance(body, BaseException):
        logger.debug(f"Transport failure: {body!r}")
        return NetworkError(
            f"Could not reach the server. Check your internet connection and try again. ({body})",
            raw=repr(body)
        )

    raw = _raw_text(body)
    api_message, reasons = _extract_api_error(body)
    reason = reasons[0] if reasons else None
    detail = api_message or raw or "no details returned"

    if raw:
        logger.debug(f"Error payload (HTTP {http_status}): {raw}")

    if any(marker in raw for marker in QUOTA_MARKERS) or "uploadLimitExceeded" in reasons:
        return QuotaExceededError(QUOTA_REMEDIATION, status=http_status, reason="uploadLimitExceeded", raw=raw)

    if http_status in (401, 403):
        return AuthError(
            f"Not authorized (HTTP {http_status}): {detail}. Sign in again or check the channel assigned to this team.",
            status=http_status, reason=reason, raw=raw
        )

    if http_status is not None and 400 <= http_status < 500:
        return ValidationError(
            f"Request rejected (HTTP {http_status}): {detail}",
            status=http_status, reason=reason, raw=raw
        )

    if http_status is not None and 500 <= http_status < 600:
        return ServerError(
            f"The server failed to process the request (HTTP {http_status}): {detail}",
            status=http_status, reason=reason, raw=raw
        )

    # Unclassified: keep whatever the remote side said
    prefix = f"Unexpected response (HTTP {http_status})" if http_status is not None else "Unexpected response"
    return ServerError(
        f"{prefix}: {detail}",
        status=http_status, reason=reason, raw=raw
    )


def _raw_text(body: Any) -> str:
    if body is None:
        return ""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8", errors="replace")
    if isinstance(body, str):
        return body
    if isinstance(body, BaseException):
        return str(body)
    try:
        return json.dumps(body)
    except (TypeError, ValueError):
        return str(body)


def _extract_api_error(body: Any) -> Tuple[Optional[str], List[str]]:
    """
    Pull the human message and reasons out of an error payload.

    Understands the platform shape {"error": {"message": ..., "errors": [{"reason": ...}]}}
    and the proxy shape {"error": "text"}.
    """
    payload = body
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            payload = json.loads(_raw_text(payload))
        except ValueError:
            return None, []

    if not isinstance(payload, dict):
        return None, []

    error = payload.get("error")
    if isinstance(error, str):
        return error, []

    if isinstance(error, dict):
        reasons = [
            item.get("reason") for item in error.get("errors", [])
            if isinstance(item, dict) and item.get("reason")
        ]
        return error.get("message"), reasons

    message = payload.get("message")
    return (message if isinstance(message, str) else None), []
