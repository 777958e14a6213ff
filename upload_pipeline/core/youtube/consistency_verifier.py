"""
Consistency Verifier
Re-reads a freshly uploaded video and corrects its privacy status when the
platform silently applied a different one on creation.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import ClassifiedError, classify
from .media_metadata import MediaMetadata, PrivacyStatus
from .platform_api import YouTubeApi

logger = logging.getLogger(__name__)

# Status properties the platform accepts on a write
WRITABLE_STATUS_FIELDS = (
    "privacyStatus",
    "embeddable",
    "license",
    "publicStatsViewable",
    "publishAt",
    "selfDeclaredMadeForKids",
    "containsSyntheticMedia",
)


@dataclass(frozen=True)
class ReconcileResult:
    """
    Outcome of a best-effort reconciliation.

    succeeded is False when the read-back or the correction failed; the
    video still exists, possibly with the platform's privacy status.
    """
    resource_id: str
    intended_privacy: str
    observed_privacy: Optional[str]
    corrected: bool
    succeeded: bool
    error: Optional[ClassifiedError] = None

    def __bool__(self) -> bool:
        return self.succeeded


class ConsistencyVerifier:
    """
    Compares only the privacy status: the one field observed to be
    overridden by the platform on creation.
    """

    def __init__(self, api: YouTubeApi):
        self._api = api

    def reconcile(self, resource_id: str, intended: MediaMetadata) -> ReconcileResult:
        intended_privacy = PrivacyStatus.parse(intended.privacy).value

        try:
            current = self._api.get(resource_id, part="status")
        except ClassifiedError as e:
            logger.warning(f"Could not read back video {resource_id} to verify privacy: {e.message}")
            return ReconcileResult(resource_id, intended_privacy, None, corrected=False, succeeded=False, error=e)

        if current is None:
            error = classify(404, {"error": {"message": f"Video {resource_id} is not visible to this channel."}})
            logger.warning(f"Could not verify privacy: {error.message}")
            return ReconcileResult(resource_id, intended_privacy, None, corrected=False, succeeded=False, error=error)

        status = current.get("status") or {}
        observed = status.get("privacyStatus")
        logger.info(f"Privacy requested: {intended_privacy} | applied by platform: {observed}")

        if observed == intended_privacy:
            return ReconcileResult(resource_id, intended_privacy, observed, corrected=False, succeeded=True)

        logger.warning(f"Privacy mismatch on {resource_id}, correcting to {intended_privacy}...")
        corrected_status = {k: v for k, v in status.items() if k in WRITABLE_STATUS_FIELDS}
        corrected_status["privacyStatus"] = intended_privacy
        corrected_status["selfDeclaredMadeForKids"] = bool(intended.made_for_kids)

        try:
            self._api.update({"id": resource_id, "status": corrected_status}, part="status")
        except ClassifiedError as e:
            # Upload already succeeded; a wrong privacy status is reported, not raised
            logger.warning(f"Could not correct privacy of {resource_id} automatically: {e.message}")
            return ReconcileResult(resource_id, intended_privacy, observed, corrected=False, succeeded=False, error=e)

        logger.info(f"Privacy of {resource_id} corrected to {intended_privacy}")
        return ReconcileResult(resource_id, intended_privacy, observed, corrected=True, succeeded=True)
