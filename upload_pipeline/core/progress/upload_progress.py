"""
Upload Progress
Typed progress events for an upload, published to subscribers.

Progress is coarse: one event per phase transition, not byte-level
transfer progress.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional

logger = logging.getLogger(__name__)


class UploadPhase(Enum):
    """Pipeline milestones and the percentage each one represents."""
    TOKEN_ACQUIRED = 10
    ENCODED = 20
    TRANSFER_STARTED = 30
    TRANSFER_ACKNOWLEDGED = 90
    RESPONSE_PARSED = 95
    COMPLETED = 100

    @property
    def percent(self) -> int:
        return self.value


@dataclass(frozen=True)
class UploadProgress:
    phase: UploadPhase
    percent: int
    resource_id: Optional[str] = None


ProgressCallback = Callable[[UploadProgress], None]


class ProgressStream:
    """
    Event stream of UploadProgress for one upload.

    Subscribers are called synchronously, on the thread that runs the
    upload. Percentages never decrease and stay within [0, 100].
    """

    def __init__(self):
        self._subscribers: List[ProgressCallback] = []
        self._events: List[UploadProgress] = []

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, phase: UploadPhase, resource_id: Optional[str] = None) -> UploadProgress:
        percent = min(100, max(phase.percent, self.percent))
        event = UploadProgress(phase=phase, percent=percent, resource_id=resource_id)
        self._events.append(event)
        logger.debug(f"Upload progress: {phase.name} ({percent}%)")
        for callback in list(self._subscribers):
            callback(event)
        return event

    @property
    def percent(self) -> int:
        return self._events[-1].percent if self._events else 0

    @property
    def latest(self) -> Optional[UploadProgress]:
        return self._events[-1] if self._events else None

    @property
    def events(self) -> List[UploadProgress]:
        return list(self._events)

    def __iter__(self) -> Iterator[UploadProgress]:
        return iter(list(self._events))
