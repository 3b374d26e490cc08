"""
Prediction events and observers.

The prediction client reports every attempt as a PredictionEvent to an
optional observer. Observers only collect diagnostics; they never change
what the client returns.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class PredictionEvent:
    """
    Outcome of one prediction attempt.

    Attributes:
        strategy: Name of the normalization strategy used (None if the
            landmark set was rejected before any strategy ran)
        outcome: "ok" or one of the failure reasons in message.py
        label: Recognized label for "ok" outcomes
        status_code: HTTP status, when a response was received
        detail: Free-form diagnostic text
        ts_ms: Timestamp in milliseconds (monotonic)
    """
    strategy: Optional[str]
    outcome: str
    label: Optional[str] = None
    status_code: Optional[int] = None
    detail: str = ""
    ts_ms: int = field(default_factory=lambda: int(time.monotonic() * 1000))

    @property
    def ok(self) -> bool:
        return self.outcome == "ok"


Observer = Callable[[PredictionEvent], None]


def notify(observer: Optional[Observer], event: PredictionEvent) -> None:
    """Deliver an event, logging and discarding observer errors."""
    if observer is None:
        return
    try:
        observer(event)
    except Exception as e:
        logger.warning(f"Prediction observer failed: {e}")


class PredictionStats:
    """
    Observer that counts outcomes.

    Pass an instance as the client's observer and read get_stats() later.
    """

    def __init__(self):
        self._outcomes: Counter = Counter()
        self._labels: Counter = Counter()
        self.last_event: Optional[PredictionEvent] = None

    def __call__(self, event: PredictionEvent) -> None:
        self._outcomes[event.outcome] += 1
        if event.label:
            self._labels[event.label] += 1
        self.last_event = event

    def get_stats(self) -> dict:
        """Get outcome statistics."""
        total = sum(self._outcomes.values())
        recognized = self._outcomes.get("ok", 0)
        return {
            "total_attempts": total,
            "recognized": recognized,
            "failed": total - recognized,
            "recognition_rate": recognized / total if total > 0 else 0.0,
            "outcomes": dict(self._outcomes),
            "labels": dict(self._labels),
        }

    def reset_stats(self) -> None:
        """Reset statistics counters."""
        self._outcomes.clear()
        self._labels.clear()
        self.last_event = None
