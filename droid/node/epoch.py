"""Epoch tracker — caches the next expected epoch boundary.

The node does extra processing right after each "day" epoch boundary and
may stop producing blocks for a while. The tracker computes when the next
boundary is expected and answers whether a given instant falls inside the
grace window that follows it.

The boundary is assumed to begin ``lead`` (5 minutes) before the naive
``current_epoch_start_time + 24h``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol

from droid.node.client import EpochFetchError
from droid.node.models import EpochList

logger = logging.getLogger(__name__)

EPOCH_DURATION = timedelta(hours=24)


class EpochSource(Protocol):
    def fetch(self) -> EpochList: ...


@dataclass(frozen=True)
class EpochWindow:
    """Expected start of the next epoch boundary and its grace period."""

    start: datetime
    grace: timedelta

    @property
    def end(self) -> datetime:
        return self.start + self.grace

    def contains(self, now: datetime) -> bool:
        return self.start < now < self.end


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EpochTracker:
    """Thread-safe holder of the cached EpochWindow."""

    def __init__(
        self,
        source: EpochSource,
        identifier: str = "day",
        grace_minutes: int = 35,
        lead_minutes: int = 5,
        epoch_duration: timedelta = EPOCH_DURATION,
    ) -> None:
        self.source = source
        self.identifier = identifier
        self.grace = timedelta(minutes=grace_minutes)
        self.lead = timedelta(minutes=lead_minutes)
        self.epoch_duration = epoch_duration
        self._window: EpochWindow | None = None
        self._lock = threading.Lock()

    @property
    def window(self) -> EpochWindow | None:
        return self._window

    def calculate_epoch(self) -> EpochWindow | None:
        """Fetch the epoch list and compute the next window.

        Returns None when the endpoint fails or has no matching epoch.
        """
        try:
            epochs = self.source.fetch()
        except EpochFetchError as e:
            logger.warning("Epoch info unavailable: %s", e)
            return None

        epoch = epochs.find(self.identifier)
        if epoch is None:
            logger.warning("No %r epoch found in %d epochs", self.identifier, len(epochs.epochs))
            return None

        start = epoch.current_epoch_start_time + self.epoch_duration - self.lead
        window = EpochWindow(start=start, grace=self.grace)
        logger.info(
            "Next %s epoch window: %s → %s",
            self.identifier, window.start.isoformat(), window.end.isoformat(),
        )
        return window

    def is_within_epoch_window(self, now: datetime) -> bool:
        """True if now is strictly inside (start, start + grace)."""
        now = _as_utc(now)
        with self._lock:
            window = self._window
            if window is None or now > window.end:
                window = self.calculate_epoch()
                self._window = window
        if window is None:
            return False
        return window.contains(now)
