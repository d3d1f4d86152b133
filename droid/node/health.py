"""Health evaluator — turns a status snapshot into an UP/DOWN verdict.

DOWN iff the node is catching up, or its latest block is at least
``stale_after_seconds`` old while we are outside the post-epoch grace window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from droid.node.epoch import EpochTracker
from droid.node.models import NodeStatus

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    UP = "UP"
    DOWN = "DOWN"


@dataclass(frozen=True)
class HealthReport:
    """Verdict plus the diagnostics shown on /health."""

    verdict: Verdict
    height: str = ""
    seconds_since_last_block: int = 0
    catching_up: bool = False
    is_epoch: bool = False
    error: str = ""

    @classmethod
    def unreachable(cls, reason: str) -> HealthReport:
        return cls(verdict=Verdict.DOWN, error=reason)

    @property
    def status_code(self) -> int:
        return 200 if self.verdict is Verdict.UP else 503

    def render(self) -> str:
        if self.error:
            return f"{self.verdict.value}\nNode unreachable: {self.error}\n"
        return (
            f"{self.verdict.value}\n"
            f"Latest Block {self.height} "
            f"(Received {self.seconds_since_last_block} seconds ago)\n"
        )


class HealthEvaluator:
    def __init__(self, epoch_tracker: EpochTracker, stale_after_seconds: int = 60) -> None:
        self.epoch_tracker = epoch_tracker
        self.stale_after_seconds = stale_after_seconds

    def evaluate(self, status: NodeStatus, now: datetime | None = None) -> HealthReport:
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        block = status.latest_block()
        elapsed = int((now - status.latest_block_time).total_seconds())
        is_epoch = self.epoch_tracker.is_within_epoch_window(now)

        if status.catching_up or (elapsed >= self.stale_after_seconds and not is_epoch):
            verdict = Verdict.DOWN
        else:
            verdict = Verdict.UP

        logger.debug(
            "Healthcheck status: verdict=%s catching_up=%s seconds_since_last_block=%d is_epoch=%s",
            verdict.value, status.catching_up, elapsed, is_epoch,
        )
        return HealthReport(
            verdict=verdict,
            height=block.height,
            seconds_since_last_block=elapsed,
            catching_up=status.catching_up,
            is_epoch=is_epoch,
        )
