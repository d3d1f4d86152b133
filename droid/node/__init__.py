"""Node subsystem — status/epoch clients, epoch tracker, health evaluator."""

from .client import EpochClient, EpochFetchError, NodeUnreachableError, StatusFetcher
from .epoch import EpochTracker, EpochWindow
from .health import HealthEvaluator, HealthReport, Verdict
from .models import Block, EpochInfo, EpochList, NodeStatus
