"""httpx-based clients for the node's RPC and LCD endpoints.

StatusFetcher retries until the node answers with a decodable status
document or the attempt budget runs out (NodeUnreachableError).
EpochClient makes a single attempt and raises EpochFetchError on failure.
"""

from __future__ import annotations

import logging
import time

import httpx
from pydantic import ValidationError

from droid.node.models import EpochList, NodeStatus

logger = logging.getLogger(__name__)


class NodeUnreachableError(Exception):
    """Raised when the status RPC never produced a usable response."""

    def __init__(self, url: str, attempts: int, reason: str) -> None:
        self.url = url
        self.attempts = attempts
        self.reason = reason
        super().__init__(f"{url} unreachable after {attempts} attempts: {reason}")


class EpochFetchError(Exception):
    """Raised when the epochs endpoint is unreachable or returns garbage."""


def _get_json_model(
    url: str,
    model: type[NodeStatus] | type[EpochList],
    timeout: float,
    transport: httpx.BaseTransport | None,
) -> NodeStatus | EpochList:
    """GET url and validate the JSON body against model."""
    with httpx.Client(timeout=timeout, transport=transport) as client:
        resp = client.get(url)
    resp.raise_for_status()
    return model.model_validate_json(resp.content)


class StatusFetcher:
    """Fetches GET <rpc>/status with a fixed-delay retry loop."""

    def __init__(
        self,
        status_url: str,
        attempts: int = 48,
        retry_delay: float = 5.0,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be >= 1")
        self.status_url = status_url
        self.attempts = attempts
        self.retry_delay = retry_delay
        self._timeout = timeout
        self._transport = transport

    def fetch(self) -> NodeStatus:
        """Return a fresh NodeStatus; never cached."""
        reason = ""
        for attempt in range(1, self.attempts + 1):
            try:
                return _get_json_model(
                    self.status_url, NodeStatus, self._timeout, self._transport
                )
            except httpx.HTTPError as e:
                reason = f"{type(e).__name__}: {e}"
            except ValidationError as e:
                reason = f"invalid status document ({e.error_count()} errors)"

            logger.info(
                "Node status fetch failed (attempt %d/%d): %s",
                attempt, self.attempts, reason,
            )
            if attempt < self.attempts:
                time.sleep(self.retry_delay)

        logger.error(
            "Node refused to connect for %d attempts, giving up: %s",
            self.attempts, self.status_url,
        )
        raise NodeUnreachableError(self.status_url, self.attempts, reason)


class EpochClient:
    """Fetches GET <lcd>/osmosis/epochs/v1beta1/epochs."""

    def __init__(
        self,
        epochs_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.epochs_url = epochs_url
        self._timeout = timeout
        self._transport = transport

    def fetch(self) -> EpochList:
        try:
            return _get_json_model(
                self.epochs_url, EpochList, self._timeout, self._transport
            )
        except httpx.HTTPError as e:
            raise EpochFetchError(f"{type(e).__name__}: {e}") from e
        except ValidationError as e:
            raise EpochFetchError(f"invalid epochs document: {e}") from e
