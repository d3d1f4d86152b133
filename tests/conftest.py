"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from droid.node.models import EpochList, NodeStatus


def status_document(
    height: str = "12345",
    block_time: str = "2023-01-01T12:00:00.123456789Z",
    catching_up: bool = False,
    pub_key_value: str = "abcDEF==",
    node_id: str = "f2a5c1d0e9b8",
) -> dict[str, Any]:
    """A Tendermint /status body trimmed to the fields droid reads."""
    return {
        "jsonrpc": "2.0",
        "id": -1,
        "result": {
            "node_info": {"id": node_id, "network": "osmosis-1"},
            "sync_info": {
                "latest_block_hash": "9D1F3C0A",
                "latest_app_hash": "AB12",
                "latest_block_height": height,
                "latest_block_time": block_time,
                "earliest_block_hash": "01",
                "earliest_app_hash": "02",
                "earliest_block_height": "1",
                "earliest_block_time": "2021-06-18T17:00:00Z",
                "catching_up": catching_up,
            },
            "validator_info": {
                "address": "A1B2C3",
                "pub_key": {"type": "tendermint/PubKeyEd25519", "value": pub_key_value},
                "voting_power": "0",
            },
        },
    }


def epochs_document(day_start: str = "2023-01-01T00:00:00Z") -> dict[str, Any]:
    return {
        "epochs": [
            {
                "identifier": "week",
                "current_epoch_start_time": "2022-12-29T17:16:09.898160996Z",
                "duration": "604800s",
            },
            {
                "identifier": "day",
                "current_epoch_start_time": day_start,
                "duration": "86400s",
            },
        ]
    }


@pytest.fixture
def make_status() -> Callable[..., NodeStatus]:
    def _make(**kwargs: Any) -> NodeStatus:
        return NodeStatus.model_validate(status_document(**kwargs))

    return _make


class FakeEpochSource:
    """EpochSource stub that counts fetches."""

    def __init__(self, document: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.document = document if document is not None else epochs_document()
        self.error = error
        self.calls = 0

    def fetch(self) -> EpochList:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return EpochList.model_validate(self.document)


@pytest.fixture
def epoch_source() -> FakeEpochSource:
    return FakeEpochSource()


@pytest.fixture
def status_doc() -> Callable[..., dict[str, Any]]:
    return status_document


@pytest.fixture
def epochs_doc() -> Callable[..., dict[str, Any]]:
    return epochs_document


@pytest.fixture
def fake_epoch_source() -> type[FakeEpochSource]:
    return FakeEpochSource
