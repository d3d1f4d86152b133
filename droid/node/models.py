"""Pydantic models for the node status RPC and the LCD epochs endpoint."""

from __future__ import annotations

from datetime import datetime

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    field_validator,
)

PUB_KEY_TYPE = "/cosmos.crypto.ed25519.PubKey"

_TIMESTAMP = TypeAdapter(AwareDatetime)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# ── Status document ──────────────────────────────────────────────────────────


class NodeInfo(_Frozen):
    id: str = ""
    network: str = ""


class SyncInfo(_Frozen):
    latest_block_hash: str
    latest_block_height: str
    # Kept as sent (RFC3339 with nanoseconds) so /block can echo it verbatim.
    latest_block_time: str
    latest_app_hash: str = ""
    earliest_block_hash: str = ""
    earliest_app_hash: str = ""
    earliest_block_height: str = ""
    earliest_block_time: str = ""
    catching_up: bool

    @field_validator("latest_block_time")
    @classmethod
    def _check_timestamp(cls, v: str) -> str:
        try:
            _TIMESTAMP.validate_python(v)
        except ValidationError as e:
            raise ValueError(f"invalid RFC3339 timestamp: {v!r}") from e
        return v

    @property
    def latest_block_datetime(self) -> datetime:
        return _TIMESTAMP.validate_python(self.latest_block_time)


class PubKey(_Frozen):
    type: str = ""
    value: str = ""


class ValidatorInfo(_Frozen):
    address: str = ""
    pub_key: PubKey = PubKey()


class StatusResult(_Frozen):
    node_info: NodeInfo = NodeInfo()
    sync_info: SyncInfo
    validator_info: ValidatorInfo = ValidatorInfo()


class Block(_Frozen):
    """Latest block projection served on /block."""

    hash: str
    height: str
    time: str


class NodeStatus(_Frozen):
    """One snapshot of GET <rpc>/status."""

    result: StatusResult

    @property
    def node_id(self) -> str:
        return self.result.node_info.id

    @property
    def catching_up(self) -> bool:
        return self.result.sync_info.catching_up

    @property
    def pub_key(self) -> PubKey:
        return self.result.validator_info.pub_key

    @property
    def latest_block_time(self) -> datetime:
        return self.result.sync_info.latest_block_datetime

    def latest_block(self) -> Block:
        sync = self.result.sync_info
        return Block(
            hash=sync.latest_block_hash,
            height=sync.latest_block_height,
            time=sync.latest_block_time,
        )


# ── Epochs document ──────────────────────────────────────────────────────────


class EpochInfo(_Frozen):
    identifier: str
    current_epoch_start_time: AwareDatetime


class EpochList(_Frozen):
    epochs: list[EpochInfo] = []

    def find(self, identifier: str) -> EpochInfo | None:
        """Return the first epoch with the given identifier, or None."""
        for epoch in self.epochs:
            if epoch.identifier == identifier:
                return epoch
        return None
