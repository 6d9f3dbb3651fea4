"""Data types for Splitter deployments."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union


class ContractVariant(Enum):
    """Splitter constructor shapes. The two are not interchangeable."""
    RELAYER = "relayer"  # constructor(relayerShare, payees[], shares[])
    PLAIN = "plain"      # constructor(payees[], shares[])

    @property
    def payee_slots(self) -> int:
        return 2 if self is ContractVariant.RELAYER else 3


@dataclass(frozen=True)
class PayeeShare:
    address: str
    share: str


@dataclass(frozen=True)
class _ParametersBase:
    entries: tuple[PayeeShare, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def payees(self) -> list[str]:
        return [e.address for e in self.entries]

    @property
    def shares(self) -> list[str]:
        return [e.share for e in self.entries]


@dataclass(frozen=True)
class RelayerSplitterParameters(_ParametersBase):
    """Parameters for the Splitter with a relayer share."""
    relayer_share: str

    variant = ContractVariant.RELAYER

    def constructor_args(self) -> list[Any]:
        return [self.relayer_share, self.payees, self.shares]


@dataclass(frozen=True)
class SplitterParameters(_ParametersBase):
    """Parameters for the Splitter without a relayer share."""

    variant = ContractVariant.PLAIN

    def constructor_args(self) -> list[Any]:
        return [self.payees, self.shares]


DeploymentParameters = Union[RelayerSplitterParameters, SplitterParameters]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class DeploymentResult:
    """A deployed Splitter and the exact constructor arguments it was given."""
    network: str
    variant: str
    address: str
    constructor_args: list[Any]
    tx_hash: str | None = None
    block_number: int | None = None
    gas_used: int | None = None
    deployer: str | None = None
    timestamp: str = field(default_factory=_utc_now_iso)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeploymentResult":
        return cls(
            network=data["network"],
            variant=data["variant"],
            address=data["address"],
            constructor_args=list(data["constructor_args"]),
            tx_hash=data.get("tx_hash"),
            block_number=data.get("block_number"),
            gas_used=data.get("gas_used"),
            deployer=data.get("deployer"),
            timestamp=data.get("timestamp") or _utc_now_iso(),
        )
