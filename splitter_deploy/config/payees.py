"""
Payee/share tables per network profile.

Local profiles take payees from the node's signing accounts and use fixed
shares. Public profiles read every payee and share from the configuration
source, one key per value:

    PAYEE_<NETWORK>_<N>, SHARE_<NETWORK>_<N>, RELAYER_SHARE_<NETWORK>
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from splitter_deploy.config.env import EnvConfig
from splitter_deploy.config.network import NetworkProfile
from splitter_deploy.errors import ConfigurationError
from splitter_deploy.models import (
    ContractVariant,
    DeploymentParameters,
    PayeeShare,
    RelayerSplitterParameters,
    SplitterParameters,
)


@dataclass(frozen=True)
class LocalPayees:
    """Fixed payee layout for a local test network."""
    account_indices: tuple[int, ...]
    shares: tuple[str, ...]
    relayer_share: str | None = None


# Local test network layouts, per contract variant
LOCAL_PAYEES: dict[ContractVariant, LocalPayees] = {
    ContractVariant.RELAYER: LocalPayees(
        account_indices=(1, 2),
        shares=("31", "19"),
        relayer_share="50",
    ),
    ContractVariant.PLAIN: LocalPayees(
        account_indices=(0, 1, 2),
        shares=("50", "31", "19"),
    ),
}

# Profiles whose payees come from local signing accounts
LOCAL_PROFILES: frozenset[NetworkProfile] = frozenset({NetworkProfile.HARDHAT})


def payee_key(network: NetworkProfile, n: int) -> str:
    return f"PAYEE_{network.value.upper()}_{n}"


def share_key(network: NetworkProfile, n: int) -> str:
    return f"SHARE_{network.value.upper()}_{n}"


def relayer_share_key(network: NetworkProfile) -> str:
    return f"RELAYER_SHARE_{network.value.upper()}"


def _build(variant: ContractVariant, entries: list[PayeeShare], relayer_share: str | None) -> DeploymentParameters:
    if variant is ContractVariant.RELAYER:
        if relayer_share is None:
            raise ConfigurationError("The relayer Splitter needs a relayer share")
        return RelayerSplitterParameters(entries=tuple(entries), relayer_share=relayer_share)
    return SplitterParameters(entries=tuple(entries))


def _resolve_local(variant: ContractVariant, local_accounts: Sequence[str]) -> DeploymentParameters:
    layout = LOCAL_PAYEES[variant]
    needed = max(layout.account_indices) + 1
    if len(local_accounts) < needed:
        raise ConfigurationError(
            f"Local network exposes {len(local_accounts)} accounts; {needed} required",
            hint="Start the local node with more funded accounts",
        )
    entries = [
        PayeeShare(address=local_accounts[i], share=share)
        for i, share in zip(layout.account_indices, layout.shares)
    ]
    return _build(variant, entries, layout.relayer_share)


def _resolve_from_config(
    network: NetworkProfile,
    variant: ContractVariant,
    config: Mapping[str, str],
) -> DeploymentParameters:
    keys: list[str] = []
    for n in range(1, variant.payee_slots + 1):
        keys += [payee_key(network, n), share_key(network, n)]
    if variant is ContractVariant.RELAYER:
        keys.append(relayer_share_key(network))

    values = EnvConfig(config).require(*keys)

    pairs = values[: 2 * variant.payee_slots]
    entries = [PayeeShare(address=pairs[i], share=pairs[i + 1]) for i in range(0, len(pairs), 2)]
    relayer_share = values[-1] if variant is ContractVariant.RELAYER else None
    return _build(variant, entries, relayer_share)


def resolve_parameters(
    network: str | NetworkProfile,
    config: Mapping[str, str],
    variant: ContractVariant = ContractVariant.RELAYER,
    local_accounts: Sequence[str] = (),
) -> DeploymentParameters:
    """Resolve the Splitter constructor parameters for ``network``.

    Args:
        network: Network name or profile.
        config: Configuration source; only read for public networks.
        variant: Which Splitter constructor the parameters are for.
        local_accounts: Signing accounts of a local node, in node order.

    Returns:
        Immutable parameters with payees and shares in slot order.

    Raises:
        ConfigurationError: Unknown network, missing/empty configuration
            values, or too few local accounts.
    """
    profile = NetworkProfile.parse(network)
    if profile in LOCAL_PROFILES:
        return _resolve_local(variant, local_accounts)
    return _resolve_from_config(profile, variant, config)
