"""
Web3 setup helper - connects to the node for a network profile.

Public API
----------
get_web3_instance(network, config=None, timeout=RPC_TIMEOUT)
    Return a connected Web3 instance whose chain id matches the profile.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from splitter_deploy.config.network import RPC_TIMEOUT, NetworkProfile, get_chain_id, get_rpc_url
from splitter_deploy.errors import ConfigurationError, DeploymentError

__all__ = ["get_web3_instance"]

logger = logging.getLogger(__name__)

# Clique networks put signer data in extraData
POA_NETWORKS = frozenset({NetworkProfile.RINKEBY})


def get_web3_instance(
    network: str | NetworkProfile,
    config: Mapping[str, str] | None = None,
    timeout: int = RPC_TIMEOUT,
) -> Web3:
    """
    Get a Web3 instance connected to the node for ``network``.

    Args:
        network: Network name or profile.
        config: Configuration source for RPC URL overrides.
        timeout: Per-request HTTP timeout in seconds.

    Returns:
        Web3 instance

    Raises:
        DeploymentError: If the node cannot be reached.
        ConfigurationError: If the node reports a different chain id.
    """
    profile = NetworkProfile.parse(network)
    rpc_url = get_rpc_url(profile, config)

    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    if profile in POA_NETWORKS:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    if not w3.is_connected():
        raise DeploymentError(
            f"Could not connect to {profile.value} RPC",
            hint="Check RPC_URL / RPC_URL_<NETWORK> or start the local node",
            context={"rpc_url": rpc_url},
        )

    expected = get_chain_id(profile)
    actual = w3.eth.chain_id
    if actual != expected:
        raise ConfigurationError(
            f"Unexpected chainId {actual}; expected {expected} for {profile.value}",
            context={"rpc_url": rpc_url},
        )

    logger.debug("Connected to %s (chain id %d) via %s", profile.value, actual, rpc_url)
    return w3
