"""
Network configuration for the Splitter deployment tooling.

Contains the recognized deployment targets, their chain ids, default RPC
URLs and block-explorer endpoints.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from splitter_deploy.errors import ConfigurationError


class NetworkProfile(Enum):
    """Supported deployment targets."""
    HARDHAT = "hardhat"
    RINKEBY = "rinkeby"

    @classmethod
    def parse(cls, name: "str | NetworkProfile") -> "NetworkProfile":
        """Return the profile for ``name``.

        Raises:
            ConfigurationError: If the name is not a recognized network.
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Bad network: {name!r}",
                hint=f"Supported networks: {', '.join(p.value for p in cls)}",
            ) from None


# =============================================================================
# CHAIN CONFIGURATIONS
# =============================================================================

CHAINS: dict[str, dict[str, Any]] = {
    "hardhat": {
        "chain_id": 31337,
        "name": "Hardhat Network",
        "currency": "ETH",
        "rpc_urls": [
            "http://127.0.0.1:8545",
        ],
        "explorer": None,  # No explorer for local nodes
        "verifiable": False,
    },
    "rinkeby": {
        "chain_id": 4,
        "name": "Rinkeby Testnet",
        "currency": "ETH",
        "rpc_urls": [],  # no public endpoint; set RPC_URL_RINKEBY
        "explorer": {
            "name": "Etherscan Rinkeby",
            "url": "https://rinkeby.etherscan.io",
            "api_url": "https://api-rinkeby.etherscan.io/api",
        },
        "verifiable": True,
    },
}

# Chain ID to name mapping
CHAIN_ID_TO_NAME: dict[int, str] = {
    config["chain_id"]: name for name, config in CHAINS.items()
}

# Network timeouts
RPC_TIMEOUT: int = 30  # seconds
RECEIPT_TIMEOUT: int = 300  # seconds to wait for the deployment receipt


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_chain_config(network: "str | NetworkProfile") -> dict[str, Any]:
    """Get configuration for a specific network.

    Args:
        network: Network name (e.g., 'hardhat', 'rinkeby') or profile.

    Returns:
        Chain configuration dictionary.

    Raises:
        ConfigurationError: If the network is not supported.
    """
    profile = NetworkProfile.parse(network)
    return CHAINS[profile.value]


def is_verifiable(network: "str | NetworkProfile") -> bool:
    """Whether a block explorer can verify contracts on this network."""
    return bool(get_chain_config(network)["verifiable"])


def get_chain_id(network: "str | NetworkProfile") -> int:
    """Get the chain ID for a network."""
    return get_chain_config(network)["chain_id"]


def get_rpc_url(network: "str | NetworkProfile", config: Mapping[str, str] | None = None) -> str:
    """Get the RPC URL for a network.

    Uses RPC_URL_<NETWORK> or RPC_URL from ``config`` if set, otherwise
    returns the first default.

    Raises:
        ConfigurationError: If nothing is configured and the network has
            no default endpoint.
    """
    profile = NetworkProfile.parse(network)
    config = config or {}
    override = config.get(f"RPC_URL_{profile.value.upper()}") or config.get("RPC_URL")
    if override:
        return override
    defaults = CHAINS[profile.value]["rpc_urls"]
    if not defaults:
        key = f"RPC_URL_{profile.value.upper()}"
        raise ConfigurationError(
            f"No default RPC endpoint for {profile.value}",
            hint=f"Set {key} (or RPC_URL) to your node or provider URL",
        )
    return defaults[0]


def get_explorer_url(network: "str | NetworkProfile") -> str:
    """Get the block explorer URL for a network."""
    explorer = get_chain_config(network)["explorer"]
    if explorer is None:
        raise ConfigurationError(f"No block explorer for network {NetworkProfile.parse(network).value}")
    return explorer["url"]


def get_explorer_api_url(network: "str | NetworkProfile", config: Mapping[str, str] | None = None) -> str:
    """Get the block explorer API URL for a network.

    ETHERSCAN_API_URL in ``config`` takes precedence.
    """
    override = (config or {}).get("ETHERSCAN_API_URL")
    if override:
        return override
    explorer = get_chain_config(network)["explorer"]
    if explorer is None:
        raise ConfigurationError(f"No block explorer API for network {NetworkProfile.parse(network).value}")
    return explorer["api_url"]
