"""Signing accounts: the local node's unlocked accounts or a PRIVATE_KEY."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import Web3

from splitter_deploy.config.env import EnvConfig
from splitter_deploy.config.network import NetworkProfile
from splitter_deploy.config.payees import LOCAL_PROFILES
from splitter_deploy.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Deployer:
    """The account that sends the deployment transaction.

    ``signer`` is None for accounts unlocked on the node itself.
    """
    address: str
    signer: LocalAccount | None = None


def get_local_accounts(w3: Web3) -> list[str]:
    """Return the node's signing accounts in node order."""
    return [to_checksum_address(a) for a in w3.eth.accounts]


def get_deployer(
    w3: Web3,
    network: str | NetworkProfile,
    config: Mapping[str, str],
    local_accounts: list[str] | None = None,
) -> Deployer:
    """Pick the deployer for ``network``.

    Local profiles deploy from the node's first account; public profiles
    sign with PRIVATE_KEY from the configuration source.
    """
    profile = NetworkProfile.parse(network)
    if profile in LOCAL_PROFILES:
        accounts = local_accounts if local_accounts is not None else get_local_accounts(w3)
        if not accounts:
            raise ConfigurationError("Local node exposes no accounts")
        return Deployer(address=accounts[0])

    return key_deployer(config)


def key_deployer(config: Mapping[str, str]) -> Deployer:
    """Deployer that signs locally with PRIVATE_KEY. Needs no node connection."""
    (private_key,) = EnvConfig(config).require("PRIVATE_KEY")
    try:
        acct: LocalAccount = Account.from_key(private_key.strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid PRIVATE_KEY: {e}") from None
    return Deployer(address=to_checksum_address(acct.address), signer=acct)


def get_balance_eth(w3: Web3, address: str) -> Decimal:
    return Decimal(w3.from_wei(w3.eth.get_balance(address), "ether"))


def log_deployer(w3: Web3, deployer: Deployer) -> None:
    logger.info("Deploying contracts with the account: %s", deployer.address)
    logger.info("Account balance: %.6f ETH", get_balance_eth(w3, deployer.address))
