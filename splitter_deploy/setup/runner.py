"""
Splitter deployment runner.

    resolve parameters -> deploy -> (public network) verify

Parameters are resolved before anything is sent to the chain. A deployment
is never retried: a second attempt would create a second contract. A failed
verification is reported on its own and leaves the deployment standing.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from eth_utils import is_address, to_checksum_address
from web3 import Web3

from splitter_deploy.config.env import EnvConfig
from splitter_deploy.config.network import (
    RECEIPT_TIMEOUT,
    RPC_TIMEOUT,
    NetworkProfile,
    get_explorer_api_url,
    is_verifiable,
)
from splitter_deploy.config.payees import LOCAL_PROFILES, resolve_parameters
from splitter_deploy.errors import (
    ConfigurationError,
    DeploymentError,
    SplitterDeployError,
    VerificationError,
)
from splitter_deploy.helpers.accounts import (
    Deployer,
    get_deployer,
    get_local_accounts,
    key_deployer,
    log_deployer,
)
from splitter_deploy.helpers.contract_factory import (
    DEFAULT_ARTIFACTS_DIR,
    ContractFactory,
    coerce_args,
    constructor_inputs_from_abi,
    load_constructor_inputs,
    load_contract,
)
from splitter_deploy.helpers.etherscan import EtherscanVerifier
from splitter_deploy.helpers.web3_setup import get_web3_instance
from splitter_deploy.models import ContractVariant, DeploymentParameters, DeploymentResult
from splitter_deploy.setup.deployment_records import DEPLOYMENTS_DIR, latest_record, save_record

logger = logging.getLogger(__name__)

CONTRACT_NAME = "Splitter"


class Verifier(Protocol):
    def verify(
        self,
        address: str,
        contract_name: str,
        abi_inputs: list[dict[str, Any]],
        constructor_args: list[Any],
    ) -> None: ...


@dataclass
class RunOutcome:
    """What a deploy run produced.

    ``verification_error`` set means the contract is live but unverified.
    """
    result: DeploymentResult
    verified: bool = False
    verification_error: VerificationError | None = None
    record_path: Path | None = None


def deploy(
    params: DeploymentParameters,
    factory: ContractFactory,
    *,
    network: str | NetworkProfile,
    deployer: Deployer,
    timeout: int = RECEIPT_TIMEOUT,
) -> DeploymentResult:
    """Deploy the Splitter with ``params`` as constructor arguments.

    Raises:
        DeploymentError: On any failure while deploying. Not retried.
    """
    profile = NetworkProfile.parse(network)
    args = params.constructor_args()
    try:
        deployed = factory.deploy(*args, deployer=deployer, timeout=timeout)
    except SplitterDeployError:
        raise
    except Exception as e:
        raise DeploymentError(
            f"{CONTRACT_NAME} deployment failed: {e}",
            context={"network": profile.value, "deployer": deployer.address},
        ) from e

    logger.info("%s deployed to: %s", CONTRACT_NAME, deployed.address)
    return DeploymentResult(
        network=profile.value,
        variant=params.variant.value,
        address=deployed.address,
        constructor_args=args,
        tx_hash=deployed.tx_hash,
        block_number=deployed.block_number,
        gas_used=deployed.gas_used,
        deployer=deployer.address,
    )


def verify(
    result: DeploymentResult,
    network: str | NetworkProfile,
    verifier: Verifier,
    abi_inputs: list[dict[str, Any]],
) -> bool:
    """Submit ``result`` for explorer verification.

    Returns:
        True once verified; False if the network has no explorer.

    Raises:
        VerificationError: If the explorer rejects or never confirms it.
    """
    profile = NetworkProfile.parse(network)
    if not is_verifiable(profile):
        logger.info("No block explorer for %s; skipping verification", profile.value)
        return False
    try:
        verifier.verify(result.address, CONTRACT_NAME, abi_inputs, list(result.constructor_args))
    except VerificationError:
        raise
    except Exception as e:
        raise VerificationError(
            f"Verification of {result.address} failed: {e}",
            context={"network": profile.value},
        ) from e
    return True


def make_verifier(
    network: str | NetworkProfile,
    config: Mapping[str, str],
    artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR,
) -> EtherscanVerifier:
    return EtherscanVerifier(
        get_explorer_api_url(network, config),
        config.get("ETHERSCAN_API_KEY", ""),
        artifacts_dir=artifacts_dir,
    )


def manual_verify_hint(result: DeploymentResult) -> str:
    """Command an operator can run to verify without redeploying."""
    return (
        f"npx hardhat verify --network {result.network} "
        f"--constructor-args <args.js> {result.address}\n"
        f"  with args.js: module.exports = {json.dumps(result.constructor_args)};"
    )


def run_deployment(
    network: str | NetworkProfile,
    config: Mapping[str, str],
    variant: ContractVariant = ContractVariant.RELAYER,
    *,
    w3: Web3 | None = None,
    factory: ContractFactory | None = None,
    verifier: Verifier | None = None,
    artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR,
    deployments_dir: Path | None = DEPLOYMENTS_DIR,
    rpc_timeout: int = RPC_TIMEOUT,
    receipt_timeout: int = RECEIPT_TIMEOUT,
) -> RunOutcome:
    """Resolve, deploy and (on public networks) verify one Splitter.

    Public networks are fully checked (parameters, PRIVATE_KEY, artifact and
    constructor shape) before the node is contacted. Local networks need the
    node's accounts first, but are still checked before anything is sent.

    Raises:
        ConfigurationError: Before any transaction is sent.
        DeploymentError: If the deployment itself failed.
    """
    profile = NetworkProfile.parse(network)
    config = EnvConfig(config)

    contract = None
    if factory is None:
        contract = load_contract(CONTRACT_NAME, artifacts_dir)
        ctor_inputs = constructor_inputs_from_abi(contract[1])
    else:
        ctor_inputs = factory.constructor_inputs

    params: DeploymentParameters | None = None
    deployer: Deployer | None = None
    if profile not in LOCAL_PROFILES:
        params = resolve_parameters(profile, config, variant)
        coerce_args(ctor_inputs, params.constructor_args())
        deployer = key_deployer(config)

    w3 = w3 or get_web3_instance(profile, config, timeout=rpc_timeout)

    if params is None:
        local_accounts = get_local_accounts(w3)
        params = resolve_parameters(profile, config, variant, local_accounts)
        coerce_args(ctor_inputs, params.constructor_args())
        deployer = get_deployer(w3, profile, config, local_accounts)

    log_deployer(w3, deployer)

    if factory is None:
        factory = ContractFactory(w3, *contract)
    logger.info("Payees: %s", params.payees)
    logger.info("Shares: %s", params.shares)

    result = deploy(params, factory, network=profile, deployer=deployer, timeout=receipt_timeout)
    outcome = RunOutcome(result=result)
    if deployments_dir is not None:
        try:
            outcome.record_path = save_record(result, deployments_dir)
        except OSError as e:
            logger.error("Could not write deployment record for %s: %s", result.address, e)

    if not is_verifiable(profile):
        return outcome

    try:
        verifier = verifier or make_verifier(profile, config, artifacts_dir)
        outcome.verified = verify(result, profile, verifier, factory.constructor_inputs)
    except VerificationError as e:
        outcome.verification_error = e
        logger.warning("Contract deployed at %s but NOT verified: %s", result.address, e)
        logger.warning("Verify manually with:\n%s", manual_verify_hint(result))
    return outcome


def run_verification(
    network: str | NetworkProfile,
    config: Mapping[str, str],
    address: str | None = None,
    variant: ContractVariant = ContractVariant.RELAYER,
    *,
    verifier: Verifier | None = None,
    artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR,
    deployments_dir: Path = DEPLOYMENTS_DIR,
) -> DeploymentResult:
    """Verify an already deployed Splitter.

    With ``address`` the constructor arguments are resolved from ``config``;
    without it the latest deployment record for the network is used.

    Raises:
        ConfigurationError: Network without explorer, bad address, or
            nothing to verify.
        VerificationError: If the explorer rejects or never confirms it.
    """
    profile = NetworkProfile.parse(network)
    config = EnvConfig(config)
    if not is_verifiable(profile):
        raise ConfigurationError(f"Verification is not available on {profile.value}")

    if address is not None:
        if not is_address(address):
            raise ConfigurationError(f"Not a valid address: {address!r}")
        params = resolve_parameters(profile, config, variant)
        result = DeploymentResult(
            network=profile.value,
            variant=params.variant.value,
            address=to_checksum_address(address),
            constructor_args=params.constructor_args(),
        )
    else:
        record = latest_record(profile.value, deployments_dir)
        if record is None:
            raise ConfigurationError(
                f"No recorded {CONTRACT_NAME} deployment on {profile.value}",
                hint="Pass --address",
                context={"deployments_dir": str(deployments_dir)},
            )
        result = record

    logger.info("Verifying contract: %s", result.address)
    abi_inputs = load_constructor_inputs(CONTRACT_NAME, artifacts_dir)
    verifier = verifier or make_verifier(profile, config, artifacts_dir)
    verify(result, profile, verifier, abi_inputs)
    return result
