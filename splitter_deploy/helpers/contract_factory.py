"""
Contract factory backed by Hardhat compilation artifacts.

Artifacts are read from ``<artifacts_dir>/contracts/<Name>.sol/<Name>.json``
(the layout ``npx hardhat compile`` produces); ``abi`` and ``bytecode`` are
taken from there, so no local solc install is needed.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from eth_abi import encode
from eth_utils import to_checksum_address
from web3 import Web3

from splitter_deploy.config.network import RECEIPT_TIMEOUT
from splitter_deploy.errors import ConfigurationError, DeploymentError
from splitter_deploy.helpers.accounts import Deployer

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACTS_DIR = "artifacts"


@dataclass(frozen=True)
class DeployedContract:
    address: str
    tx_hash: str
    block_number: int | None = None
    gas_used: int | None = None


def find_artifact(name: str, artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR) -> Path:
    """Locate the Hardhat artifact JSON for contract ``name``."""
    root = Path(artifacts_dir)
    direct = root / "contracts" / f"{name}.sol" / f"{name}.json"
    if direct.is_file():
        return direct
    matches = sorted(p for p in root.glob(f"**/{name}.json") if "build-info" not in p.parts)
    if not matches:
        raise ConfigurationError(
            f"No compiled artifact for {name} under {root}",
            hint="Run `npx hardhat compile` first",
        )
    return matches[0]


def _coerce_value(abi_type: str, value: Any) -> Any:
    if abi_type.endswith("[]"):
        return [_coerce_value(abi_type[:-2], v) for v in value]
    if abi_type.startswith(("uint", "int")) and isinstance(value, str):
        return int(value, 16) if value.lower().startswith("0x") else int(value)
    if abi_type == "address" and isinstance(value, str):
        return to_checksum_address(value)
    return value


def coerce_args(inputs: list[dict[str, Any]], args: tuple[Any, ...] | list[Any]) -> list[Any]:
    """Convert string arguments to the Python types web3 expects for ``inputs``.

    Numeric strings become ints and addresses are checksummed.
    """
    if len(inputs) != len(args):
        sig = ", ".join(i["type"] for i in inputs)
        raise ConfigurationError(
            f"Constructor expects {len(inputs)} arguments ({sig}); got {len(args)}",
            hint="Check --variant against the compiled contract",
        )
    try:
        return [_coerce_value(i["type"], a) for i, a in zip(inputs, args)]
    except ValueError as e:
        raise ConfigurationError(f"Invalid constructor argument: {e}") from None


def encode_constructor_args(inputs: list[dict[str, Any]], args: tuple[Any, ...] | list[Any]) -> str:
    """ABI-encode constructor arguments as hex without 0x prefix."""
    types = [i["type"] for i in inputs]
    return encode(types, coerce_args(inputs, args)).hex()


class ContractFactory:
    """Deploys one compiled contract."""

    def __init__(self, w3: Web3, name: str, abi: list[dict[str, Any]], bytecode: str):
        self.w3 = w3
        self.name = name
        self.abi = abi
        self.bytecode = bytecode if bytecode.startswith("0x") else "0x" + bytecode

    @property
    def constructor_inputs(self) -> list[dict[str, Any]]:
        return constructor_inputs_from_abi(self.abi)

    def deploy(self, *args: Any, deployer: Deployer, timeout: int = RECEIPT_TIMEOUT) -> DeployedContract:
        """Send the deployment transaction and wait for its receipt.

        Raises:
            DeploymentError: If the transaction is mined with status != 1.
        """
        w3 = self.w3
        contract = w3.eth.contract(abi=self.abi, bytecode=self.bytecode)
        ctor = contract.constructor(*coerce_args(self.constructor_inputs, args))

        if deployer.signer is None:
            tx_hash = ctor.transact({"from": deployer.address})
        else:
            tx = ctor.build_transaction({
                "from": deployer.address,
                "nonce": w3.eth.get_transaction_count(deployer.address, "pending"),
                "chainId": w3.eth.chain_id,
            })
            signed = deployer.signer.sign_transaction(tx)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)

        logger.info("Deploy tx: %s", Web3.to_hex(tx_hash))
        logger.info("Waiting for confirmation...")
        receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)

        if receipt["status"] != 1:
            raise DeploymentError(
                f"{self.name} deployment reverted",
                context={"tx_hash": Web3.to_hex(tx_hash), "status": str(receipt["status"])},
            )

        return DeployedContract(
            address=to_checksum_address(receipt["contractAddress"]),
            tx_hash=Web3.to_hex(tx_hash),
            block_number=receipt.get("blockNumber"),
            gas_used=receipt.get("gasUsed"),
        )


def load_artifact(name: str, artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR) -> dict[str, Any]:
    return json.loads(find_artifact(name, artifacts_dir).read_text())


def constructor_inputs_from_abi(abi: list[dict[str, Any]]) -> list[dict[str, Any]]:
    for entry in abi:
        if entry.get("type") == "constructor":
            return list(entry.get("inputs", []))
    return []


def load_constructor_inputs(name: str, artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR) -> list[dict[str, Any]]:
    """Constructor ABI inputs of ``name``, without needing a node connection."""
    return constructor_inputs_from_abi(load_artifact(name, artifacts_dir)["abi"])


def load_contract(name: str, artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR) -> tuple[str, list[dict[str, Any]], str]:
    """Return (contract_name, abi, bytecode) of a deployable artifact."""
    path = find_artifact(name, artifacts_dir)
    artifact = json.loads(path.read_text())
    bytecode = artifact.get("bytecode") or ""
    if bytecode in ("", "0x"):
        raise ConfigurationError(f"Artifact {path} has no bytecode (abstract contract or interface?)")
    return artifact.get("contractName", name), artifact["abi"], bytecode
