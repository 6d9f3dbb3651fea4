"""
Etherscan-compatible source verification.

Submits the Hardhat standard-JSON compiler input for a deployed contract and
polls the explorer until it reports a verdict. Every failure is raised as a
VerificationError; the contract itself is already on-chain by then.
"""
from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import requests

from splitter_deploy.errors import VerificationError
from splitter_deploy.helpers.contract_factory import DEFAULT_ARTIFACTS_DIR, encode_constructor_args

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds per HTTP call
POLL_INTERVAL = 5  # seconds between status checks
MAX_POLLS = 12  # ~1 minute

ALREADY_VERIFIED = "already verified"


def find_build_info(contract_name: str, artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR) -> tuple[str, dict[str, Any]]:
    """Return (source_name, build_info) for the compilation that produced ``contract_name``."""
    build_dir = Path(artifacts_dir) / "build-info"
    for path in sorted(build_dir.glob("*.json")):
        build_info = json.loads(path.read_text())
        for source_name, contracts in build_info.get("output", {}).get("contracts", {}).items():
            if contract_name in contracts:
                return source_name, build_info
    raise VerificationError(
        f"No Hardhat build-info found for {contract_name}",
        hint="Run `npx hardhat compile` so artifacts/build-info exists",
        context={"build_dir": str(build_dir)},
    )


class EtherscanVerifier:
    """Client for the explorer's verifysourcecode / checkverifystatus calls."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        artifacts_dir: str | Path = DEFAULT_ARTIFACTS_DIR,
        session: requests.Session | None = None,
        request_timeout: float = REQUEST_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
        max_polls: int = MAX_POLLS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not api_key:
            raise VerificationError(
                "ETHERSCAN_API_KEY not set",
                hint="Get an API key from https://etherscan.io/myapikey",
            )
        self.api_url = api_url
        self.api_key = api_key
        self.artifacts_dir = artifacts_dir
        self.session = session or requests.Session()
        self.request_timeout = request_timeout
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self._sleep = sleep

    def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            if method == "POST":
                response = self.session.post(self.api_url, data=payload, timeout=self.request_timeout)
            else:
                response = self.session.get(self.api_url, params=payload, timeout=self.request_timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise VerificationError(
                f"Explorer request failed: {e}",
                context={"api_url": self.api_url},
            ) from e

    def submit(
        self,
        address: str,
        contract_name: str,
        abi_inputs: list[dict[str, Any]],
        constructor_args: list[Any],
    ) -> str | None:
        """Submit a verification request.

        Returns:
            The explorer GUID, or None if the contract is already verified.
        """
        source_name, build_info = find_build_info(contract_name, self.artifacts_dir)
        data = {
            "apikey": self.api_key,
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": json.dumps(build_info["input"]),
            "codeformat": "solidity-standard-json-input",
            "contractname": f"{source_name}:{contract_name}",
            "compilerversion": f"v{build_info['solcLongVersion']}",
            # sic: the explorer API spells it this way
            "constructorArguements": encode_constructor_args(abi_inputs, constructor_args),
        }
        result = self._call("POST", data)
        message = str(result.get("result", ""))
        if result.get("status") == "1":
            logger.info("Verification submitted successfully! GUID: %s", message)
            return message
        if ALREADY_VERIFIED in message.lower():
            logger.info("Contract %s is already verified", address)
            return None
        raise VerificationError(
            f"Verification submission failed: {message or 'Unknown error'}",
            context={"address": address},
        )

    def wait(self, guid: str) -> None:
        """Poll the explorer until the submission passes or fails."""
        params = {
            "apikey": self.api_key,
            "module": "contract",
            "action": "checkverifystatus",
            "guid": guid,
        }
        for _ in range(self.max_polls):
            self._sleep(self.poll_interval)
            result = self._call("GET", params)
            message = str(result.get("result", ""))
            if result.get("status") == "1" or ALREADY_VERIFIED in message.lower():
                return
            if "pending" in message.lower():
                logger.info("Status: %s", message)
                continue
            raise VerificationError(f"Verification failed: {message or 'Unknown'}", context={"guid": guid})
        raise VerificationError(
            "Verification timeout. Check status manually.",
            context={"guid": guid},
        )

    def verify(
        self,
        address: str,
        contract_name: str,
        abi_inputs: list[dict[str, Any]],
        constructor_args: list[Any],
    ) -> None:
        guid = self.submit(address, contract_name, abi_inputs, constructor_args)
        if guid is not None:
            self.wait(guid)
        logger.info("Contract verified successfully!")
