"""Shared fakes for the Splitter deployment tests."""
from __future__ import annotations

import json
from decimal import Decimal

import pytest

from splitter_deploy.helpers.contract_factory import DeployedContract

# Hardhat's well-known first dev key; never holds real funds
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

# Public-network payees, as an operator would put them in .env
PAYEE_A = "0x" + "aa" * 20
PAYEE_B = "0x" + "bb" * 20
PAYEE_C = "0x" + "cc" * 20

RELAYER_CTOR_INPUTS = [
    {"name": "relayerShare_", "type": "uint256"},
    {"name": "payees", "type": "address[]"},
    {"name": "shares_", "type": "uint256[]"},
]
PLAIN_CTOR_INPUTS = [
    {"name": "payees", "type": "address[]"},
    {"name": "shares_", "type": "uint256[]"},
]


def local_address(i: int) -> str:
    return "0x" + f"{i + 1:040x}"


class FakeEth:
    def __init__(self, accounts, chain_id=31337):
        self.accounts = accounts
        self.chain_id = chain_id

    def get_balance(self, address):
        return 10**18


class FakeWeb3:
    """Just enough of Web3 for account lookup and balance logging."""

    def __init__(self, accounts=(), chain_id=31337):
        self.eth = FakeEth(list(accounts), chain_id)

    @staticmethod
    def from_wei(value, unit):
        return Decimal(value) / Decimal(10**18)


class FakeFactory:
    def __init__(self, constructor_inputs=RELAYER_CTOR_INPUTS, error=None):
        self.constructor_inputs = constructor_inputs
        self.error = error
        self.calls = []

    def deploy(self, *args, deployer, timeout):
        self.calls.append({"args": list(args), "deployer": deployer, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return DeployedContract(
            address=DEPLOYED_ADDRESS,
            tx_hash="0x" + "ab" * 32,
            block_number=7,
            gas_used=1_234_567,
        )


class FakeVerifier:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def verify(self, address, contract_name, abi_inputs, constructor_args):
        self.calls.append({
            "address": address,
            "contract_name": contract_name,
            "abi_inputs": abi_inputs,
            "constructor_args": constructor_args,
        })
        if self.error is not None:
            raise self.error


class ExplodingConfig(dict):
    """A configuration source that fails the test if it is read at all."""

    def _boom(self, *args, **kwargs):
        raise AssertionError("configuration source was read")

    __getitem__ = get = __contains__ = __iter__ = keys = items = values = _boom

    def __len__(self):
        raise AssertionError("configuration source was read")


@pytest.fixture
def local_accounts():
    return [local_address(i) for i in range(5)]


@pytest.fixture
def fake_w3(local_accounts):
    return FakeWeb3(local_accounts)


@pytest.fixture
def rinkeby_env():
    return {
        "PAYEE_RINKEBY_1": PAYEE_A,
        "SHARE_RINKEBY_1": "40",
        "PAYEE_RINKEBY_2": PAYEE_B,
        "SHARE_RINKEBY_2": "60",
        "RELAYER_SHARE_RINKEBY": "10",
        "PRIVATE_KEY": DEV_PRIVATE_KEY,
        "ETHERSCAN_API_KEY": "test-key",
    }


@pytest.fixture
def artifacts_dir(tmp_path):
    """A Hardhat artifacts tree with a Splitter artifact and its build-info."""
    root = tmp_path / "artifacts"
    art = root / "contracts" / "Splitter.sol"
    art.mkdir(parents=True)
    abi = [{"type": "constructor", "inputs": RELAYER_CTOR_INPUTS, "stateMutability": "nonpayable"}]
    (art / "Splitter.json").write_text(json.dumps({
        "contractName": "Splitter",
        "sourceName": "contracts/Splitter.sol",
        "abi": abi,
        "bytecode": "0x6080604052",
    }))
    build_info = root / "build-info"
    build_info.mkdir()
    (build_info / "abc123.json").write_text(json.dumps({
        "solcVersion": "0.8.4",
        "solcLongVersion": "0.8.4+commit.c7e474f2",
        "input": {"language": "Solidity", "sources": {"contracts/Splitter.sol": {"content": "contract Splitter {}"}}},
        "output": {"contracts": {"contracts/Splitter.sol": {"Splitter": {"abi": abi}}}},
    }))
    return root
