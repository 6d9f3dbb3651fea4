"""Tests for payee/share resolution per network profile."""

import pytest

from conftest import PAYEE_A, PAYEE_B, ExplodingConfig, local_address
from splitter_deploy.config import payees
from splitter_deploy.config.network import NetworkProfile
from splitter_deploy.config.payees import resolve_parameters
from splitter_deploy.errors import ConfigurationError
from splitter_deploy.models import (
    ContractVariant,
    RelayerSplitterParameters,
    SplitterParameters,
)


def _plain_env():
    env = {}
    for n, (payee, share) in enumerate([("0xAA", "50"), ("0xBB", "30"), ("0xCC", "20")], start=1):
        env[f"PAYEE_RINKEBY_{n}"] = payee
        env[f"SHARE_RINKEBY_{n}"] = share
    return env


class TestLocalProfile:

    def test_relayer_variant_uses_accounts_one_and_two(self, local_accounts):
        params = resolve_parameters("hardhat", {}, ContractVariant.RELAYER, local_accounts)
        assert isinstance(params, RelayerSplitterParameters)
        assert params.payees == [local_address(1), local_address(2)]
        assert params.shares == ["31", "19"]
        assert params.relayer_share == "50"

    def test_plain_variant_uses_accounts_zero_to_two(self, local_accounts):
        params = resolve_parameters("hardhat", {}, ContractVariant.PLAIN, local_accounts)
        assert isinstance(params, SplitterParameters)
        assert params.payees == [local_address(0), local_address(1), local_address(2)]
        assert params.shares == ["50", "31", "19"]

    @pytest.mark.parametrize("variant", list(ContractVariant))
    def test_never_reads_configuration(self, variant, local_accounts):
        resolve_parameters(NetworkProfile.HARDHAT, ExplodingConfig(), variant, local_accounts)

    def test_relayer_layout_without_relayer_share(self, monkeypatch, local_accounts):
        monkeypatch.setitem(
            payees.LOCAL_PAYEES, ContractVariant.RELAYER, payees.LocalPayees(account_indices=(1, 2), shares=("60", "40")),
        )
        with pytest.raises(ConfigurationError, match="relayer share"):
            resolve_parameters("hardhat", {}, ContractVariant.RELAYER, local_accounts)

    def test_too_few_accounts(self):
        with pytest.raises(ConfigurationError, match="3 required"):
            resolve_parameters("hardhat", {}, ContractVariant.RELAYER, [local_address(0), local_address(1)])


class TestPublicProfile:

    def test_values_pass_through_verbatim(self, rinkeby_env):
        params = resolve_parameters("rinkeby", rinkeby_env, ContractVariant.RELAYER)
        assert params.payees == [PAYEE_A, PAYEE_B]
        assert params.shares == ["40", "60"]
        assert params.relayer_share == "10"

    def test_shares_are_not_normalised(self, rinkeby_env):
        rinkeby_env["SHARE_RINKEBY_1"] = "040"
        params = resolve_parameters("rinkeby", rinkeby_env, ContractVariant.RELAYER)
        assert params.shares == ["040", "60"]

    def test_plain_variant_reads_three_slots(self):
        params = resolve_parameters("rinkeby", _plain_env(), ContractVariant.PLAIN)
        assert params.payees == ["0xAA", "0xBB", "0xCC"]
        assert params.shares == ["50", "30", "20"]
        assert params.constructor_args() == [["0xAA", "0xBB", "0xCC"], ["50", "30", "20"]]

    def test_missing_relayer_share(self, rinkeby_env):
        del rinkeby_env["RELAYER_SHARE_RINKEBY"]
        with pytest.raises(ConfigurationError, match="RELAYER_SHARE_RINKEBY"):
            resolve_parameters("rinkeby", rinkeby_env, ContractVariant.RELAYER)

    def test_every_missing_key_is_named(self):
        with pytest.raises(ConfigurationError) as exc:
            resolve_parameters("rinkeby", {"PAYEE_RINKEBY_1": "0xAA", "SHARE_RINKEBY_2": ""}, ContractVariant.RELAYER)
        message = str(exc.value)
        for key in ("SHARE_RINKEBY_1", "PAYEE_RINKEBY_2", "SHARE_RINKEBY_2", "RELAYER_SHARE_RINKEBY"):
            assert key in message
        assert "PAYEE_RINKEBY_1," not in message

    def test_blank_value_is_missing(self, rinkeby_env):
        rinkeby_env["PAYEE_RINKEBY_2"] = "   "
        with pytest.raises(ConfigurationError, match="PAYEE_RINKEBY_2"):
            resolve_parameters("rinkeby", rinkeby_env, ContractVariant.RELAYER)


@pytest.mark.parametrize("network", list(NetworkProfile))
@pytest.mark.parametrize("variant", list(ContractVariant))
def test_payees_and_shares_are_parallel(network, variant, local_accounts, rinkeby_env):
    env = {**rinkeby_env, **_plain_env()} if variant is ContractVariant.PLAIN else rinkeby_env
    params = resolve_parameters(network, env, variant, local_accounts)
    assert len(params.payees) == len(params.shares) == variant.payee_slots


@pytest.mark.parametrize("network", ["polygon", "mainnet", "", "hardhat2"])
def test_unrecognized_network(network, local_accounts):
    with pytest.raises(ConfigurationError, match="Bad network"):
        resolve_parameters(network, {}, ContractVariant.RELAYER, local_accounts)


def test_constructor_argument_order():
    relayer = RelayerSplitterParameters(
        entries=resolve_parameters("rinkeby", {
            "PAYEE_RINKEBY_1": "0x1", "SHARE_RINKEBY_1": "1",
            "PAYEE_RINKEBY_2": "0x2", "SHARE_RINKEBY_2": "2",
            "RELAYER_SHARE_RINKEBY": "97",
        }).entries,
        relayer_share="97",
    )
    assert relayer.constructor_args() == ["97", ["0x1", "0x2"], ["1", "2"]]

    plain = SplitterParameters(entries=relayer.entries)
    assert plain.constructor_args() == [["0x1", "0x2"], ["1", "2"]]
