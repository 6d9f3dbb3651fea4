"""Tests for network profiles, env loading, logging and the error model."""

import logging
import os

import pytest

from splitter_deploy.config.env import EnvConfig, load_env_config
from splitter_deploy.config.logging_config import setup_logger
from splitter_deploy.config.network import (
    NetworkProfile,
    get_chain_id,
    get_explorer_api_url,
    get_rpc_url,
    is_verifiable,
)
from splitter_deploy.errors import ConfigurationError, DeploymentError, VerificationError


class TestNetworkProfile:

    @pytest.mark.parametrize("name", ["hardhat", "HARDHAT", " Hardhat "])
    def test_parse_is_case_insensitive(self, name):
        assert NetworkProfile.parse(name) is NetworkProfile.HARDHAT

    def test_parse_unknown(self):
        with pytest.raises(ConfigurationError, match="Bad network") as exc:
            NetworkProfile.parse("polygon")
        assert "hardhat, rinkeby" in str(exc.value)

    def test_only_public_network_is_verifiable(self):
        assert is_verifiable("rinkeby")
        assert not is_verifiable("hardhat")

    def test_chain_ids(self):
        assert get_chain_id("hardhat") == 31337
        assert get_chain_id("rinkeby") == 4

    def test_rpc_url_overrides(self):
        assert get_rpc_url("hardhat") == "http://127.0.0.1:8545"
        assert get_rpc_url("rinkeby", {"RPC_URL": "http://generic"}) == "http://generic"
        cfg = {"RPC_URL": "http://generic", "RPC_URL_RINKEBY": "http://specific"}
        assert get_rpc_url("rinkeby", cfg) == "http://specific"

    def test_rinkeby_has_no_default_rpc(self):
        with pytest.raises(ConfigurationError, match="No default RPC endpoint") as exc:
            get_rpc_url("rinkeby", {})
        assert "RPC_URL_RINKEBY" in str(exc.value)

    def test_explorer_api_url(self):
        assert get_explorer_api_url("rinkeby") == "https://api-rinkeby.etherscan.io/api"
        with pytest.raises(ConfigurationError):
            get_explorer_api_url("hardhat")


class TestEnvConfig:

    def test_env_file_overrides_environment(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PAYEE_RINKEBY_1=0xFROMFILE\nSHARE_RINKEBY_1=40\n# comment\n")
        cfg = load_env_config(env_file, environ={"PAYEE_RINKEBY_1": "0xFROMENV", "OTHER": "x"})
        assert cfg["PAYEE_RINKEBY_1"] == "0xFROMFILE"
        assert cfg["SHARE_RINKEBY_1"] == "40"
        assert cfg["OTHER"] == "x"

    def test_process_environment_is_not_mutated(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SPLITTER_TEST_ONLY_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("SPLITTER_TEST_ONLY_KEY=1\n")
        cfg = load_env_config(env_file)
        assert cfg["SPLITTER_TEST_ONLY_KEY"] == "1"
        assert "SPLITTER_TEST_ONLY_KEY" not in os.environ

    def test_missing_file_uses_environment(self, tmp_path):
        cfg = load_env_config(tmp_path / "nope.env", environ={"A": "1"})
        assert dict(cfg) == {"A": "1"}

    def test_bare_keys_are_dropped(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BARE\nSET=1\n")
        cfg = load_env_config(env_file, environ={})
        assert "BARE" not in cfg
        assert cfg["SET"] == "1"

    def test_require(self):
        cfg = EnvConfig({"A": "1", "B": "", "C": " 3 "})
        assert cfg.require("A", "C") == ["1", " 3 "]
        with pytest.raises(ConfigurationError, match="B, D"):
            cfg.require("A", "B", "D")

    def test_is_read_only(self):
        cfg = EnvConfig({"A": "1"})
        with pytest.raises(TypeError):
            cfg["A"] = "2"


class TestErrors:

    @pytest.mark.parametrize("cls, code", [
        (ConfigurationError, "E_CONFIGURATION"),
        (DeploymentError, "E_DEPLOYMENT"),
        (VerificationError, "E_VERIFICATION"),
    ])
    def test_codes_and_kind(self, cls, code):
        err = cls("boom", hint="try again", context={"network": "rinkeby"})
        payload = err.to_dict()
        assert payload["code"] == code
        assert payload["kind"] == cls.__name__
        assert payload["hint"] == "try again"
        assert "network: rinkeby" in str(err)


class TestLogging:

    @pytest.fixture
    def fresh_logger(self):
        name = "splitter_deploy.test_logging"
        yield name
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_files_go_to_log_dir(self, fresh_logger, tmp_path, monkeypatch):
        monkeypatch.setenv("SPLITTER_LOG_DIR", str(tmp_path / "logs"))
        logger = setup_logger(fresh_logger, console=False)
        logger.error("deployment failed")
        for handler in logger.handlers:
            handler.flush()
        assert "deployment failed" in (tmp_path / "logs" / f"{fresh_logger}.log").read_text()
        assert "deployment failed" in (tmp_path / "logs" / f"{fresh_logger}_errors.log").read_text()

    def test_console_only(self, fresh_logger, tmp_path, monkeypatch):
        monkeypatch.setenv("SPLITTER_LOG_DIR", str(tmp_path / "logs"))
        logger = setup_logger(fresh_logger, files=False)
        assert len(logger.handlers) == 1
        assert not (tmp_path / "logs").exists()

    def test_handlers_are_not_duplicated(self, fresh_logger):
        setup_logger(fresh_logger, files=False)
        logger = setup_logger(fresh_logger, level=logging.DEBUG, files=False)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
