#!/usr/bin/env python3
"""Command line entry point for deploying and verifying the Splitter.

Examples:
    splitter-deploy deploy --network hardhat
    splitter-deploy deploy --network rinkeby --variant plain
    splitter-deploy verify --network rinkeby --address 0xABC...
    splitter-deploy deployments --network rinkeby
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tabulate import tabulate

from splitter_deploy.config.env import DEFAULT_ENV_FILE, load_env_config
from splitter_deploy.config.logging_config import ROOT_LOGGER_NAME, get_cli_logger
from splitter_deploy.config.network import RECEIPT_TIMEOUT, RPC_TIMEOUT, NetworkProfile
from splitter_deploy.errors import SplitterDeployError, VerificationError
from splitter_deploy.helpers.contract_factory import DEFAULT_ARTIFACTS_DIR
from splitter_deploy.models import ContractVariant
from splitter_deploy.setup.deployment_records import DEPLOYMENTS_DIR, scan_records
from splitter_deploy.setup.runner import run_deployment, run_verification

logger = logging.getLogger(ROOT_LOGGER_NAME)


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--network", required=True, help="Target network (hardhat, rinkeby)")
    p.add_argument(
        "--variant",
        choices=[v.value for v in ContractVariant],
        default=ContractVariant.RELAYER.value,
        help="Splitter constructor: relayer=(relayerShare, payees, shares), plain=(payees, shares)",
    )
    p.add_argument("--env-file", default=DEFAULT_ENV_FILE, help="Path to .env file (default .env)")
    p.add_argument("--artifacts", default=DEFAULT_ARTIFACTS_DIR, help="Hardhat artifacts directory (default artifacts)")
    p.add_argument("--deployments-dir", default=str(DEPLOYMENTS_DIR), help="Where deployment records live (default deployments)")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def cmd_deploy(args: argparse.Namespace) -> int:
    config = load_env_config(args.env_file)
    outcome = run_deployment(
        args.network,
        config,
        ContractVariant(args.variant),
        artifacts_dir=args.artifacts,
        deployments_dir=None if args.no_record else Path(args.deployments_dir),
        rpc_timeout=args.rpc_timeout,
        receipt_timeout=args.timeout,
    )
    if outcome.verification_error is not None:
        logger.warning(
            "[%s] Deployment succeeded, verification did not: %s",
            outcome.verification_error.kind,
            outcome.result.address,
        )
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    config = load_env_config(args.env_file)
    run_verification(
        args.network,
        config,
        args.address,
        ContractVariant(args.variant),
        artifacts_dir=args.artifacts,
        deployments_dir=Path(args.deployments_dir),
    )
    return 0


def cmd_deployments(args: argparse.Namespace) -> int:
    network = NetworkProfile.parse(args.network).value if args.network else None
    records = scan_records(Path(args.deployments_dir), network)
    if not records:
        print("No deployments found")
        return 0
    headers = ["Network", "Variant", "Address", "Tx", "Block", "Deployed"]
    rows = [
        [r.network, r.variant, r.address, str(r.tx_hash or "")[:12] + "...", r.block_number, r.timestamp[:19]]
        for r in records
    ]
    print(tabulate(rows, headers=headers, tablefmt="grid"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deploy and verify the Splitter contract")
    sub = parser.add_subparsers(dest="cmd")

    p_deploy = sub.add_parser("deploy", help="Deploy a Splitter (and verify it on public networks)")
    _add_common(p_deploy)
    p_deploy.add_argument("--timeout", type=int, default=RECEIPT_TIMEOUT, help=f"Seconds to wait for the receipt (default {RECEIPT_TIMEOUT})")
    p_deploy.add_argument("--rpc-timeout", type=int, default=RPC_TIMEOUT, help=f"Per-request RPC timeout (default {RPC_TIMEOUT})")
    p_deploy.add_argument("--no-record", action="store_true", help="Do not write a deployment record")
    p_deploy.set_defaults(func=cmd_deploy)

    p_verify = sub.add_parser("verify", help="Verify a deployed Splitter on the block explorer")
    _add_common(p_verify)
    p_verify.add_argument("--address", help="Deployed address (default: latest recorded deployment)")
    p_verify.set_defaults(func=cmd_verify)

    p_list = sub.add_parser("deployments", help="List recorded deployments")
    p_list.add_argument("--network", help="Only this network")
    p_list.add_argument("--deployments-dir", default=str(DEPLOYMENTS_DIR))
    p_list.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    p_list.set_defaults(func=cmd_deployments)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    get_cli_logger(verbose=args.verbose)
    try:
        return int(args.func(args))
    except VerificationError as e:
        logger.error("[%s] Contract is deployed but unverified: %s", e.kind, e)
        return 1
    except SplitterDeployError as e:
        logger.error("[%s] %s", e.kind, e)
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
