#!/usr/bin/env python3
"""
Deploy the Splitter contract, then verify it on public networks.

Usage:
    python scripts/deploy_splitter.py --network hardhat
    python scripts/deploy_splitter.py --network rinkeby [--variant plain]
"""
import sys

from splitter_deploy.setup.cli import main as cli_main


def main():
    sys.exit(cli_main(["deploy", *sys.argv[1:]]))


if __name__ == "__main__":
    main()
