#!/usr/bin/env python3
"""
Verify an already deployed Splitter contract on the block explorer.

Usage:
    python scripts/verify_splitter.py --network rinkeby --address 0x...
    python scripts/verify_splitter.py --network rinkeby   # latest recorded deployment
"""
import sys

from splitter_deploy.setup.cli import main as cli_main


def main():
    sys.exit(cli_main(["verify", *sys.argv[1:]]))


if __name__ == "__main__":
    main()
