#!/usr/bin/env python3
"""
Entry point for running scripts as a module.

Usage:
    python -m scripts                                   # Show available commands
    python -m scripts deploy_splitter --network hardhat
    python -m scripts verify_splitter --network rinkeby
"""
import sys


def main():
    """Main entry point for scripts module."""
    available_commands = {
        "deploy_splitter": "Deploy the Splitter contract (verifies on public networks)",
        "verify_splitter": "Verify a deployed Splitter on the block explorer",
    }

    if len(sys.argv) < 2:
        print("Usage: python -m scripts <command>")
        print("\nAvailable commands:")
        for cmd, desc in available_commands.items():
            print(f"  {cmd:30} - {desc}")
        print("\nExample: python -m scripts deploy_splitter --network hardhat")
        sys.exit(0)

    command = sys.argv[1]

    # Remove the command from argv so submodules see correct args
    sys.argv = [f"scripts.{command}"] + sys.argv[2:]

    if command == "deploy_splitter":
        from scripts.deploy_splitter import main as run
        run()
    elif command == "verify_splitter":
        from scripts.verify_splitter import main as run
        run()
    else:
        print(f"Unknown command: {command}")
        print("Run 'python -m scripts' to see available commands.")
        sys.exit(1)


if __name__ == "__main__":
    main()
