#!/usr/bin/env python3
"""Function deploy tools: CLI entrypoint."""

import argparse

from fxdeploy.commands.function import register_function_command
from fxdeploy.logging_setup import setup_cli_logging


def main():
    parser = argparse.ArgumentParser(description="Deploy functions to a function gateway")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_function_command(subparsers)

    args = parser.parse_args()
    setup_cli_logging(debug=args.debug)
    args.func(args)


if __name__ == "__main__":
    main()
