#!/usr/bin/env python3
"""A utility for running datapoint store commands using a CLI."""

import argparse
import sys

from dpstore.bin.api import init_parser as init_api_parser
from dpstore.bin.api import main as api_main
from dpstore.bin.check import init_parser as init_check_parser
from dpstore.bin.check import main as check_main


def init_parser():
    parser = argparse.ArgumentParser(prog="dpstore")
    commands = parser.add_subparsers(title="commands", required=True, dest="command")

    api_parser = commands.add_parser("api", help="Run the datapoint store API using uvicorn.")
    init_api_parser(api_parser)

    check_parser = commands.add_parser(
        "check",
        help="Check configuration files for errors.",
        description="Load configuration from given directory and check its validity. "
        "When configuration is OK, program exits immediately with status code 0, "
        "otherwise it prints error messages on stderr and exits with non-zero status.",
    )
    init_check_parser(check_parser)
    return parser


def run():
    parser = init_parser()
    args = parser.parse_args()

    if args.command == "api":
        api_main(args)
    elif args.command == "check":
        sys.exit(check_main(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    run()
