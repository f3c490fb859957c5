#!/usr/bin/env python3
"""fast-rules CLI - Laravel-style validation for JSON documents."""

import argparse
import sys

from fast_rules.utils.logging import setup_logging

from .validate_command import ValidateCommand
from .version_command import VersionCommand


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="fast-rules CLI - validate JSON documents against declarative rules",
        prog="fast-rules"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    commands = [
        ValidateCommand(),
        VersionCommand(),
    ]

    command_map = {}
    for command in commands:
        cmd_parser = subparsers.add_parser(command.name, help=command.help)
        command.configure_parser(cmd_parser)
        command_map[command.name] = command

    args = parser.parse_args(argv)

    if args.command in command_map:
        setup_logging()
        return command_map[args.command].execute(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
