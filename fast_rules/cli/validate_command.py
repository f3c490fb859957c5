"""Validate a JSON document against a JSON rule file."""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from fast_rules.config import get_default_config
from fast_rules.validator import Validator

from .command_base import CommandBase


def _read_json(path: str) -> Any:
    with Path(path).open(encoding="utf-8") as f:
        return json.load(f)


class ValidateCommand(CommandBase):
    """Command to validate an input file."""

    @property
    def name(self) -> str:
        return "validate"

    @property
    def help(self) -> str:
        return "Validate a JSON input file against a JSON rules file"

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("input", help="Path to the JSON document to validate")
        parser.add_argument("rules", help="Path to the JSON rules file, e.g. {\"name\": \"required\"}")
        parser.add_argument("--messages", help="Path to a JSON file with custom messages")
        parser.add_argument("--attributes", help="Path to a JSON file with attribute display names")
        parser.add_argument("--lang", help="Message catalog language (default: FAST_RULES_LANG or en)")
        parser.add_argument("--stop-on-error", action="store_true", help="Stop at the first failure of each attribute")

    def execute(self, args: argparse.Namespace) -> int:
        config = get_default_config()
        if args.lang:
            config = config.with_options(lang=args.lang)
        if args.stop_on_error:
            config = config.with_options(stop_on_error=True)

        validator = Validator(
            _read_json(args.input),
            _read_json(args.rules),
            _read_json(args.messages) if args.messages else None,
            config=config,
        )
        if args.attributes:
            validator.set_attribute_names(_read_json(args.attributes))

        if validator.has_async:
            passed = asyncio.run(validator.validate_async())
        else:
            passed = validator.check()

        logging.info(f"[CLI] Validated {args.input}: passed={passed}, errors={validator.error_count}")
        print(json.dumps({"passed": passed, "errors": validator.errors.all()}, indent=2, ensure_ascii=False))
        return 0 if passed else 1
