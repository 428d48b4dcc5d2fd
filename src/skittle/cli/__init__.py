"""
Skittle command line interface.

Each command lives in its own module exposing ``SUMMARY``,
``register_args(parser)`` and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from types import ModuleType
from typing import Dict, List, Optional

from skittle import __version__
from skittle.config import load_config
from skittle.exceptions import SkittleError

logger = logging.getLogger(__name__)

COMMANDS = ("render", "helpers")


def _load_commands() -> Dict[str, ModuleType]:
    return {name: importlib.import_module(f"skittle.cli.{name}") for name in COMMANDS}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skittle",
        description="Render nested template fragments.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    for name, module in _load_commands().items():
        sub = subparsers.add_parser(name, help=module.SUMMARY, description=module.SUMMARY)
        module.register_args(sub)
        sub.set_defaults(_func=module.main)
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the skittle CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if not getattr(args, "_func", None):
        parser.print_help()
        return 0

    try:
        args.skittle_config = load_config(args.config)
        configure_logging(args.log_level or args.skittle_config.log_level)
        return int(args._func(args) or 0)
    except SkittleError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        if getattr(args, "json", False):
            sys.stdout.write(json.dumps({"success": False, "error": exc.to_json_error()}) + "\n")
        else:
            sys.stderr.write(f"error: {exc}\n")
        return 1


__all__ = ["main", "build_parser", "configure_logging"]
