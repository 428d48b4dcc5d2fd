"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag pointing at a YAML configuration file."""
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to a skittle YAML configuration file",
    )


def add_search_path_flags(parser: argparse.ArgumentParser) -> None:
    """Add --path/--prepend/--append template directory flags."""
    parser.add_argument(
        "--path",
        "-p",
        dest="paths",
        action="append",
        default=[],
        help="Template directory searched ahead of the configured paths (repeatable, in order)",
    )
    parser.add_argument(
        "--prepend",
        dest="prepend_paths",
        action="append",
        default=[],
        help="Directory searched before the configured paths (repeatable)",
    )
    parser.add_argument(
        "--append",
        dest="append_paths",
        action="append",
        default=[],
        help="Directory searched after the configured paths (repeatable)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every command."""
    add_config_flag(parser)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (overrides the configured log_level)",
    )
