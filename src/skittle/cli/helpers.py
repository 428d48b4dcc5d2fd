from __future__ import annotations

import argparse
import json
import sys

from skittle.cli._args import add_json_flag, add_standard_flags
from skittle.core.engine import RenderEngine

SUMMARY = "List every helper the configured helper modules provide"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    engine = RenderEngine.from_config(args.skittle_config)
    # Resolves every helper; acceptable for an inspection command.
    helpers = engine.all_helpers()
    rows = {name: type(obj).__name__ for name, obj in sorted(helpers.items())}

    if args.json:
        sys.stdout.write(json.dumps({"helpers": rows}, indent=2, sort_keys=True) + "\n")
        return 0

    if not rows:
        sys.stdout.write("No helpers available.\n")
        return 0
    width = max(len(name) for name in rows)
    for name, kind in rows.items():
        sys.stdout.write(f"{name.ljust(width)}  {kind}\n")
    return 0
