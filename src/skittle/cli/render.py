from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml

from skittle.cli._args import add_search_path_flags, add_standard_flags
from skittle.config import SkittleConfig
from skittle.core.engine import RenderEngine
from skittle.exceptions import ConfigError
from skittle.utils.io import read_yaml

SUMMARY = "Render a template to stdout or a file"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    add_search_path_flags(parser)
    parser.add_argument("target", help="Logical template name (e.g. page.py)")
    parser.add_argument(
        "--data",
        "-d",
        action="append",
        default=[],
        help="YAML file with model data (repeatable, later files win)",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Model value; VALUE is parsed as YAML (repeatable, applied last)",
    )
    parser.add_argument("--output", "-o", help="Write output to this file instead of stdout")


def _parse_assignments(raw: List[str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Expected KEY=VALUE, got {item!r}")
        values[key] = yaml.safe_load(value) if value else ""
    return values


def _load_models(files: List[str]) -> List[Dict[str, Any]]:
    models: List[Dict[str, Any]] = []
    for name in files:
        try:
            data = read_yaml(Path(name), default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read model data {name}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Model data in {name} must be a mapping")
        models.append(data)
    return models


def _with_cli_paths(cfg: SkittleConfig, args: argparse.Namespace) -> SkittleConfig:
    def _abs(paths: List[str]) -> tuple:
        return tuple(str(Path(p).resolve()) for p in paths)

    return dataclasses.replace(
        cfg,
        paths=_abs(args.paths) + cfg.paths,
        prepend_paths=_abs(args.prepend_paths) + cfg.prepend_paths,
        append_paths=cfg.append_paths + _abs(args.append_paths),
    )


def main(args: argparse.Namespace) -> int:
    cfg = _with_cli_paths(args.skittle_config, args)
    engine = RenderEngine.from_config(cfg)

    models = _load_models(args.data)
    models.append(_parse_assignments(args.assignments))

    text = engine.render(args.target, *models)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        if text and not text.endswith("\n"):
            sys.stdout.write("\n")
    return 0
