from __future__ import annotations

import sys
from pathlib import Path

import pytest
import yaml

from skittle.utils import import_module, load_module_from_path, public_members, read_yaml


class TestReadYaml:
    def test_reads_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "data.yaml"
        path.write_text("a: 1\nb: [x, y]\n", encoding="utf-8")

        assert read_yaml(path) == {"a": 1, "b": ["x", "y"]}

    def test_missing_file_returns_default(self, tmp_path: Path) -> None:
        assert read_yaml(tmp_path / "nope.yaml", default={}) == {}

    def test_missing_file_raises_when_requested(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_yaml(tmp_path / "nope.yaml", raise_on_error=True)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n", encoding="utf-8")

        assert read_yaml(path, default="fallback") == "fallback"
        with pytest.raises(yaml.YAMLError):
            read_yaml(path, raise_on_error=True)

    def test_empty_document_is_default(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert read_yaml(path, default={}) == {}


class TestModuleLoading:
    def test_each_load_is_a_fresh_module(self, tmp_path: Path) -> None:
        path = tmp_path / "mod.py"
        path.write_text("VALUE = 1\n", encoding="utf-8")
        first = load_module_from_path(path)

        path.write_text("VALUE = 2\n", encoding="utf-8")
        second = load_module_from_path(path)

        assert (first.VALUE, second.VALUE) == (1, 2)
        assert first.__name__ != second.__name__

    def test_errors_propagate(self, tmp_path: Path) -> None:
        path = tmp_path / "boom.py"
        path.write_text("raise RuntimeError('boom')\n", encoding="utf-8")

        with pytest.raises(RuntimeError, match="boom"):
            load_module_from_path(path)

    def test_import_by_path_or_dotted_name(self, tmp_path: Path) -> None:
        path = tmp_path / "helpers_mod.py"
        path.write_text("X = 'x'\n", encoding="utf-8")

        assert import_module(str(path)).X == "x"
        assert import_module("skittle.core.escaping").escape("<") == "&lt;"


def test_public_members_filters_private_classes_and_modules(tmp_path: Path) -> None:
    path = tmp_path / "mixed.py"
    path.write_text(
        "from __future__ import annotations\n"
        "import os\n"
        "class Helper:\n"
        "    pass\n"
        "def uri(p):\n"
        "    return p\n"
        "_hidden = 1\n"
        "NOTHING = None\n"
        "site = Helper()\n",
        encoding="utf-8",
    )

    members = public_members(load_module_from_path(path))

    assert sorted(members) == ["site", "uri"]


def test_public_members_honours_all(tmp_path: Path) -> None:
    path = tmp_path / "exported.py"
    path.write_text("__all__ = ['a']\na = 1\nb = 2\n", encoding="utf-8")

    assert public_members(load_module_from_path(path)) == {"a": 1}


def test_loads_source_with_any_suffix(tmp_path: Path) -> None:
    path = tmp_path / "outer.tmpl"
    path.write_text("def render(ctx):\n    return 'ok'\n", encoding="utf-8")

    module = load_module_from_path(path)

    assert module.render(None) == "ok"


def test_dataclasses_with_postponed_annotations(tmp_path: Path) -> None:
    path = tmp_path / "site_helpers.py"
    path.write_text(
        "from __future__ import annotations\n"
        "from dataclasses import dataclass\n"
        "@dataclass\n"
        "class Uri:\n"
        "    base: str\n"
        "uri = Uri('/')\n",
        encoding="utf-8",
    )

    module = load_module_from_path(path)

    assert module.uri.base == "/"
    assert module.__name__ not in sys.modules
