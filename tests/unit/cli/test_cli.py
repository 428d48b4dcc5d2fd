"""Tests for the skittle command line."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from skittle.cli import build_parser, main


@pytest.fixture
def page(write_fragment) -> Path:
    return write_fragment(
        "page.py",
        r'''
        def render(ctx):
            ctx.write(f"{ctx.get('greeting', 'Hello')}, {ctx['name']}!\n")
        ''',
    )


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "render" in capsys.readouterr().out


def test_parser_lists_commands() -> None:
    parser = build_parser()
    args = parser.parse_args(["render", "page.py", "--path", "t", "--set", "a=1"])

    assert args.command == "render"
    assert args.paths == ["t"]
    assert args.assignments == ["a=1"]


def test_render_to_stdout(templates: Path, page: Path, capsys) -> None:
    code = main(["render", "page.py", "--path", str(templates), "--set", "name=World"])

    assert code == 0
    assert capsys.readouterr().out == "Hello, World!\n"


def test_render_with_data_files(templates: Path, page: Path, tmp_path: Path, capsys) -> None:
    first = tmp_path / "first.yaml"
    first.write_text("name: First\ngreeting: Hi\n", encoding="utf-8")
    second = tmp_path / "second.yaml"
    second.write_text("name: Second\n", encoding="utf-8")

    code = main(
        ["render", "page.py", "-p", str(templates), "-d", str(first), "-d", str(second)]
    )

    assert code == 0
    assert capsys.readouterr().out == "Hi, Second!\n"


def test_set_values_are_parsed_as_yaml(write_fragment, templates: Path, capsys) -> None:
    write_fragment(
        "types.py",
        r'''
        def render(ctx):
            ctx.write(type(ctx["n"]).__name__ + " " + type(ctx["flag"]).__name__)
        ''',
    )

    main(["render", "types.py", "-p", str(templates), "--set", "n=3", "--set", "flag=true"])

    assert capsys.readouterr().out == "int bool\n"


def test_render_to_file(templates: Path, page: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.txt"

    code = main(["render", "page.py", "-p", str(templates), "--set", "name=File", "-o", str(out)])

    assert code == 0
    assert out.read_text(encoding="utf-8") == "Hello, File!"


def test_render_missing_target_prints_placeholder(templates: Path, capsys) -> None:
    assert main(["render", "gone.py", "-p", str(templates)]) == 0
    assert capsys.readouterr().out == "<!-- include 'gone.py' not found -->\n"


def test_bad_assignment_is_an_error(templates: Path, page: Path, capsys) -> None:
    assert main(["render", "page.py", "-p", str(templates), "--set", "oops"]) == 1
    assert "KEY=VALUE" in capsys.readouterr().err


def test_missing_config_is_an_error(tmp_path: Path, capsys) -> None:
    assert main(["render", "page.py", "--config", str(tmp_path / "nope.yaml")]) == 1
    assert capsys.readouterr().err.startswith("error:")


def _helper_config(tmp_path: Path) -> Path:
    (tmp_path / "site_helpers.py").write_text(
        "def uri(path):\n"
        "    return '/' + path\n"
        "TITLE = 'Site'\n",
        encoding="utf-8",
    )
    config = tmp_path / "skittle.yaml"
    config.write_text("paths: [.]\nhelper_modules: [site_helpers.py]\n", encoding="utf-8")
    return config


def test_helpers_command_lists_helpers(tmp_path: Path, capsys) -> None:
    config = _helper_config(tmp_path)

    assert main(["helpers", "--config", str(config)]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["TITLE  str", "uri    function"]


def test_helpers_command_json(tmp_path: Path, capsys) -> None:
    config = _helper_config(tmp_path)

    assert main(["helpers", "-c", str(config), "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == {"helpers": {"TITLE": "str", "uri": "function"}}


def test_helpers_command_without_helpers(capsys) -> None:
    assert main(["helpers"]) == 0
    assert capsys.readouterr().out == "No helpers available.\n"


def test_json_errors(tmp_path: Path, capsys) -> None:
    assert main(["helpers", "--json", "-c", str(tmp_path / "nope.yaml")]) == 1

    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is False
    assert payload["error"]["code"] == "ConfigError"


def test_cli_paths_take_precedence_over_config(tmp_path: Path, capsys) -> None:
    configured = tmp_path / "configured"
    override = tmp_path / "override"
    for d in (configured, override):
        d.mkdir()
        (d / "item.txt").write_text(f"{d.name}\n", encoding="utf-8")
    config = tmp_path / "skittle.yaml"
    config.write_text("paths: [configured]\n", encoding="utf-8")

    assert main(["render", "item.txt", "-c", str(config), "-p", str(override)]) == 0
    assert capsys.readouterr().out == "override\n"
