import sys
import textwrap
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'skittle'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from skittle.core.engine import RenderEngine  # noqa: E402

_SKITTLE_ENV = (
    "SKITTLE_PATH",
    "SKITTLE_PATHS",
    "SKITTLE_PREPEND_PATHS",
    "SKITTLE_APPEND_PATHS",
    "SKITTLE_DOT_PATH",
    "SKITTLE_SEARCH_PATH_ENV",
    "SKITTLE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_skittle_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never see SKITTLE_* variables from the developer's shell."""
    for name in _SKITTLE_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def templates(tmp_path: Path) -> Path:
    path = tmp_path / "templates"
    path.mkdir()
    return path


@pytest.fixture
def write_fragment(templates: Path):
    """Write a fragment file (dedented) and return its path.

    Usage:
        write_fragment("page.py", r'''
            def render(ctx):
                ctx.write("hi\\n")
        ''')
    """

    def _write(name: str, body: str, directory: Path | None = None) -> Path:
        path = (directory or templates) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(body).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def engine(templates: Path) -> RenderEngine:
    return RenderEngine([templates])
