"""Dynamic module loading.

Fragments and helper modules are plain Python files. They are loaded from disk
on every request under a fresh module name, and are not left in ``sys.modules``,
so edits to a fragment are picked up by the next render.
"""
from __future__ import annotations

import __future__
import importlib
import importlib.machinery
import importlib.util
import logging
import sys
from itertools import count
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Tuple, Union

logger = logging.getLogger(__name__)

_sequence = count()


def load_module_from_path(
    path: Union[str, Path],
    namespace: str = "skittle.dynamic",
) -> ModuleType:
    """Load a Python source file as a fresh module, whatever its suffix.

    Args:
        path: Path to the Python source file
        namespace: Module namespace prefix for the loaded module

    Returns:
        The executed module

    Raises:
        ImportError: If no loader can be built for ``path``.
        Exception: Anything raised while executing the module body.
    """
    path = Path(path)
    # A unique suffix keeps recursive loads of the same file independent.
    module_name = f"{namespace}.{path.stem}_{next(_sequence)}"
    # An explicit loader lets fragments use suffixes other than .py.
    loader = importlib.machinery.SourceFileLoader(module_name, str(path))
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {path}")
    module = importlib.util.module_from_spec(spec)
    # Registered only while executing; dataclasses resolves its own module here.
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    finally:
        sys.modules.pop(module_name, None)
    logger.debug("Loaded module %s from %s", module_name, path)
    return module


def import_module(dotted: str) -> ModuleType:
    """Import a module by dotted name or, for ``*.py`` values, by file path."""
    if dotted.endswith(".py"):
        return load_module_from_path(dotted, "skittle.helpers")
    return importlib.import_module(dotted)


def public_members(
    module: ModuleType,
    exclude_prefixes: Tuple[str, ...] = ("_",),
) -> Dict[str, Any]:
    """Return the public, non-class, non-module attributes of ``module``.

    Names listed in ``__all__`` take precedence when the module defines it.
    """
    names = getattr(module, "__all__", None)
    if names is None:
        names = [n for n in dir(module) if not any(n.startswith(p) for p in exclude_prefixes)]

    members: Dict[str, Any] = {}
    for name in names:
        obj = getattr(module, name, None)
        if obj is None or isinstance(obj, (type, ModuleType, __future__._Feature)):
            continue
        members[name] = obj
    return members


__all__ = ["load_module_from_path", "import_module", "public_members"]
