"""Shared utilities (YAML IO and dynamic module loading)."""
from __future__ import annotations

from .io import read_yaml
from .loader import import_module, load_module_from_path, public_members

__all__ = ["read_yaml", "import_module", "load_module_from_path", "public_members"]
