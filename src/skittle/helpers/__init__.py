"""Helper mappings and the helper registry."""
from __future__ import annotations

from .mappings import (
    DictHelperMapping,
    FactoryHelperMapping,
    HelperMapping,
    ModuleHelperMapping,
    is_helper_mapping,
)
from .registry import HelperRegistry

__all__ = [
    "HelperMapping",
    "HelperRegistry",
    "DictHelperMapping",
    "FactoryHelperMapping",
    "ModuleHelperMapping",
    "is_helper_mapping",
]
