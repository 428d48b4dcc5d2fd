"""
Skittle - nested template fragment composition

Skittle renders template fragments into text. Fragments include other
fragments, inherit their caller's data, and can export values to the
fragments they render later. Named helper objects are resolved lazily from
ordered helper mappings and exposed to every fragment.
"""
from __future__ import annotations

__version__ = "1.0.0"

from skittle.core import FragmentContext, RenderEngine, escape
from skittle.exceptions import (
    ConfigError,
    FragmentExecutionError,
    HelperConflictError,
    HelperMappingError,
    HelperNotFoundError,
    SkittleError,
    TargetNotFoundError,
)
from skittle.helpers import (
    DictHelperMapping,
    FactoryHelperMapping,
    HelperMapping,
    HelperRegistry,
    ModuleHelperMapping,
)
from skittle.locators import ClasspathResourceLocator, PathResourceLocator, ResourceLocator

__all__ = [
    "__version__",
    "RenderEngine",
    "FragmentContext",
    "escape",
    "HelperRegistry",
    "HelperMapping",
    "DictHelperMapping",
    "FactoryHelperMapping",
    "ModuleHelperMapping",
    "ResourceLocator",
    "PathResourceLocator",
    "ClasspathResourceLocator",
    "SkittleError",
    "TargetNotFoundError",
    "HelperNotFoundError",
    "HelperMappingError",
    "HelperConflictError",
    "FragmentExecutionError",
    "ConfigError",
]
