"""Resource locators: map logical template names to files on disk."""
from __future__ import annotations

import os
from typing import Any

from .base import PathLike, ResourceLocator
from .classpath import DEFAULT_ENV_VAR, ClasspathResourceLocator
from .path import PathResourceLocator


def build_locator(spec: Any = None) -> ResourceLocator:
    """Build a locator from construction-time configuration.

    - ``None``: a ``ClasspathResourceLocator``
    - a ``ResourceLocator``: returned as-is
    - a single path: a ``PathResourceLocator`` over that directory
    - an iterable of paths: a ``PathResourceLocator`` over them, in order
    """
    if spec is None:
        return ClasspathResourceLocator()
    if isinstance(spec, ResourceLocator):
        return spec
    if isinstance(spec, (str, os.PathLike)):
        return PathResourceLocator(paths=[spec])
    try:
        paths = list(spec)
    except TypeError:
        raise TypeError(
            f"Expected a ResourceLocator, a path or a list of paths, got {type(spec).__name__}"
        ) from None
    return PathResourceLocator(paths=paths)


__all__ = [
    "ResourceLocator",
    "PathResourceLocator",
    "ClasspathResourceLocator",
    "DEFAULT_ENV_VAR",
    "PathLike",
    "build_locator",
]
