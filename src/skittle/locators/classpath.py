"""Resource locator backed by a process-wide search path."""
from __future__ import annotations

import os
import sys
from typing import Iterable, List, Optional

from .base import PathLike
from .path import PathResourceLocator

DEFAULT_ENV_VAR = "SKITTLE_PATH"


class ClasspathResourceLocator(PathResourceLocator):
    """Search the directories named by an environment variable.

    The variable is split on ``os.pathsep`` and read again on every lookup.
    When it is unset, ``sys.path`` is searched instead.
    """

    def __init__(
        self,
        dot_path: Optional[PathLike] = None,
        prepended_paths: Optional[Iterable[PathLike]] = None,
        appended_paths: Optional[Iterable[PathLike]] = None,
        env_var: str = DEFAULT_ENV_VAR,
    ) -> None:
        # No primary paths; they come from the environment.
        super().__init__(dot_path, None, prepended_paths, appended_paths)
        self.env_var = env_var

    def primary_paths(self) -> List[str]:
        raw = os.environ.get(self.env_var)
        if raw is None:
            return [p for p in sys.path if p]
        return [p for p in raw.split(os.pathsep) if p]


__all__ = ["ClasspathResourceLocator", "DEFAULT_ENV_VAR"]
