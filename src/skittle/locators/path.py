"""Directory-list resource locator."""
from __future__ import annotations

import os
from typing import Iterable, List, Optional

from .base import PathLike, ResourceLocator


def _normalize(paths: Optional[Iterable[PathLike]]) -> List[str]:
    if paths is None:
        return []
    if isinstance(paths, (str, os.PathLike)):
        paths = [paths]
    return [os.fspath(p) for p in paths]


class PathResourceLocator(ResourceLocator):
    """Search a fixed list of directories.

    Search order: ``dot_path`` (when set), then prepended paths, the primary
    paths, and finally appended paths.
    """

    def __init__(
        self,
        dot_path: Optional[PathLike] = None,
        paths: Optional[Iterable[PathLike]] = None,
        prepended_paths: Optional[Iterable[PathLike]] = None,
        appended_paths: Optional[Iterable[PathLike]] = None,
    ) -> None:
        self.dot_path = os.fspath(dot_path) if dot_path is not None else None
        self._paths = _normalize(paths)
        self.prepended_paths = _normalize(prepended_paths)
        self.appended_paths = _normalize(appended_paths)

    def primary_paths(self) -> List[str]:
        return list(self._paths)

    def paths(self) -> List[str]:
        ordered: List[str] = []
        if self.dot_path:
            ordered.append(self.dot_path)
        ordered.extend(self.prepended_paths)
        ordered.extend(self.primary_paths())
        ordered.extend(self.appended_paths)
        return ordered

    def prepend_path(self, path: PathLike) -> None:
        """Search ``path`` before every previously prepended path."""
        self.prepended_paths.insert(0, os.fspath(path))

    def append_path(self, path: PathLike) -> None:
        """Search ``path`` after every previously appended path."""
        self.appended_paths.append(os.fspath(path))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(paths={self.paths()!r})"


__all__ = ["PathResourceLocator"]
