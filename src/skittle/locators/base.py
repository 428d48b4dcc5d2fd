"""Resource locator contract."""
from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from skittle.exceptions import TargetNotFoundError

PathLike = Union[str, Path]


class ResourceLocator(ABC):
    """Maps a logical template name to a loadable file.

    Implementations search an ordered list of directories and return the first
    existing match, or ``None`` when nothing matches.
    """

    @abstractmethod
    def paths(self) -> List[str]:
        """Ordered search directories."""
        ...

    def find(self, target: PathLike, real_path: bool = False) -> Optional[str]:
        """Find a target file.

        Args:
            target: Logical template name (relative) or absolute path
            real_path: Return the canonical path with symlinks resolved

        Returns:
            Path of the first match, or None if not found
        """
        target = os.fspath(target)
        if os.path.isabs(target):
            return self._found(target, real_path) if os.path.isfile(target) else None

        for directory in self.paths():
            if not directory:
                continue
            candidate = os.path.join(directory, target)
            if os.path.isfile(candidate):
                return self._found(candidate, real_path)
        return None

    def require(self, target: PathLike, real_path: bool = False) -> str:
        """Like ``find`` but raise ``TargetNotFoundError`` instead of returning None."""
        found = self.find(target, real_path=real_path)
        if found is None:
            raise TargetNotFoundError(os.fspath(target), context={"paths": self.paths()})
        return found

    @staticmethod
    def _found(path: str, real_path: bool) -> str:
        return os.path.realpath(path) if real_path else path


__all__ = ["ResourceLocator", "PathLike"]
