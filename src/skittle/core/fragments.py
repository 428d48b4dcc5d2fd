"""Fragment executors.

An executor runs one fragment body against a ``FragmentContext``. Text may be
emitted through ``ctx.write()`` and friends, returned, or both; written text
comes first. The ``FragmentRunner`` picks an executor by file suffix.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from skittle.exceptions import FragmentExecutionError
from skittle.utils.loader import load_module_from_path

from .context import FragmentContext

logger = logging.getLogger(__name__)


class FragmentExecutor(ABC):
    """Executes a fragment file."""

    @abstractmethod
    def execute(self, path: str, context: FragmentContext) -> Optional[str]:
        """Run the fragment at ``path``.

        Args:
            path: Real path of the fragment
            context: Bindings and engine access for the fragment

        Returns:
            Extra text to append after anything written to ``context``, or None
        """
        ...

    def get_name(self) -> str:
        """Get executor name for logging/debugging."""
        return self.__class__.__name__


class PythonFragmentExecutor(FragmentExecutor):
    """Run ``.py`` fragments.

    The module is loaded fresh from disk each time and its ``render(ctx)``
    function is called.
    """

    entrypoint = "render"

    def execute(self, path: str, context: FragmentContext) -> Optional[str]:
        try:
            module = load_module_from_path(path, "skittle.fragments")
        except Exception as exc:
            raise FragmentExecutionError(f"Failed to load fragment {path}: {exc}", path=path) from exc

        func = getattr(module, self.entrypoint, None)
        if not callable(func):
            raise FragmentExecutionError(
                f"Fragment {path} does not define {self.entrypoint}(ctx)", path=path
            )
        result = func(context)
        return None if result is None else str(result)


class TextFragmentExecutor(FragmentExecutor):
    """Emit the fragment file's contents verbatim."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def execute(self, path: str, context: FragmentContext) -> Optional[str]:
        # newline="" keeps \r\n intact for output normalization.
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except UnicodeDecodeError as exc:
            raise FragmentExecutionError(
                f"Failed to read fragment {path} as {self.encoding}: {exc}", path=path
            ) from exc


class FragmentRunner:
    """Suffix-based dispatch to fragment executors.

    Usage:
        runner = FragmentRunner()
        runner.register(".md", TextFragmentExecutor())
    """

    def __init__(
        self,
        executors: Optional[Dict[str, FragmentExecutor]] = None,
        default: Optional[FragmentExecutor] = None,
    ) -> None:
        if executors is None:
            executors = {".py": PythonFragmentExecutor()}
        self._executors: Dict[str, FragmentExecutor] = {}
        for suffix, executor in executors.items():
            self.register(suffix, executor)
        self.default = default or TextFragmentExecutor()

    def register(self, suffix: str, executor: FragmentExecutor) -> None:
        """Use ``executor`` for files ending in ``suffix`` (case-insensitive)."""
        if not suffix.startswith("."):
            suffix = f".{suffix}"
        self._executors[suffix.lower()] = executor

    def executor_for(self, path: str) -> FragmentExecutor:
        return self._executors.get(Path(path).suffix.lower(), self.default)

    def run(self, path: str, context: FragmentContext) -> Optional[str]:
        executor = self.executor_for(path)
        logger.debug("Executing %s with %s", path, executor.get_name())
        return executor.execute(path, context)


__all__ = [
    "FragmentExecutor",
    "PythonFragmentExecutor",
    "TextFragmentExecutor",
    "FragmentRunner",
]
