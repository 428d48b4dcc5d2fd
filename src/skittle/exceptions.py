from __future__ import annotations

from typing import Any, Dict, Mapping


class SkittleError(Exception):
    """Base exception for Skittle."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class TargetNotFoundError(SkittleError, LookupError):
    """Raised when a render target cannot be resolved.

    ``RenderEngine.render`` never raises this; a missing fragment degrades to an
    inline placeholder. It is raised by ``ResourceLocator.require``.
    """

    def __init__(self, target: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["target"] = target
        SkittleError.__init__(self, f"Could not locate template '{target}'", context=ctx)
        self.target = target


class HelperNotFoundError(SkittleError, LookupError):
    """Raised when no helper mapping provides a helper for a name."""

    def __init__(self, name: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["helper"] = name
        SkittleError.__init__(self, f'Could not locate helper named "{name}"', context=ctx)
        self.name = name


class HelperMappingError(SkittleError, TypeError):
    """Raised when an object registered as a helper mapping lacks the required methods."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SkittleError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


class HelperConflictError(SkittleError, ValueError):
    """Raised when a cached helper would be replaced by a different object."""

    def __init__(self, name: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["helper"] = name
        message = f'Helper "{name}" is already bound to a different object'
        SkittleError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.name = name


class FragmentExecutionError(SkittleError, RuntimeError):
    """Raised when a fragment body cannot be loaded or executed."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        SkittleError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


class ConfigError(SkittleError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SkittleError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "SkittleError",
    "TargetNotFoundError",
    "HelperNotFoundError",
    "HelperMappingError",
    "HelperConflictError",
    "FragmentExecutionError",
    "ConfigError",
]
