"""Helper mappings.

A helper mapping maps helper names to helper objects. Any given mapping must
be aware of the names of the helpers it is responsible for. Mappings are
duck-typed: anything with ``get_helper(name)`` and ``get_helper_names()``
qualifies, no base class required.
"""
from __future__ import annotations

from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol, Union, runtime_checkable

from skittle.utils.loader import import_module, load_module_from_path, public_members


@runtime_checkable
class HelperMapping(Protocol):
    """Capability set every helper mapping provides."""

    def get_helper(self, name: str) -> Optional[Any]:
        """Return the helper object for ``name`` or None."""
        ...

    def get_helper_names(self) -> Iterable[str]:
        """Return the names of the helpers this mapping can provide."""
        ...


def is_helper_mapping(obj: Any) -> bool:
    """Check that ``obj`` exposes callable ``get_helper`` and ``get_helper_names``."""
    return callable(getattr(obj, "get_helper", None)) and callable(
        getattr(obj, "get_helper_names", None)
    )


class DictHelperMapping:
    """Mapping over a fixed set of helper objects.

    Example:
        mapping = DictHelperMapping({"uri": UriHelper()})
    """

    def __init__(self, helpers: Optional[Mapping[str, Any]] = None, **extra: Any) -> None:
        self._helpers: Dict[str, Any] = {**(helpers or {}), **extra}

    def get_helper(self, name: str) -> Optional[Any]:
        return self._helpers.get(name)

    def get_helper_names(self) -> Iterable[str]:
        return list(self._helpers)

    def __repr__(self) -> str:
        return f"DictHelperMapping({sorted(self._helpers)!r})"


class FactoryHelperMapping:
    """Mapping that builds helpers on demand from zero-argument factories.

    Useful for helpers that are costly to create. Every call to ``get_helper``
    invokes the factory; the owning registry caches the first result.
    """

    def __init__(self, factories: Optional[Mapping[str, Callable[[], Any]]] = None) -> None:
        self._factories: Dict[str, Callable[[], Any]] = dict(factories or {})

    def register(self, name: str) -> Callable[[Callable[[], Any]], Callable[[], Any]]:
        """Decorator to register a factory.

        Usage:
            mapping = FactoryHelperMapping()

            @mapping.register("db")
            def make_db():
                return Database()
        """

        def decorator(factory: Callable[[], Any]) -> Callable[[], Any]:
            self._factories[name] = factory
            return factory

        return decorator

    def get_helper(self, name: str) -> Optional[Any]:
        factory = self._factories.get(name)
        if factory is None:
            return None
        return factory()

    def get_helper_names(self) -> Iterable[str]:
        return list(self._factories)


class ModuleHelperMapping:
    """Expose the public attributes of a Python module as helpers.

    Classes, submodules and private (``_``-prefixed) names are skipped; a
    module-level ``__all__`` restricts the exported names.
    """

    def __init__(self, module: ModuleType) -> None:
        self.module = module
        self._helpers = public_members(module)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ModuleHelperMapping":
        """Load the module from a ``.py`` file."""
        return cls(load_module_from_path(path, "skittle.helpers"))

    @classmethod
    def from_import(cls, dotted: str) -> "ModuleHelperMapping":
        """Import the module by dotted name (or file path ending in ``.py``)."""
        return cls(import_module(dotted))

    def get_helper(self, name: str) -> Optional[Any]:
        return self._helpers.get(name)

    def get_helper_names(self) -> Iterable[str]:
        return list(self._helpers)

    def __repr__(self) -> str:
        return f"ModuleHelperMapping({self.module.__name__!r})"


__all__ = [
    "HelperMapping",
    "is_helper_mapping",
    "DictHelperMapping",
    "FactoryHelperMapping",
    "ModuleHelperMapping",
]
