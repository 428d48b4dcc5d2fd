"""Helper registry: lazy, cached helper lookup across ordered mappings.

Helpers are resolved by asking each registered mapping in registration order;
the first mapping that returns something other than ``None`` wins and the
result is cached for the lifetime of the registry.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from skittle.exceptions import HelperConflictError, HelperMappingError, HelperNotFoundError

from .mappings import HelperMapping, is_helper_mapping

logger = logging.getLogger(__name__)


class HelperRegistry:
    """Ordered helper mappings plus a cache of resolved helpers.

    Usage:
        registry = HelperRegistry()
        registry.add_helper_mapping(DictHelperMapping({"uri": UriHelper()}))
        registry.add_helper("u", "uri")   # expose the uri helper as ``u``
        registry.helper("uri")            # cached UriHelper instance

    Not safe for concurrent use; callers sharing a registry across threads
    must synchronize access themselves.
    """

    def __init__(self, mappings: Optional[Iterable[HelperMapping]] = None) -> None:
        self._mappings: List[HelperMapping] = []
        self._cache: Dict[str, Any] = {}
        if mappings is not None:
            self.add_helper_mappings(mappings)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_helper(self, bound_name: str, helper_name: Optional[str] = None) -> Any:
        """Resolve a helper now and bind it under ``bound_name``.

        Bound helpers are part of every fragment's base scope. ``helper_name``
        lets a helper be exposed under a shorter alias:

            registry.add_helper("u", "uri")

        Raises:
            HelperNotFoundError: If no mapping provides ``helper_name``.
            HelperConflictError: If ``bound_name`` is already bound to another object.
        """
        if helper_name is None:
            helper_name = bound_name
        helper = self.helper(helper_name)
        self._store(bound_name, helper)
        return helper

    def add_helper_mapping(self, mapping: HelperMapping) -> None:
        """Append a single helper mapping."""
        self.add_helper_mappings([mapping])

    def add_helper_mappings(self, mappings: Any) -> None:
        """Append helper mappings, keeping registration order.

        Every mapping is checked before any is added, so a malformed entry
        leaves the registry unchanged.
        """
        if is_helper_mapping(mappings):
            mappings = [mappings]
        try:
            candidates = list(mappings)
        except TypeError:
            raise HelperMappingError(
                f"Expected a helper mapping or an iterable of them, got {type(mappings).__name__}"
            ) from None

        for mapping in candidates:
            if not is_helper_mapping(mapping):
                raise HelperMappingError(
                    f"{type(mapping).__name__} does not provide get_helper() and get_helper_names()",
                    context={"mapping": repr(mapping)},
                )
        self._mappings.extend(candidates)
        logger.debug("Registered %d helper mapping(s)", len(candidates))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def helper(self, name: str, fail_on_missing: bool = True) -> Optional[Any]:
        """Get a helper by name.

        A cached helper is returned as-is. Otherwise each mapping is asked in
        registration order and the first non-None result is cached.

        Args:
            name: Name of the helper
            fail_on_missing: Raise when no mapping provides the helper

        Returns:
            The helper, or None when missing and ``fail_on_missing`` is False

        Raises:
            HelperNotFoundError: Missing helper with ``fail_on_missing`` set.
        """
        if name in self._cache:
            return self._cache[name]

        for mapping in self._mappings:
            found = mapping.get_helper(name)
            if found is not None:
                logger.debug("Resolved helper %r from %r", name, mapping)
                self._store(name, found)
                return found

        if fail_on_missing:
            raise HelperNotFoundError(name, context={"mappings": len(self._mappings)})
        return None

    def all_helpers(self) -> Dict[str, Any]:
        """Resolve and return every helper every mapping advertises.

        This forces creation of helpers that might otherwise never be used,
        so it can be expensive. Name collisions resolve the same way
        ``helper()`` does: the first registered mapping wins.
        """
        resolved: Dict[str, Any] = {}
        for mapping in self._mappings:
            for name in mapping.get_helper_names():
                if name in resolved:
                    continue
                helper = self.helper(name, fail_on_missing=False)
                if helper is not None:
                    resolved[name] = helper
        return resolved

    def snapshot(self) -> Dict[str, Any]:
        """Shallow copy of the helper cache."""
        return dict(self._cache)

    @property
    def mappings(self) -> Tuple[HelperMapping, ...]:
        return tuple(self._mappings)

    @property
    def names(self) -> List[str]:
        """Names currently cached."""
        return list(self._cache)

    def _store(self, name: str, helper: Any) -> None:
        existing = self._cache.get(name, _MISSING)
        if existing is _MISSING:
            self._cache[name] = helper
        elif existing is not helper:
            raise HelperConflictError(name)

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._cache))


_MISSING = object()


__all__ = ["HelperRegistry"]
