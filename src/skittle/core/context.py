"""Binding object handed to fragment bodies.

A fragment never sees an ambient namespace. It receives a ``FragmentContext``
exposing its scope as read-only data plus the engine operations it may call
back into (``render``, ``include``, ``export``, ``helper``, escaping).

A Python fragment looks like::

    def render(ctx):
        ctx.write("<ul>\\n")
        for item in ctx["items"]:
            ctx.include("item.py", {"this_item": item})
        ctx.write("</ul>\\n")
"""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional

from .escaping import escape as _escape
from .frames import Frame

if TYPE_CHECKING:
    from .engine import RenderEngine


class FragmentContext(Mapping[str, Any]):
    """Scope and engine access for one executing fragment."""

    def __init__(self, engine: "RenderEngine", frame: Frame) -> None:
        self.engine = engine
        self._frame = frame
        self.vars: Mapping[str, Any] = MappingProxyType(frame.data)

    @property
    def target(self) -> str:
        return self._frame.target

    @property
    def path(self) -> str:
        return self._frame.path

    # Mapping protocol over the scope
    def __getitem__(self, name: str) -> Any:
        return self.vars[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    # Output
    def write(self, text: Any) -> None:
        """Emit raw text."""
        self._frame.write("" if text is None else str(text))

    def p(self, value: Any, html_safe: bool = True) -> None:
        """Emit ``value``, escaped unless ``html_safe`` is False."""
        self._frame.write(_escape(value, html_safe))

    def escape(self, value: Any, html_safe: bool = True) -> str:
        return _escape(value, html_safe)

    g = escape

    def output(self) -> str:
        """Text emitted so far."""
        return self._frame.output()

    # Engine callbacks
    def render(self, target: Any, *data_args: Any, **data: Any) -> str:
        """Render another fragment and return its text without emitting it."""
        return self.engine.render(target, *data_args, **data)

    def include(self, target: Any, *data_args: Any, **data: Any) -> str:
        """Render another fragment and emit its text here."""
        return self.engine.include(target, *data_args, **data)

    def export(self, name: str, value: Any = None) -> Any:
        """Publish ``name`` to fragments rendered later from this one."""
        return self.engine.export(name, value)

    def helper(self, name: str, fail_on_missing: bool = True) -> Optional[Any]:
        return self.engine.helper(name, fail_on_missing)

    def __repr__(self) -> str:
        return f"FragmentContext(target={self.target!r}, vars={sorted(self.vars)!r})"


__all__ = ["FragmentContext"]
