"""Render engine for nested template fragments.

The engine renders a fragment into a string. Fragments may render further
fragments through the same engine, and every level receives a scope built by
merging, from lowest to highest precedence:

1. HELPERS        - every helper cached in the helper registry
2. INHERITED DATA - the scope of the enclosing render, if any
3. DATA ARGUMENTS - each mapping passed to ``render()``, in call order
4. EXPORTED DATA  - values the enclosing render published with ``export()``

Exported data is applied last and therefore overrides explicit arguments. A
fragment that calls ``export("flag", True)`` and then renders a child with
``{"flag": False}`` hands the child ``flag=True``. This is long-standing
behavior that templates rely on; it is not a merge-order accident.

Unresolvable targets do not raise. They render as an inline HTML comment so a
partially broken page stays debuggable:

    <!-- include 'missing.tmpl' not found -->
"""
from __future__ import annotations

import logging
import os
import warnings
from typing import Any, Dict, List, Mapping, Optional

from skittle.helpers.registry import HelperRegistry
from skittle.locators import ResourceLocator, build_locator

from .context import FragmentContext
from .escaping import escape as _escape
from .fragments import FragmentRunner
from .frames import Frame, FrameStack

logger = logging.getLogger(__name__)

NOT_FOUND_TEMPLATE = "<!-- include '{target}' not found -->\n"

# Key under which compose() hands the rendered body to the shell.
RENDERED_BODY_KEY = "rendered_body"


def strip_trailing_newline(text: str) -> str:
    """Remove exactly one trailing ``\\r\\n``, ``\\n`` or ``\\r``."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


def _collect_data_args(data_args: tuple, data: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    # A single list/tuple of mappings stands in for the variadic form.
    if len(data_args) == 1 and isinstance(data_args[0], (list, tuple)):
        data_args = tuple(data_args[0])

    collected: List[Mapping[str, Any]] = []
    for arg in data_args:
        if arg is None:
            continue
        if not isinstance(arg, Mapping):
            raise TypeError(f"Model data must be a mapping, got {type(arg).__name__}")
        collected.append(arg)
    if data:
        collected.append(data)
    return collected


class RenderEngine:
    """Render fragments with a stacked, merged scope.

    Usage:
        engine = RenderEngine(["templates", "shared/templates"])
        engine.add_helper_mapping(DictHelperMapping({"uri": UriHelper()}))
        engine.add_helper("uri")
        html = engine.render("page.py", {"title": "Hello"})

    Args:
        locator: A ``ResourceLocator``, a directory or list of directories, or
            None for a ``ClasspathResourceLocator``
        helpers: Helper registry owned by this engine (a new one by default)
        runner: Fragment executor dispatch (Python + text by default)
    """

    def __init__(
        self,
        locator: Any = None,
        *,
        helpers: Optional[HelperRegistry] = None,
        runner: Optional[FragmentRunner] = None,
    ) -> None:
        self.locator: ResourceLocator = build_locator(locator)
        self.helpers = helpers if helpers is not None else HelperRegistry()
        self.runner = runner or FragmentRunner()
        self._stack = FrameStack()

    @classmethod
    def from_config(cls, config: "SkittleConfig", **kwargs: Any) -> "RenderEngine":  # noqa: F821
        """Build an engine from a loaded ``SkittleConfig``."""
        from skittle.config import apply_config

        return apply_config(config, **kwargs)

    # ------------------------------------------------------------------
    # Frame state
    # ------------------------------------------------------------------
    @property
    def depth(self) -> int:
        """Number of renders currently in progress."""
        return len(self._stack)

    @property
    def current_frame(self) -> Optional[Frame]:
        return self._stack.current

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, target: Any, *data_args: Any, **data: Any) -> str:
        """Render a fragment into a string.

        Args:
            target: Logical fragment name passed to the locator
            *data_args: Mappings of model data, later ones override earlier ones
            **data: Extra model data applied after ``data_args``

        Returns:
            Rendered text with one trailing line terminator removed, or the
            not-found placeholder when ``target`` cannot be resolved
        """
        target_name = os.fspath(target)
        models = _collect_data_args(data_args, data)

        scope: Dict[str, Any] = self.helpers.snapshot()
        inherited = self._stack.current_data
        if inherited is not None:
            scope.update(inherited)
        for model in models:
            scope.update(model)

        real_path = self.locator.find(target_name, real_path=True)
        if not real_path or not os.path.isfile(real_path):
            logger.warning("Template %r not found in %s", target_name, self.locator.paths())
            return NOT_FOUND_TEMPLATE.format(target=target_name)

        # Copy so later exports by the enclosing render cannot reach this frame.
        scope.update(dict(self._stack.current_exported))

        frame = Frame(target=target_name, path=real_path, data=scope)
        self._stack.push(frame)
        logger.debug("Rendering %s (depth %d)", real_path, len(self._stack))
        try:
            returned = self.runner.run(real_path, FragmentContext(self, frame))
            if returned:
                frame.write(returned)
        finally:
            self._stack.pop()

        return strip_trailing_newline(frame.output())

    def include(self, target: Any, *data_args: Any, **data: Any) -> str:
        """Render ``target`` and write it into the calling fragment's output.

        Outside of any render the text is only returned.
        """
        text = self.render(target, *data_args, **data)
        frame = self._stack.current
        if frame is not None:
            frame.write(text)
        return text

    def export(self, name: str, value: Any = None) -> Any:
        """Publish a value to fragments rendered later at this level.

        Usage (inside a fragment):
            foo = ctx.export("foo", "Hello World!")

        Called outside of any render, the value is held for the next
        top-level render.
        """
        self._stack.current_exported[name] = value
        return value

    def compose(self, shell: Any, body: Any, model: Optional[Mapping[str, Any]] = None) -> str:
        """Render ``body``, then render ``shell`` around it.

        The shell receives the model plus the rendered body under
        ``rendered_body``:

            def render(ctx):
                ctx.write("<html><body>")
                ctx.write(ctx["rendered_body"])
                ctx.write("</body></html>")
        """
        augmented: Dict[str, Any] = dict(model or {})
        augmented[RENDERED_BODY_KEY] = self.render(body, model or {})
        return self.render(shell, augmented)

    @staticmethod
    def escape(value: Any, html_safe: bool = True) -> str:
        return _escape(value, html_safe)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def add_helper(self, bound_name: str, helper_name: Optional[str] = None) -> Any:
        return self.helpers.add_helper(bound_name, helper_name)

    def add_helper_mapping(self, mapping: Any) -> None:
        self.helpers.add_helper_mapping(mapping)

    def add_helper_mappings(self, mappings: Any) -> None:
        self.helpers.add_helper_mappings(mappings)

    def helper(self, name: str, fail_on_missing: bool = True) -> Optional[Any]:
        return self.helpers.helper(name, fail_on_missing)

    def all_helpers(self) -> Dict[str, Any]:
        """Resolve every advertised helper. Expensive; see ``HelperRegistry.all_helpers``."""
        return self.helpers.all_helpers()

    # ------------------------------------------------------------------
    # Deprecated aliases
    # ------------------------------------------------------------------
    def string_inc(self, target: Any, *data_args: Any, **data: Any) -> str:
        _deprecated("string_inc", "render")
        return self.render(target, *data_args, **data)

    def inc(self, target: Any, *data_args: Any, **data: Any) -> str:
        _deprecated("inc", "include")
        return self.include(target, *data_args, **data)

    def string_shell_inc(
        self, shell: Any, body: Any, model: Optional[Mapping[str, Any]] = None
    ) -> str:
        _deprecated("string_shell_inc", "compose")
        return self.compose(shell, body, model)

    def shell_inc(self, shell: Any, body: Any, model: Optional[Mapping[str, Any]] = None) -> str:
        _deprecated("shell_inc", "compose")
        text = self.compose(shell, body, model)
        frame = self._stack.current
        if frame is not None:
            frame.write(text)
        return text

    def get_helper(self, name: str, fail_on_missing: bool = True) -> Optional[Any]:
        _deprecated("get_helper", "helper")
        return self.helper(name, fail_on_missing)

    def get_helpers(self) -> Dict[str, Any]:
        _deprecated("get_helpers", "all_helpers")
        return self.all_helpers()

    def g(self, value: Any, html_safe: bool = True) -> str:
        _deprecated("g", "escape")
        return self.escape(value, html_safe)


def _deprecated(name: str, replacement: str) -> None:
    warnings.warn(
        f"RenderEngine.{name}() is deprecated; use {replacement}() instead",
        DeprecationWarning,
        stacklevel=3,
    )


__all__ = ["RenderEngine", "NOT_FOUND_TEMPLATE", "RENDERED_BODY_KEY", "strip_trailing_newline"]
