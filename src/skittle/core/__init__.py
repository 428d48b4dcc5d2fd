"""Render engine core: frames, fragment execution and the engine itself."""
from __future__ import annotations

from .context import FragmentContext
from .engine import NOT_FOUND_TEMPLATE, RENDERED_BODY_KEY, RenderEngine, strip_trailing_newline
from .escaping import escape
from .fragments import FragmentExecutor, FragmentRunner, PythonFragmentExecutor, TextFragmentExecutor
from .frames import Frame, FrameStack

__all__ = [
    "RenderEngine",
    "FragmentContext",
    "FragmentExecutor",
    "FragmentRunner",
    "PythonFragmentExecutor",
    "TextFragmentExecutor",
    "Frame",
    "FrameStack",
    "escape",
    "strip_trailing_newline",
    "NOT_FOUND_TEMPLATE",
    "RENDERED_BODY_KEY",
]
