"""Output escaping."""
from __future__ import annotations

import html
from typing import Any


def escape(value: Any, html_safe: bool = True) -> str:
    """Return ``value`` as text, HTML-escaped unless ``html_safe`` is False.

    ``&``, ``<``, ``>``, ``"`` and ``'`` are encoded. None becomes "".
    """
    if value is None:
        return ""
    text = str(value)
    if not html_safe:
        return text
    return html.escape(text, quote=True)


__all__ = ["escape"]
