from __future__ import annotations

import pytest

from skittle.core.escaping import escape


@pytest.mark.parametrize(
    "value, expected",
    [
        ("<a href=\"x\">Tom & Jerry's</a>", "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#x27;s&lt;/a&gt;"),
        ("plain", "plain"),
        (42, "42"),
        (None, ""),
    ],
)
def test_escape_html(value, expected) -> None:
    assert escape(value) == expected


def test_escape_disabled_returns_text_unchanged() -> None:
    assert escape("<b>&</b>", html_safe=False) == "<b>&</b>"
