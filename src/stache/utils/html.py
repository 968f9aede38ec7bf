"""HTML escaping for interpolated values.

The default escape function applied to every non-raw variable.

Complexity:
    ``html_escape()`` is a single pass via ``str.translate()``.

"""

from __future__ import annotations

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
        "'": "&#39;",
    }
)


def html_escape(text: str) -> str:
    """Escape the five HTML-significant characters.

    Example:
        >>> html_escape('<a href="x">Tom & Jerry\\'s</a>')
        '&lt;a href=&#34;x&#34;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;'
    """
    return text.translate(_ESCAPE_TABLE)


def no_escape(text: str) -> str:
    """Identity escape, for rendering plain-text output (emails, configs)."""
    return text
