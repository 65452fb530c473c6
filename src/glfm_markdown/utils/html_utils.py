#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/utils/html_utils.py
"""HTML escaping primitives shared by every formatter.

The default formatter and the GLFM overrides must encode text identically,
so both go through these two functions and nothing else.
"""

from __future__ import annotations

from glfm_markdown.constants import HREF_SAFE_CHARS

_HTML_ESCAPE_TABLE = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"})


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` when enabled.

    Single quotes are left alone so output matches CommonMark reference
    renderers byte for byte.
    """
    if not enabled or not text:
        return text
    return text.translate(_HTML_ESCAPE_TABLE)


def escape_href(url: str) -> str:
    """Escape a URL for use inside an ``href`` or ``src`` attribute.

    Characters in the safe set pass through, ``&`` and ``'`` become entities
    and every other character is percent-encoded byte by byte as UTF-8.
    Existing percent escapes are preserved because ``%`` is safe.

    Parameters
    ----------
    url : str
        URL to escape

    Returns
    -------
    str
        Attribute-safe URL

    Examples
    --------
    >>> escape_href("https://example.com/a b?x=1&y=2")
    'https://example.com/a%20b?x=1&amp;y=2'
    >>> escape_href("%{path}")
    '%%7Bpath%7D'

    """
    parts: list[str] = []
    for char in url:
        if char in HREF_SAFE_CHARS:
            parts.append(char)
        elif char == "&":
            parts.append("&amp;")
        elif char == "'":
            parts.append("&#x27;")
        else:
            parts.extend(f"%{byte:02X}" for byte in char.encode("utf-8"))
    return "".join(parts)


__all__ = ["escape_html", "escape_href"]
