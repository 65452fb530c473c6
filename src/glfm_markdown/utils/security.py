#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Security utilities for glfm_markdown rendering.

Functions
---------
- is_dangerous_url: Check whether a URL uses a scheme that is suppressed in safe mode
"""

import logging

from glfm_markdown.constants import DANGEROUS_URL_SCHEMES, SAFE_DATA_URL_PREFIXES

logger = logging.getLogger(__name__)


def is_dangerous_url(url: str) -> bool:
    """Check if a URL uses a dangerous scheme.

    ``javascript:``, ``vbscript:``, ``file:`` and ``data:`` URLs are
    dangerous, except ``data:`` URLs carrying PNG, GIF, JPEG or WebP images.
    The comparison is case-insensitive and ignores leading whitespace.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL uses a dangerous scheme, False otherwise

    Examples
    --------
    >>> is_dangerous_url("https://example.com")
    False
    >>> is_dangerous_url("JavaScript:alert('xss')")
    True
    >>> is_dangerous_url("data:image/png;base64,AAAA")
    False
    >>> is_dangerous_url("data:text/html,<script>")
    True
    >>> is_dangerous_url("/relative/path")
    False

    """
    if not url:
        return False

    url_lower = url.lstrip().lower()

    if url_lower.startswith(SAFE_DATA_URL_PREFIXES):
        return False

    if url_lower.startswith(DANGEROUS_URL_SCHEMES):
        logger.debug("Suppressing dangerous URL: %s", url[:50])
        return True

    return False


__all__ = ["is_dangerous_url"]
