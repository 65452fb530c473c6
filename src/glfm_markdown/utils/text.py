#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/utils/text.py
"""Text processing utilities for heading anchors.

Functions
---------
anchorize : Convert heading text to a unique GitHub-style anchor id

Examples
--------
    >>> seen: set[str] = set()
    >>> anchorize("My Heading Title", seen)
    'my-heading-title'
    >>> anchorize("My Heading Title", seen)
    'my-heading-title-1'

"""

from __future__ import annotations

import re
from typing import Set

_STRIP_PATTERN = re.compile(r"[^\w\- ]", re.UNICODE)


def anchorize(text: str, seen_slugs: Set[str] | None = None) -> str:
    """Create a GitHub-style anchor id from heading text.

    The text is lowercased, punctuation other than hyphens is removed and
    spaces become hyphens. Unlike URL slugs, unicode letters are kept.

    Parameters
    ----------
    text : str
        Plain heading text
    seen_slugs : Set[str] or None, default = None
        Previously generated anchors. Collisions get ``-1``, ``-2``, ...
        appended and the result is added to the set.

    Returns
    -------
    str
        Anchor id

    """
    slug = _STRIP_PATTERN.sub("", text.lower()).replace(" ", "-")

    if seen_slugs is None:
        return slug

    candidate = slug
    counter = 0
    while candidate in seen_slugs:
        counter += 1
        candidate = f"{slug}-{counter}"

    seen_slugs.add(candidate)
    return candidate


__all__ = ["anchorize"]
