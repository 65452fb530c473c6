#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/placeholders.py
"""Placeholder variable detection.

Placeholders are substitution variables written as ``%{name}``. URLs may
already be percent-encoded by the time they reach the renderer, so the
encoded form ``%7Bname%7D`` is recognised as well. ``name`` is between one
and thirty word characters.

Examples
--------
>>> [m.group(0) for m in iter_placeholders("Hi %{user}, see %7Bdocs%7D")]
['%{user}', '%7Bdocs%7D']
>>> has_placeholder("%{}")
False

"""

from __future__ import annotations

import re
from typing import Iterator

from glfm_markdown.constants import PLACEHOLDER_REGEX

PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(PLACEHOLDER_REGEX)


def iter_placeholders(text: str) -> Iterator[re.Match[str]]:
    """Iterate over placeholder matches in ``text``.

    Matches are leftmost-first and non-overlapping. Every call starts a new
    scan, so the result can be re-created as often as needed.

    Parameters
    ----------
    text : str
        Text span to scan

    Returns
    -------
    Iterator[re.Match]
        Lazy iterator of matches, empty when there are none

    """
    return PLACEHOLDER_PATTERN.finditer(text)


def has_placeholder(text: str) -> bool:
    """Return True if ``text`` contains at least one placeholder."""
    return PLACEHOLDER_PATTERN.search(text) is not None


def placeholder_names(text: str) -> list[str]:
    """Return the variable names of all placeholders in ``text``, in order.

    Parameters
    ----------
    text : str
        Text span to scan

    Returns
    -------
    list[str]
        Names without delimiters, e.g. ``["user"]`` for ``"%{user}"``

    """
    return [match.group(1) or match.group(2) for match in iter_placeholders(text)]


__all__ = ["PLACEHOLDER_PATTERN", "iter_placeholders", "has_placeholder", "placeholder_names"]
