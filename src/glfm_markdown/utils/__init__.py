#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/utils/__init__.py
"""Utility modules for the glfm_markdown package.

This package contains the escaping primitives, the dangerous-URL predicate
and the text helpers shared by the parser and the HTML formatters.
"""

from glfm_markdown.utils.html_utils import escape_href, escape_html
from glfm_markdown.utils.security import is_dangerous_url
from glfm_markdown.utils.text import anchorize

__all__ = [
    "anchorize",
    "escape_href",
    "escape_html",
    "is_dangerous_url",
]
