#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/options/__init__.py
"""Option records for parsing and rendering."""

from glfm_markdown.options.base import CloneFrozenMixin
from glfm_markdown.options.html import GlfmUserOptions, HtmlFormatterOptions, UrlRewriter
from glfm_markdown.options.markdown import MarkdownParserOptions
from glfm_markdown.options.render import RenderOptions

__all__ = [
    "CloneFrozenMixin",
    "GlfmUserOptions",
    "HtmlFormatterOptions",
    "MarkdownParserOptions",
    "RenderOptions",
    "UrlRewriter",
]
