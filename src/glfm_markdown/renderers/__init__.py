#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/renderers/__init__.py
"""HTML formatters for the glfm_markdown AST."""

from glfm_markdown.renderers.base import ChildRendering, RenderContext
from glfm_markdown.renderers.glfm import GLFM_OVERRIDES, GlfmHtmlFormatter
from glfm_markdown.renderers.html import HtmlFormatter, format_node_default

__all__ = [
    "ChildRendering",
    "GLFM_OVERRIDES",
    "GlfmHtmlFormatter",
    "HtmlFormatter",
    "RenderContext",
    "format_node_default",
]
