"""glfm_markdown - GitLab Flavored Markdown rendering for Python.

glfm_markdown parses Markdown with mistune and renders it to HTML in the
markup comrak produces, with GitLab's extensions layered on top:

- ``%{name}`` placeholders in text, links and images are marked with
  ``data-placeholder``
- ``- [~]`` list items render as inapplicable tasks
- task lists carry GitLab's ``task-list`` class
- task items with unknown symbols render without a checkbox

Every extension is off by default and is switched on through
:class:`RenderOptions`. With ``default_html=True`` the extensions are
bypassed and plain CommonMark/GFM markup is produced.

Examples
--------
Render with placeholder detection:

    >>> from glfm_markdown import render
    >>> render("value: %{foo}", placeholder_detection=True)
    '<p>value: <span data-placeholder>%{foo}</span></p>\\n'

Render a prepared options record:

    >>> from glfm_markdown import RenderOptions, render
    >>> options = RenderOptions(tasklist=True, tasklist_classes=True)
    >>> html = render("- [x] done", options)

See Also
--------
glfm_markdown.ast : AST node definitions
glfm_markdown.renderers.glfm : The GLFM overrides

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "0.1.0"

from glfm_markdown.api import render, render_bytes, render_document
from glfm_markdown.exceptions import (
    ConfigError,
    GlfmError,
    InvalidOptionsError,
    NodeKindError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from glfm_markdown.options import GlfmUserOptions, HtmlFormatterOptions, MarkdownParserOptions, RenderOptions

__all__ = [
    "__version__",
    "render",
    "render_bytes",
    "render_document",
    "RenderOptions",
    "MarkdownParserOptions",
    "HtmlFormatterOptions",
    "GlfmUserOptions",
    "GlfmError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
    "NodeKindError",
]
