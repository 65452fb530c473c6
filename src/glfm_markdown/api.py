"""The exported API functions for rendering GitLab Flavored Markdown."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/glfm_markdown/api.py
import logging
from typing import Any, Optional, TextIO

from glfm_markdown.ast.nodes import Node
from glfm_markdown.exceptions import InvalidOptionsError
from glfm_markdown.options.render import RenderOptions
from glfm_markdown.parsers.markdown import MarkdownToAstConverter
from glfm_markdown.renderers.glfm import GlfmHtmlFormatter

logger = logging.getLogger(__name__)


def _resolve_options(options: Optional[RenderOptions], kwargs: dict[str, Any]) -> RenderOptions:
    """Merge keyword overrides into ``options``.

    Parameters
    ----------
    options : RenderOptions or None
        Base options; defaults when None
    kwargs : dict
        Individual option overrides, e.g. ``placeholder_detection=True``

    Returns
    -------
    RenderOptions
        Options to render with

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a RenderOptions or a keyword is not an option

    """
    if options is None:
        options = RenderOptions()
    elif not isinstance(options, RenderOptions):
        raise InvalidOptionsError("render", RenderOptions, type(options))

    if not kwargs:
        return options
    try:
        return options.create_updated(**kwargs)
    except TypeError as e:
        raise InvalidOptionsError(
            "render",
            RenderOptions,
            type(options),
            message=f"Invalid render option(s): {', '.join(sorted(kwargs))}",
            original_error=e,
        ) from e


def render_document(
    doc: Node,
    options: Optional[RenderOptions] = None,
    sink: Optional[TextIO] = None,
    **kwargs: Any,
) -> str:
    """Render an already built AST to HTML.

    Parameters
    ----------
    doc : Node
        Root of the tree, usually a Document
    options : RenderOptions or None, default = None
        Rendering configuration
    sink : TextIO or None, default = None
        Stream to write the finished HTML to, in one call, instead of
        returning it. Nothing is written if rendering fails.
    **kwargs
        Individual option overrides applied on top of ``options``

    Returns
    -------
    str
        The HTML, or an empty string when a sink was given

    Raises
    ------
    InvalidOptionsError
        If the options are not valid
    OutputWriteError
        If writing to the sink fails

    Examples
    --------
        >>> from glfm_markdown.ast import Document, Paragraph, Text
        >>> doc = Document(children=[Paragraph(content=[Text(content="value: %{foo}")])])
        >>> render_document(doc, placeholder_detection=True)
        '<p>value: <span data-placeholder>%{foo}</span></p>\\n'

    """
    options = _resolve_options(options, kwargs)
    formatter = GlfmHtmlFormatter(options.to_formatter_options(), options.to_user_options())
    return formatter.format_document(doc, sink)


def render(text: str, options: Optional[RenderOptions] = None, **kwargs: Any) -> str:
    """Parse Markdown and render it to HTML with the GLFM overrides.

    Parameters
    ----------
    text : str
        Markdown source
    options : RenderOptions or None, default = None
        Rendering configuration
    **kwargs
        Individual option overrides applied on top of ``options``

    Returns
    -------
    str
        Rendered HTML

    Raises
    ------
    InvalidOptionsError
        If the options are not valid
    ParsingError
        If the Markdown parser fails

    Examples
    --------
        >>> render("- [~] not needed", tasklist=True, relaxed_tasklist_character=True, inapplicable_tasks=True)
        '<ul>\\n<li class="inapplicable"><input type="checkbox" data-inapplicable disabled=""> not needed</li>\\n</ul>\\n'

    """
    options = _resolve_options(options, kwargs)
    logger.debug("Rendering %d characters of Markdown", len(text))
    doc = MarkdownToAstConverter(options.to_parser_options()).parse(text)
    return render_document(doc, options)


def render_bytes(text: str, options: Optional[RenderOptions] = None, **kwargs: Any) -> bytes:
    """Render Markdown like :func:`render` and return UTF-8 encoded bytes."""
    return render(text, options, **kwargs).encode("utf-8")


__all__ = ["render", "render_bytes", "render_document"]
