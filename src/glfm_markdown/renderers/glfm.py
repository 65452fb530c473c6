#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/renderers/glfm.py
"""GitLab Flavored Markdown overrides on top of the default formatter.

Five node kinds get GitLab-specific markup. Everything else, and every
visit an override does not customise, falls through to
:func:`glfm_markdown.renderers.html.format_node_default`.

- ``text``: ``%{name}`` placeholders are wrapped in
  ``<span data-placeholder>``
- ``link``/``image``: URLs holding a placeholder get a ``data-placeholder``
  attribute
- ``list``: task lists use the ``task-list`` class instead of
  ``contains-task-list``
- ``task_item``: ``[~]`` renders as an inapplicable task, and unknown
  symbols render as literal text without a checkbox

An override only changes the markup of its own tags. Escaping, URL safety
and ``data-sourcepos`` go through the same :class:`RenderContext`
primitives the default formatter uses.

"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from glfm_markdown.ast.nodes import Image, Link, List, Node, TaskItem, Text
from glfm_markdown.ast.walker import ChildRendering
from glfm_markdown.constants import (
    CHECKED_TASK_SYMBOLS,
    GLFM_TASK_LIST_CLASS,
    INAPPLICABLE_TASK_CLASS,
    INAPPLICABLE_TASK_SYMBOL,
    TASK_LIST_ITEM_CHECKBOX_CLASS,
    TASK_LIST_ITEM_CLASS,
)
from glfm_markdown.exceptions import NodeKindError
from glfm_markdown.options.html import GlfmUserOptions, HtmlFormatterOptions
from glfm_markdown.placeholders import has_placeholder, iter_placeholders
from glfm_markdown.renderers.base import RenderContext
from glfm_markdown.renderers.html import HtmlFormatter, format_node_default

logger = logging.getLogger(__name__)

OverrideHandler = Callable[[RenderContext, Node, bool], ChildRendering]


def _debug(context: RenderContext, message: str, *args: object) -> None:
    if context.user.debug:
        logger.debug(message, *args)


def _url_has_placeholder(context: RenderContext, url: str) -> bool:
    return context.user.placeholder_detection and has_placeholder(url)


def render_text(context: RenderContext, node: Node, entering: bool) -> ChildRendering:
    """Wrap every placeholder in a text node in ``<span data-placeholder>``.

    Text inside links and images is left alone: the parser can split a
    label such as ``[%{a_b}](url)`` across several text nodes, so matches
    there would be unreliable.

    Parameters
    ----------
    context : RenderContext
        Current render state
    node : Text
        Text node to render
    entering : bool
        Always True, text is a leaf kind

    Returns
    -------
    ChildRendering
        Always ``HTML``

    Raises
    ------
    NodeKindError
        If ``node`` is not a Text node

    """
    if not isinstance(node, Text):
        raise NodeKindError("text", node.kind)

    if not (context.user.placeholder_detection and has_placeholder(node.content)):
        return format_node_default(context, node, entering)

    if isinstance(context.parent, (Link, Image)):
        _debug(context, "Placeholder in %s label left unmarked", context.parent.kind)
        return format_node_default(context, node, entering)

    if entering:
        literal = node.content
        cursor = 0
        for match in iter_placeholders(literal):
            if match.start() > cursor:
                context.escape(literal[cursor : match.start()])
            context.write("<span data-placeholder>")
            context.escape(match.group(0))
            context.write("</span>")
            cursor = match.end()
        if cursor < len(literal):
            context.escape(literal[cursor:])
        _debug(context, "Marked placeholders in text %r", literal)

    return ChildRendering.HTML


def render_link(context: RenderContext, node: Node, entering: bool) -> ChildRendering:
    """Render a link whose URL holds a placeholder with ``data-placeholder``.

    Other links use the default markup. With relaxed autolinks, a link
    nested directly in another link emits no tags of its own.

    Raises
    ------
    NodeKindError
        If ``node`` is not a Link node

    """
    if not isinstance(node, Link):
        raise NodeKindError("link", node.kind)

    if not _url_has_placeholder(context, node.url):
        return format_node_default(context, node, entering)

    if context.options.relaxed_autolinks and isinstance(context.parent, Link):
        return ChildRendering.HTML

    if entering:
        context.write("<a")
        context.render_sourcepos(node)
        context.write(' href="')
        context.write_url(node.url, context.options.link_url_rewriter)
        context.write('"')
        if node.title:
            context.write(' title="')
            context.escape(node.title)
            context.write('"')
        context.write(" data-placeholder>")
        _debug(context, "Marked placeholder link %r", node.url)
    else:
        context.write("</a>")

    return ChildRendering.HTML


def render_image(context: RenderContext, node: Node, entering: bool) -> ChildRendering:
    """Render an image whose URL holds a placeholder with ``data-placeholder``.

    On entering the ``<img`` tag is opened up to the ``alt`` value and the
    walker is told to write the alt text as plain text. The leaving visit
    closes the tag, adds the title and, in figure mode, the caption.

    Raises
    ------
    NodeKindError
        If ``node`` is not an Image node

    """
    if not isinstance(node, Image):
        raise NodeKindError("image", node.kind)

    if not _url_has_placeholder(context, node.url):
        return format_node_default(context, node, entering)

    if not entering:
        HtmlFormatter.close_image(context, node)
        return ChildRendering.HTML

    if context.options.figure_with_caption:
        context.write("<figure>")
    context.write("<img")
    context.render_sourcepos(node)
    context.write(' src="')
    context.write_url(node.url, context.options.image_url_rewriter)
    context.write('" data-placeholder alt="')
    _debug(context, "Marked placeholder image %r", node.url)
    return ChildRendering.PLAIN


def render_list(context: RenderContext, node: Node, entering: bool) -> ChildRendering:
    """Open lists with GitLab's ``task-list`` class.

    Only the opening tag is customised, and only when task list classes are
    enabled. The closing tag always comes from the default formatter.

    Raises
    ------
    NodeKindError
        If ``node`` is not a List node

    """
    if not isinstance(node, List):
        raise NodeKindError("list", node.kind)

    if not entering or not context.options.tasklist_classes:
        return format_node_default(context, node, entering)

    tag = "ol" if node.ordered else "ul"
    context.cr()
    context.write(f"<{tag}")
    if node.is_task_list:
        context.write(f' class="{GLFM_TASK_LIST_CLASS}"')
    context.render_sourcepos(node)
    if node.ordered and node.start != 1:
        context.write(f' start="{node.start}">\n')
    else:
        context.write(">\n")
    return ChildRendering.HTML


def render_task_item(context: RenderContext, node: Node, entering: bool) -> ChildRendering:
    """Render inapplicable and custom-symbol task items.

    Task items move through four states depending on their symbol:

    - unchecked (``None``) and checked (``x``/``X``): default markup
    - inapplicable (``~``): an ``inapplicable`` item with a disabled
      ``data-inapplicable`` checkbox
    - any other symbol: the symbol shown as ``[c]`` with no checkbox

    Nothing here applies unless inapplicable task detection is on.

    Parameters
    ----------
    context : RenderContext
        Current render state
    node : TaskItem
        Task item to render
    entering : bool
        True before the item content, False after it

    Returns
    -------
    ChildRendering
        Always ``HTML``

    Raises
    ------
    NodeKindError
        If ``node`` is not a TaskItem node

    """
    if not isinstance(node, TaskItem):
        raise NodeKindError("task_item", node.kind)

    if not context.user.inapplicable_tasks:
        return format_node_default(context, node, entering)

    symbol = node.symbol
    if symbol is None or symbol in CHECKED_TASK_SYMBOLS:
        return format_node_default(context, node, entering)

    if not entering:
        context.write("</li>\n")
        return ChildRendering.HTML

    classes = context.options.tasklist_classes
    context.cr()
    if symbol == INAPPLICABLE_TASK_SYMBOL:
        context.write(f'<li class="{INAPPLICABLE_TASK_CLASS}')
        if classes:
            context.write(f" {TASK_LIST_ITEM_CLASS}")
        context.write('"')
        context.render_sourcepos(node)
        context.write('><input type="checkbox"')
        if classes:
            context.write(f' class="{TASK_LIST_ITEM_CHECKBOX_CLASS}"')
        context.write(' data-inapplicable disabled=""> ')
        _debug(context, "Rendered inapplicable task item")
    else:
        context.write("<li")
        if classes:
            context.write(f' class="{TASK_LIST_ITEM_CLASS}"')
        context.render_sourcepos(node)
        context.write(">[")
        context.escape(symbol)
        context.write("] ")
        _debug(context, "Rendered task item with unsupported symbol %r", symbol)

    return ChildRendering.HTML


GLFM_OVERRIDES: Mapping[str, OverrideHandler] = {
    "text": render_text,
    "link": render_link,
    "image": render_image,
    "list": render_list,
    "task_item": render_task_item,
}


class GlfmHtmlFormatter(HtmlFormatter):
    """HTML formatter that routes the GLFM node kinds through their overrides.

    With ``default_html`` set on the user options every node uses the
    default formatter, and the output is identical to
    :class:`HtmlFormatter`.

    Parameters
    ----------
    options : HtmlFormatterOptions or None, default = None
        Formatter flags
    user : GlfmUserOptions or None, default = None
        Override toggles
    overrides : Mapping[str, callable] or None, default = None
        Dispatch table keyed by node kind. Defaults to ``GLFM_OVERRIDES``.

    """

    def __init__(
        self,
        options: Optional[HtmlFormatterOptions] = None,
        user: Optional[GlfmUserOptions] = None,
        overrides: Optional[Mapping[str, OverrideHandler]] = None,
    ):
        """Initialize the formatter with an optional custom dispatch table."""
        super().__init__(options, user)
        self.overrides = GLFM_OVERRIDES if overrides is None else overrides

    def dispatch(self, context: RenderContext, node: Node, entering: bool) -> ChildRendering:
        """Call the override registered for ``node.kind``, or the default formatter."""
        if context.user.default_html:
            return self.format_node_default(context, node, entering)
        handler = self.overrides.get(node.kind)
        if handler is None:
            return self.format_node_default(context, node, entering)
        return handler(context, node, entering)


__all__ = [
    "GLFM_OVERRIDES",
    "GlfmHtmlFormatter",
    "OverrideHandler",
    "render_image",
    "render_link",
    "render_list",
    "render_task_item",
    "render_text",
]
