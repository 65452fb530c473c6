#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/renderers/html.py
"""Default HTML formatting for every node kind.

This module provides the HtmlFormatter class, which renders the AST to
CommonMark/GFM markup in the shapes produced by comrak, the Rust engine the
GLFM overrides were first written against. Output from the overrides and
from this formatter can therefore interleave without visible seams.

Every ``visit_<kind>`` method has the handler signature
``(context, node, entering) -> ChildRendering`` and is called twice for
container kinds and once for leaf kinds. See
:mod:`glfm_markdown.ast.walker` for the traversal rules.

"""

from __future__ import annotations

from typing import Optional, TextIO

from glfm_markdown.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Node,
    Paragraph,
    Spoiler,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    TaskItem,
    Text,
    ThematicBreak,
    Underline,
    plain_text,
)
from glfm_markdown.ast.walker import ChildRendering, walk
from glfm_markdown.constants import (
    CHECKED_TASK_SYMBOLS,
    DEFAULT_TASK_LIST_CLASS,
    RAW_HTML_OMITTED,
    TAGFILTER_PATTERN,
    TASK_LIST_ITEM_CHECKBOX_CLASS,
    TASK_LIST_ITEM_CLASS,
)
from glfm_markdown.exceptions import RenderingError
from glfm_markdown.options.html import GlfmUserOptions, HtmlFormatterOptions
from glfm_markdown.renderers.base import RenderContext
from glfm_markdown.utils.html_utils import escape_html
from glfm_markdown.utils.text import anchorize

_HTML = ChildRendering.HTML


def _filter_tags(html: str) -> str:
    """Neutralise GFM disallowed tags by escaping their opening ``<``."""
    return TAGFILTER_PATTERN.sub(r"&lt;\1", html)


def _is_empty_label(node: Link) -> bool:
    return not plain_text(node.content).strip()


class HtmlFormatter:
    """Render AST nodes to HTML.

    The formatter holds no per-render state. Everything that changes while
    rendering lives on the :class:`RenderContext`, so one formatter can
    serve many renders, including concurrent ones.

    Parameters
    ----------
    options : HtmlFormatterOptions or None, default = None
        Formatter flags used by :meth:`format_document`
    user : GlfmUserOptions or None, default = None
        Override toggles passed through to the context

    Examples
    --------
        >>> from glfm_markdown.ast import Document, Paragraph, Text
        >>> doc = Document(children=[Paragraph(content=[Text(content="a < b")])])
        >>> HtmlFormatter().format_document(doc)
        '<p>a &lt; b</p>\\n'

    """

    def __init__(self, options: Optional[HtmlFormatterOptions] = None, user: Optional[GlfmUserOptions] = None):
        """Initialize the formatter with optional configuration."""
        self.options = options or HtmlFormatterOptions()
        self.user = user or GlfmUserOptions()

    def format_document(self, doc: Node, sink: Optional[TextIO] = None) -> str:
        """Render ``doc`` and return the HTML.

        Parameters
        ----------
        doc : Node
            Root of the tree, usually a Document
        sink : TextIO or None, default = None
            Stream to write to. When given, the finished HTML is written there
            in one call after rendering completes, and an empty string is
            returned. A failed render writes nothing.

        Returns
        -------
        str
            Rendered HTML when no sink was given

        Raises
        ------
        OutputWriteError
            If writing to the sink fails

        """
        context = RenderContext(self.options, self.user, self)
        walk(doc, context, self.dispatch)
        if sink is None:
            return context.getvalue()
        context.flush_to(sink)
        return ""

    def dispatch(self, context: RenderContext, node: Node, entering: bool) -> ChildRendering:
        """Choose the handler for ``node``. The base formatter always uses the default."""
        return self.format_node_default(context, node, entering)

    def format_node_default(self, context: RenderContext, node: Node, entering: bool) -> ChildRendering:
        """Render ``node`` with the default markup for its kind.

        Raises
        ------
        RenderingError
            If no default handler exists for the node's kind

        """
        method = getattr(self, f"visit_{node.kind}", None)
        if method is None:
            raise RenderingError(f"No HTML handler for node kind '{node.kind}'", rendering_stage="dispatch")
        return method(context, node, entering)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, context: RenderContext, node: Document, entering: bool) -> ChildRendering:
        """Close the footnote section, if one was opened, after the last block."""
        if not entering and context.footnotes_open:
            context.write("</ol>\n</section>\n")
            context.footnotes_open = False
        return _HTML

    def visit_heading(self, context: RenderContext, node: Heading, entering: bool) -> ChildRendering:
        """Render a Heading node, with an anchor when ``header_ids`` is set.

        Parameters
        ----------
        context : RenderContext
            Current render state
        node : Heading
            Heading to render
        entering : bool
            True before the heading text, False after it

        """
        if entering:
            context.cr()
            context.write(f"<h{node.level}")
            context.render_sourcepos(node)
            context.write(">")
            prefix = context.options.header_ids
            if prefix is not None:
                anchor = anchorize(plain_text(node.content), context.anchors)
                context.write(
                    f'<a href="#{escape_html(anchor)}" aria-hidden="true" class="anchor" '
                    f'id="{escape_html(prefix + anchor)}"></a>'
                )
        else:
            context.write(f"</h{node.level}>\n")
        return _HTML

    def visit_paragraph(self, context: RenderContext, node: Paragraph, entering: bool) -> ChildRendering:
        """Render a Paragraph node. Paragraphs in tight list items get no ``<p>``."""
        tight = context.in_tight_list()
        if entering:
            if not tight:
                context.cr()
                context.write("<p")
                context.render_sourcepos(node)
                context.write(">")
            return _HTML

        parent = context.parent
        if isinstance(parent, FootnoteDefinition) and parent.children and parent.children[-1] is node:
            self._write_footnote_backref(context, parent)
            context.footnote_backrefs.add(id(parent))
        if not tight:
            context.write("</p>\n")
        return _HTML

    def visit_code_block(self, context: RenderContext, node: CodeBlock, entering: bool) -> ChildRendering:
        """Render a fenced or indented code block.

        The first word of the info string is the language. It goes on the
        ``<code>`` class, or on ``<pre lang>`` with ``github_pre_lang``. With
        ``full_info_string`` the remainder is kept as ``data-meta``.
        """
        context.cr()
        info = (node.info_string or "").strip()
        language, _, meta = info.partition(" ")
        meta = meta.strip()

        if not language:
            context.write("<pre")
            context.render_sourcepos(node)
            context.write("><code>")
        elif context.options.github_pre_lang:
            context.write(f'<pre lang="{escape_html(language)}"')
            if context.options.full_info_string and meta:
                context.write(f' data-meta="{escape_html(meta)}"')
            context.render_sourcepos(node)
            context.write("><code>")
        else:
            context.write("<pre")
            context.render_sourcepos(node)
            context.write(f'><code class="language-{escape_html(language)}"')
            if context.options.full_info_string and meta:
                context.write(f' data-meta="{escape_html(meta)}"')
            context.write(">")

        context.escape(node.content)
        context.write("</code></pre>\n")
        return _HTML

    def visit_block_quote(self, context: RenderContext, node: BlockQuote, entering: bool) -> ChildRendering:
        """Render a BlockQuote node. Block spoilers carry the ``spoiler`` class."""
        context.cr()
        if entering:
            context.write("<blockquote")
            if node.metadata.get("spoiler"):
                context.write(' class="spoiler"')
            context.render_sourcepos(node)
            context.write(">\n")
        else:
            context.write("</blockquote>\n")
        return _HTML

    def visit_list(self, context: RenderContext, node: List, entering: bool) -> ChildRendering:
        """Render a List node.

        Task lists get the ``contains-task-list`` class when
        ``tasklist_classes`` is set. Ordered lists not starting at 1 carry a
        ``start`` attribute.
        """
        tag = "ol" if node.ordered else "ul"
        if not entering:
            context.write(f"</{tag}>\n")
            return _HTML

        context.cr()
        context.write(f"<{tag}")
        if node.is_task_list and context.options.tasklist_classes:
            context.write(f' class="{DEFAULT_TASK_LIST_CLASS}"')
        context.render_sourcepos(node)
        if node.ordered and node.start != 1:
            context.write(f' start="{node.start}">\n')
        else:
            context.write(">\n")
        return _HTML

    def visit_list_item(self, context: RenderContext, node: ListItem, entering: bool) -> ChildRendering:
        """Render a plain ListItem node."""
        if entering:
            context.cr()
            context.write("<li")
            context.render_sourcepos(node)
            context.write(">")
        else:
            context.write("</li>\n")
        return _HTML

    def visit_task_item(self, context: RenderContext, node: TaskItem, entering: bool) -> ChildRendering:
        """Render a TaskItem node as a list item with a disabled checkbox.

        ``None`` renders an unchecked box and ``x``/``X`` a checked one. Any
        other symbol is shown literally as ``[c]`` with no checkbox.

        Parameters
        ----------
        context : RenderContext
            Current render state
        node : TaskItem
            Task item to render
        entering : bool
            True before the item content, False after it

        """
        if not entering:
            context.write("</li>\n")
            return _HTML

        classes = context.options.tasklist_classes
        context.cr()
        context.write("<li")
        if classes:
            context.write(f' class="{TASK_LIST_ITEM_CLASS}"')
        context.render_sourcepos(node)
        context.write(">")

        if node.symbol is not None and node.symbol not in CHECKED_TASK_SYMBOLS:
            context.write("[")
            context.escape(node.symbol)
            context.write("] ")
            return _HTML

        context.write('<input type="checkbox"')
        if classes:
            context.write(f' class="{TASK_LIST_ITEM_CHECKBOX_CLASS}"')
        if node.symbol is not None:
            context.write(' checked=""')
        context.write(' disabled="" /> ')
        return _HTML

    def visit_table(self, context: RenderContext, node: Table, entering: bool) -> ChildRendering:
        """Render a Table node."""
        if entering:
            context.cr()
            context.write("<table")
            context.render_sourcepos(node)
            context.write(">\n")
        else:
            if node.rows:
                context.cr()
                context.write("</tbody>")
            context.cr()
            context.write("</table>\n")
        return _HTML

    def visit_table_row(self, context: RenderContext, node: TableRow, entering: bool) -> ChildRendering:
        """Render a TableRow node, opening ``<thead>``/``<tbody>`` as needed."""
        if entering:
            context.cr()
            table = context.parent
            if node.is_header:
                context.write("<thead>\n")
            elif isinstance(table, Table) and table.rows and table.rows[0] is node:
                context.write("<tbody>\n")
            context.write("<tr")
            context.render_sourcepos(node)
            context.write(">")
        else:
            context.cr()
            context.write("</tr>")
            if node.is_header:
                context.cr()
                context.write("</thead>")
        return _HTML

    def visit_table_cell(self, context: RenderContext, node: TableCell, entering: bool) -> ChildRendering:
        """Render a TableCell node as ``<th>`` in the header row, ``<td>`` otherwise."""
        row = context.parent
        tag = "th" if isinstance(row, TableRow) and row.is_header else "td"
        if entering:
            context.cr()
            context.write(f"<{tag}")
            if node.alignment:
                context.write(f' align="{node.alignment}"')
            context.render_sourcepos(node)
            context.write(">")
        else:
            context.write(f"</{tag}>")
        return _HTML

    def visit_thematic_break(self, context: RenderContext, node: ThematicBreak, entering: bool) -> ChildRendering:
        """Render a ThematicBreak node."""
        context.cr()
        context.write("<hr")
        context.render_sourcepos(node)
        context.write(" />\n")
        return _HTML

    def visit_html_block(self, context: RenderContext, node: HTMLBlock, entering: bool) -> ChildRendering:
        """Render raw block HTML according to the escape/unsafe/tagfilter flags."""
        context.cr()
        self._write_raw_html(context, node.content)
        context.cr()
        return _HTML

    def visit_footnote_definition(
        self, context: RenderContext, node: FootnoteDefinition, entering: bool
    ) -> ChildRendering:
        """Render a FootnoteDefinition as an item of the trailing footnote section.

        The section is opened by the first definition and closed when the
        document ends. The back-reference goes inside the last paragraph when
        there is one, otherwise after the content.
        """
        if entering:
            if not context.footnotes_open:
                context.cr()
                context.write('<section class="footnotes" data-footnotes>\n<ol>\n')
                context.footnotes_open = True
            context.cr()
            context.write(f'<li id="fn-{escape_html(node.identifier)}"')
            context.render_sourcepos(node)
            context.write(">\n")
        else:
            if id(node) not in context.footnote_backrefs:
                context.cr()
                self._write_footnote_backref(context, node)
            context.cr()
            context.write("</li>\n")
        return _HTML

    def visit_definition_list(self, context: RenderContext, node: DefinitionList, entering: bool) -> ChildRendering:
        """Render a DefinitionList node."""
        context.cr()
        context.write("<dl>\n" if entering else "</dl>\n")
        return _HTML

    def visit_definition_term(self, context: RenderContext, node: DefinitionTerm, entering: bool) -> ChildRendering:
        """Render a DefinitionTerm node."""
        if entering:
            context.cr()
            context.write("<dt>")
        else:
            context.write("</dt>\n")
        return _HTML

    def visit_definition_description(
        self, context: RenderContext, node: DefinitionDescription, entering: bool
    ) -> ChildRendering:
        """Render a DefinitionDescription node."""
        if entering:
            context.cr()
            context.write("<dd>")
        else:
            context.cr()
            context.write("</dd>\n")
        return _HTML

    def visit_math_block(self, context: RenderContext, node: MathBlock, entering: bool) -> ChildRendering:
        """Render display math the way comrak renders ``$$`` spans."""
        context.cr()
        context.write('<p><span data-math-style="display">')
        context.escape(node.content)
        context.write("</span></p>\n")
        return _HTML

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, context: RenderContext, node: Text, entering: bool) -> ChildRendering:
        """Render a Text node."""
        context.escape(node.content)
        return _HTML

    def visit_emphasis(self, context: RenderContext, node: Emphasis, entering: bool) -> ChildRendering:
        """Render an Emphasis node."""
        context.write("<em>" if entering else "</em>")
        return _HTML

    def visit_strong(self, context: RenderContext, node: Strong, entering: bool) -> ChildRendering:
        """Render a Strong node."""
        context.write("<strong>" if entering else "</strong>")
        return _HTML

    def visit_code(self, context: RenderContext, node: Code, entering: bool) -> ChildRendering:
        """Render an inline Code node."""
        context.write("<code")
        context.render_sourcepos(node)
        context.write(">")
        context.escape(node.content)
        context.write("</code>")
        return _HTML

    def visit_link(self, context: RenderContext, node: Link, entering: bool) -> ChildRendering:
        """Render a Link node.

        With ``relaxed_autolinks`` a link nested directly in another link
        emits no tags of its own. With ``ignore_empty_links`` a link without
        a label is written back as its Markdown source.

        Parameters
        ----------
        context : RenderContext
            Current render state
        node : Link
            Link to render
        entering : bool
            True before the label, False after it

        """
        options = context.options
        if options.relaxed_autolinks and isinstance(context.parent, Link):
            return _HTML

        if options.ignore_empty_links and _is_empty_label(node):
            if entering:
                context.escape(f"[]({node.url})")
            return ChildRendering.SKIP

        if not entering:
            context.write("</a>")
            return _HTML

        context.write("<a")
        context.render_sourcepos(node)
        context.write(' href="')
        context.write_url(node.url, options.link_url_rewriter)
        context.write('"')
        if node.title:
            context.write(' title="')
            context.escape(node.title)
            context.write('"')
        context.write(">")
        return _HTML

    def visit_image(self, context: RenderContext, node: Image, entering: bool) -> ChildRendering:
        """Render an Image node.

        The alt text is produced by the walker from the image's children as
        plain text, between the two visits.
        """
        figure = context.options.figure_with_caption
        if entering:
            if figure:
                context.write("<figure>")
            context.write("<img")
            context.render_sourcepos(node)
            context.write(' src="')
            context.write_url(node.url, context.options.image_url_rewriter)
            context.write('" alt="')
            return ChildRendering.PLAIN

        self.close_image(context, node)
        return _HTML

    @staticmethod
    def close_image(context: RenderContext, node: Image) -> None:
        """Finish an ``<img>`` tag opened by an image handler."""
        if node.title:
            context.write('" title="')
            context.escape(node.title)
        context.write('" />')
        if context.options.figure_with_caption:
            if node.title:
                context.write("<figcaption>")
                context.escape(node.title)
                context.write("</figcaption>")
            context.write("</figure>")

    def visit_line_break(self, context: RenderContext, node: LineBreak, entering: bool) -> ChildRendering:
        """Render hard breaks as ``<br />``; soft breaks too with ``hardbreaks``."""
        if not node.soft or context.options.hardbreaks:
            context.write("<br")
            context.render_sourcepos(node)
            context.write(" />\n")
        else:
            context.write("\n")
        return _HTML

    def visit_strikethrough(self, context: RenderContext, node: Strikethrough, entering: bool) -> ChildRendering:
        """Render a Strikethrough node."""
        context.write("<del>" if entering else "</del>")
        return _HTML

    def visit_underline(self, context: RenderContext, node: Underline, entering: bool) -> ChildRendering:
        """Render an Underline node."""
        context.write("<u>" if entering else "</u>")
        return _HTML

    def visit_superscript(self, context: RenderContext, node: Superscript, entering: bool) -> ChildRendering:
        """Render a Superscript node."""
        context.write("<sup>" if entering else "</sup>")
        return _HTML

    def visit_subscript(self, context: RenderContext, node: Subscript, entering: bool) -> ChildRendering:
        """Render a Subscript node."""
        context.write("<sub>" if entering else "</sub>")
        return _HTML

    def visit_spoiler(self, context: RenderContext, node: Spoiler, entering: bool) -> ChildRendering:
        """Render a Spoiler node."""
        context.write('<span class="spoiler">' if entering else "</span>")
        return _HTML

    def visit_html_inline(self, context: RenderContext, node: HTMLInline, entering: bool) -> ChildRendering:
        """Render raw inline HTML according to the escape/unsafe/tagfilter flags."""
        self._write_raw_html(context, node.content)
        return _HTML

    def visit_footnote_reference(
        self, context: RenderContext, node: FootnoteReference, entering: bool
    ) -> ChildRendering:
        """Render a FootnoteReference node."""
        identifier = escape_html(node.identifier)
        context.write(
            f'<sup class="footnote-ref"><a href="#fn-{identifier}" id="fnref-{identifier}" '
            f"data-footnote-ref>{node.index}</a></sup>"
        )
        return _HTML

    def visit_math_inline(self, context: RenderContext, node: MathInline, entering: bool) -> ChildRendering:
        """Render a MathInline node."""
        context.write('<span data-math-style="inline">')
        context.escape(node.content)
        context.write("</span>")
        return _HTML

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _write_raw_html(context: RenderContext, html: str) -> None:
        options = context.options
        if options.escape:
            context.escape(html)
        elif not options.unsafe:
            context.write(RAW_HTML_OMITTED)
        elif options.tagfilter:
            context.write(_filter_tags(html))
        else:
            context.write(html)

    @staticmethod
    def _write_footnote_backref(context: RenderContext, node: FootnoteDefinition) -> None:
        identifier = escape_html(node.identifier)
        context.write(
            f' <a href="#fnref-{identifier}" class="footnote-backref" data-footnote-backref '
            f'data-footnote-backref-idx="{node.index}" aria-label="Back to reference {node.index}">↩</a>'
        )


_DEFAULT_FORMATTER = HtmlFormatter()


def format_node_default(context: RenderContext, node: Node, entering: bool) -> ChildRendering:
    """Render ``node`` with the default markup of the formatter driving ``context``.

    Overrides call this to fall through to standard rendering for the visits
    they do not customise. Contexts built without a formatter use a plain
    :class:`HtmlFormatter`.
    """
    formatter = context.formatter if context.formatter is not None else _DEFAULT_FORMATTER
    return formatter.format_node_default(context, node, entering)


__all__ = ["HtmlFormatter", "format_node_default"]
