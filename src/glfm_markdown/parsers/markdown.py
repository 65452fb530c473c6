#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/parsers/markdown.py
"""Markdown to AST converter.

This module builds the glfm_markdown AST from Markdown text using the
mistune parser. Parser flags in :class:`MarkdownParserOptions` select the
mistune plugins to load. Task list items are recognised by a plugin of our
own, which keeps the raw status symbol so ``[~]`` and custom symbols survive
into the AST.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

import mistune

from glfm_markdown.ast import (
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
)
from glfm_markdown.exceptions import InvalidOptionsError, ParsingError
from glfm_markdown.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

# Task markers are only recognised at the very start of an item's first block
STRICT_TASK_ITEM_PATTERN = re.compile(r"^\[([ xX])\]\s+")
RELAXED_TASK_ITEM_PATTERN = re.compile(r"^\[([^\]\r\n])\]\s+")

# Flags with a mistune plugin behind them
_PLUGIN_FLAGS: tuple[tuple[str, str], ...] = (
    ("strikethrough", "strikethrough"),
    ("table", "table"),
    ("footnotes", "footnotes"),
    ("autolink", "url"),
    ("description_lists", "def_list"),
    ("math_dollars", "math"),
    ("superscript", "superscript"),
    ("subscript", "subscript"),
    ("spoiler", "spoiler"),
    ("underline", "insert"),
)

# Flags accepted for compatibility that mistune has no support for
_UNSUPPORTED_FLAGS: tuple[str, ...] = (
    "alerts",
    "gemojis",
    "greentext",
    "ignore_setext",
    "math_code",
    "multiline_block_quotes",
    "relaxed_autolinks",
    "smart",
    "wikilinks_title_after_pipe",
    "wikilinks_title_before_pipe",
)


def task_items_plugin(relaxed: bool = False) -> Callable[[Any], None]:
    """Build a mistune plugin that turns ``[c] `` list items into task items.

    The plugin runs before inline parsing. A ``list_item`` token whose first
    block starts with a marker becomes a ``task_list_item`` token with the
    marker symbol in ``attrs["symbol"]`` (``None`` for a space), and the
    marker is removed from the text.

    Parameters
    ----------
    relaxed : bool, default False
        Accept any single character as the symbol, not just space, ``x``
        and ``X``

    Returns
    -------
    callable
        Plugin suitable for ``mistune.create_markdown(plugins=[...])``

    """
    pattern = RELAXED_TASK_ITEM_PATTERN if relaxed else STRICT_TASK_ITEM_PATTERN

    def rewrite(tokens: list[dict[str, Any]]) -> None:
        for token in tokens:
            if token.get("type") == "list_item":
                children = token.get("children") or []
                first = children[0] if children else {}
                text = first.get("text", "")
                match = pattern.match(text)
                if match:
                    symbol = match.group(1)
                    first["text"] = text[match.end() :]
                    token["type"] = "task_list_item"
                    token["attrs"] = {"symbol": None if symbol == " " else symbol}
            if "children" in token:
                rewrite(token["children"])

    def hook(md: Any, state: Any) -> None:
        rewrite(state.tokens)

    def plugin(md: Any) -> None:
        md.before_render_hooks.append(hook)

    return plugin


class MarkdownToAstConverter:
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")

    With task lists:

        >>> options = MarkdownParserOptions(tasklist=True, relaxed_tasklist_character=True)
        >>> doc = MarkdownToAstConverter(options).parse("- [~] skipped")
        >>> doc.children[0].items[0].symbol
        '~'

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        if options is not None and not isinstance(options, MarkdownParserOptions):
            raise InvalidOptionsError("markdown", MarkdownParserOptions, type(options))
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()
        self._markdown = mistune.create_markdown(plugins=self._build_plugins(), renderer=None)

    def _build_plugins(self) -> list[Any]:
        """Translate parser flags into the mistune plugin list."""
        plugins: list[Any] = [name for flag, name in _PLUGIN_FLAGS if getattr(self.options, flag)]
        if self.options.tasklist:
            plugins.append(task_items_plugin(relaxed=self.options.relaxed_tasklist_character))

        for flag in _UNSUPPORTED_FLAGS:
            if getattr(self.options, flag):
                logger.debug("Markdown option '%s' is not supported by the parser and is ignored", flag)

        return plugins

    def parse(self, markdown_content: str) -> Document:
        """Parse Markdown text into an AST Document.

        Parameters
        ----------
        markdown_content : str
            Markdown text

        Returns
        -------
        Document
            AST document node. Footnote definitions, when enabled, follow
            the body in reference order.

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        try:
            tokens, _state = self._markdown.parse(markdown_content)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="mistune", original_error=e) from e

        children = self._process_tokens(tokens if isinstance(tokens, list) else [])
        return Document(children=children)

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into AST nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is None:
                continue
            if isinstance(node, list):
                nodes.extend(node)
            else:
                nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single mistune block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node, list of Node, or None
            Resulting AST node(s). Blank lines and unknown tokens give None.

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is the paragraph of a tight list item
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "block_spoiler":
            return BlockQuote(children=self._process_tokens(token.get("children", [])), metadata={"spoiler": True})
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", ""))
        elif token_type == "block_math":
            return MathBlock(content=token.get("raw", ""))
        elif token_type == "footnotes":
            return self._process_footnotes(token)
        elif token_type == "def_list":
            return self._process_definition_list(token)

        if token_type not in ("blank_line", ""):
            logger.debug("Skipping unsupported block token: %s", token_type)
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token.

        Parameters
        ----------
        token : dict
            Heading token with 'attrs' (level) and 'children'

        Returns
        -------
        Heading
            Heading AST node

        """
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1
        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token, keeping the whole info string."""
        attrs = token.get("attrs") or {}
        info = attrs.get("info")
        return CodeBlock(content=token.get("raw", ""), info_string=info.strip() if info else None)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight' and 'attrs' (ordered, start)

        Returns
        -------
        List
            List AST node, flagged as a task list when any item is a task

        """
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1) if ordered else 1
        tight = token.get("tight", attrs.get("tight", True))

        items: list[Node] = []
        for child in token.get("children", []):
            child_type = child.get("type")
            children = self._process_tokens(child.get("children", []))
            if child_type == "task_list_item":
                symbol = (child.get("attrs") or {}).get("symbol")
                items.append(TaskItem(symbol=symbol, children=children))
            elif child_type == "list_item":
                items.append(ListItem(children=children))

        is_task_list = any(isinstance(item, TaskItem) for item in items)
        return List(ordered=ordered, items=items, start=start, tight=bool(tight), is_task_list=is_task_list)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Parameters
        ----------
        token : dict
            Table token with 'table_head' and 'table_body' children

        Returns
        -------
        Table
            Table AST node

        """
        header: TableRow | None = None
        rows: list[TableRow] = []

        for part in token.get("children", []):
            part_type = part.get("type", "")
            if part_type == "table_head":
                # Header cells are direct children of table_head
                header = TableRow(cells=self._process_table_cells(part.get("children", [])), is_header=True)
            elif part_type == "table_body":
                for row_token in part.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(row_token.get("children", []))))

        return Table(header=header, rows=rows)

    def _process_table_cells(self, cell_tokens: list[dict[str, Any]]) -> list[TableCell]:
        cells: list[TableCell] = []
        for cell_token in cell_tokens:
            align = (cell_token.get("attrs") or {}).get("align")
            content = self._process_inline_tokens(cell_token.get("children", []))
            cells.append(TableCell(content=content, alignment=align))
        return cells

    def _process_footnotes(self, token: dict[str, Any]) -> list[Node]:
        """Process the trailing footnotes token into footnote definitions."""
        definitions: list[Node] = []
        for item in token.get("children", []):
            attrs = item.get("attrs") or {}
            definitions.append(
                FootnoteDefinition(
                    identifier=str(attrs.get("key", "")),
                    index=attrs.get("index", len(definitions) + 1),
                    children=self._process_tokens(item.get("children", [])),
                )
            )
        return definitions

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process definition list token.

        Parameters
        ----------
        token : dict
            Definition list token with 'def_list_head' and 'def_list_content' children

        Returns
        -------
        DefinitionList
            Definition list AST node with terms and descriptions in source order

        """
        children: list[Node] = []
        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                children.append(DefinitionTerm(content=self._process_inline_tokens(child.get("children", []))))
            elif child_type == "def_list_content":
                children.append(DefinitionDescription(children=self._process_tokens(child.get("children", []))))
        return DefinitionList(children=children)

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens.

        Adjacent text tokens are merged, so a placeholder such as
        ``%{a_b}`` is never split across text nodes.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline AST nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is None:
                continue
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)

        return nodes

    def _children(self, token: dict[str, Any]) -> list[Node]:
        children = token.get("children")
        if isinstance(children, list):
            return self._process_inline_tokens(children)
        raw = token.get("raw")
        return [Text(content=raw)] if raw else []

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs") or {}
        return Link(url=attrs.get("url", ""), content=self._children(token), title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token. The alt text stays as child nodes."""
        attrs = token.get("attrs") or {}
        return Image(url=attrs.get("url", ""), content=self._children(token), title=attrs.get("title"))

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> FootnoteReference:
        """Handle footnote_ref token."""
        attrs = token.get("attrs") or {}
        return FootnoteReference(identifier=str(token.get("raw", "")), index=attrs.get("index", 1))

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node or None
            Inline AST node, None for unknown token types

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Callable[[dict[str, Any]], Node]] = {
            "text": self._handle_text_token,
            "strong": lambda t: Strong(content=self._children(t)),
            "emphasis": lambda t: Emphasis(content=self._children(t)),
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": lambda t: LineBreak(soft=False),
            "softbreak": lambda t: LineBreak(soft=True),
            "strikethrough": lambda t: Strikethrough(content=self._children(t)),
            "insert": lambda t: Underline(content=self._children(t)),
            "superscript": lambda t: Superscript(content=self._children(t)),
            "subscript": lambda t: Subscript(content=self._children(t)),
            "inline_spoiler": lambda t: Spoiler(content=self._children(t)),
            "inline_html": lambda t: HTMLInline(content=t.get("raw", "")),
            "inline_math": lambda t: MathInline(content=t.get("raw", "")),
            "footnote_ref": self._handle_footnote_ref_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug("Skipping unsupported inline token: %s", token_type)
        return None


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert Markdown string to AST.

    This is a convenience function that creates a converter and parses
    the markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> from glfm_markdown.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToAstConverter(options)
    return converter.parse(markdown_content)


__all__ = ["MarkdownToAstConverter", "markdown_to_ast", "task_items_plugin"]
