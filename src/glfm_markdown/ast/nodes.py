#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy produced by the Markdown parser and
consumed by the HTML formatters. Each node class carries a ``kind`` tag that
the formatters use as their dispatch key.

Node Hierarchy
--------------
Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, TaskItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock, FootnoteDefinition, MathBlock
    - DefinitionList, DefinitionTerm, DefinitionDescription

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Code
    - Link, Image, LineBreak
    - Strikethrough, Underline, Superscript, Subscript, Spoiler
    - HTMLInline, FootnoteReference, MathInline

Leaf kinds (``is_leaf``) are visited once by the walker. Every other kind is
visited on entering and again on leaving.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Optional

Alignment = Literal["left", "center", "right"]


@dataclass(frozen=True)
class SourcePosition:
    """Source span of a node, 1-based and inclusive.

    Parameters
    ----------
    start_line : int
        Line where the node starts
    start_column : int
        Column where the node starts
    end_line : int
        Line where the node ends
    end_column : int
        Column where the node ends

    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_column}-{self.end_line}:{self.end_column}"


class Node:
    """Base class for all AST nodes.

    Attributes
    ----------
    kind : str
        Dispatch tag of the node class (``"text"``, ``"link"``, ...)
    is_leaf : bool
        True for kinds that never own child nodes
    metadata : dict
        Arbitrary metadata associated with this node
    source_position : SourcePosition or None
        Where this node came from in the source, when known

    """

    kind: ClassVar[str] = "node"
    is_leaf: ClassVar[bool] = False

    metadata: dict[str, Any]
    source_position: Optional[SourcePosition]


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata
    source_position : SourcePosition or None, default = None
        Source location information

    """

    kind: ClassVar[str] = "document"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level, 1 to 6
    content : list of Node
        Inline content of the heading

    """

    kind: ClassVar[str] = "heading"

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    kind: ClassVar[str] = "paragraph"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    content : str
        Literal code
    info_string : str or None, default = None
        Full fence info string; the first word is the language

    """

    kind: ClassVar[str] = "code_block"
    is_leaf: ClassVar[bool] = True

    content: str
    info_string: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None

    @property
    def language(self) -> Optional[str]:
        """First word of the info string, or None."""
        if not self.info_string:
            return None
        parts = self.info_string.split(maxsplit=1)
        return parts[0] if parts else None


@dataclass
class BlockQuote(Node):
    """Block quote containing block-level children."""

    kind: ClassVar[str] = "block_quote"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class List(Node):
    """Bullet or ordered list.

    Parameters
    ----------
    ordered : bool, default = False
        True for ``<ol>``, False for ``<ul>``
    items : list of Node, default = empty list
        ListItem or TaskItem children
    start : int, default = 1
        Starting index of an ordered list
    tight : bool, default = True
        Tight lists render item paragraphs without ``<p>`` wrappers
    is_task_list : bool, default = False
        True when at least one item is a TaskItem

    """

    kind: ClassVar[str] = "list"

    ordered: bool = False
    items: list[Node] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    is_task_list: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class ListItem(Node):
    """Plain list item containing block-level children."""

    kind: ClassVar[str] = "list_item"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class TaskItem(Node):
    """List item carrying a task status symbol.

    Parameters
    ----------
    symbol : str or None, default = None
        The character between the brackets. ``None`` is the unchecked
        ``[ ]`` item, ``x``/``X`` is checked, ``~`` is inapplicable and
        any other character is an unrecognised custom symbol.
    children : list of Node, default = empty list
        Block-level content of the item

    """

    kind: ClassVar[str] = "task_item"

    symbol: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None

    def __post_init__(self) -> None:
        if self.symbol is not None and len(self.symbol) != 1:
            raise ValueError(f"Task symbol must be a single character, got {self.symbol!r}")


@dataclass
class Table(Node):
    """Table with an optional header row and body rows."""

    kind: ClassVar[str] = "table"

    header: Optional[TableRow] = None
    rows: list[TableRow] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class TableRow(Node):
    """Table row; ``is_header`` rows render ``<th>`` cells."""

    kind: ClassVar[str] = "table_row"

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class TableCell(Node):
    """Table cell with inline content and optional alignment."""

    kind: ClassVar[str] = "table_cell"

    content: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    kind: ClassVar[str] = "thematic_break"
    is_leaf: ClassVar[bool] = True

    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class HTMLBlock(Node):
    """Raw HTML block."""

    kind: ClassVar[str] = "html_block"
    is_leaf: ClassVar[bool] = True

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class FootnoteDefinition(Node):
    """Footnote body, rendered in the footnotes section.

    Parameters
    ----------
    identifier : str
        Footnote label as written in the source
    index : int
        1-based display number
    children : list of Node
        Block-level content

    """

    kind: ClassVar[str] = "footnote_definition"

    identifier: str
    index: int = 1
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class DefinitionList(Node):
    """Description list of alternating terms and descriptions."""

    kind: ClassVar[str] = "definition_list"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class DefinitionTerm(Node):
    """Term inside a description list."""

    kind: ClassVar[str] = "definition_term"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class DefinitionDescription(Node):
    """Description inside a description list."""

    kind: ClassVar[str] = "definition_description"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class MathBlock(Node):
    """Display math."""

    kind: ClassVar[str] = "math_block"
    is_leaf: ClassVar[bool] = True

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text.

    Parameters
    ----------
    content : str
        The literal text, unescaped

    """

    kind: ClassVar[str] = "text"
    is_leaf: ClassVar[bool] = True

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Emphasis(Node):
    """Emphasised inline content."""

    kind: ClassVar[str] = "emphasis"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Strong(Node):
    """Strongly emphasised inline content."""

    kind: ClassVar[str] = "strong"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Code(Node):
    """Inline code span."""

    kind: ClassVar[str] = "code"
    is_leaf: ClassVar[bool] = True

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Link(Node):
    """Hyperlink.

    Parameters
    ----------
    url : str
        Link destination
    content : list of Node, default = empty list
        Link label
    title : str or None, default = None
        Optional title; an empty string counts as absent

    """

    kind: ClassVar[str] = "link"

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Image(Node):
    """Image.

    Parameters
    ----------
    url : str
        Image source
    content : list of Node, default = empty list
        Alt text, rendered as plain text
    title : str or None, default = None
        Optional title; an empty string counts as absent

    """

    kind: ClassVar[str] = "image"

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class LineBreak(Node):
    """Line break; ``soft`` breaks come from plain newlines."""

    kind: ClassVar[str] = "line_break"
    is_leaf: ClassVar[bool] = True

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Strikethrough(Node):
    """Struck-through inline content."""

    kind: ClassVar[str] = "strikethrough"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Underline(Node):
    """Underlined inline content."""

    kind: ClassVar[str] = "underline"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Superscript(Node):
    """Superscript inline content."""

    kind: ClassVar[str] = "superscript"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Subscript(Node):
    """Subscript inline content."""

    kind: ClassVar[str] = "subscript"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class Spoiler(Node):
    """Spoiler content (``>!hidden!<``)."""

    kind: ClassVar[str] = "spoiler"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class HTMLInline(Node):
    """Raw inline HTML."""

    kind: ClassVar[str] = "html_inline"
    is_leaf: ClassVar[bool] = True

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class FootnoteReference(Node):
    """Reference to a footnote definition."""

    kind: ClassVar[str] = "footnote_reference"
    is_leaf: ClassVar[bool] = True

    identifier: str
    index: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


@dataclass
class MathInline(Node):
    """Inline math."""

    kind: ClassVar[str] = "math_inline"
    is_leaf: ClassVar[bool] = True

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_position: Optional[SourcePosition] = None


def get_node_children(node: Node) -> list[Node]:
    """Get the ordered child nodes of any node type.

    Parameters
    ----------
    node : Node
        Node to inspect

    Returns
    -------
    list of Node
        Child nodes in document order, empty for leaf kinds

    """
    if node.is_leaf:
        return []
    if isinstance(node, List):
        return node.items
    if isinstance(node, Table):
        rows: list[Node] = [node.header] if node.header is not None else []
        rows.extend(node.rows)
        return rows
    if isinstance(node, TableRow):
        return list(node.cells)
    children = getattr(node, "children", None)
    if children is not None:
        return children
    return getattr(node, "content", [])


def plain_text(nodes: list[Node]) -> str:
    """Collect the literal text of ``nodes`` and their descendants.

    Breaks become single spaces, markup is dropped.

    Parameters
    ----------
    nodes : list of Node
        Nodes to flatten

    Returns
    -------
    str
        Unescaped plain text

    """
    parts: list[str] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        if isinstance(node, (Text, Code, HTMLInline, MathInline)):
            parts.append(node.content)
        elif isinstance(node, LineBreak):
            parts.append(" ")
        else:
            stack.extend(reversed(get_node_children(node)))
    return "".join(parts)
