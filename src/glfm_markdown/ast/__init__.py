#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/ast/__init__.py
"""Abstract Syntax Tree module for glfm_markdown.

The parser builds these nodes from Markdown text and the HTML formatters
walk them. Nodes are plain dataclasses, so documents can also be built by
hand:

    >>> from glfm_markdown.ast import Document, Paragraph, Text
    >>> doc = Document(children=[Paragraph(content=[Text(content="Hello")])])

"""

from glfm_markdown.ast.nodes import (
    Alignment,
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
    SourcePosition,
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
    get_node_children,
    plain_text,
)
from glfm_markdown.ast.walker import ChildRendering, NodeHandler, walk

__all__ = [
    "ChildRendering",
    "NodeHandler",
    "walk",
    "Alignment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "DefinitionDescription",
    "DefinitionList",
    "DefinitionTerm",
    "Document",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "MathBlock",
    "MathInline",
    "Node",
    "Paragraph",
    "SourcePosition",
    "Spoiler",
    "Strikethrough",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableCell",
    "TableRow",
    "TaskItem",
    "Text",
    "ThematicBreak",
    "Underline",
    "get_node_children",
    "plain_text",
]
