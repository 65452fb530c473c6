#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/ast/walker.py
"""Depth-first traversal with entering and leaving visits.

The walker drives every HTML formatter. Container nodes are visited twice,
once before their children (``entering=True``) and once after
(``entering=False``). Leaf kinds are visited only on entering.

Handlers steer the traversal through their return value, a
:class:`ChildRendering` signal:

- ``HTML``: children are dispatched to the handler as usual
- ``PLAIN``: children are flattened to escaped plain text and written
  directly, without being dispatched (image alt text)
- ``SKIP``: children are not rendered at all

While a handler runs, ``context.ancestors`` holds the chain of open
containers from the root down to the node's parent, so a handler can look
at its parent without nodes carrying back-references.

"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from glfm_markdown.ast.nodes import Node, get_node_children, plain_text


class ChildRendering(Enum):
    """How the walker treats the children of the node just rendered."""

    HTML = "html"
    PLAIN = "plain"
    SKIP = "skip"


NodeHandler = Callable[[Any, Node, bool], ChildRendering]


def walk(root: Node, context: Any, handler: NodeHandler) -> None:
    """Traverse ``root`` depth-first, calling ``handler`` for every visit.

    The traversal is iterative so deeply nested documents cannot exhaust the
    interpreter stack.

    Parameters
    ----------
    root : Node
        Root of the tree to render, usually a Document
    context : RenderContext
        Render state. The walker maintains ``context.ancestors`` and writes
        plain-text children through ``context.write_plain``.
    handler : callable
        ``handler(context, node, entering) -> ChildRendering``

    """
    stack: list[tuple[Node, bool]] = [(root, True)]
    while stack:
        node, entering = stack.pop()

        if not entering:
            context.ancestors.pop()
            handler(context, node, False)
            continue

        signal = handler(context, node, True)
        if node.is_leaf:
            continue

        context.ancestors.append(node)
        stack.append((node, False))

        if signal is ChildRendering.PLAIN:
            context.write_plain(plain_text(get_node_children(node)))
        elif signal is ChildRendering.HTML:
            stack.extend((child, True) for child in reversed(get_node_children(node)))


__all__ = ["ChildRendering", "NodeHandler", "walk"]
