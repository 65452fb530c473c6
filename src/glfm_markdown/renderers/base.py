#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/renderers/base.py
"""Per-render state shared by the default formatter and the GLFM overrides.

A :class:`RenderContext` is built once per render call. It owns a private output
buffer and the ancestor stack maintained by the walker, and exposes the small
set of write primitives every handler uses, so the default formatter and the
overrides escape text identically.

"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Optional, TextIO

from glfm_markdown.ast.nodes import List, ListItem, Node, TaskItem
from glfm_markdown.ast.walker import ChildRendering
from glfm_markdown.exceptions import OutputWriteError
from glfm_markdown.options.html import GlfmUserOptions, HtmlFormatterOptions, UrlRewriter
from glfm_markdown.utils.html_utils import escape_href, escape_html
from glfm_markdown.utils.security import is_dangerous_url

if TYPE_CHECKING:
    from glfm_markdown.renderers.html import HtmlFormatter


class RenderContext:
    """Output buffer, options and traversal state for a single render.

    Parameters
    ----------
    options : HtmlFormatterOptions
        Formatter flags (escaping, classes, sourcepos, URL safety)
    user : GlfmUserOptions or None, default = None
        Override toggles; all off when omitted
    formatter : HtmlFormatter or None, default = None
        Formatter driving the render. Fallbacks to the default markup go
        through it, so subclass ``visit_*`` methods are honoured.

    Attributes
    ----------
    buffer : io.StringIO
        Everything written so far. Callers copy it out once the walk is done.
    ancestors : list of Node
        Open containers from the root down to the parent of the node being
        visited. Maintained by :func:`glfm_markdown.ast.walker.walk`.
    anchors : set of str
        Heading anchors already emitted, used to keep ids unique
    footnotes_open : bool
        True once the trailing footnote section has been opened

    """

    def __init__(
        self,
        options: HtmlFormatterOptions,
        user: Optional[GlfmUserOptions] = None,
        formatter: Optional[HtmlFormatter] = None,
    ):
        """Initialize an empty render context."""
        self.options = options
        self.user = user if user is not None else GlfmUserOptions()
        self.formatter = formatter
        self.buffer = io.StringIO()
        self.ancestors: list[Node] = []
        self.anchors: set[str] = set()
        self.footnotes_open = False
        self.footnote_backrefs: set[int] = set()
        self._last_char = ""

    @property
    def parent(self) -> Optional[Node]:
        """Parent of the node currently being visited, None at the root."""
        return self.ancestors[-1] if self.ancestors else None

    def write(self, text: str) -> None:
        """Append ``text`` to the buffer verbatim."""
        if not text:
            return
        self.buffer.write(text)
        self._last_char = text[-1]

    def cr(self) -> None:
        """Start a new line unless the output is empty or already at one."""
        if self._last_char and self._last_char != "\n":
            self.write("\n")

    def escape(self, text: str) -> None:
        """Write ``text`` with HTML special characters escaped."""
        self.write(escape_html(text))

    def escape_href(self, url: str) -> None:
        """Write ``url`` escaped for an ``href``/``src`` attribute."""
        self.write(escape_href(url))

    def write_plain(self, text: str) -> None:
        """Write flattened child text; used for ``ChildRendering.PLAIN``."""
        self.escape(text)

    def write_url(self, url: str, rewriter: Optional[UrlRewriter] = None) -> None:
        """Write an attribute URL, honouring safe mode and a URL rewriter.

        Dangerous URLs produce an empty value unless ``unsafe`` is set. The
        rewriter, when given, sees the raw URL and its result is escaped.
        """
        if not self.options.unsafe and is_dangerous_url(url):
            return
        if rewriter is not None:
            url = rewriter(url)
        self.escape_href(url)

    def render_sourcepos(self, node: Node) -> None:
        """Write ` data-sourcepos="..."` when enabled and the node has a position."""
        if self.options.sourcepos and node.source_position is not None:
            self.write(f' data-sourcepos="{node.source_position}"')

    def in_tight_list(self) -> bool:
        """Return True if the current node sits directly inside a tight list item."""
        if len(self.ancestors) < 2:
            return False
        item, container = self.ancestors[-1], self.ancestors[-2]
        return isinstance(item, (ListItem, TaskItem)) and isinstance(container, List) and container.tight

    def getvalue(self) -> str:
        """Return everything written so far."""
        return self.buffer.getvalue()

    def flush_to(self, sink: TextIO) -> None:
        """Copy the finished HTML to ``sink`` in a single write.

        Raises
        ------
        OutputWriteError
            If the sink raises an ``OSError``

        """
        try:
            sink.write(self.getvalue())
        except OSError as e:
            raise OutputWriteError(original_error=e) from e


__all__ = ["ChildRendering", "RenderContext"]
