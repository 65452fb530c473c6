#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML formatting.

``HtmlFormatterOptions`` controls the markup both the default formatter and
the GLFM overrides emit. ``GlfmUserOptions`` holds the toggles that only the
override layer reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from glfm_markdown.constants import (
    DEFAULT_DEBUG,
    DEFAULT_DEFAULT_HTML,
    DEFAULT_ESCAPE,
    DEFAULT_ESCAPED_CHAR_SPANS,
    DEFAULT_FIGURE_WITH_CAPTION,
    DEFAULT_FULL_INFO_STRING,
    DEFAULT_GFM_QUIRKS,
    DEFAULT_GITHUB_PRE_LANG,
    DEFAULT_HARDBREAKS,
    DEFAULT_IGNORE_EMPTY_LINKS,
    DEFAULT_INAPPLICABLE_TASKS,
    DEFAULT_PLACEHOLDER_DETECTION,
    DEFAULT_RELAXED_AUTOLINKS,
    DEFAULT_SOURCEPOS,
    DEFAULT_TAGFILTER,
    DEFAULT_TASKLIST_CLASSES,
    DEFAULT_UNSAFE,
)
from glfm_markdown.exceptions import InvalidOptionsError
from glfm_markdown.options.base import CloneFrozenMixin

UrlRewriter = Callable[[str], str]


# src/glfm_markdown/options/html.py
@dataclass(frozen=True)
class HtmlFormatterOptions(CloneFrozenMixin):
    """Configuration options for rendering the AST to HTML.

    Parameters
    ----------
    escape : bool, default False
        Escape raw HTML instead of omitting or passing it through.
    figure_with_caption : bool, default False
        Wrap images in ``<figure>`` and render titles as ``<figcaption>``.
    full_info_string : bool, default False
        Emit the whole code fence info string as ``data-meta``.
    github_pre_lang : bool, default False
        Put the code language on ``<pre lang>`` instead of a class.
    hardbreaks : bool, default False
        Render soft line breaks as ``<br />``.
    header_ids : str or None, default None
        Prefix for heading anchor ids. None disables anchors.
    ignore_empty_links : bool, default False
        Leave links with an empty label, such as ``[]()``, as literal text.
    sourcepos : bool, default False
        Emit ``data-sourcepos`` for nodes that carry a source position.
    tasklist_classes : bool, default False
        Emit task list CSS classes.
    unsafe : bool, default False
        Keep raw HTML and dangerous URLs.
    tagfilter : bool, default False
        Neutralise GFM disallowed raw HTML tags.
    relaxed_autolinks : bool, default False
        Suppress anchors nested directly inside another link.
    link_url_rewriter : callable or None, default None
        Rewrites link destinations before they are escaped.
    image_url_rewriter : callable or None, default None
        Rewrites image sources before they are escaped.

    """

    escape: bool = field(default=DEFAULT_ESCAPE, metadata={"help": "Escape raw HTML", "importance": "security"})
    escaped_char_spans: bool = field(
        default=DEFAULT_ESCAPED_CHAR_SPANS,
        metadata={"help": "Wrap escaped characters in spans", "importance": "advanced"},
    )
    figure_with_caption: bool = field(
        default=DEFAULT_FIGURE_WITH_CAPTION,
        metadata={"help": "Wrap images in <figure> with a <figcaption> title", "importance": "core"},
    )
    full_info_string: bool = field(
        default=DEFAULT_FULL_INFO_STRING,
        metadata={"help": "Emit the full code fence info string", "importance": "advanced"},
    )
    gfm_quirks: bool = field(
        default=DEFAULT_GFM_QUIRKS, metadata={"help": "Mimic github.com rendering quirks", "importance": "advanced"}
    )
    github_pre_lang: bool = field(
        default=DEFAULT_GITHUB_PRE_LANG,
        metadata={"help": "Use <pre lang> for code block languages", "importance": "advanced"},
    )
    hardbreaks: bool = field(
        default=DEFAULT_HARDBREAKS, metadata={"help": "Render soft breaks as <br />", "importance": "core"}
    )
    header_ids: Optional[str] = field(
        default=None, metadata={"help": "Prefix for heading anchor ids (enables anchors)", "importance": "core"}
    )
    ignore_empty_links: bool = field(
        default=DEFAULT_IGNORE_EMPTY_LINKS,
        metadata={"help": "Leave links with empty labels as literal text", "importance": "advanced"},
    )
    sourcepos: bool = field(
        default=DEFAULT_SOURCEPOS, metadata={"help": "Emit data-sourcepos attributes", "importance": "advanced"}
    )
    tasklist_classes: bool = field(
        default=DEFAULT_TASKLIST_CLASSES,
        metadata={"help": "Emit task list CSS classes", "importance": "core"},
    )
    unsafe: bool = field(
        default=DEFAULT_UNSAFE,
        metadata={"help": "Render raw HTML and dangerous URLs", "importance": "security"},
    )
    tagfilter: bool = field(
        default=DEFAULT_TAGFILTER, metadata={"help": "Filter GFM disallowed raw HTML tags", "importance": "security"}
    )
    relaxed_autolinks: bool = field(
        default=DEFAULT_RELAXED_AUTOLINKS,
        metadata={"help": "Suppress links nested directly in links", "importance": "advanced"},
    )
    link_url_rewriter: Optional[UrlRewriter] = field(
        default=None, metadata={"help": "Callable rewriting link URLs", "exclude_from_cli": True}
    )
    image_url_rewriter: Optional[UrlRewriter] = field(
        default=None, metadata={"help": "Callable rewriting image URLs", "exclude_from_cli": True}
    )

    def __post_init__(self) -> None:
        """Validate field types.

        Raises
        ------
        InvalidOptionsError
            If a flag has the wrong type or a rewriter is not callable.

        """
        self._validate_bool_fields()
        for name in ("link_url_rewriter", "image_url_rewriter"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise InvalidOptionsError(
                    type(self).__name__,
                    type(self),
                    type(value),
                    message=f"{name} must be callable, got {type(value).__name__}",
                )


@dataclass(frozen=True)
class GlfmUserOptions(CloneFrozenMixin):
    """Toggles read only by the GLFM override layer.

    Parameters
    ----------
    default_html : bool, default False
        Bypass every override and use the default formatter only.
    inapplicable_tasks : bool, default False
        Render ``[~]`` items as inapplicable tasks.
    placeholder_detection : bool, default False
        Mark ``%{name}`` placeholders in text, links and images.
    debug : bool, default False
        Log every override decision at DEBUG level.

    """

    default_html: bool = field(
        default=DEFAULT_DEFAULT_HTML, metadata={"help": "Only use default HTML formatting", "importance": "core"}
    )
    inapplicable_tasks: bool = field(
        default=DEFAULT_INAPPLICABLE_TASKS,
        metadata={"help": "Detect inapplicable tasks (- [~])", "importance": "core"},
    )
    placeholder_detection: bool = field(
        default=DEFAULT_PLACEHOLDER_DETECTION,
        metadata={"help": "Detect and mark %{PLACEHOLDER} variables", "importance": "core"},
    )
    debug: bool = field(default=DEFAULT_DEBUG, metadata={"help": "Log override decisions", "importance": "advanced"})

    def __post_init__(self) -> None:
        """Validate field types."""
        self._validate_bool_fields()
