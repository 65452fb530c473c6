#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Flat render configuration record.

``RenderOptions`` enumerates every flag the render entry point accepts and
splits them into the three records the pipeline stages consume.

Examples
--------
    >>> options = RenderOptions(tasklist=True, tasklist_classes=True, inapplicable_tasks=True)
    >>> options.to_user_options().inapplicable_tasks
    True
    >>> options.to_formatter_options().tasklist_classes
    True

"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional

from glfm_markdown.constants import (
    DEFAULT_ALERTS,
    DEFAULT_AUTOLINK,
    DEFAULT_DEBUG,
    DEFAULT_DEFAULT_HTML,
    DEFAULT_DESCRIPTION_LISTS,
    DEFAULT_ESCAPE,
    DEFAULT_ESCAPED_CHAR_SPANS,
    DEFAULT_FIGURE_WITH_CAPTION,
    DEFAULT_FOOTNOTES,
    DEFAULT_FULL_INFO_STRING,
    DEFAULT_GEMOJIS,
    DEFAULT_GFM_QUIRKS,
    DEFAULT_GITHUB_PRE_LANG,
    DEFAULT_GREENTEXT,
    DEFAULT_HARDBREAKS,
    DEFAULT_IGNORE_EMPTY_LINKS,
    DEFAULT_IGNORE_SETEXT,
    DEFAULT_INAPPLICABLE_TASKS,
    DEFAULT_MATH_CODE,
    DEFAULT_MATH_DOLLARS,
    DEFAULT_MULTILINE_BLOCK_QUOTES,
    DEFAULT_PLACEHOLDER_DETECTION,
    DEFAULT_RELAXED_AUTOLINKS,
    DEFAULT_RELAXED_TASKLIST_CHARACTER,
    DEFAULT_SMART,
    DEFAULT_SOURCEPOS,
    DEFAULT_SPOILER,
    DEFAULT_STRIKETHROUGH,
    DEFAULT_SUBSCRIPT,
    DEFAULT_SUPERSCRIPT,
    DEFAULT_TABLE,
    DEFAULT_TAGFILTER,
    DEFAULT_TASKLIST,
    DEFAULT_TASKLIST_CLASSES,
    DEFAULT_UNDERLINE,
    DEFAULT_UNSAFE,
    DEFAULT_WIKILINKS_TITLE_AFTER_PIPE,
    DEFAULT_WIKILINKS_TITLE_BEFORE_PIPE,
)
from glfm_markdown.options.base import CloneFrozenMixin
from glfm_markdown.options.html import GlfmUserOptions, HtmlFormatterOptions, UrlRewriter
from glfm_markdown.options.markdown import MarkdownParserOptions


def _project(source: object, target_cls: type) -> dict:
    """Collect the values of ``source`` for every field of ``target_cls``."""
    return {f.name: getattr(source, f.name) for f in fields(target_cls)}


# src/glfm_markdown/options/render.py
@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Every flag accepted by :func:`glfm_markdown.render`.

    Parser flags, formatter flags and GLFM toggles share one flat namespace
    so a configuration file or a CLI invocation can set them together. See
    :class:`MarkdownParserOptions`, :class:`HtmlFormatterOptions` and
    :class:`GlfmUserOptions` for what each flag does.
    """

    alerts: bool = field(default=DEFAULT_ALERTS, metadata={"help": "Parse GitHub-style alerts"})
    autolink: bool = field(default=DEFAULT_AUTOLINK, metadata={"help": "Convert bare URLs into links"})
    description_lists: bool = field(default=DEFAULT_DESCRIPTION_LISTS, metadata={"help": "Parse description lists"})
    escape: bool = field(default=DEFAULT_ESCAPE, metadata={"help": "Escape raw HTML"})
    escaped_char_spans: bool = field(
        default=DEFAULT_ESCAPED_CHAR_SPANS, metadata={"help": "Wrap escaped characters in spans"}
    )
    figure_with_caption: bool = field(
        default=DEFAULT_FIGURE_WITH_CAPTION, metadata={"help": "Wrap images in <figure> with a caption"}
    )
    footnotes: bool = field(default=DEFAULT_FOOTNOTES, metadata={"help": "Parse footnotes"})
    full_info_string: bool = field(
        default=DEFAULT_FULL_INFO_STRING, metadata={"help": "Emit the full code fence info string"}
    )
    gemojis: bool = field(default=DEFAULT_GEMOJIS, metadata={"help": "Replace :shortcodes: with emoji"})
    gfm_quirks: bool = field(default=DEFAULT_GFM_QUIRKS, metadata={"help": "Mimic github.com rendering quirks"})
    github_pre_lang: bool = field(
        default=DEFAULT_GITHUB_PRE_LANG, metadata={"help": "Use <pre lang> for code block languages"}
    )
    greentext: bool = field(default=DEFAULT_GREENTEXT, metadata={"help": "Treat '>' without a space as text"})
    hardbreaks: bool = field(default=DEFAULT_HARDBREAKS, metadata={"help": "Render soft breaks as <br />"})
    header_ids: Optional[str] = field(default=None, metadata={"help": "Prefix for heading anchor ids"})
    ignore_empty_links: bool = field(
        default=DEFAULT_IGNORE_EMPTY_LINKS, metadata={"help": "Leave links with empty labels as literal text"}
    )
    ignore_setext: bool = field(default=DEFAULT_IGNORE_SETEXT, metadata={"help": "Ignore setext-style headings"})
    math_code: bool = field(default=DEFAULT_MATH_CODE, metadata={"help": "Parse $`math`$ code-style math"})
    math_dollars: bool = field(default=DEFAULT_MATH_DOLLARS, metadata={"help": "Parse $dollar$ delimited math"})
    multiline_block_quotes: bool = field(
        default=DEFAULT_MULTILINE_BLOCK_QUOTES, metadata={"help": "Parse >>> fenced block quotes"}
    )
    relaxed_autolinks: bool = field(
        default=DEFAULT_RELAXED_AUTOLINKS, metadata={"help": "Relax autolink detection"}
    )
    relaxed_tasklist_character: bool = field(
        default=DEFAULT_RELAXED_TASKLIST_CHARACTER, metadata={"help": "Accept any character as a task symbol"}
    )
    sourcepos: bool = field(default=DEFAULT_SOURCEPOS, metadata={"help": "Emit data-sourcepos attributes"})
    smart: bool = field(default=DEFAULT_SMART, metadata={"help": "Use smart punctuation"})
    spoiler: bool = field(default=DEFAULT_SPOILER, metadata={"help": "Parse spoilers"})
    strikethrough: bool = field(default=DEFAULT_STRIKETHROUGH, metadata={"help": "Parse ~~strikethrough~~"})
    subscript: bool = field(default=DEFAULT_SUBSCRIPT, metadata={"help": "Parse ~subscript~"})
    superscript: bool = field(default=DEFAULT_SUPERSCRIPT, metadata={"help": "Parse ^superscript^"})
    table: bool = field(default=DEFAULT_TABLE, metadata={"help": "Parse GFM tables"})
    tagfilter: bool = field(default=DEFAULT_TAGFILTER, metadata={"help": "Filter GFM disallowed raw HTML tags"})
    tasklist: bool = field(default=DEFAULT_TASKLIST, metadata={"help": "Parse task list items"})
    tasklist_classes: bool = field(default=DEFAULT_TASKLIST_CLASSES, metadata={"help": "Emit task list CSS classes"})
    underline: bool = field(default=DEFAULT_UNDERLINE, metadata={"help": "Parse ^^underline^^"})
    unsafe: bool = field(default=DEFAULT_UNSAFE, metadata={"help": "Render raw HTML and dangerous URLs"})
    wikilinks_title_after_pipe: bool = field(
        default=DEFAULT_WIKILINKS_TITLE_AFTER_PIPE, metadata={"help": "Parse [[url|title]] wikilinks"}
    )
    wikilinks_title_before_pipe: bool = field(
        default=DEFAULT_WIKILINKS_TITLE_BEFORE_PIPE, metadata={"help": "Parse [[title|url]] wikilinks"}
    )

    default_html: bool = field(default=DEFAULT_DEFAULT_HTML, metadata={"help": "Only use default HTML formatting"})
    inapplicable_tasks: bool = field(
        default=DEFAULT_INAPPLICABLE_TASKS, metadata={"help": "Detect inapplicable tasks (- [~])"}
    )
    placeholder_detection: bool = field(
        default=DEFAULT_PLACEHOLDER_DETECTION, metadata={"help": "Detect and mark %%{PLACEHOLDER} variables"}
    )
    debug: bool = field(default=DEFAULT_DEBUG, metadata={"help": "Log override decisions"})

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
            If a boolean flag holds a non-boolean value.

        """
        self._validate_bool_fields()

    def to_parser_options(self) -> MarkdownParserOptions:
        """Return the flags consumed by the Markdown parser."""
        return MarkdownParserOptions(**_project(self, MarkdownParserOptions))

    def to_formatter_options(self) -> HtmlFormatterOptions:
        """Return the flags consumed by the HTML formatters."""
        return HtmlFormatterOptions(**_project(self, HtmlFormatterOptions))

    def to_user_options(self) -> GlfmUserOptions:
        """Return the toggles consumed by the override layer."""
        return GlfmUserOptions(**_project(self, GlfmUserOptions))
