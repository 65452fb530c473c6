#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing.

These flags decide which mistune plugins are loaded and how task items are
recognised. Flags that mistune has no counterpart for are accepted so that
a complete GLFM configuration can be passed through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from glfm_markdown.constants import (
    DEFAULT_ALERTS,
    DEFAULT_AUTOLINK,
    DEFAULT_DESCRIPTION_LISTS,
    DEFAULT_FOOTNOTES,
    DEFAULT_GEMOJIS,
    DEFAULT_GREENTEXT,
    DEFAULT_IGNORE_SETEXT,
    DEFAULT_MATH_CODE,
    DEFAULT_MATH_DOLLARS,
    DEFAULT_MULTILINE_BLOCK_QUOTES,
    DEFAULT_RELAXED_AUTOLINKS,
    DEFAULT_RELAXED_TASKLIST_CHARACTER,
    DEFAULT_SMART,
    DEFAULT_SPOILER,
    DEFAULT_STRIKETHROUGH,
    DEFAULT_SUBSCRIPT,
    DEFAULT_SUPERSCRIPT,
    DEFAULT_TABLE,
    DEFAULT_TASKLIST,
    DEFAULT_UNDERLINE,
    DEFAULT_WIKILINKS_TITLE_AFTER_PIPE,
    DEFAULT_WIKILINKS_TITLE_BEFORE_PIPE,
)
from glfm_markdown.options.base import CloneFrozenMixin


# src/glfm_markdown/options/markdown.py
@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for parsing Markdown into the AST.

    Parameters
    ----------
    autolink : bool, default False
        Turn bare URLs into links (mistune ``url`` plugin).
    description_lists : bool, default False
        Parse description lists (mistune ``def_list`` plugin).
    footnotes : bool, default False
        Parse footnote references and definitions.
    math_dollars : bool, default False
        Parse ``$inline$`` and ``$$display$$`` math.
    spoiler : bool, default False
        Parse ``>!`` block and ``>!inline!<`` spoilers.
    strikethrough : bool, default False
        Parse ``~~struck~~`` text.
    subscript : bool, default False
        Parse ``~sub~`` text.
    superscript : bool, default False
        Parse ``^sup^`` text.
    table : bool, default False
        Parse GFM tables.
    tasklist : bool, default False
        Recognise ``[ ]``/``[x]`` task items at the start of list items.
    relaxed_tasklist_character : bool, default False
        Accept any single non-space character as a task symbol.
    underline : bool, default False
        Parse ``^^inserted^^`` text as underline.

    Notes
    -----
    ``alerts``, ``gemojis``, ``greentext``, ``ignore_setext``, ``math_code``,
    ``multiline_block_quotes``, ``relaxed_autolinks``, ``smart`` and the
    wikilink flags have no mistune equivalent and do not change parsing.

    """

    alerts: bool = field(default=DEFAULT_ALERTS, metadata={"help": "Parse GitHub-style alerts", "importance": "advanced"})
    autolink: bool = field(
        default=DEFAULT_AUTOLINK, metadata={"help": "Convert bare URLs into links", "importance": "core"}
    )
    description_lists: bool = field(
        default=DEFAULT_DESCRIPTION_LISTS, metadata={"help": "Parse description lists", "importance": "advanced"}
    )
    footnotes: bool = field(default=DEFAULT_FOOTNOTES, metadata={"help": "Parse footnotes", "importance": "core"})
    gemojis: bool = field(
        default=DEFAULT_GEMOJIS, metadata={"help": "Replace :shortcodes: with emoji", "importance": "advanced"}
    )
    greentext: bool = field(
        default=DEFAULT_GREENTEXT, metadata={"help": "Treat '>' without a space as text", "importance": "advanced"}
    )
    ignore_setext: bool = field(
        default=DEFAULT_IGNORE_SETEXT, metadata={"help": "Ignore setext-style headings", "importance": "advanced"}
    )
    math_code: bool = field(
        default=DEFAULT_MATH_CODE, metadata={"help": "Parse $`math`$ code-style math", "importance": "advanced"}
    )
    math_dollars: bool = field(
        default=DEFAULT_MATH_DOLLARS, metadata={"help": "Parse $dollar$ delimited math", "importance": "core"}
    )
    multiline_block_quotes: bool = field(
        default=DEFAULT_MULTILINE_BLOCK_QUOTES,
        metadata={"help": "Parse >>> fenced block quotes", "importance": "advanced"},
    )
    relaxed_autolinks: bool = field(
        default=DEFAULT_RELAXED_AUTOLINKS,
        metadata={"help": "Relax autolink detection inside brackets and links", "importance": "advanced"},
    )
    relaxed_tasklist_character: bool = field(
        default=DEFAULT_RELAXED_TASKLIST_CHARACTER,
        metadata={"help": "Accept any single character as a task list symbol", "importance": "core"},
    )
    smart: bool = field(default=DEFAULT_SMART, metadata={"help": "Use smart punctuation", "importance": "advanced"})
    spoiler: bool = field(default=DEFAULT_SPOILER, metadata={"help": "Parse spoilers", "importance": "advanced"})
    strikethrough: bool = field(
        default=DEFAULT_STRIKETHROUGH, metadata={"help": "Parse ~~strikethrough~~", "importance": "core"}
    )
    subscript: bool = field(default=DEFAULT_SUBSCRIPT, metadata={"help": "Parse ~subscript~", "importance": "advanced"})
    superscript: bool = field(
        default=DEFAULT_SUPERSCRIPT, metadata={"help": "Parse ^superscript^", "importance": "advanced"}
    )
    table: bool = field(default=DEFAULT_TABLE, metadata={"help": "Parse GFM tables", "importance": "core"})
    tasklist: bool = field(default=DEFAULT_TASKLIST, metadata={"help": "Parse task list items", "importance": "core"})
    underline: bool = field(
        default=DEFAULT_UNDERLINE, metadata={"help": "Parse ^^underline^^", "importance": "advanced"}
    )
    wikilinks_title_after_pipe: bool = field(
        default=DEFAULT_WIKILINKS_TITLE_AFTER_PIPE,
        metadata={"help": "Parse [[url|title]] wikilinks", "importance": "advanced"},
    )
    wikilinks_title_before_pipe: bool = field(
        default=DEFAULT_WIKILINKS_TITLE_BEFORE_PIPE,
        metadata={"help": "Parse [[title|url]] wikilinks", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate field types.

        Raises
        ------
        InvalidOptionsError
            If a boolean flag holds a non-boolean value.

        """
        self._validate_bool_fields()
