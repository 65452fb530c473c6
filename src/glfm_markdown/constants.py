#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/constants.py
"""Constants and default values used across glfm_markdown.

Defaults for every rendering flag live here so that the option dataclasses,
the CLI and the documentation share a single source of truth.
"""

from __future__ import annotations

import re
from typing import Final

# ============================================================================
# Placeholder detection
# ============================================================================

PLACEHOLDER_MAX_NAME_LENGTH: Final = 30

# `%{name}` or its percent-encoded form `%7Bname%7D`
PLACEHOLDER_REGEX: Final = (
    rf"%\{{(\w{{1,{PLACEHOLDER_MAX_NAME_LENGTH}}})\}}|%7B(\w{{1,{PLACEHOLDER_MAX_NAME_LENGTH}}})%7D"
)

# ============================================================================
# URL safety
# ============================================================================

DANGEROUS_URL_SCHEMES: Final = ("javascript:", "vbscript:", "file:", "data:")
SAFE_DATA_URL_PREFIXES: Final = ("data:image/png", "data:image/gif", "data:image/jpeg", "data:image/webp")

# Characters left untouched by href escaping, everything else is percent-encoded
HREF_SAFE_CHARS: Final = frozenset("-_.+!*(),%#@?=;:/,+$~abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")

# GFM "disallowed raw HTML" tags neutralised by the tagfilter extension
TAGFILTER_TAGS: Final = (
    "title",
    "textarea",
    "style",
    "xmp",
    "iframe",
    "noembed",
    "noframes",
    "script",
    "plaintext",
)
TAGFILTER_PATTERN: Final = re.compile(r"<(/?(?:" + "|".join(TAGFILTER_TAGS) + r")\b)", re.IGNORECASE)

RAW_HTML_OMITTED: Final = "<!-- raw HTML omitted -->"

# ============================================================================
# CSS classes
# ============================================================================

GLFM_TASK_LIST_CLASS: Final = "task-list"
DEFAULT_TASK_LIST_CLASS: Final = "contains-task-list"
TASK_LIST_ITEM_CLASS: Final = "task-list-item"
TASK_LIST_ITEM_CHECKBOX_CLASS: Final = "task-list-item-checkbox"
INAPPLICABLE_TASK_CLASS: Final = "inapplicable"

CHECKED_TASK_SYMBOLS: Final = frozenset({"x", "X"})
INAPPLICABLE_TASK_SYMBOL: Final = "~"

# ============================================================================
# Rendering defaults
# ============================================================================

DEFAULT_ALERTS = False
DEFAULT_AUTOLINK = False
DEFAULT_DESCRIPTION_LISTS = False
DEFAULT_ESCAPE = False
DEFAULT_ESCAPED_CHAR_SPANS = False
DEFAULT_FIGURE_WITH_CAPTION = False
DEFAULT_FOOTNOTES = False
DEFAULT_FULL_INFO_STRING = False
DEFAULT_GEMOJIS = False
DEFAULT_GFM_QUIRKS = False
DEFAULT_GITHUB_PRE_LANG = False
DEFAULT_GREENTEXT = False
DEFAULT_HARDBREAKS = False
DEFAULT_IGNORE_EMPTY_LINKS = False
DEFAULT_IGNORE_SETEXT = False
DEFAULT_MATH_CODE = False
DEFAULT_MATH_DOLLARS = False
DEFAULT_MULTILINE_BLOCK_QUOTES = False
DEFAULT_RELAXED_AUTOLINKS = False
DEFAULT_RELAXED_TASKLIST_CHARACTER = False
DEFAULT_SOURCEPOS = False
DEFAULT_SMART = False
DEFAULT_SPOILER = False
DEFAULT_STRIKETHROUGH = False
DEFAULT_SUBSCRIPT = False
DEFAULT_SUPERSCRIPT = False
DEFAULT_TABLE = False
DEFAULT_TAGFILTER = False
DEFAULT_TASKLIST = False
DEFAULT_TASKLIST_CLASSES = False
DEFAULT_UNDERLINE = False
DEFAULT_UNSAFE = False
DEFAULT_WIKILINKS_TITLE_AFTER_PIPE = False
DEFAULT_WIKILINKS_TITLE_BEFORE_PIPE = False

DEFAULT_DEFAULT_HTML = False
DEFAULT_INAPPLICABLE_TASKS = False
DEFAULT_PLACEHOLDER_DETECTION = False
DEFAULT_DEBUG = False

# ============================================================================
# CLI / configuration
# ============================================================================

CONFIG_TOOL_SECTION: Final = "glfm-markdown"
ENV_PREFIX: Final = "GLFM_MARKDOWN_"

EXIT_SUCCESS: Final = 0
EXIT_RENDERING_ERROR: Final = 1
EXIT_VALIDATION_ERROR: Final = 2
EXIT_FILE_ERROR: Final = 3
