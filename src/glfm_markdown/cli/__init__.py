#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for glfm-markdown.

Usage::

    glfm-markdown README.md --tasklist --relaxed-tasklist-character --inapplicable-tasks
    cat notes.md | glfm-markdown --placeholder-detection --out notes.html

Options are resolved in increasing priority: built-in defaults, the
configuration file, ``GLFM_MARKDOWN_<OPTION>`` environment variables, and
finally the flags on the command line.

Exit codes: 0 success, 1 rendering error, 2 invalid arguments or
configuration, 3 file error.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from glfm_markdown.api import render
from glfm_markdown.cli.builder import (
    EXIT_FILE_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    DynamicCLIBuilder,
)
from glfm_markdown.cli.config import CONFIG_ENV_VAR, load_config_file, load_env_options, normalize_keys
from glfm_markdown.exceptions import ConfigError, GlfmError, ValidationError
from glfm_markdown.logging_utils import configure_logging
from glfm_markdown.options.render import RenderOptions

logger = logging.getLogger(__name__)


def _read_input(source: str) -> str:
    """Read Markdown from a file path, or from stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(html: str, destination: str | None) -> None:
    """Write HTML to a file, or to stdout when no destination is given."""
    if destination:
        Path(destination).write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)


def build_options(builder: DynamicCLIBuilder, parsed_args: Any) -> RenderOptions:
    """Merge config file, environment and CLI values into RenderOptions.

    Raises
    ------
    ConfigError
        If the configuration file or an environment variable is invalid
    InvalidOptionsError
        If the merged values do not form valid options

    """
    values: Dict[str, Any] = {}

    config_path = parsed_args.config or os.environ.get(CONFIG_ENV_VAR)
    if config_path:
        logger.debug("Loading configuration from %s", config_path)
        values.update(normalize_keys(load_config_file(config_path)))

    values.update(load_env_options(builder.bool_field_names(), builder.str_field_names()))
    values.update(builder.map_args_to_options(parsed_args))

    return RenderOptions.from_dict(values)


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    builder = DynamicCLIBuilder()
    parser = builder.build_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = build_options(builder, parsed_args)
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        text = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        html = render(text, options)
    except GlfmError as e:
        logger.debug("Rendering failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RENDERING_ERROR

    try:
        _write_output(html, parsed_args.out)
    except OSError as e:
        print(f"Error: cannot write output: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS


__all__ = ["build_options", "main"]
