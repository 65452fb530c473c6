#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Dynamic CLI argument builder for glfm-markdown.

Every :class:`RenderOptions` field becomes a command line flag, generated
from the dataclass field metadata so the CLI never drifts from the options.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Optional

from glfm_markdown.constants import (
    EXIT_FILE_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from glfm_markdown.options.render import RenderOptions

logger = logging.getLogger(__name__)

CLI_METADATA_EXCLUDE = "exclude_from_cli"

__all__ = [
    "EXIT_FILE_ERROR",
    "EXIT_RENDERING_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "DynamicCLIBuilder",
    "create_parser",
]


class DynamicCLIBuilder:
    """Builds CLI arguments from the :class:`RenderOptions` dataclass.

    Boolean fields defaulting to False become ``--flag`` (``store_true``),
    those defaulting to True become ``--no-flag`` (``store_false``). String
    fields take a value. Fields whose metadata sets ``exclude_from_cli``,
    such as the URL rewriter callables, are skipped.

    Absent flags are left out of the parsed namespace entirely, so values
    from configuration files and the environment are only overridden by
    flags the user actually passed.
    """

    def __init__(self, options_class: type = RenderOptions) -> None:
        """Initialize the builder for an options dataclass."""
        self.options_class = options_class
        self.dest_to_cli_flag: Dict[str, str] = {}

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        """Convert a field name to its flag spelling, e.g. ``header_ids`` to ``header-ids``."""
        return name.replace("_", "-")

    def cli_fields(self) -> list[Field]:
        """Return the option fields exposed on the command line."""
        return [f for f in fields(self.options_class) if not f.metadata.get(CLI_METADATA_EXCLUDE, False)]

    def bool_field_names(self) -> set[str]:
        """Return the names of the boolean option fields."""
        return {f.name for f in self.cli_fields() if f.type in ("bool", bool)}

    def str_field_names(self) -> set[str]:
        """Return the names of the string-valued option fields."""
        return {f.name for f in self.cli_fields() if f.type not in ("bool", bool)}

    def get_argument_kwargs(self, field: Field) -> tuple[str, Dict[str, Any]]:
        """Build the flag name and ``add_argument`` kwargs for one field.

        Parameters
        ----------
        field : Field
            Dataclass field of the options class

        Returns
        -------
        tuple of (str, dict)
            The flag and the keyword arguments for ``add_argument``

        """
        help_text = field.metadata.get("help", "")
        kwargs: Dict[str, Any] = {"dest": field.name, "default": argparse.SUPPRESS, "help": help_text}
        flag = f"--{self.snake_to_kebab(field.name)}"

        if field.type in ("bool", bool):
            default = field.default if field.default is not MISSING else False
            if default is True:
                flag = f"--no-{self.snake_to_kebab(field.name)}"
                kwargs["action"] = "store_false"
            else:
                kwargs["action"] = "store_true"
        else:
            kwargs["metavar"] = field.name.upper().replace("_", "-")
            kwargs["type"] = str

        return flag, kwargs

    def add_options_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add one argument per exposed options field to ``parser``."""
        group = parser.add_argument_group("rendering options")
        for field in self.cli_fields():
            flag, kwargs = self.get_argument_kwargs(field)
            group.add_argument(flag, **kwargs)
            self.dest_to_cli_flag[field.name] = flag

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the complete argument parser."""
        parser = argparse.ArgumentParser(
            prog="glfm-markdown",
            description="Render GitLab Flavored Markdown to HTML.",
        )
        parser.add_argument("input", nargs="?", default="-", help="Markdown file to render, '-' for stdin")
        parser.add_argument("--out", "-o", metavar="FILE", help="Write HTML to FILE instead of stdout")
        parser.add_argument(
            "--config",
            metavar="FILE",
            help="Load options from a JSON, TOML, YAML or pyproject.toml file. "
            "Defaults to the GLFM_MARKDOWN_CONFIG environment variable.",
        )
        parser.add_argument(
            "--log-level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            type=str.upper,
            help="Logging level (default: WARNING)",
        )
        parser.add_argument("--log-file", metavar="FILE", help="Also write log records to FILE")
        parser.add_argument("--trace", action="store_true", help="Include timestamps and logger names in logs")
        self.add_options_arguments(parser)
        return parser

    def map_args_to_options(self, parsed_args: argparse.Namespace) -> Dict[str, Any]:
        """Return the option values explicitly given on the command line."""
        return {name: getattr(parsed_args, name) for name in self.dest_to_cli_flag if hasattr(parsed_args, name)}


def create_parser(builder: Optional[DynamicCLIBuilder] = None) -> argparse.ArgumentParser:
    """Create the glfm-markdown argument parser."""
    return (builder or DynamicCLIBuilder()).build_parser()
