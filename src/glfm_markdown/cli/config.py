#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file and environment loading for the glfm-markdown CLI.

Configuration files are flat tables of :class:`RenderOptions` fields in
JSON, TOML or YAML. A ``pyproject.toml`` is read from its
``[tool.glfm-markdown]`` table. Keys may use hyphens or underscores.
"""

import json
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from glfm_markdown.constants import CONFIG_TOOL_SECTION, ENV_PREFIX
from glfm_markdown.exceptions import ConfigError

CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.glfm-markdown]`` table of a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        The table, or an empty dict when the file has none

    Raises
    ------
    ConfigError
        If the section exists but is not a table

    """
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    config = data.get("tool", {}).get(CONFIG_TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{CONFIG_TOOL_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML, or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Option names mapped to values

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed or not a mapping

    Examples
    --------
    >>> config = load_config_file("glfm.toml")
    >>> config.get("placeholder-detection")
    True

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            return _load_pyproject_section(config_path)
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml",
                config_path=str(config_path),
            )
    except ConfigError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # tomllib.TOMLDecodeError and json.JSONDecodeError are ValueErrors
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}",
            config_path=str(config_path),
        )
    return config


def parse_bool(value: str, name: str) -> bool:
    """Interpret an environment variable value as a boolean.

    Raises
    ------
    ConfigError
        If the value is not a recognised true/false spelling

    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be true or false, got {value!r}")


def load_env_options(
    bool_fields: set[str], str_fields: set[str], environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Collect option values from ``GLFM_MARKDOWN_<OPTION>`` environment variables.

    Parameters
    ----------
    bool_fields : set of str
        Option names holding booleans
    str_fields : set of str
        Option names holding strings
    environ : Mapping or None, default = None
        Environment to read, ``os.environ`` when None

    Returns
    -------
    dict
        Option names mapped to parsed values, only for variables that are set

    """
    env = os.environ if environ is None else environ
    options: Dict[str, Any] = {}
    for name in sorted(bool_fields | str_fields):
        var = f"{ENV_PREFIX}{name.upper()}"
        if var not in env:
            continue
        options[name] = parse_bool(env[var], var) if name in bool_fields else env[var]
    return options


def normalize_keys(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``config`` with hyphenated keys converted to field names."""
    return {str(key).replace("-", "_"): value for key, value in config.items()}
