#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for todofilter.

Pandoc runs filters with the document's directory as working directory, so
a config file next to the sources (or any parent directory) is picked up
without extra arguments. Supported formats are TOML, YAML and JSON, plus a
``[tool.todofilter]`` table in ``pyproject.toml``.
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from todofilter.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from todofilter.exceptions import ConfigError
from todofilter.options import TodoFilterOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.todofilter]`` table from a pyproject.toml file.

    Returns an empty dict when the table is absent.

    Raises
    ------
    ConfigError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    tool = data.get("tool", {})
    config = tool.get(PYPROJECT_TOOL_SECTION, {}) if isinstance(tool, dict) else {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Each directory from ``start_dir`` up to the filesystem root is checked for
    ``.todofilter.toml``, ``.todofilter.yaml``, ``.todofilter.yml``,
    ``.todofilter.json`` and finally a ``pyproject.toml`` with a
    ``[tool.todofilter]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                # A broken pyproject.toml elsewhere in the tree is not ours to report
                logger.debug("Skipping %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in standard locations.

    Search order:

    1. The file named by the ``TODOFILTER_CONFIG`` environment variable
    2. Parent directory search from ``start_dir`` (see ``find_config_in_parents``)
    3. ``.todofilter.*`` files in the user's home directory

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)

    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _load_toml_config(config_path: Path) -> Any:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_path}: {e}", str(config_path), e) from e


def _load_yaml_config(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}", str(config_path), e) from e
    # An empty YAML file loads as None
    return {} if config is None else config


def _load_json_config(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}", str(config_path), e) from e


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".todofilter.toml")
    >>> config.get("marker_symbol")
    '†'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            config = _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            config = _load_yaml_config(config_path)
        elif ext == ".json":
            config = _load_json_config(config_path)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext or filename}. Use .toml, .yaml, .yml or .json",
                str(config_path),
            )
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a table/mapping at root level, got {type(config).__name__}",
            str(config_path),
        )
    return config


def load_options(config_path: Path | str | None = None, discover: bool = True) -> TodoFilterOptions:
    """Build filter options from a config file.

    Parameters
    ----------
    config_path : Path or str, optional
        Explicit config file; takes precedence over discovery
    discover : bool, default = True
        Whether to look for a config file when ``config_path`` is not given

    Returns
    -------
    TodoFilterOptions
        Options from the config file, or the defaults when there is none

    Raises
    ------
    ConfigError
        If the config file cannot be loaded
    ValidationError
        If it contains unknown keys or invalid values

    """
    path = Path(config_path) if config_path is not None else (discover_config_file() if discover else None)
    if path is None:
        return TodoFilterOptions()

    logger.debug("Loading configuration from %s", path)
    return TodoFilterOptions.from_mapping(load_config_file(path))
