#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mailmarker CLI.

Configuration holds the engine options (components, templates, grid width
and attribute policies). It is read from TOML, YAML or JSON files, or from a
``[tool.mailmarker]`` table in ``pyproject.toml``.
"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from mailmarker.constants import CONFIG_FILENAMES, PYPROJECT_SECTION


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mailmarker]`` table from a pyproject.toml file.

    Returns
    -------
    dict
        The table, or an empty dict if the file has none

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir``.

    In each directory the dedicated config files are checked first, then a
    pyproject.toml with a ``[tool.mailmarker]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

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
            except argparse.ArgumentTypeError:
                # Broken pyproject.toml files are skipped during discovery
                pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches from the current directory up to the filesystem root, then the
    user's home directory.

    Returns
    -------
    Path or None
        Path to the discovered config file

    """
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

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
    argparse.ArgumentTypeError
        If the file is missing, cannot be parsed, or is not a mapping

    """
    path = Path(config_path)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")

    if path.name == "pyproject.toml":
        return _load_pyproject_section(path)

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                config = tomllib.load(f)
        elif suffix in (".yaml", ".yml"):
            with open(path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        elif suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise argparse.ArgumentTypeError(
                f"Unsupported configuration format '{suffix}'. Use .toml, .yaml, .yml or .json"
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid configuration file {path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading configuration file {path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"Configuration file {path} must contain a mapping, got {type(config).__name__}")
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration mappings, ``override`` winning.

    Nested mappings (``templates``) are merged key by key.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged
