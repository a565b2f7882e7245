#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for chat2md.

Settings can live in ``.chat2md.toml``, ``.chat2md.yaml``/``.yml``,
``.chat2md.json`` or the ``[tool.chat2md]`` table of ``pyproject.toml``.
A configuration holds a ``profile`` name plus optional overrides of any
:class:`chat2md.profiles.SiteProfile` field, for example::

    profile = "chatgpt"
    filter_citation_links = false
    chrome_tags = ["button", "nav", "footer", "svg", "img", "aside"]

"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from chat2md.constants import CONFIG_FILENAMES, PROFILE_ENV_VAR, PYPROJECT_SECTION
from chat2md.exceptions import ConfigError, UnknownProfileError
from chat2md.profiles import SiteProfile, get_profile

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHAT2MD_CONFIG"
PROFILE_OVERRIDE_KEYS = frozenset(f.name for f in fields(SiteProfile)) - {"name"}
GENERAL_KEYS = frozenset({"profile", "parser", "log_level"})


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.chat2md]`` section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary, or empty dict if the section is absent

    Raises
    ------
    ConfigError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir``.

    Each directory is checked for the dedicated config files first, then for
    a ``pyproject.toml`` with a ``[tool.chat2md]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First config file found, or None

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
            except ConfigError:
                logger.debug("Ignoring unreadable %s during config discovery", pyproject_path)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Parent directories of ``start_dir`` (default: cwd) are searched first,
    then the user's home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
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
            raise ConfigError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path))
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}",
            str(config_path),
        )

    logger.debug("Loaded configuration from %s", config_path)
    return config


def load_config_with_priority(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration with priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config``)
    2. ``CHAT2MD_CONFIG`` environment variable
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration (empty dict if no config found)

    """
    if explicit_path:
        return load_config_file(explicit_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config_file(env_path)

    discovered = discover_config_file()
    if discovered:
        return load_config_file(discovered)

    return {}


def profile_from_config(config: Mapping[str, Any]) -> SiteProfile:
    """Build a site profile from a configuration mapping.

    The base profile comes from the ``profile`` key, falling back to the
    ``CHAT2MD_PROFILE`` environment variable and then the generic profile.
    Any other :class:`SiteProfile` field present in ``config`` overrides
    the base profile's value.

    Parameters
    ----------
    config : mapping
        Configuration dictionary

    Returns
    -------
    SiteProfile
        The configured profile

    Raises
    ------
    ConfigError
        If the mapping holds unknown keys or invalid values

    """
    unknown = set(config) - PROFILE_OVERRIDE_KEYS - GENERAL_KEYS
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

    profile_name = config.get("profile") or os.environ.get(PROFILE_ENV_VAR)
    if profile_name is not None and not isinstance(profile_name, str):
        raise ConfigError(f"'profile' must be a string, got {type(profile_name).__name__}")
    try:
        profile = get_profile(profile_name)
    except UnknownProfileError as e:
        raise ConfigError(e.message, original_error=e) from e

    overrides = {key: value for key, value in config.items() if key in PROFILE_OVERRIDE_KEYS}
    if not overrides:
        return profile

    try:
        return profile.create_updated(**overrides)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid profile setting: {e}", original_error=e) from e


__all__ = [
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "profile_from_config",
]
