#!/usr/bin/env python3
"""Configuration Locator - find the active root-import alias configuration.

Walks from a start directory up to the file-system root looking for a babel
configuration. In each directory the dedicated config file (``.babelrc`` by
default, JSON5 syntax) is checked first, then the ``"babel"`` section of
``package.json``. The first configuration object found decides the outcome:

- plugin listed with options: those options are returned as alias entries
- plugin listed bare: an empty entry list (the default ``~`` alias)
- plugin not listed: ``NOT_CONFIGURED``, no alias rewriting at all

Example:
    >>> located = locate_config('/my/project/src')
    >>> if located is not NOT_CONFIGURED:
    ...     print(located.root_dir, located.entries)
    /my/project [{'rootPathPrefix': '@', 'rootPathSuffix': 'src'}]
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import json5

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".babelrc"
MANIFEST_FILE = "package.json"
MANIFEST_SECTION = "babel"

# Canonical package name and its shorthand
PLUGIN_NAMES = ("babel-plugin-root-import", "root-import")


class ConfigParseError(ValueError):
    """Raised when a configuration file exists but cannot be parsed."""

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        super().__init__(f"Cannot parse {self.path}: {message}")


class _NotConfigured:
    """Sentinel type: a configuration exists but the plugin is not listed."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_CONFIGURED"


NOT_CONFIGURED = _NotConfigured()


@dataclass
class LocatedConfig:
    """Alias configuration found by the upward walk.

    Attributes:
        entries: Raw alias mappings (``rootPathPrefix``/``rootPathSuffix`` plus
            pass-through keys). Empty means "use the default entry".
        root_dir: Directory the configuration was found in. Alias suffixes are
            relative to it.
        source: File that supplied the configuration, or None if the walk
            reached the file-system root without finding one.
    """

    entries: List[Dict[str, Any]] = field(default_factory=list)
    root_dir: Path = field(default_factory=Path.cwd)
    source: Optional[Path] = None


DiscoveryResult = Union[LocatedConfig, _NotConfigured]


def _read_json5(path: Path) -> Any:
    try:
        return json5.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigParseError(path, str(exc)) from exc


def _read_manifest(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigParseError(path, str(exc)) from exc


def _plugin_name(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, (list, tuple)) and entry:
        return entry[0]
    return None


def find_plugin_entry(config: Dict[str, Any]) -> Any:
    """Return the root-import entry of a babel config's ``plugins`` list.

    Args:
        config: Parsed babel configuration. Anything but an object has no
            plugins.

    Returns:
        The plugin entry (a name or a ``[name, options]`` list), or None.
    """
    plugins = config.get("plugins") if isinstance(config, dict) else None
    if not isinstance(plugins, list):
        return None
    for entry in plugins:
        if _plugin_name(entry) in PLUGIN_NAMES:
            return entry
    return None


def entries_from_plugin(entry: Any) -> List[Any]:
    """Extract raw alias entries from a plugin entry.

    A bare name or ``[name]`` yields an empty list. With options, a single
    object becomes a one-element list and a list is returned as-is.
    """
    if isinstance(entry, str) or len(entry) < 2 or not entry[1]:
        return []
    options = entry[1]
    if isinstance(options, list):
        return list(options)
    return [options]


def _config_in_directory(directory: Path, config_file_name: str):
    """Return ``(config, source)`` for one directory, or ``(None, None)``."""
    config = None
    source = None

    if config_file_name:
        config_path = directory / config_file_name
        if config_path.is_file():
            logger.debug(f"Reading {config_path}")
            config = _read_json5(config_path)
            source = config_path

    # Fall back to the "babel" section of package.json
    manifest_path = directory / MANIFEST_FILE
    if not _is_set(config) and manifest_path.is_file():
        manifest = _read_manifest(manifest_path)
        section = manifest.get(MANIFEST_SECTION) if isinstance(manifest, dict) else None
        if _is_set(section):
            logger.debug(f"Using '{MANIFEST_SECTION}' section of {manifest_path}")
            config = section
            source = manifest_path

    # Any object or array stops the walk, even an empty one
    if isinstance(config, (dict, list)):
        return config, source
    return None, None


def _is_set(value: Any) -> bool:
    """Whether a parsed config value counts as present.

    Objects and arrays always do, empty or not. Scalars count unless they
    are null, false, 0 or "".
    """
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def locate_config(
    start_dir: Union[str, Path] = None,
    config_file_name: str = DEFAULT_CONFIG_FILE,
) -> DiscoveryResult:
    """Find the nearest root-import configuration above ``start_dir``.

    Args:
        start_dir: Directory to start from (defaults to the working directory).
        config_file_name: Name of the dedicated config file in each directory.

    Returns:
        LocatedConfig, or NOT_CONFIGURED when the nearest configuration does
        not list the plugin.

    Raises:
        ConfigParseError: If a config file or package.json is malformed.
    """
    start = Path(start_dir).resolve() if start_dir else Path.cwd()

    for directory in [start] + list(start.parents):
        config, source = _config_in_directory(directory, config_file_name)
        if config is None:
            continue

        entry = find_plugin_entry(config)
        if entry is None:
            logger.debug(f"{source} does not list {PLUGIN_NAMES[0]}")
            return NOT_CONFIGURED

        logger.debug(f"Root import configured in {source}, root is {directory}")
        return LocatedConfig(
            entries=entries_from_plugin(entry),
            root_dir=directory,
            source=source,
        )

    logger.debug(f"No babel configuration found above {start}")
    return LocatedConfig(entries=[], root_dir=start, source=None)
