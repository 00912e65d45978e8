#!/usr/bin/env python3
"""Alias Resolver - rewrite root-relative import aliases into real paths.

Supports the ``babel-plugin-root-import`` alias syntax, where a prefix such
as ``~/`` or ``@/`` at the start of a specifier means "relative to the project
root (plus an optional suffix directory)".

Aliases come either from the caller or from the nearest babel configuration
(see config_locator). Each alias entry is written as::

    {"rootPathPrefix": "@", "rootPathSuffix": "src", "extensions": [".jsx"]}

Keys other than the prefix and suffix are passed to the Node resolver.

Example:
    >>> result = resolve(
    ...     '@/components/Button',
    ...     '/my/project/src/app.js',
    ...     [{'rootPathPrefix': '@', 'rootPathSuffix': 'src'}],
    ...     root_dir='/my/project',
    ... )
    >>> print(result.path)
    '/my/project/src/components/Button.js'
"""

import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from . import node_resolver
from .config_locator import DEFAULT_CONFIG_FILE, NOT_CONFIGURED, locate_config
from .node_resolver import ResolveResult, ResolveStrategy

logger = logging.getLogger(__name__)

PREFIX_KEY = "rootPathPrefix"
SUFFIX_KEY = "rootPathSuffix"

DEFAULT_PREFIX = "~"
DEFAULT_SUFFIX = ""

# One leading and one trailing slash
_SUFFIX_SLASHES = re.compile(r"^/|/$")


@dataclass
class AliasEntry:
    """A single alias rule.

    Attributes:
        prefix: Specifier prefix that activates the rule (e.g. "~", "@").
        suffix: Root-relative directory the prefix maps to ("" is the root).
        extra_options: Remaining keys, forwarded to the Node resolver.
    """

    prefix: str = DEFAULT_PREFIX
    suffix: str = DEFAULT_SUFFIX
    extra_options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> "AliasEntry":
        """Build an entry from a raw ``rootPathPrefix``/``rootPathSuffix`` dict."""
        if not isinstance(raw, dict):
            raw = {}
        prefix = raw.get(PREFIX_KEY)
        suffix = raw.get(SUFFIX_KEY)
        return cls(
            prefix=prefix if isinstance(prefix, str) and prefix else DEFAULT_PREFIX,
            suffix=sanitize_suffix(suffix) if isinstance(suffix, str) else DEFAULT_SUFFIX,
            extra_options={k: v for k, v in raw.items() if k not in (PREFIX_KEY, SUFFIX_KEY)},
        )

    def matches(self, source: str) -> bool:
        """Check whether ``source`` starts with this entry's prefix."""
        return has_root_path_prefix(source, self.prefix)

    def rewrite(self, source: str) -> str:
        """Rewrite ``source`` into a root-relative path."""
        return transform_relative_to_root_path(source, self.prefix, self.suffix)


class ConfigKind(Enum):
    """How a caller-supplied config argument is interpreted."""

    UNSET = "unset"  # nothing usable: discover from babel config
    ALIASES = "aliases"  # explicit alias entries
    PASSTHROUGH = "passthrough"  # a dict without alias keys: discover


def classify_config(config: Any) -> ConfigKind:
    """Decide once how to treat the ``config`` argument of resolve().

    Any list, or a dict with a ``rootPathPrefix`` or ``rootPathSuffix`` key, is
    an explicit alias configuration. Other dicts (including ``{}``) are not,
    and neither is None.
    """
    if isinstance(config, (list, tuple)):
        return ConfigKind.ALIASES
    if isinstance(config, dict):
        if PREFIX_KEY in config or SUFFIX_KEY in config:
            return ConfigKind.ALIASES
        return ConfigKind.PASSTHROUGH
    return ConfigKind.UNSET


def sanitize_suffix(suffix: str) -> str:
    """Strip one leading and one trailing slash from a suffix."""
    return _SUFFIX_SLASHES.sub("", suffix)


def normalize_aliases(raw: Union[None, Dict[str, Any], List[Any]]) -> List[AliasEntry]:
    """Normalize one-or-many raw alias mappings into AliasEntry objects.

    Args:
        raw: A single mapping, a list of mappings (None items allowed), or None.

    Returns:
        Non-empty list of AliasEntry; an empty input gives the default
        ``~`` entry mapped to the root.

    Example:
        >>> normalize_aliases({'rootPathSuffix': '/src/'})
        [AliasEntry(prefix='~', suffix='src', extra_options={})]
    """
    if raw is None:
        items = []
    elif isinstance(raw, dict):
        items = [raw]
    else:
        items = list(raw)

    if not items:
        items = [{}]

    return [AliasEntry.from_raw(item) for item in items]


def has_root_path_prefix(source: str, prefix: str) -> bool:
    """Check whether ``source`` begins with ``prefix`` at a segment boundary.

    The prefix must be the whole specifier or be followed by "/":
    ``@`` matches ``@`` and ``@/foo`` but not ``@foo`` or ``@scope/pkg``.
    """
    if not isinstance(source, str) or not prefix:
        return False
    return source == prefix or source.startswith(prefix + "/")


def transform_relative_to_root_path(source: str, prefix: str, suffix: str = "") -> str:
    """Replace the alias prefix of ``source`` with ``suffix``.

    Returns a path relative to the project root, e.g. ``("~/a/b", "~", "src")``
    gives ``"src/a/b"``. Extra slashes after the prefix are dropped, so
    ``"~//etc"`` stays under the root. Unmatched specifiers are returned
    unchanged.
    """
    if not has_root_path_prefix(source, prefix):
        return source
    rest = source[len(prefix) + 1 :].lstrip("/")
    if not suffix:
        return rest or "."
    return f"{suffix}/{rest}" if rest else suffix


def apply_aliases(
    source: str, entries: List[AliasEntry], root_dir: Union[str, Path]
) -> Tuple[str, Dict[str, Any], Optional[AliasEntry]]:
    """Rewrite ``source`` with the first matching alias entry.

    Args:
        source: Import specifier.
        entries: Normalized alias entries, in priority order.
        root_dir: Directory root-relative paths are anchored to.

    Returns:
        ``(specifier, options, entry)``: the absolute rewritten path (or the
        original specifier), the options to forward to the Node resolver and
        the matching entry (None when nothing matched, in which case the
        options of the last entry are forwarded).
    """
    options: Dict[str, Any] = {}
    for entry in entries:
        options = entry.extra_options
        if entry.matches(source):
            relative = entry.rewrite(source)
            # A suffix such as "//lib" keeps one slash after sanitizing
            absolute = os.path.normpath(os.path.join(str(root_dir), relative.lstrip("/")))
            return absolute, options, entry
    return source, options, None


def resolve(
    source: str,
    file: str,
    config: Union[None, Dict[str, Any], List[Any]] = None,
    config_file_name: str = DEFAULT_CONFIG_FILE,
    root_dir: Union[str, Path] = None,
) -> ResolveResult:
    """Find the full path to ``source``, imported from ``file``.

    This is the main entry point. Aliased specifiers are rewritten to absolute
    paths under the project root; everything is then resolved with Node rules.

    Args:
        source: The module to resolve, e.g. ``~/utils`` or ``./helpers``.
        file: Absolute path of the importing file.
        config: Explicit alias configuration (a list of mappings, or a mapping
            with ``rootPathPrefix``/``rootPathSuffix``). Anything else makes
            the resolver look for a babel configuration instead.
        config_file_name: Name of the babel config file to look for.
        root_dir: Project root for explicit configs, and the starting point of
            configuration discovery. Defaults to the working directory.

    Returns:
        ResolveResult from the Node resolver.

    Raises:
        ConfigParseError: If a discovered config file is malformed.

    Example:
        >>> resolve('~/modules/file', '/my/project/lib/a.js', root_dir='/my/project')
        ResolveResult(found=True, path='/my/project/modules/file.js', ...)
    """
    root = Path(root_dir).resolve() if root_dir else Path.cwd()

    if classify_config(config) is ConfigKind.ALIASES:
        raw = config
    else:
        located = locate_config(root, config_file_name)
        if located is NOT_CONFIGURED:
            return node_resolver.resolve(source, file, {})
        raw = located.entries
        root = located.root_dir

    entries = normalize_aliases(raw)
    specifier, options, entry = apply_aliases(source, entries, root)
    if entry is not None:
        logger.debug(f"{source!r} matched alias {entry.prefix!r}, rewritten to {specifier}")

    result = node_resolver.resolve(specifier, file, options)
    if entry is not None and result.found:
        result.strategy = ResolveStrategy.ALIAS
    return result


def resolve_all(
    sources: List[str],
    file: str,
    config: Union[None, Dict[str, Any], List[Any]] = None,
    config_file_name: str = DEFAULT_CONFIG_FILE,
    root_dir: Union[str, Path] = None,
) -> Dict[str, ResolveResult]:
    """Resolve multiple specifiers imported from the same file.

    Returns:
        Dict mapping each specifier to its ResolveResult.
    """
    return {
        source: resolve(source, file, config, config_file_name, root_dir) for source in sources
    }
