"""rootalias - resolve babel-plugin-root-import aliases to real files.

Linters and bundlers need to know which file ``import x from '~/utils'``
refers to. This package rewrites root-relative alias prefixes (``~/`` by
default, or any configured prefix) into absolute paths and resolves them
with Node's module resolution rules.

Components:
    - resolve: Main entry point (alias rewriting + Node resolution)
    - locate_config: Finds the nearest babel root-import configuration
    - node_resolver: Node-style file, directory and package resolution

Quick Start:
    1. Explicit aliases:
        >>> from rootalias import resolve
        >>> result = resolve(
        ...     '@/components/Button',
        ...     '/my/project/src/app.js',
        ...     {'rootPathPrefix': '@', 'rootPathSuffix': 'src'},
        ...     root_dir='/my/project',
        ... )
        >>> result.to_dict()
        {'found': True, 'path': '/my/project/src/components/Button.js'}

    2. Aliases discovered from .babelrc or package.json:
        >>> result = resolve('~/utils', '/my/project/src/app.js', root_dir='/my/project/src')
"""

from .alias_resolver import (
    AliasEntry,
    ConfigKind,
    apply_aliases,
    classify_config,
    has_root_path_prefix,
    normalize_aliases,
    resolve,
    resolve_all,
    transform_relative_to_root_path,
)
from .config_locator import (
    NOT_CONFIGURED,
    PLUGIN_NAMES,
    ConfigParseError,
    LocatedConfig,
    locate_config,
)
from .node_resolver import ResolveResult, ResolveStrategy

__version__ = "1.0.0"
__license__ = "MIT"

# Resolver plugin interface version implemented by resolve()
INTERFACE_VERSION = 2

__all__ = [
    # Version info
    "__version__",
    "__license__",
    "INTERFACE_VERSION",
    # Resolution
    "resolve",
    "resolve_all",
    "ResolveResult",
    "ResolveStrategy",
    # Alias handling
    "AliasEntry",
    "ConfigKind",
    "apply_aliases",
    "classify_config",
    "has_root_path_prefix",
    "normalize_aliases",
    "transform_relative_to_root_path",
    # Configuration discovery
    "locate_config",
    "LocatedConfig",
    "NOT_CONFIGURED",
    "PLUGIN_NAMES",
    "ConfigParseError",
]
