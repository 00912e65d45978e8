#!/usr/bin/env python3
"""Node-style module resolution.

Turns a specifier into a real file the way Node's ``require`` does:

- Core modules (``fs``, ``node:path``, ``fs/promises``) resolve without a path
- Relative and absolute specifiers are probed as a file, then a directory
- Directories resolve through ``package.json`` ``main``, then ``index``
- Bare package names are looked up in ``node_modules`` walking upward

Resolution failures are reported as data (``ResolveResult.found``), never raised.

Example:
    >>> result = resolve('./utils', '/my/project/src/app.js')
    >>> print(result.path)
    '/my/project/src/utils/index.js'
"""

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = [".mjs", ".js", ".json", ".node"]
DEFAULT_MODULE_DIRECTORY = "node_modules"

NODE_BUILTIN_MODULES = {
    "assert",
    "async_hooks",
    "buffer",
    "child_process",
    "cluster",
    "console",
    "constants",
    "crypto",
    "dgram",
    "diagnostics_channel",
    "dns",
    "domain",
    "events",
    "fs",
    "http",
    "http2",
    "https",
    "inspector",
    "module",
    "net",
    "os",
    "path",
    "perf_hooks",
    "process",
    "punycode",
    "querystring",
    "readline",
    "repl",
    "stream",
    "string_decoder",
    "sys",
    "timers",
    "tls",
    "trace_events",
    "tty",
    "url",
    "util",
    "v8",
    "vm",
    "wasi",
    "worker_threads",
    "zlib",
}

NODE_SUBMODULES = {
    "assert/strict",
    "dns/promises",
    "fs/promises",
    "path/posix",
    "path/win32",
    "readline/promises",
    "stream/consumers",
    "stream/promises",
    "stream/web",
    "timers/promises",
    "util/types",
}

ALL_NODE_BUILTINS = (
    NODE_BUILTIN_MODULES
    | NODE_SUBMODULES
    | {f"node:{mod}" for mod in NODE_BUILTIN_MODULES | NODE_SUBMODULES}
)


class ResolveStrategy(Enum):
    """Enumeration of resolution strategies used."""

    ALIAS = "alias"  # ~/foo, @/bar rewritten to the project root
    RELATIVE = "relative"  # ./foo, ../bar
    ABSOLUTE = "absolute"  # /abs/path
    PACKAGE = "package"  # node_modules lookup
    BUILTIN = "builtin"  # Node core module
    NOT_FOUND = "not_found"  # Resolution failed


@dataclass
class ResolveResult:
    """Result of a resolution attempt.

    Attributes:
        found: Whether the specifier resolved.
        path: Absolute path of the resolved file. None when not found, and
            also for core modules, which are found but have no file.
        strategy: Which strategy resolved the specifier.
        candidates: Paths probed, in order.
    """

    found: bool
    path: Optional[str] = None
    strategy: ResolveStrategy = ResolveStrategy.NOT_FOUND
    candidates: List[str] = field(default_factory=list)

    @property
    def is_builtin(self) -> bool:
        """Whether this is a core module with no file-system location."""
        return self.found and self.path is None

    def to_dict(self) -> Dict[str, Any]:
        """Return the resolver-plugin result shape."""
        if not self.found:
            return {"found": False}
        return {"found": True, "path": self.path}


def is_builtin(source: str) -> bool:
    """Check whether ``source`` names a Node core module."""
    return source in ALL_NODE_BUILTINS


def _is_relative(source: str) -> bool:
    return source in (".", "..") or source.startswith(("./", "../"))


class NodeResolver:
    """Node ``require`` resolution for a single importing directory.

    Args:
        options: Resolver options. Recognized keys:
            ``extensions`` (list of suffixes to probe),
            ``moduleDirectory`` (str or list, default ``node_modules``),
            ``paths`` (extra directories searched for packages).
            Other keys are ignored.
    """

    def __init__(self, options: Dict[str, Any] = None):
        options = options or {}
        extensions = options.get("extensions") or DEFAULT_EXTENSIONS
        if isinstance(extensions, str):
            extensions = [extensions]
        self.extensions = list(extensions)

        module_dirs = options.get("moduleDirectory") or DEFAULT_MODULE_DIRECTORY
        if isinstance(module_dirs, str):
            module_dirs = [module_dirs]
        self.module_directories = list(module_dirs)

        paths = options.get("paths") or []
        if isinstance(paths, str):
            paths = [paths]
        self.paths = list(paths)

        self.candidates: List[str] = []

    def resolve(self, source: str, file: str) -> ResolveResult:
        """Resolve ``source`` as imported from ``file``."""
        self.candidates = []

        if is_builtin(source):
            return ResolveResult(found=True, path=None, strategy=ResolveStrategy.BUILTIN)

        basedir = os.path.dirname(os.path.abspath(file))

        if os.path.isabs(source):
            strategy = ResolveStrategy.ABSOLUTE
            path = self._load(os.path.normpath(source))
        elif _is_relative(source):
            strategy = ResolveStrategy.RELATIVE
            path = self._load(os.path.normpath(os.path.join(basedir, source)))
        else:
            strategy = ResolveStrategy.PACKAGE
            path = self._load_package(source, basedir)

        if path is None:
            return ResolveResult(found=False, candidates=self.candidates)
        return ResolveResult(
            found=True,
            path=path,
            strategy=strategy,
            candidates=self.candidates,
        )

    def _load(self, target: str) -> Optional[str]:
        return self._load_as_file(target) or self._load_as_directory(target)

    def _is_file(self, candidate: str) -> bool:
        self.candidates.append(candidate)
        return os.path.isfile(candidate)

    def _load_as_file(self, target: str) -> Optional[str]:
        if self._is_file(target):
            return target
        for ext in self.extensions:
            if self._is_file(target + ext):
                return target + ext
        return None

    def _load_index(self, directory: str) -> Optional[str]:
        return self._load_as_file(os.path.join(directory, "index"))

    def _load_as_directory(self, directory: str) -> Optional[str]:
        if not os.path.isdir(directory):
            return None

        manifest = os.path.join(directory, "package.json")
        if os.path.isfile(manifest):
            main = self._read_main(manifest)
            if main:
                entry = os.path.normpath(os.path.join(directory, main))
                found = self._load_as_file(entry)
                if not found and entry != directory:
                    found = self._load_index(entry)
                if found:
                    return found

        return self._load_index(directory)

    def _read_main(self, manifest: str) -> Optional[str]:
        try:
            with open(manifest, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.debug(f"Ignoring unreadable {manifest}: {exc}")
            return None
        main = data.get("main") if isinstance(data, dict) else None
        return main if isinstance(main, str) else None

    def _module_search_dirs(self, basedir: str) -> List[str]:
        dirs = []
        current = basedir
        while True:
            if os.path.basename(current) not in self.module_directories:
                for module_dir in self.module_directories:
                    dirs.append(os.path.join(current, module_dir))
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        dirs.extend(os.path.abspath(p) for p in self.paths)
        return dirs

    def _load_package(self, source: str, basedir: str) -> Optional[str]:
        for search_dir in self._module_search_dirs(basedir):
            found = self._load(os.path.join(search_dir, source))
            if found:
                return found
        return None


def resolve(source: str, file: str, options: Dict[str, Any] = None) -> ResolveResult:
    """Resolve a specifier the way Node's ``require`` would.

    Args:
        source: The specifier, e.g. ``./foo``, ``/abs/foo``, ``lodash``, ``fs``.
        file: Absolute path of the importing file.
        options: See NodeResolver.

    Returns:
        ResolveResult. Never raises for missing files.
    """
    try:
        return NodeResolver(options).resolve(source, file)
    except OSError as exc:
        logger.debug(f"Resolving {source!r} from {file} failed: {exc}")
        return ResolveResult(found=False)
