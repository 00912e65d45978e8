#!/usr/bin/env python3
"""Tests for Node-style module resolution."""

import json

import pytest

from rootalias.node_resolver import (
    DEFAULT_EXTENSIONS,
    NodeResolver,
    ResolveResult,
    ResolveStrategy,
    is_builtin,
    resolve,
)


@pytest.fixture
def node_project(tmp_path):
    """Create a small Node project layout."""
    (tmp_path / "src" / "lib").mkdir(parents=True)
    (tmp_path / "src" / "app.js").write_text("")
    (tmp_path / "src" / "util.js").write_text("")
    (tmp_path / "src" / "data.json").write_text("{}")
    (tmp_path / "src" / "view.jsx").write_text("")
    (tmp_path / "src" / "lib" / "index.js").write_text("")

    pkg = tmp_path / "node_modules" / "left-pad"
    pkg.mkdir(parents=True)
    (pkg / "package.json").write_text(json.dumps({"name": "left-pad", "main": "dist/main"}))
    (pkg / "dist").mkdir()
    (pkg / "dist" / "main.js").write_text("")
    (pkg / "extra.js").write_text("")

    scoped = tmp_path / "node_modules" / "@scope" / "pkg"
    scoped.mkdir(parents=True)
    (scoped / "index.js").write_text("")

    broken = tmp_path / "node_modules" / "broken"
    broken.mkdir()
    (broken / "package.json").write_text("{ not json")
    (broken / "index.js").write_text("")

    return tmp_path


class TestBuiltins:
    """Tests for Node core modules."""

    @pytest.mark.parametrize("name", ["fs", "path", "node:path", "fs/promises", "node:fs/promises"])
    def test_is_builtin(self, name):
        assert is_builtin(name)

    def test_not_builtin(self):
        assert not is_builtin("lodash")
        assert not is_builtin("./fs")

    def test_resolves_without_path(self, tmp_path):
        result = resolve("path", str(tmp_path / "a.js"))
        assert result.found
        assert result.path is None
        assert result.is_builtin
        assert result.strategy == ResolveStrategy.BUILTIN


class TestRelativeAndAbsolute:
    """Tests for file and directory resolution."""

    def test_relative_with_extension_added(self, node_project):
        result = resolve("./util", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "src" / "util.js")
        assert result.strategy == ResolveStrategy.RELATIVE

    def test_exact_file(self, node_project):
        result = resolve("./data.json", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "src" / "data.json")

    def test_json_extension_tried(self, node_project):
        result = resolve("./data", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "src" / "data.json")

    def test_directory_index(self, node_project):
        result = resolve("./lib", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "src" / "lib" / "index.js")

    def test_parent_directory(self, node_project):
        result = resolve("../util", str(node_project / "src" / "lib" / "index.js"))
        assert result.path == str(node_project / "src" / "util.js")

    def test_absolute(self, node_project):
        result = resolve(str(node_project / "src" / "util"), str(node_project / "x.js"))
        assert result.path == str(node_project / "src" / "util.js")
        assert result.strategy == ResolveStrategy.ABSOLUTE

    def test_jsx_not_tried_by_default(self, node_project):
        assert ".jsx" not in DEFAULT_EXTENSIONS
        result = resolve("./view", str(node_project / "src" / "app.js"))
        assert not result.found

    def test_custom_extensions(self, node_project):
        result = resolve("./view", str(node_project / "src" / "app.js"), {"extensions": [".jsx"]})
        assert result.path == str(node_project / "src" / "view.jsx")

    def test_single_extension_string(self, node_project):
        resolver = NodeResolver({"extensions": ".jsx"})
        assert resolver.extensions == [".jsx"]
        result = resolve("./view", str(node_project / "src" / "app.js"), {"extensions": ".jsx"})
        assert result.path == str(node_project / "src" / "view.jsx")

    def test_custom_extensions_replace_defaults(self, node_project):
        result = resolve("./util", str(node_project / "src" / "app.js"), {"extensions": [".jsx"]})
        assert not result.found

    def test_missing_file(self, node_project):
        result = resolve("./missing", str(node_project / "src" / "app.js"))
        assert result == ResolveResult(found=False, candidates=result.candidates)
        assert str(node_project / "src" / "missing.js") in result.candidates


class TestPackages:
    """Tests for node_modules lookup."""

    def test_package_main_without_extension(self, node_project):
        result = resolve("left-pad", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "node_modules" / "left-pad" / "dist" / "main.js")
        assert result.strategy == ResolveStrategy.PACKAGE

    def test_package_subpath(self, node_project):
        result = resolve("left-pad/extra", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "node_modules" / "left-pad" / "extra.js")

    def test_scoped_package(self, node_project):
        result = resolve("@scope/pkg", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "node_modules" / "@scope" / "pkg" / "index.js")

    def test_malformed_package_json_falls_back_to_index(self, node_project):
        result = resolve("broken", str(node_project / "src" / "app.js"))
        assert result.path == str(node_project / "node_modules" / "broken" / "index.js")

    def test_missing_package(self, node_project):
        assert not resolve("nope", str(node_project / "src" / "app.js")).found

    def test_custom_module_directory(self, tmp_path):
        (tmp_path / "web_modules" / "dep").mkdir(parents=True)
        (tmp_path / "web_modules" / "dep" / "index.js").write_text("")
        result = resolve("dep", str(tmp_path / "a.js"), {"moduleDirectory": "web_modules"})
        assert result.path == str(tmp_path / "web_modules" / "dep" / "index.js")

    def test_extra_paths(self, tmp_path):
        (tmp_path / "vendor").mkdir()
        (tmp_path / "vendor" / "dep.js").write_text("")
        (tmp_path / "app").mkdir()
        result = resolve("dep", str(tmp_path / "app" / "a.js"), {"paths": [str(tmp_path / "vendor")]})
        assert result.path == str(tmp_path / "vendor" / "dep.js")

    def test_search_skips_module_directories(self, tmp_path):
        resolver = NodeResolver()
        dirs = resolver._module_search_dirs(str(tmp_path / "node_modules" / "pkg"))
        assert str(tmp_path / "node_modules" / "pkg" / "node_modules") in dirs
        assert str(tmp_path / "node_modules" / "node_modules") not in dirs
        assert str(tmp_path / "node_modules") in dirs


class TestResolveResult:
    """Tests for the ResolveResult dataclass."""

    def test_to_dict_not_found(self):
        assert ResolveResult(found=False).to_dict() == {"found": False}

    def test_to_dict_found(self):
        result = ResolveResult(found=True, path="/a.js", strategy=ResolveStrategy.RELATIVE)
        assert result.to_dict() == {"found": True, "path": "/a.js"}
        assert not result.is_builtin
