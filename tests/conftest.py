"""Shared fixtures: a small JavaScript project using root-import aliases."""

import json

import pytest


def _write(path, content=""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def _babelrc(plugins):
    return json.dumps({"plugins": plugins}, indent=2)


@pytest.fixture
def js_project(tmp_path):
    """Create a project with several babel configs and aliased modules."""
    root = tmp_path / "project"

    # Default config, JSON5 with comments and trailing commas
    _write(
        root / ".babelrc",
        """{
  // aliases used by the app
  "plugins": [
    ["babel-plugin-root-import", {"rootPathPrefix": "@", "rootPathSuffix": "modules"}],
  ],
}
""",
    )
    _write(root / ".babelrcNoConf", _babelrc(["babel-plugin-root-import"]))
    _write(root / ".babelrcNoConfArray", _babelrc([["babel-plugin-root-import"]]))
    _write(
        root / ".babelrcArray",
        _babelrc(
            [
                [
                    "babel-plugin-root-import",
                    [
                        {"rootPathPrefix": "@", "rootPathSuffix": "modules"},
                        {"rootPathPrefix": "_", "rootPathSuffix": "/modules/anotherpath/"},
                    ],
                ]
            ]
        ),
    )
    _write(
        root / ".babelrcShorthand",
        _babelrc([["root-import", {"rootPathPrefix": "@", "rootPathSuffix": "modules/anotherpath"}]]),
    )
    _write(root / ".babelrcNotListed", _babelrc(["transform-runtime"]))
    _write(root / ".babelrcBroken", "{ plugins: [ ")
    _write(
        root / "package.json",
        json.dumps(
            {
                "name": "project",
                "babel": {
                    "plugins": [
                        ["root-import", {"rootPathPrefix": "@", "rootPathSuffix": "modules"}]
                    ]
                },
            }
        ),
    )

    _write(root / "index.js")
    _write(root / "modules" / "file.js", "module.exports = 1;")
    _write(root / "modules" / "anotherpath" / "file.js", "module.exports = 2;")
    _write(root / "modules" / "component.jsx", "export default () => null;")
    _write(root / "modules" / "path" / "to" / "moduleA.js")
    _write(root / "modules" / "path" / "to" / "moduleB" / "index.js")
    _write(
        root / "modules" / "path" / "to" / "moduleC" / "package.json",
        json.dumps({"name": "moduleC", "main": "lib/main.js"}),
    )
    _write(root / "modules" / "path" / "to" / "moduleC" / "lib" / "main.js")
    _write(root / "some" / "other" / "file.js")

    # Nested package without a "babel" section
    _write(root / "lookup" / "submodule" / "package.json", json.dumps({"name": "submodule"}))
    _write(root / "lookup" / "submodule" / "lib" / "path.js")
    _write(root / "lookup" / "submodule" / "lib" / "other.js")
    _write(
        root / "lookup" / "node_modules" / "lodash" / "package.json",
        json.dumps({"name": "lodash", "main": "lodash.js"}),
    )
    _write(root / "lookup" / "node_modules" / "lodash" / "lodash.js")

    return root
