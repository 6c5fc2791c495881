"""Packaging correctness verification for json-tree-generator.

Tests validate that:
- The top-level package exposes the public API
- py.typed marker is present in the source tree
- Pytest plugin entry point is declared
- Package metadata in pyproject.toml is consistent with the package

These tests inspect the project files and current installation rather than
building wheels or creating temporary virtualenvs.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import json_tree_generator

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _pyproject() -> dict:  # type: ignore[type-arg]
    with (PROJECT_ROOT / "pyproject.toml").open("rb") as fh:
        return tomllib.load(fh)


class TestPublicApi:
    def test_all_names_resolve(self) -> None:
        for name in json_tree_generator.__all__:
            assert hasattr(json_tree_generator, name), name

    def test_core_names_exported(self) -> None:
        for name in ("TreeGenerator", "TreeGenerationError", "JsonObject", "JsonArray"):
            assert name in json_tree_generator.__all__


class TestProjectFiles:
    def test_py_typed_marker_present(self) -> None:
        assert (PROJECT_ROOT / "src" / "json_tree_generator" / "py.typed").is_file()

    def test_version_matches_metadata(self) -> None:
        assert _pyproject()["project"]["version"] == json_tree_generator.__version__

    def test_pytest_plugin_entry_point(self) -> None:
        entry_points = _pyproject()["project"]["entry-points"]["pytest11"]
        assert entry_points["json_tree_generator"] == (
            "json_tree_generator.integrations._pytest_plugin"
        )

    def test_numpy_is_a_runtime_dependency(self) -> None:
        deps = _pyproject()["project"]["dependencies"]
        assert any(dep.startswith("numpy") for dep in deps)
