"""pytest plugin for json-tree-generator.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_tree_generator import JsonArray, JsonObject, TreeGenerator


def _first_mismatch(actual: Any, expected: Any, path: str = "") -> str | None:
    """Return a description of the first difference, or None when equal.

    Scalars must match in type as well as value, so ``17``, ``17.0`` and
    ``Decimal("17")`` are all distinct and ``True`` is not ``1``.  ``path``
    is the JSON Pointer (RFC 6901) of the node being compared.
    """
    where = path or "<root>"
    if isinstance(expected, dict):
        if not isinstance(actual, JsonObject):
            return f"{where}: expected an object, got {actual!r}"
        if list(actual) != list(expected):
            return f"{where}: fields {list(actual)} != expected {list(expected)}"
        for name, child in expected.items():
            found = _first_mismatch(actual[name], child, f"{path}/{name}")
            if found is not None:
                return found
        return None
    if isinstance(expected, list):
        if not isinstance(actual, JsonArray):
            return f"{where}: expected an array, got {actual!r}"
        if len(actual) != len(expected):
            return f"{where}: length {len(actual)} != expected {len(expected)}"
        for idx, (got, child) in enumerate(zip(actual, expected, strict=True)):
            found = _first_mismatch(got, child, f"{path}/{idx}")
            if found is not None:
                return found
        return None
    if type(actual) is not type(expected) or actual != expected:
        return f"{where}: {actual!r} != expected {expected!r}"
    return None


@pytest.fixture
def tree_generator() -> TreeGenerator:
    """A fresh TreeGenerator for each test."""
    return TreeGenerator()


@pytest.fixture(scope="session")
def assert_tree_equals() -> Any:
    """Fixture that returns a callable tree asserter.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_scenario(tree_generator, assert_tree_equals):
            tree_generator.start_map()
            tree_generator.write_number_field("foo", 17)
            tree_generator.end_map()
            assert_tree_equals(tree_generator.get(), {"foo": 17})

    Returns:
        A callable ``_assert(actual, expected) -> None`` comparing a generated
        node against plain ``dict``/``list``/scalar values, including field
        order and exact scalar types.
    """

    def _assert(actual: Any, expected: Any) -> None:
        """Assert that a generated tree mirrors ``expected``.

        Raises:
            AssertionError: With the JSON Pointer of the first difference.
        """
        mismatch = _first_mismatch(actual, expected)
        if mismatch is not None:
            raise AssertionError(
                f"generated tree differs from expected value\n"
                f"  at {mismatch}\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert
