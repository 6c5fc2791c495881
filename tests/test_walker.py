"""Tests for the value walker (emit / to_tree).

Covers dispatch for every accepted type, bool-before-int ordering, exact
type preservation, numpy arrays, bytes, event order, and TypeError on
unsupported input.
"""

from __future__ import annotations

from collections import OrderedDict
from decimal import Decimal
from typing import Any

import numpy as np
import pytest

from json_tree_generator import (
    GeneratorConfig,
    JsonArray,
    JsonObject,
    TreeGenerationError,
    TreeGenerator,
    emit,
    to_tree,
)


class _RecordingGenerator(TreeGenerator):
    """Records the names of the calls it receives."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    def start_map(self) -> None:
        self.calls.append("start_map")
        super().start_map()

    def end_map(self) -> None:
        self.calls.append("end_map")
        super().end_map()

    def start_sequence(self) -> None:
        self.calls.append("start_sequence")
        super().start_sequence()

    def end_sequence(self) -> None:
        self.calls.append("end_sequence")
        super().end_sequence()

    def field_name(self, name: str) -> None:
        self.calls.append(f"field_name:{name}")
        super().field_name(name)

    def write_text(self, text: str | None) -> None:
        self.calls.append("write_text")
        super().write_text(text)

    def write_number(self, number: Any) -> None:
        self.calls.append("write_number")
        super().write_number(number)

    def write_boolean(self, value: bool) -> None:
        self.calls.append("write_boolean")
        super().write_boolean(value)

    def write_null(self) -> None:
        self.calls.append("write_null")
        super().write_null()


class TestEventOrder:
    def test_document_order(self) -> None:
        gen = _RecordingGenerator()
        emit(gen, {"a": [1, "x"], "b": None, "c": True})
        assert gen.calls == [
            "start_map",
            "field_name:a",
            "start_sequence",
            "write_number",
            "write_text",
            "end_sequence",
            "field_name:b",
            "write_null",
            "field_name:c",
            "write_boolean",
            "end_map",
        ]

    def test_bool_dispatched_before_int(self) -> None:
        gen = _RecordingGenerator()
        emit(gen, [True, 1, np.bool_(False)])
        assert gen.calls[1:-1] == ["write_boolean", "write_number", "write_boolean"]


class TestToTree:
    def test_mapping_round_trip(self) -> None:
        value = {"foo": 17, "bar": False, "nested": {"list": [1, [2, []], {}]}}
        tree = to_tree(value)
        assert isinstance(tree, JsonObject)
        assert tree.to_python() == value
        assert list(tree) == ["foo", "bar", "nested"]

    def test_top_level_sequence(self) -> None:
        tree = to_tree(("a", None))
        assert isinstance(tree, JsonArray)
        assert tree.to_python() == ["a", None]

    def test_any_mapping_accepted(self) -> None:
        tree = to_tree(OrderedDict([("b", 1), ("a", 2)]))
        assert list(tree) == ["b", "a"]  # type: ignore[arg-type]

    def test_scalar_types_preserved(self) -> None:
        tree = to_tree([1, 1.0, Decimal("1.0"), True])
        kinds = [type(item) for item in tree]  # type: ignore[union-attr]
        assert kinds == [int, float, Decimal, bool]

    def test_numpy_array_keeps_element_width(self) -> None:
        tree = to_tree({"v": np.array([1, 2, 3], dtype=np.int16)})
        values = tree["v"]  # type: ignore[index]
        assert isinstance(values, JsonArray)
        assert [type(item) for item in values] == [np.int16] * 3
        assert list(values) == [1, 2, 3]

    def test_numpy_matrix_nests(self) -> None:
        tree = to_tree(np.arange(4, dtype=np.float32).reshape(2, 2))
        assert tree.to_python() == [[0.0, 1.0], [2.0, 3.0]]

    def test_numpy_zero_dim_is_scalar(self) -> None:
        tree = to_tree({"x": np.array(5, dtype=np.int8)})
        assert type(tree["x"]) is np.int8  # type: ignore[index]

    def test_bytes_encoded(self) -> None:
        tree = to_tree({"b": b"hello", "ba": bytearray(b"hi")})
        assert tree.to_python() == {"b": "aGVsbG8=", "ba": "aGk="}

    def test_json_nodes_accepted(self) -> None:
        source = JsonObject().put("a", JsonArray().add(1))
        tree = to_tree(source)
        assert tree == source
        assert tree is not source

    def test_config_forwarded(self) -> None:
        with pytest.raises(TreeGenerationError, match="maximum nesting depth"):
            to_tree([[[]]], GeneratorConfig(max_nesting_depth=2))

    def test_scalar_root_rejected(self) -> None:
        with pytest.raises(TreeGenerationError, match=r"<Empty>"):
            to_tree("text")  # type: ignore[arg-type]


class TestUnsupportedValues:
    def test_set_rejected(self) -> None:
        with pytest.raises(TypeError, match="Unsupported value type"):
            to_tree([{1, 2}])

    def test_object_rejected(self) -> None:
        with pytest.raises(TypeError, match="Unsupported value type"):
            to_tree({"a": object()})

    def test_non_str_key_rejected(self) -> None:
        with pytest.raises(TypeError, match="map keys must be str"):
            to_tree({1: "a"})  # type: ignore[dict-item]

    def test_nodes_only_rejects_plain_containers(self) -> None:
        gen = TreeGenerator()
        gen.start_sequence()
        with pytest.raises(TypeError):
            emit(gen, [1], nodes_only=True)
        with pytest.raises(TypeError):
            emit(gen, b"x", nodes_only=True)
        assert len(gen.get()) == 0  # type: ignore[arg-type]
