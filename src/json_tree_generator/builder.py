"""Fluent builders producing JsonObject and JsonArray trees directly.

These bypass the event sequence entirely: values accumulate in insertion
order and ``build()`` returns a fresh node each time it is called.

Example::

    obj = (
        json_object()
        .put("foo", 17)
        .put("bar", False)
        .put("tags", json_array().add("a").add("b"))
        .put_null("note")
        .build()
    )
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

import numpy as np

from json_tree_generator.alphabet import MIME_NO_LINEFEEDS
from json_tree_generator.nodes import JsonArray, JsonObject

if TYPE_CHECKING:
    from json_tree_generator.alphabet import BinaryAlphabet
    from json_tree_generator.nodes import Node

__all__ = ["JsonArrayBuilder", "JsonObjectBuilder", "json_array", "json_object"]

_SCALAR_TYPES = (str, int, float, Decimal, np.integer, np.floating)


def _coerce(value: Any, alphabet: BinaryAlphabet) -> Node:
    """Turn a builder argument into a node value."""
    if isinstance(value, (JsonObjectBuilder, JsonArrayBuilder)):
        return value.build()
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if value is None or isinstance(value, (JsonObject, JsonArray, *_SCALAR_TYPES)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return alphabet.encode(bytes(value))
    msg = f"Unsupported value type: {type(value)!r}"
    raise TypeError(msg)


class JsonObjectBuilder:
    """Accumulates named fields for a JsonObject.

    Args:
        alphabet: Encoding used for bytes values. Defaults to MIME_NO_LINEFEEDS.
    """

    def __init__(self, alphabet: BinaryAlphabet = MIME_NO_LINEFEEDS) -> None:
        self._alphabet = alphabet
        self._values: dict[str, Node] = {}

    def put(self, name: str, value: Any) -> JsonObjectBuilder:
        """Add a field.

        ``value`` may be any scalar, a JsonObject or JsonArray, another
        builder (built immediately), bytes (encoded to text) or None.

        Raises:
            TypeError: If ``name`` is not a string or ``value`` is unsupported.
        """
        if not isinstance(name, str):
            msg = f"field name must be a str, got {type(name).__name__}"
            raise TypeError(msg)
        self._values[name] = _coerce(value, self._alphabet)
        return self

    def put_null(self, name: str) -> JsonObjectBuilder:
        return self.put(name, None)

    def build(self) -> JsonObject:
        """Return a new JsonObject holding the fields added so far."""
        return JsonObject(self._values)


class JsonArrayBuilder:
    """Accumulates items for a JsonArray."""

    def __init__(self, alphabet: BinaryAlphabet = MIME_NO_LINEFEEDS) -> None:
        self._alphabet = alphabet
        self._items: list[Node] = []

    def add(self, value: Any) -> JsonArrayBuilder:
        self._items.append(_coerce(value, self._alphabet))
        return self

    def add_null(self) -> JsonArrayBuilder:
        return self.add(None)

    def build(self) -> JsonArray:
        return JsonArray(self._items)


def json_object(alphabet: BinaryAlphabet = MIME_NO_LINEFEEDS) -> JsonObjectBuilder:
    """Factory for a new JsonObjectBuilder."""
    return JsonObjectBuilder(alphabet)


def json_array(alphabet: BinaryAlphabet = MIME_NO_LINEFEEDS) -> JsonArrayBuilder:
    """Factory for a new JsonArrayBuilder."""
    return JsonArrayBuilder(alphabet)
