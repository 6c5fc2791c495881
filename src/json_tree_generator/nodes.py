"""JsonObject, JsonArray and NodeType: the in-memory tree data model.

A tree is made of two composite node kinds and scalar leaves:

- JsonObject -> ordered map of field name to child node (keys unique)
- JsonArray  -> ordered sequence of child nodes
- scalars    -> str, int, float, Decimal, bool, None and numpy numeric scalars

``None`` is the explicit null marker. A field holding ``None`` is present
in its JsonObject; it is not the same as an absent field.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from decimal import Decimal
from enum import StrEnum, auto
from typing import Any, TypeAlias

import numpy as np

Scalar: TypeAlias = str | int | float | Decimal | bool | np.integer | np.floating | None
Node: TypeAlias = "JsonObject | JsonArray | Scalar"


class NodeType(StrEnum):
    """The three kinds of node found in a generated tree.

    - OBJECT -> "object" : JsonObject
    - ARRAY  -> "array"  : JsonArray
    - SCALAR -> "scalar" : any leaf value, including null
    """

    OBJECT = auto()
    ARRAY = auto()
    SCALAR = auto()


def node_type_of(node: Node) -> NodeType:
    """Classify a node by its kind."""
    if isinstance(node, JsonObject):
        return NodeType.OBJECT
    if isinstance(node, JsonArray):
        return NodeType.ARRAY
    return NodeType.SCALAR


def _to_python(node: Node) -> Any:
    if isinstance(node, (JsonObject, JsonArray)):
        return node.to_python()
    return node


class JsonObject:
    """An order-preserving map node.

    Field names are unique; ``put`` on an existing name replaces the value
    in place and keeps the field's original position.

    Example::

        obj = JsonObject().put("foo", 17).put("bar", False)
        list(obj)          # ["foo", "bar"]
        obj.to_python()    # {"foo": 17, "bar": False}
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Node] | None = None) -> None:
        self._fields: dict[str, Node] = {}
        if fields is not None:
            for name, value in fields.items():
                self.put(name, value)

    def put(self, name: str, value: Node) -> JsonObject:
        """Set ``name`` to ``value`` (``None`` stores an explicit null).

        Raises:
            TypeError: If ``name`` is not a string.
        """
        if not isinstance(name, str):
            msg = f"field name must be a str, got {type(name).__name__}"
            raise TypeError(msg)
        self._fields[name] = value
        return self

    def get(self, name: str, default: Node = None) -> Node:
        return self._fields.get(name, default)

    def remove(self, name: str) -> Node:
        """Remove ``name`` and return its value.

        Raises:
            KeyError: If the field is absent.
        """
        return self._fields.pop(name)

    def field_names(self) -> list[str]:
        return list(self._fields)

    def items(self) -> Iterator[tuple[str, Node]]:
        return iter(self._fields.items())

    def to_python(self) -> dict[str, Any]:
        """Return a plain ``dict`` copy with nested nodes converted recursively."""
        return {name: _to_python(value) for name, value in self._fields.items()}

    def __getitem__(self, name: str) -> Node:
        return self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonObject({self._fields!r})"


class JsonArray:
    """An order-preserving sequence node."""

    __slots__ = ("_items",)

    def __init__(self, items: list[Node] | None = None) -> None:
        self._items: list[Node] = list(items) if items is not None else []

    def add(self, value: Node) -> JsonArray:
        """Append ``value`` (``None`` appends an explicit null)."""
        self._items.append(value)
        return self

    def to_python(self) -> list[Any]:
        return [_to_python(item) for item in self._items]

    def __getitem__(self, index: int) -> Node:
        return self._items[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonArray):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonArray({self._items!r})"
