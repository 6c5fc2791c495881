"""Value walker: describes a Python value to a TreeGenerator as write events.

Uses recursive dispatch over the value, emitting events depth-first in
document order.  The dispatch order matters: bool MUST be checked before
int because bool is a subclass of int in Python (isinstance(True, int) is
True), and numpy.bool_ is handled together with bool.

Accepted values:

- JsonObject, dict and any other Mapping with str keys -> map events
- JsonArray, list, tuple and numpy.ndarray             -> sequence events
- str                                                  -> write_text
- int, float, Decimal, numpy integer/floating           -> write_number
- bool, numpy.bool_                                    -> write_boolean
- None                                                 -> write_null
- bytes, bytearray, memoryview                         -> write_binary
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, cast

import numpy as np

from json_tree_generator.generator import TreeGenerator
from json_tree_generator.nodes import JsonArray, JsonObject

if TYPE_CHECKING:
    from json_tree_generator.config import GeneratorConfig

__all__ = ["ValueWalker", "emit", "is_composite", "to_tree"]


@dataclass
class ValueWalker:
    """Emits the write events for a value into a generator.

    Attributes:
        generator:  The event sink.
        nodes_only: When True only tree nodes (JsonObject, JsonArray and
                    scalars) are accepted; plain containers and bytes raise
                    TypeError.  Used to copy an existing tree.
    """

    generator: TreeGenerator
    nodes_only: bool = False

    def walk(self, value: Any) -> None:
        """Emit ``value``.

        Raises:
            TypeError: If ``value`` (or anything nested in it) has an
                unsupported type, or a map key is not a string.
        """
        gen = self.generator
        # CRITICAL: bool MUST be checked before int
        if isinstance(value, (bool, np.bool_)):
            gen.write_boolean(bool(value))
            return

        if value is None:
            gen.write_null()
            return

        if isinstance(value, str):
            gen.write_text(value)
            return

        if isinstance(value, (int, float, Decimal, np.integer, np.floating)):
            gen.write_number(value)
            return

        if isinstance(value, JsonObject):
            self._walk_map(value.items())
            return

        if isinstance(value, JsonArray):
            self._walk_sequence(value)
            return

        if not self.nodes_only:
            if isinstance(value, Mapping):
                self._walk_map(value.items())
                return
            if isinstance(value, (list, tuple)):
                self._walk_sequence(value)
                return
            if isinstance(value, np.ndarray):
                if value.ndim == 0:
                    self.walk(value[()])
                else:
                    # Iteration yields numpy scalars, keeping their width.
                    self._walk_sequence(value)
                return
            if isinstance(value, (bytes, bytearray, memoryview)):
                gen.write_binary(None, value)
                return

        msg = f"Unsupported value type: {type(value)!r}"
        raise TypeError(msg)

    def _walk_map(self, items: Any) -> None:
        gen = self.generator
        gen.start_map()
        for name, child in items:
            if not isinstance(name, str):
                msg = f"map keys must be str, got {type(name).__name__}"
                raise TypeError(msg)
            gen.field_name(name)
            self.walk(child)
        gen.end_map()

    def _walk_sequence(self, items: Any) -> None:
        gen = self.generator
        gen.start_sequence()
        for child in items:
            self.walk(child)
        gen.end_sequence()


def is_composite(value: Any, *, nodes_only: bool = False) -> bool:
    """True when walking ``value`` opens a map or sequence rather than writing a scalar."""
    if isinstance(value, (JsonObject, JsonArray)):
        return True
    if nodes_only:
        return False
    if isinstance(value, np.ndarray):
        return value.ndim > 0
    return isinstance(value, (Mapping, list, tuple))


def emit(generator: TreeGenerator, value: Any, *, nodes_only: bool = False) -> None:
    """Emit the write events describing ``value`` into ``generator``."""
    ValueWalker(generator, nodes_only=nodes_only).walk(value)


def to_tree(
    value: Mapping[str, Any] | list[Any] | tuple[Any, ...] | JsonObject | JsonArray,
    config: GeneratorConfig | None = None,
) -> JsonObject | JsonArray:
    """Build a tree from a composite Python value.

    Example::

        tree = to_tree({"foo": 17, "tags": ["a", "b"]})
        tree["tags"][1]   # "b"

    Raises:
        TreeGenerationError: If ``value`` is a scalar; only a map or a
            sequence can be the root of a document.
        TypeError: If ``value`` contains unsupported types.
    """
    generator = TreeGenerator(config)
    emit(generator, value)
    return cast(JsonObject | JsonArray, generator.get())
