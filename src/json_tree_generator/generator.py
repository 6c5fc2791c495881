"""TreeGenerator: assembles a JsonObject/JsonArray tree from write events.

A driver (a serializer, ``walker.emit``, hand-written code) describes a
document as a flat sequence of calls::

    gen = TreeGenerator()
    gen.start_map()
    gen.field_name("foo")
    gen.write_number(17)
    gen.field_name("bar")
    gen.write_boolean(False)
    gen.end_map()
    gen.get()  # JsonObject({'foo': 17, 'bar': False})

The generator keeps two stacks that always move together: the open
composite nodes and their structural states.  The state stack carries one
extra EMPTY entry at the bottom, so the current state is always
``_states[-1]`` and dispatch never needs a type test on the node itself.
Naming a field turns the top IN_MAP into FIELD_PENDING; the next value
turns it back.

Every call either succeeds, mutating exactly one place in the tree, or
raises without touching anything.  After a TreeGenerationError the
document should be considered lost; the generator does not roll back or
repair and should be discarded.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING, Any, cast

import numpy as np

from json_tree_generator.config import GeneratorConfig
from json_tree_generator.errors import TreeGenerationError, UnsupportedWriteError
from json_tree_generator.nodes import JsonArray, JsonObject

if TYPE_CHECKING:
    from json_tree_generator.alphabet import BinaryAlphabet
    from json_tree_generator.nodes import Node, Scalar

__all__ = ["GeneratorState", "TreeGenerator"]

logger = logging.getLogger(__name__)

_NUMBER_TYPES = (int, float, Decimal, np.integer, np.floating)


class GeneratorState(StrEnum):
    """Structural position of a TreeGenerator.

    Values are the labels reported in error messages.

    - EMPTY         : nothing open; only a map or sequence may start
    - IN_MAP        : top is a JsonObject expecting a field name or its end
    - IN_SEQUENCE   : top is a JsonArray expecting a value or its end
    - FIELD_PENDING : a field name is set on the top JsonObject; a value must follow
    """

    EMPTY = "Empty"
    IN_MAP = "InMap"
    IN_SEQUENCE = "InSequence"
    FIELD_PENDING = "FieldPending"


class TreeGenerator:
    """Event sink that builds an in-memory tree.

    Not safe for concurrent use; one instance serves one document written
    from a single thread of control.

    Args:
        config: Generator settings. Defaults to ``GeneratorConfig()`` when None.
    """

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self._config = config if config is not None else GeneratorConfig()
        self._root: JsonObject | JsonArray | None = None
        self._positions: list[JsonObject | JsonArray] = []
        self._states: list[GeneratorState] = [GeneratorState.EMPTY]
        self._field_name: str | None = None
        # Depth of the enclosing document when this generator stages a nested value.
        self._base_depth = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def state(self) -> GeneratorState:
        """The current structural state."""
        return self._states[-1]

    @property
    def depth(self) -> int:
        """Number of currently open maps and sequences."""
        return len(self._positions)

    @property
    def pending_field_name(self) -> str | None:
        """The field name awaiting its value, set only in FIELD_PENDING."""
        return self._field_name

    def get(self) -> JsonObject | JsonArray | None:
        """Return the root of the generated tree.

        Available at any time, including while the document is still open;
        the returned node keeps changing as further writes arrive.  Returns
        None if no map or sequence has been started yet.
        """
        return self._root

    # ------------------------------------------------------------------
    # Stack discipline
    # ------------------------------------------------------------------

    def _violation(self, operation: str, detail: str | None = None) -> TreeGenerationError:
        logger.debug("rejected %s in state %s", operation, self.state)
        return TreeGenerationError(operation, self.state, detail)

    def _check_depth(self, operation: str) -> None:
        limit = self._config.max_nesting_depth
        if limit is not None and self._base_depth + len(self._positions) >= limit:
            raise self._violation(operation, f"maximum nesting depth {limit} reached")

    def _attach(self, value: Node, operation: str) -> None:
        """Place ``value`` at the current position, or raise if none accepts one."""
        state = self._states[-1]
        if state is GeneratorState.IN_SEQUENCE:
            cast(JsonArray, self._positions[-1]).add(value)
        elif state is GeneratorState.FIELD_PENDING:
            cast(JsonObject, self._positions[-1]).put(cast(str, self._field_name), value)
            self._field_name = None
            self._states[-1] = GeneratorState.IN_MAP
        else:
            raise self._violation(operation)

    def _check_value_position(self, operation: str) -> None:
        if self._states[-1] not in (GeneratorState.IN_SEQUENCE, GeneratorState.FIELD_PENDING):
            raise self._violation(operation)

    def _check_start(self, operation: str) -> None:
        if self._states[-1] is GeneratorState.IN_MAP:
            raise self._violation(operation, "a field name must be written first")
        self._check_depth(operation)

    def _place(self, node: JsonObject | JsonArray, operation: str) -> None:
        """Put a composite at the current position; at depth zero it may become the root."""
        if self._states[-1] is GeneratorState.EMPTY:
            if self._root is None:
                self._root = node
        else:
            self._attach(node, operation)

    def _start(
        self, node: JsonObject | JsonArray, new_state: GeneratorState, operation: str
    ) -> None:
        self._check_start(operation)
        self._place(node, operation)
        self._positions.append(node)
        self._states.append(new_state)

    def _end(self, expected: GeneratorState, operation: str) -> None:
        if self._states[-1] is not expected:
            raise self._violation(operation)
        self._states.pop()
        self._positions.pop()
        if not self._positions:
            logger.debug("document closed, root is %s", type(self._root).__name__)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def start_map(self) -> None:
        """Open a JsonObject at the current position."""
        self._start(JsonObject(), GeneratorState.IN_MAP, "write start map")

    def end_map(self) -> None:
        """Close the innermost JsonObject."""
        self._end(GeneratorState.IN_MAP, "write end map")

    def start_sequence(self) -> None:
        """Open a JsonArray at the current position."""
        self._start(JsonArray(), GeneratorState.IN_SEQUENCE, "write start sequence")

    def end_sequence(self) -> None:
        """Close the innermost JsonArray."""
        self._end(GeneratorState.IN_SEQUENCE, "write end sequence")

    def field_name(self, name: str) -> None:
        """Name the next field of the innermost JsonObject.

        Raises:
            ValueError: If ``name`` is None.
            TypeError: If ``name`` is not a string.
            TreeGenerationError: If no map is expecting a field name, or the
                field already exists and strict duplicate detection is on.
        """
        if name is None:
            raise ValueError("name must not be None")
        if not isinstance(name, str):
            msg = f"name must be a str, got {type(name).__name__}"
            raise TypeError(msg)
        if self._states[-1] is not GeneratorState.IN_MAP:
            raise self._violation("write field name")
        if self._config.strict_duplicate_detection and name in self._positions[-1]:
            raise self._violation("write field name", f"duplicate field {name!r}")
        self._field_name = name
        self._states[-1] = GeneratorState.FIELD_PENDING

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    @staticmethod
    def _checked_text(text: str | None) -> str | None:
        if text is not None and not isinstance(text, str):
            msg = f"text must be a str, got {type(text).__name__}"
            raise TypeError(msg)
        return text

    @staticmethod
    def _checked_number(number: Any) -> Any:
        if isinstance(number, (bool, np.bool_)) or not isinstance(number, _NUMBER_TYPES):
            msg = (
                "number must be int, float, Decimal or a numpy number, "
                f"got {type(number).__name__}"
            )
            raise TypeError(msg)
        return number

    @staticmethod
    def _checked_boolean(value: Any) -> bool:
        if not isinstance(value, (bool, np.bool_)):
            msg = f"value must be a bool, got {type(value).__name__}"
            raise TypeError(msg)
        return bool(value)

    @staticmethod
    def _checked_binary(data: Any, offset: int, length: int | None) -> bytes:
        """Return a copy of ``data[offset:offset + length]`` after validating the range."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            msg = f"data must be bytes-like, got {type(data).__name__}"
            raise TypeError(msg)
        # tobytes() also flattens strided and multi-dimensional views.
        raw = memoryview(data).tobytes()
        size = len(raw)
        if length is None:
            length = size - offset
        if offset < 0 or length < 0 or offset + length > size:
            msg = f"range [{offset}, {offset + length}) is outside data of length {size}"
            raise ValueError(msg)
        if offset == 0 and length == size:
            return raw
        return raw[offset : offset + length]

    def write_text(self, text: str | None) -> None:
        """Write a string value; None writes null."""
        self._attach(self._checked_text(text), "write text")

    def write_number(self, number: int | float | Decimal | np.integer | np.floating) -> None:
        """Write a numeric value exactly as given (no widening or rounding)."""
        self._attach(self._checked_number(number), "write number")

    def write_boolean(self, value: bool) -> None:
        self._attach(self._checked_boolean(value), "write boolean")

    def write_null(self) -> None:
        self._attach(None, "write null")

    def write_binary(
        self,
        alphabet: BinaryAlphabet | None,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        length: int | None = None,
    ) -> None:
        """Encode ``data[offset:offset + length]`` as text and write it.

        Args:
            alphabet: Binary-to-text encoding; None uses ``config.binary_alphabet``.
            data:     The bytes to encode.
            offset:   Start of the range.
            length:   Size of the range; None means up to the end of ``data``.

        Raises:
            TypeError: If ``data`` is not bytes-like.
            ValueError: If the range does not lie within ``data``.
        """
        chunk = self._checked_binary(data, offset, length)
        self._check_value_position("write binary")
        if alphabet is None:
            alphabet = self._config.binary_alphabet
        self._attach(alphabet.encode(chunk), "write binary")

    # ------------------------------------------------------------------
    # Field shortcuts
    # ------------------------------------------------------------------
    # The value is validated before the field name is written, so a
    # rejected shortcut leaves the map exactly as it was.

    def write_text_field(self, name: str, text: str | None) -> None:
        text = self._checked_text(text)
        self.field_name(name)
        self._attach(text, "write text")

    def write_number_field(
        self, name: str, number: int | float | Decimal | np.integer | np.floating
    ) -> None:
        number = self._checked_number(number)
        self.field_name(name)
        self._attach(number, "write number")

    def write_boolean_field(self, name: str, value: bool) -> None:
        checked = self._checked_boolean(value)
        self.field_name(name)
        self._attach(checked, "write boolean")

    def write_null_field(self, name: str) -> None:
        self.field_name(name)
        self.write_null()

    def write_binary_field(
        self,
        name: str,
        data: bytes | bytearray | memoryview,
        alphabet: BinaryAlphabet | None = None,
    ) -> None:
        self._checked_binary(data, 0, None)
        self.field_name(name)
        self.write_binary(alphabet, data)

    def write_map_field_start(self, name: str) -> None:
        self._check_depth("write start map")
        self.field_name(name)
        self.start_map()

    def write_sequence_field_start(self, name: str) -> None:
        self._check_depth("write start sequence")
        self.field_name(name)
        self.start_sequence()

    # ------------------------------------------------------------------
    # Whole values
    # ------------------------------------------------------------------

    def _write_whole(self, value: Any, operation: str, nodes_only: bool) -> None:
        """Emit ``value`` so that a failure anywhere inside it changes nothing.

        A scalar is a single write and already all-or-nothing.  A composite
        is first built in a staging generator that shares this config and
        counts depth from the current position; only the finished subtree
        is placed into this document.
        """
        from json_tree_generator.walker import emit, is_composite

        if not is_composite(value, nodes_only=nodes_only):
            emit(self, value, nodes_only=nodes_only)
            return
        self._check_start(operation)
        staging = TreeGenerator(self._config)
        staging._base_depth = self._base_depth + len(self._positions)
        emit(staging, value, nodes_only=nodes_only)
        self._place(cast("JsonObject | JsonArray", staging.get()), operation)

    def write_value(self, value: Any) -> None:
        """Emit the events describing an arbitrary Python value.

        See ``json_tree_generator.walker.emit`` for the accepted types.  If
        any part of ``value`` is rejected, nothing is written.
        """
        self._write_whole(value, "write value", nodes_only=False)

    def write_tree(self, node: JsonObject | JsonArray | Scalar) -> None:
        """Copy an existing tree (or scalar) into the document at the current position."""
        self._write_whole(node, "write tree", nodes_only=True)

    # ------------------------------------------------------------------
    # Unsupported for an in-memory tree
    # ------------------------------------------------------------------

    def write_raw(self, text: str) -> None:
        raise UnsupportedWriteError("write raw text", self.state)

    def write_raw_utf8_text(self, data: bytes, offset: int = 0, length: int | None = None) -> None:
        raise UnsupportedWriteError("write raw UTF-8 text", self.state)

    def write_utf8_text(self, data: bytes, offset: int = 0, length: int | None = None) -> None:
        raise UnsupportedWriteError("write UTF-8 text", self.state)

    def write_number_literal(self, encoded: str) -> None:
        raise UnsupportedWriteError("write number literal", self.state)

    # ------------------------------------------------------------------
    # Resource handling (nothing is held)
    # ------------------------------------------------------------------

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass
