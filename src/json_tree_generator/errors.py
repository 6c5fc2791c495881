"""Exceptions raised by TreeGenerator when a write is illegal in its state.

Argument problems (a ``None`` field name, a non-numeric number) are reported
with the builtin ``ValueError``/``TypeError``. Everything here describes a
call that is well-formed but not allowed at the current document position.
"""

from __future__ import annotations

__all__ = ["TreeGenerationError", "UnsupportedWriteError", "format_violation"]


def format_violation(operation: str, state: str, detail: str | None = None) -> str:
    """Build the diagnostic message for an illegal write.

    Example::

        format_violation("write end map", "InSequence")
        # 'can not write end map in state <InSequence>'
    """
    message = f"can not {operation} in state <{state}>"
    if detail:
        message = f"{message}: {detail}"
    return message


class TreeGenerationError(Exception):
    """A write call is not legal in the generator's current state.

    Attributes:
        operation: Label of the attempted call, e.g. ``"write start map"``.
        state:     The generator state at the time of the call, verbatim.
    """

    def __init__(self, operation: str, state: str, detail: str | None = None) -> None:
        super().__init__(format_violation(operation, state, detail))
        self.operation = operation
        self.state = state


class UnsupportedWriteError(TreeGenerationError):
    """The write has no meaning for an in-memory tree (raw text, pre-encoded bytes)."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(operation, state, "not supported when generating a tree")
