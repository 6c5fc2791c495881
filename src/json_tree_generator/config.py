"""GeneratorConfig: immutable settings for a TreeGenerator."""

from __future__ import annotations

from dataclasses import dataclass

from json_tree_generator.alphabet import MIME_NO_LINEFEEDS, BinaryAlphabet

__all__ = ["GeneratorConfig"]


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable configuration for TreeGenerator.

    Attributes:
        strict_duplicate_detection: When True, naming a field that already
            exists in the current map is a structural violation.  Default
            False (the later value replaces the earlier one).
        max_nesting_depth: Maximum number of simultaneously open maps and
            sequences, or None for no limit.
        binary_alphabet: Alphabet used by ``write_binary`` when the caller
            passes ``alphabet=None``.
    """

    strict_duplicate_detection: bool = False
    max_nesting_depth: int | None = None
    binary_alphabet: BinaryAlphabet = MIME_NO_LINEFEEDS

    def __post_init__(self) -> None:
        if self.max_nesting_depth is not None and self.max_nesting_depth < 1:
            msg = f"max_nesting_depth must be >= 1, got {self.max_nesting_depth}"
            raise ValueError(msg)
        if not isinstance(self.binary_alphabet, BinaryAlphabet):
            msg = (
                "binary_alphabet must provide name and encode(), "
                f"got {type(self.binary_alphabet).__name__}"
            )
            raise ValueError(msg)
