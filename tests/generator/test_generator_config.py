"""Tests for GeneratorConfig frozen dataclass.

Covers:
- Default values
- Immutability (FrozenInstanceError on assignment)
- Validation of max_nesting_depth and binary_alphabet
- Structural acceptance of custom alphabets
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from json_tree_generator import MIME_NO_LINEFEEDS, PEM, GeneratorConfig, TreeGenerator


class _HexAlphabet:
    name = "hex"

    def encode(self, data: bytes) -> str:
        return data.hex()


class TestDefaults:
    def test_strict_duplicate_detection_off(self) -> None:
        assert GeneratorConfig().strict_duplicate_detection is False

    def test_no_depth_limit(self) -> None:
        assert GeneratorConfig().max_nesting_depth is None

    def test_default_alphabet(self) -> None:
        assert GeneratorConfig().binary_alphabet is MIME_NO_LINEFEEDS


class TestImmutability:
    def test_assignment_raises(self) -> None:
        config = GeneratorConfig()
        with pytest.raises(FrozenInstanceError):
            config.max_nesting_depth = 3  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize("depth", [0, -1])
    def test_depth_must_be_positive(self, depth: int) -> None:
        with pytest.raises(ValueError, match="max_nesting_depth must be >= 1"):
            GeneratorConfig(max_nesting_depth=depth)

    def test_depth_one_allowed(self) -> None:
        assert GeneratorConfig(max_nesting_depth=1).max_nesting_depth == 1

    def test_alphabet_without_encode_rejected(self) -> None:
        with pytest.raises(ValueError, match="binary_alphabet"):
            GeneratorConfig(binary_alphabet="base64")  # type: ignore[arg-type]

    def test_custom_alphabet_accepted(self) -> None:
        config = GeneratorConfig(binary_alphabet=_HexAlphabet())
        gen = TreeGenerator(config)
        gen.start_sequence()
        gen.write_binary(None, b"\x01\xff")
        assert gen.get().to_python() == ["01ff"]  # type: ignore[union-attr]

    def test_standard_variant_accepted(self) -> None:
        assert GeneratorConfig(binary_alphabet=PEM).binary_alphabet is PEM
