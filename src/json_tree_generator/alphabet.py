"""Binary-to-text alphabets used by ``TreeGenerator.write_binary``.

Defines the structural ``BinaryAlphabet`` protocol and the ``Base64Variant``
implementation with the four standard variants:

- MIME              -> standard alphabet, padded, 76-char lines
- MIME_NO_LINEFEEDS -> standard alphabet, padded, no line wrapping (default)
- PEM               -> standard alphabet, padded, 64-char lines
- MODIFIED_FOR_URL  -> url-safe alphabet ("-" and "_"), no padding, no wrapping

Any object with a ``name`` and an ``encode(data: bytes) -> str`` method is
accepted as an alphabet; no inheritance is required.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

__all__ = [
    "MIME",
    "MIME_NO_LINEFEEDS",
    "MODIFIED_FOR_URL",
    "PEM",
    "Base64Variant",
    "BinaryAlphabet",
    "get_variant",
]

_LINE_SEPARATOR = "\n"


@runtime_checkable
class BinaryAlphabet(Protocol):
    """Structural protocol for binary-to-text encodings."""

    name: str

    def encode(self, data: bytes) -> str: ...


@dataclass(frozen=True, slots=True)
class Base64Variant:
    """A base64 flavour.

    Attributes:
        name:            Identifier used by ``get_variant``.
        url_safe:        Use "-" and "_" instead of "+" and "/".
        padding:         Emit trailing "=" padding.
        max_line_length: Wrap output into lines of at most this many
                         characters; None disables wrapping. Must be a
                         positive multiple of 4.
    """

    name: str
    url_safe: bool = False
    padding: bool = True
    max_line_length: int | None = None

    def __post_init__(self) -> None:
        if self.max_line_length is not None and (
            self.max_line_length <= 0 or self.max_line_length % 4
        ):
            msg = (
                "max_line_length must be a positive multiple of 4, "
                f"got {self.max_line_length}"
            )
            raise ValueError(msg)

    def encode(self, data: bytes) -> str:
        """Encode ``data`` to text using this variant."""
        raw = base64.urlsafe_b64encode(data) if self.url_safe else base64.b64encode(data)
        text = raw.decode("ascii")
        if not self.padding:
            text = text.rstrip("=")
        if self.max_line_length is None or len(text) <= self.max_line_length:
            return text
        step = self.max_line_length
        return _LINE_SEPARATOR.join(text[i : i + step] for i in range(0, len(text), step))

    def decode(self, text: str) -> bytes:
        """Decode text produced by ``encode`` back to bytes.

        Raises:
            ValueError: If ``text`` is not valid for this variant.
        """
        compact = "".join(text.split())
        compact += "=" * (-len(compact) % 4)
        try:
            if self.url_safe:
                return base64.urlsafe_b64decode(compact.encode("ascii"))
            return base64.b64decode(compact.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as exc:
            msg = f"invalid {self.name} text: {exc}"
            raise ValueError(msg) from exc


MIME = Base64Variant("MIME", max_line_length=76)
MIME_NO_LINEFEEDS = Base64Variant("MIME-NO-LINEFEEDS")
PEM = Base64Variant("PEM", max_line_length=64)
MODIFIED_FOR_URL = Base64Variant("MODIFIED-FOR-URL", url_safe=True, padding=False)

_VARIANTS: dict[str, Base64Variant] = {
    variant.name: variant for variant in (MIME, MIME_NO_LINEFEEDS, PEM, MODIFIED_FOR_URL)
}


def get_variant(name: str) -> Base64Variant:
    """Look up a standard variant by name.

    Raises:
        ValueError: If no standard variant has that name.
    """
    try:
        return _VARIANTS[name]
    except KeyError:
        msg = f"unknown base64 variant {name!r}, expected one of {sorted(_VARIANTS)}"
        raise ValueError(msg) from None
