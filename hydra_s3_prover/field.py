"""Scalar normalization for values entering the BN254 field."""

from __future__ import annotations

import re

from .config import SNARK_FIELD
from .exceptions import MalformedScalarError

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
_DECIMAL_DIGITS = re.compile(r"[0-9]+")


def normalize(value, label: str = "scalar", *, signed: bool = False) -> int:
    """
    Normalize a user supplied scalar into a Python integer.

    Accepts native integers, ``0x`` prefixed hex strings, decimal strings,
    big-endian bytes and petlib ``Bn``-like objects exposing ``binary()``.

    Args:
        value: Scalar to normalize.
        label: Field name reported in errors.
        signed: Allow negative results (only the claim value needs this so
            the validation pipeline can report it precisely).

    Returns:
        The integer value.

    Raises:
        MalformedScalarError: If the value cannot be parsed, or is negative
            while ``signed`` is False.
    """
    if value is None or isinstance(value, bool):
        raise MalformedScalarError(label, value)

    if isinstance(value, int):
        result = value
    elif isinstance(value, (bytes, bytearray)):
        if not value:
            raise MalformedScalarError(label, value, "empty bytes")
        result = int.from_bytes(value, "big")
    elif isinstance(value, str):
        result = _parse_string(value, label)
    else:
        binary = getattr(value, "binary", None)
        if not callable(binary):
            raise MalformedScalarError(
                label, value, "expected int, str, bytes or Bn-like"
            )
        result = int.from_bytes(binary(), "big")

    if result < 0 and not signed:
        raise MalformedScalarError(label, value, "must be non-negative")
    return result


def _parse_string(value: str, label: str) -> int:
    text = value.strip()
    negative = text.startswith("-")
    if negative:
        text = text[1:]
    if not text:
        raise MalformedScalarError(label, value, "empty string")

    if text[:2].lower() == "0x":
        if not _HEX_DIGITS.fullmatch(text[2:]):
            raise MalformedScalarError(label, value, "expected ASCII hex digits")
        parsed = int(text[2:], 16)
    else:
        if not _DECIMAL_DIGITS.fullmatch(text):
            raise MalformedScalarError(label, value, "not a decimal integer")
        parsed = int(text, 10)

    return -parsed if negative else parsed


def exceeds_field(value: int) -> bool:
    """Return True if ``value`` is not a canonical field element."""
    return value >= SNARK_FIELD


def to_hex_string(value: int) -> str:
    """
    Minimal even-length ``0x`` hex encoding.

    This is the canonical key format of the key/value trees
    (``0 -> "0x00"``, ``0xabc -> "0x0abc"``).
    """
    if value < 0:
        raise ValueError("cannot hex encode a negative value")
    digits = format(value, "x")
    if len(digits) % 2:
        digits = "0" + digits
    return "0x" + digits


def hex_zero_pad(value: int, length: int) -> str:
    """Left pad the hex encoding of ``value`` to ``length`` bytes."""
    encoded = to_hex_string(value)[2:]
    if len(encoded) > length * 2:
        raise ValueError(f"value does not fit in {length} bytes")
    return "0x" + encoded.rjust(length * 2, "0")


def hex_byte_length(value: int) -> int:
    """Number of bytes in the minimal hex encoding of ``value``."""
    return (len(to_hex_string(value)) - 2) // 2
