"""Scalar tensor codec for Triton raw and structured output contents."""

from __future__ import annotations

import struct
from collections.abc import Sequence

LENGTH_PREFIX = struct.Struct("<I")


def decode_raw_string(buffer: bytes) -> str:
    """Decode a length-prefixed BYTES element; malformed input yields an empty string."""
    if len(buffer) < LENGTH_PREFIX.size:
        return ""
    (length,) = LENGTH_PREFIX.unpack_from(buffer)
    payload = buffer[LENGTH_PREFIX.size : LENGTH_PREFIX.size + length]
    return payload.decode("utf-8", errors="replace")


def decode_raw_bool(buffer: bytes) -> bool:
    """Decode a one-byte BOOL element."""
    if len(buffer) < 1:
        return False
    return buffer[0] != 0


def decode_bytes_contents(values: Sequence[bytes]) -> str:
    if not values:
        return ""
    first = values[0]
    if isinstance(first, str):
        return first
    return first.decode("utf-8", errors="replace")


def decode_bool_contents(values: Sequence[bool]) -> bool:
    if not values:
        return False
    return bool(values[0])


def encode_raw_string(value: str) -> bytes:
    """Encode a string the way Triton serializes a BYTES scalar."""
    payload = value.encode("utf-8")
    return LENGTH_PREFIX.pack(len(payload)) + payload


def encode_raw_bool(value: bool) -> bytes:
    return b"\x01" if value else b"\x00"
