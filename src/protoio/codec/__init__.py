"""Varint codec for protoio.

This module provides the unsigned varint primitive used for frame length
prefixes.
"""

from __future__ import annotations

from .varint import (
    MAX_UVARINT,
    MAX_UVARINT_BITS,
    MAX_UVARINT_LEN,
    decode_uvarint,
    encode_uvarint,
    put_uvarint,
    read_uvarint,
    uvarint_size,
)

__all__ = [
    "MAX_UVARINT",
    "MAX_UVARINT_BITS",
    "MAX_UVARINT_LEN",
    "encode_uvarint",
    "put_uvarint",
    "decode_uvarint",
    "read_uvarint",
    "uvarint_size",
]
