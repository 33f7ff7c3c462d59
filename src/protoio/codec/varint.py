"""Unsigned varint encoding and decoding.

Values are split into 7-bit groups, least significant group first. Every
byte except the last has its high bit set. Following the multiformats
unsigned-varint rules, values are limited to 63 bits (at most 9 bytes) and
must be minimally encoded.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from ..exceptions import UnexpectedEOFError, VarintNotMinimalError, VarintOverflowError

MAX_UVARINT_BITS = 63
MAX_UVARINT = (1 << MAX_UVARINT_BITS) - 1
MAX_UVARINT_LEN = (MAX_UVARINT_BITS + 6) // 7


class ByteSource(Protocol):
    """Readable byte stream returning ``b""`` at end of stream.

    Reads must block. A non-blocking stream that returns None for "no data
    yet" is rejected with BlockingIOError. ``readinto`` and ``close`` are
    optional and looked up at runtime.
    """

    def read(self, size: int = ..., /) -> bytes: ...


def uvarint_size(value: int) -> int:
    """Return the number of bytes needed to encode ``value``.

    Args:
        value: Non-negative integer up to MAX_UVARINT

    Returns:
        Encoded length in bytes (1-9)
    """
    if value < 0:
        raise ValueError(f"uvarint requires non-negative value, got {value}")
    return max(1, (value.bit_length() + 6) // 7)


def encode_uvarint(value: int) -> bytes:
    """Encode an unsigned integer as a varint.

    Args:
        value: Non-negative integer up to MAX_UVARINT

    Returns:
        Varint bytes

    Raises:
        ValueError: If value is negative
        VarintOverflowError: If value needs more than 63 bits

    Example:
        >>> encode_uvarint(300)
        b'\\xac\\x02'
    """
    buf = bytearray()
    put_uvarint(buf, value)
    return bytes(buf)


def put_uvarint(buf: bytearray, value: int) -> int:
    """Append the varint encoding of ``value`` to ``buf``.

    Returns:
        Number of bytes appended
    """
    if value < 0:
        raise ValueError(f"uvarint requires non-negative value, got {value}")
    if value > MAX_UVARINT:
        raise VarintOverflowError()

    start = len(buf)
    while value >= 0x80:
        buf.append((value & 0x7F) | 0x80)
        value >>= 7
    buf.append(value)
    return len(buf) - start


def _decode(next_byte: Callable[[], Optional[int]]) -> tuple[int, int]:
    """Decode one varint pulling bytes from ``next_byte``.

    ``next_byte`` returns None once the input is exhausted.

    Raises:
        EOFError: If the input is exhausted before the first byte
        UnexpectedEOFError: If the input ends inside the varint
        VarintOverflowError: If the value would need more than 63 bits
        VarintNotMinimalError: If the encoding has trailing zero groups
    """
    value = 0
    shift = 0
    count = 0
    while True:
        byte = next_byte()
        if byte is None:
            if count == 0:
                raise EOFError("end of stream")
            raise UnexpectedEOFError(f"stream ended after {count} varint bytes")
        count += 1

        payload = byte & 0x7F
        if payload >> (MAX_UVARINT_BITS - shift):
            raise VarintOverflowError()
        value |= payload << shift

        if byte < 0x80:
            if byte == 0 and count > 1:
                raise VarintNotMinimalError()
            return value, count

        shift += 7
        if shift >= MAX_UVARINT_BITS:
            raise VarintOverflowError()


def read_uvarint(source: ByteSource) -> tuple[int, int]:
    """Read one varint from a stream, one byte at a time.

    No byte past the end of the varint is consumed.

    Args:
        source: Readable byte stream

    Returns:
        Tuple of (value, bytes consumed)

    Raises:
        EOFError: If the stream is already at its end
        UnexpectedEOFError: If the stream ends inside the varint
        VarintOverflowError: If the value would need more than 63 bits
        VarintNotMinimalError: If the encoding is not minimal
        BlockingIOError: If the source is non-blocking and has no data
    """

    def next_byte() -> Optional[int]:
        chunk = source.read(1)
        if chunk is None:
            raise BlockingIOError("source returned None; non-blocking streams are not supported")
        return chunk[0] if chunk else None

    return _decode(next_byte)


def decode_uvarint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode one varint from an in-memory buffer.

    Args:
        data: Buffer holding the varint
        offset: Position of the first varint byte

    Returns:
        Tuple of (value, bytes consumed)

    Raises:
        EOFError: If offset is at the end of data
        UnexpectedEOFError: If data ends inside the varint
        VarintOverflowError: If the value would need more than 63 bits
        VarintNotMinimalError: If the encoding is not minimal

    Example:
        >>> decode_uvarint(b'\\xac\\x02')
        (300, 2)
    """
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")
    position = offset

    def next_byte() -> Optional[int]:
        nonlocal position
        if position >= len(data):
            return None
        byte = data[position]
        position += 1
        return byte

    return _decode(next_byte)
