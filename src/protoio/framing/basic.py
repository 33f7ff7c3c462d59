"""In-memory framing utilities.

This module frames and unframes byte strings directly, for callers that hold
whole buffers rather than streams. The wire format is the same one the
delimited reader and writer use.
"""

from __future__ import annotations

from ..codec.varint import decode_uvarint, encode_uvarint, uvarint_size
from ..exceptions import FrameTooLargeError, FramingError, UnexpectedEOFError
from ..models.base import Message
from .base import DEFAULT_MAX_SIZE, validate_max_size


def frame_message(payload: bytes) -> bytes:
    """Frame a payload with its varint length prefix.

    The frame structure is:
    - [Length (varint, 1-9 bytes)] [Payload]

    Args:
        payload: Marshaled message bytes

    Returns:
        Framed message

    Example:
        >>> frame_message(b"Hello")
        b'\\x05Hello'
    """
    return encode_uvarint(len(payload)) + bytes(payload)


def unframe_message(framed: bytes, *, max_size: int = DEFAULT_MAX_SIZE) -> bytes:
    """Unframe a single frame and validate its length.

    Args:
        framed: Exactly one frame
        max_size: Largest payload accepted

    Returns:
        Original payload (without length prefix)

    Raises:
        EOFError: If framed is empty
        UnexpectedEOFError: If the frame is truncated
        FrameTooLargeError: If the declared length exceeds max_size
        FramingError: If bytes follow the frame
        VarintError: If the length prefix is malformed

    Example:
        >>> unframe_message(b"\\x05Hello")
        b'Hello'
    """
    payload, end = _next_frame(framed, 0, max_size)
    if end != len(framed):
        raise FramingError(
            f"Length mismatch: frame ends at byte {end}, but got {len(framed)} bytes"
        )
    return payload


def split_frames(data: bytes, *, max_size: int = DEFAULT_MAX_SIZE) -> list[bytes]:
    """Split a buffer of back-to-back frames into payloads.

    Args:
        data: Zero or more complete frames
        max_size: Largest payload accepted

    Returns:
        Payloads in stream order

    Raises:
        UnexpectedEOFError: If the last frame is truncated
        FrameTooLargeError: If any declared length exceeds max_size
        VarintError: If a length prefix is malformed
    """
    payloads = []
    position = 0
    while position < len(data):
        payload, position = _next_frame(data, position, max_size)
        payloads.append(payload)
    return payloads


def frame_size(message: Message) -> int:
    """Calculate the framed size of a message in bytes.

    Args:
        message: Message to measure

    Returns:
        Length prefix size plus payload size

    Example:
        >>> from protoio import RawMessage
        >>> frame_size(RawMessage(b"x" * 200))
        202
    """
    size = len(message.marshal())
    return uvarint_size(size) + size


def _next_frame(data: bytes, position: int, max_size: int) -> tuple[bytes, int]:
    """Decode the frame starting at ``position``.

    Returns:
        Tuple of (payload, position just past the frame)
    """
    validate_max_size(max_size)
    length, consumed = decode_uvarint(data, position)
    if length > max_size:
        raise FrameTooLargeError(length, max_size)

    start = position + consumed
    end = start + length
    if end > len(data):
        raise UnexpectedEOFError(
            f"Frame too short: prefix says {length} bytes, but got {len(data) - start} bytes"
        )
    return bytes(data[start:end]), end
