"""protoio: Length-Delimited Message Streams

A Python library for writing and reading streams of messages where every
message is prefixed with its length as an unsigned varint. This is the framing
used by Protocol Buffers' ``writeDelimitedTo``/``parseDelimitedFrom`` and by
go-msgio's protoio, and works over any byte stream: files, sockets, pipes.

Key Features:
- Varint length prefixes (63-bit, minimally encoded)
- Configurable maximum frame size on the read side
- Clean end of stream (EOFError) distinct from truncation (UnexpectedEOFError)
- Pydantic, Protobuf and raw-bytes message adapters

Quick Start:
    >>> import io
    >>> from typing import Optional
    >>> from protoio import BaseMessage, DelimitedReader, DelimitedWriter
    >>>
    >>> class Reading(BaseMessage):
    ...     sensor_id: int = 0
    ...     value: Optional[float] = None
    >>>
    >>> stream = io.BytesIO()
    >>> writer = DelimitedWriter(stream)
    >>> writer.write_message(Reading(sensor_id=1, value=3.14))
    29
    >>> _ = stream.seek(0)
    >>> reader = DelimitedReader(stream, max_size=1024 * 1024)
    >>> reader.read_message(Reading()).value
    3.14
"""

from __future__ import annotations

from .codec import MAX_UVARINT, decode_uvarint, encode_uvarint, read_uvarint, uvarint_size
from .exceptions import (
    DecodeError,
    FrameTooLargeError,
    FramingError,
    ProtoioError,
    ShortBufferError,
    ShortWriteError,
    UnexpectedEOFError,
    VarintError,
    VarintNotMinimalError,
    VarintOverflowError,
)
from .framing import (
    DEFAULT_MAX_SIZE,
    DelimitedReader,
    DelimitedWriter,
    FramingConfig,
    frame_message,
    frame_size,
    split_frames,
    unframe_message,
)
from .models import BaseMessage, Message, ProtobufMessage, RawMessage

__version__ = "0.1.0"

__all__ = [
    # Core API
    "DelimitedWriter",
    "DelimitedReader",
    "FramingConfig",
    "DEFAULT_MAX_SIZE",
    # Messages
    "Message",
    "BaseMessage",
    "RawMessage",
    "ProtobufMessage",
    # Exceptions
    "ProtoioError",
    "VarintError",
    "VarintOverflowError",
    "VarintNotMinimalError",
    "FramingError",
    "FrameTooLargeError",
    "ShortBufferError",
    "UnexpectedEOFError",
    "ShortWriteError",
    "DecodeError",
    # Framing
    "frame_message",
    "unframe_message",
    "split_frames",
    "frame_size",
    # Varint
    "MAX_UVARINT",
    "encode_uvarint",
    "decode_uvarint",
    "read_uvarint",
    "uvarint_size",
    # Version
    "__version__",
]
