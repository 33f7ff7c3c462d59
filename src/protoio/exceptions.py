"""Exception hierarchy for protoio.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ProtoioError for easy catching of any protoio-specific error.

The clean end of a stream is not an error and is reported with the builtin
``EOFError``. ``UnexpectedEOFError`` is intentionally *not* an ``EOFError``
subclass so a read loop that stops on ``EOFError`` never mistakes a truncated
stream for a finished one.
"""

from __future__ import annotations


class ProtoioError(Exception):
    """Base exception for all protoio errors."""

    pass


class VarintError(ProtoioError):
    """Raised when a varint length prefix is malformed.

    Examples:
        - Value needs more than 63 bits
        - Encoding carries redundant trailing zero groups
    """

    pass


class VarintOverflowError(VarintError):
    """Raised when a varint would exceed the supported 63-bit capacity."""

    def __init__(self, message: str = "varints larger than uint63 not supported") -> None:
        super().__init__(message)


class VarintNotMinimalError(VarintError):
    """Raised when a varint is not encoded in its shortest form."""

    def __init__(self, message: str = "varint not minimally encoded") -> None:
        super().__init__(message)


class FramingError(ProtoioError):
    """Raised when framing operations fail.

    Examples:
        - Declared frame length exceeds the configured maximum
        - Stream ends inside a length prefix or payload
        - Sink accepts fewer bytes than a frame holds
    """

    pass


class FrameTooLargeError(FramingError):
    """Raised when a frame's declared length exceeds the reader's maximum.

    This is a policy violation rather than corruption: the stream may be
    perfectly valid and simply carry messages larger than the reader allows.

    Attributes:
        size: Declared payload length in bytes
        max_size: Configured maximum payload length in bytes
    """

    def __init__(self, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(f"frame of {size} bytes exceeds maximum of {max_size} bytes")


# Go-style name for the size-exceeded kind
ShortBufferError = FrameTooLargeError


class UnexpectedEOFError(FramingError):
    """Raised when a stream ends in the middle of a frame.

    Examples:
        - Some length prefix bytes were read, then the stream ended
        - Fewer payload bytes are available than the prefix declared
    """

    pass


class ShortWriteError(FramingError):
    """Raised when a sink accepts fewer bytes than it was given.

    Attributes:
        written: Bytes the sink reported as written
        expected: Bytes the frame holds
    """

    def __init__(self, written: int, expected: int) -> None:
        self.written = written
        self.expected = expected
        super().__init__(f"short write: {written} of {expected} bytes accepted")


class DecodeError(ProtoioError):
    """Raised when a payload cannot be unmarshaled into a message.

    Examples:
        - Payload is not valid for the message's serialization format
        - Decoded values fail the message model's validation
    """

    pass
