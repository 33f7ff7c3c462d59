"""Delimited message reader.

Reads frames written by DelimitedWriter: a varint payload length followed by
the payload. Every call to ``read_message`` ends in exactly one of three
ways:

- the populated message is returned,
- ``EOFError`` is raised because the stream ended cleanly on a frame
  boundary (the normal way to stop a read loop),
- any other exception is raised; the reader is then no longer aligned on a
  frame boundary and must not be read from again.

Example:
    ```python
    reader = DelimitedReader(stream, max_size=1024 * 1024)
    while True:
        msg = Status()
        try:
            reader.read_message(msg)
        except EOFError:
            break
        handle(msg)
    ```
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Callable, Iterator, Optional, TypeVar

from ..codec.varint import ByteSource, read_uvarint
from ..exceptions import FrameTooLargeError, UnexpectedEOFError
from ..models.base import Message
from .base import DEFAULT_MAX_SIZE, FramingConfig, close_resource, validate_max_size

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Message)


class DelimitedReader:
    """Reads varint length-prefixed messages from a byte source.

    The payload buffer grows to the largest frame seen and is reused between
    reads; it never grows beyond ``max_size``. Instances are not safe for
    concurrent use.

    Args:
        source: Readable byte stream whose ``read`` returns ``b""`` at end of stream
        max_size: Largest payload in bytes that will be accepted

    Raises:
        ValueError: If max_size is below 1
    """

    def __init__(self, source: ByteSource, max_size: int = DEFAULT_MAX_SIZE) -> None:
        validate_max_size(max_size)
        self._source = source
        self._max_size = max_size
        self._buf = bytearray()

    @classmethod
    def from_config(cls, source: ByteSource, config: FramingConfig) -> DelimitedReader:
        """Create a reader using the limits in ``config``."""
        return cls(source, max_size=config.max_size)

    @property
    def max_size(self) -> int:
        """Largest payload in bytes this reader accepts."""
        return self._max_size

    def read_frame(self) -> bytes:
        """Read the next frame and return its payload.

        Returns:
            Payload bytes of the next frame

        Raises:
            EOFError: If the stream ended cleanly before the next frame
            UnexpectedEOFError: If the stream ended inside a frame
            VarintOverflowError: If the length prefix needs more than 63 bits
            VarintNotMinimalError: If the length prefix is not minimally encoded
            FrameTooLargeError: If the declared length exceeds max_size
            BlockingIOError: If the source is non-blocking and has no data
        """
        length, _ = read_uvarint(self._source)
        if length > self._max_size:
            raise FrameTooLargeError(length, self._max_size)

        if len(self._buf) < length:
            self._buf.extend(bytes(length - len(self._buf)))
        with memoryview(self._buf) as whole, whole[:length] as view:
            self._read_full(view)
            payload = bytes(view)

        logger.debug("Read frame: %d byte payload", length)
        return payload

    def read_message(self, msg: M) -> M:
        """Read the next frame and unmarshal it into ``msg``.

        Args:
            msg: Message to populate in place

        Returns:
            ``msg``, for convenience

        Raises:
            EOFError: If the stream ended cleanly before the next frame
            UnexpectedEOFError: If the stream ended inside a frame
            VarintOverflowError: If the length prefix needs more than 63 bits
            FrameTooLargeError: If the declared length exceeds max_size
            BlockingIOError: If the source is non-blocking and has no data
            Exception: Whatever ``msg.unmarshal`` raises, unmodified
        """
        msg.unmarshal(self.read_frame())
        return msg

    def iter_messages(self, factory: Callable[[], M]) -> Iterator[M]:
        """Yield messages until the stream ends cleanly.

        Args:
            factory: Called once per frame to create the message to populate

        Raises:
            Everything ``read_message`` raises except the clean ``EOFError``
        """
        while True:
            msg = factory()
            try:
                self.read_message(msg)
            except EOFError:
                logger.debug("End of stream")
                return
            yield msg

    def close(self) -> Any:
        """Close the source if it can be closed, otherwise do nothing."""
        return close_resource(self._source)

    def _read_full(self, view: memoryview) -> None:
        """Fill ``view`` completely from the source."""
        source: Any = self._source
        readinto = getattr(source, "readinto", None)
        filled = 0
        total = len(view)
        while filled < total:
            with view[filled:] as rest:
                if readinto is not None:
                    count = readinto(rest)
                else:
                    chunk = source.read(len(rest))
                    count = None if chunk is None else len(chunk)
                    if count:
                        rest[:count] = chunk
            if count is None:
                raise BlockingIOError(
                    f"source returned None after {filled} of {total} payload bytes; "
                    "non-blocking streams are not supported"
                )
            if not count:
                raise UnexpectedEOFError(f"stream ended after {filled} of {total} payload bytes")
            filled += count

    def __enter__(self) -> DelimitedReader:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
