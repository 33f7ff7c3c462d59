"""Delimited message writer.

Each message is written as ``uvarint(len(payload)) || payload`` with no
header, separator or checksum between frames.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Iterable, Optional

from ..codec.varint import put_uvarint
from ..exceptions import ShortWriteError
from ..models.base import Message
from .base import ByteSink, close_resource

logger = logging.getLogger(__name__)


class DelimitedWriter:
    """Writes varint length-prefixed messages to a byte sink.

    The writer does not buffer across calls: every frame is handed to the
    sink before ``write_message`` returns. Instances are not safe for
    concurrent use, the scratch buffer is shared between calls.

    Args:
        sink: Writable byte stream (file, socket file, BytesIO, ...)

    Example:
        >>> import io
        >>> from protoio import RawMessage
        >>> sink = io.BytesIO()
        >>> writer = DelimitedWriter(sink)
        >>> writer.write_message(RawMessage(b"hi"))
        3
        >>> sink.getvalue()
        b'\\x02hi'
    """

    def __init__(self, sink: ByteSink) -> None:
        self._sink = sink
        self._buf = bytearray()

    def write_message(self, msg: Message) -> int:
        """Marshal ``msg`` and write it as one frame.

        Args:
            msg: Message to write

        Returns:
            Number of bytes written (prefix plus payload)

        Raises:
            ShortWriteError: If the sink accepts fewer bytes than the frame holds
            OSError: Any failure from the sink, unmodified
        """
        return self.write_frame(msg.marshal())

    def write_frame(self, payload: bytes) -> int:
        """Write an already marshaled payload as one frame.

        Returns:
            Number of bytes written (prefix plus payload)
        """
        prefix = self._buf
        del prefix[:]
        put_uvarint(prefix, len(payload))
        frame = bytes(prefix) + payload

        written = self._sink.write(frame)
        # Sinks such as some file wrappers return None once everything is taken
        if written is not None and written != len(frame):
            raise ShortWriteError(written, len(frame))

        logger.debug("Wrote frame: %d byte payload, %d bytes total", len(payload), len(frame))
        return len(frame)

    def write_messages(self, msgs: Iterable[Message]) -> int:
        """Write every message of ``msgs`` in order.

        Returns:
            Total number of bytes written
        """
        return sum(self.write_message(msg) for msg in msgs)

    def close(self) -> Any:
        """Close the sink if it can be closed, otherwise do nothing."""
        return close_resource(self._sink)

    def __enter__(self) -> DelimitedWriter:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
