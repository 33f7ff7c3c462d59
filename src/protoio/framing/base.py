"""Shared framing constants, stream protocols and configuration.

This module defines the stream capabilities the delimited reader and writer
consume, the close delegation both of them share, and FramingConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..codec.varint import MAX_UVARINT

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 1024 * 1024
"""Default maximum payload size accepted by a reader (1 MiB)."""


class ByteSink(Protocol):
    """Writable byte stream. ``close`` is optional and looked up at runtime."""

    def write(self, data: bytes, /) -> Optional[int]: ...


def close_resource(resource: Any) -> Any:
    """Close ``resource`` if it can be closed.

    Streams that do not own anything, such as plain in-memory buffers without
    a ``close`` method, succeed trivially.

    Returns:
        Whatever the resource's ``close`` returned, or None
    """
    close = getattr(resource, "close", None)
    if close is None:
        logger.debug("%s has no close(), nothing to do", type(resource).__name__)
        return None
    logger.debug("Closing %s", type(resource).__name__)
    return close()


@dataclass(frozen=True)
class FramingConfig:
    """Configuration for delimited readers.

    Attributes:
        max_size: Largest payload, in bytes, a reader accepts (default 1 MiB).
            Pick it generously from the sizes of messages you expect; it
            bounds the memory a corrupted or hostile length prefix can claim.

    Examples:
        ```python
        from protoio import DelimitedReader, FramingConfig

        config = FramingConfig(max_size=64 * 1024)
        reader = DelimitedReader.from_config(stream, config)
        ```
    """

    max_size: int = DEFAULT_MAX_SIZE

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        validate_max_size(self.max_size)


def validate_max_size(max_size: int) -> None:
    """Check that ``max_size`` is usable as a reader's frame limit.

    Raises:
        ValueError: If max_size is below 1 or beyond the varint capacity
    """
    if isinstance(max_size, bool) or not isinstance(max_size, int):
        raise ValueError(f"max_size must be an integer, got {type(max_size).__name__}")
    if not 1 <= max_size <= MAX_UVARINT:
        raise ValueError(f"max_size must be between 1 and {MAX_UVARINT}, got {max_size}")
