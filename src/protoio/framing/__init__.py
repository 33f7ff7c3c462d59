"""Message framing for protoio.

This module provides the delimited reader and writer, in-memory framing
helpers and the shared framing configuration.
"""

from __future__ import annotations

from .base import DEFAULT_MAX_SIZE, FramingConfig, close_resource
from .basic import frame_message, frame_size, split_frames, unframe_message
from .reader import DelimitedReader
from .writer import DelimitedWriter

__all__ = [
    "DEFAULT_MAX_SIZE",
    "FramingConfig",
    "close_resource",
    "DelimitedReader",
    "DelimitedWriter",
    "frame_message",
    "unframe_message",
    "split_frames",
    "frame_size",
]
