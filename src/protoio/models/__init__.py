"""Message types for protoio.

This module provides the Message protocol consumed by the delimited reader
and writer, and ready-made implementations of it.
"""

from __future__ import annotations

from .base import BaseMessage, Message
from .protobuf import ProtobufMessage
from .raw import RawMessage

__all__ = [
    "Message",
    "BaseMessage",
    "RawMessage",
    "ProtobufMessage",
]
