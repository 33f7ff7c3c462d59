"""Adapter for Protocol Buffers messages.

This module lets any object with the google.protobuf message API be framed by
the delimited reader and writer. The ``protobuf`` package itself is not
imported here; install it with ``pip install protoio[protobuf]``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from ..exceptions import DecodeError

P = TypeVar("P")


class ProtobufMessage(Generic[P]):
    """Wrap a protobuf message so it satisfies the Message protocol.

    Frames written through this adapter are byte-for-byte identical to those
    produced by ``writeDelimitedTo`` in the Java runtime and by gogo/protobuf's
    delimited writer.

    Args:
        proto: Message instance exposing SerializeToString/ParseFromString

    Example:
        ```python
        from google.protobuf import wrappers_pb2

        msg = ProtobufMessage(wrappers_pb2.DoubleValue(value=3.14))
        writer.write_message(msg)

        out = ProtobufMessage(wrappers_pb2.DoubleValue())
        reader.read_message(out)
        print(out.proto.value)
        ```
    """

    __slots__ = ("proto",)

    def __init__(self, proto: P) -> None:
        self.proto = proto

    def marshal(self) -> bytes:
        # Deterministic output keeps map fields stable across runs
        return bytes(self.proto.SerializeToString(deterministic=True))  # type: ignore[attr-defined]

    def unmarshal(self, data: bytes) -> None:
        """Parse ``data`` into the wrapped message, replacing its contents.

        Raises:
            DecodeError: If the payload is not a valid encoding of the message
        """
        proto: Any = self.proto
        try:
            proto.ParseFromString(bytes(data))
        except Exception as e:
            # google.protobuf.message.DecodeError, without importing protobuf
            raise DecodeError(f"Failed to parse {type(proto).__name__}: {e}") from e

    def __repr__(self) -> str:
        return f"ProtobufMessage({self.proto!r})"
