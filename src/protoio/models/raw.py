"""Opaque byte payload message."""

from __future__ import annotations


class RawMessage:
    """Message whose payload is its own bytes.

    Useful for relaying frames without decoding them, and for payloads that
    are already serialized by some other means.

    Example:
        >>> RawMessage(b"hello").marshal()
        b'hello'
    """

    __slots__ = ("data",)

    def __init__(self, data: bytes = b"") -> None:
        self.data = bytes(data)

    def marshal(self) -> bytes:
        return self.data

    def unmarshal(self, data: bytes) -> None:
        self.data = bytes(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawMessage):
            return NotImplemented
        return self.data == other.data

    def __repr__(self) -> str:
        return f"RawMessage({self.data!r})"
