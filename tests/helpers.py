"""Shared test messages and streams."""

from __future__ import annotations

import io
from typing import Optional

from hypothesis import strategies as st

from protoio import BaseMessage


class ClosableBuffer(io.BytesIO):
    """In-memory stream that records close() without discarding its bytes."""

    def __init__(self, initial: bytes = b"") -> None:
        super().__init__(initial)
        self.closed_count = 0

    def close(self) -> None:
        self.closed_count += 1

    @property
    def was_closed(self) -> bool:
        return self.closed_count > 0


class FifoBuffer:
    """Byte queue: reads consume what writes appended. No close()."""

    def __init__(self) -> None:
        self._data = bytearray()

    def write(self, data: bytes) -> int:
        self._data += data
        return len(data)

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._data)
        out = bytes(self._data[:size])
        del self._data[:size]
        return out


class ClosableFifoBuffer(FifoBuffer):
    """FifoBuffer that records close()."""

    def __init__(self) -> None:
        super().__init__()
        self.closed = False

    def close(self) -> None:
        self.closed = True


class PlainSink:
    """Sink with write() only, no close()."""

    def __init__(self) -> None:
        self.data = bytearray()

    def write(self, data: bytes) -> int:
        self.data += data
        return len(data)


class PlainSource:
    """Source with read() only: no readinto(), no close()."""

    def __init__(self, data: bytes, chunk: int = 3) -> None:
        self._data = bytes(data)
        self._position = 0
        self._chunk = chunk

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._data) - self._position
        # Short reads, like a socket
        size = min(size, self._chunk)
        out = self._data[self._position : self._position + size]
        self._position += len(out)
        return out


class NonBlockingSource:
    """Source with nothing more available yet: read() returns None once drained."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)

    def read(self, size: int = -1) -> Optional[bytes]:
        if not self._data:
            return None
        if size < 0:
            size = len(self._data)
        out = bytes(self._data[:size])
        del self._data[:size]
        return out


class NonBlockingBuffer(NonBlockingSource):
    """NonBlockingSource with readinto(), like a non-blocking socket file."""

    def readinto(self, buffer: memoryview) -> Optional[int]:
        chunk = self.read(len(buffer))
        if chunk is None:
            return None
        buffer[: len(chunk)] = chunk
        return len(chunk)


class OptionalFields(BaseMessage):
    """Message with every field optional, one per common scalar type."""

    field1: Optional[float] = None
    field2: Optional[float] = None
    field3: Optional[int] = None
    field4: Optional[int] = None
    field5: Optional[int] = None
    field6: Optional[int] = None
    field7: Optional[int] = None
    field8: Optional[int] = None
    field9: Optional[int] = None
    field10: Optional[int] = None
    field11: Optional[int] = None
    field12: Optional[int] = None
    field13: Optional[bool] = None
    field14: Optional[str] = None
    field15: Optional[bytes] = None


class Defaults(BaseMessage):
    """Message whose fields default to values other than None."""

    retries: Optional[int] = 3
    ratio: Optional[float] = 0.5
    name: Optional[str] = "unnamed"
    enabled: bool = True


def _optional(strategy: st.SearchStrategy) -> st.SearchStrategy:
    return st.none() | strategy


floats = st.floats(allow_nan=False)
int32s = st.integers(min_value=-(2**31), max_value=2**31 - 1)
int64s = st.integers(min_value=-(2**63), max_value=2**63 - 1)
uint32s = st.integers(min_value=0, max_value=2**32 - 1)

optional_fields_messages = st.builds(
    OptionalFields,
    field1=_optional(floats),
    field2=_optional(floats),
    field3=_optional(int32s),
    field4=_optional(int64s),
    field5=_optional(uint32s),
    field6=_optional(uint32s),
    field7=_optional(int32s),
    field8=_optional(int64s),
    field9=_optional(uint32s),
    field10=_optional(int32s),
    field11=_optional(uint32s),
    field12=_optional(int64s),
    field13=_optional(st.booleans()),
    field14=_optional(st.text(max_size=100)),
    field15=_optional(st.binary(max_size=100)),
)

# Fields are left unset, set to None or set to a value
defaults_messages = st.fixed_dictionaries(
    {},
    optional={
        "retries": _optional(int64s),
        "ratio": _optional(floats),
        "name": _optional(st.text(max_size=20)),
        "enabled": st.booleans(),
    },
).map(lambda fields: Defaults(**fields))
