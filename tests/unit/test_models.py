"""Unit tests for message adapters."""

from __future__ import annotations

import math
from typing import Optional

import pytest

from protoio import BaseMessage, DecodeError, Message, ProtobufMessage, RawMessage
from tests.helpers import Defaults, OptionalFields


class Status(BaseMessage):
    """Simple test message."""

    vehicle_id: int
    active: bool = False
    note: Optional[str] = None


class FakeProto:
    """Stand-in exposing the google.protobuf serialization methods."""

    def __init__(self, value: bytes = b"") -> None:
        self.value = value
        self.deterministic: Optional[bool] = None

    def SerializeToString(self, deterministic: bool = False) -> bytes:
        self.deterministic = deterministic
        return self.value

    def ParseFromString(self, data: bytes) -> int:
        if data.startswith(b"!"):
            raise ValueError("Error parsing message")
        self.value = data
        return len(data)


class TestMessageProtocol:
    """Test which objects satisfy Message."""

    def test_adapters_are_messages(self) -> None:
        """Test every adapter satisfies the protocol."""
        assert isinstance(Status(vehicle_id=1), Message)
        assert isinstance(RawMessage(), Message)
        assert isinstance(ProtobufMessage(FakeProto()), Message)

    def test_plain_object_is_not_message(self) -> None:
        """Test objects without marshal/unmarshal are rejected."""
        assert not isinstance(object(), Message)


class TestBaseMessage:
    """Test the Pydantic adapter."""

    def test_marshal_compact_json(self) -> None:
        """Test the payload omits unset optional fields."""
        assert Status(vehicle_id=42, active=True).marshal() == b'{"vehicle_id":42,"active":true}'

    def test_marshal_deterministic(self) -> None:
        """Test equal messages marshal identically."""
        assert Status(vehicle_id=1, note="x").marshal() == Status(vehicle_id=1, note="x").marshal()

    def test_unmarshal_in_place(self) -> None:
        """Test unmarshal replaces every field."""
        msg = Status(vehicle_id=1, active=True, note="old")
        msg.unmarshal(b'{"vehicle_id":7}')

        assert msg.vehicle_id == 7
        assert msg.active is False
        assert msg.note is None
        assert msg.model_fields_set == {"vehicle_id"}

    def test_unmarshal_invalid_json(self) -> None:
        """Test malformed payloads raise DecodeError."""
        with pytest.raises(DecodeError, match="Status"):
            Status(vehicle_id=1).unmarshal(b"\x00\x01")

    def test_unmarshal_validation_failure(self) -> None:
        """Test schema violations raise DecodeError and leave the message intact."""
        msg = Status(vehicle_id=1)
        with pytest.raises(DecodeError):
            msg.unmarshal(b'{"vehicle_id":1,"unknown":2}')
        assert msg.vehicle_id == 1

    def test_bytes_field(self) -> None:
        """Test arbitrary bytes survive the payload."""
        original = OptionalFields(field15=bytes(range(256)))
        decoded = OptionalFields()
        decoded.unmarshal(original.marshal())

        assert decoded == original

    def test_explicit_none_overrides_default(self) -> None:
        """Test a None set on purpose survives instead of reverting to the default."""
        original = Defaults(retries=None)
        assert original.marshal() == b'{"retries":null}'

        decoded = Defaults()
        decoded.unmarshal(original.marshal())
        assert decoded.retries is None
        assert decoded.name == "unnamed"

    def test_unset_fields_take_defaults(self) -> None:
        """Test fields never set are left out and come back as defaults."""
        assert Defaults().marshal() == b"{}"

        decoded = Defaults(retries=9)
        decoded.unmarshal(b"{}")
        assert decoded == Defaults()

    @pytest.mark.parametrize("value", [float("inf"), float("-inf")])
    def test_infinite_float(self, value: float) -> None:
        """Test infinities survive the payload instead of becoming null."""
        original = OptionalFields(field1=value)
        decoded = OptionalFields()
        decoded.unmarshal(original.marshal())

        assert decoded.field1 == value

    def test_nan_float(self) -> None:
        """Test NaN survives the payload."""
        original = OptionalFields(field2=float("nan"))
        assert b"NaN" in original.marshal()

        decoded = OptionalFields()
        decoded.unmarshal(original.marshal())
        assert math.isnan(decoded.field2)


class TestRawMessage:
    """Test the raw bytes adapter."""

    def test_roundtrip(self) -> None:
        """Test the payload is the data itself."""
        msg = RawMessage()
        msg.unmarshal(bytearray(b"abc"))

        assert msg.marshal() == b"abc"
        assert msg == RawMessage(b"abc")
        assert repr(msg) == "RawMessage(b'abc')"


class TestProtobufMessage:
    """Test the protobuf adapter."""

    def test_marshal_is_deterministic(self) -> None:
        """Test serialization asks for deterministic output."""
        proto = FakeProto(b"\x08\x01")
        assert ProtobufMessage(proto).marshal() == b"\x08\x01"
        assert proto.deterministic is True

    def test_unmarshal(self) -> None:
        """Test parsing into the wrapped message."""
        msg = ProtobufMessage(FakeProto())
        msg.unmarshal(b"\x08\x02")
        assert msg.proto.value == b"\x08\x02"

    def test_unmarshal_error(self) -> None:
        """Test parse failures raise DecodeError."""
        with pytest.raises(DecodeError, match="FakeProto"):
            ProtobufMessage(FakeProto()).unmarshal(b"!bad")

    def test_google_protobuf(self) -> None:
        """Test with a real protobuf well-known type."""
        wrappers_pb2 = pytest.importorskip("google.protobuf.wrappers_pb2")

        data = ProtobufMessage(wrappers_pb2.DoubleValue(value=3.14)).marshal()
        out = ProtobufMessage(wrappers_pb2.DoubleValue())
        out.unmarshal(data)

        assert out.proto.value == 3.14
