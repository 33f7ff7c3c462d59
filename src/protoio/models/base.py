"""Message capability and the pydantic-based BaseMessage.

This module provides the Message protocol that the delimited reader and
writer consume, and BaseMessage, a Pydantic model that satisfies it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import DecodeError


@runtime_checkable
class Message(Protocol):
    """Anything that can be framed by protoio.

    ``marshal`` must be deterministic and free of side effects. ``unmarshal``
    replaces the message's contents with the decoded payload, or raises.
    """

    def marshal(self) -> bytes: ...

    def unmarshal(self, data: bytes) -> None: ...


class BaseMessage(BaseModel):
    """Base class for Pydantic messages carried over delimited streams.

    Messages should inherit from this class and declare fields as usual.
    The payload is the compact JSON form of the model. Fields never set
    are omitted; explicit values, None and non-finite floats included, are
    kept. Bytes are carried as base64.

    Example:
        >>> from typing import Optional
        >>> class Reading(BaseMessage):
        ...     sensor_id: int
        ...     value: Optional[float] = None
        >>> data = Reading(sensor_id=7, value=3.14).marshal()
        >>> data
        b'{"sensor_id":7,"value":3.14}'
        >>> msg = Reading(sensor_id=0)
        >>> msg.unmarshal(data)
        >>> msg.value
        3.14
    """

    model_config = ConfigDict(
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
        # Arbitrary bytes survive the JSON payload
        ser_json_bytes="base64",
        val_json_bytes="base64",
        # inf and nan survive the payload instead of becoming null
        ser_json_inf_nan="constants",
    )

    def marshal(self) -> bytes:
        """Serialize the message to its payload bytes."""
        return self.model_dump_json(exclude_unset=True).encode("utf-8")

    def unmarshal(self, data: bytes) -> None:
        """Replace this message's fields with those decoded from ``data``.

        Fields missing from the payload take their declared defaults.

        Raises:
            DecodeError: If data is not valid JSON or fails validation
        """
        try:
            decoded = type(self).model_validate_json(data)
        except ValidationError as e:
            raise DecodeError(f"Failed to decode {type(self).__name__}: {e}") from e

        # Bypass validate_assignment, the values were validated above
        self.__dict__.update(decoded.__dict__)
        object.__setattr__(self, "__pydantic_fields_set__", set(decoded.model_fields_set))
