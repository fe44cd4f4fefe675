"""Encode and decode schema models.

Two representations are supported:

* the protobuf binary wire format (:func:`encode` / :func:`decode`), and
* the proto3 canonical JSON mapping as plain dicts (:func:`to_dict` /
  :func:`from_dict`).  Bytes are base64 and 64-bit integers are strings.

Conversion never validates documented contracts such as raster order or
host-vehicle presence; see :mod:`osi_sensorview.validation` for that.
"""
from __future__ import annotations

import logging
from typing import Any, TypeVar

from google.protobuf import json_format
from google.protobuf.message import DecodeError as _ProtobufDecodeError
from google.protobuf.message import Message
from pydantic import ValidationError

from osi_sensorview.codec.descriptors import proto_class_for
from osi_sensorview.messages.base import OsiMessage, open_enum_value

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=OsiMessage)


class DecodeError(ValueError):
    """Raised when bytes or a document cannot be decoded into a message."""

    def __init__(self, message_type: type[OsiMessage], reason: str) -> None:
        self.message_type = message_type
        self.reason = reason
        super().__init__(f"Cannot decode {message_type.full_name()}: {reason}")


def _fill(proto: Message, message: OsiMessage) -> None:
    for field in message.wire_fields():
        value = getattr(message, field.name)
        if field.repeated:
            container = getattr(proto, field.name)
            if field.message_type is not None:
                for item in value:
                    _fill(container.add(), item)
            elif field.enum_type is not None:
                container.extend(int(item) for item in value)
            else:
                container.extend(value)
        elif field.message_type is not None:
            if value is not None:
                child = getattr(proto, field.name)
                child.SetInParent()
                _fill(child, value)
        elif field.enum_type is not None:
            setattr(proto, field.name, int(value))
        else:
            setattr(proto, field.name, value)


def to_proto(message: OsiMessage) -> Message:
    """Convert *message* to an instance of its generated protobuf class."""
    proto = proto_class_for(type(message))()
    _fill(proto, message)
    return proto


def _read(proto: Message, message_type: type[M]) -> M:
    values: dict[str, Any] = {}
    for field in message_type.wire_fields():
        raw = getattr(proto, field.name)
        if field.repeated:
            if field.message_type is not None:
                values[field.name] = tuple(_read(item, field.message_type) for item in raw)
            elif field.enum_type is not None:
                values[field.name] = tuple(open_enum_value(field.enum_type, item) for item in raw)
            else:
                values[field.name] = tuple(raw)
        elif field.message_type is not None:
            values[field.name] = (
                _read(raw, field.message_type) if proto.HasField(field.name) else None
            )
        elif field.enum_type is not None:
            values[field.name] = open_enum_value(field.enum_type, raw)
        else:
            values[field.name] = raw
    return message_type(**values)


def from_proto(proto: Message, message_type: type[M]) -> M:
    """Convert a protobuf message back into a *message_type* model.

    Raises
    ------
    DecodeError
        If the protobuf content violates the model's structural constraints
        (for example nanoseconds out of range).
    """
    expected = proto_class_for(message_type).DESCRIPTOR.full_name
    if proto.DESCRIPTOR.full_name != expected:
        raise TypeError(
            f"Expected a {expected} protobuf message, got {proto.DESCRIPTOR.full_name}."
        )
    try:
        return _read(proto, message_type)
    except (ValidationError, ValueError) as exc:
        raise DecodeError(message_type, str(exc)) from exc


def encode(message: OsiMessage) -> bytes:
    """Serialise *message* to the protobuf binary wire format."""
    data = to_proto(message).SerializeToString(deterministic=True)
    logger.debug("Encoded %s (%d bytes)", message.full_name(), len(data))
    return data


def decode(data: bytes, message_type: type[M]) -> M:
    """Parse protobuf binary *data* as *message_type*.

    Unknown fields are skipped.

    Raises
    ------
    DecodeError
        If *data* is not a valid encoding of *message_type*.
    """
    proto = proto_class_for(message_type)()
    try:
        proto.ParseFromString(data)
    except _ProtobufDecodeError as exc:
        raise DecodeError(message_type, str(exc)) from exc
    return from_proto(proto, message_type)


def to_dict(message: OsiMessage) -> dict[str, Any]:
    """Render *message* with the proto3 JSON mapping, using field names as keys.

    Fields holding their default value are omitted.
    """
    return json_format.MessageToDict(to_proto(message), preserving_proto_field_name=True)


def from_dict(data: dict[str, Any], message_type: type[M]) -> M:
    """Build a *message_type* model from a proto3 JSON mapping dict.

    Both field names and lowerCamelCase JSON names are accepted.

    Raises
    ------
    DecodeError
        If *data* does not describe a valid *message_type*.
    """
    proto = proto_class_for(message_type)()
    try:
        json_format.ParseDict(data, proto)
    except json_format.ParseError as exc:
        raise DecodeError(message_type, str(exc)) from exc
    return from_proto(proto, message_type)
