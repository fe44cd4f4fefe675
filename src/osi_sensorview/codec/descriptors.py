"""Protobuf descriptors generated from the schema models.

The models in :mod:`osi_sensorview.messages` are the single source of truth
for field names, tags and cardinality.  This module walks a model tree,
emits an equivalent ``FileDescriptorProto`` in package ``osi3`` and loads it
into a private descriptor pool, so encoding goes through the protobuf
runtime and stays bit-compatible with every other OSI binding.

Pools are built once per top-level message type and cached.
"""
from __future__ import annotations

import functools
import logging
import re
from enum import IntEnum

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.descriptor import Descriptor
from google.protobuf.message import Message

from osi_sensorview.messages.base import PACKAGE, OsiMessage, full_name, outermost

logger = logging.getLogger(__name__)

_FieldProto = descriptor_pb2.FieldDescriptorProto

_SCALAR_TYPES: dict[str, int] = {
    "double": _FieldProto.TYPE_DOUBLE,
    "uint32": _FieldProto.TYPE_UINT32,
    "uint64": _FieldProto.TYPE_UINT64,
    "int32": _FieldProto.TYPE_INT32,
    "int64": _FieldProto.TYPE_INT64,
    "bool": _FieldProto.TYPE_BOOL,
    "bytes": _FieldProto.TYPE_BYTES,
    "string": _FieldProto.TYPE_STRING,
}


def enum_value_name(enum_type: type[IntEnum], member: IntEnum) -> str:
    """Protobuf value name, prefixed with the enum name in upper snake case.

    ``ChannelFormat.MONO_U8_LIN`` becomes ``CHANNEL_FORMAT_MONO_U8_LIN``.
    """
    prefix = re.sub(r"(?<!^)(?=[A-Z])", "_", enum_type.__name__).upper()
    return f"{prefix}_{member.name}"


def _closure(root: type[OsiMessage]) -> tuple[list[type], list[type]]:
    """Top-level message and enum classes reachable from *root*, in discovery order."""
    messages: list[type] = []
    enums: list[type] = []
    pending: list[type] = [outermost(root)]
    visited: set[type] = set()

    while pending:
        current = pending.pop(0)
        if current in visited:
            continue
        visited.add(current)
        if issubclass(current, IntEnum):
            enums.append(current)
            continue
        messages.append(current)

        stack: list[type] = [current]
        while stack:
            message_type = stack.pop()
            for nested in message_type.nested_types():
                if issubclass(nested, OsiMessage):
                    stack.append(nested)
            for field in message_type.wire_fields():
                referenced = field.message_type or field.enum_type
                if referenced is not None:
                    top = outermost(referenced)
                    if top not in visited:
                        pending.append(top)
    return messages, enums


def _enum_proto(enum_type: type[IntEnum]) -> descriptor_pb2.EnumDescriptorProto:
    proto = descriptor_pb2.EnumDescriptorProto(name=enum_type.__name__)
    for member in enum_type:
        proto.value.add(name=enum_value_name(enum_type, member), number=int(member))
    return proto


def _message_proto(message_type: type[OsiMessage]) -> descriptor_pb2.DescriptorProto:
    proto = descriptor_pb2.DescriptorProto(name=message_type.__name__)
    for field in message_type.wire_fields():
        field_proto = proto.field.add(
            name=field.name,
            number=field.tag,
            label=_FieldProto.LABEL_REPEATED if field.repeated else _FieldProto.LABEL_OPTIONAL,
        )
        if field.message_type is not None:
            field_proto.type = _FieldProto.TYPE_MESSAGE
            field_proto.type_name = "." + full_name(field.message_type)
        elif field.enum_type is not None:
            field_proto.type = _FieldProto.TYPE_ENUM
            field_proto.type_name = "." + full_name(field.enum_type)
        else:
            field_proto.type = _SCALAR_TYPES[field.kind]
    for nested in message_type.nested_types():
        if issubclass(nested, OsiMessage):
            proto.nested_type.append(_message_proto(nested))
        else:
            proto.enum_type.append(_enum_proto(nested))
    return proto


def file_descriptor_proto(root: type[OsiMessage]) -> descriptor_pb2.FileDescriptorProto:
    """Build the ``FileDescriptorProto`` describing *root* and everything it references."""
    messages, enums = _closure(root)
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=f"osi_sensorview/{outermost(root).__name__.lower()}.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for enum_type in enums:
        file_proto.enum_type.append(_enum_proto(enum_type))
    for message_type in messages:
        file_proto.message_type.append(_message_proto(message_type))
    return file_proto


@functools.lru_cache(maxsize=None)
def _pool_for(top_level: type[OsiMessage]) -> descriptor_pool.DescriptorPool:
    file_proto = file_descriptor_proto(top_level)
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    logger.debug(
        "Built descriptor pool for %s (%d top-level messages)",
        top_level.__name__,
        len(file_proto.message_type),
    )
    return pool


def descriptor_for(message_type: type[OsiMessage]) -> Descriptor:
    """Return the protobuf ``Descriptor`` of *message_type*."""
    pool = _pool_for(outermost(message_type))
    return pool.FindMessageTypeByName(full_name(message_type))


@functools.lru_cache(maxsize=None)
def proto_class_for(message_type: type[OsiMessage]) -> type[Message]:
    """Return the generated protobuf message class of *message_type*."""
    return message_factory.GetMessageClass(descriptor_for(message_type))
