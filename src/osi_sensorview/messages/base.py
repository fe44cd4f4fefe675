"""OsiMessage base model and the ``wire`` field declaration helper.

Every schema message subclasses :class:`OsiMessage`, a frozen pydantic
model.  Each field is declared with :func:`wire`, which records the field's
stable wire tag (and, for integer scalars, its protobuf kind) in the field
metadata.  The codec reads that metadata back through
:meth:`OsiMessage.wire_fields` to generate protobuf descriptors.

Field tags
----------
Tags are part of the wire contract and must never be renumbered.  A class
whose fields lack a tag, or repeat one, fails at definition time.

Enums
-----
Enum fields are annotated ``SomeEnum | int``.  Values without a member,
as sent by producers of a newer interface version, stay plain integers.

Nested types
------------
Message and enum classes defined inside another message's class body are
emitted as nested protobuf types, so ``RadarSensorView.Reflection`` and
``LidarSensorView.Reflection`` stay distinct despite the shared short name.
"""
from __future__ import annotations

import types
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field

PACKAGE: str = "osi3"

_INTEGER_BOUNDS: dict[str, tuple[int, int]] = {
    "uint32": (0, 2**32 - 1),
    "uint64": (0, 2**64 - 1),
    "int32": (-(2**31), 2**31 - 1),
    "int64": (-(2**63), 2**63 - 1),
}

_DEFAULT_KINDS: dict[type, str] = {
    float: "double",
    bytes: "bytes",
    bool: "bool",
    str: "string",
}

# nested class -> enclosing message class
_CONTAINERS: dict[type, type] = {}


def wire(tag: int, kind: str | None = None, **field_kwargs: Any) -> Any:
    """Declare a schema field carrying wire tag *tag*.

    Parameters
    ----------
    tag:
        Positive protobuf field number.
    kind:
        Scalar kind for integer fields (``uint32``, ``uint64``, ``int32``,
        ``int64``).  Floats default to ``double``; message, enum, bytes and
        bool kinds are inferred from the annotation.
    **field_kwargs:
        Forwarded to :func:`pydantic.Field` (``default``, ``ge`` ...).
        Integer kinds add their representable range unless overridden.
    """
    extra: dict[str, Any] = {"osi_tag": tag}
    if kind is not None:
        extra["osi_kind"] = kind
        bounds = _INTEGER_BOUNDS.get(kind)
        if bounds is not None:
            field_kwargs.setdefault("ge", bounds[0])
            field_kwargs.setdefault("le", bounds[1])
    return Field(json_schema_extra=extra, **field_kwargs)


@dataclass(frozen=True)
class WireField:
    """Wire-level description of one schema field.

    Attributes
    ----------
    name:
        Attribute and protobuf field name.
    tag:
        Protobuf field number.
    kind:
        ``message``, ``enum`` or a scalar kind such as ``double``.
    repeated:
        True for collection fields (modelled as tuples).
    message_type:
        Element message class when ``kind == "message"``.
    enum_type:
        Element enum class when ``kind == "enum"``.
    """

    name: str
    tag: int
    kind: str
    repeated: bool = False
    message_type: type[OsiMessage] | None = None
    enum_type: type[IntEnum] | None = None


def container_of(nested: type) -> type | None:
    """Return the message class *nested* was defined in, if any."""
    return _CONTAINERS.get(nested)


def outermost(cls: type) -> type:
    """Follow :func:`container_of` up to the top-level class."""
    while cls in _CONTAINERS:
        cls = _CONTAINERS[cls]
    return cls


def full_name(cls: type) -> str:
    """Fully qualified protobuf name, e.g. ``osi3.RadarSensorView.Reflection``."""
    parts = [cls.__name__]
    parent = container_of(cls)
    while parent is not None:
        parts.append(parent.__name__)
        parent = container_of(parent)
    return ".".join([PACKAGE, *reversed(parts)])


def open_enum_value(enum_type: type[IntEnum], value: int) -> IntEnum | int:
    """Return the member of *enum_type* for *value*, or *value* itself if none exists.

    Wire enums are open: a newer producer may send values this schema does
    not declare, and those are kept as plain integers.
    """
    try:
        return enum_type(value)
    except ValueError:
        return int(value)


def _strip_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
        enums = [m for m in members if isinstance(m, type) and issubclass(m, IntEnum)]
        # ``SomeEnum | int`` declares an open enum
        if len(members) == 2 and len(enums) == 1 and int in members:
            return enums[0]
        raise TypeError(f"Unsupported union annotation {annotation!r}.")
    return annotation


class OsiMessage(BaseModel):
    """Immutable base class for all schema messages.

    Instances are frozen once constructed; collection fields are tuples.
    Unknown attributes are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    _wire_fields: ClassVar[tuple[WireField, ...] | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        for member in vars(cls).values():
            if isinstance(member, type) and member.__qualname__.startswith(
                cls.__qualname__ + "."
            ):
                if issubclass(member, (OsiMessage, IntEnum)):
                    _CONTAINERS[member] = cls
        cls._wire_fields = None
        seen: dict[int, str] = {}
        for field in cls.wire_fields():
            if field.tag <= 0:
                raise TypeError(f"{cls.__qualname__}.{field.name}: tag must be positive.")
            if field.tag in seen:
                raise TypeError(
                    f"{cls.__qualname__}: tag {field.tag} used by both "
                    f"{seen[field.tag]!r} and {field.name!r}."
                )
            seen[field.tag] = field.name

    @classmethod
    def wire_fields(cls) -> tuple[WireField, ...]:
        """Return the wire description of every field, ordered by tag."""
        cached = cls.__dict__.get("_wire_fields")
        if cached is not None:
            return cached
        described = []
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra
            if not isinstance(extra, dict) or "osi_tag" not in extra:
                raise TypeError(
                    f"{cls.__qualname__}.{name} must be declared with wire(tag)."
                )
            described.append(_describe(name, info.annotation, extra))
        result = tuple(sorted(described, key=lambda f: f.tag))
        cls._wire_fields = result
        return result

    @classmethod
    def field_tag(cls, name: str) -> int:
        """Return the wire tag of field *name*."""
        for field in cls.wire_fields():
            if field.name == name:
                return field.tag
        raise KeyError(f"{cls.__qualname__} has no field {name!r}.")

    @classmethod
    def full_name(cls) -> str:
        """Fully qualified protobuf message name."""
        return full_name(cls)

    @classmethod
    def nested_types(cls) -> list[type]:
        """Message and enum classes declared inside this class body."""
        return [nested for nested, parent in _CONTAINERS.items() if parent is cls]


def _describe(name: str, annotation: Any, extra: dict[str, Any]) -> WireField:
    tag = int(extra["osi_tag"])
    repeated = False
    annotation = _strip_optional(annotation)
    if get_origin(annotation) is tuple:
        repeated = True
        annotation = _strip_optional(get_args(annotation)[0])

    if isinstance(annotation, type) and issubclass(annotation, OsiMessage):
        return WireField(name, tag, "message", repeated, message_type=annotation)
    if isinstance(annotation, type) and issubclass(annotation, IntEnum):
        return WireField(name, tag, "enum", repeated, enum_type=annotation)

    kind = extra.get("osi_kind") or _DEFAULT_KINDS.get(annotation)
    if kind is None:
        raise TypeError(f"Field {name!r}: no wire kind for {annotation!r}; pass kind=.")
    return WireField(name, tag, str(kind), repeated)
