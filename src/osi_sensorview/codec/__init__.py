"""Codec — protobuf descriptors and wire/JSON conversion for schema models.

* **descriptors** — descriptor generation from the models, cached message classes.
* **wire** — :func:`encode`, :func:`decode`, :func:`to_dict`, :func:`from_dict`.
"""
from __future__ import annotations

from osi_sensorview.codec.descriptors import descriptor_for, file_descriptor_proto, proto_class_for
from osi_sensorview.codec.wire import (
    DecodeError,
    decode,
    encode,
    from_dict,
    from_proto,
    to_dict,
    to_proto,
)

__all__ = [
    "descriptor_for",
    "file_descriptor_proto",
    "proto_class_for",
    "DecodeError",
    "decode",
    "encode",
    "from_dict",
    "from_proto",
    "to_dict",
    "to_proto",
]
