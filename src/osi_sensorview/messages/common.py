"""Common OSI types referenced by the sensor view.

Identifiers, timestamps, versions and the geometric primitives that make up
mounting positions and moving-object states.  Field tags follow the
``osi3`` common schema.
"""
from __future__ import annotations

from osi_sensorview.messages.base import OsiMessage, wire

_NANOS_PER_SECOND: int = 1_000_000_000


class InterfaceVersion(OsiMessage):
    """Semantic version of the interface used by a message's sender."""

    version_major: int = wire(1, "uint32", default=0)
    version_minor: int = wire(2, "uint32", default=0)
    version_patch: int = wire(3, "uint32", default=0)

    @classmethod
    def current(cls) -> "InterfaceVersion":
        """The interface version this package implements."""
        return CURRENT_INTERFACE_VERSION

    def __str__(self) -> str:
        return f"{self.version_major}.{self.version_minor}.{self.version_patch}"


class Timestamp(OsiMessage):
    """Simulation time as whole seconds plus nanoseconds.

    Attributes
    ----------
    seconds:
        Whole seconds since the (simulation-defined) zero point.
    nanos:
        Non-negative fraction of a second in nanoseconds, ``< 10**9``.
    """

    seconds: int = wire(1, "int64", default=0)
    nanos: int = wire(2, "uint32", default=0, le=_NANOS_PER_SECOND - 1)

    @classmethod
    def from_seconds(cls, value: float) -> "Timestamp":
        """Build a timestamp from a float number of seconds."""
        total_nanos = round(value * _NANOS_PER_SECOND)
        seconds, nanos = divmod(total_nanos, _NANOS_PER_SECOND)
        return cls(seconds=seconds, nanos=nanos)

    def to_seconds(self) -> float:
        """Return the timestamp as a float number of seconds."""
        return self.seconds + self.nanos / _NANOS_PER_SECOND

    def __str__(self) -> str:
        return f"{self.seconds}.{self.nanos:09d}s"


class Identifier(OsiMessage):
    """Unique identifier of an object, sensor or detector."""

    value: int = wire(1, "uint64", default=0)

    def __str__(self) -> str:
        return str(self.value)


class Vector3d(OsiMessage):
    """Cartesian 3D vector. Unit depends on usage ([m], [m/s] ...)."""

    x: float = wire(1, default=0.0)
    y: float = wire(2, default=0.0)
    z: float = wire(3, default=0.0)


class Orientation3d(OsiMessage):
    """Tait-Bryan angles, applied yaw then pitch then roll. Unit: [rad]."""

    roll: float = wire(1, default=0.0)
    pitch: float = wire(2, default=0.0)
    yaw: float = wire(3, default=0.0)


class Dimension3d(OsiMessage):
    """Extent of a bounding box. Unit: [m]."""

    length: float = wire(1, default=0.0)
    width: float = wire(2, default=0.0)
    height: float = wire(3, default=0.0)


class MountingPosition(OsiMessage):
    """Origin and orientation of a coordinate frame attached to a sensor or vehicle.

    Attributes
    ----------
    position:
        Frame origin relative to the parent frame. Unit: [m].
    orientation:
        Frame orientation relative to the parent frame. Unit: [rad].
    """

    position: Vector3d | None = wire(1, default=None)
    orientation: Orientation3d | None = wire(2, default=None)


class BaseMoving(OsiMessage):
    """Base state of a moving object in the enclosing coordinate system."""

    dimension: Dimension3d | None = wire(1, default=None)
    position: Vector3d | None = wire(2, default=None)
    orientation: Orientation3d | None = wire(3, default=None)
    velocity: Vector3d | None = wire(4, default=None)
    acceleration: Vector3d | None = wire(5, default=None)
    orientation_rate: Orientation3d | None = wire(6, default=None)


CURRENT_INTERFACE_VERSION: InterfaceVersion = InterfaceVersion(
    version_major=3, version_minor=0, version_patch=0
)
