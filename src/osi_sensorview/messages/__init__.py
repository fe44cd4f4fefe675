"""Schema messages — the sensor view and the companion types it references.

* **base** — :class:`OsiMessage`, :func:`wire`, :class:`WireField`.
* **common** — identifiers, timestamps, versions, geometry.
* **groundtruth** — :class:`GroundTruth`, :class:`MovingObject`.
* **hostvehicledata** — :class:`HostVehicleData`.
* **configuration** — per-technology sensor view configurations.
* **sensorview** — :class:`SensorView` and its sub-views.
"""
from __future__ import annotations

from osi_sensorview.messages.base import OsiMessage, WireField, wire
from osi_sensorview.messages.common import (
    CURRENT_INTERFACE_VERSION,
    BaseMoving,
    Dimension3d,
    Identifier,
    InterfaceVersion,
    MountingPosition,
    Orientation3d,
    Timestamp,
    Vector3d,
)
from osi_sensorview.messages.configuration import (
    CameraSensorViewConfiguration,
    GenericSensorViewConfiguration,
    LidarSensorViewConfiguration,
    RadarSensorViewConfiguration,
    UltrasonicSensorViewConfiguration,
)
from osi_sensorview.messages.groundtruth import GroundTruth, MovingObject
from osi_sensorview.messages.hostvehicledata import HostVehicleData
from osi_sensorview.messages.sensorview import (
    CameraSensorView,
    GenericSensorView,
    LidarSensorView,
    RadarSensorView,
    SensorView,
    UltrasonicSensorView,
)

__all__ = [
    "OsiMessage",
    "WireField",
    "wire",
    "CURRENT_INTERFACE_VERSION",
    "BaseMoving",
    "Dimension3d",
    "Identifier",
    "InterfaceVersion",
    "MountingPosition",
    "Orientation3d",
    "Timestamp",
    "Vector3d",
    "GroundTruth",
    "MovingObject",
    "HostVehicleData",
    "GenericSensorViewConfiguration",
    "RadarSensorViewConfiguration",
    "LidarSensorViewConfiguration",
    "CameraSensorViewConfiguration",
    "UltrasonicSensorViewConfiguration",
    "SensorView",
    "GenericSensorView",
    "RadarSensorView",
    "LidarSensorView",
    "CameraSensorView",
    "UltrasonicSensorView",
]
