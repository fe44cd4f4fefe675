"""osi-sensorview — OSI SensorView messages with protobuf wire compatibility.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Quick-start example
-------------------
>>> import osi_sensorview as osv
>>> view = osv.SensorView(radar_sensor_view=[osv.RadarSensorView()])
>>> osv.decode(osv.encode(view), osv.SensorView) == view
True

Subpackages
-----------
messages:
    SensorView, technology-specific sub-views, and the companion types.
codec:
    Protobuf descriptor generation, binary and JSON conversion.
trace:
    Length-prefixed binary trace files.
analysis:
    numpy accessors for reflections and camera images.
validation:
    Checks of documented, non-structural contracts.
"""
from __future__ import annotations

__version__: str = "0.1.0"

# -- Messages -------------------------------------------------------------
from osi_sensorview.messages import (
    CURRENT_INTERFACE_VERSION,
    BaseMoving,
    CameraSensorView,
    CameraSensorViewConfiguration,
    Dimension3d,
    GenericSensorView,
    GenericSensorViewConfiguration,
    GroundTruth,
    HostVehicleData,
    Identifier,
    InterfaceVersion,
    LidarSensorView,
    LidarSensorViewConfiguration,
    MountingPosition,
    MovingObject,
    Orientation3d,
    OsiMessage,
    RadarSensorView,
    RadarSensorViewConfiguration,
    SensorView,
    Timestamp,
    UltrasonicSensorView,
    UltrasonicSensorViewConfiguration,
    Vector3d,
)

# -- Codec ----------------------------------------------------------------
from osi_sensorview.codec import DecodeError, decode, encode, from_dict, to_dict

# -- Trace ----------------------------------------------------------------
from osi_sensorview.trace import TraceFormatError, TraceReader, TraceWriter, read_trace, write_trace

# -- Analysis -------------------------------------------------------------
from osi_sensorview.analysis import image_array, one_way_range, raster, reflection_array

# -- Validation -----------------------------------------------------------
from osi_sensorview.validation import ConsistencyReport, check_sensor_view

# -- Settings -------------------------------------------------------------
from osi_sensorview.settings import Settings

__all__: list[str] = [
    "__version__",
    # messages
    "CURRENT_INTERFACE_VERSION",
    "OsiMessage",
    "InterfaceVersion",
    "Timestamp",
    "Identifier",
    "Vector3d",
    "Orientation3d",
    "Dimension3d",
    "MountingPosition",
    "BaseMoving",
    "MovingObject",
    "GroundTruth",
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
    # codec
    "DecodeError",
    "encode",
    "decode",
    "to_dict",
    "from_dict",
    # trace
    "TraceFormatError",
    "TraceReader",
    "TraceWriter",
    "read_trace",
    "write_trace",
    # analysis
    "image_array",
    "one_way_range",
    "raster",
    "reflection_array",
    # validation
    "ConsistencyReport",
    "check_sensor_view",
    # settings
    "Settings",
]
