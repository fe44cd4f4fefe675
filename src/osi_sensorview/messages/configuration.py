"""Per-technology sensor view configurations.

A configuration is agreed between the simulation environment and a sensor
model during initialisation and echoed in every sub-view, describing the
physical detector the raw data belongs to.  ``mounting_position`` here is the
*physical* detector pose, which governs the coordinates of that detector's
raw data.

Postponed annotations are not used in this module so that
``CameraSensorViewConfiguration.ChannelFormat`` resolves inside its
enclosing class body.
"""
from enum import IntEnum

from pydantic import field_validator

from osi_sensorview.messages.base import OsiMessage, open_enum_value, wire
from osi_sensorview.messages.common import Identifier, MountingPosition


class _ViewConfiguration(OsiMessage):
    """Fields shared by every technology's view configuration.

    Attributes
    ----------
    sensor_id:
        ID of the physical detector.
    mounting_position:
        Detector pose in vehicle coordinates.
    mounting_position_rmse:
        Root mean squared error of :attr:`mounting_position`.
    field_of_view_horizontal:
        Horizontal field of view. Unit: [rad].
    field_of_view_vertical:
        Vertical field of view. Unit: [rad].
    """

    sensor_id: Identifier | None = wire(1, default=None)
    mounting_position: MountingPosition | None = wire(2, default=None)
    mounting_position_rmse: MountingPosition | None = wire(3, default=None)
    field_of_view_horizontal: float = wire(4, default=0.0)
    field_of_view_vertical: float = wire(5, default=0.0)


class GenericSensorViewConfiguration(_ViewConfiguration):
    """Configuration of a generic (technology-agnostic) detector."""


class UltrasonicSensorViewConfiguration(_ViewConfiguration):
    """Configuration of an ultrasonic detector."""


class RadarSensorViewConfiguration(_ViewConfiguration):
    """Configuration of a ray-traced radar detector.

    Attributes
    ----------
    number_of_rays_horizontal:
        Rays per scan line.
    number_of_rays_vertical:
        Scan lines.
    max_number_of_interactions:
        Maximum reflections traced per ray.
    emitter_frequency:
        TX frequency that Doppler shifts refer to. Unit: [Hz].
    """

    number_of_rays_horizontal: int = wire(6, "uint32", default=0)
    number_of_rays_vertical: int = wire(7, "uint32", default=0)
    max_number_of_interactions: int = wire(8, "uint32", default=0)
    emitter_frequency: float = wire(9, default=0.0)


class LidarSensorViewConfiguration(_ViewConfiguration):
    """Configuration of a ray-traced lidar detector.

    Same ray layout fields as :class:`RadarSensorViewConfiguration`.
    """

    number_of_rays_horizontal: int = wire(6, "uint32", default=0)
    number_of_rays_vertical: int = wire(7, "uint32", default=0)
    max_number_of_interactions: int = wire(8, "uint32", default=0)
    emitter_frequency: float = wire(9, default=0.0)


class CameraSensorViewConfiguration(_ViewConfiguration):
    """Configuration of a camera detector.

    Declares the memory layout of :attr:`CameraSensorView.image_data`:
    ``number_of_pixels_vertical`` rows of ``number_of_pixels_horizontal``
    pixels, each pixel holding the channels of :attr:`channel_format`.
    Formats of newer interface versions decode as plain integers.
    """

    class ChannelFormat(IntEnum):
        """Pixel channel layout of raw camera data (linear encodings)."""

        UNKNOWN = 0
        OTHER = 1
        MONO_U8_LIN = 2
        MONO_U16_LIN = 3
        MONO_U32_LIN = 4
        MONO_F32_LIN = 5
        RGB_U8_LIN = 6
        RGB_U16_LIN = 7
        RGB_U32_LIN = 8
        RGB_F32_LIN = 9

    number_of_pixels_horizontal: int = wire(6, "uint32", default=0)
    number_of_pixels_vertical: int = wire(7, "uint32", default=0)
    channel_format: tuple[ChannelFormat | int, ...] = wire(8, default=())

    @field_validator("channel_format")
    @classmethod
    def channel_format_members(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(open_enum_value(cls.ChannelFormat, item) for item in value)
