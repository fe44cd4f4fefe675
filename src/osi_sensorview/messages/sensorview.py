"""SensorView and its technology-specific sub-views.

The sensor view is derived from ground truth and is the input of sensor
models.  All environment data is given relative to the virtual sensor frame
in :attr:`SensorView.mounting_position`, with two exceptions: the raw data
of each technology-specific sub-view is relative to that physical
detector's own mounting position (declared in its view configuration), and
:attr:`SensorView.global_ground_truth` is in global coordinates.

When several sensors are simulated, each may consume its own copy of the
sensor view, or a combined model may consume a single combined view.

Raster order
------------
Radar and lidar sub-views carry one reflection per traced ray, ordered
left-to-right then top-to-bottom, like the scan lines of a TV picture.  The
order is part of the contract; nothing here reorders or checks it.

Postponed annotations are not used in this module so that the nested
``Reflection`` types resolve inside their enclosing class bodies.
"""
from osi_sensorview.messages.base import OsiMessage, wire
from osi_sensorview.messages.common import Identifier, InterfaceVersion, MountingPosition, Timestamp
from osi_sensorview.messages.configuration import (
    CameraSensorViewConfiguration,
    GenericSensorViewConfiguration,
    LidarSensorViewConfiguration,
    RadarSensorViewConfiguration,
    UltrasonicSensorViewConfiguration,
)
from osi_sensorview.messages.groundtruth import GroundTruth
from osi_sensorview.messages.hostvehicledata import HostVehicleData


class GenericSensorView(OsiMessage):
    """Generic sensor view data.

    Carries the configuration snapshot only; an extension point for
    sensor technologies without a dedicated sub-view.
    """

    view_configuration: GenericSensorViewConfiguration | None = wire(1, default=None)


class RadarSensorView(OsiMessage):
    """Radar-specific sensor view data.

    Attributes
    ----------
    view_configuration:
        Radar view configuration valid when the data was created.
    reflection:
        Ray tracing data, one entry per ray in raster order.
    """

    class Reflection(OsiMessage):
        """One ray-traced radar return.

        Attributes
        ----------
        signal_strength:
            Relative signal level. Accounts for the combined TX and RX
            antenna diagram and for scattering and absorption losses;
            multiplied by TX power it yields RX power. Unit: [dB].
        time_of_flight:
            Directly proportional to the distance travelled. Unit: [s].
        doppler_shift:
            Frequency shift relative to the configured TX frequency.
            Unit: [Hz].
        source_horizontal_angle:
            Azimuth of incidence of the reflection source at the TX
            antenna. Unit: [rad].
        source_vertical_angle:
            Elevation of incidence of the reflection source at the TX
            antenna. Unit: [rad].
        """

        signal_strength: float = wire(1, default=0.0)
        time_of_flight: float = wire(2, default=0.0)
        doppler_shift: float = wire(3, default=0.0)
        source_horizontal_angle: float = wire(4, default=0.0)
        source_vertical_angle: float = wire(5, default=0.0)

    view_configuration: RadarSensorViewConfiguration | None = wire(1, default=None)
    reflection: tuple[Reflection, ...] = wire(2, default=())


class LidarSensorView(OsiMessage):
    """Lidar-specific sensor view data.

    Ray direction is implied by the reflection's raster position and the
    view configuration, so reflections carry no angles.
    """

    class Reflection(OsiMessage):
        """One ray-traced lidar return.

        Attributes
        ----------
        signal_strength:
            Relative signal level. Accounts for scattering and absorption
            losses only; multiplied by TX power it yields the potential RX
            power, other TX/RX losses disregarded. Unit: [dB].
        time_of_flight:
            Directly proportional to the distance travelled. Unit: [s].
        doppler_shift:
            Frequency shift relative to the configured TX frequency.
            Unit: [Hz].
        """

        signal_strength: float = wire(1, default=0.0)
        time_of_flight: float = wire(2, default=0.0)
        doppler_shift: float = wire(3, default=0.0)

    view_configuration: LidarSensorViewConfiguration | None = wire(1, default=None)
    reflection: tuple[Reflection, ...] = wire(2, default=())


class CameraSensorView(OsiMessage):
    """Camera-specific sensor view data.

    ``image_data`` is opaque: its memory layout and order are those declared
    by :attr:`view_configuration`, not self-describing.
    """

    view_configuration: CameraSensorViewConfiguration | None = wire(1, default=None)
    image_data: bytes = wire(2, default=b"")


class UltrasonicSensorView(OsiMessage):
    """Ultrasonic-specific sensor view data (configuration only)."""

    view_configuration: UltrasonicSensorViewConfiguration | None = wire(1, default=None)


class SensorView(OsiMessage):
    """Input of a sensor model for one simulation tick and one virtual sensor.

    Attributes
    ----------
    version:
        Interface version used by the sender (simulation environment).
    timestamp:
        Simulation time of the data.  Zero time is arbitrary but identical
        for all messages of a run; the simulation start is recommended.  It
        is both the time the data applies to and the time it was sent.
    sensor_id:
        ID of the virtual sensor, used in its detected object output and
        distinct from the IDs of its physical detectors.
    mounting_position:
        Virtual sensor pose in vehicle coordinates (DIN ISO 8855: x along
        the viewing direction, z up, y completing a right-hand system).
        Governs the sensor-relative coordinates of everything in the view
        except per-detector raw data and the global ground truth.  Usually
        static during a simulation.
    mounting_position_rmse:
        Root mean squared error of :attr:`mounting_position`.
    host_vehicle_data:
        What the host vehicle knows about itself, as model input.
    global_ground_truth:
        Ground truth in global coordinates, filtered per the sensor view
        configuration agreed at initialisation.  Always contains the host
        vehicle regardless of filtering.
    host_vehicle_id:
        ID of the host vehicle within :attr:`global_ground_truth`.
    generic_sensor_view, radar_sensor_view, lidar_sensor_view, camera_sensor_view, ultrasonic_sensor_view:
        Zero or more technology-specific views, one per physical detector.
        Field names are singular although the fields are collections.
    """

    version: InterfaceVersion | None = wire(1, default=None)
    timestamp: Timestamp | None = wire(2, default=None)
    sensor_id: Identifier | None = wire(3, default=None)
    mounting_position: MountingPosition | None = wire(4, default=None)
    mounting_position_rmse: MountingPosition | None = wire(5, default=None)
    host_vehicle_data: HostVehicleData | None = wire(6, default=None)
    global_ground_truth: GroundTruth | None = wire(7, default=None)
    host_vehicle_id: Identifier | None = wire(8, default=None)

    generic_sensor_view: tuple[GenericSensorView, ...] = wire(1000, default=())
    radar_sensor_view: tuple[RadarSensorView, ...] = wire(1001, default=())
    lidar_sensor_view: tuple[LidarSensorView, ...] = wire(1002, default=())
    camera_sensor_view: tuple[CameraSensorView, ...] = wire(1003, default=())
    ultrasonic_sensor_view: tuple[UltrasonicSensorView, ...] = wire(1004, default=())

    def sub_view_counts(self) -> dict[str, int]:
        """Number of sub-views per technology."""
        return {
            "generic": len(self.generic_sensor_view),
            "radar": len(self.radar_sensor_view),
            "lidar": len(self.lidar_sensor_view),
            "camera": len(self.camera_sensor_view),
            "ultrasonic": len(self.ultrasonic_sensor_view),
        }
