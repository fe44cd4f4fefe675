"""Shared fixtures for the osi-sensorview test suite."""
from __future__ import annotations

import pytest

from osi_sensorview.messages import (
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
    RadarSensorView,
    RadarSensorViewConfiguration,
    SensorView,
    Timestamp,
    UltrasonicSensorView,
    UltrasonicSensorViewConfiguration,
    Vector3d,
)

ChannelFormat = CameraSensorViewConfiguration.ChannelFormat


@pytest.fixture()
def expected_version() -> str:
    return "0.1.0"


def _mounting(x: float, yaw: float) -> MountingPosition:
    return MountingPosition(
        position=Vector3d(x=x, y=0.0, z=0.5),
        orientation=Orientation3d(roll=0.0, pitch=0.0, yaw=yaw),
    )


@pytest.fixture()
def radar_reflections() -> list[RadarSensorView.Reflection]:
    """Three identical reflections as used in the radar example scenario."""
    return [
        RadarSensorView.Reflection(
            signal_strength=-12.5,
            time_of_flight=3.2e-7,
            doppler_shift=1500.0,
            source_horizontal_angle=0.1,
            source_vertical_angle=-0.02,
        )
        for _ in range(3)
    ]


@pytest.fixture()
def full_sensor_view() -> SensorView:
    """A sensor view with every field and every technology populated."""
    host = MovingObject(
        id=Identifier(value=42),
        base=BaseMoving(
            dimension=Dimension3d(length=4.5, width=1.8, height=1.4),
            position=Vector3d(x=100.0, y=-3.5, z=0.0),
            orientation=Orientation3d(yaw=0.25),
            velocity=Vector3d(x=13.9),
        ),
    )
    other = MovingObject(id=Identifier(value=7), base=BaseMoving(position=Vector3d(x=130.0)))
    radar_config = RadarSensorViewConfiguration(
        sensor_id=Identifier(value=101),
        mounting_position=_mounting(3.8, 0.0),
        field_of_view_horizontal=1.05,
        field_of_view_vertical=0.17,
        number_of_rays_horizontal=2,
        number_of_rays_vertical=2,
        max_number_of_interactions=1,
        emitter_frequency=77e9,
    )
    lidar_config = LidarSensorViewConfiguration(
        sensor_id=Identifier(value=102),
        mounting_position=_mounting(1.2, 0.0),
        number_of_rays_horizontal=3,
        number_of_rays_vertical=1,
    )
    camera_config = CameraSensorViewConfiguration(
        sensor_id=Identifier(value=103),
        mounting_position=_mounting(2.0, 0.0),
        number_of_pixels_horizontal=2,
        number_of_pixels_vertical=2,
        channel_format=[ChannelFormat.MONO_U8_LIN],
    )
    return SensorView(
        version=InterfaceVersion(version_major=3, version_minor=0, version_patch=0),
        timestamp=Timestamp(seconds=12, nanos=500_000_000),
        sensor_id=Identifier(value=1),
        mounting_position=_mounting(2.0, 0.0),
        mounting_position_rmse=_mounting(0.01, 0.001),
        host_vehicle_data=HostVehicleData(location=host.base),
        global_ground_truth=GroundTruth(
            timestamp=Timestamp(seconds=12, nanos=500_000_000),
            host_vehicle_id=Identifier(value=42),
            moving_object=[host, other],
        ),
        host_vehicle_id=Identifier(value=42),
        generic_sensor_view=[
            GenericSensorView(
                view_configuration=GenericSensorViewConfiguration(sensor_id=Identifier(value=100))
            )
        ],
        radar_sensor_view=[
            RadarSensorView(
                view_configuration=radar_config,
                reflection=[
                    RadarSensorView.Reflection(
                        signal_strength=-10.0 - i,
                        time_of_flight=1e-7 * (i + 1),
                        doppler_shift=250.0 * i,
                        source_horizontal_angle=0.1 * i,
                        source_vertical_angle=-0.01 * i,
                    )
                    for i in range(4)
                ],
            )
        ],
        lidar_sensor_view=[
            LidarSensorView(
                view_configuration=lidar_config,
                reflection=[
                    LidarSensorView.Reflection(
                        signal_strength=-3.0, time_of_flight=2e-7 * (i + 1), doppler_shift=0.0
                    )
                    for i in range(3)
                ],
            )
        ],
        camera_sensor_view=[
            CameraSensorView(view_configuration=camera_config, image_data=bytes([0, 64, 128, 255]))
        ],
        ultrasonic_sensor_view=[
            UltrasonicSensorView(
                view_configuration=UltrasonicSensorViewConfiguration(
                    sensor_id=Identifier(value=104), field_of_view_horizontal=2.0
                )
            )
        ],
    )
