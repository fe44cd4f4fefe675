#!/usr/bin/env python3
"""Example: Quickstart — osi-sensorview

Build a radar sensor view, round-trip it through the protobuf wire format
and write it to a trace file.

Usage:
    python examples/01_quickstart.py [TRACE_PATH]

Requirements:
    pip install osi-sensorview
"""
from __future__ import annotations

import sys

import osi_sensorview as osv


def main(trace_path: str = "quickstart.osi") -> None:
    print(f"osi-sensorview version: {osv.__version__}")
    print(f"OSI interface version: {osv.InterfaceVersion.current()}")

    # Step 1: A 3x1 radar scan with one reflection per ray
    reflections = [
        osv.RadarSensorView.Reflection(
            signal_strength=-12.5,
            time_of_flight=3.2e-7,
            doppler_shift=1500.0,
            source_horizontal_angle=0.1 * (i - 1),
            source_vertical_angle=-0.02,
        )
        for i in range(3)
    ]
    view = osv.SensorView(
        version=osv.InterfaceVersion.current(),
        timestamp=osv.Timestamp.from_seconds(0.05),
        sensor_id=osv.Identifier(value=101),
        radar_sensor_view=[
            osv.RadarSensorView(
                view_configuration=osv.RadarSensorViewConfiguration(
                    sensor_id=osv.Identifier(value=101),
                    number_of_rays_horizontal=3,
                    number_of_rays_vertical=1,
                    emitter_frequency=77e9,
                ),
                reflection=reflections,
            )
        ],
    )
    print(f"\nSub-views: {view.sub_view_counts()}")

    # Step 2: Wire round trip
    data = osv.encode(view)
    restored = osv.decode(data, osv.SensorView)
    print(f"Encoded {len(data)} bytes, round trip equal: {restored == view}")

    # Step 3: numpy access to the reflections
    radar = restored.radar_sensor_view[0]
    tof = osv.raster(radar, "time_of_flight")
    print(f"Raster shape: {tof.shape}, ranges [m]: {osv.one_way_range(tof).round(2).tolist()}")

    # Step 4: Trace file
    count = osv.write_trace(trace_path, [view, restored])
    print(f"\nWrote {count} sensor view(s) to {trace_path}")
    report = osv.check_sensor_view(restored)
    print(f"Consistent: {report.ok}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
