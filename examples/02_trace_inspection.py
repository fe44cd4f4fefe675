#!/usr/bin/env python3
"""Example: Trace inspection — osi-sensorview

Stream a trace written by a simulation, decode each sensor view lazily and
report reflection statistics and consistency issues per frame.

Usage:
    python examples/02_trace_inspection.py TRACE_PATH

Requirements:
    pip install osi-sensorview
"""
from __future__ import annotations

import logging
import sys

import numpy as np

from osi_sensorview import SensorView, TraceFormatError, TraceReader, check_sensor_view, reflection_array


def main(trace_path: str) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s — %(message)s")

    reader: TraceReader[SensorView] = TraceReader(trace_path)
    print(f"Reading {reader!r}")
    try:
        for index, view in enumerate(reader):
            stamp = view.timestamp.to_seconds() if view.timestamp is not None else float("nan")
            print(f"\nFrame {index} at t={stamp:.3f}s")
            for kind, sub_views in (("radar", view.radar_sensor_view), ("lidar", view.lidar_sensor_view)):
                for position, sub_view in enumerate(sub_views):
                    data = reflection_array(sub_view)
                    if len(data) == 0:
                        print(f"  {kind}[{position}]: no reflections")
                        continue
                    print(
                        f"  {kind}[{position}]: {len(data)} reflections, "
                        f"strongest {np.max(data[:, 0]):.1f} dB"
                    )
            for issue in check_sensor_view(view).issues:
                print(f"  ! {issue.code} at {issue.path}: {issue.message}")
    except TraceFormatError as exc:
        print(f"Corrupt trace: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(main(sys.argv[1]))
