"""Benchmark: Sensor view codec throughput — encodes and decodes per second.

Measures encode() and decode() of a radar-heavy SensorView (one 64x16 scan,
one reflection per ray) and the per-call latency distribution of decode().
"""
from __future__ import annotations

import json
import time
from pathlib import Path

from osi_sensorview import (
    RadarSensorView,
    RadarSensorViewConfiguration,
    SensorView,
    Timestamp,
    decode,
    encode,
)

_WARMUP: int = 20
_ITERATIONS: int = 500
_RAYS_HORIZONTAL: int = 64
_RAYS_VERTICAL: int = 16


def _make_view() -> SensorView:
    """Build a single-radar sensor view with a full reflection raster."""
    count = _RAYS_HORIZONTAL * _RAYS_VERTICAL
    return SensorView(
        timestamp=Timestamp(seconds=1),
        radar_sensor_view=[
            RadarSensorView(
                view_configuration=RadarSensorViewConfiguration(
                    number_of_rays_horizontal=_RAYS_HORIZONTAL,
                    number_of_rays_vertical=_RAYS_VERTICAL,
                ),
                reflection=[
                    RadarSensorView.Reflection(
                        signal_strength=-10.0 - (i % 30),
                        time_of_flight=1e-7 + i * 1e-10,
                        doppler_shift=float(i % 500),
                        source_horizontal_angle=(i % _RAYS_HORIZONTAL) * 0.01,
                        source_vertical_angle=(i // _RAYS_HORIZONTAL) * 0.01,
                    )
                    for i in range(count)
                ],
            )
        ],
    )


def bench_codec_throughput() -> dict[str, object]:
    """Benchmark encode() and decode() of one large SensorView.

    Returns
    -------
    dict with keys: operation, iterations, message_bytes, encode_per_second,
    decode_per_second, avg_decode_latency_ms, p99_decode_latency_ms.
    """
    view = _make_view()
    data = encode(view)

    for _ in range(_WARMUP):
        decode(encode(view), SensorView)

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        encode(view)
    encode_total = time.perf_counter() - start

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        decode(data, SensorView)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    decode_total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "codec_throughput",
        "iterations": _ITERATIONS,
        "message_bytes": len(data),
        "encode_per_second": round(_ITERATIONS / encode_total, 1),
        "decode_per_second": round(_ITERATIONS / decode_total, 1),
        "avg_decode_latency_ms": round(sum(latencies_ms) / n, 4),
        "p99_decode_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
    }
    print(
        f"[bench_codec_throughput] {result['message_bytes']} bytes: "
        f"encode={result['encode_per_second']:.1f}/s  "
        f"decode={result['decode_per_second']:.1f}/s  "
        f"p99={result['p99_decode_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_codec_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "codec_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
