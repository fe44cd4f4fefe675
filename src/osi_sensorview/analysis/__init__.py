"""numpy accessors for sensor view payloads.

* **reflections** — :func:`reflection_array`, :func:`raster`, range conversion.
* **camera** — :func:`image_array` and layout helpers.
"""
from __future__ import annotations

from osi_sensorview.analysis.camera import (
    ImageLayoutError,
    expected_image_bytes,
    image_array,
    image_layout,
)
from osi_sensorview.analysis.reflections import (
    REFLECTION_COLUMNS,
    SPEED_OF_LIGHT,
    RasterShapeError,
    one_way_range,
    path_length,
    raster,
    reflection_array,
)

__all__ = [
    "ImageLayoutError",
    "expected_image_bytes",
    "image_array",
    "image_layout",
    "REFLECTION_COLUMNS",
    "SPEED_OF_LIGHT",
    "RasterShapeError",
    "one_way_range",
    "path_length",
    "raster",
    "reflection_array",
]
