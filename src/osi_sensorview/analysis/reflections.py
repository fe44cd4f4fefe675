"""Array views of ray-traced radar and lidar reflections.

Reflections arrive in raster order: left-to-right along a scan line, scan
lines top-to-bottom.  With the ray counts of the view configuration that
order maps each reflection onto a ``(rows, columns)`` grid.

Usage
-----
::

    tof = raster(radar_view, "time_of_flight")   # shape (rays_v, rays_h)
    ranges = one_way_range(tof)
"""
from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from osi_sensorview.messages.sensorview import LidarSensorView, RadarSensorView

logger = logging.getLogger(__name__)

SPEED_OF_LIGHT: float = 299_792_458.0  # m/s

REFLECTION_COLUMNS: dict[type, tuple[str, ...]] = {
    RadarSensorView: tuple(f.name for f in RadarSensorView.Reflection.wire_fields()),
    LidarSensorView: tuple(f.name for f in LidarSensorView.Reflection.wire_fields()),
}


class RasterShapeError(ValueError):
    """Raised when reflections cannot be laid out on the configured ray grid."""


def reflection_array(view: RadarSensorView | LidarSensorView) -> NDArray[np.float64]:
    """Return the reflections of *view* as an ``(n, k)`` float64 array.

    Columns follow :data:`REFLECTION_COLUMNS` (tag order): five for radar,
    three for lidar.  An empty view yields shape ``(0, k)``.
    """
    columns = REFLECTION_COLUMNS[type(view)]
    data = np.array(
        [[getattr(r, name) for name in columns] for r in view.reflection],
        dtype=np.float64,
    )
    return data.reshape(len(view.reflection), len(columns))


def raster(
    view: RadarSensorView | LidarSensorView,
    field: str = "time_of_flight",
) -> NDArray[np.float64]:
    """Lay one reflection attribute out on the configured ray grid.

    Parameters
    ----------
    view:
        Radar or lidar sub-view with a view configuration.
    field:
        Reflection attribute to extract, e.g. ``"signal_strength"``.

    Returns
    -------
    NDArray[np.float64]
        Shape ``(number_of_rays_vertical, number_of_rays_horizontal)``;
        row 0 is the top scan line, column 0 the leftmost ray.

    Raises
    ------
    KeyError
        If *field* is not a reflection attribute of this technology.
    RasterShapeError
        If the ray counts are not configured or do not match the number of
        reflections.
    """
    columns = REFLECTION_COLUMNS[type(view)]
    if field not in columns:
        raise KeyError(f"{type(view).__name__}.Reflection has no field {field!r}.")
    config = view.view_configuration
    if config is None or not config.number_of_rays_horizontal or not config.number_of_rays_vertical:
        raise RasterShapeError(
            f"{type(view).__name__} has no ray counts configured; cannot form a raster."
        )
    rows = config.number_of_rays_vertical
    cols = config.number_of_rays_horizontal
    if rows * cols != len(view.reflection):
        raise RasterShapeError(
            f"Configured {rows}x{cols} rays but view holds "
            f"{len(view.reflection)} reflections."
        )
    values = reflection_array(view)[:, columns.index(field)]
    logger.debug("Raster %s of %s: %dx%d", field, type(view).__name__, rows, cols)
    return values.reshape(rows, cols)


def path_length(time_of_flight: ArrayLike) -> NDArray[np.float64] | float:
    """Distance travelled by the signal. Unit: [m]."""
    result = np.asarray(time_of_flight, dtype=np.float64) * SPEED_OF_LIGHT
    return float(result) if result.ndim == 0 else result


def one_way_range(time_of_flight: ArrayLike) -> NDArray[np.float64] | float:
    """Sensor-to-target distance for a monostatic round trip. Unit: [m]."""
    result = np.asarray(time_of_flight, dtype=np.float64) * (SPEED_OF_LIGHT / 2.0)
    return float(result) if result.ndim == 0 else result
