"""Decode raw camera bytes using the layout declared by the configuration."""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from osi_sensorview.messages.configuration import CameraSensorViewConfiguration
from osi_sensorview.messages.sensorview import CameraSensorView

ChannelFormat = CameraSensorViewConfiguration.ChannelFormat

# format -> (little-endian sample dtype, channels per pixel)
_LAYOUTS: dict[ChannelFormat, tuple[str, int]] = {
    ChannelFormat.MONO_U8_LIN: ("<u1", 1),
    ChannelFormat.MONO_U16_LIN: ("<u2", 1),
    ChannelFormat.MONO_U32_LIN: ("<u4", 1),
    ChannelFormat.MONO_F32_LIN: ("<f4", 1),
    ChannelFormat.RGB_U8_LIN: ("<u1", 3),
    ChannelFormat.RGB_U16_LIN: ("<u2", 3),
    ChannelFormat.RGB_U32_LIN: ("<u4", 3),
    ChannelFormat.RGB_F32_LIN: ("<f4", 3),
}


class ImageLayoutError(ValueError):
    """Raised when image bytes do not fit the declared camera layout."""


def image_layout(config: CameraSensorViewConfiguration) -> tuple[np.dtype, tuple[int, int, int]]:
    """Return the sample dtype and ``(rows, cols, channels)`` shape declared by *config*.

    Raises
    ------
    ImageLayoutError
        If the pixel counts are unset or the channel format is not exactly
        one of the supported linear formats.
    """
    if len(config.channel_format) != 1 or config.channel_format[0] not in _LAYOUTS:
        raise ImageLayoutError(
            f"Unsupported channel format {[getattr(f, 'name', f) for f in config.channel_format]}."
        )
    if not config.number_of_pixels_horizontal or not config.number_of_pixels_vertical:
        raise ImageLayoutError("Camera pixel counts are not configured.")
    dtype_code, channels = _LAYOUTS[config.channel_format[0]]
    shape = (config.number_of_pixels_vertical, config.number_of_pixels_horizontal, channels)
    return np.dtype(dtype_code), shape


def expected_image_bytes(config: CameraSensorViewConfiguration) -> int:
    """Byte length ``image_data`` must have under *config*."""
    dtype, (rows, cols, channels) = image_layout(config)
    return rows * cols * channels * dtype.itemsize


def image_array(view: CameraSensorView) -> NDArray:
    """Interpret ``view.image_data`` as a ``(rows, cols, channels)`` array.

    The returned array is a read-only view over the message's bytes.

    Raises
    ------
    ImageLayoutError
        If the view has no configuration, the layout is unsupported, or the
        byte count does not match.
    """
    if view.view_configuration is None:
        raise ImageLayoutError("CameraSensorView has no view configuration.")
    dtype, shape = image_layout(view.view_configuration)
    expected = shape[0] * shape[1] * shape[2] * dtype.itemsize
    if len(view.image_data) != expected:
        raise ImageLayoutError(
            f"Expected {expected} bytes for {shape[0]}x{shape[1]}x{shape[2]} "
            f"{dtype.name}, got {len(view.image_data)}."
        )
    return np.frombuffer(view.image_data, dtype=dtype).reshape(shape)
