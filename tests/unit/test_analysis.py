"""Unit tests for the numpy accessors.

Covers:
- analysis/reflections.py: reflection_array (radar, lidar, empty), raster
  (layout, unknown field, missing config, count mismatch), path_length and
  one_way_range on scalars and arrays
- analysis/camera.py: image_layout, expected_image_bytes, image_array
  (mono, rgb 16-bit, read-only, size mismatch, unsupported format, missing
  configuration)
"""
from __future__ import annotations

import numpy as np
import pytest

from osi_sensorview.analysis import (
    REFLECTION_COLUMNS,
    SPEED_OF_LIGHT,
    ImageLayoutError,
    RasterShapeError,
    expected_image_bytes,
    image_array,
    image_layout,
    one_way_range,
    path_length,
    raster,
    reflection_array,
)
from osi_sensorview.messages import (
    CameraSensorView,
    CameraSensorViewConfiguration,
    LidarSensorView,
    LidarSensorViewConfiguration,
    RadarSensorView,
    RadarSensorViewConfiguration,
)

ChannelFormat = CameraSensorViewConfiguration.ChannelFormat


def _radar(n_h: int, n_v: int, n_reflections: int | None = None) -> RadarSensorView:
    count = n_h * n_v if n_reflections is None else n_reflections
    return RadarSensorView(
        view_configuration=RadarSensorViewConfiguration(
            number_of_rays_horizontal=n_h, number_of_rays_vertical=n_v
        ),
        reflection=[
            RadarSensorView.Reflection(signal_strength=-float(i), time_of_flight=float(i))
            for i in range(count)
        ],
    )


def _camera(fmt: ChannelFormat, cols: int, rows: int, data: bytes) -> CameraSensorView:
    return CameraSensorView(
        view_configuration=CameraSensorViewConfiguration(
            number_of_pixels_horizontal=cols,
            number_of_pixels_vertical=rows,
            channel_format=[fmt],
        ),
        image_data=data,
    )


# ---------------------------------------------------------------------------
# Reflections
# ---------------------------------------------------------------------------


class TestReflectionArray:
    def test_column_names(self) -> None:
        assert REFLECTION_COLUMNS[RadarSensorView] == (
            "signal_strength",
            "time_of_flight",
            "doppler_shift",
            "source_horizontal_angle",
            "source_vertical_angle",
        )
        assert REFLECTION_COLUMNS[LidarSensorView] == (
            "signal_strength",
            "time_of_flight",
            "doppler_shift",
        )

    def test_radar_array(self) -> None:
        data = reflection_array(_radar(2, 1))
        assert data.shape == (2, 5)
        assert data.dtype == np.float64
        np.testing.assert_array_equal(data[:, 0], [0.0, -1.0])

    def test_lidar_array(self) -> None:
        view = LidarSensorView(reflection=[LidarSensorView.Reflection(doppler_shift=5.0)])
        data = reflection_array(view)
        assert data.shape == (1, 3)
        assert data[0, 2] == 5.0

    def test_empty(self) -> None:
        assert reflection_array(RadarSensorView()).shape == (0, 5)
        assert reflection_array(LidarSensorView()).shape == (0, 3)


class TestRaster:
    def test_row_major_scan_lines(self) -> None:
        grid = raster(_radar(3, 2), "time_of_flight")
        assert grid.shape == (2, 3)
        # first scan line left to right, then the next one
        np.testing.assert_array_equal(grid, [[0.0, 1.0, 2.0], [3.0, 4.0, 5.0]])

    def test_lidar(self) -> None:
        view = LidarSensorView(
            view_configuration=LidarSensorViewConfiguration(
                number_of_rays_horizontal=1, number_of_rays_vertical=2
            ),
            reflection=[
                LidarSensorView.Reflection(signal_strength=-1.0),
                LidarSensorView.Reflection(signal_strength=-2.0),
            ],
        )
        np.testing.assert_array_equal(raster(view, "signal_strength"), [[-1.0], [-2.0]])

    def test_unknown_field(self) -> None:
        view = LidarSensorView()
        with pytest.raises(KeyError):
            raster(view, "source_horizontal_angle")

    def test_missing_configuration(self) -> None:
        with pytest.raises(RasterShapeError, match="ray counts"):
            raster(RadarSensorView())

    def test_count_mismatch(self) -> None:
        with pytest.raises(RasterShapeError, match="5 reflections"):
            raster(_radar(2, 2, n_reflections=5))


class TestRange:
    def test_scalar(self) -> None:
        assert one_way_range(2e-7) == pytest.approx(29.9792458)
        assert path_length(1e-6) == pytest.approx(SPEED_OF_LIGHT * 1e-6)
        assert isinstance(one_way_range(1e-7), float)

    def test_array(self) -> None:
        tof = np.array([[1e-7, 2e-7]])
        ranges = one_way_range(tof)
        assert isinstance(ranges, np.ndarray)
        assert ranges.shape == (1, 2)
        np.testing.assert_allclose(ranges, tof * SPEED_OF_LIGHT / 2.0)


# ---------------------------------------------------------------------------
# Camera
# ---------------------------------------------------------------------------


class TestImageLayout:
    def test_mono_u8(self) -> None:
        config = CameraSensorViewConfiguration(
            number_of_pixels_horizontal=4,
            number_of_pixels_vertical=3,
            channel_format=[ChannelFormat.MONO_U8_LIN],
        )
        dtype, shape = image_layout(config)
        assert dtype == np.dtype("uint8")
        assert shape == (3, 4, 1)
        assert expected_image_bytes(config) == 12

    def test_rgb_f32_bytes(self) -> None:
        config = CameraSensorViewConfiguration(
            number_of_pixels_horizontal=2,
            number_of_pixels_vertical=2,
            channel_format=[ChannelFormat.RGB_F32_LIN],
        )
        assert expected_image_bytes(config) == 2 * 2 * 3 * 4

    def test_unsupported_format(self) -> None:
        config = CameraSensorViewConfiguration(
            number_of_pixels_horizontal=2,
            number_of_pixels_vertical=2,
            channel_format=[ChannelFormat.OTHER],
        )
        with pytest.raises(ImageLayoutError):
            image_layout(config)

    def test_undeclared_format_unsupported(self) -> None:
        config = CameraSensorViewConfiguration(
            number_of_pixels_horizontal=2,
            number_of_pixels_vertical=2,
            channel_format=[10],
        )
        with pytest.raises(ImageLayoutError, match=r"\[10\]"):
            image_layout(config)

    def test_missing_format(self) -> None:
        config = CameraSensorViewConfiguration(
            number_of_pixels_horizontal=2, number_of_pixels_vertical=2
        )
        with pytest.raises(ImageLayoutError):
            image_layout(config)

    def test_missing_pixel_counts(self) -> None:
        config = CameraSensorViewConfiguration(channel_format=[ChannelFormat.MONO_U8_LIN])
        with pytest.raises(ImageLayoutError, match="pixel counts"):
            image_layout(config)


class TestImageArray:
    def test_mono(self) -> None:
        view = _camera(ChannelFormat.MONO_U8_LIN, 3, 2, bytes(range(6)))
        image = image_array(view)
        assert image.shape == (2, 3, 1)
        assert image[1, 0, 0] == 3

    def test_rgb_u16_little_endian(self) -> None:
        pixel = np.array([1, 256, 65535], dtype="<u2").tobytes()
        view = _camera(ChannelFormat.RGB_U16_LIN, 1, 1, pixel)
        image = image_array(view)
        assert image.shape == (1, 1, 3)
        assert image[0, 0].tolist() == [1, 256, 65535]

    def test_read_only(self) -> None:
        image = image_array(_camera(ChannelFormat.MONO_U8_LIN, 1, 1, b"\x07"))
        assert not image.flags.writeable

    def test_size_mismatch(self) -> None:
        view = _camera(ChannelFormat.MONO_U8_LIN, 2, 2, b"\x00\x01\x02")
        with pytest.raises(ImageLayoutError, match="got 3"):
            image_array(view)

    def test_empty_image_data_mismatch(self) -> None:
        with pytest.raises(ImageLayoutError):
            image_array(_camera(ChannelFormat.MONO_U8_LIN, 1, 1, b""))

    def test_missing_configuration(self) -> None:
        with pytest.raises(ImageLayoutError, match="configuration"):
            image_array(CameraSensorView(image_data=b"\x00"))
