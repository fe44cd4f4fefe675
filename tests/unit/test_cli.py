"""Unit tests for the CLI commands.

Uses Click's CliRunner to invoke all commands without launching a real process.
Covers:
- cli root group (--log-level, --config, bad settings file)
- version command
- schema (default, nested type, unknown message)
- encode (single document, list, invalid document, invalid YAML)
- decode (stdout, --output, corrupt trace)
- inspect
- check (consistent, issues, --strict, strict from settings)
"""
from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from osi_sensorview.cli.main import cli
from osi_sensorview.messages import GroundTruth, Identifier, MovingObject, SensorView
from osi_sensorview.trace import read_trace, write_trace

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _runner() -> CliRunner:
    # wide enough that rich never folds long field names in tables
    return CliRunner(env={"COLUMNS": "200"})


def _write(path: Path, text: str) -> str:
    path.write_text(text, encoding="utf-8")
    return str(path)


_TWO_VIEWS_YAML = """\
- timestamp: {seconds: 1, nanos: 500000000}
  sensor_id: {value: 7}
  radar_sensor_view:
    - reflection:
        - {signal_strength: -12.5, time_of_flight: 3.2e-7, doppler_shift: 1500.0}
        - {signal_strength: -13.0}
- sensor_id: {value: 8}
  camera_sensor_view:
    - image_data: AQI=
"""


def _inconsistent_trace(directory: Path) -> str:
    path = directory / "bad.osi"
    view = SensorView(
        global_ground_truth=GroundTruth(moving_object=[MovingObject(id=Identifier(value=1))]),
        host_vehicle_id=Identifier(value=2),
    )
    write_trace(path, [view])
    return str(path)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


class TestCliRoot:
    def test_help(self) -> None:
        result = _runner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "sensor view" in result.output.lower()

    def test_log_level_option_accepted(self) -> None:
        result = _runner().invoke(cli, ["--log-level", "DEBUG", "version"])
        assert result.exit_code == 0

    def test_config_option_accepted(self, tmp_path: Path) -> None:
        config = _write(tmp_path / "settings.yaml", "log_level: INFO\n")
        result = _runner().invoke(cli, ["--config", config, "version"])
        assert result.exit_code == 0

    def test_invalid_config(self, tmp_path: Path) -> None:
        config = _write(tmp_path / "settings.yaml", "unknown: 1\n")
        result = _runner().invoke(cli, ["--config", config, "version"])
        assert result.exit_code == 1
        assert "Invalid settings file" in result.output


class TestVersionCommand:
    def test_version_output(self) -> None:
        result = _runner().invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "osi-sensorview" in result.output
        assert "3.0.0" in result.output
        assert "Python" in result.output


# ---------------------------------------------------------------------------
# schema
# ---------------------------------------------------------------------------


class TestSchemaCommand:
    def test_default_is_sensor_view(self) -> None:
        result = _runner().invoke(cli, ["schema"])
        assert result.exit_code == 0
        assert "osi3.SensorView" in result.output
        assert "1004" in result.output
        assert "ultrasonic_sensor_view" in result.output

    def test_nested_reflection(self) -> None:
        result = _runner().invoke(cli, ["schema", "LidarSensorView.Reflection"])
        assert result.exit_code == 0
        assert "doppler_shift" in result.output
        assert "source_horizontal_angle" not in result.output

    def test_unknown_message(self) -> None:
        result = _runner().invoke(cli, ["schema", "Nope"])
        assert result.exit_code == 1
        assert "Unknown message" in result.output


# ---------------------------------------------------------------------------
# encode / decode
# ---------------------------------------------------------------------------


class TestEncodeCommand:
    def test_encode_list(self, tmp_path: Path) -> None:
        source = _write(tmp_path / "views.yaml", _TWO_VIEWS_YAML)
        output = tmp_path / "views.osi"
        result = _runner().invoke(cli, ["encode", source, str(output)])
        assert result.exit_code == 0, result.output
        views = read_trace(output)
        assert len(views) == 2
        assert views[0].sensor_id == Identifier(value=7)
        assert views[0].radar_sensor_view[0].reflection[0].time_of_flight == 3.2e-7
        assert views[1].camera_sensor_view[0].image_data == b"\x01\x02"

    def test_encode_single_json_document(self, tmp_path: Path) -> None:
        source = _write(tmp_path / "view.json", json.dumps({"sensor_id": {"value": 3}}))
        output = tmp_path / "view.osi"
        result = _runner().invoke(cli, ["encode", source, str(output)])
        assert result.exit_code == 0, result.output
        assert read_trace(output) == [SensorView(sensor_id=Identifier(value=3))]

    def test_invalid_document(self, tmp_path: Path) -> None:
        source = _write(tmp_path / "bad.yaml", "sensor_idd: {value: 1}\n")
        result = _runner().invoke(cli, ["encode", source, str(tmp_path / "out.osi")])
        assert result.exit_code == 1
        assert "Invalid sensor view document" in result.output

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        source = _write(tmp_path / "bad.yaml", "a: [unclosed\n")
        result = _runner().invoke(cli, ["encode", source, str(tmp_path / "out.osi")])
        assert result.exit_code == 1
        assert "Error reading input" in result.output


class TestDecodeCommand:
    def test_decode_to_stdout(self, tmp_path: Path) -> None:
        path = tmp_path / "run.osi"
        write_trace(path, [SensorView(sensor_id=Identifier(value=5)), SensorView()])
        result = _runner().invoke(cli, ["decode", str(path)])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"sensor_id": {"value": "5"}}, {}]

    def test_decode_to_file(self, tmp_path: Path, full_sensor_view: SensorView) -> None:
        path = tmp_path / "run.osi"
        write_trace(path, [full_sensor_view])
        output = tmp_path / "run.json"
        result = _runner().invoke(cli, ["decode", str(path), "--output", str(output)])
        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data) == 1
        assert len(data[0]["radar_sensor_view"][0]["reflection"]) == 4

    def test_corrupt_trace(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.osi"
        path.write_bytes(b"\x05\x00")
        result = _runner().invoke(cli, ["decode", str(path)])
        assert result.exit_code == 1
        assert "Error reading trace" in result.output


# ---------------------------------------------------------------------------
# inspect / check
# ---------------------------------------------------------------------------


class TestInspectCommand:
    def test_summary(self, tmp_path: Path, full_sensor_view: SensorView) -> None:
        path = tmp_path / "run.osi"
        write_trace(path, [full_sensor_view, SensorView()])
        result = _runner().invoke(cli, ["inspect", str(path)])
        assert result.exit_code == 0
        assert "12.500000000s" in result.output
        assert "Total: 2" in result.output


class TestCheckCommand:
    def test_consistent(self, tmp_path: Path, full_sensor_view: SensorView) -> None:
        path = tmp_path / "run.osi"
        write_trace(path, [full_sensor_view])
        result = _runner().invoke(cli, ["check", str(path)])
        assert result.exit_code == 0
        assert "consistent" in result.output

    def test_issues_reported_not_strict(self, tmp_path: Path) -> None:
        result = _runner().invoke(cli, ["check", _inconsistent_trace(tmp_path)])
        assert result.exit_code == 0
        assert "host-vehicle-missing" in result.output

    def test_strict_flag(self, tmp_path: Path) -> None:
        result = _runner().invoke(cli, ["check", "--strict", _inconsistent_trace(tmp_path)])
        assert result.exit_code == 1

    def test_strict_from_settings(self, tmp_path: Path) -> None:
        config = _write(tmp_path / "settings.yaml", "validation:\n  strict: true\n")
        trace = _inconsistent_trace(tmp_path)
        result = _runner().invoke(cli, ["--config", config, "check", trace])
        assert result.exit_code == 1
        result = _runner().invoke(cli, ["--config", config, "check", "--no-strict", trace])
        assert result.exit_code == 0
