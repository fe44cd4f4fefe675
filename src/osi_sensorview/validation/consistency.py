"""Consistency checks for the contracts a sensor view documents but cannot enforce.

Construction and decoding only guarantee structure.  Some contracts are
stated in prose only, for example that the host vehicle is part of the
ground truth.  :func:`check_sensor_view` inspects those and reports what it
finds; it never modifies the view and is never called implicitly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from osi_sensorview.analysis.camera import ImageLayoutError, expected_image_bytes
from osi_sensorview.messages.sensorview import LidarSensorView, RadarSensorView, SensorView

logger = logging.getLogger(__name__)


class ConsistencyError(ValueError):
    """Raised by :meth:`ConsistencyReport.raise_if_failed` when issues exist."""

    def __init__(self, issues: list["Issue"]) -> None:
        self.issues = issues
        lines = "; ".join(f"{i.path}: {i.message}" for i in issues)
        super().__init__(f"{len(issues)} consistency issue(s): {lines}")


@dataclass(frozen=True)
class Issue:
    """One violated contract.

    Attributes
    ----------
    code:
        Stable machine-readable identifier, e.g. ``"host-vehicle-missing"``.
    path:
        Location in the view, e.g. ``"radar_sensor_view[1].reflection"``.
    message:
        Human-readable explanation.
    """

    code: str
    path: str
    message: str


@dataclass
class ConsistencyReport:
    """Issues found in one sensor view."""

    issues: list[Issue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def add(self, code: str, path: str, message: str) -> None:
        self.issues.append(Issue(code, path, message))

    def codes(self) -> list[str]:
        return [issue.code for issue in self.issues]

    def raise_if_failed(self) -> None:
        if self.issues:
            raise ConsistencyError(list(self.issues))

    def to_dict(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "issues": [
                {"code": i.code, "path": i.path, "message": i.message} for i in self.issues
            ],
        }


def _check_host_vehicle(view: SensorView, report: ConsistencyReport) -> None:
    truth = view.global_ground_truth
    if truth is None:
        return
    if view.host_vehicle_id is None:
        report.add(
            "host-vehicle-id-missing",
            "host_vehicle_id",
            "Ground truth is present but host_vehicle_id is not set.",
        )
        return
    if truth.find_moving_object(view.host_vehicle_id) is None:
        report.add(
            "host-vehicle-missing",
            "global_ground_truth.moving_object",
            f"No moving object with id {view.host_vehicle_id.value}; "
            "the host vehicle must always be contained.",
        )
    if truth.host_vehicle_id is not None and truth.host_vehicle_id != view.host_vehicle_id:
        report.add(
            "host-vehicle-id-mismatch",
            "global_ground_truth.host_vehicle_id",
            f"Ground truth names host {truth.host_vehicle_id.value}, "
            f"sensor view names {view.host_vehicle_id.value}.",
        )


def _check_ray_counts(
    name: str,
    views: tuple[RadarSensorView, ...] | tuple[LidarSensorView, ...],
    report: ConsistencyReport,
) -> None:
    for index, sub_view in enumerate(views):
        config = sub_view.view_configuration
        if config is None or not config.number_of_rays_horizontal or not config.number_of_rays_vertical:
            continue
        expected = config.number_of_rays_horizontal * config.number_of_rays_vertical
        if len(sub_view.reflection) != expected:
            report.add(
                "reflection-count-mismatch",
                f"{name}[{index}].reflection",
                f"Expected one reflection per ray ({expected}), "
                f"got {len(sub_view.reflection)}.",
            )


def _check_camera_bytes(view: SensorView, report: ConsistencyReport) -> None:
    for index, camera in enumerate(view.camera_sensor_view):
        if camera.view_configuration is None:
            continue
        try:
            expected = expected_image_bytes(camera.view_configuration)
        except ImageLayoutError:
            # Layout not determinable from the configuration.
            continue
        if len(camera.image_data) != expected:
            report.add(
                "image-size-mismatch",
                f"camera_sensor_view[{index}].image_data",
                f"Configured layout needs {expected} bytes, got {len(camera.image_data)}.",
            )


def check_sensor_view(view: SensorView) -> ConsistencyReport:
    """Inspect *view* against its documented contracts.

    Checks
    ------
    * ``host_vehicle_id`` resolves to a moving object of the ground truth,
      and agrees with the ground truth's own host vehicle reference.
    * Each radar and lidar sub-view with configured ray counts holds one
      reflection per ray.
    * Each camera sub-view's byte count matches its configured layout, when
      that layout is determinable.

    Returns
    -------
    ConsistencyReport
        Empty when every applicable contract holds.
    """
    report = ConsistencyReport()
    _check_host_vehicle(view, report)
    _check_ray_counts("radar_sensor_view", view.radar_sensor_view, report)
    _check_ray_counts("lidar_sensor_view", view.lidar_sensor_view, report)
    _check_camera_bytes(view, report)
    if report.issues:
        logger.debug("Sensor view has %d consistency issue(s): %s", len(report.issues), report.codes())
    return report
