"""Validation — non-enforcing checks of documented sensor view contracts."""
from __future__ import annotations

from osi_sensorview.validation.consistency import (
    ConsistencyError,
    ConsistencyReport,
    Issue,
    check_sensor_view,
)

__all__ = [
    "ConsistencyError",
    "ConsistencyReport",
    "Issue",
    "check_sensor_view",
]
