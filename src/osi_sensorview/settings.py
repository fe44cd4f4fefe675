"""Settings — YAML-backed configuration for the CLI and trace I/O.

Example ``osi-sensorview.yaml``::

    log_level: INFO
    trace:
      max_message_bytes: 67108864
    validation:
      strict: true

Missing keys take their defaults; unknown keys are rejected.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from osi_sensorview.trace.file import DEFAULT_MAX_MESSAGE_BYTES, MAX_RECORD_BYTES

logger = logging.getLogger(__name__)


class TraceSettings(BaseModel):
    """Trace file limits.

    Attributes
    ----------
    max_message_bytes:
        Largest record accepted when reading or writing a trace.
    """

    model_config = ConfigDict(extra="forbid")

    max_message_bytes: int = Field(
        default=DEFAULT_MAX_MESSAGE_BYTES, gt=0, le=MAX_RECORD_BYTES
    )


class ValidationSettings(BaseModel):
    """Consistency check behaviour.

    Attributes
    ----------
    strict:
        If True, ``osi-sensorview check`` exits non-zero when any issue is
        found.
    """

    model_config = ConfigDict(extra="forbid")

    strict: bool = False


class Settings(BaseModel):
    """Top-level settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    trace: TraceSettings = Field(default_factory=TraceSettings)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        pydantic.ValidationError
            If the document has unknown keys or invalid values.
        """
        source = Path(path)
        if not source.exists():
            raise FileNotFoundError(f"Settings file {source} not found.")
        with source.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        settings = cls.model_validate(data)
        logger.debug("Loaded settings from %s", source)
        return settings

    def to_yaml(self, path: str | Path) -> Path:
        """Write these settings to *path* and return it."""
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(), f, default_flow_style=False)
        return destination
