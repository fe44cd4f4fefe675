"""Trace files — length-prefixed sequences of serialised messages."""
from __future__ import annotations

from osi_sensorview.trace.file import (
    DEFAULT_MAX_MESSAGE_BYTES,
    MAX_RECORD_BYTES,
    TraceFormatError,
    TraceReader,
    TraceWriter,
    read_trace,
    write_trace,
)

__all__ = [
    "DEFAULT_MAX_MESSAGE_BYTES",
    "MAX_RECORD_BYTES",
    "TraceFormatError",
    "TraceReader",
    "TraceWriter",
    "read_trace",
    "write_trace",
]
