"""Binary OSI trace files.

A trace is a plain concatenation of records, each made of a 4-byte
little-endian unsigned length followed by that many bytes holding one
serialised message.  All records of a trace share one message type,
normally :class:`~osi_sensorview.messages.SensorView`.

Usage
-----
::

    with TraceWriter("run.osi") as writer:
        for view in views:
            writer.write(view)

    for view in TraceReader("run.osi"):
        ...
"""
from __future__ import annotations

import logging
import struct
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Generic, TypeVar

from osi_sensorview.codec.wire import DecodeError, decode, encode
from osi_sensorview.messages.base import OsiMessage
from osi_sensorview.messages.sensorview import SensorView

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=OsiMessage)

_HEADER = struct.Struct("<I")
DEFAULT_MAX_MESSAGE_BYTES: int = 256 * 1024 * 1024
# largest payload a 4-byte length header can announce
MAX_RECORD_BYTES: int = 2**32 - 1


def _checked_limit(max_message_bytes: int) -> int:
    if not 0 < max_message_bytes <= MAX_RECORD_BYTES:
        raise ValueError(
            f"max_message_bytes must be between 1 and {MAX_RECORD_BYTES}, "
            f"got {max_message_bytes}."
        )
    return max_message_bytes


class TraceFormatError(ValueError):
    """Raised when a trace file is truncated, oversized or undecodable."""

    def __init__(self, path: Path, offset: int, reason: str) -> None:
        self.path = path
        self.offset = offset
        self.reason = reason
        super().__init__(f"{path} at byte {offset}: {reason}")


class TraceWriter(Generic[M]):
    """Append messages of one type to a binary trace file.

    Parameters
    ----------
    path:
        Destination file.  Parent directories are created; an existing file
        is overwritten.
    message_type:
        Type every written message must have.
    max_message_bytes:
        Refuse to write a record whose payload exceeds this size.  At most
        :data:`MAX_RECORD_BYTES`; larger limits raise ``ValueError``.
    """

    def __init__(
        self,
        path: str | Path,
        message_type: type[M] = SensorView,  # type: ignore[assignment]
        max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
    ) -> None:
        self._path = Path(path)
        self._message_type = message_type
        self._max_message_bytes = _checked_limit(max_message_bytes)
        self._handle: BinaryIO | None = None
        self._count = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def count(self) -> int:
        """Number of records written so far."""
        return self._count

    def open(self) -> "TraceWriter[M]":
        if self._handle is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self._path.open("wb")
            logger.debug("Opened trace %s for writing", self._path)
        return self

    def write(self, message: M) -> None:
        """Encode *message* and append it as one record.

        Raises
        ------
        TypeError
            If *message* is not an instance of the trace's message type.
        ValueError
            If the encoded message exceeds ``max_message_bytes``.
        """
        if not isinstance(message, self._message_type):
            raise TypeError(
                f"Trace holds {self._message_type.__qualname__} messages, "
                f"got {type(message).__qualname__}."
            )
        payload = encode(message)
        if len(payload) > self._max_message_bytes:
            raise ValueError(
                f"Encoded message is {len(payload)} bytes, "
                f"limit is {self._max_message_bytes}."
            )
        self.open()
        self._handle.write(_HEADER.pack(len(payload)))  # type: ignore[union-attr]
        self._handle.write(payload)  # type: ignore[union-attr]
        self._count += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.info("Wrote %d messages to %s", self._count, self._path)

    def __enter__(self) -> "TraceWriter[M]":
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"TraceWriter(path={str(self._path)!r}, count={self._count})"


class TraceReader(Generic[M]):
    """Iterate over the messages stored in a binary trace file.

    Each iteration re-opens the file, so a reader can be iterated more
    than once.

    Parameters
    ----------
    path:
        Trace file to read.
    message_type:
        Type to decode every record as.
    max_message_bytes:
        Records announcing a larger payload are treated as corruption.

    Raises
    ------
    FileNotFoundError
        On construction, if *path* does not exist.
    ValueError
        On construction, if *max_message_bytes* is outside ``1 .. MAX_RECORD_BYTES``.
    """

    def __init__(
        self,
        path: str | Path,
        message_type: type[M] = SensorView,  # type: ignore[assignment]
        max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
    ) -> None:
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Trace file {self._path} does not exist.")
        self._message_type = message_type
        self._max_message_bytes = _checked_limit(max_message_bytes)

    @property
    def path(self) -> Path:
        return self._path

    def __iter__(self) -> Iterator[M]:
        count = 0
        offset = 0
        with self._path.open("rb") as handle:
            while True:
                header = handle.read(_HEADER.size)
                if not header:
                    break
                if len(header) < _HEADER.size:
                    raise TraceFormatError(self._path, offset, "truncated length header")
                (size,) = _HEADER.unpack(header)
                if size > self._max_message_bytes:
                    raise TraceFormatError(
                        self._path,
                        offset,
                        f"record of {size} bytes exceeds limit of {self._max_message_bytes}",
                    )
                payload = handle.read(size)
                if len(payload) < size:
                    raise TraceFormatError(
                        self._path,
                        offset,
                        f"truncated record, expected {size} bytes, got {len(payload)}",
                    )
                try:
                    message = decode(payload, self._message_type)
                except DecodeError as exc:
                    raise TraceFormatError(self._path, offset, exc.reason) from exc
                offset += _HEADER.size + size
                count += 1
                yield message

        if count == 0:
            logger.warning("Trace %s contains no messages", self._path)
        else:
            logger.info("Read %d messages from %s", count, self._path)

    def read_all(self) -> list[M]:
        """Decode every record into a list."""
        return list(self)

    def __repr__(self) -> str:
        return (
            f"TraceReader(path={str(self._path)!r}, "
            f"message_type={self._message_type.__qualname__})"
        )


def write_trace(
    path: str | Path,
    messages: Iterable[OsiMessage],
    message_type: type[OsiMessage] = SensorView,
    max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
) -> int:
    """Write *messages* to a new trace at *path* and return how many were written."""
    with TraceWriter(path, message_type, max_message_bytes) as writer:
        for message in messages:
            writer.write(message)
    return writer.count


def read_trace(
    path: str | Path,
    message_type: type[M] = SensorView,  # type: ignore[assignment]
    max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
) -> list[M]:
    """Read every message of the trace at *path*."""
    return TraceReader(path, message_type, max_message_bytes).read_all()
