"""Logging setup: JSON log events, a console renderer and level-based routing."""

from __future__ import annotations

import io
import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, Protocol

TRACE_LEVEL = 5
PANIC_LEVEL = 60
NO_LEVEL = 90
DISABLED_LEVEL = 100

_LEVEL_FIELD_NAME = "level"
_MESSAGE_FIELD_NAME = "msg"
_ERROR_FIELD_NAME = "error"
_TIMESTAMP_FIELD_NAME = "time"

_CONSOLE_TIME_FORMAT = "%H:%M:%S"

_LEVELS_BY_NAME = {
    "trace": TRACE_LEVEL,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": PANIC_LEVEL,
    "": NO_LEVEL,
    "disabled": DISABLED_LEVEL,
}

_LEVEL_NAMES = (
    (PANIC_LEVEL, "panic"),
    (logging.CRITICAL, "fatal"),
    (logging.ERROR, "error"),
    (logging.WARNING, "warn"),
    (logging.INFO, "info"),
    (logging.DEBUG, "debug"),
)

_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.\d+)?([Zz]|[+-]\d{2}:\d{2})"
)


class Writer(Protocol):
    def write(self, data: bytes) -> int | None:
        """Write ``data`` and return the number of bytes written."""
        ...


class WriteError(Exception):
    """Raised when one of the writers fails; ``written`` counts bytes written before."""

    def __init__(self, message: str, written: int) -> None:
        super().__init__(message)
        self.written = written


class MultiLevelWriter:
    """Routes log output to the file writer and, depending on level, the console."""

    def __init__(
        self,
        is_verbose: bool,
        console_min_level: int,
        console_writer: Writer,
        file_writer: Writer,
    ) -> None:
        self.is_verbose = is_verbose
        self.console_min_level = console_min_level
        self.console_writer = console_writer
        self.file_writer = file_writer

    def _writers(self, level: int) -> list[Writer]:
        if not self.is_verbose and level < self.console_min_level:
            return [self.file_writer]
        return [self.console_writer, self.file_writer]

    def write_level(self, level: int, data: bytes) -> int:
        """Write ``data`` to every applicable writer and return the bytes written in total.

        Writing stops at the first failing writer, raising :class:`WriteError`.
        """
        total = 0
        for writer in self._writers(level):
            try:
                written = writer.write(data)
            except Exception as err:
                raise WriteError(str(err), total) from err
            total += len(data) if written is None else written
        return total


def console_time_formatter(value: Any) -> str:
    """Render a log event timestamp as ``HH:MM:SS`` for the console."""
    if isinstance(value, str):
        match = _RFC3339.fullmatch(value)
        if match is None:
            return value
        date_part, time_part, offset = match.groups()
        if offset in ("Z", "z"):
            offset = "+00:00"
        try:
            parsed = datetime.fromisoformat(f"{date_part}T{time_part}{offset}")
        except ValueError:
            return value
        return parsed.strftime(_CONSOLE_TIME_FORMAT)
    if isinstance(value, bool) or value is None:
        return "<nil>"
    if isinstance(value, int):
        try:
            stamp = datetime.fromtimestamp(value, timezone.utc)
        except (OverflowError, OSError, ValueError):
            return str(value)
        return stamp.strftime(_CONSOLE_TIME_FORMAT)
    if isinstance(value, float):
        return str(value)
    return "<nil>"


def _needs_quote(text: str) -> bool:
    return any(ch in ' \\"' or ord(ch) < 0x20 or not ch.isprintable() for ch in text)


def _format_field_value(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value) if _needs_quote(value) else value
    return json.dumps(value)


class ConsoleWriter:
    """Renders JSON log events as plain, uncoloured console lines."""

    def __init__(self, out: io.TextIOBase | None = None) -> None:
        self._out = out

    def write(self, data: bytes) -> int:
        try:
            event = json.loads(data)
        except ValueError as err:
            raise ValueError(f"cannot decode event: {err}") from err
        if not isinstance(event, dict):
            raise ValueError("cannot decode event: not a JSON object")

        level = event.get(_LEVEL_FIELD_NAME)
        parts = [
            console_time_formatter(event.get(_TIMESTAMP_FIELD_NAME)),
            f"{'' if level is None else level:<5}".upper(),
        ]
        message = event.get(_MESSAGE_FIELD_NAME)
        if message is not None and message != "":
            parts.append(str(message))

        skipped = {_LEVEL_FIELD_NAME, _TIMESTAMP_FIELD_NAME, _MESSAGE_FIELD_NAME}
        names = sorted(
            (name for name in event if name not in skipped),
            key=lambda name: (name != _ERROR_FIELD_NAME, name),
        )
        parts.extend(f"{name}={_format_field_value(event[name])}" for name in names)

        out = self._out if self._out is not None else sys.stdout
        out.write(" ".join(parts) + "\n")
        return len(data)


def _level_name(levelno: int) -> str:
    for threshold, name in _LEVEL_NAMES:
        if levelno >= threshold:
            return name
    return "trace"


def _timestamp(created: float) -> str:
    stamp = datetime.fromtimestamp(created, timezone.utc).astimezone()
    text = stamp.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


class _JSONHandler(logging.Handler):
    def __init__(self, stream: Any) -> None:
        super().__init__()
        self._stream = stream

    def _event(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            _LEVEL_FIELD_NAME: _level_name(record.levelno),
            _TIMESTAMP_FIELD_NAME: _timestamp(record.created),
        }
        if record.exc_info and record.exc_info[1] is not None:
            event[_ERROR_FIELD_NAME] = str(record.exc_info[1])
        event[_MESSAGE_FIELD_NAME] = record.getMessage()
        return json.dumps(event, separators=(",", ":")) + "\n"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self._event(record)
            if hasattr(self._stream, "write_level"):
                self._stream.write_level(record.levelno, line.encode("utf-8"))
            elif isinstance(self._stream, io.TextIOBase):
                self._stream.write(line)
                self._stream.flush()
            else:
                self._stream.write(line.encode("utf-8"))
        except Exception:
            self.handleError(record)


def _parse_level(log_level: str) -> int:
    name = log_level.lower()
    if name not in _LEVELS_BY_NAME:
        raise ValueError(f"Unknown Level String: '{name}', defaulting to NoLevel")
    return _LEVELS_BY_NAME[name]


def init_logging(log_level: str, output_stream: Any = None) -> None:
    """Send JSON log events at ``log_level`` and above to ``output_stream``.

    ``output_stream`` may be a :class:`MultiLevelWriter`, a text stream or a
    binary stream; it defaults to standard output.
    """
    level = _parse_level(log_level)
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    stream = sys.stdout if output_stream is None else output_stream

    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, _JSONHandler)]:
        root.removeHandler(handler)
    root.addHandler(_JSONHandler(stream))
    root.setLevel(level)