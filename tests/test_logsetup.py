import io
import json
import logging

import pytest

from sastexport.logsetup import (
    TRACE_LEVEL,
    ConsoleWriter,
    MultiLevelWriter,
    WriteError,
    console_time_formatter,
    init_logging,
)


class FailingWriter:
    def write(self, data):
        raise OSError("write error")


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_writes_debug_to_file_only_if_not_verbose():
    console, file = io.BytesIO(), io.BytesIO()
    writer = MultiLevelWriter(False, logging.INFO, console, file)

    result = writer.write_level(logging.DEBUG, b"test")

    assert result == 4
    assert console.getvalue() == b""
    assert file.getvalue() == b"test"


def test_writes_debug_to_file_and_console_if_verbose():
    console, file = io.BytesIO(), io.BytesIO()
    writer = MultiLevelWriter(True, logging.INFO, console, file)

    result = writer.write_level(logging.DEBUG, b"test")

    assert result == 8
    assert console.getvalue() == b"test"
    assert file.getvalue() == b"test"


def test_writes_info_to_file_and_console_if_not_verbose():
    console, file = io.BytesIO(), io.BytesIO()
    writer = MultiLevelWriter(False, logging.INFO, console, file)

    result = writer.write_level(logging.INFO, b"test")

    assert result == 8
    assert console.getvalue() == b"test"
    assert file.getvalue() == b"test"


def test_fails_without_writing_if_console_writer_fails():
    file = io.BytesIO()
    writer = MultiLevelWriter(False, logging.INFO, FailingWriter(), file)

    with pytest.raises(WriteError, match="^write error$") as excinfo:
        writer.write_level(logging.INFO, b"test")

    assert excinfo.value.written == 0
    assert file.getvalue() == b""


def test_fails_after_writing_if_file_writer_fails():
    console = io.BytesIO()
    writer = MultiLevelWriter(False, logging.INFO, console, FailingWriter())

    with pytest.raises(WriteError, match="^write error$") as excinfo:
        writer.write_level(logging.INFO, b"test")

    assert excinfo.value.written == 4
    assert console.getvalue() == b"test"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2021-09-10T15:42:35Z", "15:42:35"),
        ("2021-09-10T15:42:35+02:00", "15:42:35"),
        ("2021-09-10T15:42:35.123456789-05:00", "15:42:35"),
        ("not a time", "not a time"),
        ("2021-09-10 15:42:35", "2021-09-10 15:42:35"),
        (0, "00:00:00"),
        (3661, "01:01:01"),
        (1.5, "1.5"),
        (None, "<nil>"),
    ],
)
def test_console_time_formatter(value, expected):
    assert console_time_formatter(value) == expected


def test_console_writer_renders_event():
    out = io.StringIO()
    writer = ConsoleWriter(out)
    data = b'{"level":"info","time":"2021-09-10T15:42:35Z","msg":"hello"}\n'

    written = writer.write(data)

    assert written == len(data)
    assert out.getvalue() == "15:42:35 INFO  hello\n"


def test_console_writer_puts_error_before_other_fields():
    out = io.StringIO()
    writer = ConsoleWriter(out)
    event = {"level": "error", "time": "2021-09-10T15:42:35Z", "zeta": 1, "error": "boom", "msg": "failed"}

    writer.write(json.dumps(event).encode())

    assert out.getvalue() == "15:42:35 ERROR failed error=boom zeta=1\n"


def test_console_writer_rejects_invalid_event():
    with pytest.raises(ValueError, match="cannot decode event"):
        ConsoleWriter(io.StringIO()).write(b"not json")


def test_init_logging_rejects_unknown_level(restore_root):
    with pytest.raises(ValueError, match="Unknown Level String: 'verbose'"):
        init_logging("verbose", io.StringIO())


def test_init_logging_writes_json_events(restore_root):
    stream = io.StringIO()
    init_logging("TRACE", stream)

    logging.getLogger("sastexport.testing").info("hello %s", "world")

    event = json.loads(stream.getvalue().splitlines()[-1])
    assert event["level"] == "info"
    assert event["msg"] == "hello world"
    assert "time" in event


def test_init_logging_emits_trace_level(restore_root):
    stream = io.StringIO()
    init_logging("trace", stream)

    logging.getLogger("sastexport.testing").log(TRACE_LEVEL, "details")

    event = json.loads(stream.getvalue().splitlines()[-1])
    assert event["level"] == "trace"
    assert event["msg"] == "details"


def test_init_logging_filters_below_level(restore_root):
    stream = io.StringIO()
    init_logging("warn", stream)

    logging.getLogger("sastexport.testing").info("ignored")

    assert stream.getvalue() == ""


def test_init_logging_records_error(restore_root):
    stream = io.StringIO()
    init_logging("info", stream)

    logging.getLogger("sastexport.testing").error("failed", exc_info=ValueError("boom"))

    event = json.loads(stream.getvalue().splitlines()[-1])
    assert event["level"] == "error"
    assert event["error"] == "boom"
    assert event["msg"] == "failed"


def test_init_logging_routes_through_multi_level_writer(restore_root):
    console, file = io.BytesIO(), io.BytesIO()
    init_logging("trace", MultiLevelWriter(False, logging.INFO, console, file))
    logger = logging.getLogger("sastexport.testing")

    logger.debug("quiet")
    logger.info("loud")

    file_events = [json.loads(line) for line in file.getvalue().splitlines()]
    console_events = [json.loads(line) for line in console.getvalue().splitlines()]
    assert [e["msg"] for e in file_events] == ["quiet", "loud"]
    assert [e["msg"] for e in console_events] == ["loud"]