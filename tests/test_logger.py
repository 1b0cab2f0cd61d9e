import gzip
import json
import logging
import os
from datetime import datetime

import pytest

from formkit import logger
from formkit.logger import (
    DEFAULT_TRACE_ID,
    ConsoleFormatter,
    JsonFormatter,
    LogConfig,
)


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "logs" / "app.log"
    yield path
    for handler in logging.getLogger("formkit").handlers:
        handler.close()


def read_entries(path):
    logger.sync()
    with open(path, encoding="utf-8") as fh:
        return [json.loads(line) for line in fh if line.strip()]


def test_init_creates_directory_and_writes_json(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    logger.info({"trace_id": "abc"}, "hello", user="bob")
    entries = read_entries(log_file)
    assert log_file.parent.is_dir()
    assert len(entries) == 1
    entry = entries[0]
    assert entry["msg"] == "hello"
    assert entry["user"] == "bob"
    assert entry["trace_id"] == "abc"
    assert entry["level"] == "INFO"


def test_timestamp_has_millisecond_precision(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    logger.info(None, "tick")
    entry = read_entries(log_file)[0]
    parsed = datetime.strptime(entry["ts"], "%Y-%m-%d %H:%M:%S.%f")
    assert parsed.year >= 2000
    assert len(entry["ts"].split(".")[1]) == 3


def test_caller_points_at_call_site(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    logger.info(None, "where")
    caller = read_entries(log_file)[0]["caller"]
    assert "test_logger.py:" in caller
    assert caller.endswith("[test_caller_points_at_call_site]")


def test_level_filtering_drops_lower_levels(log_file):
    logger.init(LogConfig(filename=str(log_file), level="warn"))
    logger.debug(None, "dropped-debug")
    logger.info(None, "dropped-info")
    logger.warn(None, "kept")
    assert [e["msg"] for e in read_entries(log_file)] == ["kept"]


def test_formatted_variants_put_text_in_msg(log_file):
    logger.init(LogConfig(filename=str(log_file), level="debug"))
    logger.debugf(None, "count %d of %d", 3, 5)
    logger.infof(None, "name %s", "x")
    logger.warnf(None, "plain")
    logger.errorf(None, "percent %s", "y")
    entries = read_entries(log_file)
    assert [e["msg"] for e in entries] == ["count 3 of 5", "name x", "plain", "percent y"]
    assert len({e["level"] for e in entries}) == 4


def test_error_adds_error_field(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    logger.error(None, "failed", ValueError("boom"), step=2)
    entry = read_entries(log_file)[0]
    assert entry["error"] == "boom"
    assert entry["step"] == 2
    assert entry["msg"] == "failed"


def test_error_without_exception_has_no_error_field(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    logger.error(None, "failed", None)
    entry = read_entries(log_file)[0]
    assert "error" not in entry
    assert entry["msg"] == "failed"


def test_fatal_logs_and_exits(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    with pytest.raises(SystemExit) as excinfo:
        logger.fatal(None, "dying", RuntimeError("cause"))
    assert excinfo.value.code == 1
    entry = read_entries(log_file)[0]
    assert entry["level"] == "FATAL"
    assert entry["error"] == "cause"


def test_fatalf_logs_and_exits(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    with pytest.raises(SystemExit) as excinfo:
        logger.fatalf(None, "code %d", 7)
    assert excinfo.value.code == 1
    assert read_entries(log_file)[0]["msg"] == "code 7"


def test_no_trace_id_without_context(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    logger.info(None, "anon")
    logger.info({"trace_id": ""}, "empty")
    entries = read_entries(log_file)
    assert all("trace_id" not in e for e in entries)


def test_with_fields_binds_fields(log_file):
    logger.init(LogConfig(filename=str(log_file)))
    bound = logger.with_fields(service="api")
    bound.info("bound message")
    entry = read_entries(log_file)[0]
    assert entry["service"] == "api"
    assert entry["msg"] == "bound message"


def test_dev_mode_writes_colored_console_and_file(log_file, capsys):
    logger.init(LogConfig(filename=str(log_file), is_dev=True))
    logger.info(None, "hello", user="bob")
    logger.sync()
    out = capsys.readouterr().out
    parts = out.rstrip("\n").split("\t")
    assert parts[1] == "\x1b[34mINFO\x1b[0m"
    assert parts[3] == "hello"
    assert json.loads(parts[-1]) == {"user": "bob"}
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_rotation_keeps_limited_compressed_backups(log_file):
    logger.init(
        LogConfig(filename=str(log_file), max_size=0.001, max_backups=2, compress=True)
    )
    for index in range(40):
        logger.info(None, f"message {index}", padding="x" * 50)
    logger.sync()
    backups = [
        name for name in os.listdir(log_file.parent) if name != log_file.name
    ]
    assert 1 <= len(backups) <= 2
    assert all(name.endswith(".gz") for name in backups)
    assert os.path.getsize(log_file) <= int(0.001 * 1024 * 1024)
    with gzip.open(log_file.parent / backups[0], "rt", encoding="utf-8") as fh:
        first = json.loads(fh.readline())
    assert first["msg"].startswith("message ")
    assert read_entries(log_file)[-1]["msg"] == "message 39"


def test_rotation_without_compression_keeps_plain_backups(log_file):
    logger.init(LogConfig(filename=str(log_file), max_size=0.001, max_backups=3))
    for index in range(30):
        logger.info(None, f"line {index}", padding="y" * 50)
    logger.sync()
    backups = [name for name in os.listdir(log_file.parent) if name != log_file.name]
    assert 1 <= len(backups) <= 3
    assert all(name.startswith("app-") and name.endswith(".log") for name in backups)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", logging.DEBUG),
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        ("warn", logging.WARNING),
        ("Error", logging.ERROR),
        ("bogus", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_level_from_name(name, expected):
    assert logger.level_from_name(name) == expected


def test_relative_path_inside_base_dir():
    base = os.path.join(os.sep, "a", "b")
    path = os.path.join(base, "c", "file.py")
    assert logger.relative_path(path, base) == os.path.join("c", "file.py")


def test_relative_path_falls_back_to_parent_and_file():
    path = os.path.join(os.sep, "x", "y", "z.py")
    assert logger.relative_path(path, "") == os.path.join("y", "z.py")
    other_base = os.path.join(os.sep, "elsewhere")
    assert logger.relative_path(path, other_base) == os.path.join("y", "z.py")


@pytest.mark.parametrize(
    "ctx",
    [None, {}, {"trace_id": ""}, {"trace_id": 5}],
)
def test_extract_trace_id_defaults(ctx):
    assert logger.extract_trace_id(ctx) == DEFAULT_TRACE_ID


def test_extract_trace_id_round_trips_with_context():
    original = {"other": 1}
    ctx = logger.with_context(original, "t-1")
    assert logger.extract_trace_id(ctx) == "t-1"
    assert ctx["other"] == 1
    assert original == {"other": 1}
    assert logger.extract_trace_id(logger.with_context(None, "t-2")) == "t-2"


def test_trace_fields_appends_without_mutating():
    fields = {"a": 1}
    result = logger.trace_fields({"trace_id": "tid"}, fields)
    assert list(result) == ["a", "trace_id"]
    assert result["trace_id"] == "tid"
    assert fields == {"a": 1}
    assert logger.trace_fields(None, fields) == fields


def _record(msg, fields=None):
    record = logging.LogRecord(
        "formkit", logging.WARNING, "/p/q/module.py", 42, msg, None, None, func="handler"
    )
    record.fields = fields or {}
    return record


def test_json_formatter_output():
    text = JsonFormatter().format(_record("hi", {"k": "v"}))
    entry = json.loads(text)
    assert entry["msg"] == "hi"
    assert entry["k"] == "v"
    assert entry["level"] == "WARN"
    assert entry["caller"] == os.path.join("q", "module.py") + ":42 [handler]"


def test_console_formatter_plain_output():
    parts = ConsoleFormatter(color=False).format(_record("hi")).split("\t")
    assert len(parts) == 4
    assert parts[1] == "WARN"
    assert parts[3] == "hi"