"""Structured logging with trace-id propagation and size-based file rotation."""

from __future__ import annotations

import gzip
import json
import logging
import os
import shutil
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Mapping

TRACE_ID_KEY = "trace_id"
DEFAULT_TRACE_ID = "unknown"

_LOGGER_NAME = "formkit"
_DEFAULT_MAX_SIZE_MB = 100
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_BACKUP_TIME_FORMAT = "%Y-%m-%dT%H-%M-%S"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}
_LEVEL_COLORS = {
    logging.DEBUG: 35,
    logging.INFO: 34,
    logging.WARNING: 33,
    logging.ERROR: 31,
    logging.CRITICAL: 31,
}

_logger = logging.getLogger(_LOGGER_NAME)
_logger.propagate = False
_logger.addHandler(logging.NullHandler())
_base_dir = ""


@dataclass
class LogConfig:
    """Settings for the log output and its rotation."""

    filename: str
    level: str = "info"
    max_size: float = 0  # megabytes; 0 means the default of 100
    max_backups: int = 0  # 0 keeps every backup
    max_age: int = 0  # days; 0 keeps backups regardless of age
    compress: bool = False
    is_dev: bool = False


def level_from_name(name: str) -> int:
    """Map a level name to a logging level, falling back to INFO."""
    return _LEVELS.get(name.lower(), logging.INFO)


def relative_path(path: str, base_dir: str) -> str:
    """Shorten a source path for display, relative to base_dir when possible."""
    if base_dir and base_dir in path:
        try:
            return os.path.relpath(path, base_dir)
        except ValueError:
            pass
    directory, file = os.path.split(path)
    return os.path.join(os.path.basename(directory), file)


def _level_name(levelno: int, fallback: str) -> str:
    return _LEVEL_NAMES.get(levelno, fallback)


class _EntryFormatter(logging.Formatter):
    def __init__(self, base_dir: str = "") -> None:
        super().__init__()
        self.base_dir = base_dir

    @staticmethod
    def _timestamp(record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created)
        return f"{moment.strftime(_TIME_FORMAT)}.{int(record.msecs):03d}"

    def _caller(self, record: logging.LogRecord) -> str:
        path = relative_path(record.pathname, self.base_dir)
        return f"{path}:{record.lineno} [{record.funcName}]"

    @staticmethod
    def _fields(record: logging.LogRecord) -> dict[str, Any]:
        return dict(getattr(record, "fields", None) or {})


class JsonFormatter(_EntryFormatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": _level_name(record.levelno, record.levelname),
            "ts": self._timestamp(record),
            "caller": self._caller(record),
            "msg": record.getMessage(),
        }
        entry.update(self._fields(record))
        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(_EntryFormatter):
    """Render a record as tab-separated, human-readable text."""

    def __init__(self, base_dir: str = "", color: bool = False) -> None:
        super().__init__(base_dir)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        level = _level_name(record.levelno, record.levelname)
        if self.color:
            code = _LEVEL_COLORS.get(record.levelno, 0)
            level = f"\x1b[{code}m{level}\x1b[0m"
        parts = [self._timestamp(record), level, self._caller(record), record.getMessage()]
        fields = self._fields(record)
        if fields:
            parts.append(json.dumps(fields, ensure_ascii=False, default=str))
        return "\t".join(parts)


def _gzip_file(path: str) -> None:
    with open(path, "rb") as src, gzip.open(path + ".gz", "wb") as dst:
        shutil.copyfileobj(src, dst)
    os.remove(path)


class _RollingFileHandler(logging.FileHandler):
    """File handler that moves the log aside once it grows past a size limit."""

    def __init__(
        self,
        filename: str,
        max_size_mb: float,
        max_backups: int,
        max_age_days: int,
        compress: bool,
    ) -> None:
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)
        size = max_size_mb if max_size_mb and max_size_mb > 0 else _DEFAULT_MAX_SIZE_MB
        self.max_bytes = int(size * 1024 * 1024)
        self.max_backups = max_backups
        self.max_age_days = max_age_days
        self.compress = compress

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self._should_rotate(record):
                self._rotate()
        except Exception:
            self.handleError(record)
            return
        super().emit(record)

    def _should_rotate(self, record: logging.LogRecord) -> bool:
        if self.stream is not None:
            self.stream.flush()
        data = (self.format(record) + self.terminator).encode("utf-8")
        try:
            current = os.path.getsize(self.baseFilename)
        except OSError:
            return False
        return current > 0 and current + len(data) > self.max_bytes

    def _split_name(self) -> tuple[str, str]:
        return os.path.splitext(self.baseFilename)

    def _backup_path(self, now: datetime) -> str:
        base, ext = self._split_name()
        while True:
            stamp = f"{now.strftime(_BACKUP_TIME_FORMAT)}.{now.microsecond // 1000:03d}"
            path = f"{base}-{stamp}{ext}"
            if not os.path.exists(path) and not os.path.exists(path + ".gz"):
                return path
            now += timedelta(milliseconds=1)

    def _rotate(self) -> None:
        if self.stream is not None:
            self.stream.close()
            self.stream = None
        if os.path.exists(self.baseFilename):
            backup = self._backup_path(datetime.now(timezone.utc))
            os.replace(self.baseFilename, backup)
            if self.compress:
                _gzip_file(backup)
        self._prune()

    def _backups(self) -> list[tuple[datetime, str]]:
        base, ext = self._split_name()
        directory = os.path.dirname(base) or "."
        prefix = os.path.basename(base) + "-"
        found = []
        for name in os.listdir(directory):
            if not name.startswith(prefix):
                continue
            stamp = name[len(prefix):]
            if stamp.endswith(".gz"):
                stamp = stamp[:-3]
            if ext:
                if not stamp.endswith(ext):
                    continue
                stamp = stamp[: -len(ext)]
            try:
                moment = datetime.strptime(stamp, _BACKUP_TIME_FORMAT + ".%f")
            except ValueError:
                continue
            found.append((moment.replace(tzinfo=timezone.utc), os.path.join(directory, name)))
        found.sort(key=lambda item: item[0], reverse=True)
        return found

    def _prune(self) -> None:
        backups = self._backups()
        doomed: list[str] = []
        if self.max_backups > 0:
            doomed.extend(path for _, path in backups[self.max_backups:])
            backups = backups[: self.max_backups]
        if self.max_age_days > 0:
            cutoff = datetime.now(timezone.utc) - timedelta(days=self.max_age_days)
            doomed.extend(path for moment, path in backups if moment < cutoff)
        for path in doomed:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass


def _default_base_dir() -> str:
    parents = Path(__file__).resolve().parents
    return str(parents[2]) if len(parents) > 2 else ""


def init(config: LogConfig) -> None:
    """Configure the package logger from config, replacing earlier outputs."""
    global _base_dir
    _base_dir = _default_base_dir()

    log_dir = os.path.dirname(config.filename) or "."
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError as exc:
        raise OSError(f"cannot create log directory {log_dir!r}: {exc}") from exc

    level = level_from_name(config.level)
    file_handler = _RollingFileHandler(
        config.filename,
        config.max_size,
        config.max_backups,
        config.max_age,
        config.compress,
    )
    handlers: list[logging.Handler] = [file_handler]
    if config.is_dev:
        file_handler.setFormatter(ConsoleFormatter(_base_dir, color=True))
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(ConsoleFormatter(_base_dir, color=True))
        handlers.append(console)
    else:
        file_handler.setFormatter(JsonFormatter(_base_dir))

    for handler in list(_logger.handlers):
        _logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setLevel(level)
        _logger.addHandler(handler)
    _logger.setLevel(level)


def extract_trace_id(ctx: Mapping[str, Any] | None) -> str:
    """Return the trace id held by ctx, or DEFAULT_TRACE_ID."""
    if ctx is None:
        return DEFAULT_TRACE_ID
    value = ctx.get(TRACE_ID_KEY)
    if isinstance(value, str) and value:
        return value
    return DEFAULT_TRACE_ID


def trace_fields(ctx: Mapping[str, Any] | None, fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of fields with the trace id from ctx appended, if any."""
    result = dict(fields)
    if ctx is None:
        return result
    value = ctx.get(TRACE_ID_KEY)
    if isinstance(value, str) and value:
        result[TRACE_ID_KEY] = value
    return result


def with_context(ctx: Mapping[str, Any] | None, trace_id: str) -> dict[str, Any]:
    """Return a new context carrying trace_id; ctx itself is left unchanged."""
    return {**(ctx or {}), TRACE_ID_KEY: trace_id}


class _FieldsAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["fields"] = {**self.extra, **(extra.get("fields") or {})}
        kwargs["extra"] = extra
        return msg, kwargs


def with_fields(**kwargs: Any) -> logging.LoggerAdapter:
    """Return a logger that adds the given fields to every entry."""
    return _FieldsAdapter(_logger, dict(kwargs))


def _log(level: int, ctx: Mapping[str, Any] | None, msg: str, fields: Mapping[str, Any]) -> None:
    _logger.log(level, msg, extra={"fields": trace_fields(ctx, fields)}, stacklevel=3)


def _sprintf(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


def _with_error(fields: dict[str, Any], err: BaseException | None) -> dict[str, Any]:
    if err is not None:
        fields["error"] = str(err)
    return fields


def debug(ctx: Mapping[str, Any] | None, msg: str, **kwargs: Any) -> None:
    _log(logging.DEBUG, ctx, msg, kwargs)


def info(ctx: Mapping[str, Any] | None, msg: str, **kwargs: Any) -> None:
    _log(logging.INFO, ctx, msg, kwargs)


def warn(ctx: Mapping[str, Any] | None, msg: str, **kwargs: Any) -> None:
    _log(logging.WARNING, ctx, msg, kwargs)


def error(ctx: Mapping[str, Any] | None, msg: str, err: BaseException | None, **kwargs: Any) -> None:
    _log(logging.ERROR, ctx, msg, _with_error(kwargs, err))


def fatal(ctx: Mapping[str, Any] | None, msg: str, err: BaseException | None, **kwargs: Any) -> None:
    """Log at the fatal level, then exit with status 1."""
    _log(logging.CRITICAL, ctx, msg, _with_error(kwargs, err))
    sync()
    raise SystemExit(1)


def debugf(ctx: Mapping[str, Any] | None, fmt: str, *args: Any) -> None:
    _log(logging.DEBUG, ctx, "", {"msg": _sprintf(fmt, args)})


def infof(ctx: Mapping[str, Any] | None, fmt: str, *args: Any) -> None:
    _log(logging.INFO, ctx, "", {"msg": _sprintf(fmt, args)})


def warnf(ctx: Mapping[str, Any] | None, fmt: str, *args: Any) -> None:
    _log(logging.WARNING, ctx, "", {"msg": _sprintf(fmt, args)})


def errorf(ctx: Mapping[str, Any] | None, fmt: str, *args: Any) -> None:
    _log(logging.ERROR, ctx, "", {"msg": _sprintf(fmt, args)})


def fatalf(ctx: Mapping[str, Any] | None, fmt: str, *args: Any) -> None:
    """Log a formatted message at the fatal level, then exit with status 1."""
    _log(logging.CRITICAL, ctx, "", {"msg": _sprintf(fmt, args)})
    sync()
    raise SystemExit(1)


def sync() -> None:
    """Flush every output of the package logger."""
    for handler in _logger.handlers:
        handler.flush()