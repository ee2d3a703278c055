"""Structured logging setup: JSON-lines or text on stderr, with structlog routed through stdlib."""

from __future__ import annotations

import json
import logging
import math
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import IO, Final

import structlog

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_DEFAULT_LOGGER_NAME: Final[str] = "cheevo_lint"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_LOG_RECORD_FIELDS: Final[frozenset[str]] = frozenset(
    vars(logging.makeLogRecord({}))
) | {"message", "asctime", "taskName"}

_ACTIVE_HANDLE_LOCK = threading.Lock()
_ACTIVE_HANDLE: LoggingHandle | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for the process-wide log sink."""

    level: int | str = "WARNING"
    json: bool = False
    logger_name: str = _DEFAULT_LOGGER_NAME
    stream: IO[str] | None = None

    @classmethod
    def from_mapping(cls, section: Mapping[str, object]) -> LoggingConfig:
        """Build from the ``[logging]`` config section."""

        raw_level = section.get("level", "WARNING")
        level: int | str = raw_level if isinstance(raw_level, (int, str)) else "WARNING"
        return cls(level=level, json=bool(section.get("json", False)))


class _JsonLineFormatter(logging.Formatter):
    """Formatter that emits canonical JSON objects per log line."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = extras
        if record.exc_info is not None:
            event["exception"] = self.formatException(record.exc_info)
        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class _TextLineFormatter(logging.Formatter):
    """Single-line ``LEVEL logger: message key=value ...`` output."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [f"{record.levelname} {record.name}: {record.getMessage()}"]
        for key, value in sorted(_extract_extra_fields(record).items()):
            rendered = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
            parts.append(f"{key}={rendered}")
        line = " ".join(parts)
        if record.exc_info is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class LoggingHandle:
    """Runtime handle for an active logging setup."""

    def __init__(self, *, logger: logging.Logger, handler: logging.Handler) -> None:
        self.logger = logger
        self._handler = handler
        self._is_shutdown = False

    @property
    def is_shutdown(self) -> bool:
        return self._is_shutdown

    def shutdown(self) -> None:
        if self._is_shutdown:
            return
        self._handler.flush()
        self.logger.removeHandler(self._handler)
        self._handler.close()
        self._is_shutdown = True


def setup_logging(config: LoggingConfig | None = None) -> LoggingHandle:
    """Attach one stream handler to the package logger and route structlog through it."""

    global _ACTIVE_HANDLE
    cfg = config if config is not None else LoggingConfig()
    level = _parse_log_level(cfg.level)

    with _ACTIVE_HANDLE_LOCK:
        if _ACTIVE_HANDLE is not None:
            _ACTIVE_HANDLE.shutdown()
            _ACTIVE_HANDLE = None

        handler = logging.StreamHandler(cfg.stream if cfg.stream is not None else sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(_JsonLineFormatter() if cfg.json else _TextLineFormatter())

        logger = logging.getLogger(cfg.logger_name)
        logger.setLevel(level)
        logger.propagate = False
        for existing in list(logger.handlers):
            logger.removeHandler(existing)
            existing.close()
        logger.addHandler(handler)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.processors.format_exc_info,
                structlog.stdlib.render_to_log_kwargs,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

        _ACTIVE_HANDLE = LoggingHandle(logger=logger, handler=handler)
        return _ACTIVE_HANDLE


def shutdown_logging() -> None:
    """Detach the active handler and restore structlog defaults."""

    global _ACTIVE_HANDLE
    with _ACTIVE_HANDLE_LOCK:
        if _ACTIVE_HANDLE is None:
            return
        _ACTIVE_HANDLE.shutdown()
        _ACTIVE_HANDLE = None
        structlog.reset_defaults()


def get_active_logger() -> logging.Logger | None:
    with _ACTIVE_HANDLE_LOCK:
        return _ACTIVE_HANDLE.logger if _ACTIVE_HANDLE is not None else None


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    timestamp = datetime.fromtimestamp(epoch_seconds, tz=UTC)
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, JSONValue]:
    fields: dict[str, JSONValue] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_"):
            continue
        fields[key] = _normalize_json_value(value)
    return fields


def _normalize_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, Enum):
        return _normalize_json_value(value.value)
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Mapping):
        return {str(key): _normalize_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_json_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_normalize_json_value(item) for item in value), key=json.dumps)
    return repr(value)


__all__ = [
    "LoggingConfig",
    "LoggingHandle",
    "get_active_logger",
    "setup_logging",
    "shutdown_logging",
]
