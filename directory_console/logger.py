"""
Structured JSON Logging Module.

Every console component receives a ``StructuredLogger``. Records are
rendered as one JSON object per line on stderr (stdout belongs to the CLI
listing) and, unless ``LOG_FILE`` is empty, mirrored to a rotating file.
Logger names live under the ``directory_console`` namespace so a host
application can tune the whole console with a single ``logging`` key.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

ROOT_LOGGER_NAME: str = "directory_console"

_RESERVED_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
    ).__dict__.keys()
) | {"message", "asctime"}


def _json_safe(value: object) -> object:
    """Keep JSON-native values as they are; stringify everything else."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    return str(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``timestamp`` (UTC, ISO-8601), ``level``, ``logger``, ``message``,
    plus ``context`` for fields passed through ``extra=`` and ``exception``
    when a traceback is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {
            key: _json_safe(value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False)


def _qualified(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


class StructuredLogger:
    """Injectable wrapper around a namespaced ``logging.Logger``.

    Handlers are attached once per logger name, so building several
    ``StructuredLogger`` objects for the same component does not duplicate
    output.

    Usage::

        log = StructuredLogger(name="gateway")
        log.info("GET /users -> 200", extra={"count": 12})
    """

    def __init__(
        self,
        name: str = ROOT_LOGGER_NAME,
        level: Optional[int] = None,
        stream: Optional[TextIO] = None,
        log_file: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        # Lazy import: config logs through the stdlib logger while loading.
        from directory_console.config import get_config
        cfg = get_config()

        resolved_level = level if level is not None else cfg.log_level
        self._logger: logging.Logger = logging.getLogger(_qualified(name))
        self._logger.setLevel(resolved_level)
        self._logger.propagate = False

        if self._logger.handlers:
            return

        formatter = JSONFormatter()
        console = logging.StreamHandler(stream or sys.stderr)
        console.setFormatter(formatter)
        self._logger.addHandler(console)

        target = cfg.LOG_FILE if log_file is None else log_file
        if not target:
            return
        try:
            path = Path(target)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=str(path),
                maxBytes=max_bytes if max_bytes is not None else cfg.LOG_MAX_BYTES,
                backupCount=backup_count if backup_count is not None else cfg.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as exc:
            self._logger.warning(
                "Log file '%s' unavailable (%s); logging to stderr only.", target, exc
            )
            return
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.exception(msg, *args, **kwargs)


def get_logger(name: str = ROOT_LOGGER_NAME) -> StructuredLogger:
    """``StructuredLogger`` for *name* under the console namespace."""
    return StructuredLogger(name=name)
