"""Logging configuration for cert-registry.

Two output modes share one root handler on stdout:

  _ContainerFormatter — one human-readable line per record, for local runs.
  _JsonFormatter      — one JSON object per line (JSON Lines), for log
                        aggregation.  Enabled with LOG_JSON=true.

Request-scoped fields (request_id, caller, ...) are attached to records
by the request context log record factory; the JSON formatter
lifts them to top-level keys so they can be filtered on directly.
"""

from __future__ import annotations

import datetime
import json
import logging
import sys


class _ContainerFormatter(logging.Formatter):
    """One line per record: UTC timestamp, level, logger, request context, message.

    WARNING and above get ``[filename:lineno]`` on the first line; a
    traceback, when present, follows on the next lines.
    """

    _FMT = "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s %(caller)s]  %(message)s"

    def __init__(self) -> None:
        # Records created before the request context factory is installed
        # (worker startup, alembic) still format.
        super().__init__(self._FMT, defaults={"request_id": "-", "caller": "-"})

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.datetime.fromtimestamp(record.created, tz=datetime.timezone.utc)
        return created.isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno < logging.WARNING:
            return text
        head, sep, tail = text.partition("\n")
        return f"{head}  [{record.filename}:{record.lineno}]{sep}{tail}"


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter.

    Context fields set by the request middleware, and the ledger fields
    the services pass through ``extra=``, become top-level keys.
    """

    _CONTEXT_FIELDS = (
        "request_id",
        "method",
        "path",
        "caller",
        "status_code",
        "duration_ms",
        "certificate_id",
        "issuer_cap_id",
        "event_type",
    )

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in self._CONTEXT_FIELDS:
            value = getattr(record, key, None)
            # "-" is the placeholder outside a request
            if value is not None and value != "-":
                log_entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Configure the root logger for container environments.

    Args:
        level_name: Log level string (debug/info/warning/error)
        json_format: If True, emit JSON lines. If False, human-readable.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Keep third-party loggers from flooding at DEBUG
    for name in (
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpcore",
        "httpx",
        "sqlalchemy.engine",
    ):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
