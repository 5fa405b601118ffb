"""Structured JSON logging for the RadioFM MCP server.

Every record is written to stderr as one JSON object so that stdout stays
free for whatever runs the server. Components log protocol and upstream
details through `log_with_context`, which attaches them as record
attributes picked up by `JSONFormatter`.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional


# Record attributes copied into the JSON output when a component sets them
RECORD_FIELDS = ("context", "execution_time_ms", "error_code")

# Third-party loggers that would otherwise log every upstream request
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """
    Renders log records as single-line JSON objects.

    The base object carries `timestamp`, `level`, `component` (the logger
    name, e.g. "ProtocolBridge") and `message`, plus `exception` when the
    record has exception info. Each name in `fields` is added when the record
    has that attribute, so a bridge failure shows up as
    `{"message": "Request failed", "error_code": -32000, "context": {...}}`.
    """

    def __init__(self, fields: Iterable[str] = RECORD_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in self.fields:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Station names and queries are often non-ASCII
        return json.dumps(log_data, default=str, ensure_ascii=False)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Route all logging to stderr through the JSON formatter.

    Args:
        log_level: Level name from LOG_LEVEL (ERROR, WARNING, INFO, DEBUG);
            unknown names fall back to INFO
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a server component, named after it (e.g. "RadioFMClient")."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: Optional[Dict[str, Any]] = None,
    execution_time_ms: Optional[float] = None,
    error_code: Optional[int] = None
) -> None:
    """
    Log a message with the structured fields `JSONFormatter` renders.

    Args:
        logger: Component logger
        level: Log level (logging.INFO, logging.ERROR, etc.)
        message: Log message
        context: Request details such as method, id, query or session id
        execution_time_ms: Duration of the upstream call or request handling
        error_code: JSON-RPC error code of a failed request
    """
    extra: Dict[str, Any] = {}

    if context:
        extra["context"] = context

    if execution_time_ms is not None:
        extra["execution_time_ms"] = execution_time_ms

    if error_code is not None:
        extra["error_code"] = error_code

    logger.log(level, message, extra=extra)
