"""Logging setup for stackquery.

Log calls attach their details through ``extra``: ``table`` names the table
being scanned and ``context`` is a dict of further key/value pairs. Records
go to stderr so that stdout stays free for rows.
"""

import logging
import sys
from typing import Any, Optional

from json_log_formatter import JSONFormatter

_TAGGED_ATTRIBUTES = ("connection", "table")


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    connection_name: Optional[str] = None,
) -> None:
    """Install a single stderr handler on the ``stackquery`` logger.

    Calling it again replaces the previous handler.

    Args:
        level: Level name, case-insensitive; unknown names fall back to INFO
        json_format: Emit one JSON object per record instead of text
        connection_name: Stamped on every record as ``connection``
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(QueryJSONFormatter() if json_format else StructuredFormatter())
    if connection_name:
        handler.addFilter(_ConnectionFilter(connection_name))

    logger = logging.getLogger("stackquery")
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)


class _ConnectionFilter(logging.Filter):
    def __init__(self, connection_name: str):
        super().__init__()
        self.connection_name = connection_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "connection"):
            record.connection = self.connection_name
        return True


class QueryJSONFormatter(JSONFormatter):
    """JSON formatter that also records the level and logger name."""

    def json_record(
        self, message: str, extra: dict[str, Any], record: logging.LogRecord
    ) -> dict[str, Any]:
        payload = super().json_record(message, extra, record)
        payload["level"] = record.levelname
        payload["logger"] = record.name
        return payload


class StructuredFormatter(logging.Formatter):
    """Text formatter: ``[LEVEL] connection=.. table=.. key=value message``."""

    def format(self, record: logging.LogRecord) -> str:
        tags = [f"[{record.levelname}]"]
        tags.extend(
            f"{name}={getattr(record, name)}"
            for name in _TAGGED_ATTRIBUTES
            if hasattr(record, name)
        )
        tags.extend(f"{key}={value}" for key, value in getattr(record, "context", {}).items())

        line = " ".join([*tags, record.getMessage()])
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
