"""Structured logging configuration.

This module provides JSON-formatted logging so that recovered input
problems (malformed payload fields, unparsable dates, unknown documents)
can be filtered by `error_code` in a log aggregation system.

The library itself never installs handlers; applications call
`configure_structured_logging` once at startup.
"""

import json
import logging
from datetime import datetime, timezone

# Extra fields copied from logger calls into the JSON record
_EXTRA_FIELDS = (
    "error_code",
    "field",
    "document_type",
    "confidence",
    "form_type",
    "bucket",
    "trace_id",
    "request_id",
)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Outputs logs as JSON with standard fields plus any extra context
    provided via the 'extra' parameter in logger calls.

    Example:
        >>> logger.warning("Unparsable date", extra={"error_code": "UNPARSABLE_DATE"})
        # Output: {"timestamp": "2026-10-19T17:52:00Z", "level": "WARNING",
        #          "message": "Unparsable date", "error_code": "UNPARSABLE_DATE", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string with log data
        """
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_data = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S") + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


def configure_structured_logging(
    level: str = "INFO",
    json_format: bool = True,
) -> None:
    """Configure root logging for an application embedding the pipeline.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatter (True) or plain text (False)
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()

    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def configure_logging() -> None:
    """Configure logging from `AppSettings` (LOG_LEVEL, LOG_JSON)."""
    from assessment_pipeline.core.settings import get_settings

    settings = get_settings()
    configure_structured_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
