"""JSON logs for LifeDocs.

One JSON object per line on stdout, via python-json-logger. Besides the message and
level, each line carries the command's ``correlation_id`` and the ingestion
``stage`` it was emitted from, plus any document fields the caller passed through
``extra`` (``doc_id``, ``owner_id``, ``file_name``)::

    {"timestamp": 1718000000.1, "level": "INFO", "name": "lifedocs.core...",
     "message": "Created document", "correlation_id": "9f1c...", "stage": "persist",
     "doc_id": 7, "owner_id": "0b6e..."}

Context fields are left out of the line when they are unset.
"""

import logging
import sys
from typing import Any
from uuid import UUID

from pythonjsonlogger.json import JsonFormatter

from lifedocs.common.config import get_config
from lifedocs.common.tracing import get_correlation_id, get_pipeline_stage

_CONTEXT_FIELDS = ("correlation_id", "stage")


class DocumentContextFilter(logging.Filter):
    """Copy the current correlation id and pipeline stage onto each record.

    An explicit ``extra={"stage": ...}`` wins over the ambient stage.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        if getattr(record, "stage", None) is None:
            record.stage = get_pipeline_stage()
        return True


class DocumentJsonFormatter(JsonFormatter):
    """JSON formatter that drops unset context fields and renders owner ids as text."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = record.created
        log_record["level"] = record.levelname

        for field in _CONTEXT_FIELDS:
            if not log_record.get(field):
                log_record.pop(field, None)

        if isinstance(log_record.get("owner_id"), UUID):
            log_record["owner_id"] = str(log_record["owner_id"])


def setup_logging(level: str | None = None) -> None:
    """Send JSON logs to stdout, replacing any handlers already on the root logger.

    Args:
        level: Log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to LOG_LEVEL from config.
    """
    log_level = (level or get_config().log_level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(DocumentJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    handler.addFilter(DocumentContextFilter())

    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["DocumentContextFilter", "DocumentJsonFormatter", "get_logger", "setup_logging"]
