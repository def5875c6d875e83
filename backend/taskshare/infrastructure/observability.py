"""Structured Logging — JSON lines keyed by operation, user and task list.

Invariants:
    - Each line has timestamp (the record's creation time), level, logger, message
    - operation, user_id, task_list_id, error_code and path appear only when set
    - setup_logging is idempotent: calling it again replaces its own handler
      instead of stacking a second one

Design Decisions:
    - stdlib logging with a small JSON formatter, no logging dependency
    - log_fields() is the one place ids are turned into strings for `extra=`
"""

import json
import logging
from datetime import datetime, timezone

LOG_FIELDS = ("operation", "user_id", "task_list_id", "error_code", "path")

_HANDLER_NAME = "taskshare"


def log_fields(**fields) -> dict:
    """`extra=` mapping with None dropped and ids (UUIDs) stringified."""
    return {k: str(v) for k, v in fields.items() if v is not None}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, getattr(record, key))
            for key in LOG_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger (json or plain text)."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo stays off unless explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level.upper() == "DEBUG" else logging.WARNING,
    )
    return handler
