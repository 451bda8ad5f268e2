import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

SERVICE = os.getenv("SERVICE_NAME", "shutdown-on-lan")
ENV = os.getenv("ENV", "dev")

# Built-in LogRecord attributes. Anything else on a record was passed as
# `extra=` (group, computer, reason, ...) and goes into the JSON line.
_RECORD_ATTRS = frozenset((
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process", "taskName",
    "message",
))


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line. Controller and agent share it so fleet events
    can be grepped by group/computer on both sides.
    """

    def format(self, record: logging.LogRecord) -> str:
        line: Dict[str, Any] = {
            "ts": _timestamp(),
            "level": record.levelname,
            "service": SERVICE,
            "env": ENV,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_ATTRS or key in line:
                continue
            line[key] = value

        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)

        # default=str: SweepReport tuples and enums must not break a log call
        return json.dumps(line, ensure_ascii=False, default=str)


def configure_logging(level: Optional[str] = None) -> None:
    lvl = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace whatever uvicorn or a previous call installed.
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(lvl)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    # One access line per pong per machine is noise; keep it at WARNING.
    logging.getLogger("uvicorn.access").setLevel(os.getenv("UVICORN_ACCESS_LEVEL", "WARNING"))
    logging.getLogger("uvicorn.error").setLevel(lvl)
