"""JSON line logging for the API process.

Modules log an event name as the message and pass structured context
through ``extra=``; every such field lands in the emitted JSON object.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from linkreach.core.config import Config, get_config

_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Third-party loggers that are chatty below WARNING outside development.
_QUIET_LOGGERS = ("sqlalchemy.engine", "urllib3", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` context as one JSON object."""

    def __init__(self, app_name: str | None = None) -> None:
        super().__init__()
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.app_name:
            payload["app"] = self.app_name
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: Config | None = None) -> None:
    """Install JSON handlers on the root logger unless some are already present."""
    config = config or get_config()
    root = logging.getLogger()
    if root.handlers:
        return

    formatter = JsonFormatter(app_name=config.APP_NAME)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(config.LOG_LEVEL)

    if config.is_production:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
