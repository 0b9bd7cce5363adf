import json
import logging
from datetime import datetime, timezone
from typing import Optional

from inventory_api.config import Settings, get_settings

# Request attributes attached by the logging middleware through ``extra``.
REQUEST_FIELDS = ("method", "path", "status_code", "duration_ms", "client")


class JsonFormatter(logging.Formatter):
    def __init__(self, service: str, environment: str):
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "environment": self.environment,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request = {field: getattr(record, field) for field in REQUEST_FIELDS if hasattr(record, field)}
        if request:
            payload["request"] = request
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Route every logger through one stream handler on the root logger."""
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter(settings.APP_NAME, settings.ENVIRONMENT))
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)


__all__ = ["JsonFormatter", "REQUEST_FIELDS", "setup_logging"]
