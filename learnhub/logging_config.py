"""
Logging setup for the LearnHub client core.

Records carry the id of the navigation that produced them, taken from a
context variable the navigation controller sets. The same id is sent to the
authority as X-Request-ID so both sides of a call can be correlated.

Development gets one readable line per record; production gets one JSON
object per line.

    from learnhub.logging_config import get_logger
    logger = get_logger(__name__)
    logger.warning("Enrollment check failed", extra={"course_id": course_id})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

navigation_id_var: ContextVar[Optional[str]] = ContextVar("navigation_id", default=None)

# LogRecord attributes that are not caller-supplied extras
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "navigation_id",
}

_HANDLER_NAME = "learnhub"


def get_navigation_id() -> Optional[str]:
    return navigation_id_var.get()


class NavigationIdFilter(logging.Filter):
    """Stamp every record with the current navigation id ('-' outside one)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.navigation_id = get_navigation_id() or "-"  # type: ignore[attr-defined]
        return True


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for key, value in vars(record).items():
        if key in _RECORD_ATTRS or value is None:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        fields[key] = value
    return fields


class JsonFormatter(logging.Formatter):
    """One JSON object per record, extras merged in at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        nav_id = getattr(record, "navigation_id", "-")
        if nav_id != "-":
            entry["navigation_id"] = nav_id
        entry.update(_extra_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Install the client's stderr handler on the root logger.

    Safe to call repeatedly: only the handler installed by a previous call is
    replaced, handlers owned by the host application are left alone.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
        environment: 'production' switches to JSON output
        debug: Forces DEBUG regardless of log_level
    """
    level = logging.DEBUG if debug else logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(NavigationIdFilter())
    if environment == "production":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-7s %(name)s [nav=%(navigation_id)s] %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
