"""Structured Logging — JSON and text formatters that carry league/user context.

Invariants:
    - Every record has timestamp, level, logger and message
    - Domain extras (user_id, league_id, team_id, entity, action_code, error_code)
      appear in both formats when set via `extra=`
    - setup_logging is idempotent: a second call replaces the handler, never stacks it

Design Decisions:
    - Formatters over a third-party logging lib: zero dependencies, full control
    - SQLAlchemy engine chatter pinned to WARNING unless the root level is DEBUG
"""

import logging
import json
from datetime import datetime, timezone

CONTEXT_KEYS = (
    "user_id", "league_id", "team_id", "entity_type", "entity_id",
    "action_code", "error_code", "path",
)

_HANDLER_NAME = "fantasy_api"


def record_context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_KEYS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable line with the domain context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{line} [{pairs}]"


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the application handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    if root_level > logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
