"""Infrastructure helpers — engine options, integrity mapping and log formatting.

Invariants:
    - SQLite engines get no pool sizing; PostgreSQL engines do
    - Unique and foreign-key violations map to distinct conflict codes
    - Domain context set through `extra=` reaches both log formats
"""

import json
import logging

from sqlalchemy.exc import IntegrityError

from fantasy_api.infrastructure.database import conflict_from_integrity, engine_options
from fantasy_api.infrastructure.observability import (
    ContextTextFormatter, JSONFormatter, setup_logging,
)


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("fantasy_api.test", logging.INFO, __file__, 1, "League created", None, None)
    record.__dict__.update(extra)
    return record


def test_sqlite_engine_has_no_pool_sizing():
    assert engine_options("sqlite+aiosqlite:///:memory:", 20, 10) == {}


def test_postgres_engine_is_pooled():
    options = engine_options("postgresql+asyncpg://u:p@db/fantasy", 5, 2)
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 2
    assert options["pool_pre_ping"] is True


def test_unique_violation_is_duplicate_value():
    err = conflict_from_integrity(_integrity("UNIQUE constraint failed: nfl_team.team_name"))
    assert err.http_status == 409
    assert err.code == "DUPLICATE_VALUE"


def test_postgres_duplicate_key_is_duplicate_value():
    err = conflict_from_integrity(_integrity('duplicate key value violates unique constraint "uq_league"'))
    assert err.code == "DUPLICATE_VALUE"


def test_foreign_key_violation_is_reference_conflict():
    err = conflict_from_integrity(_integrity("FOREIGN KEY constraint failed"))
    assert err.code == "REFERENCE_CONFLICT"


def test_other_violation_is_generic_conflict():
    err = conflict_from_integrity(_integrity("NOT NULL constraint failed: team.team_name"))
    assert err.code == "INTEGRITY_CONFLICT"


def test_json_formatter_includes_context():
    line = JSONFormatter().format(_record(user_id=7, league_id=3, action_code="LEAGUE_CREATE"))
    payload = json.loads(line)
    assert payload["message"] == "League created"
    assert payload["user_id"] == 7
    assert payload["league_id"] == 3
    assert payload["action_code"] == "LEAGUE_CREATE"
    assert "team_id" not in payload


def test_text_formatter_appends_context():
    line = ContextTextFormatter().format(_record(user_id=7, error_code="LEAGUE_FULL"))
    assert line.endswith("League created [user_id=7 error_code=LEAGUE_FULL]")
    assert ContextTextFormatter().format(_record()).endswith("League created")


def test_setup_logging_does_not_stack_handlers():
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        setup_logging("INFO", "text")
        setup_logging("INFO", "json")
        ours = [h for h in root.handlers if h.get_name() == "fantasy_api"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
