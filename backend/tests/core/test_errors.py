"""Error Hierarchy — status codes and the shared error envelope.

Invariants:
    - to_response() carries success=false, message and error.{code, category, severity}
    - InvalidInputError lists every message under error.details
"""

from datetime import datetime, timezone

from fantasy_api.core.errors import (
    AccountLockedError, AuthenticationError, BusinessRuleError, ConflictError,
    DatabaseError, ErrorCategory, InvalidInputError, PermissionDeniedError,
    ResourceNotFoundError,
)


def test_invalid_input_collects_messages():
    err = InvalidInputError(["First rule.", "Second rule."])
    body = err.to_response()
    assert err.http_status == 400
    assert body["success"] is False
    assert body["message"] == "First rule. Second rule."
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["details"] == ["First rule.", "Second rule."]


def test_single_message_accepted():
    assert InvalidInputError("Only one.").messages == ["Only one."]


def test_status_codes():
    assert BusinessRuleError("x").http_status == 400
    assert AuthenticationError().http_status == 401
    assert PermissionDeniedError().http_status == 403
    assert ResourceNotFoundError("League", 7).http_status == 404
    assert ConflictError("x").http_status == 409
    assert AccountLockedError(None).http_status == 423
    assert DatabaseError("down", "query").http_status == 503


def test_custom_codes_and_categories():
    err = ConflictError("Name taken", "LEAGUE_NAME_TAKEN")
    body = err.to_response()
    assert body["error"]["code"] == "LEAGUE_NAME_TAKEN"
    assert body["error"]["category"] == ErrorCategory.CONFLICT.value


def test_account_locked_message_includes_time():
    until = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    err = AccountLockedError(until)
    assert "2026-01-01T12:00:00+00:00" in err.message
    assert err.code == "ACCOUNT_LOCKED"
