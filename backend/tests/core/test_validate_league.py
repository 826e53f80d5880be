"""League Rules — creation limits, config edits and status transitions.

Invariants:
    - PreDraft-only fields are frozen outside PreDraft
    - team_slots never drops below the registered team count
    - Closed is terminal; activation needs every slot filled
    - A league never returns to PreDraft
"""

from datetime import date

from fantasy_api.core.domain_types import LeagueStatus
from fantasy_api.core.validate_league import (
    available_slots, validate_config_change, validate_new_league,
    validate_roster_limit, validate_status_transition,
)


# --- Creation -----------------------------------------------------------------

def test_new_league_valid():
    assert validate_new_league(10, 4) == []


def test_new_league_odd_slots_and_bad_playoffs():
    errors = validate_new_league(5, 5)
    assert len(errors) == 2


def test_playoffs_cannot_exceed_slots():
    assert validate_new_league(4, 6) == ["Playoff teams cannot exceed team slots."]


def test_available_slots_never_negative():
    assert available_slots(4, 1) == 3
    assert available_slots(4, 6) == 0


def test_roster_limit_range():
    assert validate_roster_limit("Max roster changes", None) == []
    assert validate_roster_limit("Max roster changes", 100) == []
    assert validate_roster_limit("Max roster changes", 0)


# --- Config changes -----------------------------------------------------------

def test_pre_draft_allows_any_field():
    errors = validate_config_change(
        LeagueStatus.PRE_DRAFT, {"team_slots": 8, "allow_decimals": False},
        team_count=2, current_team_slots=4, current_playoff_teams=4,
    )
    assert errors == []


def test_active_league_freezes_pre_draft_fields():
    errors = validate_config_change(
        LeagueStatus.ACTIVE, {"team_slots": 8, "name": "Renamed"},
        team_count=4, current_team_slots=4, current_playoff_teams=4,
    )
    assert len(errors) == 1
    assert "team_slots" in errors[0]


def test_active_league_can_edit_name_and_limits():
    errors = validate_config_change(
        LeagueStatus.ACTIVE, {"name": "Renamed", "max_roster_changes": 10},
        team_count=4, current_team_slots=4, current_playoff_teams=4,
    )
    assert errors == []


def test_closed_league_rejects_everything():
    errors = validate_config_change(
        LeagueStatus.CLOSED, {"description": "x"},
        team_count=4, current_team_slots=4, current_playoff_teams=4,
    )
    assert errors == ["A closed league cannot be edited."]


def test_slots_below_team_count():
    errors = validate_config_change(
        LeagueStatus.PRE_DRAFT, {"team_slots": 4},
        team_count=6, current_team_slots=8, current_playoff_teams=4,
    )
    assert any("6 teams already registered" in e for e in errors)


def test_shrinking_slots_below_playoffs():
    errors = validate_config_change(
        LeagueStatus.PRE_DRAFT, {"team_slots": 4},
        team_count=1, current_team_slots=8, current_playoff_teams=6,
    )
    assert errors == ["Playoff teams cannot exceed team slots."]


def test_trade_deadline_requires_date():
    errors = validate_config_change(
        LeagueStatus.PRE_DRAFT, {"trade_deadline_enabled": True},
        team_count=1, current_team_slots=4, current_playoff_teams=4,
    )
    assert errors == ["Trade deadline date is required when the deadline is enabled."]


def test_trade_deadline_within_season():
    errors = validate_config_change(
        LeagueStatus.PRE_DRAFT,
        {"trade_deadline_enabled": True, "trade_deadline_date": date(2030, 1, 1)},
        team_count=1, current_team_slots=4, current_playoff_teams=4,
        season_start=date(2026, 9, 1), season_end=date(2026, 12, 31),
    )
    assert errors == ["Trade deadline must fall within the season dates."]


# --- Status transitions -------------------------------------------------------

def test_activation_requires_full_league():
    error = validate_status_transition(LeagueStatus.PRE_DRAFT, LeagueStatus.ACTIVE, 3, 4)
    assert "(3/4)" in error
    assert validate_status_transition(LeagueStatus.PRE_DRAFT, LeagueStatus.ACTIVE, 4, 4) is None


def test_closed_is_terminal():
    error = validate_status_transition(LeagueStatus.CLOSED, LeagueStatus.ACTIVE, 4, 4)
    assert error == "A closed league cannot change status."


def test_cannot_return_to_pre_draft():
    error = validate_status_transition(LeagueStatus.INACTIVE, LeagueStatus.PRE_DRAFT, 4, 4)
    assert error == "A league cannot return to PreDraft."


def test_same_status_rejected():
    assert validate_status_transition(1, 1, 4, 4) == "The league already has that status."


def test_unknown_status_rejected():
    assert validate_status_transition(0, 9, 4, 4) == "Invalid league status."


def test_pre_draft_can_close_directly():
    assert validate_status_transition(LeagueStatus.PRE_DRAFT, LeagueStatus.CLOSED, 1, 4) is None
