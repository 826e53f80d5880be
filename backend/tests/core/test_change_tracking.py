"""Change Tracking — only differing fields produce change-log rows."""

from datetime import date

from fantasy_api.core.change_tracking import FieldChange, diff_fields, render_value


def test_unchanged_fields_are_skipped():
    assert diff_fields({"name": "A", "city": "B"}, {"name": "A"}) == []


def test_changed_fields_rendered_as_strings():
    diffs = diff_fields({"team_slots": 4, "allow_decimals": True},
                        {"team_slots": 8, "allow_decimals": False})
    assert diffs == [
        FieldChange("team_slots", "4", "8"),
        FieldChange("allow_decimals", "true", "false"),
    ]


def test_none_stays_none():
    diffs = diff_fields({"alias": None}, {"alias": "Ace"})
    assert diffs == [FieldChange("alias", None, "Ace")]


def test_render_dates():
    assert render_value(date(2026, 11, 1)) == "2026-11-01"
