"""Season Rules — date window validation and the derived week schedule."""

from datetime import date

from fantasy_api.core.validate_season import (
    build_week_schedule, ranges_overlap, season_label, validate_season_window,
)

TODAY = date(2026, 6, 1)


def test_valid_window():
    assert validate_season_window("2026", 17, date(2026, 9, 1), date(2027, 1, 5), TODAY) == []


def test_start_after_end():
    errors = validate_season_window("2026", 1, date(2026, 9, 10), date(2026, 9, 1), TODAY)
    assert errors == ["Start date must be before end date."]


def test_range_shorter_than_weeks():
    errors = validate_season_window("2026", 4, date(2026, 9, 1), date(2026, 9, 20), TODAY)
    assert errors == ["The date range must cover at least 28 days for 4 weeks."]


def test_one_week_needs_seven_full_days():
    six_days = validate_season_window("S", 1, date(2026, 9, 1), date(2026, 9, 7), TODAY)
    assert six_days == ["The date range must cover at least 7 days for 1 weeks."]
    assert validate_season_window("S", 1, date(2026, 9, 1), date(2026, 9, 8), TODAY) == []


def test_end_more_than_three_years_ahead():
    errors = validate_season_window("Far", 1, date(2029, 5, 1), date(2029, 6, 2), TODAY)
    assert errors == ["Season cannot end more than 3 years in the future."]


def test_blank_name_and_bad_week_count():
    errors = validate_season_window("  ", 0, date(2026, 9, 1), date(2026, 9, 30), TODAY)
    assert "Season name is required." in errors
    assert any("Week count" in e for e in errors)


def test_ranges_overlap_is_inclusive():
    assert ranges_overlap(date(2026, 1, 1), date(2026, 1, 31), date(2026, 1, 31), date(2026, 2, 5))
    assert not ranges_overlap(date(2026, 1, 1), date(2026, 1, 30), date(2026, 1, 31), date(2026, 2, 5))


def test_week_schedule_consecutive_blocks():
    weeks = build_week_schedule(date(2026, 9, 1), date(2026, 9, 20), 3)
    assert [w["week_number"] for w in weeks] == [1, 2, 3]
    assert weeks[0]["end_date"] == date(2026, 9, 7)
    assert weeks[1]["start_date"] == date(2026, 9, 8)
    # last week clipped to end_date
    assert weeks[2]["end_date"] == date(2026, 9, 20)


def test_season_label():
    assert season_label(date(2026, 9, 1)) == "NFL 2026"
