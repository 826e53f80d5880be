"""Season Rules — date window validation and week schedule generation.

Invariants:
    - start_date < end_date
    - end_date no later than three years after today
    - The date range covers at least week_count * 7 days
    - Weeks are consecutive 7-day blocks starting on start_date; the last one is
      clipped to end_date
    - PURE: `today` is always passed in by the shell

Design Decisions:
    - Weeks are derived, not stored: the schedule is a function of start_date and week_count
"""

from datetime import date, timedelta

SEASON_NAME_MAX_LENGTH: int = 100
MIN_WEEKS: int = 1
MAX_WEEKS: int = 22
MAX_YEARS_AHEAD: int = 3


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # Feb 29 → Feb 28
        return day.replace(year=day.year + years, day=28)


def validate_season_window(
    name: str, week_count: int, start_date: date, end_date: date, today: date,
) -> list[str]:
    errors = []
    if not name or not name.strip():
        errors.append("Season name is required.")
    elif len(name) > SEASON_NAME_MAX_LENGTH:
        errors.append(f"Season name must be at most {SEASON_NAME_MAX_LENGTH} characters.")
    if not MIN_WEEKS <= week_count <= MAX_WEEKS:
        errors.append(f"Week count must be between {MIN_WEEKS} and {MAX_WEEKS}.")
    if start_date >= end_date:
        errors.append("Start date must be before end date.")
    if end_date > _add_years(today, MAX_YEARS_AHEAD):
        errors.append(f"Season cannot end more than {MAX_YEARS_AHEAD} years in the future.")
    if start_date < end_date and (end_date - start_date).days < week_count * 7:
        errors.append(
            f"The date range must cover at least {week_count * 7} days for {week_count} weeks.",
        )
    return errors


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start <= b_end and b_start <= a_end


def build_week_schedule(start_date: date, end_date: date, week_count: int) -> list[dict]:
    """Return [{week_number, start_date, end_date}] for every week of the season."""
    weeks = []
    for number in range(1, week_count + 1):
        week_start = start_date + timedelta(days=7 * (number - 1))
        if week_start > end_date:
            break
        week_end = min(week_start + timedelta(days=6), end_date)
        weeks.append({
            "week_number": number,
            "start_date": week_start,
            "end_date": week_end,
        })
    return weeks


def season_label(start_date: date) -> str:
    """Short label shown in league listings, e.g. 'NFL 2025'."""
    return f"NFL {start_date.year}"
