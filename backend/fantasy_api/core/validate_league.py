"""League Rules — creation limits, config editing windows, and status transitions.

Invariants:
    - team_slots ∈ {4, 6, ..., 20}; playoff_teams ∈ {4, 6}
    - Roster limits (max_roster_changes, max_free_agent_adds) are 1–100 or null
    - PreDraft-only fields are frozen once the league leaves PreDraft
    - team_slots never drops below the number of teams already registered
    - Closed is terminal; activating requires every slot filled
    - All functions PURE: return message lists / None, shell raises

Design Decisions:
    - Config changes validated as one dict: a single request may touch many fields,
      and all violations are reported together
"""

from datetime import date

from fantasy_api.core.domain_types import (
    LeagueStatus,
    VALID_TEAM_SLOTS,
    VALID_PLAYOFF_TEAMS,
    ROSTER_LIMIT_RANGE,
    PRE_DRAFT_ONLY_FIELDS,
)


def validate_team_slots(team_slots: int) -> list[str]:
    if team_slots not in VALID_TEAM_SLOTS:
        return ["Team slots must be an even number between 4 and 20."]
    return []


def validate_playoff_teams(playoff_teams: int) -> list[str]:
    if playoff_teams not in VALID_PLAYOFF_TEAMS:
        return ["Playoff teams must be 4 or 6."]
    return []


def validate_roster_limit(label: str, value: int | None) -> list[str]:
    low, high = ROSTER_LIMIT_RANGE
    if value is not None and not low <= value <= high:
        return [f"{label} must be between {low} and {high}, or empty."]
    return []


def validate_new_league(team_slots: int, playoff_teams: int) -> list[str]:
    errors = validate_team_slots(team_slots) + validate_playoff_teams(playoff_teams)
    if not errors and playoff_teams > team_slots:
        errors.append("Playoff teams cannot exceed team slots.")
    return errors


def available_slots(team_slots: int, team_count: int) -> int:
    return max(team_slots - team_count, 0)


def validate_config_change(
    status: int,
    changes: dict,
    team_count: int,
    current_team_slots: int,
    current_playoff_teams: int,
    current_trade_deadline_enabled: bool = False,
    current_trade_deadline_date: date | None = None,
    season_start: date | None = None,
    season_end: date | None = None,
) -> list[str]:
    """Validate a partial league config update against the league's current state.

    `changes` holds only the fields the caller wants to modify.
    """
    if status == LeagueStatus.CLOSED:
        return ["A closed league cannot be edited."]

    errors = []
    frozen = sorted(PRE_DRAFT_ONLY_FIELDS & changes.keys())
    if frozen and status != LeagueStatus.PRE_DRAFT:
        errors.append(
            f"These fields can only be changed while the league is in PreDraft: "
            f"{', '.join(frozen)}.",
        )

    team_slots = changes.get("team_slots", current_team_slots)
    playoff_teams = changes.get("playoff_teams", current_playoff_teams)
    if "team_slots" in changes:
        errors.extend(validate_team_slots(team_slots))
        if team_slots < team_count:
            errors.append(
                f"Team slots cannot be lower than the {team_count} teams already registered.",
            )
    if "playoff_teams" in changes:
        errors.extend(validate_playoff_teams(playoff_teams))
    if ("team_slots" in changes or "playoff_teams" in changes) and playoff_teams > team_slots:
        errors.append("Playoff teams cannot exceed team slots.")

    errors.extend(validate_roster_limit("Max roster changes", changes.get("max_roster_changes")))
    errors.extend(validate_roster_limit("Max free agent adds", changes.get("max_free_agent_adds")))

    if "trade_deadline_enabled" in changes or "trade_deadline_date" in changes:
        enabled = changes.get("trade_deadline_enabled", current_trade_deadline_enabled)
        deadline = changes.get("trade_deadline_date", current_trade_deadline_date)
        if enabled and deadline is None:
            errors.append("Trade deadline date is required when the deadline is enabled.")
        elif enabled and season_start and season_end and not season_start <= deadline <= season_end:
            errors.append("Trade deadline must fall within the season dates.")
    return errors


def validate_status_transition(
    current: int, new: int, team_count: int, team_slots: int,
) -> str | None:
    """Return an error message, or None when the transition is allowed."""
    if new not in {s.value for s in LeagueStatus}:
        return "Invalid league status."
    if current == new:
        return "The league already has that status."
    if current == LeagueStatus.CLOSED:
        return "A closed league cannot change status."
    if new == LeagueStatus.PRE_DRAFT and current != LeagueStatus.PRE_DRAFT:
        return "A league cannot return to PreDraft."
    if new == LeagueStatus.ACTIVE and current == LeagueStatus.PRE_DRAFT and team_count < team_slots:
        return (
            f"All team slots must be filled before activating "
            f"({team_count}/{team_slots})."
        )
    return None
