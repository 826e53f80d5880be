"""Domain Types — enums and constants that replace bare primitives across the codebase.

Invariants:
    - League status is an int code 0–3 (PreDraft, Active, Inactive, Closed)
    - Role codes and acquisition types are str Enums — no raw string matching
    - Closed is terminal: no status transition leaves it

Design Decisions:
    - IntEnum for league/account status: the wire format stays a small integer
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


# ─── Request Metadata ────────────────────────────────────────────

@dataclass(frozen=True)
class RequestMeta:
    """Caller network details recorded in audit and login tables."""
    source_ip: str | None = None
    user_agent: str | None = None


# ─── Status Codes ────────────────────────────────────────────────

class AccountStatus(IntEnum):
    """User account states — maps to `user_account.account_status`."""
    DISABLED = 0
    ACTIVE = 1
    LOCKED = 2


class LeagueStatus(IntEnum):
    """League lifecycle — maps to `league.status`."""
    PRE_DRAFT = 0
    ACTIVE = 1
    INACTIVE = 2
    CLOSED = 3


# ─── Role Codes ──────────────────────────────────────────────────

class SystemRoleCode(str, Enum):
    """Application-wide roles."""
    ADMIN = "ADMIN"
    USER = "USER"


class LeagueRoleCode(str, Enum):
    """Per-league membership roles."""
    COMMISSIONER = "COMMISSIONER"
    CO_COMMISSIONER = "CO_COMMISSIONER"
    MANAGER = "MANAGER"
    SPECTATOR = "SPECTATOR"


COMMISSIONER_ROLES = frozenset({
    LeagueRoleCode.COMMISSIONER.value, LeagueRoleCode.CO_COMMISSIONER.value,
})


class AcquisitionType(str, Enum):
    """How a player landed on a fantasy roster."""
    DRAFT = "Draft"
    TRADE = "Trade"
    FREE_AGENT = "FreeAgent"
    WAIVER = "Waiver"


# ─── Audit Vocabulary ────────────────────────────────────────────

class EntityType(str, Enum):
    """Entity kinds recorded in the user action log."""
    USER = "USER"
    SESSION = "SESSION"
    SEASON = "SEASON"
    NFL_TEAM = "NFL_TEAM"
    NFL_PLAYER = "NFL_PLAYER"
    LEAGUE = "LEAGUE"
    TEAM = "TEAM"
    SYSTEM = "SYSTEM"


# ─── League Limits ───────────────────────────────────────────────

VALID_TEAM_SLOTS = frozenset(range(4, 21, 2))
VALID_PLAYOFF_TEAMS = frozenset({4, 6})
ROSTER_LIMIT_RANGE = (1, 100)

DEFAULT_POSITION_FORMAT = "Default"
DEFAULT_SCORING_SCHEMA = "Default"

# Fields editable only while the league is in PreDraft
PRE_DRAFT_ONLY_FIELDS = frozenset({
    "team_slots", "position_format_id", "scoring_schema_id",
    "playoff_teams", "allow_decimals",
    "trade_deadline_enabled", "trade_deadline_date",
})
