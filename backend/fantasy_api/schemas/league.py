"""League Schemas — league lifecycle, membership and configuration payloads.

Invariants:
    - LeagueCreate enforces lengths; slot/playoff/password rules live in core/validate_league
      and core/validate_credentials so every violation is reported together
    - LeagueConfigUpdate is partial: model_fields_set tells the service which fields to touch
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LeagueCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    team_slots: int
    league_password: str = Field(min_length=1, max_length=100)
    initial_team_name: str = Field(min_length=1, max_length=50)
    playoff_teams: int = 4
    allow_decimals: bool = True
    position_format_id: int | None = None
    scoring_schema_id: int | None = None

    @field_validator("name", "initial_team_name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class LeagueCreated(BaseModel):
    league_id: int
    league_public_id: int
    name: str
    team_slots: int
    available_slots: int
    status: int
    playoff_teams: int
    allow_decimals: bool
    team_id: int
    created_at: datetime


class LeagueConfigUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    team_slots: int | None = None
    position_format_id: int | None = None
    scoring_schema_id: int | None = None
    playoff_teams: int | None = None
    allow_decimals: bool | None = None
    trade_deadline_enabled: bool | None = None
    trade_deadline_date: date | None = None
    max_roster_changes: int | None = None
    max_free_agent_adds: int | None = None


class SetStatusRequest(BaseModel):
    new_status: int = Field(ge=0, le=3)
    reason: str | None = Field(None, max_length=300)


class LeagueOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    public_id: int
    season_id: int
    name: str
    description: str | None = None
    team_slots: int
    status: int
    allow_decimals: bool
    playoff_teams: int
    trade_deadline_enabled: bool
    trade_deadline_date: date | None = None
    max_roster_changes: int | None = None
    max_free_agent_adds: int | None = None
    position_format_id: int
    scoring_schema_id: int
    created_by_user_id: int
    created_at: datetime


class LeagueTeam(BaseModel):
    team_id: int
    team_name: str
    owner_user_id: int
    owner_name: str
    thumbnail_url: str | None = None
    created_at: datetime


class LeagueSummary(BaseModel):
    league: LeagueOut
    season_label: str
    teams_count: int
    available_slots: int
    position_format_name: str
    scoring_schema_name: str
    teams: list[LeagueTeam]


class LeagueDirectoryItem(BaseModel):
    league_id: int
    public_id: int
    name: str
    status: int
    team_slots: int
    teams_count: int
    available_slots: int
    season_label: str
    created_at: datetime


class LeagueMemberOut(BaseModel):
    user_id: int
    name: str
    alias: str | None = None
    role_code: str
    is_primary_commissioner: bool
    joined_at: datetime
    left_at: datetime | None = None


class LeagueUserRoles(BaseModel):
    league_id: int
    user_id: int
    roles: list[str]
    is_primary_commissioner: bool
    team_id: int | None = None


class LeaguePasswordInfo(BaseModel):
    league_id: int
    league_name: str
    status: int
    team_slots: int
    teams_count: int
    available_slots: int
    has_password: bool
    message: str


class ValidatePasswordRequest(BaseModel):
    league_password: str = Field(min_length=1, max_length=100)


class ValidatePasswordResult(BaseModel):
    is_valid: bool


class JoinLeagueRequest(BaseModel):
    league_id: int = Field(ge=1)
    league_password: str = Field(min_length=1, max_length=100)
    team_name: str = Field(min_length=1, max_length=50)

    @field_validator("team_name")
    @classmethod
    def strip_team_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("team_name cannot be empty or whitespace")
        return v


class JoinLeagueResult(BaseModel):
    team_id: int
    league_id: int
    team_name: str
    league_name: str
    available_slots: int


class RemoveTeamResult(BaseModel):
    team_id: int
    available_slots: int


class TransferCommissionerRequest(BaseModel):
    new_commissioner_user_id: int = Field(ge=1)


class TransferCommissionerResult(BaseModel):
    league_id: int
    new_commissioner_user_id: int
    new_commissioner_name: str


class ConfigChangeResult(BaseModel):
    league: LeagueOut
    changed_fields: list[str]


class StatusChangeResult(BaseModel):
    league_id: int
    old_status: int
    new_status: int
