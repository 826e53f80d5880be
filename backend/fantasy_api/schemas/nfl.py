"""NFL Schemas — real-world teams and players (admin-managed catalogue).

Invariants:
    - Update payloads are partial: only fields present in the body are applied
    - Names are stripped; blank names rejected
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from fantasy_api.schemas.common import TeamImageFields, PlayerImageFields, ChangeLogEntry


def _strip_required(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


Name = Annotated[str, AfterValidator(_strip_required)]
OptionalName = Annotated[str | None, AfterValidator(_strip_required)]


# ─── NFL Teams ───────────────────────────────────────────────────


class NFLTeamCreate(TeamImageFields):
    team_name: Name = Field(min_length=1, max_length=100)
    city: Name = Field(min_length=1, max_length=100)


class NFLTeamUpdate(TeamImageFields):
    team_name: OptionalName = Field(None, min_length=1, max_length=100)
    city: OptionalName = Field(None, min_length=1, max_length=100)


class NFLTeamOut(TeamImageFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    team_name: str
    city: str
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class NFLPlayerBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    position: str
    injury_status: str | None = None


class NFLTeamDetails(BaseModel):
    team: NFLTeamOut
    change_history: list[ChangeLogEntry]
    active_players: list[NFLPlayerBrief]


# ─── NFL Players ─────────────────────────────────────────────────


class NFLPlayerCreate(PlayerImageFields):
    first_name: Name = Field(min_length=1, max_length=50)
    last_name: Name = Field(min_length=1, max_length=50)
    position: Name = Field(min_length=1, max_length=20)
    nfl_team_id: int = Field(ge=1)
    injury_status: str | None = Field(None, max_length=50)
    injury_description: str | None = Field(None, max_length=300)


class NFLPlayerUpdate(PlayerImageFields):
    first_name: OptionalName = Field(None, min_length=1, max_length=50)
    last_name: OptionalName = Field(None, min_length=1, max_length=50)
    position: OptionalName = Field(None, min_length=1, max_length=20)
    nfl_team_id: int | None = Field(None, ge=1)
    injury_status: str | None = Field(None, max_length=50)
    injury_description: str | None = Field(None, max_length=300)


class NFLPlayerOut(PlayerImageFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    full_name: str
    position: str
    nfl_team_id: int
    nfl_team_name: str | None = None
    injury_status: str | None = None
    injury_description: str | None = None
    is_active: bool
    created_at: datetime


class FantasyTeamRef(BaseModel):
    team_id: int
    team_name: str
    league_id: int
    league_name: str
    acquisition_type: str


class NFLPlayerDetails(BaseModel):
    player: NFLPlayerOut
    change_history: list[ChangeLogEntry]
    fantasy_teams: list[FantasyTeamRef]
