"""Team Schemas — fantasy team branding, roster and acquisition distribution."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fantasy_api.core.domain_types import AcquisitionType
from fantasy_api.schemas.common import TeamImageFields


class UpdateBrandingRequest(TeamImageFields):
    team_name: str | None = Field(None, min_length=1, max_length=100)

    @field_validator("team_name")
    @classmethod
    def strip_team_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("team_name cannot be empty or whitespace")
        return v


class TeamOut(TeamImageFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    league_id: int
    owner_user_id: int
    team_name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class RosterEntry(BaseModel):
    roster_id: int
    nfl_player_id: int
    player_name: str
    position: str
    nfl_team_name: str
    injury_status: str | None = None
    acquisition_type: str
    acquisition_date: datetime


class MyTeam(BaseModel):
    team: TeamOut
    league_name: str
    owner_name: str
    total_players: int
    acquisition_counts: dict[str, int]
    roster: list[RosterEntry]


class DistributionItem(BaseModel):
    acquisition_type: str
    player_count: int
    percentage: float


class AddRosterPlayerRequest(BaseModel):
    player_id: int = Field(ge=1)
    acquisition_type: AcquisitionType


class RosterChangeResult(BaseModel):
    roster_id: int
    team_id: int
    nfl_player_id: int
    is_active: bool
