"""User Schemas — profile, header, sessions and profile updates."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fantasy_api.schemas.common import ProfileImageFields


class CommissionedLeague(BaseModel):
    league_id: int
    name: str
    status: int
    role_code: str
    is_primary_commissioner: bool


class UserTeam(BaseModel):
    team_id: int
    team_name: str
    league_id: int
    league_name: str


class UserProfile(ProfileImageFields):
    user_id: int
    email: str
    name: str
    alias: str | None = None
    language_code: str
    system_role_code: str
    account_status: int
    created_at: datetime
    commissioned_leagues: list[CommissionedLeague] = []
    teams: list[UserTeam] = []


class UserHeader(BaseModel):
    user_id: int
    name: str
    alias: str | None = None
    system_role_code: str
    profile_image_url: str | None = None


class SessionInfo(BaseModel):
    session_id: UUID
    created_at: datetime
    last_activity_at: datetime
    expires_at: datetime
    source_ip: str | None = None
    user_agent: str | None = None
    is_current: bool = False


class UpdateProfileRequest(ProfileImageFields):
    """All fields optional; only fields present in the body are updated."""
    name: str | None = Field(None, min_length=1, max_length=50)
    alias: str | None = Field(None, max_length=50)
    language_code: str | None = Field(None, min_length=1, max_length=10)


class UpdateProfileResult(BaseModel):
    changed_fields: list[str]


class ActiveUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    email: str
    name: str
    system_role_code: str
    last_activity_at: datetime | None = None
