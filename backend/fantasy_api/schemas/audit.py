"""Audit Schemas — action log rows, activity stats and retention cleanup."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserActionLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_user_id: int | None = None
    entity_type: str
    entity_id: str
    action_code: str
    action_at: datetime
    source_ip: str | None = None
    user_agent: str | None = None
    details: str | None = None


class ActionCount(BaseModel):
    action_code: str
    count: int


class AuditStats(BaseModel):
    days: int
    since: datetime
    total_actions: int
    distinct_actors: int
    by_action: list[ActionCount]


class CleanupRequest(BaseModel):
    retention_days: int = Field(30, ge=1, le=180)


class CleanupResult(BaseModel):
    retention_days: int
    deleted: int


class SystemStats(BaseModel):
    total_users: int
    active_sessions: int
    total_leagues: int
    active_teams: int
    nfl_teams: int
    nfl_players: int
