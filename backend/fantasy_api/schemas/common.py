"""Common Schemas — response envelope, pagination and shared field groups.

Invariants:
    - Every successful endpoint returns ApiResponse: {success, message, data}
    - Paged lists return Page: {items, total_records, current_page, page_size, total_pages}

Design Decisions:
    - Generic models (ApiResponse[T], Page[T]): OpenAPI documents the concrete payload per route
    - Image field groups as mixins: the same url/width/height/bytes quartet appears on
      users, teams, NFL teams and players
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T | None = None


class Page(BaseModel, Generic[T]):
    items: list[T]
    total_records: int
    current_page: int
    page_size: int
    total_pages: int


class MessageResult(BaseModel):
    """Data payload for actions that only confirm success."""
    affected: int = 0


class ChangeLogEntry(BaseModel):
    """Field-level change row shared by every *_change_log table."""
    model_config = ConfigDict(from_attributes=True)

    field_name: str
    old_value: str | None = None
    new_value: str | None = None
    changed_by_user_id: int | None = None
    changed_at: datetime


# ─── Image field groups ──────────────────────────────────────────

class ProfileImageFields(BaseModel):
    profile_image_url: str | None = Field(None, max_length=400)
    profile_image_width: int | None = None
    profile_image_height: int | None = None
    profile_image_bytes: int | None = None


class TeamImageFields(BaseModel):
    team_image_url: str | None = Field(None, max_length=400)
    team_image_width: int | None = None
    team_image_height: int | None = None
    team_image_bytes: int | None = None
    thumbnail_url: str | None = Field(None, max_length=400)
    thumbnail_width: int | None = None
    thumbnail_height: int | None = None
    thumbnail_bytes: int | None = None


class PlayerImageFields(BaseModel):
    photo_url: str | None = Field(None, max_length=400)
    photo_width: int | None = None
    photo_height: int | None = None
    photo_bytes: int | None = None
    thumbnail_url: str | None = Field(None, max_length=400)
    thumbnail_width: int | None = None
    thumbnail_height: int | None = None
    thumbnail_bytes: int | None = None
