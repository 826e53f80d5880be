"""Season Schemas — create/update payloads and week schedule."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SeasonCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    week_count: int = Field(ge=1, le=22)
    start_date: date
    end_date: date
    mark_as_current: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SeasonUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    week_count: int | None = Field(None, ge=1, le=22)
    start_date: date | None = None
    end_date: date | None = None
    set_as_current: bool | None = None
    confirm_make_current: bool = False


class SeasonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    label: str
    year: int
    week_count: int
    start_date: date
    end_date: date
    is_current: bool
    is_active: bool
    created_at: datetime


class SeasonWeek(BaseModel):
    week_number: int
    start_date: date
    end_date: date
