"""Reference Schemas — position formats/slots and scoring schemas/rules (read-only)."""

from pydantic import BaseModel, ConfigDict


class PositionSlotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    position_code: str
    slot_count: int
    points_allowed: bool


class PositionFormatOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class ScoringRuleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    metric_code: str
    points_per_unit: float | None = None
    unit: str | None = None
    unit_value: int | None = None
    flat_points: float | None = None


class ScoringSchemaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    version: int
    is_template: bool
    description: str | None = None
