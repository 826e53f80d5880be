"""Reference Service — read-only position formats and scoring schemas.

Invariants:
    - Defaults are resolved by name ("Default"); a missing default is a server misconfiguration
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.domain_types import DEFAULT_POSITION_FORMAT, DEFAULT_SCORING_SCHEMA
from fantasy_api.core.errors import ResourceNotFoundError
from fantasy_api.models import PositionFormat, ScoringSchema
from fantasy_api.schemas.reference import (
    PositionFormatOut, PositionSlotOut, ScoringRuleOut, ScoringSchemaOut,
)


class ReferenceService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_position_formats(self) -> list[PositionFormatOut]:
        result = await self.db.execute(select(PositionFormat).order_by(PositionFormat.id))
        return [PositionFormatOut.model_validate(f) for f in result.scalars().all()]

    async def position_slots(self, position_format_id: int) -> list[PositionSlotOut]:
        fmt = await self.db.get(PositionFormat, position_format_id)
        if fmt is None:
            raise ResourceNotFoundError("PositionFormat", position_format_id)
        return [PositionSlotOut.model_validate(s) for s in fmt.slots]

    async def list_scoring_schemas(self) -> list[ScoringSchemaOut]:
        result = await self.db.execute(
            select(ScoringSchema).order_by(ScoringSchema.name, ScoringSchema.version),
        )
        return [ScoringSchemaOut.model_validate(s) for s in result.scalars().all()]

    async def scoring_rules(self, scoring_schema_id: int) -> list[ScoringRuleOut]:
        schema = await self.db.get(ScoringSchema, scoring_schema_id)
        if schema is None:
            raise ResourceNotFoundError("ScoringSchema", scoring_schema_id)
        return [ScoringRuleOut.model_validate(r) for r in schema.rules]

    async def resolve_position_format(self, position_format_id: int | None) -> PositionFormat:
        if position_format_id is None:
            result = await self.db.execute(
                select(PositionFormat).where(PositionFormat.name == DEFAULT_POSITION_FORMAT),
            )
            fmt = result.scalar_one_or_none()
        else:
            fmt = await self.db.get(PositionFormat, position_format_id)
        if fmt is None:
            raise ResourceNotFoundError("PositionFormat", position_format_id or DEFAULT_POSITION_FORMAT)
        return fmt

    async def resolve_scoring_schema(self, scoring_schema_id: int | None) -> ScoringSchema:
        if scoring_schema_id is None:
            result = await self.db.execute(
                select(ScoringSchema)
                .where(ScoringSchema.name == DEFAULT_SCORING_SCHEMA)
                .order_by(ScoringSchema.version.desc()),
            )
            schema = result.scalars().first()
        else:
            schema = await self.db.get(ScoringSchema, scoring_schema_id)
        if schema is None:
            raise ResourceNotFoundError("ScoringSchema", scoring_schema_id or DEFAULT_SCORING_SCHEMA)
        return schema
