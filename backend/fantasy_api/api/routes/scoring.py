"""Scoring Routes — public scoring schemas and their rules."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse
from fantasy_api.schemas.reference import ScoringRuleOut, ScoringSchemaOut
from fantasy_api.services.reference_service import ReferenceService

router = APIRouter(prefix="/api/scoring", tags=["scoring"])


@router.get("/schemas", response_model=ApiResponse[list[ScoringSchemaOut]])
async def list_scoring_schemas(db: AsyncSession = Depends(get_db)):
    schemas = await ReferenceService(db).list_scoring_schemas()
    return ApiResponse(message="Scoring schemas", data=schemas)


@router.get(
    "/schemas/{scoring_schema_id}/rules", response_model=ApiResponse[list[ScoringRuleOut]],
)
async def scoring_rules(scoring_schema_id: int, db: AsyncSession = Depends(get_db)):
    rules = await ReferenceService(db).scoring_rules(scoring_schema_id)
    return ApiResponse(message="Scoring rules", data=rules)
