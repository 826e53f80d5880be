"""Reference Routes — public position formats and their roster slots."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse
from fantasy_api.schemas.reference import PositionFormatOut, PositionSlotOut
from fantasy_api.services.reference_service import ReferenceService

router = APIRouter(prefix="/api/reference", tags=["reference"])


@router.get("/position-formats", response_model=ApiResponse[list[PositionFormatOut]])
async def list_position_formats(db: AsyncSession = Depends(get_db)):
    formats = await ReferenceService(db).list_position_formats()
    return ApiResponse(message="Position formats", data=formats)


@router.get(
    "/position-formats/{position_format_id}/slots",
    response_model=ApiResponse[list[PositionSlotOut]],
)
async def position_slots(position_format_id: int, db: AsyncSession = Depends(get_db)):
    slots = await ReferenceService(db).position_slots(position_format_id)
    return ApiResponse(message="Position slots", data=slots)
