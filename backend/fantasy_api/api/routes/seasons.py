"""Season Routes — public current-season lookup and admin season management.

Invariants:
    - GET /current is public; every other route requires ADMIN
    - Destructive routes (deactivate, delete) require ?confirm=true
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import CurrentUser, get_request_meta, require_admin
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse
from fantasy_api.schemas.season import SeasonCreate, SeasonOut, SeasonUpdate, SeasonWeek
from fantasy_api.services.season_service import SeasonService

router = APIRouter(prefix="/api/seasons", tags=["seasons"])


@router.get("/current", response_model=ApiResponse[SeasonOut])
async def get_current_season(db: AsyncSession = Depends(get_db)):
    return ApiResponse(message="Current season", data=await SeasonService(db).get_current())


@router.post(
    "", response_model=ApiResponse[SeasonOut], status_code=status.HTTP_201_CREATED,
)
async def create_season(
    body: SeasonCreate,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    season = await SeasonService(db).create(current.user, body, meta)
    return ApiResponse(message="Season created", data=season)


@router.get("/{season_id}", response_model=ApiResponse[SeasonOut])
async def get_season(
    season_id: int,
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="Season", data=await SeasonService(db).get(season_id))


@router.get("/{season_id}/weeks", response_model=ApiResponse[list[SeasonWeek]])
async def get_season_weeks(
    season_id: int,
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="Season weeks", data=await SeasonService(db).weeks(season_id))


@router.put("/{season_id}", response_model=ApiResponse[SeasonOut])
async def update_season(
    season_id: int,
    body: SeasonUpdate,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    season = await SeasonService(db).update(current.user, season_id, body, meta)
    return ApiResponse(message="Season updated", data=season)


@router.post("/{season_id}/deactivate", response_model=ApiResponse[SeasonOut])
async def deactivate_season(
    season_id: int,
    confirm: bool = Query(False),
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    season = await SeasonService(db).deactivate(current.user, season_id, confirm, meta)
    return ApiResponse(message="Season deactivated", data=season)


@router.delete("/{season_id}", response_model=ApiResponse[None])
async def delete_season(
    season_id: int,
    confirm: bool = Query(False),
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    await SeasonService(db).delete(current.user, season_id, confirm, meta)
    return ApiResponse(message="Season deleted")
