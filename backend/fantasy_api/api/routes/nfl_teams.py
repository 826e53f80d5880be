"""NFL Team Routes — catalogue reads for any signed-in user, writes for admins.

Invariants:
    - Static paths (/active) are declared before /{nfl_team_id}
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import (
    CurrentUser, get_current_user, get_request_meta, require_admin,
)
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse, Page
from fantasy_api.schemas.nfl import NFLTeamCreate, NFLTeamDetails, NFLTeamOut, NFLTeamUpdate
from fantasy_api.services.nfl_team_service import NFLTeamService

router = APIRouter(prefix="/api/nflteam", tags=["nfl-teams"])


@router.post("", response_model=ApiResponse[NFLTeamOut], status_code=status.HTTP_201_CREATED)
async def create_nfl_team(
    body: NFLTeamCreate,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    team = await NFLTeamService(db).create(current.user, body, meta)
    return ApiResponse(message="NFL team created", data=team)


@router.get("", response_model=ApiResponse[Page[NFLTeamOut]])
async def list_nfl_teams(
    page: int = Query(1),
    page_size: int = Query(50),
    search: str | None = Query(None, max_length=100),
    city: str | None = Query(None, max_length=100),
    is_active: bool | None = Query(None),
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    teams = await NFLTeamService(db).list_teams(page, page_size, search, city, is_active)
    return ApiResponse(message="NFL teams", data=teams)


@router.get("/active", response_model=ApiResponse[list[NFLTeamOut]])
async def list_active_nfl_teams(
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="Active NFL teams", data=await NFLTeamService(db).list_active())


@router.get("/{nfl_team_id}", response_model=ApiResponse[NFLTeamDetails])
async def get_nfl_team(
    nfl_team_id: int,
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="NFL team", data=await NFLTeamService(db).details(nfl_team_id))


@router.put("/{nfl_team_id}", response_model=ApiResponse[NFLTeamOut])
async def update_nfl_team(
    nfl_team_id: int,
    body: NFLTeamUpdate,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    team = await NFLTeamService(db).update(current.user, nfl_team_id, body, meta)
    return ApiResponse(message="NFL team updated", data=team)


@router.post("/{nfl_team_id}/deactivate", response_model=ApiResponse[NFLTeamOut])
async def deactivate_nfl_team(
    nfl_team_id: int,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    team = await NFLTeamService(db).set_active(current.user, nfl_team_id, False, meta)
    return ApiResponse(message="NFL team deactivated", data=team)


@router.post("/{nfl_team_id}/reactivate", response_model=ApiResponse[NFLTeamOut])
async def reactivate_nfl_team(
    nfl_team_id: int,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    team = await NFLTeamService(db).set_active(current.user, nfl_team_id, True, meta)
    return ApiResponse(message="NFL team reactivated", data=team)
