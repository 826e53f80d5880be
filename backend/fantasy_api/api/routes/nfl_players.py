"""NFL Player Routes — catalogue reads for any signed-in user, writes for admins.

Invariants:
    - Static paths (/active, /available, /by-nfl-team) are declared before /{player_id}
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import (
    CurrentUser, get_current_user, get_request_meta, require_admin,
)
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse, Page
from fantasy_api.schemas.nfl import (
    NFLPlayerCreate, NFLPlayerDetails, NFLPlayerOut, NFLPlayerUpdate,
)
from fantasy_api.services.nfl_player_service import NFLPlayerService

router = APIRouter(prefix="/api/nflplayer", tags=["nfl-players"])


@router.post("", response_model=ApiResponse[NFLPlayerOut], status_code=status.HTTP_201_CREATED)
async def create_player(
    body: NFLPlayerCreate,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    player = await NFLPlayerService(db).create(current.user, body, meta)
    return ApiResponse(message="Player created", data=player)


@router.get("", response_model=ApiResponse[Page[NFLPlayerOut]])
async def list_players(
    page: int = Query(1),
    page_size: int = Query(50),
    search: str | None = Query(None, max_length=100),
    position: str | None = Query(None, max_length=20),
    nfl_team_id: int | None = Query(None),
    is_active: bool | None = Query(None),
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    players = await NFLPlayerService(db).list_players(
        page, page_size, search, position, nfl_team_id, is_active,
    )
    return ApiResponse(message="Players", data=players)


@router.get("/active", response_model=ApiResponse[list[NFLPlayerOut]])
async def list_active_players(
    position: str | None = Query(None, max_length=20),
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    players = await NFLPlayerService(db).list_active(position)
    return ApiResponse(message="Active players", data=players)


@router.get("/available", response_model=ApiResponse[Page[NFLPlayerOut]])
async def list_available_players(
    league_id: int = Query(..., ge=1),
    position: str | None = Query(None, max_length=20),
    search: str | None = Query(None, max_length=100),
    page: int = Query(1),
    page_size: int = Query(50),
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    players = await NFLPlayerService(db).available(league_id, page, page_size, position, search)
    return ApiResponse(message="Available players", data=players)


@router.get("/by-nfl-team/{nfl_team_id}", response_model=ApiResponse[list[NFLPlayerOut]])
async def list_players_by_nfl_team(
    nfl_team_id: int,
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    players = await NFLPlayerService(db).by_nfl_team(nfl_team_id)
    return ApiResponse(message="NFL team players", data=players)


@router.get("/{player_id}", response_model=ApiResponse[NFLPlayerDetails])
async def get_player(
    player_id: int,
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="Player", data=await NFLPlayerService(db).details(player_id))


@router.put("/{player_id}", response_model=ApiResponse[NFLPlayerOut])
async def update_player(
    player_id: int,
    body: NFLPlayerUpdate,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    player = await NFLPlayerService(db).update(current.user, player_id, body, meta)
    return ApiResponse(message="Player updated", data=player)


@router.post("/{player_id}/deactivate", response_model=ApiResponse[NFLPlayerOut])
async def deactivate_player(
    player_id: int,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    player = await NFLPlayerService(db).set_active(current.user, player_id, False, meta)
    return ApiResponse(message="Player deactivated", data=player)


@router.post("/{player_id}/reactivate", response_model=ApiResponse[NFLPlayerOut])
async def reactivate_player(
    player_id: int,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    player = await NFLPlayerService(db).set_active(current.user, player_id, True, meta)
    return ApiResponse(message="Player reactivated", data=player)
