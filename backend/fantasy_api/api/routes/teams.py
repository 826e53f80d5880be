"""Team Routes — fantasy team branding and roster management."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import CurrentUser, get_current_user, get_request_meta
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse
from fantasy_api.schemas.team import (
    AddRosterPlayerRequest, DistributionItem, MyTeam, RosterChangeResult, TeamOut,
    UpdateBrandingRequest,
)
from fantasy_api.services.team_service import TeamService

router = APIRouter(prefix="/api/team", tags=["teams"])


@router.put("/{team_id}/branding", response_model=ApiResponse[TeamOut])
async def update_branding(
    team_id: int,
    body: UpdateBrandingRequest,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    team = await TeamService(db).update_branding(current.user, team_id, body, meta)
    return ApiResponse(message="Team branding updated", data=team)


@router.get("/{team_id}/my-team", response_model=ApiResponse[MyTeam])
async def my_team(
    team_id: int,
    position: str | None = Query(None, max_length=20),
    search: str | None = Query(None, max_length=100),
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    team = await TeamService(db).my_team(current.user, team_id, position, search)
    return ApiResponse(message="Team", data=team)


@router.get("/{team_id}/roster/distribution", response_model=ApiResponse[list[DistributionItem]])
async def roster_distribution(
    team_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    items = await TeamService(db).distribution(current.user, team_id)
    return ApiResponse(message="Roster distribution", data=items)


@router.post(
    "/{team_id}/roster", response_model=ApiResponse[RosterChangeResult],
    status_code=status.HTTP_201_CREATED,
)
async def add_roster_player(
    team_id: int,
    body: AddRosterPlayerRequest,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await TeamService(db).add_player(current.user, team_id, body, meta)
    return ApiResponse(message="Player added to roster", data=result)


@router.post("/{team_id}/roster/{roster_id}/remove", response_model=ApiResponse[RosterChangeResult])
async def remove_roster_player(
    team_id: int,
    roster_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await TeamService(db).remove_player(current.user, team_id, roster_id, meta)
    return ApiResponse(message="Player removed from roster", data=result)
