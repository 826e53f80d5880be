"""League Routes — creation, configuration, status, membership and commissioner roles.

Invariants:
    - Every route requires an authenticated user; role checks live in LeagueService
    - Static paths (/directory, /search, /join) are declared before /{league_id}
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import CurrentUser, get_current_user, get_request_meta
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse, Page
from fantasy_api.schemas.league import (
    ConfigChangeResult, JoinLeagueRequest, JoinLeagueResult, LeagueConfigUpdate,
    LeagueCreate, LeagueCreated, LeagueDirectoryItem, LeagueMemberOut, LeaguePasswordInfo,
    LeagueSummary, LeagueTeam, LeagueUserRoles, RemoveTeamResult, SetStatusRequest,
    StatusChangeResult, TransferCommissionerRequest, TransferCommissionerResult,
    ValidatePasswordRequest, ValidatePasswordResult,
)
from fantasy_api.services.league_service import LeagueService

router = APIRouter(prefix="/api/league", tags=["leagues"])


@router.post("", response_model=ApiResponse[LeagueCreated], status_code=status.HTTP_201_CREATED)
async def create_league(
    body: LeagueCreate,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    league = await LeagueService(db).create(current.user, body, meta)
    return ApiResponse(message="League created", data=league)


@router.get("/directory", response_model=ApiResponse[list[LeagueDirectoryItem]])
async def league_directory(
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="League directory", data=await LeagueService(db).directory())


@router.get("/search", response_model=ApiResponse[Page[LeagueDirectoryItem]])
async def search_leagues(
    name: str | None = Query(None, max_length=100),
    status_filter: int | None = Query(None, alias="status", ge=0, le=3),
    only_available: bool = Query(False),
    page: int = Query(1),
    page_size: int = Query(20),
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    leagues = await LeagueService(db).search(name, status_filter, only_available, page, page_size)
    return ApiResponse(message="Leagues", data=leagues)


@router.post("/join", response_model=ApiResponse[JoinLeagueResult])
async def join_league(
    body: JoinLeagueRequest,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await LeagueService(db).join(current.user, body, meta)
    return ApiResponse(message="Joined league", data=result)


@router.put("/{league_id}/config", response_model=ApiResponse[ConfigChangeResult])
async def edit_league_config(
    league_id: int,
    body: LeagueConfigUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await LeagueService(db).edit_config(current.user, league_id, body, meta)
    message = "League configuration updated" if result.changed_fields else "No changes"
    return ApiResponse(message=message, data=result)


@router.put("/{league_id}/status", response_model=ApiResponse[StatusChangeResult])
async def set_league_status(
    league_id: int,
    body: SetStatusRequest,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await LeagueService(db).set_status(current.user, league_id, body, meta)
    return ApiResponse(message="League status updated", data=result)


@router.get("/{league_id}/summary", response_model=ApiResponse[LeagueSummary])
async def league_summary(
    league_id: int,
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="League summary", data=await LeagueService(db).summary(league_id))


@router.get("/{league_id}/members", response_model=ApiResponse[list[LeagueMemberOut]])
async def league_members(
    league_id: int,
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="League members", data=await LeagueService(db).members(league_id))


@router.get("/{league_id}/teams", response_model=ApiResponse[list[LeagueTeam]])
async def league_teams(
    league_id: int,
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="League teams", data=await LeagueService(db).teams(league_id))


@router.get("/{league_id}/roles", response_model=ApiResponse[LeagueUserRoles])
async def league_user_roles(
    league_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    roles = await LeagueService(db).user_roles(current.user, league_id)
    return ApiResponse(message="League roles", data=roles)


@router.get("/{league_id}/users/{user_id}/roles", response_model=ApiResponse[LeagueUserRoles])
async def league_member_roles(
    league_id: int,
    user_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    roles = await LeagueService(db).member_roles(current.user, league_id, user_id)
    return ApiResponse(message="League roles", data=roles)


@router.get("/{league_id}/password-info", response_model=ApiResponse[LeaguePasswordInfo])
async def league_password_info(
    league_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    info = await LeagueService(db).password_info(current.user, league_id)
    return ApiResponse(message="League password info", data=info)


@router.post("/{league_id}/validate-password", response_model=ApiResponse[ValidatePasswordResult])
async def validate_league_password(
    league_id: int,
    body: ValidatePasswordRequest,
    _: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await LeagueService(db).validate_password(league_id, body.league_password)
    message = "Password is valid" if result.is_valid else "Password is invalid"
    return ApiResponse(message=message, data=result)


@router.delete("/{league_id}/teams/{team_id}", response_model=ApiResponse[RemoveTeamResult])
async def remove_team(
    league_id: int,
    team_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await LeagueService(db).remove_team(current.user, league_id, team_id, meta)
    return ApiResponse(message="Team removed from league", data=result)


@router.post("/{league_id}/leave", response_model=ApiResponse[RemoveTeamResult | None])
async def leave_league(
    league_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await LeagueService(db).leave(current.user, league_id, meta)
    return ApiResponse(message="You left the league", data=result)


@router.post(
    "/{league_id}/co-commissioners/{user_id}", response_model=ApiResponse[LeagueMemberOut],
)
async def add_co_commissioner(
    league_id: int,
    user_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    member = await LeagueService(db).add_co_commissioner(current.user, league_id, user_id, meta)
    return ApiResponse(message="Co-commissioner added", data=member)


@router.delete(
    "/{league_id}/co-commissioners/{user_id}", response_model=ApiResponse[LeagueMemberOut],
)
async def remove_co_commissioner(
    league_id: int,
    user_id: int,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    member = await LeagueService(db).remove_co_commissioner(current.user, league_id, user_id, meta)
    return ApiResponse(message="Co-commissioner removed", data=member)


@router.post(
    "/{league_id}/transfer-commissioner",
    response_model=ApiResponse[TransferCommissionerResult],
)
async def transfer_commissioner(
    league_id: int,
    body: TransferCommissionerRequest,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await LeagueService(db).transfer_commissioner(
        current.user, league_id, body.new_commissioner_user_id, meta,
    )
    return ApiResponse(message="Commissioner role transferred", data=result)
