"""User Routes — the caller's own profile, header and sessions; admin active-user list."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import (
    CurrentUser, get_current_user, get_request_meta, require_admin,
)
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse
from fantasy_api.schemas.user import (
    ActiveUser, SessionInfo, UpdateProfileRequest, UpdateProfileResult,
    UserHeader, UserProfile,
)
from fantasy_api.services.user_service import UserService

router = APIRouter(prefix="/api/user", tags=["users"])


@router.get("/profile", response_model=ApiResponse[UserProfile])
async def get_profile(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await UserService(db).get_profile(current.user)
    return ApiResponse(message="Profile loaded", data=profile)


@router.get("/header", response_model=ApiResponse[UserHeader])
async def get_header(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="Header loaded", data=UserService(db).get_header(current.user))


@router.get("/sessions", response_model=ApiResponse[list[SessionInfo]])
async def list_sessions(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    sessions = await UserService(db).list_sessions(current.user, current.session_id)
    return ApiResponse(message="Active sessions", data=sessions)


@router.put("/profile", response_model=ApiResponse[UpdateProfileResult])
async def update_profile(
    body: UpdateProfileRequest,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await UserService(db).update_profile(current.user, body, meta)
    message = "Profile updated" if result.changed_fields else "No changes"
    return ApiResponse(message=message, data=result)


@router.get("/active", response_model=ApiResponse[list[ActiveUser]])
async def list_active_users(
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    users = await UserService(db).list_active_users()
    return ApiResponse(message=f"{len(users)} active user(s)", data=users)
