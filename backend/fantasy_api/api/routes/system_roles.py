"""System Role Routes — admin-only role catalogue and user role management."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import CurrentUser, get_request_meta, require_admin
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.common import ApiResponse, Page
from fantasy_api.schemas.system_role import (
    ChangeRoleRequest, ChangeRoleResult, RoleChangeEntry, SystemRoleOut, UserWithRole,
)
from fantasy_api.services.system_role_service import SystemRoleService

router = APIRouter(prefix="/api/system-roles", tags=["system-roles"])


@router.get("", response_model=ApiResponse[list[SystemRoleOut]])
async def list_roles(
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="System roles", data=await SystemRoleService(db).list_roles())


@router.get("/users", response_model=ApiResponse[Page[UserWithRole]])
async def list_users(
    role_code: str | None = Query(None, max_length=20),
    search: str | None = Query(None, max_length=100),
    page: int = Query(1),
    page_size: int = Query(50),
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    users = await SystemRoleService(db).list_users(role_code, search, page, page_size)
    return ApiResponse(message="Users", data=users)


@router.put("/users/{user_id}", response_model=ApiResponse[ChangeRoleResult])
async def change_user_role(
    user_id: int,
    body: ChangeRoleRequest,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await SystemRoleService(db).change_user_role(
        current.user, user_id, body.new_role_code, body.reason, meta,
    )
    return ApiResponse(message="Role updated", data=result)


@router.get("/users/{user_id}/changes", response_model=ApiResponse[list[RoleChangeEntry]])
async def role_changes(
    user_id: int,
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    changes = await SystemRoleService(db).role_changes(user_id)
    return ApiResponse(message="Role change history", data=changes)
