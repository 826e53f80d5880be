"""Audit Routes — action log queries, activity stats and retention cleanup.

Invariants:
    - my-history is open to every signed-in user; everything else requires ADMIN
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import (
    CurrentUser, get_current_user, get_request_meta, require_admin,
)
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.core.validate_audit import DEFAULT_TOP
from fantasy_api.infrastructure.database import get_db
from fantasy_api.schemas.audit import (
    AuditStats, CleanupRequest, CleanupResult, SystemStats, UserActionLogOut,
)
from fantasy_api.schemas.common import ApiResponse
from fantasy_api.services.audit_service import AuditService

router = APIRouter(prefix="/api/audit", tags=["audit"])


@router.get("/logs", response_model=ApiResponse[list[UserActionLogOut]])
async def list_logs(
    entity_type: str | None = Query(None, max_length=30),
    entity_id: str | None = Query(None, max_length=50),
    actor_user_id: int | None = Query(None),
    action_code: str | None = Query(None, max_length=50),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    top: int = Query(DEFAULT_TOP),
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    logs = await AuditService(db).list_logs(
        entity_type, entity_id, actor_user_id, action_code, start_date, end_date, top,
    )
    return ApiResponse(message=f"{len(logs)} log entries", data=logs)


@router.get("/my-history", response_model=ApiResponse[list[UserActionLogOut]])
async def my_history(
    top: int = Query(DEFAULT_TOP),
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    logs = await AuditService(db).user_history(current.id, top)
    return ApiResponse(message="Your activity", data=logs)


@router.get("/users/{user_id}/history", response_model=ApiResponse[list[UserActionLogOut]])
async def user_history(
    user_id: int,
    top: int = Query(DEFAULT_TOP),
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    logs = await AuditService(db).user_history(user_id, top)
    return ApiResponse(message="User activity", data=logs)


@router.get("/stats", response_model=ApiResponse[AuditStats])
async def audit_stats(
    days: int = Query(30),
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="Audit statistics", data=await AuditService(db).stats(days))


@router.post("/cleanup", response_model=ApiResponse[CleanupResult])
async def cleanup(
    body: CleanupRequest,
    current: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await AuditService(db).cleanup(body.retention_days, current.id, meta)
    return ApiResponse(message=f"{result.deleted} log entries deleted", data=result)


@router.get("/system-stats", response_model=ApiResponse[SystemStats])
async def system_stats(
    _: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(message="System statistics", data=await AuditService(db).system_stats())
