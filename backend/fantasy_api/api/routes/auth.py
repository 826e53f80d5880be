"""Auth Routes — registration, login/logout and password reset.

Invariants:
    - request-reset answers identically whether or not the email exists
    - logout only touches the caller's current session; logout-all touches all of them
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.api.dependencies import CurrentUser, get_current_user, get_request_meta
from fantasy_api.core.domain_types import RequestMeta
from fantasy_api.infrastructure.database import get_db
from fantasy_api.infrastructure.email_sender import EmailSender, get_email_sender
from fantasy_api.schemas.auth import (
    LoginRequest, LoginResult, RegisterRequest, RegisterResult,
    RequestResetRequest, ResetWithTokenRequest,
)
from fantasy_api.schemas.common import ApiResponse, MessageResult
from fantasy_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register", response_model=ApiResponse[RegisterResult],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await AuthService(db).register(body, meta)
    return ApiResponse(message="User registered successfully", data=result)


@router.post("/login", response_model=ApiResponse[LoginResult])
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    result = await AuthService(db).login(body.email, body.password, meta)
    return ApiResponse(message="Login successful", data=result)


@router.post("/logout", response_model=ApiResponse[MessageResult])
async def logout(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    await AuthService(db).logout(current.user, current.session_id, meta)
    return ApiResponse(message="Logged out", data=MessageResult(affected=1))


@router.post("/logout-all", response_model=ApiResponse[MessageResult])
async def logout_all(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    count = await AuthService(db).logout_all(current.user, meta)
    return ApiResponse(message="All sessions closed", data=MessageResult(affected=count))


@router.post("/request-reset", response_model=ApiResponse[None])
async def request_reset(
    body: RequestResetRequest,
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
    sender: EmailSender = Depends(get_email_sender),
):
    message = await AuthService(db).request_password_reset(body.email, meta, sender)
    return ApiResponse(message=message)


@router.post("/reset-with-token", response_model=ApiResponse[None])
async def reset_with_token(
    body: ResetWithTokenRequest,
    db: AsyncSession = Depends(get_db),
    meta: RequestMeta = Depends(get_request_meta),
):
    await AuthService(db).reset_with_token(
        body.token, body.new_password, body.confirm_password, meta,
    )
    return ApiResponse(message="Password has been reset. Please log in again.")
