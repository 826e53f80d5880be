"""Auth Service — registration, login with lockout, sliding sessions, password reset.

Invariants:
    - Every login call records a LoginAttempt, including failures (committed before raising)
    - max_failed_logins consecutive failures lock the account for lockout_minutes
    - An expired lock is cleared on the next login attempt
    - Sessions slide: authenticate() pushes expires_at to now + session_ttl_hours
    - request_password_reset answers identically whether or not the email exists
    - A successful reset invalidates every session of the user and unlocks the account

Design Decisions:
    - Bearer token = UserSession primary key (UUID): one indexed lookup per request
    - Reset tokens persisted as SHA-256 digests; the raw token only travels by email
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.config import Settings, get_settings
from fantasy_api.core.domain_types import (
    AccountStatus, EntityType, RequestMeta, SystemRoleCode,
)
from fantasy_api.core.errors import (
    AccountLockedError, AuthenticationError, ConflictError,
    InvalidInputError, PermissionDeniedError,
)
from fantasy_api.core.time_utils import as_utc, is_expired
from fantasy_api.core.validate_credentials import (
    normalize_email, validate_email_format, validate_password_pair,
)
from fantasy_api.core.validate_images import validate_image
from fantasy_api.infrastructure.email_sender import EmailSender
from fantasy_api.infrastructure.security import (
    digest_token, hash_password, new_reset_token, verify_password,
)
from fantasy_api.models import (
    LoginAttempt, PasswordResetRequest, UserAccount, UserSession,
)
from fantasy_api.schemas.auth import LoginResult, RegisterRequest, RegisterResult
from fantasy_api.services.audit_service import record_action

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If the email is registered, a password reset link has been sent."
)


class AuthService:
    """Account credentials and session lifecycle."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    async def _user_by_email(self, email: str) -> UserAccount | None:
        result = await self.db.execute(
            select(UserAccount).where(UserAccount.email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    # ─── Registration ────────────────────────────────────────────

    async def register(self, payload: RegisterRequest, meta: RequestMeta) -> RegisterResult:
        errors = validate_email_format(payload.email)
        errors += validate_password_pair(payload.password, payload.password_confirm)
        errors += validate_image(
            "Profile image", payload.profile_image_url, payload.profile_image_width,
            payload.profile_image_height, payload.profile_image_bytes,
        )
        if errors:
            raise InvalidInputError(errors)

        if await self._user_by_email(payload.email) is not None:
            raise ConflictError("Email is already registered", "EMAIL_TAKEN")

        user = UserAccount(
            email=normalize_email(payload.email),
            name=payload.name,
            alias=payload.alias,
            password_hash=hash_password(payload.password),
            language_code=payload.language_code,
            system_role_code=SystemRoleCode.USER.value,
            account_status=AccountStatus.ACTIVE,
            profile_image_url=payload.profile_image_url,
            profile_image_width=payload.profile_image_width,
            profile_image_height=payload.profile_image_height,
            profile_image_bytes=payload.profile_image_bytes,
        )
        self.db.add(user)
        await self.db.flush()
        record_action(self.db, user.id, EntityType.USER, user.id, "REGISTER", meta)
        await self.db.commit()
        return RegisterResult(user_id=user.id, email=user.email, name=user.name)

    # ─── Login / Sessions ────────────────────────────────────────

    def _record_attempt(
        self, user: UserAccount | None, email: str, success: bool,
        reason: str | None, meta: RequestMeta,
    ) -> None:
        self.db.add(LoginAttempt(
            user_id=user.id if user else None,
            email=normalize_email(email)[:50],
            success=success,
            failure_reason=reason,
            source_ip=meta.source_ip,
            user_agent=meta.user_agent,
        ))

    async def _record_failure(self, user, email, reason, meta) -> None:
        """Persist the failed attempt (and any lockout counters) before the caller raises."""
        self._record_attempt(user, email, False, reason, meta)
        await self.db.commit()
        logger.warning(
            f"Login failed for {normalize_email(email)}: {reason}",
            extra={"user_id": user.id if user else None},
        )

    async def login(self, email: str, password: str, meta: RequestMeta) -> LoginResult:
        now = datetime.now(timezone.utc)
        user = await self._user_by_email(email)
        invalid = AuthenticationError("Invalid email or password", "INVALID_CREDENTIALS")
        if user is None:
            await self._record_failure(None, email, "UNKNOWN_EMAIL", meta)
            raise invalid

        if user.account_status == AccountStatus.DISABLED:
            await self._record_failure(user, email, "DISABLED", meta)
            raise PermissionDeniedError("Account is disabled", "ACCOUNT_DISABLED")
        if user.account_status == AccountStatus.LOCKED:
            if user.locked_until is None or not is_expired(user.locked_until, now):
                locked_until = as_utc(user.locked_until)
                await self._record_failure(user, email, "LOCKED", meta)
                raise AccountLockedError(locked_until)
            user.account_status = AccountStatus.ACTIVE
            user.locked_until = None
            user.failed_login_count = 0

        if not verify_password(password, user.password_hash):
            user.failed_login_count += 1
            if user.failed_login_count >= self.settings.max_failed_logins:
                locked_until = now + timedelta(minutes=self.settings.lockout_minutes)
                user.account_status = AccountStatus.LOCKED
                user.locked_until = locked_until
                record_action(self.db, user.id, EntityType.USER, user.id, "ACCOUNT_LOCKED", meta)
                await self._record_failure(user, email, "LOCKED_AFTER_FAILURES", meta)
                raise AccountLockedError(locked_until)
            await self._record_failure(user, email, "BAD_PASSWORD", meta)
            raise invalid

        user.failed_login_count = 0
        session = UserSession(
            user_id=user.id,
            created_at=now,
            last_activity_at=now,
            expires_at=now + timedelta(hours=self.settings.session_ttl_hours),
            is_valid=True,
            source_ip=meta.source_ip,
            user_agent=meta.user_agent,
        )
        self.db.add(session)
        self._record_attempt(user, email, True, None, meta)
        await self.db.flush()
        record_action(self.db, user.id, EntityType.SESSION, session.id, "LOGIN", meta)
        await self.db.commit()
        logger.info(f"User {user.id} logged in", extra={"user_id": user.id})
        return LoginResult(
            session_id=session.id,
            user_id=user.id,
            email=user.email,
            name=user.name,
            system_role_code=user.system_role_code,
            expires_at=session.expires_at,
        )

    async def authenticate(self, session_id: UUID) -> tuple[UserAccount, UserSession]:
        """Validate a bearer session and slide its expiry."""
        invalid = AuthenticationError("Invalid or expired session", "INVALID_SESSION")
        session = await self.db.get(UserSession, session_id)
        if session is None or not session.is_valid:
            raise invalid

        now = datetime.now(timezone.utc)
        if is_expired(session.expires_at, now):
            session.is_valid = False
            await self.db.commit()
            raise invalid

        user = await self.db.get(UserAccount, session.user_id)
        if user is None or user.account_status == AccountStatus.DISABLED:
            session.is_valid = False
            await self.db.commit()
            raise invalid

        session.last_activity_at = now
        session.expires_at = now + timedelta(hours=self.settings.session_ttl_hours)
        await self.db.commit()
        return user, session

    async def logout(self, user: UserAccount, session_id: UUID, meta: RequestMeta) -> None:
        session = await self.db.get(UserSession, session_id)
        if session is not None and session.user_id == user.id:
            session.is_valid = False
        record_action(self.db, user.id, EntityType.SESSION, session_id, "LOGOUT", meta)
        await self.db.commit()

    async def logout_all(self, user: UserAccount, meta: RequestMeta) -> int:
        count = await self._invalidate_sessions(user.id)
        record_action(
            self.db, user.id, EntityType.USER, user.id, "LOGOUT_ALL", meta,
            {"sessions": count},
        )
        await self.db.commit()
        return count

    async def _invalidate_sessions(self, user_id: int) -> int:
        result = await self.db.execute(
            update(UserSession)
            .where(UserSession.user_id == user_id, UserSession.is_valid.is_(True))
            .values(is_valid=False),
        )
        return result.rowcount or 0

    # ─── Password Reset ──────────────────────────────────────────

    async def request_password_reset(
        self, email: str, meta: RequestMeta, sender: EmailSender,
    ) -> str:
        user = await self._user_by_email(email)
        if user is None or user.account_status == AccountStatus.DISABLED:
            logger.info("Password reset requested for unknown or disabled account")
            return RESET_REQUESTED_MESSAGE

        token = new_reset_token()
        expires_at = datetime.now(timezone.utc) + timedelta(
            minutes=self.settings.password_reset_ttl_minutes,
        )
        self.db.add(PasswordResetRequest(
            user_id=user.id,
            token_hash=digest_token(token),
            expires_at=expires_at,
            source_ip=meta.source_ip,
        ))
        record_action(self.db, user.id, EntityType.USER, user.id, "PASSWORD_RESET_REQUEST", meta)
        await self.db.commit()
        await sender.send_password_reset(user.email, token, expires_at)
        return RESET_REQUESTED_MESSAGE

    async def reset_with_token(
        self, token: str, new_password: str, confirm_password: str, meta: RequestMeta,
    ) -> None:
        errors = validate_password_pair(new_password, confirm_password)
        if errors:
            raise InvalidInputError(errors)

        result = await self.db.execute(
            select(PasswordResetRequest)
            .where(PasswordResetRequest.token_hash == digest_token(token)),
        )
        reset = result.scalar_one_or_none()
        now = datetime.now(timezone.utc)
        if reset is None or reset.used_at is not None or is_expired(reset.expires_at, now):
            raise InvalidInputError("The reset token is invalid or has expired.")

        user = await self.db.get(UserAccount, reset.user_id)
        if user is None or user.account_status == AccountStatus.DISABLED:
            raise InvalidInputError("The reset token is invalid or has expired.")

        user.password_hash = hash_password(new_password)
        user.failed_login_count = 0
        if user.account_status == AccountStatus.LOCKED:
            user.account_status = AccountStatus.ACTIVE
            user.locked_until = None
        reset.used_at = now
        await self._invalidate_sessions(user.id)
        record_action(self.db, user.id, EntityType.USER, user.id, "PASSWORD_RESET", meta)
        await self.db.commit()
