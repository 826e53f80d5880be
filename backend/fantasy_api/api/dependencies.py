"""Request Dependencies — caller metadata, bearer-session authentication and role gates.

Invariants:
    - Authorization header carries `Bearer <session uuid>`; anything else is a 401
    - Authentication slides the session expiry on every authenticated request
    - Admin gate compares system_role_code to ADMIN and raises 403 otherwise
    - The authenticated user is bound to the request's own DB session

Design Decisions:
    - HTTPBearer(auto_error=False): missing credentials raise our AuthenticationError so
      the response keeps the standard error envelope instead of FastAPI's default 403
"""

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.domain_types import RequestMeta, SystemRoleCode
from fantasy_api.core.errors import AuthenticationError, PermissionDeniedError
from fantasy_api.infrastructure.database import get_db
from fantasy_api.models import UserAccount
from fantasy_api.services.auth_service import AuthService

USER_AGENT_MAX_LENGTH: int = 300

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_meta(request: Request) -> RequestMeta:
    """Client IP (first X-Forwarded-For hop when proxied) and user agent."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        source_ip = forwarded.split(",")[0].strip()
    else:
        source_ip = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    return RequestMeta(
        source_ip=source_ip[:45] if source_ip else None,
        user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
    )


@dataclass
class CurrentUser:
    user: UserAccount
    session_id: UUID

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def is_admin(self) -> bool:
        return self.user.system_role_code == SystemRoleCode.ADMIN.value


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    try:
        session_id = UUID(credentials.credentials)
    except ValueError:
        raise AuthenticationError("Invalid or expired session", "INVALID_SESSION")
    user, session = await AuthService(db).authenticate(session_id)
    return CurrentUser(user=user, session_id=session.id)


async def require_admin(current: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current.is_admin:
        raise PermissionDeniedError("Administrator role required", "ADMIN_REQUIRED")
    return current
