"""User Service — profile reads, active sessions, and audited profile updates.

Invariants:
    - Profile updates write one ProfileChangeLog row per field whose value changed
    - name and language_code cannot be cleared (explicit null is ignored)
    - Image rules are checked on the merged (current + requested) image fields
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.change_tracking import diff_fields
from fantasy_api.core.domain_types import (
    AccountStatus, COMMISSIONER_ROLES, EntityType, RequestMeta,
)
from fantasy_api.core.errors import InvalidInputError
from fantasy_api.core.validate_images import validate_image_fields
from fantasy_api.models import (
    League, LeagueMember, ProfileChangeLog, Team, UserAccount, UserSession,
)
from fantasy_api.schemas.user import (
    ActiveUser, CommissionedLeague, SessionInfo, UpdateProfileRequest,
    UpdateProfileResult, UserHeader, UserProfile, UserTeam,
)
from fantasy_api.services.audit_service import record_action

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = (
    "name", "alias", "language_code",
    "profile_image_url", "profile_image_width",
    "profile_image_height", "profile_image_bytes",
)
_NON_NULLABLE = {"name", "language_code"}


class UserService:
    """Self-service account operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, user: UserAccount) -> UserProfile:
        leagues = await self.db.execute(
            select(League, LeagueMember)
            .join(LeagueMember, LeagueMember.league_id == League.id)
            .where(
                LeagueMember.user_id == user.id,
                LeagueMember.left_at.is_(None),
                LeagueMember.role_code.in_(COMMISSIONER_ROLES),
            )
            .order_by(League.created_at.desc()),
        )
        teams = await self.db.execute(
            select(Team, League.name)
            .join(League, League.id == Team.league_id)
            .where(Team.owner_user_id == user.id, Team.is_active.is_(True))
            .order_by(Team.created_at.desc()),
        )
        return UserProfile(
            user_id=user.id,
            email=user.email,
            name=user.name,
            alias=user.alias,
            language_code=user.language_code,
            system_role_code=user.system_role_code,
            account_status=user.account_status,
            created_at=user.created_at,
            profile_image_url=user.profile_image_url,
            profile_image_width=user.profile_image_width,
            profile_image_height=user.profile_image_height,
            profile_image_bytes=user.profile_image_bytes,
            commissioned_leagues=[
                CommissionedLeague(
                    league_id=league.id,
                    name=league.name,
                    status=league.status,
                    role_code=member.role_code,
                    is_primary_commissioner=member.is_primary_commissioner,
                )
                for league, member in leagues.all()
            ],
            teams=[
                UserTeam(
                    team_id=team.id, team_name=team.team_name,
                    league_id=team.league_id, league_name=league_name,
                )
                for team, league_name in teams.all()
            ],
        )

    def get_header(self, user: UserAccount) -> UserHeader:
        return UserHeader(
            user_id=user.id,
            name=user.name,
            alias=user.alias,
            system_role_code=user.system_role_code,
            profile_image_url=user.profile_image_url,
        )

    async def list_sessions(self, user: UserAccount, current_session_id: UUID) -> list[SessionInfo]:
        now = datetime.now(timezone.utc)
        result = await self.db.execute(
            select(UserSession)
            .where(
                UserSession.user_id == user.id,
                UserSession.is_valid.is_(True),
                UserSession.expires_at > now,
            )
            .order_by(UserSession.last_activity_at.desc()),
        )
        return [
            SessionInfo(
                session_id=s.id,
                created_at=s.created_at,
                last_activity_at=s.last_activity_at,
                expires_at=s.expires_at,
                source_ip=s.source_ip,
                user_agent=s.user_agent,
                is_current=s.id == current_session_id,
            )
            for s in result.scalars().all()
        ]

    async def update_profile(
        self, user: UserAccount, payload: UpdateProfileRequest, meta: RequestMeta,
    ) -> UpdateProfileResult:
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if k in _PROFILE_FIELDS and not (k in _NON_NULLABLE and v is None)
        }
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "alias" in changes and changes["alias"] is not None:
            changes["alias"] = changes["alias"].strip() or None

        current = {f: getattr(user, f) for f in _PROFILE_FIELDS}
        errors = validate_image_fields({**current, **changes}, {"profile_image": "Profile image"})
        if errors:
            raise InvalidInputError(errors)

        diffs = diff_fields(current, changes)
        for d in diffs:
            self.db.add(ProfileChangeLog(
                user_id=user.id,
                changed_by_user_id=user.id,
                field_name=d.field_name,
                old_value=d.old_value,
                new_value=d.new_value,
                source_ip=meta.source_ip,
                user_agent=meta.user_agent,
            ))
            setattr(user, d.field_name, changes[d.field_name])

        changed = [d.field_name for d in diffs]
        if changed:
            record_action(
                self.db, user.id, EntityType.USER, user.id, "PROFILE_UPDATE", meta,
                {"fields": changed},
            )
            await self.db.commit()
        return UpdateProfileResult(changed_fields=changed)

    async def list_active_users(self) -> list[ActiveUser]:
        """Users holding at least one live session."""
        now = datetime.now(timezone.utc)
        last_activity = func.max(UserSession.last_activity_at)
        result = await self.db.execute(
            select(UserAccount, last_activity)
            .join(UserSession, UserSession.user_id == UserAccount.id)
            .where(
                UserAccount.account_status == AccountStatus.ACTIVE,
                UserSession.is_valid.is_(True),
                UserSession.expires_at > now,
            )
            .group_by(UserAccount.id)
            .order_by(last_activity.desc()),
        )
        return [
            ActiveUser(
                user_id=u.id, email=u.email, name=u.name,
                system_role_code=u.system_role_code, last_activity_at=last,
            )
            for u, last in result.all()
        ]
