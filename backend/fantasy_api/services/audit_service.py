"""Audit Service — user action trail writes, queries, stats and retention cleanup.

Invariants:
    - record_action never commits: the caller's unit of work commits it together
      with the change it describes
    - Query bounds validated via core/validate_audit before touching the DB
    - Cleanup logs its own action AFTER deleting, so the trail of the cleanup survives

Design Decisions:
    - Module-level record_action instead of a method: every service calls it with its
      own session, no AuditService instance needed
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.domain_types import RequestMeta, EntityType
from fantasy_api.core.errors import InvalidInputError
from fantasy_api.core.time_utils import as_utc
from fantasy_api.core.validate_audit import (
    validate_log_query, validate_stats_days, validate_retention_days,
)
from fantasy_api.models import (
    UserActionLog, UserAccount, UserSession, League, Team, NFLTeam, NFLPlayer,
)
from fantasy_api.schemas.audit import (
    UserActionLogOut, ActionCount, AuditStats, CleanupResult, SystemStats,
)

logger = logging.getLogger(__name__)


def record_action(
    db: AsyncSession,
    actor_user_id: int | None,
    entity_type: EntityType,
    entity_id: Any,
    action_code: str,
    meta: RequestMeta | None = None,
    details: dict | None = None,
) -> None:
    """Stage one audit row on the session (no flush, no commit)."""
    meta = meta or RequestMeta()
    db.add(UserActionLog(
        actor_user_id=actor_user_id,
        entity_type=entity_type.value,
        entity_id=str(entity_id),
        action_code=action_code,
        source_ip=meta.source_ip,
        user_agent=meta.user_agent,
        details=json.dumps(details, default=str) if details else None,
    ))
    logger.info(
        f"{action_code} {entity_type.value}:{entity_id}",
        extra={
            "user_id": actor_user_id, "entity_type": entity_type.value,
            "entity_id": str(entity_id), "action_code": action_code,
        },
    )


class AuditService:
    """Read side of the action log plus admin maintenance."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_logs(
        self,
        entity_type: str | None = None,
        entity_id: str | None = None,
        actor_user_id: int | None = None,
        action_code: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        top: int = 100,
    ) -> list[UserActionLogOut]:
        start_date, end_date = as_utc(start_date), as_utc(end_date)
        errors = validate_log_query(top, start_date, end_date)
        if errors:
            raise InvalidInputError(errors)

        stmt = select(UserActionLog)
        if entity_type:
            stmt = stmt.where(UserActionLog.entity_type == entity_type.upper())
        if entity_id:
            stmt = stmt.where(UserActionLog.entity_id == entity_id)
        if actor_user_id is not None:
            stmt = stmt.where(UserActionLog.actor_user_id == actor_user_id)
        if action_code:
            stmt = stmt.where(UserActionLog.action_code == action_code.upper())
        if start_date:
            stmt = stmt.where(UserActionLog.action_at >= start_date)
        if end_date:
            stmt = stmt.where(UserActionLog.action_at <= end_date)
        stmt = stmt.order_by(UserActionLog.action_at.desc(), UserActionLog.id.desc()).limit(top)

        rows = (await self.db.execute(stmt)).scalars().all()
        return [UserActionLogOut.model_validate(r) for r in rows]

    async def user_history(self, user_id: int, top: int = 100) -> list[UserActionLogOut]:
        return await self.list_logs(actor_user_id=user_id, top=top)

    async def stats(self, days: int = 30) -> AuditStats:
        errors = validate_stats_days(days)
        if errors:
            raise InvalidInputError(errors)
        since = datetime.now(timezone.utc) - timedelta(days=days)

        result = await self.db.execute(
            select(UserActionLog.action_code, func.count(UserActionLog.id))
            .where(UserActionLog.action_at >= since)
            .group_by(UserActionLog.action_code)
            .order_by(func.count(UserActionLog.id).desc(), UserActionLog.action_code),
        )
        by_action = [ActionCount(action_code=code, count=n) for code, n in result.all()]
        distinct_actors = await self.db.scalar(
            select(func.count(func.distinct(UserActionLog.actor_user_id)))
            .where(UserActionLog.action_at >= since),
        )
        return AuditStats(
            days=days,
            since=since,
            total_actions=sum(a.count for a in by_action),
            distinct_actors=distinct_actors or 0,
            by_action=by_action,
        )

    async def cleanup(
        self, retention_days: int, actor_user_id: int, meta: RequestMeta,
    ) -> CleanupResult:
        errors = validate_retention_days(retention_days)
        if errors:
            raise InvalidInputError(errors)
        cutoff = datetime.now(timezone.utc) - timedelta(days=retention_days)

        result = await self.db.execute(
            delete(UserActionLog).where(UserActionLog.action_at < cutoff),
        )
        deleted = result.rowcount or 0
        record_action(
            self.db, actor_user_id, EntityType.SYSTEM, "audit", "AUDIT_CLEANUP",
            meta, {"retention_days": retention_days, "deleted": deleted},
        )
        await self.db.commit()
        return CleanupResult(retention_days=retention_days, deleted=deleted)

    async def system_stats(self) -> SystemStats:
        now = datetime.now(timezone.utc)
        count = self.db.scalar
        return SystemStats(
            total_users=await count(select(func.count(UserAccount.id))) or 0,
            active_sessions=await count(
                select(func.count(UserSession.id)).where(
                    UserSession.is_valid.is_(True), UserSession.expires_at > now,
                ),
            ) or 0,
            total_leagues=await count(select(func.count(League.id))) or 0,
            active_teams=await count(
                select(func.count(Team.id)).where(Team.is_active.is_(True)),
            ) or 0,
            nfl_teams=await count(select(func.count(NFLTeam.id))) or 0,
            nfl_players=await count(select(func.count(NFLPlayer.id))) or 0,
        )
