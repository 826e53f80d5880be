"""NFL Team Service — admin catalogue of real-world franchises.

Invariants:
    - team_name is unique (case-insensitive)
    - Updates write one NFLTeamChangeLog row per changed field
    - Deactivate/reactivate are idempotency-checked: repeating one is a 400
    - Details carry at most DETAIL_HISTORY_LIMIT change-log rows, newest first
"""

import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.change_tracking import diff_fields
from fantasy_api.core.domain_types import EntityType, RequestMeta
from fantasy_api.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError, ResourceNotFoundError,
)
from fantasy_api.core.pagination import normalize_pagination, page_offset, total_pages
from fantasy_api.core.validate_images import validate_image_fields
from fantasy_api.models import NFLPlayer, NFLTeam, NFLTeamChangeLog, UserAccount
from fantasy_api.schemas.common import ChangeLogEntry, Page
from fantasy_api.schemas.nfl import (
    NFLPlayerBrief, NFLTeamCreate, NFLTeamDetails, NFLTeamOut, NFLTeamUpdate,
)
from fantasy_api.services.audit_service import record_action

logger = logging.getLogger(__name__)

DETAIL_HISTORY_LIMIT: int = 20
TEAM_IMAGES = {"team_image": "Team image", "thumbnail": "Thumbnail"}
_NON_NULLABLE = {"team_name", "city"}


class NFLTeamService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, nfl_team_id: int) -> NFLTeam:
        team = await self.db.get(NFLTeam, nfl_team_id)
        if team is None:
            raise ResourceNotFoundError("NFLTeam", nfl_team_id)
        return team

    async def _ensure_unique_name(self, name: str, exclude_id: int | None = None) -> None:
        stmt = select(NFLTeam.id).where(func.lower(NFLTeam.team_name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(NFLTeam.id != exclude_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise ConflictError(f"NFL team '{name}' already exists", "NFL_TEAM_NAME_TAKEN")

    async def create(
        self, admin: UserAccount, payload: NFLTeamCreate, meta: RequestMeta,
    ) -> NFLTeamOut:
        data = payload.model_dump()
        errors = validate_image_fields(data, TEAM_IMAGES)
        if errors:
            raise InvalidInputError(errors)
        await self._ensure_unique_name(payload.team_name)

        team = NFLTeam(**data, is_active=True, created_by_user_id=admin.id)
        self.db.add(team)
        await self.db.flush()
        record_action(
            self.db, admin.id, EntityType.NFL_TEAM, team.id, "NFL_TEAM_CREATE", meta,
            {"team_name": team.team_name},
        )
        await self.db.commit()
        return NFLTeamOut.model_validate(team)

    async def list_teams(
        self, page: int, page_size: int, search: str | None = None,
        city: str | None = None, is_active: bool | None = None,
    ) -> Page[NFLTeamOut]:
        page, page_size = normalize_pagination(page, page_size, min_size=10)
        filters = []
        if search:
            term = f"%{search.strip().lower()}%"
            filters.append(or_(
                func.lower(NFLTeam.team_name).like(term), func.lower(NFLTeam.city).like(term),
            ))
        if city:
            filters.append(func.lower(NFLTeam.city) == city.strip().lower())
        if is_active is not None:
            filters.append(NFLTeam.is_active.is_(is_active))

        total = await self.db.scalar(select(func.count(NFLTeam.id)).where(*filters)) or 0
        result = await self.db.execute(
            select(NFLTeam).where(*filters).order_by(NFLTeam.team_name)
            .offset(page_offset(page, page_size)).limit(page_size),
        )
        return Page(
            items=[NFLTeamOut.model_validate(t) for t in result.scalars().all()],
            total_records=total, current_page=page, page_size=page_size,
            total_pages=total_pages(total, page_size),
        )

    async def details(self, nfl_team_id: int) -> NFLTeamDetails:
        team = await self._get(nfl_team_id)
        history = await self.db.execute(
            select(NFLTeamChangeLog)
            .where(NFLTeamChangeLog.nfl_team_id == team.id)
            .order_by(NFLTeamChangeLog.changed_at.desc(), NFLTeamChangeLog.id.desc())
            .limit(DETAIL_HISTORY_LIMIT),
        )
        players = await self.db.execute(
            select(NFLPlayer)
            .where(NFLPlayer.nfl_team_id == team.id, NFLPlayer.is_active.is_(True))
            .order_by(NFLPlayer.position, NFLPlayer.last_name),
        )
        return NFLTeamDetails(
            team=NFLTeamOut.model_validate(team),
            change_history=[ChangeLogEntry.model_validate(h) for h in history.scalars().all()],
            active_players=[NFLPlayerBrief.model_validate(p) for p in players.scalars().all()],
        )

    async def update(
        self, admin: UserAccount, nfl_team_id: int, payload: NFLTeamUpdate, meta: RequestMeta,
    ) -> NFLTeamOut:
        team = await self._get(nfl_team_id)
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if not (k in _NON_NULLABLE and v is None)
        }
        current = {k: getattr(team, k) for k in NFLTeamUpdate.model_fields}
        errors = validate_image_fields({**current, **changes}, TEAM_IMAGES)
        if errors:
            raise InvalidInputError(errors)
        if "team_name" in changes and changes["team_name"] != team.team_name:
            await self._ensure_unique_name(changes["team_name"], exclude_id=team.id)

        diffs = diff_fields(current, changes)
        for d in diffs:
            self.db.add(NFLTeamChangeLog(
                nfl_team_id=team.id, changed_by_user_id=admin.id,
                field_name=d.field_name, old_value=d.old_value, new_value=d.new_value,
            ))
            setattr(team, d.field_name, changes[d.field_name])
        if diffs:
            team.updated_by_user_id = admin.id
            record_action(
                self.db, admin.id, EntityType.NFL_TEAM, team.id, "NFL_TEAM_UPDATE", meta,
                {"fields": [d.field_name for d in diffs]},
            )
            await self.db.commit()
        return NFLTeamOut.model_validate(team)

    async def set_active(
        self, admin: UserAccount, nfl_team_id: int, active: bool, meta: RequestMeta,
    ) -> NFLTeamOut:
        team = await self._get(nfl_team_id)
        if team.is_active == active:
            state = "active" if active else "inactive"
            raise BusinessRuleError(f"NFL team is already {state}", "STATE_UNCHANGED")
        team.is_active = active
        team.updated_by_user_id = admin.id
        self.db.add(NFLTeamChangeLog(
            nfl_team_id=team.id, changed_by_user_id=admin.id, field_name="is_active",
            old_value="false" if active else "true", new_value="true" if active else "false",
        ))
        action = "NFL_TEAM_REACTIVATE" if active else "NFL_TEAM_DEACTIVATE"
        record_action(self.db, admin.id, EntityType.NFL_TEAM, team.id, action, meta)
        await self.db.commit()
        return NFLTeamOut.model_validate(team)

    async def list_active(self) -> list[NFLTeamOut]:
        result = await self.db.execute(
            select(NFLTeam).where(NFLTeam.is_active.is_(True)).order_by(NFLTeam.team_name),
        )
        return [NFLTeamOut.model_validate(t) for t in result.scalars().all()]
