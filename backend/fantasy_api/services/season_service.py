"""Season Service — admin season management and the public current-season lookup.

Invariants:
    - At most one season is current: marking one current clears the flag everywhere else
    - Season names are unique and date ranges never overlap
    - Making a season current on update requires confirm_make_current
    - Deactivate and delete require an explicit confirm flag
    - A season referenced by any league cannot be deleted
"""

import logging
from datetime import date, datetime, timezone

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.domain_types import EntityType, RequestMeta
from fantasy_api.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError, ResourceNotFoundError,
)
from fantasy_api.core.validate_season import (
    build_week_schedule, ranges_overlap, season_label, validate_season_window,
)
from fantasy_api.models import League, Season, UserAccount
from fantasy_api.schemas.season import SeasonCreate, SeasonOut, SeasonUpdate, SeasonWeek
from fantasy_api.services.audit_service import record_action

logger = logging.getLogger(__name__)


class SeasonService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, season_id: int) -> Season:
        season = await self.db.get(Season, season_id)
        if season is None:
            raise ResourceNotFoundError("Season", season_id)
        return season

    async def current_season(self) -> Season | None:
        result = await self.db.execute(
            select(Season).where(Season.is_current.is_(True), Season.is_active.is_(True)),
        )
        return result.scalars().first()

    async def get_current(self) -> SeasonOut:
        season = await self.current_season()
        if season is None:
            raise ResourceNotFoundError("Season", "current")
        return SeasonOut.model_validate(season)

    async def get(self, season_id: int) -> SeasonOut:
        return SeasonOut.model_validate(await self._get(season_id))

    async def weeks(self, season_id: int) -> list[SeasonWeek]:
        season = await self._get(season_id)
        return [
            SeasonWeek(**w)
            for w in build_week_schedule(season.start_date, season.end_date, season.week_count)
        ]

    async def _check_conflicts(
        self, name: str, start: date, end: date, exclude_id: int | None = None,
    ) -> None:
        stmt = select(Season)
        if exclude_id is not None:
            stmt = stmt.where(Season.id != exclude_id)
        for other in (await self.db.execute(stmt)).scalars().all():
            if other.name.lower() == name.lower():
                raise ConflictError(f"A season named '{name}' already exists", "SEASON_NAME_TAKEN")
            if ranges_overlap(start, end, other.start_date, other.end_date):
                raise ConflictError(
                    f"Season dates overlap with '{other.name}'", "SEASON_OVERLAP",
                )

    async def _clear_current(self, except_id: int | None = None) -> None:
        stmt = update(Season).where(Season.is_current.is_(True))
        if except_id is not None:
            stmt = stmt.where(Season.id != except_id)
        await self.db.execute(stmt.values(is_current=False))

    async def create(
        self, admin: UserAccount, payload: SeasonCreate, meta: RequestMeta,
    ) -> SeasonOut:
        today = datetime.now(timezone.utc).date()
        errors = validate_season_window(
            payload.name, payload.week_count, payload.start_date, payload.end_date, today,
        )
        if errors:
            raise InvalidInputError(errors)
        await self._check_conflicts(payload.name, payload.start_date, payload.end_date)

        if payload.mark_as_current:
            await self._clear_current()
        season = Season(
            name=payload.name,
            label=season_label(payload.start_date),
            year=payload.start_date.year,
            week_count=payload.week_count,
            start_date=payload.start_date,
            end_date=payload.end_date,
            is_current=payload.mark_as_current,
            is_active=True,
            created_by_user_id=admin.id,
        )
        self.db.add(season)
        await self.db.flush()
        record_action(
            self.db, admin.id, EntityType.SEASON, season.id, "SEASON_CREATE", meta,
            {"name": season.name, "current": season.is_current},
        )
        await self.db.commit()
        return SeasonOut.model_validate(season)

    async def update(
        self, admin: UserAccount, season_id: int, payload: SeasonUpdate, meta: RequestMeta,
    ) -> SeasonOut:
        season = await self._get(season_id)
        if payload.set_as_current and not payload.confirm_make_current:
            raise BusinessRuleError(
                "Confirmation is required to make this season current", "CONFIRMATION_REQUIRED",
            )

        name = payload.name.strip() if payload.name else season.name
        week_count = payload.week_count or season.week_count
        start = payload.start_date or season.start_date
        end = payload.end_date or season.end_date
        today = datetime.now(timezone.utc).date()
        errors = validate_season_window(name, week_count, start, end, today)
        if errors:
            raise InvalidInputError(errors)
        await self._check_conflicts(name, start, end, exclude_id=season.id)

        if week_count != season.week_count:
            league_count = await self.db.scalar(
                select(func.count(League.id)).where(League.season_id == season.id),
            )
            if league_count:
                raise BusinessRuleError(
                    "Week count cannot change while leagues use this season", "SEASON_IN_USE",
                )

        season.name = name
        season.week_count = week_count
        season.start_date = start
        season.end_date = end
        season.label = season_label(start)
        season.year = start.year
        if payload.set_as_current is True:
            await self._clear_current(except_id=season.id)
            season.is_current = True
            season.is_active = True
        elif payload.set_as_current is False:
            season.is_current = False

        record_action(self.db, admin.id, EntityType.SEASON, season.id, "SEASON_UPDATE", meta)
        await self.db.commit()
        return SeasonOut.model_validate(season)

    async def deactivate(
        self, admin: UserAccount, season_id: int, confirm: bool, meta: RequestMeta,
    ) -> SeasonOut:
        if not confirm:
            raise BusinessRuleError("Deactivation must be confirmed", "CONFIRMATION_REQUIRED")
        season = await self._get(season_id)
        if not season.is_active:
            raise BusinessRuleError("Season is already inactive", "ALREADY_INACTIVE")
        season.is_active = False
        season.is_current = False
        record_action(self.db, admin.id, EntityType.SEASON, season.id, "SEASON_DEACTIVATE", meta)
        await self.db.commit()
        return SeasonOut.model_validate(season)

    async def delete(
        self, admin: UserAccount, season_id: int, confirm: bool, meta: RequestMeta,
    ) -> None:
        if not confirm:
            raise BusinessRuleError("Deletion must be confirmed", "CONFIRMATION_REQUIRED")
        season = await self._get(season_id)
        league_count = await self.db.scalar(
            select(func.count(League.id)).where(League.season_id == season.id),
        )
        if league_count:
            raise ConflictError(
                f"Season is used by {league_count} league(s) and cannot be deleted",
                "SEASON_IN_USE",
            )
        await self.db.delete(season)
        record_action(
            self.db, admin.id, EntityType.SEASON, season_id, "SEASON_DELETE", meta,
            {"name": season.name},
        )
        await self.db.commit()
