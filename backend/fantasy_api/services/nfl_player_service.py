"""NFL Player Service — admin player catalogue plus roster-aware lookups.

Invariants:
    - A player belongs to an existing, active NFL team when created or moved
    - (first_name, last_name, nfl_team_id) is unique
    - A player on any active fantasy roster cannot be deactivated
    - available() excludes players already on an active roster of the given league
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
from fantasy_api.models import (
    League, NFLPlayer, NFLPlayerChangeLog, NFLTeam, Team, TeamRoster, UserAccount,
)
from fantasy_api.schemas.common import ChangeLogEntry, Page
from fantasy_api.schemas.nfl import (
    FantasyTeamRef, NFLPlayerCreate, NFLPlayerDetails, NFLPlayerOut, NFLPlayerUpdate,
)
from fantasy_api.services.audit_service import record_action

logger = logging.getLogger(__name__)

DETAIL_HISTORY_LIMIT: int = 20
PLAYER_IMAGES = {"photo": "Photo", "thumbnail": "Thumbnail"}
_NON_NULLABLE = {"first_name", "last_name", "position", "nfl_team_id"}


def _to_out(player: NFLPlayer, nfl_team_name: str | None) -> NFLPlayerOut:
    out = NFLPlayerOut.model_validate(player)
    out.nfl_team_name = nfl_team_name
    return out


class NFLPlayerService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, player_id: int) -> NFLPlayer:
        player = await self.db.get(NFLPlayer, player_id)
        if player is None:
            raise ResourceNotFoundError("NFLPlayer", player_id)
        return player

    async def _active_nfl_team(self, nfl_team_id: int) -> NFLTeam:
        team = await self.db.get(NFLTeam, nfl_team_id)
        if team is None:
            raise ResourceNotFoundError("NFLTeam", nfl_team_id)
        if not team.is_active:
            raise BusinessRuleError("NFL team is inactive", "NFL_TEAM_INACTIVE")
        return team

    async def _ensure_unique(
        self, first: str, last: str, nfl_team_id: int, exclude_id: int | None = None,
    ) -> None:
        stmt = select(NFLPlayer.id).where(
            func.lower(NFLPlayer.first_name) == first.lower(),
            func.lower(NFLPlayer.last_name) == last.lower(),
            NFLPlayer.nfl_team_id == nfl_team_id,
        )
        if exclude_id is not None:
            stmt = stmt.where(NFLPlayer.id != exclude_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise ConflictError(
                f"{first} {last} already exists on this NFL team", "NFL_PLAYER_DUPLICATE",
            )

    async def _page(self, filters: list, page: int, page_size: int) -> Page[NFLPlayerOut]:
        page, page_size = normalize_pagination(page, page_size)
        total = await self.db.scalar(
            select(func.count(NFLPlayer.id)).where(*filters),
        ) or 0
        result = await self.db.execute(
            select(NFLPlayer, NFLTeam.team_name)
            .join(NFLTeam, NFLTeam.id == NFLPlayer.nfl_team_id)
            .where(*filters)
            .order_by(NFLPlayer.last_name, NFLPlayer.first_name, NFLPlayer.id)
            .offset(page_offset(page, page_size)).limit(page_size),
        )
        return Page(
            items=[_to_out(p, name) for p, name in result.all()],
            total_records=total, current_page=page, page_size=page_size,
            total_pages=total_pages(total, page_size),
        )

    @staticmethod
    def _search_filter(search: str):
        term = f"%{search.strip().lower()}%"
        return or_(
            func.lower(NFLPlayer.first_name).like(term),
            func.lower(NFLPlayer.last_name).like(term),
        )

    # ─── Writes ──────────────────────────────────────────────────

    async def create(
        self, admin: UserAccount, payload: NFLPlayerCreate, meta: RequestMeta,
    ) -> NFLPlayerOut:
        data = payload.model_dump()
        errors = validate_image_fields(data, PLAYER_IMAGES)
        if errors:
            raise InvalidInputError(errors)
        nfl_team = await self._active_nfl_team(payload.nfl_team_id)
        await self._ensure_unique(payload.first_name, payload.last_name, nfl_team.id)

        data["position"] = data["position"].upper()
        player = NFLPlayer(**data, is_active=True, created_by_user_id=admin.id)
        self.db.add(player)
        await self.db.flush()
        record_action(
            self.db, admin.id, EntityType.NFL_PLAYER, player.id, "NFL_PLAYER_CREATE", meta,
            {"name": player.full_name, "nfl_team_id": nfl_team.id},
        )
        await self.db.commit()
        return _to_out(player, nfl_team.team_name)

    async def update(
        self, admin: UserAccount, player_id: int, payload: NFLPlayerUpdate, meta: RequestMeta,
    ) -> NFLPlayerOut:
        player = await self._get(player_id)
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if not (k in _NON_NULLABLE and v is None)
        }
        if "position" in changes:
            changes["position"] = changes["position"].upper()
        current = {k: getattr(player, k) for k in NFLPlayerUpdate.model_fields}
        errors = validate_image_fields({**current, **changes}, PLAYER_IMAGES)
        if errors:
            raise InvalidInputError(errors)

        merged = {**current, **changes}
        if changes.get("nfl_team_id", player.nfl_team_id) != player.nfl_team_id:
            await self._active_nfl_team(merged["nfl_team_id"])
        if {"first_name", "last_name", "nfl_team_id"} & changes.keys():
            await self._ensure_unique(
                merged["first_name"], merged["last_name"], merged["nfl_team_id"],
                exclude_id=player.id,
            )

        diffs = diff_fields(current, changes)
        for d in diffs:
            self.db.add(NFLPlayerChangeLog(
                nfl_player_id=player.id, changed_by_user_id=admin.id,
                field_name=d.field_name, old_value=d.old_value, new_value=d.new_value,
            ))
            setattr(player, d.field_name, changes[d.field_name])
        if diffs:
            record_action(
                self.db, admin.id, EntityType.NFL_PLAYER, player.id, "NFL_PLAYER_UPDATE", meta,
                {"fields": [d.field_name for d in diffs]},
            )
            await self.db.commit()
        nfl_team = await self.db.get(NFLTeam, player.nfl_team_id)
        return _to_out(player, nfl_team.team_name if nfl_team else None)

    async def set_active(
        self, admin: UserAccount, player_id: int, active: bool, meta: RequestMeta,
    ) -> NFLPlayerOut:
        player = await self._get(player_id)
        if player.is_active == active:
            state = "active" if active else "inactive"
            raise BusinessRuleError(f"Player is already {state}", "STATE_UNCHANGED")
        if not active:
            rostered = await self.db.scalar(
                select(func.count(TeamRoster.id)).where(
                    TeamRoster.nfl_player_id == player.id, TeamRoster.is_active.is_(True),
                ),
            )
            if rostered:
                raise ConflictError(
                    "Player is on an active fantasy roster and cannot be deactivated",
                    "PLAYER_ROSTERED",
                )
        player.is_active = active
        self.db.add(NFLPlayerChangeLog(
            nfl_player_id=player.id, changed_by_user_id=admin.id, field_name="is_active",
            old_value="false" if active else "true", new_value="true" if active else "false",
        ))
        action = "NFL_PLAYER_REACTIVATE" if active else "NFL_PLAYER_DEACTIVATE"
        record_action(self.db, admin.id, EntityType.NFL_PLAYER, player.id, action, meta)
        await self.db.commit()
        nfl_team = await self.db.get(NFLTeam, player.nfl_team_id)
        return _to_out(player, nfl_team.team_name if nfl_team else None)

    # ─── Reads ───────────────────────────────────────────────────

    async def list_players(
        self, page: int, page_size: int, search: str | None = None,
        position: str | None = None, nfl_team_id: int | None = None,
        is_active: bool | None = None,
    ) -> Page[NFLPlayerOut]:
        filters = []
        if search:
            filters.append(self._search_filter(search))
        if position:
            filters.append(NFLPlayer.position == position.strip().upper())
        if nfl_team_id is not None:
            filters.append(NFLPlayer.nfl_team_id == nfl_team_id)
        if is_active is not None:
            filters.append(NFLPlayer.is_active.is_(is_active))
        return await self._page(filters, page, page_size)

    async def details(self, player_id: int) -> NFLPlayerDetails:
        player = await self._get(player_id)
        nfl_team = await self.db.get(NFLTeam, player.nfl_team_id)
        history = await self.db.execute(
            select(NFLPlayerChangeLog)
            .where(NFLPlayerChangeLog.nfl_player_id == player.id)
            .order_by(NFLPlayerChangeLog.changed_at.desc(), NFLPlayerChangeLog.id.desc())
            .limit(DETAIL_HISTORY_LIMIT),
        )
        teams = await self.db.execute(
            select(Team, League.name, TeamRoster.acquisition_type)
            .join(TeamRoster, TeamRoster.team_id == Team.id)
            .join(League, League.id == Team.league_id)
            .where(TeamRoster.nfl_player_id == player.id, TeamRoster.is_active.is_(True))
            .order_by(League.name),
        )
        return NFLPlayerDetails(
            player=_to_out(player, nfl_team.team_name if nfl_team else None),
            change_history=[ChangeLogEntry.model_validate(h) for h in history.scalars().all()],
            fantasy_teams=[
                FantasyTeamRef(
                    team_id=team.id, team_name=team.team_name, league_id=team.league_id,
                    league_name=league_name, acquisition_type=acquisition,
                )
                for team, league_name, acquisition in teams.all()
            ],
        )

    async def list_active(self, position: str | None = None) -> list[NFLPlayerOut]:
        filters = [NFLPlayer.is_active.is_(True)]
        if position:
            filters.append(NFLPlayer.position == position.strip().upper())
        result = await self.db.execute(
            select(NFLPlayer, NFLTeam.team_name)
            .join(NFLTeam, NFLTeam.id == NFLPlayer.nfl_team_id)
            .where(*filters)
            .order_by(NFLPlayer.last_name, NFLPlayer.first_name),
        )
        return [_to_out(p, name) for p, name in result.all()]

    async def by_nfl_team(self, nfl_team_id: int) -> list[NFLPlayerOut]:
        nfl_team = await self.db.get(NFLTeam, nfl_team_id)
        if nfl_team is None:
            raise ResourceNotFoundError("NFLTeam", nfl_team_id)
        result = await self.db.execute(
            select(NFLPlayer)
            .where(NFLPlayer.nfl_team_id == nfl_team_id, NFLPlayer.is_active.is_(True))
            .order_by(NFLPlayer.position, NFLPlayer.last_name),
        )
        return [_to_out(p, nfl_team.team_name) for p in result.scalars().all()]

    async def available(
        self, league_id: int, page: int, page_size: int,
        position: str | None = None, search: str | None = None,
    ) -> Page[NFLPlayerOut]:
        """Active players not on an active roster anywhere in the league."""
        if await self.db.get(League, league_id) is None:
            raise ResourceNotFoundError("League", league_id)
        rostered = (
            select(TeamRoster.nfl_player_id)
            .join(Team, Team.id == TeamRoster.team_id)
            .where(Team.league_id == league_id, TeamRoster.is_active.is_(True))
        )
        filters = [NFLPlayer.is_active.is_(True), NFLPlayer.id.not_in(rostered)]
        if position:
            filters.append(NFLPlayer.position == position.strip().upper())
        if search:
            filters.append(self._search_filter(search))
        return await self._page(filters, page, page_size)
