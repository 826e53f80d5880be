"""Team Service — fantasy team branding and roster management.

Invariants:
    - Branding is owner-only; roster reads and writes allow the owner or a league commissioner
    - A player is on at most one active roster per league
    - Roster changes are refused for inactive teams and closed leagues
    - Dropping a player is a soft delete (is_active False + dropped_date)
"""

import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.change_tracking import diff_fields
from fantasy_api.core.domain_types import (
    AcquisitionType, COMMISSIONER_ROLES, EntityType, LeagueStatus, RequestMeta,
)
from fantasy_api.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError, PermissionDeniedError,
    ResourceNotFoundError,
)
from fantasy_api.core.validate_images import validate_image_fields
from fantasy_api.db.base import utc_now
from fantasy_api.models import (
    League, NFLPlayer, NFLTeam, Team, TeamChangeLog, TeamRoster, UserAccount,
)
from fantasy_api.schemas.team import (
    AddRosterPlayerRequest, DistributionItem, MyTeam, RosterChangeResult, RosterEntry,
    TeamOut, UpdateBrandingRequest,
)
from fantasy_api.services.audit_service import record_action
from fantasy_api.services.league_service import active_membership, team_name_taken

logger = logging.getLogger(__name__)

TEAM_IMAGES = {"team_image": "Team image", "thumbnail": "Thumbnail"}


class TeamService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, team_id: int) -> Team:
        team = await self.db.get(Team, team_id)
        if team is None:
            raise ResourceNotFoundError("Team", team_id)
        return team

    async def _require_roster_access(self, team: Team, user: UserAccount) -> None:
        if team.owner_user_id == user.id:
            return
        member = await active_membership(self.db, team.league_id, user.id)
        if member is None or member.role_code not in COMMISSIONER_ROLES:
            raise PermissionDeniedError(
                "Only the team owner or a league commissioner can access this roster",
                "NOT_TEAM_OWNER",
            )

    async def _writable_team(self, team_id: int, user: UserAccount) -> tuple[Team, League]:
        team = await self._get(team_id)
        await self._require_roster_access(team, user)
        if not team.is_active:
            raise BusinessRuleError("The team is no longer active", "TEAM_INACTIVE")
        league = await self.db.get(League, team.league_id)
        if league.status == LeagueStatus.CLOSED:
            raise BusinessRuleError("A closed league cannot be modified", "LEAGUE_CLOSED")
        return team, league

    # ─── Branding ────────────────────────────────────────────────

    async def update_branding(
        self, user: UserAccount, team_id: int, payload: UpdateBrandingRequest, meta: RequestMeta,
    ) -> TeamOut:
        team = await self._get(team_id)
        if team.owner_user_id != user.id:
            raise PermissionDeniedError("Only the team owner can edit branding", "NOT_TEAM_OWNER")

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("team_name", "") is None:
            del changes["team_name"]
        current = {k: getattr(team, k) for k in UpdateBrandingRequest.model_fields}
        errors = validate_image_fields({**current, **changes}, TEAM_IMAGES)
        if errors:
            raise InvalidInputError(errors)
        if (
            "team_name" in changes
            and changes["team_name"].lower() != team.team_name.lower()
            and await team_name_taken(self.db, team.league_id, changes["team_name"], team.id)
        ):
            raise ConflictError(
                f"Team name '{changes['team_name']}' is already used in this league",
                "TEAM_NAME_TAKEN",
            )

        diffs = diff_fields(current, changes)
        for d in diffs:
            self.db.add(TeamChangeLog(
                team_id=team.id, changed_by_user_id=user.id,
                field_name=d.field_name, old_value=d.old_value, new_value=d.new_value,
            ))
            setattr(team, d.field_name, changes[d.field_name])
        if diffs:
            record_action(
                self.db, user.id, EntityType.TEAM, team.id, "TEAM_BRANDING_UPDATE", meta,
                {"fields": [d.field_name for d in diffs]},
            )
            await self.db.commit()
        return TeamOut.model_validate(team)

    # ─── Roster reads ────────────────────────────────────────────

    async def my_team(
        self, user: UserAccount, team_id: int,
        position: str | None = None, search: str | None = None,
    ) -> MyTeam:
        team = await self._get(team_id)
        await self._require_roster_access(team, user)
        league = await self.db.get(League, team.league_id)
        owner = await self.db.get(UserAccount, team.owner_user_id)

        filters = [TeamRoster.team_id == team.id, TeamRoster.is_active.is_(True)]
        if position:
            filters.append(NFLPlayer.position == position.strip().upper())
        if search:
            term = f"%{search.strip().lower()}%"
            filters.append(or_(
                func.lower(NFLPlayer.first_name).like(term),
                func.lower(NFLPlayer.last_name).like(term),
            ))
        result = await self.db.execute(
            select(TeamRoster, NFLPlayer, NFLTeam.team_name)
            .join(NFLPlayer, NFLPlayer.id == TeamRoster.nfl_player_id)
            .join(NFLTeam, NFLTeam.id == NFLPlayer.nfl_team_id)
            .where(*filters)
            .order_by(NFLPlayer.position, NFLPlayer.last_name),
        )
        roster = [
            RosterEntry(
                roster_id=entry.id,
                nfl_player_id=player.id,
                player_name=player.full_name,
                position=player.position,
                nfl_team_name=nfl_team_name,
                injury_status=player.injury_status,
                acquisition_type=entry.acquisition_type,
                acquisition_date=entry.acquisition_date,
            )
            for entry, player, nfl_team_name in result.all()
        ]

        counts = dict.fromkeys((a.value for a in AcquisitionType), 0)
        counts.update(await self._acquisition_counts(team.id))
        return MyTeam(
            team=TeamOut.model_validate(team),
            league_name=league.name,
            owner_name=owner.name,
            total_players=sum(counts.values()),
            acquisition_counts=counts,
            roster=roster,
        )

    async def _acquisition_counts(self, team_id: int) -> list[tuple[str, int]]:
        result = await self.db.execute(
            select(TeamRoster.acquisition_type, func.count(TeamRoster.id))
            .where(TeamRoster.team_id == team_id, TeamRoster.is_active.is_(True))
            .group_by(TeamRoster.acquisition_type),
        )
        return [(row[0], row[1]) for row in result.all()]

    async def distribution(self, user: UserAccount, team_id: int) -> list[DistributionItem]:
        team = await self._get(team_id)
        await self._require_roster_access(team, user)
        counts = await self._acquisition_counts(team.id)
        total = sum(c for _, c in counts)
        return [
            DistributionItem(
                acquisition_type=acquisition,
                player_count=count,
                percentage=round(count * 100.0 / total, 2) if total else 0.0,
            )
            for acquisition, count in sorted(counts, key=lambda c: (-c[1], c[0]))
        ]

    # ─── Roster writes ───────────────────────────────────────────

    async def add_player(
        self, user: UserAccount, team_id: int, payload: AddRosterPlayerRequest, meta: RequestMeta,
    ) -> RosterChangeResult:
        team, league = await self._writable_team(team_id, user)
        player = await self.db.get(NFLPlayer, payload.player_id)
        if player is None:
            raise ResourceNotFoundError("NFLPlayer", payload.player_id)
        if not player.is_active:
            raise BusinessRuleError("The player is inactive", "PLAYER_INACTIVE")

        taken = await self.db.scalar(
            select(func.count(TeamRoster.id))
            .join(Team, Team.id == TeamRoster.team_id)
            .where(
                Team.league_id == league.id,
                TeamRoster.nfl_player_id == player.id,
                TeamRoster.is_active.is_(True),
            ),
        )
        if taken:
            raise ConflictError(
                f"{player.full_name} is already on a roster in this league", "PLAYER_ROSTERED",
            )

        entry = TeamRoster(
            team_id=team.id,
            nfl_player_id=player.id,
            acquisition_type=payload.acquisition_type.value,
            is_active=True,
            added_by_user_id=user.id,
        )
        self.db.add(entry)
        await self.db.flush()
        record_action(
            self.db, user.id, EntityType.TEAM, team.id, "ROSTER_ADD", meta,
            {"nfl_player_id": player.id, "acquisition_type": entry.acquisition_type},
        )
        await self.db.commit()
        return RosterChangeResult(
            roster_id=entry.id, team_id=team.id, nfl_player_id=player.id, is_active=True,
        )

    async def remove_player(
        self, user: UserAccount, team_id: int, roster_id: int, meta: RequestMeta,
    ) -> RosterChangeResult:
        team, _ = await self._writable_team(team_id, user)
        entry = await self.db.get(TeamRoster, roster_id)
        if entry is None or entry.team_id != team.id:
            raise ResourceNotFoundError("RosterEntry", roster_id)
        if not entry.is_active:
            raise BusinessRuleError("The player was already dropped", "ALREADY_DROPPED")

        entry.is_active = False
        entry.dropped_date = utc_now()
        record_action(
            self.db, user.id, EntityType.TEAM, team.id, "ROSTER_DROP", meta,
            {"nfl_player_id": entry.nfl_player_id, "roster_id": entry.id},
        )
        await self.db.commit()
        return RosterChangeResult(
            roster_id=entry.id, team_id=team.id,
            nfl_player_id=entry.nfl_player_id, is_active=False,
        )
