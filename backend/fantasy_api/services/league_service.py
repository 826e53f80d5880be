"""League Service — league lifecycle, membership and commissioner operations.

Invariants:
    - A league is created inside the current season; its creator becomes the primary
      commissioner and owns the first team
    - Config edits: commissioner or co-commissioner. Status changes, co-commissioner
      management and transfers: primary commissioner only
    - Exactly one active primary commissioner at all times (transfer swaps atomically)
    - Joining requires PreDraft, the league password, a free slot and a unique team name
    - Leaving/removal closes the membership, deactivates the team and drops its roster

Design Decisions:
    - Unchanged values are filtered out of config payloads before validation: re-sending
      the current team_slots of an Active league is not an edit of a frozen field
    - public_id is a random 6-digit number, retried on collision
"""

import logging
import secrets

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.change_tracking import diff_fields
from fantasy_api.core.domain_types import (
    COMMISSIONER_ROLES, EntityType, LeagueRoleCode, LeagueStatus, RequestMeta, SystemRoleCode,
)
from fantasy_api.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError, PermissionDeniedError,
    ResourceNotFoundError,
)
from fantasy_api.core.pagination import normalize_pagination, page_offset, total_pages
from fantasy_api.core.validate_credentials import validate_password_complexity
from fantasy_api.core.validate_league import (
    available_slots, validate_config_change, validate_new_league, validate_status_transition,
)
from fantasy_api.db.base import utc_now
from fantasy_api.infrastructure.security import hash_password, verify_password
from fantasy_api.models import (
    League, LeagueConfigHistory, LeagueMember, LeagueStatusHistory, PositionFormat,
    ScoringSchema, Season, Team, TeamRoster, UserAccount,
)
from fantasy_api.schemas.common import Page
from fantasy_api.schemas.league import (
    ConfigChangeResult, JoinLeagueRequest, JoinLeagueResult, LeagueConfigUpdate,
    LeagueCreate, LeagueCreated, LeagueDirectoryItem, LeagueMemberOut, LeagueOut, LeaguePasswordInfo,
    LeagueSummary, LeagueTeam, LeagueUserRoles, RemoveTeamResult, SetStatusRequest,
    StatusChangeResult, TransferCommissionerResult, ValidatePasswordResult,
)
from fantasy_api.services.reference_service import ReferenceService
from fantasy_api.services.season_service import SeasonService
from fantasy_api.services.audit_service import record_action

logger = logging.getLogger(__name__)

PUBLIC_ID_ATTEMPTS: int = 10
_NON_NULLABLE_CONFIG = {
    "name", "team_slots", "position_format_id", "scoring_schema_id",
    "playoff_teams", "allow_decimals", "trade_deadline_enabled",
}


async def team_name_taken(
    db: AsyncSession, league_id: int, team_name: str, exclude_team_id: int | None = None,
) -> bool:
    """Case-insensitive check among the league's active teams."""
    stmt = select(Team.id).where(
        Team.league_id == league_id,
        Team.is_active.is_(True),
        func.lower(Team.team_name) == team_name.lower(),
    )
    if exclude_team_id is not None:
        stmt = stmt.where(Team.id != exclude_team_id)
    return (await db.execute(stmt)).first() is not None


async def active_membership(
    db: AsyncSession, league_id: int, user_id: int,
) -> LeagueMember | None:
    result = await db.execute(
        select(LeagueMember).where(
            LeagueMember.league_id == league_id,
            LeagueMember.user_id == user_id,
            LeagueMember.left_at.is_(None),
        ),
    )
    return result.scalars().first()


class LeagueService:

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Lookups ─────────────────────────────────────────────────

    async def _get(self, league_id: int) -> League:
        league = await self.db.get(League, league_id)
        if league is None:
            raise ResourceNotFoundError("League", league_id)
        return league

    async def _team_count(self, league_id: int) -> int:
        return await self.db.scalar(
            select(func.count(Team.id)).where(
                Team.league_id == league_id, Team.is_active.is_(True),
            ),
        ) or 0

    async def _require_commissioner(self, league: League, user: UserAccount) -> LeagueMember:
        member = await active_membership(self.db, league.id, user.id)
        if member is None or member.role_code not in COMMISSIONER_ROLES:
            raise PermissionDeniedError(
                "Only league commissioners can perform this action", "NOT_COMMISSIONER",
            )
        return member

    async def _require_primary(self, league: League, user: UserAccount) -> LeagueMember:
        member = await active_membership(self.db, league.id, user.id)
        if member is None or not member.is_primary_commissioner:
            raise PermissionDeniedError(
                "Only the primary commissioner can perform this action",
                "NOT_PRIMARY_COMMISSIONER",
            )
        return member

    async def _require_member(self, league_id: int, user_id: int) -> LeagueMember:
        member = await active_membership(self.db, league_id, user_id)
        if member is None:
            raise BusinessRuleError("User is not a member of this league", "NOT_A_MEMBER")
        return member

    async def _new_public_id(self) -> int:
        for _ in range(PUBLIC_ID_ATTEMPTS):
            candidate = 100_000 + secrets.randbelow(900_000)
            taken = await self.db.scalar(
                select(func.count(League.id)).where(League.public_id == candidate),
            )
            if not taken:
                return candidate
        raise ConflictError("Could not allocate a league public id", "PUBLIC_ID_EXHAUSTED")

    async def _ensure_unique_name(
        self, season_id: int, name: str, exclude_id: int | None = None,
    ) -> None:
        stmt = select(League.id).where(
            League.season_id == season_id, func.lower(League.name) == name.lower(),
        )
        if exclude_id is not None:
            stmt = stmt.where(League.id != exclude_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise ConflictError(
                f"A league named '{name}' already exists this season", "LEAGUE_NAME_TAKEN",
            )

    async def _close_membership(self, member: LeagueMember, league_id: int) -> Team | None:
        """End the membership and retire the member's team with its roster."""
        now = utc_now()
        member.left_at = now
        result = await self.db.execute(
            select(Team).where(
                Team.league_id == league_id,
                Team.owner_user_id == member.user_id,
                Team.is_active.is_(True),
            ),
        )
        team = result.scalars().first()
        if team is not None:
            team.is_active = False
            roster = await self.db.execute(
                select(TeamRoster).where(
                    TeamRoster.team_id == team.id, TeamRoster.is_active.is_(True),
                ),
            )
            for entry in roster.scalars().all():
                entry.is_active = False
                entry.dropped_date = now
        return team

    # ─── Creation & configuration ────────────────────────────────

    async def create(
        self, user: UserAccount, payload: LeagueCreate, meta: RequestMeta,
    ) -> LeagueCreated:
        errors = validate_new_league(payload.team_slots, payload.playoff_teams)
        errors += validate_password_complexity(payload.league_password, "League password")
        if errors:
            raise InvalidInputError(errors)

        season = await SeasonService(self.db).current_season()
        if season is None:
            raise BusinessRuleError(
                "There is no current season to create the league in", "NO_CURRENT_SEASON",
            )
        await self._ensure_unique_name(season.id, payload.name)

        reference = ReferenceService(self.db)
        position_format = await reference.resolve_position_format(payload.position_format_id)
        scoring_schema = await reference.resolve_scoring_schema(payload.scoring_schema_id)

        league = League(
            public_id=await self._new_public_id(),
            season_id=season.id,
            name=payload.name,
            description=payload.description,
            team_slots=payload.team_slots,
            league_password_hash=hash_password(payload.league_password),
            status=LeagueStatus.PRE_DRAFT.value,
            allow_decimals=payload.allow_decimals,
            playoff_teams=payload.playoff_teams,
            trade_deadline_enabled=False,
            position_format_id=position_format.id,
            scoring_schema_id=scoring_schema.id,
            created_by_user_id=user.id,
        )
        self.db.add(league)
        await self.db.flush()

        self.db.add(LeagueMember(
            league_id=league.id,
            user_id=user.id,
            role_code=LeagueRoleCode.COMMISSIONER.value,
            is_primary_commissioner=True,
        ))
        team = Team(league_id=league.id, owner_user_id=user.id, team_name=payload.initial_team_name)
        self.db.add(team)
        await self.db.flush()

        record_action(
            self.db, user.id, EntityType.LEAGUE, league.id, "LEAGUE_CREATE", meta,
            {"name": league.name, "season_id": season.id, "team_id": team.id},
        )
        await self.db.commit()
        logger.info(
            f"League created: {league.name}",
            extra={"league_id": league.id, "user_id": user.id, "team_id": team.id},
        )
        return LeagueCreated(
            league_id=league.id,
            league_public_id=league.public_id,
            name=league.name,
            team_slots=league.team_slots,
            available_slots=available_slots(league.team_slots, 1),
            status=league.status,
            playoff_teams=league.playoff_teams,
            allow_decimals=league.allow_decimals,
            team_id=team.id,
            created_at=league.created_at,
        )

    async def edit_config(
        self, user: UserAccount, league_id: int, payload: LeagueConfigUpdate, meta: RequestMeta,
    ) -> ConfigChangeResult:
        league = await self._get(league_id)
        await self._require_commissioner(league, user)

        requested = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if not (k in _NON_NULLABLE_CONFIG and v is None)
        }
        if isinstance(requested.get("name"), str):
            requested["name"] = requested["name"].strip()
        current = {k: getattr(league, k) for k in LeagueConfigUpdate.model_fields}
        changes = {k: v for k, v in requested.items() if current[k] != v}

        season = await self.db.get(Season, league.season_id)
        errors = validate_config_change(
            league.status,
            changes,
            team_count=await self._team_count(league.id),
            current_team_slots=league.team_slots,
            current_playoff_teams=league.playoff_teams,
            current_trade_deadline_enabled=league.trade_deadline_enabled,
            current_trade_deadline_date=league.trade_deadline_date,
            season_start=season.start_date if season else None,
            season_end=season.end_date if season else None,
        )
        if "name" in changes and not changes["name"]:
            errors.append("League name cannot be empty.")
        if errors:
            raise InvalidInputError(errors)

        if "name" in changes:
            await self._ensure_unique_name(league.season_id, changes["name"], exclude_id=league.id)
        if "position_format_id" in changes and (
            await self.db.get(PositionFormat, changes["position_format_id"]) is None
        ):
            raise ResourceNotFoundError("PositionFormat", changes["position_format_id"])
        if "scoring_schema_id" in changes and (
            await self.db.get(ScoringSchema, changes["scoring_schema_id"]) is None
        ):
            raise ResourceNotFoundError("ScoringSchema", changes["scoring_schema_id"])

        diffs = diff_fields(current, changes)
        for d in diffs:
            self.db.add(LeagueConfigHistory(
                league_id=league.id, changed_by_user_id=user.id,
                field_name=d.field_name, old_value=d.old_value, new_value=d.new_value,
            ))
            setattr(league, d.field_name, changes[d.field_name])
        if diffs:
            record_action(
                self.db, user.id, EntityType.LEAGUE, league.id, "LEAGUE_CONFIG_UPDATE", meta,
                {"fields": [d.field_name for d in diffs]},
            )
            await self.db.commit()
        return ConfigChangeResult(
            league=LeagueOut.model_validate(league),
            changed_fields=[d.field_name for d in diffs],
        )

    async def set_status(
        self, user: UserAccount, league_id: int, payload: SetStatusRequest, meta: RequestMeta,
    ) -> StatusChangeResult:
        league = await self._get(league_id)
        await self._require_primary(league, user)

        old_status = league.status
        error = validate_status_transition(
            old_status, payload.new_status, await self._team_count(league.id), league.team_slots,
        )
        if error:
            raise BusinessRuleError(error, "INVALID_STATUS_TRANSITION")

        league.status = payload.new_status
        self.db.add(LeagueStatusHistory(
            league_id=league.id, changed_by_user_id=user.id,
            old_status=old_status, new_status=payload.new_status, reason=payload.reason,
        ))
        record_action(
            self.db, user.id, EntityType.LEAGUE, league.id, "LEAGUE_STATUS_CHANGE", meta,
            {"old": old_status, "new": payload.new_status, "reason": payload.reason},
        )
        await self.db.commit()
        return StatusChangeResult(
            league_id=league.id, old_status=old_status, new_status=payload.new_status,
        )

    # ─── Reads ───────────────────────────────────────────────────

    async def teams(self, league_id: int) -> list[LeagueTeam]:
        await self._get(league_id)
        result = await self.db.execute(
            select(Team, UserAccount.name)
            .join(UserAccount, UserAccount.id == Team.owner_user_id)
            .where(Team.league_id == league_id, Team.is_active.is_(True))
            .order_by(Team.created_at, Team.id),
        )
        return [
            LeagueTeam(
                team_id=team.id, team_name=team.team_name, owner_user_id=team.owner_user_id,
                owner_name=owner_name, thumbnail_url=team.thumbnail_url,
                created_at=team.created_at,
            )
            for team, owner_name in result.all()
        ]

    async def summary(self, league_id: int) -> LeagueSummary:
        league = await self._get(league_id)
        season = await self.db.get(Season, league.season_id)
        position_format = await self.db.get(PositionFormat, league.position_format_id)
        scoring_schema = await self.db.get(ScoringSchema, league.scoring_schema_id)
        teams = await self.teams(league.id)
        return LeagueSummary(
            league=LeagueOut.model_validate(league),
            season_label=season.label if season else "",
            teams_count=len(teams),
            available_slots=available_slots(league.team_slots, len(teams)),
            position_format_name=position_format.name if position_format else "",
            scoring_schema_name=scoring_schema.name if scoring_schema else "",
            teams=teams,
        )

    def _directory_query(self):
        team_counts = (
            select(Team.league_id, func.count(Team.id).label("teams_count"))
            .where(Team.is_active.is_(True))
            .group_by(Team.league_id)
            .subquery()
        )
        teams_count = func.coalesce(team_counts.c.teams_count, 0)
        stmt = (
            select(League, Season.label, teams_count)
            .join(Season, Season.id == League.season_id)
            .outerjoin(team_counts, team_counts.c.league_id == League.id)
        )
        return stmt, teams_count

    @staticmethod
    def _directory_item(league: League, label: str, count: int) -> LeagueDirectoryItem:
        return LeagueDirectoryItem(
            league_id=league.id, public_id=league.public_id, name=league.name,
            status=league.status, team_slots=league.team_slots, teams_count=count,
            available_slots=available_slots(league.team_slots, count),
            season_label=label, created_at=league.created_at,
        )

    async def directory(self) -> list[LeagueDirectoryItem]:
        stmt, _ = self._directory_query()
        result = await self.db.execute(stmt.order_by(League.created_at.desc(), League.id.desc()))
        return [self._directory_item(*row) for row in result.all()]

    async def search(
        self, name: str | None, status: int | None, only_available: bool,
        page: int, page_size: int,
    ) -> Page[LeagueDirectoryItem]:
        page, page_size = normalize_pagination(page, page_size)
        stmt, teams_count = self._directory_query()
        if name:
            term = f"%{name.strip().lower()}%"
            stmt = stmt.where(or_(
                func.lower(League.name).like(term), func.lower(League.description).like(term),
            ))
        if status is not None:
            stmt = stmt.where(League.status == status)
        if only_available:
            stmt = stmt.where(teams_count < League.team_slots)

        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        result = await self.db.execute(
            stmt.order_by(League.name, League.id)
            .offset(page_offset(page, page_size)).limit(page_size),
        )
        return Page(
            items=[self._directory_item(*row) for row in result.all()],
            total_records=total, current_page=page, page_size=page_size,
            total_pages=total_pages(total, page_size),
        )

    async def members(self, league_id: int) -> list[LeagueMemberOut]:
        await self._get(league_id)
        result = await self.db.execute(
            select(LeagueMember, UserAccount)
            .join(UserAccount, UserAccount.id == LeagueMember.user_id)
            .where(LeagueMember.league_id == league_id, LeagueMember.left_at.is_(None))
            .order_by(LeagueMember.joined_at, LeagueMember.id),
        )
        return [
            LeagueMemberOut(
                user_id=u.id, name=u.name, alias=u.alias, role_code=m.role_code,
                is_primary_commissioner=m.is_primary_commissioner,
                joined_at=m.joined_at, left_at=m.left_at,
            )
            for m, u in result.all()
        ]

    async def _roles_for(self, league_id: int, user_id: int) -> LeagueUserRoles:
        member = await active_membership(self.db, league_id, user_id)
        team_id = await self.db.scalar(
            select(Team.id).where(
                Team.league_id == league_id,
                Team.owner_user_id == user_id,
                Team.is_active.is_(True),
            ),
        )
        roles = []
        if member is not None:
            roles.append(member.role_code)
            if team_id is not None and member.role_code != LeagueRoleCode.MANAGER.value:
                roles.append(LeagueRoleCode.MANAGER.value)
        return LeagueUserRoles(
            league_id=league_id, user_id=user_id, roles=roles,
            is_primary_commissioner=bool(member and member.is_primary_commissioner),
            team_id=team_id,
        )

    async def user_roles(self, user: UserAccount, league_id: int) -> LeagueUserRoles:
        await self._get(league_id)
        return await self._roles_for(league_id, user.id)

    async def member_roles(
        self, viewer: UserAccount, league_id: int, user_id: int,
    ) -> LeagueUserRoles:
        """Roles of another user; visible to that user, commissioners and admins."""
        league = await self._get(league_id)
        if viewer.id != user_id and viewer.system_role_code != SystemRoleCode.ADMIN.value:
            await self._require_commissioner(league, viewer)
        roles = await self._roles_for(league_id, user_id)
        if not roles.roles:
            raise ResourceNotFoundError("League member", user_id)
        return roles

    async def password_info(self, user: UserAccount, league_id: int) -> LeaguePasswordInfo:
        league = await self._get(league_id)
        await self._require_primary(league, user)
        teams_count = await self._team_count(league.id)
        return LeaguePasswordInfo(
            league_id=league.id,
            league_name=league.name,
            status=league.status,
            team_slots=league.team_slots,
            teams_count=teams_count,
            available_slots=available_slots(league.team_slots, teams_count),
            has_password=bool(league.league_password_hash),
            message="The league password is stored hashed; share it directly with invited players.",
        )

    async def validate_password(self, league_id: int, password: str) -> ValidatePasswordResult:
        league = await self._get(league_id)
        return ValidatePasswordResult(
            is_valid=verify_password(password, league.league_password_hash),
        )

    # ─── Membership ──────────────────────────────────────────────

    async def join(
        self, user: UserAccount, payload: JoinLeagueRequest, meta: RequestMeta,
    ) -> JoinLeagueResult:
        league = await self._get(payload.league_id)
        if league.status != LeagueStatus.PRE_DRAFT:
            raise BusinessRuleError("The league is no longer accepting teams", "LEAGUE_NOT_OPEN")
        if not verify_password(payload.league_password, league.league_password_hash):
            raise PermissionDeniedError("Invalid league password", "INVALID_LEAGUE_PASSWORD")
        if await active_membership(self.db, league.id, user.id) is not None:
            raise ConflictError("You are already a member of this league", "ALREADY_MEMBER")

        team_count = await self._team_count(league.id)
        if team_count >= league.team_slots:
            raise BusinessRuleError("The league has no available slots", "LEAGUE_FULL")
        if await team_name_taken(self.db, league.id, payload.team_name):
            raise ConflictError(
                f"Team name '{payload.team_name}' is already used in this league",
                "TEAM_NAME_TAKEN",
            )

        self.db.add(LeagueMember(
            league_id=league.id, user_id=user.id,
            role_code=LeagueRoleCode.MANAGER.value, is_primary_commissioner=False,
        ))
        team = Team(league_id=league.id, owner_user_id=user.id, team_name=payload.team_name)
        self.db.add(team)
        await self.db.flush()
        record_action(
            self.db, user.id, EntityType.LEAGUE, league.id, "LEAGUE_JOIN", meta,
            {"team_id": team.id, "team_name": team.team_name},
        )
        await self.db.commit()
        return JoinLeagueResult(
            team_id=team.id, league_id=league.id, team_name=team.team_name,
            league_name=league.name,
            available_slots=available_slots(league.team_slots, team_count + 1),
        )

    async def remove_team(
        self, user: UserAccount, league_id: int, team_id: int, meta: RequestMeta,
    ) -> RemoveTeamResult:
        league = await self._get(league_id)
        await self._require_commissioner(league, user)
        if league.status == LeagueStatus.CLOSED:
            raise BusinessRuleError("A closed league cannot be modified", "LEAGUE_CLOSED")

        team = await self.db.get(Team, team_id)
        if team is None or team.league_id != league.id or not team.is_active:
            raise ResourceNotFoundError("Team", team_id)
        owner = await active_membership(self.db, league.id, team.owner_user_id)
        if owner is not None and owner.is_primary_commissioner:
            raise BusinessRuleError(
                "The primary commissioner's team cannot be removed", "PRIMARY_COMMISSIONER_TEAM",
            )

        if owner is not None:
            await self._close_membership(owner, league.id)
        else:
            team.is_active = False
        record_action(
            self.db, user.id, EntityType.TEAM, team.id, "TEAM_REMOVE", meta,
            {"league_id": league.id, "owner_user_id": team.owner_user_id},
        )
        await self.db.commit()
        return RemoveTeamResult(
            team_id=team.id,
            available_slots=available_slots(league.team_slots, await self._team_count(league.id)),
        )

    async def leave(
        self, user: UserAccount, league_id: int, meta: RequestMeta,
    ) -> RemoveTeamResult | None:
        league = await self._get(league_id)
        member = await self._require_member(league.id, user.id)
        if member.is_primary_commissioner:
            raise BusinessRuleError(
                "The primary commissioner must transfer the league before leaving",
                "PRIMARY_COMMISSIONER_CANNOT_LEAVE",
            )
        team = await self._close_membership(member, league.id)
        record_action(self.db, user.id, EntityType.LEAGUE, league.id, "LEAGUE_LEAVE", meta)
        await self.db.commit()
        if team is None:
            return None
        return RemoveTeamResult(
            team_id=team.id,
            available_slots=available_slots(league.team_slots, await self._team_count(league.id)),
        )

    # ─── Commissioner roles ──────────────────────────────────────

    async def _set_co_commissioner(
        self, user: UserAccount, league_id: int, target_user_id: int,
        promote: bool, meta: RequestMeta,
    ) -> LeagueMemberOut:
        league = await self._get(league_id)
        await self._require_primary(league, user)
        if target_user_id == user.id:
            raise BusinessRuleError("You cannot change your own league role", "SELF_ROLE_CHANGE")
        target = await self._require_member(league.id, target_user_id)

        expected, new_role = (
            (LeagueRoleCode.MANAGER, LeagueRoleCode.CO_COMMISSIONER) if promote
            else (LeagueRoleCode.CO_COMMISSIONER, LeagueRoleCode.MANAGER)
        )
        if target.role_code != expected.value:
            raise BusinessRuleError(
                f"Member must be a {expected.value} for this change", "ROLE_MISMATCH",
            )
        target.role_code = new_role.value
        action = "CO_COMMISSIONER_ADD" if promote else "CO_COMMISSIONER_REMOVE"
        record_action(
            self.db, user.id, EntityType.LEAGUE, league.id, action, meta,
            {"user_id": target_user_id},
        )
        await self.db.commit()

        target_user = await self.db.get(UserAccount, target_user_id)
        return LeagueMemberOut(
            user_id=target_user.id, name=target_user.name, alias=target_user.alias,
            role_code=target.role_code, is_primary_commissioner=False,
            joined_at=target.joined_at, left_at=None,
        )

    async def add_co_commissioner(
        self, user: UserAccount, league_id: int, target_user_id: int, meta: RequestMeta,
    ) -> LeagueMemberOut:
        return await self._set_co_commissioner(user, league_id, target_user_id, True, meta)

    async def remove_co_commissioner(
        self, user: UserAccount, league_id: int, target_user_id: int, meta: RequestMeta,
    ) -> LeagueMemberOut:
        return await self._set_co_commissioner(user, league_id, target_user_id, False, meta)

    async def transfer_commissioner(
        self, user: UserAccount, league_id: int, new_commissioner_user_id: int,
        meta: RequestMeta,
    ) -> TransferCommissionerResult:
        """Hand the primary role over; the previous primary stays on as co-commissioner."""
        league = await self._get(league_id)
        current = await self._require_primary(league, user)
        if new_commissioner_user_id == user.id:
            raise BusinessRuleError("You are already the primary commissioner", "SELF_TRANSFER")
        target = await self._require_member(league.id, new_commissioner_user_id)

        current.is_primary_commissioner = False
        current.role_code = LeagueRoleCode.CO_COMMISSIONER.value
        target.is_primary_commissioner = True
        target.role_code = LeagueRoleCode.COMMISSIONER.value
        record_action(
            self.db, user.id, EntityType.LEAGUE, league.id, "COMMISSIONER_TRANSFER", meta,
            {"from": user.id, "to": new_commissioner_user_id},
        )
        await self.db.commit()

        new_user = await self.db.get(UserAccount, new_commissioner_user_id)
        return TransferCommissionerResult(
            league_id=league.id,
            new_commissioner_user_id=new_user.id,
            new_commissioner_name=new_user.name,
        )
