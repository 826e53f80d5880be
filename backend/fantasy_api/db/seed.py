"""Reference Data Seeding — idempotent insert of role catalogues, formats and scoring schemas.

Invariants:
    - Running the seed twice inserts nothing the second time
    - Rows are matched by natural key (role_code, format name, schema name+version)

Usage:
    python -m fantasy_api.db.seed                 # reference data only
    python -m fantasy_api.db.seed admin@x.com     # ...and promote that user to ADMIN
"""

import asyncio
import logging
import sys

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.config import get_settings
from fantasy_api.core.domain_types import SystemRoleCode
from fantasy_api.core.reference_data import (
    SYSTEM_ROLES, LEAGUE_ROLES, POSITION_FORMATS, SCORING_SCHEMAS,
)
from fantasy_api.db.session import create_session_factory
from fantasy_api.models import (
    SystemRole, LeagueRole, PositionFormat, PositionSlot,
    ScoringSchema, ScoringRule, UserAccount,
)

logger = logging.getLogger(__name__)


async def seed_reference_data(db: AsyncSession) -> int:
    """Insert missing reference rows. Returns the number of top-level rows added."""
    added = 0

    existing_roles = set((await db.execute(select(SystemRole.role_code))).scalars())
    for role in SYSTEM_ROLES:
        if role["role_code"] not in existing_roles:
            db.add(SystemRole(**role))
            added += 1

    existing_league_roles = set((await db.execute(select(LeagueRole.role_code))).scalars())
    for role in LEAGUE_ROLES:
        if role["role_code"] not in existing_league_roles:
            db.add(LeagueRole(**role))
            added += 1

    existing_formats = set((await db.execute(select(PositionFormat.name))).scalars())
    for fmt in POSITION_FORMATS:
        if fmt["name"] in existing_formats:
            continue
        db.add(PositionFormat(
            name=fmt["name"],
            description=fmt["description"],
            slots=[
                PositionSlot(position_code=code, slot_count=count, points_allowed=scores)
                for code, count, scores in fmt["slots"]
            ],
        ))
        added += 1

    existing_schemas = {
        (name, version) for name, version in
        (await db.execute(select(ScoringSchema.name, ScoringSchema.version))).all()
    }
    for schema in SCORING_SCHEMAS:
        if (schema["name"], schema["version"]) in existing_schemas:
            continue
        db.add(ScoringSchema(
            name=schema["name"],
            version=schema["version"],
            is_template=schema["is_template"],
            description=schema["description"],
            rules=[
                ScoringRule(
                    metric_code=metric, points_per_unit=ppu, unit=unit,
                    unit_value=unit_value, flat_points=flat,
                )
                for metric, ppu, unit, unit_value, flat in schema["rules"]
            ],
        ))
        added += 1

    await db.commit()
    logger.info(f"Reference data seeded ({added} new rows)")
    return added


async def promote_to_admin(db: AsyncSession, email: str) -> bool:
    """Grant ADMIN to an existing account. Returns False when no such user exists."""
    result = await db.execute(
        select(UserAccount).where(UserAccount.email == email.strip().lower()),
    )
    user = result.scalar_one_or_none()
    if user is None:
        return False
    user.system_role_code = SystemRoleCode.ADMIN.value
    await db.commit()
    logger.info(f"User {user.id} promoted to ADMIN", extra={"user_id": user.id})
    return True


async def _main(argv: list[str]) -> int:
    factory = create_session_factory(get_settings().database_url)
    async with factory() as db:
        await seed_reference_data(db)
        if argv:
            if not await promote_to_admin(db, argv[0]):
                logger.error(f"No user registered with email {argv[0]}")
                return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(_main(sys.argv[1:])))
