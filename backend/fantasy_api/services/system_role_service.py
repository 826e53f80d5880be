"""System Role Service — role catalogue, admin role changes and users-by-role listing.

Invariants:
    - new_role_code must exist in the system_role table
    - An administrator cannot change their own role
    - Each change writes exactly one SystemRoleChangeLog row
"""

import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_api.core.domain_types import EntityType, RequestMeta
from fantasy_api.core.errors import (
    BusinessRuleError, InvalidInputError, ResourceNotFoundError,
)
from fantasy_api.core.pagination import normalize_pagination, page_offset, total_pages
from fantasy_api.models import SystemRole, SystemRoleChangeLog, UserAccount
from fantasy_api.schemas.common import Page
from fantasy_api.schemas.system_role import (
    ChangeRoleResult, RoleChangeEntry, SystemRoleOut, UserWithRole,
)
from fantasy_api.services.audit_service import record_action

logger = logging.getLogger(__name__)


class SystemRoleService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_roles(self) -> list[SystemRoleOut]:
        result = await self.db.execute(select(SystemRole).order_by(SystemRole.role_code))
        return [SystemRoleOut.model_validate(r) for r in result.scalars().all()]

    async def change_user_role(
        self, admin: UserAccount, user_id: int, new_role_code: str,
        reason: str | None, meta: RequestMeta,
    ) -> ChangeRoleResult:
        if admin.id == user_id:
            raise BusinessRuleError("You cannot change your own role", "SELF_ROLE_CHANGE")
        user = await self.db.get(UserAccount, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        if await self.db.get(SystemRole, new_role_code) is None:
            raise InvalidInputError(f"Role '{new_role_code}' does not exist.")

        old_role_code = user.system_role_code
        if old_role_code == new_role_code:
            raise BusinessRuleError("The user already has that role", "ROLE_UNCHANGED")

        user.system_role_code = new_role_code
        self.db.add(SystemRoleChangeLog(
            user_id=user.id,
            changed_by_user_id=admin.id,
            old_role_code=old_role_code,
            new_role_code=new_role_code,
            reason=reason,
        ))
        record_action(
            self.db, admin.id, EntityType.USER, user.id, "ROLE_CHANGE", meta,
            {"old": old_role_code, "new": new_role_code},
        )
        await self.db.commit()
        return ChangeRoleResult(
            user_id=user.id, old_role_code=old_role_code, new_role_code=new_role_code,
        )

    async def role_changes(self, user_id: int) -> list[RoleChangeEntry]:
        if await self.db.get(UserAccount, user_id) is None:
            raise ResourceNotFoundError("User", user_id)
        result = await self.db.execute(
            select(SystemRoleChangeLog)
            .where(SystemRoleChangeLog.user_id == user_id)
            .order_by(SystemRoleChangeLog.changed_at.desc(), SystemRoleChangeLog.id.desc()),
        )
        return [RoleChangeEntry.model_validate(r) for r in result.scalars().all()]

    async def list_users(
        self, role_code: str | None, search: str | None, page: int, page_size: int,
    ) -> Page[UserWithRole]:
        page, page_size = normalize_pagination(page, page_size)
        filters = []
        if role_code:
            filters.append(UserAccount.system_role_code == role_code.upper())
        if search:
            term = f"%{search.strip().lower()}%"
            filters.append(or_(
                func.lower(UserAccount.name).like(term),
                UserAccount.email.like(term),
                func.lower(UserAccount.alias).like(term),
            ))

        total = await self.db.scalar(select(func.count(UserAccount.id)).where(*filters)) or 0
        result = await self.db.execute(
            select(UserAccount).where(*filters)
            .order_by(UserAccount.name, UserAccount.id)
            .offset(page_offset(page, page_size)).limit(page_size),
        )
        items = [
            UserWithRole(
                user_id=u.id, email=u.email, name=u.name, alias=u.alias,
                system_role_code=u.system_role_code,
                account_status=u.account_status, created_at=u.created_at,
            )
            for u in result.scalars().all()
        ]
        return Page(
            items=items, total_records=total, current_page=page,
            page_size=page_size, total_pages=total_pages(total, page_size),
        )
