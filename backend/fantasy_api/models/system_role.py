"""System Role ORM — application-wide role catalogue and role change audit trail.

Invariants:
    - role_code is the natural primary key (ADMIN, USER)
    - Every role change writes exactly one SystemRoleChangeLog row
"""

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from fantasy_api.db.base import Base, utc_now


class SystemRole(Base):
    __tablename__ = "system_role"

    role_code: Mapped[str] = mapped_column(String(20), primary_key=True)
    display: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(300), nullable=True)


class SystemRoleChangeLog(Base):
    __tablename__ = "system_role_change_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    changed_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True,
    )
    old_role_code: Mapped[str] = mapped_column(String(20), nullable=False)
    new_role_code: Mapped[str] = mapped_column(String(20), nullable=False)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
