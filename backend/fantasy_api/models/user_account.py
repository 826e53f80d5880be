"""User Account ORM — registered users, lockout state, and profile change history.

Invariants:
    - email is stored lower-cased and unique
    - account_status follows AccountStatus (0 disabled, 1 active, 2 locked)
    - failed_login_count resets to 0 on every successful login
    - locked_until is only meaningful while account_status == LOCKED

Design Decisions:
    - Profile image stored as metadata only (url + dimensions + size)
    - ProfileChangeLog is one row per changed field, old/new as strings
"""

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from fantasy_api.db.base import Base, utc_now


class UserAccount(Base):
    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    alias: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    language_code: Mapped[str] = mapped_column(
        String(10), nullable=False, default="en",
    )
    system_role_code: Mapped[str] = mapped_column(
        ForeignKey("system_role.role_code"), nullable=False, default="USER",
    )
    account_status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
    failed_login_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    profile_image_url: Mapped[str | None] = mapped_column(String(400), nullable=True)
    profile_image_width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_image_height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_image_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utc_now,
    )


class ProfileChangeLog(Base):
    __tablename__ = "profile_change_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    changed_by_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id"), nullable=False,
    )
    field_name: Mapped[str] = mapped_column(String(50), nullable=False)
    old_value: Mapped[str | None] = mapped_column(String(400), nullable=True)
    new_value: Mapped[str | None] = mapped_column(String(400), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    source_ip: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(300), nullable=True)
