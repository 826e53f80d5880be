"""Initial schema — accounts, sessions, seasons, reference data, NFL catalogue, leagues, teams, audit.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ts(name: str, nullable: bool = False) -> sa.Column:
    if nullable:
        return sa.Column(name, sa.DateTime(timezone=True), nullable=True)
    return sa.Column(name, sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def _user_fk(name: str, nullable: bool = True, ondelete: str | None = "SET NULL") -> sa.Column:
    return sa.Column(
        name, sa.Integer, sa.ForeignKey("user_account.id", ondelete=ondelete), nullable=nullable,
    )


def _image(prefix: str) -> list[sa.Column]:
    return [
        sa.Column(f"{prefix}_url", sa.String(400), nullable=True),
        sa.Column(f"{prefix}_width", sa.Integer, nullable=True),
        sa.Column(f"{prefix}_height", sa.Integer, nullable=True),
        sa.Column(f"{prefix}_bytes", sa.Integer, nullable=True),
    ]


def _change_log(table: str, parent_col: str, parent_table: str, value_len: int = 400) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            parent_col, sa.Integer,
            sa.ForeignKey(f"{parent_table}.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        _user_fk("changed_by_user_id"),
        sa.Column("field_name", sa.String(50), nullable=False),
        sa.Column("old_value", sa.String(value_len), nullable=True),
        sa.Column("new_value", sa.String(value_len), nullable=True),
        _ts("changed_at"),
    )


def upgrade() -> None:
    # ─── Roles & accounts ────────────────────────────────────────
    op.create_table(
        "system_role",
        sa.Column("role_code", sa.String(20), primary_key=True),
        sa.Column("display", sa.String(50), nullable=False),
        sa.Column("description", sa.String(300), nullable=True),
    )
    op.create_table(
        "league_role",
        sa.Column("role_code", sa.String(20), primary_key=True),
        sa.Column("display", sa.String(50), nullable=False),
        sa.Column("description", sa.String(300), nullable=True),
    )
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("alias", sa.String(50), nullable=True),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("language_code", sa.String(10), nullable=False, server_default="en"),
        sa.Column(
            "system_role_code", sa.String(20), sa.ForeignKey("system_role.role_code"),
            nullable=False, server_default="USER",
        ),
        sa.Column("account_status", sa.Integer, nullable=False, server_default="1"),
        sa.Column("failed_login_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("locked_until", sa.DateTime(timezone=True), nullable=True),
        *_image("profile_image"),
        _ts("created_at"),
        _ts("updated_at", nullable=True),
    )
    op.create_table(
        "system_role_change_log",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        _user_fk("changed_by_user_id"),
        sa.Column("old_role_code", sa.String(20), nullable=False),
        sa.Column("new_role_code", sa.String(20), nullable=False),
        sa.Column("reason", sa.String(500), nullable=True),
        _ts("changed_at"),
    )
    op.create_table(
        "profile_change_log",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        _user_fk("changed_by_user_id", nullable=False, ondelete=None),
        sa.Column("field_name", sa.String(50), nullable=False),
        sa.Column("old_value", sa.String(400), nullable=True),
        sa.Column("new_value", sa.String(400), nullable=True),
        _ts("changed_at"),
        sa.Column("source_ip", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.String(300), nullable=True),
    )

    # ─── Sessions & credentials ──────────────────────────────────
    op.create_table(
        "user_session",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        _ts("created_at"),
        _ts("last_activity_at"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_valid", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("source_ip", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.String(300), nullable=True),
    )
    op.create_table(
        "login_attempt",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("user_account.id", ondelete="SET NULL"),
            nullable=True, index=True,
        ),
        sa.Column("email", sa.String(50), nullable=False),
        sa.Column("success", sa.Boolean, nullable=False),
        sa.Column("failure_reason", sa.String(50), nullable=True),
        _ts("attempted_at"),
        sa.Column("source_ip", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.String(300), nullable=True),
    )
    op.create_table(
        "password_reset_request",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("token_hash", sa.String(64), nullable=False, unique=True),
        _ts("requested_at"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("source_ip", sa.String(45), nullable=True),
    )

    # ─── Seasons & reference data ────────────────────────────────
    op.create_table(
        "season",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("label", sa.String(20), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("week_count", sa.Integer, nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("is_current", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        _user_fk("created_by_user_id"),
        _ts("created_at"),
        _ts("updated_at", nullable=True),
    )
    op.create_table(
        "position_format",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.String(300), nullable=True),
        _ts("created_at"),
    )
    op.create_table(
        "position_slot",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "position_format_id", sa.Integer,
            sa.ForeignKey("position_format.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("position_code", sa.String(20), nullable=False),
        sa.Column("slot_count", sa.Integer, nullable=False),
        sa.Column("points_allowed", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("position_format_id", "position_code"),
    )
    op.create_table(
        "scoring_schema",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("is_template", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("description", sa.String(300), nullable=True),
        _ts("created_at"),
        sa.UniqueConstraint("name", "version"),
    )
    op.create_table(
        "scoring_rule",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "scoring_schema_id", sa.Integer,
            sa.ForeignKey("scoring_schema.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("metric_code", sa.String(30), nullable=False),
        sa.Column("points_per_unit", sa.Float, nullable=True),
        sa.Column("unit", sa.String(20), nullable=True),
        sa.Column("unit_value", sa.Integer, nullable=True),
        sa.Column("flat_points", sa.Float, nullable=True),
        sa.UniqueConstraint("scoring_schema_id", "metric_code"),
    )

    # ─── NFL catalogue ───────────────────────────────────────────
    op.create_table(
        "nfl_team",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("team_name", sa.String(100), nullable=False, unique=True),
        sa.Column("city", sa.String(100), nullable=False),
        *_image("team_image"),
        *_image("thumbnail"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        _user_fk("created_by_user_id"),
        _ts("created_at"),
        _user_fk("updated_by_user_id"),
        _ts("updated_at", nullable=True),
    )
    _change_log("nfl_team_change_log", "nfl_team_id", "nfl_team")
    op.create_table(
        "nfl_player",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("position", sa.String(20), nullable=False, index=True),
        sa.Column(
            "nfl_team_id", sa.Integer, sa.ForeignKey("nfl_team.id"), nullable=False, index=True,
        ),
        sa.Column("injury_status", sa.String(50), nullable=True),
        sa.Column("injury_description", sa.String(300), nullable=True),
        *_image("photo"),
        *_image("thumbnail"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        _user_fk("created_by_user_id"),
        _ts("created_at"),
        _ts("updated_at", nullable=True),
        sa.UniqueConstraint("first_name", "last_name", "nfl_team_id"),
    )
    _change_log("nfl_player_change_log", "nfl_player_id", "nfl_player")

    # ─── Leagues ─────────────────────────────────────────────────
    op.create_table(
        "league",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("public_id", sa.Integer, nullable=False, unique=True),
        sa.Column("season_id", sa.Integer, sa.ForeignKey("season.id"), nullable=False, index=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("team_slots", sa.Integer, nullable=False),
        sa.Column("league_password_hash", sa.String(100), nullable=False),
        sa.Column("status", sa.Integer, nullable=False, server_default="0"),
        sa.Column("allow_decimals", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("playoff_teams", sa.Integer, nullable=False, server_default="4"),
        sa.Column(
            "trade_deadline_enabled", sa.Boolean, nullable=False, server_default=sa.false(),
        ),
        sa.Column("trade_deadline_date", sa.Date, nullable=True),
        sa.Column("max_roster_changes", sa.Integer, nullable=True),
        sa.Column("max_free_agent_adds", sa.Integer, nullable=True),
        sa.Column(
            "position_format_id", sa.Integer, sa.ForeignKey("position_format.id"), nullable=False,
        ),
        sa.Column(
            "scoring_schema_id", sa.Integer, sa.ForeignKey("scoring_schema.id"), nullable=False,
        ),
        _user_fk("created_by_user_id", nullable=False, ondelete=None),
        _ts("created_at"),
        _ts("updated_at", nullable=True),
        sa.UniqueConstraint("season_id", "name"),
    )
    op.create_table(
        "league_member",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "league_id", sa.Integer, sa.ForeignKey("league.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column(
            "role_code", sa.String(20), sa.ForeignKey("league_role.role_code"), nullable=False,
        ),
        sa.Column(
            "is_primary_commissioner", sa.Boolean, nullable=False, server_default=sa.false(),
        ),
        _ts("joined_at"),
        sa.Column("left_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "league_config_history",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "league_id", sa.Integer, sa.ForeignKey("league.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        _user_fk("changed_by_user_id", nullable=False, ondelete=None),
        sa.Column("field_name", sa.String(50), nullable=False),
        sa.Column("old_value", sa.String(500), nullable=True),
        sa.Column("new_value", sa.String(500), nullable=True),
        _ts("changed_at"),
    )
    op.create_table(
        "league_status_history",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "league_id", sa.Integer, sa.ForeignKey("league.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        _user_fk("changed_by_user_id", nullable=False, ondelete=None),
        sa.Column("old_status", sa.Integer, nullable=False),
        sa.Column("new_status", sa.Integer, nullable=False),
        sa.Column("reason", sa.String(300), nullable=True),
        _ts("changed_at"),
    )

    # ─── Fantasy teams ───────────────────────────────────────────
    op.create_table(
        "team",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "league_id", sa.Integer, sa.ForeignKey("league.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        _user_fk("owner_user_id", nullable=False, ondelete=None),
        sa.Column("team_name", sa.String(100), nullable=False),
        *_image("team_image"),
        *_image("thumbnail"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        _ts("created_at"),
        _ts("updated_at", nullable=True),
    )
    op.create_index("ix_team_owner_user_id", "team", ["owner_user_id"])
    op.create_table(
        "team_change_log",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "team_id", sa.Integer, sa.ForeignKey("team.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        _user_fk("changed_by_user_id", nullable=False, ondelete=None),
        sa.Column("field_name", sa.String(50), nullable=False),
        sa.Column("old_value", sa.String(400), nullable=True),
        sa.Column("new_value", sa.String(400), nullable=True),
        _ts("changed_at"),
    )
    op.create_table(
        "team_roster",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "team_id", sa.Integer, sa.ForeignKey("team.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column(
            "nfl_player_id", sa.Integer, sa.ForeignKey("nfl_player.id"),
            nullable=False, index=True,
        ),
        sa.Column("acquisition_type", sa.String(20), nullable=False),
        _ts("acquisition_date"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("dropped_date", sa.DateTime(timezone=True), nullable=True),
        _user_fk("added_by_user_id", nullable=False, ondelete=None),
    )

    # ─── Audit ───────────────────────────────────────────────────
    op.create_table(
        "user_action_log",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "actor_user_id", sa.Integer, sa.ForeignKey("user_account.id", ondelete="SET NULL"),
            nullable=True, index=True,
        ),
        sa.Column("entity_type", sa.String(30), nullable=False, index=True),
        sa.Column("entity_id", sa.String(50), nullable=False),
        sa.Column("action_code", sa.String(50), nullable=False),
        _ts("action_at"),
        sa.Column("source_ip", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.String(300), nullable=True),
        sa.Column("details", sa.Text, nullable=True),
    )
    op.create_index("ix_user_action_log_action_at", "user_action_log", ["action_at"])


def downgrade() -> None:
    for table in (
        "user_action_log", "team_roster", "team_change_log", "team",
        "league_status_history", "league_config_history", "league_member", "league",
        "nfl_player_change_log", "nfl_player", "nfl_team_change_log", "nfl_team",
        "scoring_rule", "scoring_schema", "position_slot", "position_format", "season",
        "password_reset_request", "login_attempt", "user_session",
        "profile_change_log", "system_role_change_log", "user_account",
        "league_role", "system_role",
    ):
        op.drop_table(table)
