"""System Role Schemas — role catalogue, role changes and users-by-role listing."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SystemRoleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    role_code: str
    display: str
    description: str | None = None


class ChangeRoleRequest(BaseModel):
    new_role_code: str = Field(min_length=3, max_length=20)
    reason: str | None = Field(None, max_length=500)

    @field_validator("new_role_code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper()


class ChangeRoleResult(BaseModel):
    user_id: int
    old_role_code: str
    new_role_code: str


class RoleChangeEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    old_role_code: str
    new_role_code: str
    changed_by_user_id: int | None = None
    reason: str | None = None
    changed_at: datetime


class UserWithRole(BaseModel):
    user_id: int
    email: str
    name: str
    alias: str | None = None
    system_role_code: str
    account_status: int
    created_at: datetime
