"""Auth Schemas — registration, login and password reset payloads.

Invariants:
    - Names and emails are stripped before length checks
    - Password complexity is NOT checked here: core/validate_credentials reports every
      rule at once, which the field constraints cannot express
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from fantasy_api.schemas.common import ProfileImageFields


class RegisterRequest(ProfileImageFields):
    name: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=1, max_length=50)
    alias: str | None = Field(None, max_length=50)
    password: str = Field(min_length=1, max_length=100)
    password_confirm: str = Field(min_length=1, max_length=100)
    language_code: str = Field("en", min_length=1, max_length=10)

    @field_validator("name", "email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("alias")
    @classmethod
    def strip_alias(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class RegisterResult(BaseModel):
    user_id: int
    email: str
    name: str


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=100)


class LoginResult(BaseModel):
    session_id: UUID
    user_id: int
    email: str
    name: str
    system_role_code: str
    expires_at: datetime


class RequestResetRequest(BaseModel):
    email: str = Field(min_length=1, max_length=50)


class ResetWithTokenRequest(BaseModel):
    token: str = Field(min_length=1, max_length=100)
    new_password: str = Field(min_length=1, max_length=100)
    confirm_password: str = Field(min_length=1, max_length=100)
