"""Pydantic schemas for authentication flows."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

MAX_USERNAME_LEN = 64  # users.username column width
MAX_PASSWORD_LEN = 72  # bcrypt limit


class Credentials(BaseModel):
    """Username/password pair submitted by the register and login forms."""

    username: str
    password: str

    @field_validator("username", "password")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("username")
    @classmethod
    def username_length_guard(cls, v: str) -> str:
        if len(v) > MAX_USERNAME_LEN:
            raise ValueError(f"username must be <= {MAX_USERNAME_LEN} characters")
        return v

    @field_validator("password")
    @classmethod
    def password_length_guard(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_LEN:
            raise ValueError(f"password must be <= {MAX_PASSWORD_LEN} bytes for bcrypt")
        return v


class SessionUser(BaseModel):
    """The user a request's session cookie resolved to."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
