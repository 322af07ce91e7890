"""Pydantic schemas for authentication."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCredentials(BaseModel):
    """Email and password, as sent to /register and /login.

    Only presence is checked. The email is kept exactly as given.
    """

    email: str = Field(..., min_length=1, description="Email address")
    password: str = Field(..., min_length=1, description="Plaintext password")


class UserResponse(BaseModel):
    """User as returned by the store. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: datetime


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    sub: str = Field(..., description="User ID as a string")
    email: str
    iat: int
    exp: int | None = None

    @field_validator("sub")
    @classmethod
    def sub_is_user_id(cls, value: str) -> str:
        if not value.isdigit():
            raise ValueError("sub must be a numeric user ID")
        return value

    @property
    def user_id(self) -> int:
        return int(self.sub)


class TokenResponse(BaseModel):
    """Response body of /register and /login."""

    token: str
