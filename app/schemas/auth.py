"""Request/response schemas for auth endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.roles import Role
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
)


class RegisterRequest(BaseModel):
    """New account; role is always 'user' for self-registration."""

    username: str = Field(..., max_length=USERNAME_MAX_LEN, description="Username")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password (8-128 characters)",
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class TokenResponse(BaseModel):
    """Bearer token returned after successful login."""

    token: str = Field(..., description="Signed bearer token, valid for one hour")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Identity decoded from the bearer token."""

    id: str
    role: Role

    model_config = ConfigDict(from_attributes=True)


class UserPublic(BaseModel):
    """User fields safe to embed in other resources."""

    id: UUID
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserListItem(UserPublic):
    """User entry for admin list (no password hash)."""

    role: Role
    is_verified: bool
    created_at: datetime


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserListItem]
