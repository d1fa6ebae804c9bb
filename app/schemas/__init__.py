"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserListItem,
    UserPublic,
    UsersListResponse,
)
from app.schemas.contents import (
    ContentCreate,
    ContentRead,
    ContentStatus,
    ContentUpdate,
    ContentWithRelations,
)
from app.schemas.health import HealthResponse
from app.schemas.templates import TemplateCreate, TemplateRead, TemplateUpdate

__all__ = [
    "ContentCreate",
    "ContentRead",
    "ContentStatus",
    "ContentUpdate",
    "ContentWithRelations",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    "TemplateCreate",
    "TemplateRead",
    "TemplateUpdate",
    "TokenResponse",
    "UserListItem",
    "UserPublic",
    "UsersListResponse",
]
