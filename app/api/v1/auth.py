"""Registration, login and admin user management."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_current_identity, get_token_service, require_admin
from app.core.database import get_db
from app.core.errors import ServiceError
from app.core.roles import Role
from app.core.security import Identity, TokenService
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from app.services import users as user_service

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_CREDENTIALS = {"errors": [{"msg": "Invalid email or password"}]}


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """Create a new account with role 'user'. Username and email must be unused."""
    user_service.register_user(db, body.username, body.email, body.password)
    return RegisterResponse()


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"description": "Invalid email or password"}},
)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse | JSONResponse:
    """
    Authenticate with email and password; returns a bearer token valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = user_service.authenticate(db, body.email, body.password)
    if user is None:
        logger.warning("Failed login attempt")
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=INVALID_CREDENTIALS)
    token = tokens.issue(Identity(id=str(user.id), role=Role(user.role)))
    return TokenResponse(token=token, token_type="bearer")


@router.get("/me", response_model=CurrentUser)
def me(identity: Annotated[Identity, Depends(get_current_identity)]) -> CurrentUser:
    """Return the identity carried by the caller's token."""
    return CurrentUser(id=identity.id, role=identity.role)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all active users (admin only)."""
    users = user_service.list_users(db)
    return UsersListResponse(users=[UserListItem.model_validate(u) for u in users])


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Soft-delete a user (admin only). Admins cannot delete themselves."""
    if str(user_id) == admin.id:
        raise ServiceError("Admins cannot delete their own account", field="user_id")
    user_service.soft_delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
