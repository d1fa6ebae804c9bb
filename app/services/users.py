"""User registration, credential checks and admin user management."""

import logging
import uuid

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.core.roles import Role
from app.models import User

logger = logging.getLogger(__name__)


def _ensure_user_free(db: Session, username: str, email: str) -> None:
    existing = (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .all()
    )
    for u in existing:
        if u.username == username:
            raise ConflictError("Username already in use", field="username")
        if u.email == email:
            raise ConflictError("Email already in use", field="email")


def register_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: Role = Role.USER,
) -> User:
    """
    Create a user with a hashed password.

    Soft-deleted accounts still hold their username and email, so they are
    included in the uniqueness check. Raises ConflictError.
    """
    email = email.strip().lower()
    _ensure_user_free(db, username, email)

    user = User(username=username, email=email, role=Role(role).value)
    user.password = password
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        _ensure_user_free(db, username, email)
        raise
    db.refresh(user)
    logger.info("Registered user", extra={"user_id": str(user.id), "role": user.role})
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    """Return the active user matching email and password, or None."""
    user = (
        db.query(User)
        .filter(User.email == email.strip().lower(), User.deleted_at.is_(None))
        .first()
    )
    if user is None or not user.check_password(password):
        return None
    return user


def get_user(db: Session, user_id: uuid.UUID | str) -> User:
    """Active user by id. Raises NotFoundError."""
    try:
        key = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
    except ValueError as e:
        raise NotFoundError("User not found") from e
    user = db.query(User).filter(User.id == key, User.deleted_at.is_(None)).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(db: Session) -> list[User]:
    return (
        db.query(User)
        .filter(User.deleted_at.is_(None))
        .order_by(User.created_at, User.username)
        .all()
    )


def soft_delete_user(db: Session, user_id: uuid.UUID | str) -> None:
    """Mark the user deleted; their content stays in place."""
    user = get_user(db, user_id)
    user.soft_delete()
    db.commit()
    logger.info("Soft-deleted user", extra={"user_id": str(user.id)})
