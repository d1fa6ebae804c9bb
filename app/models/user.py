"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from app.core.roles import Role
from app.core.security import hash_password, verify_password
from app.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    """
    User account for token authentication and role-based access control.

    Assign the plain password to `password`; only the bcrypt hash is stored and it
    is recomputed every time the password is set. failed_login_attempts is stored
    but not acted on (no lockout).
    """

    __tablename__ = "users"

    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    is_verified = Column(Boolean, nullable=False, default=False)
    failed_login_attempts = Column(Integer, nullable=False, default=0)

    contents = relationship("Content", back_populates="author")

    @property
    def password(self) -> str:
        raise AttributeError("password is write-only; use check_password()")

    @password.setter
    def password(self, plain_password: str) -> None:
        self.password_hash = hash_password(plain_password)

    def check_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.password_hash)
