"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.content import Content
from app.models.template import Template
from app.models.user import User

__all__ = ["Base", "Content", "Template", "User"]
