"""ORM model for page templates."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.models.base import (
    Base,
    JSONType,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class Template(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Named layout; components is an opaque JSON object (e.g. {"header": true})."""

    __tablename__ = "templates"

    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(String(1024), nullable=True)
    components = Column(JSONType, nullable=False, default=dict)

    contents = relationship("Content", back_populates="template")
