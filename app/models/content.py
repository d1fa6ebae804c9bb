"""ORM model for content entries (pages, posts)."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class Content(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    """
    A piece of content written by a user, optionally rendered with a template.

    template_id is cleared (not cascaded) when the template goes away.
    """

    __tablename__ = "contents"
    __table_args__ = (
        CheckConstraint("status IN ('draft', 'published')", name="ck_contents_status"),
    )

    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    body = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default="draft")
    author_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    template_id = Column(
        Uuid,
        ForeignKey("templates.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    author = relationship("User", back_populates="contents")
    template = relationship("Template", back_populates="contents")
