"""Content persistence: slugs, ownership checks and soft delete."""

import logging
import uuid
from typing import Any

from slugify import slugify
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ServiceError,
)
from app.core.roles import Role
from app.core.security import Identity
from app.models import Content, Template
from app.schemas.contents import SLUG_MAX_LENGTH, ContentCreate, ContentUpdate

logger = logging.getLogger(__name__)


def make_slug(text: str) -> str:
    """Lowercase, hyphen-separated slug for text. Raises ServiceError when nothing usable remains."""
    slug = slugify(text, lowercase=True, max_length=SLUG_MAX_LENGTH)
    if not slug:
        raise ServiceError("Slug must contain at least one letter or digit", field="slug")
    return slug


def _ensure_slug_free(db: Session, slug: str, exclude_id: uuid.UUID | None = None) -> None:
    # Soft-deleted rows keep their slug; the unique index covers them too.
    q = db.query(Content).filter(Content.slug == slug)
    if exclude_id is not None:
        q = q.filter(Content.id != exclude_id)
    if q.first() is not None:
        raise ConflictError("Slug already in use", field="slug")


def _ensure_template(db: Session, template_id: uuid.UUID) -> None:
    exists = (
        db.query(Template.id)
        .filter(Template.id == template_id, Template.deleted_at.is_(None))
        .first()
    )
    if exists is None:
        raise ServiceError("Template not found", field="templateId")


def _ensure_can_modify(content: Content, identity: Identity) -> None:
    if identity.role == Role.ADMIN:
        return
    if str(content.author_id) != identity.id:
        raise PermissionDeniedError("Only the author or an admin can modify this content")


def create_content(db: Session, author_id: uuid.UUID, data: ContentCreate) -> Content:
    """Persist new content owned by author_id; the slug comes from data.slug or the title."""
    slug = make_slug(data.slug if data.slug and data.slug.strip() else data.title)
    _ensure_slug_free(db, slug)
    if data.template_id is not None:
        _ensure_template(db, data.template_id)

    content = Content(
        title=data.title,
        slug=slug,
        body=data.body,
        status=data.status,
        author_id=author_id,
        template_id=data.template_id,
    )
    db.add(content)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request took the slug after the check above
        db.rollback()
        _ensure_slug_free(db, slug)
        raise
    db.refresh(content)
    logger.info(
        "Created content",
        extra={"content_id": str(content.id), "author_id": str(author_id), "slug": slug},
    )
    return content


def _active_contents(db: Session):
    return (
        db.query(Content)
        .options(joinedload(Content.author), joinedload(Content.template))
        .filter(Content.deleted_at.is_(None))
    )


def list_contents(db: Session, status: str | None = None) -> list[Content]:
    """Active contents with author and template loaded, newest first."""
    q = _active_contents(db)
    if status is not None:
        q = q.filter(Content.status == status)
    return q.order_by(Content.created_at.desc()).all()


def get_content(db: Session, content_id: uuid.UUID) -> Content:
    """Raises NotFoundError."""
    content = _active_contents(db).filter(Content.id == content_id).first()
    if content is None:
        raise NotFoundError("Content not found")
    return content


def get_content_by_slug(db: Session, slug: str) -> Content:
    """Raises NotFoundError."""
    content = _active_contents(db).filter(Content.slug == slug).first()
    if content is None:
        raise NotFoundError("Content not found")
    return content


def update_content(
    db: Session,
    content_id: uuid.UUID,
    data: ContentUpdate,
    identity: Identity,
) -> Content:
    """Apply a partial update. Only the author or an admin may update."""
    content = get_content(db, content_id)
    _ensure_can_modify(content, identity)

    changes: dict[str, Any] = data.model_dump(exclude_unset=True)
    for field in ("title", "body", "status", "slug"):
        if field in changes and changes[field] is None:
            changes.pop(field)
    if "slug" in changes:
        changes["slug"] = make_slug(changes["slug"])
        if changes["slug"] != content.slug:
            _ensure_slug_free(db, changes["slug"], exclude_id=content.id)
    if changes.get("template_id") is not None:
        _ensure_template(db, changes["template_id"])

    for field, value in changes.items():
        setattr(content, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if "slug" in changes:
            _ensure_slug_free(db, changes["slug"], exclude_id=content_id)
        raise
    db.refresh(content)
    return content


def delete_content(db: Session, content_id: uuid.UUID, identity: Identity) -> None:
    """Soft-delete. Only the author or an admin may delete."""
    content = get_content(db, content_id)
    _ensure_can_modify(content, identity)
    content.soft_delete()
    db.commit()
    logger.info("Deleted content", extra={"content_id": str(content.id)})
