"""Template persistence: create, read, update and soft delete."""

import logging
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models import Content, Template
from app.schemas.templates import TemplateCreate, TemplateUpdate

logger = logging.getLogger(__name__)


def _ensure_name_free(db: Session, name: str, exclude_id: uuid.UUID | None = None) -> None:
    q = db.query(Template).filter(Template.name == name)
    if exclude_id is not None:
        q = q.filter(Template.id != exclude_id)
    if q.first() is not None:
        raise ConflictError("Template name already in use", field="name")


def create_template(db: Session, data: TemplateCreate) -> Template:
    _ensure_name_free(db, data.name)
    template = Template(
        name=data.name,
        description=data.description,
        components=data.components,
    )
    db.add(template)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        _ensure_name_free(db, data.name)
        raise
    db.refresh(template)
    logger.info("Created template", extra={"template_id": str(template.id)})
    return template


def list_templates(db: Session) -> list[Template]:
    return (
        db.query(Template)
        .filter(Template.deleted_at.is_(None))
        .order_by(Template.name)
        .all()
    )


def get_template(db: Session, template_id: uuid.UUID) -> Template:
    """Active template by id. Raises NotFoundError."""
    template = (
        db.query(Template)
        .filter(Template.id == template_id, Template.deleted_at.is_(None))
        .first()
    )
    if template is None:
        raise NotFoundError("Template not found")
    return template


def update_template(db: Session, template_id: uuid.UUID, data: TemplateUpdate) -> Template:
    template = get_template(db, template_id)
    changes: dict[str, Any] = data.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    if "components" in changes and changes["components"] is None:
        changes.pop("components")
    if "name" in changes and changes["name"] != template.name:
        _ensure_name_free(db, changes["name"], exclude_id=template.id)
    for field, value in changes.items():
        setattr(template, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if "name" in changes:
            _ensure_name_free(db, changes["name"], exclude_id=template_id)
        raise
    db.refresh(template)
    return template


def delete_template(db: Session, template_id: uuid.UUID) -> int:
    """
    Soft-delete a template and detach it from every content row that used it.

    Returns the number of content rows whose template_id was cleared.
    """
    template = get_template(db, template_id)
    detached = (
        db.query(Content)
        .filter(Content.template_id == template.id)
        .update({Content.template_id: None}, synchronize_session="fetch")
    )
    template.soft_delete()
    db.commit()
    logger.info(
        "Deleted template",
        extra={"template_id": str(template.id), "contents_detached": detached},
    )
    return detached
