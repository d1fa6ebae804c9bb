"""Template endpoints: public reads, admin-only writes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.database import get_db
from app.core.security import Identity
from app.schemas.templates import TemplateCreate, TemplateRead, TemplateUpdate
from app.services import templates as template_service

router = APIRouter()


@router.get("", response_model=list[TemplateRead])
def list_templates(db: Annotated[Session, Depends(get_db)]) -> list[TemplateRead]:
    return [TemplateRead.model_validate(t) for t in template_service.list_templates(db)]


@router.get("/{template_id}", response_model=TemplateRead)
def get_template(
    template_id: UUID,
    db: Annotated[Session, Depends(get_db)],
) -> TemplateRead:
    return TemplateRead.model_validate(template_service.get_template(db, template_id))


@router.post("", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(
    body: TemplateCreate,
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> TemplateRead:
    """Create a template. Name must be unique; components must be a non-empty JSON object."""
    return TemplateRead.model_validate(template_service.create_template(db, body))


@router.patch("/{template_id}", response_model=TemplateRead)
def update_template(
    template_id: UUID,
    body: TemplateUpdate,
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> TemplateRead:
    return TemplateRead.model_validate(
        template_service.update_template(db, template_id, body)
    )


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: UUID,
    _admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Soft-delete a template; contents that used it keep existing with no template."""
    template_service.delete_template(db, template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
