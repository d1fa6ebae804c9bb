"""Content endpoints: public reads, authenticated writes attributed to the caller."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_identity
from app.core.database import get_db
from app.core.errors import InvalidTokenError, NotFoundError
from app.core.security import Identity
from app.schemas.contents import (
    ContentCreate,
    ContentRead,
    ContentStatus,
    ContentUpdate,
    ContentWithRelations,
)
from app.services import contents as content_service
from app.services import users as user_service

router = APIRouter()


@router.get("", response_model=list[ContentWithRelations])
def list_contents(
    db: Annotated[Session, Depends(get_db)],
    status_filter: Annotated[ContentStatus | None, Query(alias="status")] = None,
) -> list[ContentWithRelations]:
    """All active contents with their author (id, username, email) and template."""
    contents = content_service.list_contents(db, status=status_filter)
    return [ContentWithRelations.model_validate(c) for c in contents]


@router.get("/slug/{slug}", response_model=ContentWithRelations)
def get_content_by_slug(
    slug: str,
    db: Annotated[Session, Depends(get_db)],
) -> ContentWithRelations:
    return ContentWithRelations.model_validate(content_service.get_content_by_slug(db, slug))


@router.get("/{content_id}", response_model=ContentWithRelations)
def get_content(
    content_id: UUID,
    db: Annotated[Session, Depends(get_db)],
) -> ContentWithRelations:
    return ContentWithRelations.model_validate(content_service.get_content(db, content_id))


@router.post("", response_model=ContentRead, status_code=status.HTTP_201_CREATED)
def create_content(
    body: ContentCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> ContentRead:
    """
    Create content authored by the caller.

    The slug is taken from `slug` when given, otherwise generated from the title;
    either way it is lowercased and must be unique.
    """
    try:
        author = user_service.get_user(db, identity.id)
    except NotFoundError as e:
        raise InvalidTokenError("User not found") from e
    return ContentRead.model_validate(content_service.create_content(db, author.id, body))


@router.patch("/{content_id}", response_model=ContentRead)
def update_content(
    content_id: UUID,
    body: ContentUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> ContentRead:
    """Update content (author or admin). Send templateId: null to detach the template."""
    return ContentRead.model_validate(
        content_service.update_content(db, content_id, body, identity)
    )


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_content(
    content_id: UUID,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    content_service.delete_content(db, content_id, identity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
