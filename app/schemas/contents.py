"""Request/response schemas for content entries."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.auth import UserPublic
from app.schemas.templates import TemplateRead

ContentStatus = Literal["draft", "published"]

TITLE_MAX_LENGTH = 255
SLUG_MAX_LENGTH = 255


class ContentCreate(BaseModel):
    """New content; slug defaults to a slugified title."""

    title: str = Field(..., max_length=TITLE_MAX_LENGTH, examples=["My First Blog Post"])
    slug: str | None = Field(default=None, max_length=SLUG_MAX_LENGTH)
    body: str = Field(..., examples=["This is the content of my first blog post."])
    status: ContentStatus = Field(..., examples=["published"])
    template_id: UUID | None = Field(default=None, alias="templateId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Body is required")
        return v


class ContentUpdate(BaseModel):
    """Partial update; send templateId: null to detach the template."""

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    slug: str | None = Field(default=None, max_length=SLUG_MAX_LENGTH)
    body: str | None = None
    status: ContentStatus | None = None
    template_id: UUID | None = Field(default=None, alias="templateId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title", "body")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Field cannot be empty")
        return v


class ContentRead(BaseModel):
    id: UUID
    title: str
    slug: str
    body: str
    status: ContentStatus
    author_id: UUID = Field(serialization_alias="authorId")
    template_id: UUID | None = Field(serialization_alias="templateId")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContentWithRelations(ContentRead):
    author: UserPublic
    template: TemplateRead | None = None
