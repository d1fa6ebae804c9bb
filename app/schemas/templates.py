"""Request/response schemas for templates."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1024


def _strip_required(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{label} is required")
    return v


class TemplateCreate(BaseModel):
    name: str = Field(..., max_length=NAME_MAX_LENGTH, examples=["Blog Post Template"])
    description: str | None = Field(
        default=None, max_length=DESCRIPTION_MAX_LENGTH, examples=["Template for blog posts"]
    )
    components: dict[str, Any] = Field(
        ...,
        description="Component configuration as a JSON object",
        examples=[{"header": True, "footer": True}],
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_required(v, "Name")

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None

    @field_validator("components")
    @classmethod
    def validate_components(cls, v: dict[str, Any]) -> dict[str, Any]:
        if not v:
            raise ValueError("Components are required")
        return v


class TemplateUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    components: dict[str, Any] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _strip_required(v, "Name") if v is not None else None


class TemplateRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    components: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
