from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import PatchModel, blank_to_none


class TemplateCreate(BaseModel):
    id: str | None = None
    name: str = Field(..., min_length=1)
    description: str | None = None
    category: str | None = None
    base_language: str | None = None
    body: str = Field(..., min_length=1)
    is_system: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("id", mode="before")
    @classmethod
    def empty_id_means_generate(cls, value):
        return blank_to_none(value)


class TemplateUpdate(PatchModel):
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"name", "body", "is_system"})

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    category: str | None = None
    base_language: str | None = None
    body: str | None = Field(None, min_length=1)
    is_system: bool | None = None


class TemplateResponse(BaseModel):
    id: str
    owner_id: str | None
    name: str
    description: str | None = None
    category: str | None = None
    base_language: str | None = None
    body: str
    is_system: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
