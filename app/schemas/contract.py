from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

from app.schemas.clause import ClauseResponse
from app.schemas.common import PatchModel, blank_to_none, coerce_datetime


class ContractCreate(BaseModel):
    id: str | None = None
    template_id: str | None = None
    title: str = Field(..., min_length=1)
    party_a_name: str | None = None
    party_b_name: str | None = None
    effective_date: datetime | None = None
    end_date: datetime | None = None
    governing_law: str | None = None
    status: str | None = None
    final_text: str = Field(..., min_length=1)
    notes: str | None = None

    model_config = {"extra": "forbid"}

    @field_validator("id", mode="before")
    @classmethod
    def empty_id_means_generate(cls, value):
        return blank_to_none(value)

    @field_validator("effective_date", "end_date", mode="before")
    @classmethod
    def coerce_dates(cls, value):
        return coerce_datetime(value)


class ContractUpdate(PatchModel):
    """Partial contract update.

    ``template_id`` set to an empty string or null unlinks the template.
    """

    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"title", "final_text"})

    template_id: str | None = None
    title: str | None = Field(None, min_length=1)
    party_a_name: str | None = None
    party_b_name: str | None = None
    effective_date: datetime | None = None
    end_date: datetime | None = None
    governing_law: str | None = None
    status: str | None = None
    final_text: str | None = Field(None, min_length=1)
    notes: str | None = None

    @field_validator("effective_date", "end_date", mode="before")
    @classmethod
    def coerce_dates(cls, value):
        return coerce_datetime(value)


class ContractResponse(BaseModel):
    id: str
    owner_id: str
    template_id: str | None = None
    title: str
    party_a_name: str | None = None
    party_b_name: str | None = None
    effective_date: datetime | None = None
    end_date: datetime | None = None
    governing_law: str | None = None
    status: str | None = None
    final_text: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContractWithClausesResponse(BaseModel):
    contract: ContractResponse
    clauses: list[ClauseResponse]
