from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import MAX_ORDER_INDEX, blank_to_none


class ClauseFields(BaseModel):
    """Clause values as sent over HTTP; the contract id comes from the path."""
    id: str | None = None
    order_index: int = Field(..., gt=0, le=MAX_ORDER_INDEX)
    heading: str | None = None
    body: str = Field(..., min_length=1)
    clause_key: str | None = None

    model_config = {"extra": "forbid"}

    @field_validator("id", mode="before")
    @classmethod
    def empty_id_means_insert(cls, value):
        return blank_to_none(value)


class ClauseSave(ClauseFields):
    """Insert a clause, or replace every value of an existing one when ``id`` is set."""
    contract_id: str = Field(..., min_length=1)


class ClauseResponse(BaseModel):
    id: str
    contract_id: str
    order_index: int
    heading: str | None = None
    body: str
    clause_key: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
