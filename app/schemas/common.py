from datetime import date, datetime, time
from typing import Any, ClassVar

from pydantic import BaseModel, model_validator

# order_index is stored as a signed 64-bit integer
MAX_ORDER_INDEX = 2**63 - 1


def coerce_datetime(value: Any) -> Any:
    """Accept date-only values for datetime fields.

    Anything else is left for pydantic's own datetime parsing.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and len(value) == 10:
        try:
            return datetime.combine(date.fromisoformat(value), time.min)
        except ValueError:
            return value
    return value


def blank_to_none(value: Any) -> Any:
    """An empty id means "no id": generate one, or insert instead of replace."""
    if value == "":
        return None
    return value


class PatchModel(BaseModel):
    """Base for partial updates.

    A field is part of the patch only if the caller set it (``model_fields_set``),
    so "absent" and "explicitly null" stay distinguishable. Columns listed in
    ``NON_NULLABLE`` may be omitted but never set to null.
    """

    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset()

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def reject_null_required_columns(self):
        for name in self.model_fields_set & self.NON_NULLABLE:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller supplied."""
        return {name: getattr(self, name) for name in self.model_fields_set}
