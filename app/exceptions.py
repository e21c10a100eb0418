from typing import Any, Literal

EntityKind = Literal["template", "contract", "clause"]


class ClausewrightError(Exception):
    """Base exception for all Clausewright errors."""
    pass


class UnauthorizedError(ClausewrightError):
    def __init__(self):
        super().__init__("You must be signed in to perform this action.")


class InvalidInputError(ClausewrightError):
    """Raised when an operation's input fails schema validation."""

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) or "input" for e in errors)
        super().__init__(f"Invalid input: {fields}")


class NotFoundError(ClausewrightError):
    """A row is missing or not visible to the caller.

    Both cases raise the same error so callers cannot probe for ids
    belonging to other users.
    """

    def __init__(self, entity: EntityKind, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found or not accessible.")
