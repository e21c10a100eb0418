import uuid
from datetime import datetime

from sqlalchemy import DateTime, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """SQLAlchemy declarative base; all models inherit from this."""
    pass


class TimestampMixin:
    """Adds created_at and updated_at to a model.

    The service layer always writes both columns explicitly; the server
    defaults only cover rows inserted outside the application.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class TextPrimaryKey:
    """Adds a text primary key to a model.

    Callers may supply their own id; otherwise a uuid4 string is generated.
    """

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
