from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TextPrimaryKey, TimestampMixin


class Contract(Base, TextPrimaryKey, TimestampMixin):
    __tablename__ = "contracts"

    owner_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    template_id: Mapped[str | None] = mapped_column(
        Text, ForeignKey("contract_templates.id"), nullable=True
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    party_a_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    party_b_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    effective_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    governing_law: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(Text, nullable=True)
    final_text: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # passive_deletes: the clause rows are removed by the repository / FK cascade,
    # never lazy-loaded just to be deleted
    clauses: Mapped[list[Clause]] = relationship(
        "Clause", back_populates="contract", cascade="all, delete-orphan", passive_deletes=True
    )
