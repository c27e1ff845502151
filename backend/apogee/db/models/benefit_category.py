"""
BenefitCategory — groups benefit templates (Dental, Vision, Life, ...).

Categories are soft-deleted (is_active=False) so templates that point at
them keep resolving.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import BenefitDesignerBase, JSONType, utcnow


class BenefitCategory(BenefitDesignerBase):
    __tablename__ = "benefit_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    applies_to: Mapped[list[str]] = mapped_column(
        JSONType, nullable=False, default=lambda: ["group", "individual"]
    )
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<BenefitCategory id={self.id} {self.name!r} active={self.is_active}>"
