"""
QuoteBenefit — a configured benefit template attached to a quote.

The template's name, version, category and field schema are copied at
attach time so the quote stays stable when the template is later revised.
instance_number counts from 1 per distinct template_uuid on one quote.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import JSONType, QuotingBase, utcnow


class QuoteBenefit(QuotingBase):
    __tablename__ = "quote_benefits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quote_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quotes.id"), nullable=False, index=True
    )

    # ── Template snapshot ────────────────────
    template_db_id: Mapped[int] = mapped_column(Integer, nullable=False)
    template_uuid: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    template_name: Mapped[str] = mapped_column(String(256), nullable=False)
    template_version: Mapped[str] = mapped_column(String(20), nullable=False)
    category_name: Mapped[str] = mapped_column(String(100), nullable=False)
    category_icon: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    field_schema: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)

    # ── User-entered values ──────────────────
    configured_values: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    instance_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<QuoteBenefit id={self.id} quote={self.quote_id} "
            f"{self.template_name} v{self.template_version} #{self.instance_number}>"
        )
