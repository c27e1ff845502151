"""Beneficiary — named recipient on a policy holder, with an optional share."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import PolicyBase, utcnow


class Beneficiary(PolicyBase):
    __tablename__ = "beneficiaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_holder_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("policy_holders.id"), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(256), nullable=False)
    last_name: Mapped[str] = mapped_column(String(256), nullable=False)
    relationship: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    percentage: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)  # 0–100

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Beneficiary id={self.id} holder={self.policy_holder_id} {self.percentage}%>"
