"""
IndividualPolicy — root of an individual policy aggregate.

Children (deleted before the root, no DB-level cascade):
    PolicyHolder → Dependent → DependentCoverage
                 → Beneficiary
    IndividualPolicyCoverage
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import PolicyBase, utcnow


class IndividualPolicy(PolicyBase):
    __tablename__ = "individual_policies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    source_quote_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiration_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Active"
    )  # Active | Cancelled | Expired

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<IndividualPolicy id={self.id} {self.policy_number} status={self.status}>"
