"""Dependent — spouse, child or other person covered under a policy holder."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import PolicyBase, utcnow


class Dependent(PolicyBase):
    __tablename__ = "dependents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_holder_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("policy_holders.id"), nullable=False, index=True
    )
    dependent_type: Mapped[str] = mapped_column(
        String(30), nullable=False
    )  # Spouse | Child | Domestic Partner | Other
    first_name: Mapped[str] = mapped_column(String(256), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    last_name: Mapped[str] = mapped_column(String(256), nullable=False)
    birthdate: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Dependent id={self.id} holder={self.policy_holder_id} {self.dependent_type}>"
