"""
GroupPolicy — root of a group policy aggregate.

Children (deleted before the root, no DB-level cascade):
    PolicyClass → GroupMember
                → ClassCoverage
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import PolicyBase, utcnow


class GroupPolicy(PolicyBase):
    __tablename__ = "group_policies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    source_quote_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    source_group_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    group_name: Mapped[str] = mapped_column(String(256), nullable=False)
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
        return f"<GroupPolicy id={self.id} {self.policy_number} {self.group_name!r}>"
