"""
EmployeeClass — classification tier for group employees (Manager, CEO, ...).

A class cannot be deleted while any applicant still references it.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import QuotingBase, utcnow


class EmployeeClass(QuotingBase):
    __tablename__ = "employee_classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("groups.id"), nullable=False, index=True
    )
    class_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<EmployeeClass id={self.id} group={self.group_id} {self.class_name!r}>"
