"""
Group — the employer or organisation behind a group quote.

Owned by the Quoting service.  A group has employee classes and employee
applicants; its quote references it by id.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import QuotingBase, utcnow


class Group(QuotingBase):
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_name: Mapped[str] = mapped_column(String(256), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Group id={self.id} {self.group_name!r}>"
