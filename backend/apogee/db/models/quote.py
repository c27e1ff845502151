"""
Quote — core quote record in the Quoting service.

Exactly one of applicant_id / group_id is set, matching `type`.  Both are
loose references (no FK): the quote is the last row removed when a quote
and its applicant or group are deleted together.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import QuotingBase, utcnow


class Quote(QuotingBase):
    __tablename__ = "quotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="In Progress", index=True
    )  # In Progress | Ready for Sale | Archived
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # Individual | Group
    applicant_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    group_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Quote id={self.id} type={self.type} status={self.status}>"
