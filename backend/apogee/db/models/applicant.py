"""
Applicant — an individual quote's sole applicant, or one employee of a
group quote.

Individual applicants carry email and address; group employees carry a
group and an employee class and may omit email.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import QuotingBase, utcnow


class Applicant(QuotingBase):
    __tablename__ = "applicants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ── Identity ─────────────────────────────
    first_name: Mapped[str] = mapped_column(String(256), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    last_name: Mapped[str] = mapped_column(String(256), nullable=False)
    birthdate: Mapped[date] = mapped_column(Date, nullable=False)

    # ── Contact ──────────────────────────────
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    # ── Address (individual applicants) ──────
    address_line_1: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    address_line_2: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state_province: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)  # ISO 3166-1 alpha-2

    # ── Group membership ─────────────────────
    group_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("groups.id"), nullable=True, index=True
    )
    class_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("employee_classes.id"), nullable=True, index=True
    )

    quote_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # Individual | Group
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Incomplete")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Applicant id={self.id} {self.first_name} {self.last_name} group={self.group_id}>"
