"""IndividualPolicyCoverage — a product carried by an individual policy."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import PolicyBase


class IndividualPolicyCoverage(PolicyBase):
    __tablename__ = "individual_policy_coverages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("individual_policies.id"), nullable=False, index=True
    )
    product_type: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    premium: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
