"""Coverage — an insurance product selected on a quote."""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import QuotingBase


class Coverage(QuotingBase):
    __tablename__ = "coverages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quote_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quotes.id"), nullable=False, index=True
    )
    product_type: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Coverage id={self.id} quote={self.quote_id} {self.product_type}>"
