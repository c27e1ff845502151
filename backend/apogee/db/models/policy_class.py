"""
PolicyClass — a class tier on a group policy.

Created fresh at conversion time from the caller's class definitions; it
does not point back at the quote's EmployeeClass rows.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import PolicyBase


class PolicyClass(PolicyBase):
    __tablename__ = "policy_classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_policy_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("group_policies.id"), nullable=False, index=True
    )
    class_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<PolicyClass id={self.id} policy={self.group_policy_id} {self.class_name!r}>"
