"""GroupMember — an employee enrolled in one PolicyClass of a group policy."""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import PolicyBase


class GroupMember(PolicyBase):
    __tablename__ = "group_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("policy_classes.id"), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(256), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    last_name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    birthdate: Mapped[date] = mapped_column(Date, nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    source_applicant_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<GroupMember id={self.id} class={self.policy_class_id} applicant={self.source_applicant_id}>"
