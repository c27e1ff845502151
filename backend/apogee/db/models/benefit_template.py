"""
BenefitTemplate — one version of a configurable benefit form.

Every version is its own row; rows that belong to the same logical
template share `template_id`.  At most one row per template_id may be
`active` at a time.

field_schema layout:
    {"fields": [{"id": "...", "name": "...", "type": "money",
                 "required": true, "validation": {"min": 0}}, ...]}
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from apogee.db.models.base import BenefitDesignerBase, JSONType, generate_uuid, utcnow


class BenefitTemplate(BenefitDesignerBase):
    __tablename__ = "benefit_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, default=generate_uuid, index=True
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("benefit_categories.id"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # group | individual
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Version ──────────────────────────────
    version: Mapped[str] = mapped_column(String(20), nullable=False, default="1.0")
    major_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    minor_version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # ── Form definition ──────────────────────
    field_schema: Mapped[dict[str, Any]] = mapped_column(
        JSONType, nullable=False, default=lambda: {"fields": []}
    )
    default_values: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft", index=True
    )  # draft | active | archived

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<BenefitTemplate id={self.id} template_id={self.template_id} "
            f"v{self.version} status={self.status}>"
        )
