"""
SQLAlchemy declarative bases and shared utilities for all models.

Convention:
    - Each table lives in its own file under `apogee/db/models/`
    - Each service owns its own schema, so there is one declarative base
      (and one MetaData) per service; a model imports the base of the
      service that owns it
    - The `__init__.py` re-exports all models so Alembic sees them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# JSONB on PostgreSQL, plain JSON elsewhere.
JSONType = JSON().with_variant(JSONB(), "postgresql")


class QuotingBase(DeclarativeBase):
    """Base class for Quoting service tables."""
    pass


class BenefitDesignerBase(DeclarativeBase):
    """Base class for Benefit Designer service tables."""
    pass


class PolicyBase(DeclarativeBase):
    """Base class for Customer / Policy service tables."""
    pass


# ─── Shared helpers ───────────────────────────
def generate_uuid() -> uuid.UUID:
    """Generate a new UUID v4."""
    return uuid.uuid4()


def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)
