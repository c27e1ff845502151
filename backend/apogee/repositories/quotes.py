"""
Quote repository — quotes, their coverages and the quote cascade delete.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.core.constants import QuoteStatus, QuoteType
from apogee.db.models.applicant import Applicant
from apogee.db.models.coverage import Coverage
from apogee.db.models.employee_class import EmployeeClass
from apogee.db.models.group import Group
from apogee.db.models.quote import Quote
from apogee.db.models.quote_benefit import QuoteBenefit


async def create_quote(
    db: AsyncSession,
    *,
    quote_type: str,
    applicant_id: int | None = None,
    group_id: int | None = None,
    status: str = QuoteStatus.IN_PROGRESS.value,
) -> Quote:
    """Insert a quote for an applicant (Individual) or a group (Group)."""
    quote = Quote(
        type=quote_type,
        status=status,
        applicant_id=applicant_id,
        group_id=group_id,
    )
    db.add(quote)
    await db.flush()
    return quote


async def get_quote(db: AsyncSession, quote_id: int) -> Quote | None:
    """Fetch a quote by primary key."""
    return await db.get(Quote, quote_id)


async def list_quotes(
    db: AsyncSession,
    *,
    status: str | None = None,
    quote_type: str | None = None,
) -> list[Quote]:
    """List quotes, newest first."""
    stmt = select(Quote).order_by(Quote.created_at.desc())
    if status is not None:
        stmt = stmt.where(Quote.status == status)
    if quote_type is not None:
        stmt = stmt.where(Quote.type == quote_type)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_quote(db: AsyncSession, quote_id: int, **fields: object) -> Quote | None:
    """Update mutable quote fields (status, type) and return the row."""
    quote = await get_quote(db, quote_id)
    if quote is None:
        return None

    allowed = {"status", "type"}
    for key, value in fields.items():
        if key not in allowed or value is None:
            continue
        setattr(quote, key, value)

    await db.flush()
    return quote


async def transition_status(
    db: AsyncSession,
    quote_id: int,
    *,
    expected_status: str,
    new_status: str,
) -> bool:
    """
    Conditionally move a quote from ``expected_status`` to ``new_status``.

    A single UPDATE ... WHERE id = :id AND status = :expected; returns True
    only when exactly one row changed, so concurrent callers racing for the
    same transition cannot both win.
    """
    stmt = (
        update(Quote)
        .where(Quote.id == quote_id, Quote.status == expected_status)
        .values(status=new_status)
        .execution_options(synchronize_session="fetch")
    )
    result = await db.execute(stmt)
    await db.flush()
    return result.rowcount == 1


# ── Coverages ─────────────────────────────────

async def add_coverage(
    db: AsyncSession,
    quote_id: int,
    *,
    product_type: str,
    details: str | None = None,
) -> Coverage:
    coverage = Coverage(quote_id=quote_id, product_type=product_type, details=details)
    db.add(coverage)
    await db.flush()
    return coverage


async def list_coverages(db: AsyncSession, quote_id: int) -> list[Coverage]:
    stmt = select(Coverage).where(Coverage.quote_id == quote_id).order_by(Coverage.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def delete_coverage(db: AsyncSession, quote_id: int, coverage_id: int) -> bool:
    """Remove one coverage from a quote. Returns True if a row was deleted."""
    coverage = await db.get(Coverage, coverage_id)
    if coverage is None or coverage.quote_id != quote_id:
        return False
    await db.delete(coverage)
    await db.flush()
    return True


# ── Cascade delete ────────────────────────────

async def delete_quote_cascade(db: AsyncSession, quote: Quote) -> None:
    """
    Delete a quote and everything hanging off it, children first.

    Order: coverages, attached benefits, then the applicant (Individual)
    or the group's applicants, employee classes and group (Group), and
    finally the quote itself.
    """
    await db.execute(delete(Coverage).where(Coverage.quote_id == quote.id))
    await db.execute(delete(QuoteBenefit).where(QuoteBenefit.quote_id == quote.id))

    if quote.applicant_id is not None:
        await db.execute(delete(Applicant).where(Applicant.id == quote.applicant_id))

    if quote.type == QuoteType.GROUP and quote.group_id is not None:
        await db.execute(delete(Applicant).where(Applicant.group_id == quote.group_id))
        await db.execute(delete(EmployeeClass).where(EmployeeClass.group_id == quote.group_id))
        await db.execute(delete(Group).where(Group.id == quote.group_id))

    await db.execute(delete(Quote).where(Quote.id == quote.id))
    await db.flush()
