"""
Customer / Policy service operations: aggregate views over individual and
group policies, direct creation, updates and cascade deletes, plus the
holder / dependent / beneficiary sub-resources.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from apogee.core.constants import PolicyKind
from apogee.core.errors import NotFoundError
from apogee.core.logging import get_logger
from apogee.db.models.beneficiary import Beneficiary
from apogee.db.models.class_coverage import ClassCoverage
from apogee.db.models.dependent import Dependent
from apogee.db.models.dependent_coverage import DependentCoverage
from apogee.db.models.group_member import GroupMember
from apogee.db.models.group_policy import GroupPolicy
from apogee.db.models.individual_policy import IndividualPolicy
from apogee.db.models.individual_policy_coverage import IndividualPolicyCoverage
from apogee.db.models.policy_class import PolicyClass
from apogee.db.models.policy_holder import PolicyHolder
from apogee.repositories import group_policies as group_policy_repository
from apogee.repositories import individual_policies as individual_policy_repository
from apogee.repositories import policy_holders as holder_repository

logger = get_logger(__name__)

UNKNOWN_HOLDER_NAME = "Unknown"


# ── Aggregate views ───────────────────────────

@dataclass
class PolicySummary:
    id: int
    type: PolicyKind
    policy_number: str
    display_name: str
    status: str
    source_quote_id: int
    effective_date: date
    expiration_date: date | None
    created_at: datetime


@dataclass
class DependentDetail:
    dependent: Dependent
    coverages: list[DependentCoverage] = field(default_factory=list)


@dataclass
class IndividualPolicyDetail:
    policy: IndividualPolicy
    holder: PolicyHolder | None = None
    dependents: list[DependentDetail] = field(default_factory=list)
    beneficiaries: list[Beneficiary] = field(default_factory=list)
    coverages: list[IndividualPolicyCoverage] = field(default_factory=list)


@dataclass
class PolicyClassDetail:
    policy_class: PolicyClass
    members: list[GroupMember] = field(default_factory=list)
    coverages: list[ClassCoverage] = field(default_factory=list)


@dataclass
class GroupPolicyDetail:
    policy: GroupPolicy
    classes: list[PolicyClassDetail] = field(default_factory=list)


def holder_display_name(holder: PolicyHolder | None) -> str:
    if holder is None:
        return UNKNOWN_HOLDER_NAME
    parts = [holder.first_name, holder.middle_name, holder.last_name]
    return " ".join(p for p in parts if p).strip() or UNKNOWN_HOLDER_NAME


async def list_all_policies(db: AsyncSession) -> tuple[list[PolicySummary], dict[str, int]]:
    """Individual and group policies in one list, newest first, with counts."""
    individual = await individual_policy_repository.list_policies(db)
    group = await group_policy_repository.list_policies(db)

    summaries: list[PolicySummary] = []
    for policy in individual:
        holder = await holder_repository.get_holder_for_policy(db, policy.id)
        summaries.append(PolicySummary(
            id=policy.id,
            type=PolicyKind.INDIVIDUAL,
            policy_number=policy.policy_number,
            display_name=holder_display_name(holder),
            status=policy.status,
            source_quote_id=policy.source_quote_id,
            effective_date=policy.effective_date,
            expiration_date=policy.expiration_date,
            created_at=policy.created_at,
        ))
    for policy in group:
        summaries.append(PolicySummary(
            id=policy.id,
            type=PolicyKind.GROUP,
            policy_number=policy.policy_number,
            display_name=policy.group_name,
            status=policy.status,
            source_quote_id=policy.source_quote_id,
            effective_date=policy.effective_date,
            expiration_date=policy.expiration_date,
            created_at=policy.created_at,
        ))

    summaries.sort(key=lambda s: s.created_at, reverse=True)
    counts = {"individual": len(individual), "group": len(group), "total": len(summaries)}
    return summaries, counts


async def get_individual_detail(db: AsyncSession, policy_id: int) -> IndividualPolicyDetail | None:
    policy = await individual_policy_repository.get_policy(db, policy_id)
    if policy is None:
        return None

    detail = IndividualPolicyDetail(policy=policy)
    detail.holder = await holder_repository.get_holder_for_policy(db, policy_id)
    if detail.holder is not None:
        dependents = await holder_repository.list_dependents(db, detail.holder.id)
        coverages = await holder_repository.list_dependent_coverages(db, [d.id for d in dependents])
        detail.dependents = [
            DependentDetail(d, [c for c in coverages if c.dependent_id == d.id])
            for d in dependents
        ]
        detail.beneficiaries = await holder_repository.list_beneficiaries(db, detail.holder.id)
    detail.coverages = await individual_policy_repository.list_coverages(db, policy_id)
    return detail


async def get_group_detail(db: AsyncSession, policy_id: int) -> GroupPolicyDetail | None:
    policy = await group_policy_repository.get_policy(db, policy_id)
    if policy is None:
        return None

    classes = await group_policy_repository.list_classes(db, policy_id)
    class_ids = [c.id for c in classes]
    members = await group_policy_repository.list_members(db, class_ids)
    coverages = await group_policy_repository.list_class_coverages(db, class_ids)
    return GroupPolicyDetail(
        policy=policy,
        classes=[
            PolicyClassDetail(
                policy_class=c,
                members=[m for m in members if m.policy_class_id == c.id],
                coverages=[cov for cov in coverages if cov.policy_class_id == c.id],
            )
            for c in classes
        ],
    )


async def get_policy_detail(
    db: AsyncSession,
    policy_id: int,
) -> IndividualPolicyDetail | GroupPolicyDetail:
    """Resolve an id against individual policies first, then group policies."""
    detail = await get_individual_detail(db, policy_id)
    if detail is not None:
        return detail
    group_detail = await get_group_detail(db, policy_id)
    if group_detail is not None:
        return group_detail
    raise NotFoundError("Policy not found", entity="Policy", entity_id=policy_id)


async def update_any_policy(
    db: AsyncSession,
    policy_id: int,
    **fields: Any,
) -> tuple[PolicyKind, IndividualPolicy | GroupPolicy]:
    """Status / expiration update that resolves the policy kind like ``get_policy_detail``."""
    policy = await individual_policy_repository.update_policy(db, policy_id, **fields)
    if policy is not None:
        return PolicyKind.INDIVIDUAL, policy
    group_policy = await group_policy_repository.update_policy(db, policy_id, **fields)
    if group_policy is not None:
        return PolicyKind.GROUP, group_policy
    raise NotFoundError("Policy not found", entity="Policy", entity_id=policy_id)


# ── Individual policies ───────────────────────

async def create_individual_policy(
    db: AsyncSession,
    *,
    policy_number: str,
    source_quote_id: int,
    effective_date: date,
    expiration_date: date | None = None,
    status: str | None = None,
    holder: dict[str, Any] | None = None,
    coverages: list[dict[str, Any]] | None = None,
) -> IndividualPolicy:
    policy_fields: dict[str, Any] = {
        "policy_number": policy_number,
        "source_quote_id": source_quote_id,
        "effective_date": effective_date,
        "expiration_date": expiration_date,
    }
    if status is not None:
        policy_fields["status"] = status
    policy = await individual_policy_repository.create_policy(db, **policy_fields)
    if holder:
        await holder_repository.create_holder(db, policy.id, **holder)
    await individual_policy_repository.add_coverages(db, policy.id, coverages or [])
    logger.info("Individual policy created", policy_id=policy.id, policy_number=policy_number)
    return policy


async def get_individual_policy_or_404(db: AsyncSession, policy_id: int) -> IndividualPolicy:
    policy = await individual_policy_repository.get_policy(db, policy_id)
    if policy is None:
        raise NotFoundError("Individual policy not found", entity="IndividualPolicy", entity_id=policy_id)
    return policy


async def delete_individual_policy(db: AsyncSession, policy_id: int) -> None:
    policy = await get_individual_policy_or_404(db, policy_id)
    await individual_policy_repository.delete_policy_cascade(db, policy)
    logger.info("Individual policy deleted", policy_id=policy_id, policy_number=policy.policy_number)


# ── Group policies ────────────────────────────

async def create_group_policy(
    db: AsyncSession,
    *,
    policy_number: str,
    source_quote_id: int,
    group_name: str,
    effective_date: date,
    source_group_id: int | None = None,
    expiration_date: date | None = None,
    status: str | None = None,
) -> GroupPolicy:
    policy_fields: dict[str, Any] = {
        "policy_number": policy_number,
        "source_quote_id": source_quote_id,
        "source_group_id": source_group_id,
        "group_name": group_name,
        "effective_date": effective_date,
        "expiration_date": expiration_date,
    }
    if status is not None:
        policy_fields["status"] = status
    policy = await group_policy_repository.create_policy(db, **policy_fields)
    logger.info("Group policy created", policy_id=policy.id, policy_number=policy_number)
    return policy


async def get_group_policy_or_404(db: AsyncSession, policy_id: int) -> GroupPolicy:
    policy = await group_policy_repository.get_policy(db, policy_id)
    if policy is None:
        raise NotFoundError("Group policy not found", entity="GroupPolicy", entity_id=policy_id)
    return policy


async def delete_group_policy(db: AsyncSession, policy_id: int) -> None:
    policy = await get_group_policy_or_404(db, policy_id)
    await group_policy_repository.delete_policy_cascade(db, policy)
    logger.info("Group policy deleted", policy_id=policy_id, policy_number=policy.policy_number)


# ── Holders, dependents, beneficiaries ────────

async def get_holder_or_404(db: AsyncSession, holder_id: int) -> PolicyHolder:
    holder = await holder_repository.get_holder(db, holder_id)
    if holder is None:
        raise NotFoundError("Policy holder not found", entity="PolicyHolder", entity_id=holder_id)
    return holder


async def update_holder(db: AsyncSession, holder_id: int, **fields: Any) -> PolicyHolder:
    holder = await holder_repository.update_holder(db, holder_id, **fields)
    if holder is None:
        raise NotFoundError("Policy holder not found", entity="PolicyHolder", entity_id=holder_id)
    return holder


async def add_dependent(
    db: AsyncSession,
    holder_id: int,
    *,
    coverages: list[dict[str, Any]] | None = None,
    **fields: Any,
) -> DependentDetail:
    await get_holder_or_404(db, holder_id)
    dependent = await holder_repository.add_dependent(db, holder_id, **fields)
    added = await holder_repository.add_dependent_coverages(db, dependent.id, coverages or [])
    logger.info("Dependent added", holder_id=holder_id, dependent_id=dependent.id, coverages=len(added))
    return DependentDetail(dependent, added)


async def add_dependent_coverages(
    db: AsyncSession,
    dependent_id: int,
    coverages: list[dict[str, Any]],
) -> list[DependentCoverage]:
    dependent = await holder_repository.get_dependent(db, dependent_id)
    if dependent is None:
        raise NotFoundError("Dependent not found", entity="Dependent", entity_id=dependent_id)
    return await holder_repository.add_dependent_coverages(db, dependent_id, coverages)


async def remove_dependent(db: AsyncSession, dependent_id: int) -> None:
    dependent = await holder_repository.get_dependent(db, dependent_id)
    if dependent is None:
        raise NotFoundError("Dependent not found", entity="Dependent", entity_id=dependent_id)
    await holder_repository.delete_dependent(db, dependent_id)
    logger.info("Dependent removed", dependent_id=dependent_id, holder_id=dependent.policy_holder_id)


async def add_beneficiary(db: AsyncSession, holder_id: int, **fields: Any) -> Beneficiary:
    await get_holder_or_404(db, holder_id)
    beneficiary = await holder_repository.add_beneficiary(db, holder_id, **fields)
    logger.info("Beneficiary added", holder_id=holder_id, beneficiary_id=beneficiary.id)
    return beneficiary


async def remove_beneficiary(db: AsyncSession, beneficiary_id: int) -> None:
    beneficiary = await holder_repository.get_beneficiary(db, beneficiary_id)
    if beneficiary is None:
        raise NotFoundError("Beneficiary not found", entity="Beneficiary", entity_id=beneficiary_id)
    await holder_repository.delete_beneficiary(db, beneficiary)
