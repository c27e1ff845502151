"""Build response models from the policy service's detail dataclasses."""

from __future__ import annotations

from typing import Any

from apogee.api.schemas.policies import (
    BeneficiaryResponse,
    DependentCoverageResponse,
    DependentResponse,
    GroupMemberResponse,
    GroupPolicyDetailResponse,
    GroupPolicyResponse,
    IndividualPolicyDetailResponse,
    IndividualPolicyResponse,
    PolicyClassResponse,
    PolicyCoverageResponse,
    PolicyDetailResponse,
    PolicyHolderResponse,
)
from apogee.core.constants import PolicyKind
from apogee.services.policies import (
    DependentDetail,
    GroupPolicyDetail,
    IndividualPolicyDetail,
    PolicyClassDetail,
)


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


def dependent_response(detail: DependentDetail) -> DependentResponse:
    response = DependentResponse.model_validate(detail.dependent)
    response.coverages = [DependentCoverageResponse.model_validate(c) for c in detail.coverages]
    return response


def policy_class_response(detail: PolicyClassDetail) -> PolicyClassResponse:
    response = PolicyClassResponse.model_validate(detail.policy_class)
    response.members = [GroupMemberResponse.model_validate(m) for m in detail.members]
    response.coverages = [PolicyCoverageResponse.model_validate(c) for c in detail.coverages]
    return response


def individual_detail_response(detail: IndividualPolicyDetail) -> IndividualPolicyDetailResponse:
    return IndividualPolicyDetailResponse(
        policy=IndividualPolicyResponse.model_validate(detail.policy),
        holder=PolicyHolderResponse.model_validate(detail.holder) if detail.holder else None,
        dependents=[dependent_response(d) for d in detail.dependents],
        beneficiaries=[BeneficiaryResponse.model_validate(b) for b in detail.beneficiaries],
        coverages=[PolicyCoverageResponse.model_validate(c) for c in detail.coverages],
    )


def group_detail_response(detail: GroupPolicyDetail) -> GroupPolicyDetailResponse:
    return GroupPolicyDetailResponse(
        policy=GroupPolicyResponse.model_validate(detail.policy),
        classes=[policy_class_response(c) for c in detail.classes],
    )


def unified_detail_response(detail: IndividualPolicyDetail | GroupPolicyDetail) -> PolicyDetailResponse:
    """
    One shape for both kinds.  For group policies ``policyHolders`` lists
    every class member and ``policyCoverages`` every class coverage.
    """
    if isinstance(detail, IndividualPolicyDetail):
        individual = individual_detail_response(detail)
        return PolicyDetailResponse(
            type=PolicyKind.INDIVIDUAL,
            policy=_dump(individual.policy),
            policy_holders=[_dump(individual.holder)] if individual.holder else [],
            policy_coverages=[_dump(c) for c in individual.coverages],
            dependents=individual.dependents,
            beneficiaries=individual.beneficiaries,
        )

    group = group_detail_response(detail)
    return PolicyDetailResponse(
        type=PolicyKind.GROUP,
        policy=_dump(group.policy),
        policy_holders=[_dump(m) for c in group.classes for m in c.members],
        policy_coverages=[_dump(cov) for c in group.classes for cov in c.coverages],
        classes=group.classes,
    )
