"""
Models package — re-exports the per-service bases and all models.

Import models here so each service's metadata picks up every table
automatically (Alembic uses ``SERVICE_METADATA[settings.SERVICE_NAME]``).

When adding a new model:
    1. Create `apogee/db/models/<table_name>.py` on the owning service's base
    2. Import it here
"""

from sqlalchemy import MetaData

from apogee.core.constants import ServiceName
from apogee.db.models.base import BenefitDesignerBase, PolicyBase, QuotingBase

# Quoting
from apogee.db.models.group import Group
from apogee.db.models.employee_class import EmployeeClass
from apogee.db.models.applicant import Applicant
from apogee.db.models.quote import Quote
from apogee.db.models.coverage import Coverage
from apogee.db.models.quote_benefit import QuoteBenefit

# Benefit Designer
from apogee.db.models.benefit_category import BenefitCategory
from apogee.db.models.benefit_template import BenefitTemplate

# Customer / Policy
from apogee.db.models.individual_policy import IndividualPolicy
from apogee.db.models.policy_holder import PolicyHolder
from apogee.db.models.dependent import Dependent
from apogee.db.models.beneficiary import Beneficiary
from apogee.db.models.individual_policy_coverage import IndividualPolicyCoverage
from apogee.db.models.dependent_coverage import DependentCoverage
from apogee.db.models.group_policy import GroupPolicy
from apogee.db.models.policy_class import PolicyClass
from apogee.db.models.group_member import GroupMember
from apogee.db.models.class_coverage import ClassCoverage

SERVICE_METADATA: dict[str, MetaData] = {
    ServiceName.QUOTING: QuotingBase.metadata,
    ServiceName.BENEFIT_DESIGNER: BenefitDesignerBase.metadata,
    ServiceName.CUSTOMER: PolicyBase.metadata,
}

__all__ = [
    "QuotingBase",
    "BenefitDesignerBase",
    "PolicyBase",
    "SERVICE_METADATA",
    "Group",
    "EmployeeClass",
    "Applicant",
    "Quote",
    "Coverage",
    "QuoteBenefit",
    "BenefitCategory",
    "BenefitTemplate",
    "IndividualPolicy",
    "PolicyHolder",
    "Dependent",
    "Beneficiary",
    "IndividualPolicyCoverage",
    "DependentCoverage",
    "GroupPolicy",
    "PolicyClass",
    "GroupMember",
    "ClassCoverage",
]
