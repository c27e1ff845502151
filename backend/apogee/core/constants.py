"""Shared constants and enums used across the application."""

from enum import StrEnum


class ServiceName(StrEnum):
    """Deployable services built from this package."""

    QUOTING = "quoting"
    BENEFIT_DESIGNER = "benefit_designer"
    CUSTOMER = "customer"


# Roles that may use each service (any one is enough).
SERVICE_ALLOWED_ROLES: dict[str, frozenset[str]] = {
    ServiceName.QUOTING: frozenset({"Quoting", "Admin"}),
    ServiceName.BENEFIT_DESIGNER: frozenset({"BenefitDesigner", "Admin"}),
    ServiceName.CUSTOMER: frozenset({"CustomerService", "Admin"}),
}


class QuoteStatus(StrEnum):
    """Lifecycle of a quote in the Quoting service."""

    IN_PROGRESS = "In Progress"
    READY_FOR_SALE = "Ready for Sale"
    ARCHIVED = "Archived"


class QuoteType(StrEnum):
    """Individual quotes carry one applicant; group quotes carry a group."""

    INDIVIDUAL = "Individual"
    GROUP = "Group"


class ApplicantStatus(StrEnum):
    INCOMPLETE = "Incomplete"
    COMPLETE = "Complete"


class BenefitType(StrEnum):
    """Which kind of quote a benefit template applies to."""

    GROUP = "group"
    INDIVIDUAL = "individual"


class TemplateStatus(StrEnum):
    """Benefit template lifecycle: draft → active → archived."""

    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class VersionBump(StrEnum):
    MAJOR = "major"
    MINOR = "minor"


class FieldType(StrEnum):
    """Input types a template field may declare."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    MONEY = "money"
    PERCENTAGE = "percentage"
    DATE = "date"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"


NUMERIC_FIELD_TYPES = frozenset({FieldType.NUMBER, FieldType.MONEY, FieldType.PERCENTAGE})
TEXT_FIELD_TYPES = frozenset({FieldType.TEXT, FieldType.TEXTAREA})


class PolicyStatus(StrEnum):
    ACTIVE = "Active"
    CANCELLED = "Cancelled"
    EXPIRED = "Expired"


class DependentType(StrEnum):
    SPOUSE = "Spouse"
    CHILD = "Child"
    DOMESTIC_PARTNER = "Domestic Partner"
    OTHER = "Other"


class PolicyKind(StrEnum):
    """Discriminator used by the combined policy views."""

    INDIVIDUAL = "Individual"
    GROUP = "Group"
