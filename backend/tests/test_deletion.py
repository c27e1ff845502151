"""Cascade deletes and the employee-class reference guard."""

from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from apogee.core.errors import ConflictError, InvalidStateError, NotFoundError
from apogee.db.models import EmployeeClass, GroupPolicy, IndividualPolicy, Quote
from apogee.repositories import group_policies as group_policy_repository
from apogee.repositories import individual_policies as individual_policy_repository
from apogee.repositories import quotes as quote_repository
from apogee.services import quotes as quote_service


def deleted_tables(db) -> list[str]:
    """Table names of DELETE statements passed to ``db.execute``, in order."""
    return [c.args[0].table.name for c in db.execute.await_args_list]


def scalars_result(values):
    result = MagicMock()
    result.all.return_value = values
    return result


class TestQuoteCascade:

    @pytest.mark.asyncio
    async def test_individual_quote(self, mock_db):
        quote = Quote(id=5, status="In Progress", type="Individual", applicant_id=11)

        await quote_repository.delete_quote_cascade(mock_db, quote)

        assert deleted_tables(mock_db) == ["coverages", "quote_benefits", "applicants", "quotes"]

    @pytest.mark.asyncio
    async def test_group_quote(self, mock_db):
        quote = Quote(id=9, status="In Progress", type="Group", group_id=4)

        await quote_repository.delete_quote_cascade(mock_db, quote)

        assert deleted_tables(mock_db) == [
            "coverages",
            "quote_benefits",
            "applicants",
            "employee_classes",
            "groups",
            "quotes",
        ]

    @pytest.mark.asyncio
    async def test_missing_quote(self, mock_db):
        mock_db.get.return_value = None
        with pytest.raises(NotFoundError, match="Quote not found"):
            await quote_service.delete_quote(mock_db, 404)
        mock_db.execute.assert_not_awaited()


class TestPolicyCascade:

    @pytest.mark.asyncio
    async def test_individual_policy_children_first(self, mock_db):
        policy = IndividualPolicy(id=1, policy_number="POL-20260101-AAAAA", effective_date=date(2026, 1, 1))
        mock_db.scalars.side_effect = [scalars_result([3]), scalars_result([7, 8])]

        await individual_policy_repository.delete_policy_cascade(mock_db, policy)

        assert deleted_tables(mock_db) == [
            "dependent_coverages",
            "dependents",
            "beneficiaries",
            "policy_holders",
            "individual_policy_coverages",
            "individual_policies",
        ]

    @pytest.mark.asyncio
    async def test_individual_policy_without_holder(self, mock_db):
        policy = IndividualPolicy(id=2, policy_number="POL-20260101-BBBBB", effective_date=date(2026, 1, 1))
        mock_db.scalars.return_value = scalars_result([])

        await individual_policy_repository.delete_policy_cascade(mock_db, policy)

        assert deleted_tables(mock_db) == ["individual_policy_coverages", "individual_policies"]

    @pytest.mark.asyncio
    async def test_group_policy_per_class(self, mock_db):
        policy = GroupPolicy(id=3, policy_number="POL-20260101-CCCCC", group_name="Acme")
        mock_db.scalars.return_value = scalars_result([10, 11])

        await group_policy_repository.delete_policy_cascade(mock_db, policy)

        assert deleted_tables(mock_db) == [
            "class_coverages",
            "group_members",
            "class_coverages",
            "group_members",
            "policy_classes",
            "group_policies",
        ]


class TestEmployeeClassDelete:

    @pytest.mark.asyncio
    async def test_refused_while_applicants_assigned(self, mock_db):
        mock_db.get.return_value = EmployeeClass(id=2, group_id=4, class_name="Staff")
        mock_db.scalar.return_value = 3

        with pytest.raises(ConflictError) as exc_info:
            await quote_service.delete_employee_class(mock_db, 2)

        assert exc_info.value.message == "Cannot delete class with assigned employees. Remove employees first."
        assert exc_info.value.details == {"applicants": 3}
        mock_db.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unreferenced_class_is_deleted(self, mock_db):
        employee_class = EmployeeClass(id=2, group_id=4, class_name="Staff")
        mock_db.get.return_value = employee_class
        mock_db.scalar.return_value = 0

        await quote_service.delete_employee_class(mock_db, 2)

        mock_db.delete.assert_awaited_once_with(employee_class)

    @pytest.mark.asyncio
    async def test_unknown_class(self, mock_db):
        mock_db.get.return_value = None
        with pytest.raises(NotFoundError):
            await quote_service.delete_employee_class(mock_db, 99)


class TestQuoteStatusTransition:

    @pytest.mark.asyncio
    async def test_conditional_transition_refused(self, mock_db):
        mock_db.get.return_value = Quote(id=5, status="Archived", type="Individual")
        mock_db.execute.return_value = SimpleNamespace(rowcount=0)

        with pytest.raises(InvalidStateError) as exc_info:
            await quote_service.update_quote(
                mock_db, 5, status="Archived", expected_status="Ready for Sale"
            )

        assert exc_info.value.message == 'Quote is not in "Ready for Sale" status'

    @pytest.mark.asyncio
    async def test_conditional_transition_applied(self, mock_db):
        quote = Quote(id=5, status="Ready for Sale", type="Individual")
        mock_db.get.return_value = quote
        mock_db.execute.return_value = SimpleNamespace(rowcount=1)

        result = await quote_service.update_quote(
            mock_db, 5, status="Archived", expected_status="Ready for Sale"
        )

        assert result is quote
        assert mock_db.execute.await_count == 1
