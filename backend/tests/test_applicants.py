"""Applicant intake and updates: class membership and required identity fields."""

from datetime import date

import pytest

from apogee.core.errors import NotFoundError, ValidationError
from apogee.db.models import Applicant, EmployeeClass
from apogee.services import quotes as quote_service


def stored(*rows):
    """``db.get`` stand-in that answers from the given ORM rows."""
    by_key = {(type(row), row.id): row for row in rows}

    async def get(model, ident):
        return by_key.get((model, ident))

    return get


def employee(**kwargs) -> Applicant:
    data = {
        "id": 3,
        "first_name": "Grace",
        "last_name": "Hopper",
        "birthdate": date(1906, 12, 9),
        "group_id": 4,
        "class_id": 2,
        "quote_type": "Group",
        "status": "Incomplete",
    }
    data.update(kwargs)
    return Applicant(**data)


STAFF = EmployeeClass(id=2, group_id=4, class_name="Staff")
MANAGERS = EmployeeClass(id=5, group_id=4, class_name="Managers")
OTHER_GROUP = EmployeeClass(id=9, group_id=8, class_name="Executives")


class TestUpdateApplicant:

    @pytest.mark.asyncio
    async def test_reassign_within_group(self, mock_db):
        applicant = employee()
        mock_db.get.side_effect = stored(applicant, STAFF, MANAGERS)

        result = await quote_service.update_applicant(mock_db, 3, {"class_id": 5})

        assert result.class_id == 5
        mock_db.flush.assert_awaited()

    @pytest.mark.asyncio
    async def test_unknown_class(self, mock_db):
        applicant = employee()
        mock_db.get.side_effect = stored(applicant, STAFF)

        with pytest.raises(NotFoundError, match="Employee class not found"):
            await quote_service.update_applicant(mock_db, 3, {"class_id": 999})

        assert applicant.class_id == 2
        mock_db.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_class_from_another_group(self, mock_db):
        applicant = employee()
        mock_db.get.side_effect = stored(applicant, STAFF, OTHER_GROUP)

        with pytest.raises(ValidationError) as exc_info:
            await quote_service.update_applicant(mock_db, 3, {"class_id": 9})

        assert exc_info.value.message == "Employee class does not belong to this group"
        assert exc_info.value.details == {"group_id": 4, "class_group_id": 8}
        assert applicant.class_id == 2

    @pytest.mark.asyncio
    async def test_individual_applicant_has_no_class(self, mock_db):
        applicant = employee(group_id=None, class_id=None, quote_type="Individual")
        mock_db.get.side_effect = stored(applicant, STAFF)

        with pytest.raises(ValidationError, match="Only group employees"):
            await quote_service.update_applicant(mock_db, 3, {"class_id": 2})

    @pytest.mark.asyncio
    async def test_required_fields_cannot_be_cleared(self, mock_db):
        applicant = employee()
        mock_db.get.side_effect = stored(applicant)

        with pytest.raises(ValidationError) as exc_info:
            await quote_service.update_applicant(mock_db, 3, {"last_name": None, "birthdate": None})

        assert exc_info.value.details == {"fields": ["last_name", "birthdate"]}
        assert applicant.last_name == "Hopper"

    @pytest.mark.asyncio
    async def test_unassign_class(self, mock_db):
        applicant = employee()
        mock_db.get.side_effect = stored(applicant)

        result = await quote_service.update_applicant(mock_db, 3, {"class_id": None})

        assert result.class_id is None

    @pytest.mark.asyncio
    async def test_unknown_applicant(self, mock_db):
        mock_db.get.side_effect = stored()
        with pytest.raises(NotFoundError, match="Applicant not found"):
            await quote_service.update_applicant(mock_db, 404, {"status": "Complete"})


class TestCreateGroupEmployee:

    @pytest.mark.asyncio
    async def test_group_taken_from_class(self, mock_db, recorded):
        mock_db.get.side_effect = stored(STAFF)

        applicant, quote = await quote_service.create_applicant(mock_db, {
            "quote_type": "Group",
            "first_name": "Grace",
            "last_name": "Hopper",
            "birthdate": date(1906, 12, 9),
            "class_id": 2,
        })

        assert quote is None
        assert applicant.group_id == 4

    @pytest.mark.asyncio
    async def test_group_must_match_class(self, mock_db, recorded):
        mock_db.get.side_effect = stored(OTHER_GROUP)

        with pytest.raises(ValidationError, match="does not belong to this group"):
            await quote_service.create_applicant(mock_db, {
                "quote_type": "Group",
                "first_name": "Grace",
                "last_name": "Hopper",
                "birthdate": date(1906, 12, 9),
                "group_id": 4,
                "class_id": 9,
            })

        assert recorded == []


class TestApplicantApi:

    def test_unknown_status_is_422(self, quoting_client, service_headers, mock_db):
        mock_db.get.side_effect = stored(employee())

        response = quoting_client.patch(
            "/api/v1/applicants/3", json={"status": "Bogus"}, headers=service_headers
        )

        assert response.status_code == 422
        mock_db.flush.assert_not_awaited()
        mock_db.commit.assert_not_awaited()

    def test_status_change(self, quoting_client, service_headers, mock_db):
        mock_db.get.side_effect = stored(employee())

        response = quoting_client.patch(
            "/api/v1/applicants/3", json={"status": "Complete"}, headers=service_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Complete"
        mock_db.commit.assert_awaited_once()

    def test_unknown_class_is_404(self, quoting_client, service_headers, mock_db):
        mock_db.get.side_effect = stored(employee(), STAFF)

        response = quoting_client.patch(
            "/api/v1/applicants/3", json={"classId": 999}, headers=service_headers
        )

        assert response.status_code == 404
        assert response.json() == {
            "error": "NotFoundError",
            "message": "Employee class not found",
            "entity": "EmployeeClass",
            "id": 999,
        }
        mock_db.rollback.assert_awaited_once()

    def test_cross_group_class_is_400(self, quoting_client, service_headers, mock_db):
        mock_db.get.side_effect = stored(employee(), OTHER_GROUP)

        response = quoting_client.patch(
            "/api/v1/applicants/3", json={"classId": 9}, headers=service_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"
        mock_db.commit.assert_not_awaited()
