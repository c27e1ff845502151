"""HTTP surface of the three services, with the database and collaborators mocked."""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from apogee.api.deps import get_benefit_designer_client, get_quoting_client
from apogee.clients.benefit_designer import BenefitDesignerClient
from apogee.clients.quoting import QuotingClient
from apogee.core.config import settings
from apogee.core.errors import InvalidStateError
from apogee.db.models import Quote
from apogee.repositories import categories as category_repository
from apogee.repositories import quotes as quote_repository
from apogee.repositories import templates as template_repository
from apogee.services import versioning

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def template_obj(**kwargs):
    data = {
        "id": 12,
        "template_id": uuid.UUID("6f1c1f0e-8a4e-4b43-9a55-0b1fb0a7c001"),
        "category_id": 2,
        "type": "individual",
        "name": "Dental Basic",
        "description": None,
        "version": "1.1",
        "major_version": 1,
        "minor_version": 1,
        "field_schema": {"fields": []},
        "default_values": {},
        "status": "draft",
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(kwargs)
    return SimpleNamespace(**data)


# ── Quoting ───────────────────────────────────

class TestQuotingApi:

    def test_individual_applicant_requires_identity(self, quoting_client, service_headers):
        response = quoting_client.post(
            "/api/v1/applicants",
            json={"quoteType": "Individual", "firstName": "Ada"},
            headers=service_headers,
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "ValidationError",
            "message": "First name, last name, birthdate, and email are required for individual applicants",
        }

    def test_individual_applicant_starts_quote(self, quoting_client, service_headers, recorded):
        response = quoting_client.post(
            "/api/v1/applicants",
            json={
                "quoteType": "Individual",
                "firstName": "Ada",
                "lastName": "Lovelace",
                "birthdate": "1985-12-10",
                "email": "ada@example.com",
                "addressLine1": "1 Analytical Way",
                "city": "London",
                "country": "GB",
                "postalCode": "N1",
                "phoneNumber": "",
            },
            headers=service_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["applicant"]["addressLine1"] == "1 Analytical Way"
        assert body["applicant"]["phoneNumber"] is None
        assert body["applicant"]["status"] == "Incomplete"
        assert body["quote"]["status"] == "In Progress"
        assert body["quote"]["type"] == "Individual"
        assert body["quote"]["applicantId"] == body["applicant"]["id"]

    def test_create_group_returns_group_and_quote(self, quoting_client, service_headers, recorded):
        response = quoting_client.post("/api/v1/groups", json={"groupName": "Acme"}, headers=service_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["group"]["groupName"] == "Acme"
        assert body["quote"]["type"] == "Group"
        assert body["quote"]["groupId"] == body["group"]["id"]

    def test_unknown_quote_is_404(self, quoting_client, service_headers, mock_db):
        mock_db.get.return_value = None
        response = quoting_client.get("/api/v1/quotes/404", headers=service_headers)
        assert response.status_code == 404
        assert response.json() == {
            "error": "NotFoundError",
            "message": "Quote not found",
            "entity": "Quote",
            "id": 404,
        }

    def test_conditional_status_change_conflict(self, quoting_client, service_headers, mock_db):
        mock_db.get.return_value = Quote(id=5, status="Archived", type="Individual", created_at=NOW)
        mock_db.execute.return_value = SimpleNamespace(rowcount=0)

        response = quoting_client.patch(
            "/api/v1/quotes/5",
            json={"status": "Archived", "expectedStatus": "Ready for Sale"},
            headers=service_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"] == "InvalidStateError"
        mock_db.commit.assert_not_awaited()

    def test_status_must_be_known(self, quoting_client, service_headers):
        response = quoting_client.patch("/api/v1/quotes/5", json={"status": "Sold"}, headers=service_headers)
        assert response.status_code == 422

    def test_employee_class_delete_conflict(self, quoting_client, service_headers, mock_db):
        mock_db.get.return_value = SimpleNamespace(id=2, group_id=4, class_name="Staff")
        mock_db.scalar.return_value = 1

        response = quoting_client.delete("/api/v1/employee-classes/2", headers=service_headers)

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot delete class with assigned employees. Remove employees first."

    def test_template_proxy_uses_designer(self, quoting_app, quoting_client, service_headers):
        designer = MagicMock(spec=BenefitDesignerClient)
        designer.fetch_templates_by_type = AsyncMock(return_value=[{"id": 1, "name": "Dental Basic"}])
        quoting_app.dependency_overrides[get_benefit_designer_client] = lambda: designer

        response = quoting_client.get("/api/v1/templates?type=group", headers=service_headers)

        assert response.status_code == 200
        assert response.json() == [{"id": 1, "name": "Dental Basic"}]
        designer.fetch_templates_by_type.assert_awaited_once_with("group")

    def test_unexpected_error_is_generic_500(self, quoting_client, service_headers, monkeypatch):
        monkeypatch.setattr(quote_repository, "list_quotes", AsyncMock(side_effect=RuntimeError("boom")))
        response = quoting_client.get("/api/v1/quotes", headers=service_headers)
        assert response.status_code == 500
        assert response.json() == {"error": "InternalError", "message": "Internal Server Error"}


# ── Benefit Designer ──────────────────────────

class TestDesignerApi:

    def test_duplicate_category_name_is_conflict(self, designer_client, service_headers, monkeypatch):
        monkeypatch.setattr(
            category_repository,
            "create_category",
            AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("duplicate key"))),
        )
        response = designer_client.post("/api/v1/categories", json={"name": "Dental"}, headers=service_headers)
        assert response.status_code == 409
        assert response.json()["message"] == "A category with this name already exists"

    def test_seed_refused_in_production(self, designer_client, service_headers, monkeypatch):
        monkeypatch.setattr(settings, "APP_ENV", "production")
        response = designer_client.post("/api/v1/categories/seed", headers=service_headers)
        assert response.status_code == 403

    def test_seed_reports_each_category(self, designer_client, service_headers, monkeypatch):
        monkeypatch.setattr(
            category_repository,
            "insert_categories_if_missing",
            AsyncMock(return_value=["Dental", "Vision"]),
        )
        response = designer_client.post("/api/v1/categories/seed", headers=service_headers)
        assert response.status_code == 200
        results = {r["name"]: r["status"] for r in response.json()["results"]}
        assert len(results) == 10
        assert results["Dental"] == "created"
        assert results["Extended Health"] == "already exists"

    def test_revising_active_template_answers_201(self, designer_client, service_headers, monkeypatch):
        forked = template_obj()
        monkeypatch.setattr(versioning, "revise_template", AsyncMock(return_value=(forked, True)))
        monkeypatch.setattr(
            template_repository,
            "get_template_with_category",
            AsyncMock(return_value=(forked, SimpleNamespace(name="Dental", icon="🦷"))),
        )

        response = designer_client.put(
            "/api/v1/templates/3",
            json={"name": "Dental Basic", "versionBump": "minor"},
            headers=service_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["version"] == "1.1"
        assert body["categoryName"] == "Dental"
        versioning.revise_template.assert_awaited_once()
        assert versioning.revise_template.await_args.args[2] == {"name": "Dental Basic"}

    def test_revising_draft_answers_200(self, designer_client, service_headers, monkeypatch):
        draft = template_obj()
        monkeypatch.setattr(versioning, "revise_template", AsyncMock(return_value=(draft, False)))
        monkeypatch.setattr(
            template_repository, "get_template_with_category", AsyncMock(return_value=(draft, None))
        )
        response = designer_client.put("/api/v1/templates/12", json={}, headers=service_headers)
        assert response.status_code == 200

    def test_render_resolves_today(self, designer_client, service_headers, monkeypatch):
        template = template_obj(field_schema={
            "fields": [{"id": "start", "name": "Start", "type": "date", "validation": {"minDate": "today"}}]
        })
        monkeypatch.setattr(template_repository, "get_template", AsyncMock(return_value=template))

        response = designer_client.get("/api/v1/templates/12/render?today=2026-10-19", headers=service_headers)

        assert response.status_code == 200
        assert response.json()["fields"][0]["minDate"] == "2026-10-19"


# ── Customer / Policy ─────────────────────────

class TestCustomerApi:

    @pytest.fixture
    def quoting(self, customer_app):
        client = MagicMock(spec=QuotingClient)
        client.get_quote_detail = AsyncMock()
        client.update_quote_status = AsyncMock(return_value={})
        customer_app.dependency_overrides[get_quoting_client] = lambda: client
        return client

    def test_convert_individual_quote(self, customer_client, service_headers, quoting, recorded, mock_db):
        quoting.get_quote_detail.return_value = {
            "quote": {"id": 5, "status": "Ready for Sale", "type": "Individual"},
            "applicant": {"id": 11, "firstName": "Ada", "lastName": "Lovelace",
                          "birthdate": "1985-12-10", "email": "ada@example.com"},
            "coverages": [],
        }

        response = customer_client.post(
            "/api/v1/convert-quote",
            json={"quoteId": 5, "effectiveDate": "2026-01-01"},
            headers=service_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["policyType"] == "Individual"
        assert body["policyNumber"].startswith("POL-")
        assert body["message"] == "Individual policy created successfully"
        assert body["policy"]["id"] == body["policyId"]
        assert body["policy"]["policyNumber"] == body["policyNumber"]
        assert body["policy"]["sourceQuoteId"] == 5
        assert body["policy"]["effectiveDate"] == "2026-01-01"
        assert body["policy"]["status"] == "Active"
        mock_db.commit.assert_awaited_once()

    def test_convert_group_quote_with_classes_key(self, customer_client, service_headers, quoting, recorded):
        quoting.get_quote_detail.return_value = {
            "quote": {"id": 9, "status": "Ready for Sale", "type": "Group", "groupId": 4},
            "group": {"id": 4, "groupName": "Acme Corp"},
            "groupApplicants": [
                {"id": 21, "firstName": "Grace", "lastName": "Hopper", "birthdate": "1970-01-01"},
            ],
            "coverages": [],
        }

        response = customer_client.post(
            "/api/v1/convert-quote",
            json={
                "quoteId": 9,
                "effectiveDate": "2026-01-01",
                "classes": [
                    {"className": "Executives", "memberIds": [21], "coverages": [{"productType": "Life"}]},
                ],
            },
            headers=service_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["policyType"] == "Group"
        assert body["policy"]["groupName"] == "Acme Corp"
        assert body["policy"]["sourceGroupId"] == 4
        class_names = [row.class_name for row in recorded if hasattr(row, "class_name")]
        assert class_names == ["Executives"]

    def test_convert_requires_inputs(self, customer_client, service_headers, quoting):
        response = customer_client.post("/api/v1/convert-quote", json={"quoteId": 5}, headers=service_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Quote ID and effective date are required"

    def test_convert_lost_race_is_409(self, customer_client, service_headers, quoting, mock_db):
        quoting.get_quote_detail.return_value = {
            "quote": {"id": 5, "status": "Ready for Sale", "type": "Individual"},
            "applicant": {"id": 11, "email": "ada@example.com"},
        }
        quoting.update_quote_status.side_effect = InvalidStateError('Quote is not in "Ready for Sale" status')

        response = customer_client.post(
            "/api/v1/convert-quote",
            json={"quoteId": 5, "effectiveDate": "2026-01-01"},
            headers=service_headers,
        )

        assert response.status_code == 409
        mock_db.add.assert_not_called()
        mock_db.rollback.assert_awaited_once()

    def test_unknown_policy_is_404(self, customer_client, service_headers, mock_db):
        mock_db.get.return_value = None
        response = customer_client.get("/api/v1/policies/77", headers=service_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Policy not found"
