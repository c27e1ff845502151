"""Attaching configured benefit templates to quotes."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from apogee.clients.benefit_designer import BenefitDesignerClient
from apogee.core.errors import ValidationError
from apogee.db.models import Quote, QuoteBenefit
from apogee.services import quote_benefits

TEMPLATE = {
    "id": 12,
    "templateId": "6f1c1f0e-8a4e-4b43-9a55-0b1fb0a7c001",
    "name": "Dental Basic",
    "version": "1.2",
    "categoryName": "Dental",
    "categoryIcon": "🦷",
    "fieldSchema": {
        "fields": [
            {"id": "max", "name": "Annual Maximum", "type": "money", "required": True,
             "validation": {"min": 0, "max": 5000}},
        ]
    },
    "defaultValues": {"max": 1500},
}


@pytest.fixture
def designer():
    client = MagicMock(spec=BenefitDesignerClient)
    client.get_template = AsyncMock(return_value=TEMPLATE)
    return client


class TestAttachBenefit:

    @pytest.mark.asyncio
    async def test_snapshots_template_and_numbers_instances(self, mock_db, recorded, designer):
        mock_db.get.return_value = Quote(id=5, status="In Progress", type="Individual")
        mock_db.scalar.return_value = 2

        benefit = await quote_benefits.attach_benefit(
            mock_db, designer, quote_id=5, template_db_id=12, configured_values={"max": 3000}
        )

        assert isinstance(benefit, QuoteBenefit)
        assert benefit.instance_number == 3
        assert benefit.template_uuid == TEMPLATE["templateId"]
        assert benefit.template_version == "1.2"
        assert benefit.category_name == "Dental"
        assert benefit.field_schema == TEMPLATE["fieldSchema"]
        assert benefit.configured_values == {"max": 3000}

    @pytest.mark.asyncio
    async def test_defaults_used_when_no_values_given(self, mock_db, recorded, designer):
        mock_db.get.return_value = Quote(id=5, status="In Progress", type="Individual")
        mock_db.scalar.return_value = 0

        benefit = await quote_benefits.attach_benefit(mock_db, designer, quote_id=5, template_db_id=12)

        assert benefit.configured_values == {"max": 1500}
        assert benefit.instance_number == 1

    @pytest.mark.asyncio
    async def test_invalid_values_rejected(self, mock_db, recorded, designer):
        mock_db.get.return_value = Quote(id=5, status="In Progress", type="Individual")

        with pytest.raises(ValidationError) as exc_info:
            await quote_benefits.attach_benefit(
                mock_db, designer, quote_id=5, template_db_id=12, configured_values={"max": 9000}
            )

        assert exc_info.value.details == {"fields": {"max": "Maximum value is 5000"}}
        assert recorded == []

    @pytest.mark.asyncio
    async def test_group_quotes_rejected(self, mock_db, designer):
        mock_db.get.return_value = Quote(id=9, status="In Progress", type="Group")

        with pytest.raises(ValidationError, match="Individual quotes"):
            await quote_benefits.attach_benefit(mock_db, designer, quote_id=9, template_db_id=12)

        designer.get_template.assert_not_awaited()


class TestUpdateBenefit:

    @pytest.mark.asyncio
    async def test_revalidates_against_stored_snapshot(self, mock_db):
        benefit = QuoteBenefit(
            id=3,
            quote_id=5,
            field_schema={"fields": [{"id": "max", "name": "Annual Maximum", "type": "number",
                                      "validation": {"max": 100}}]},
            configured_values={"max": 50},
        )
        mock_db.get.return_value = benefit

        with pytest.raises(ValidationError):
            await quote_benefits.update_benefit_values(mock_db, 3, {"max": 101})

        updated = await quote_benefits.update_benefit_values(mock_db, 3, {"max": 99})
        assert updated.configured_values == {"max": 99}
