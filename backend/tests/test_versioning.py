"""Template versioning: version arithmetic, revision planning and status changes."""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from apogee.core.errors import NotFoundError, ValidationError
from apogee.repositories import categories as category_repository
from apogee.repositories import templates as template_repository
from apogee.services import versioning
from apogee.services.versioning import bump_version, latest_versions, plan_revision

TEMPLATE_ID = uuid.UUID("6f1c1f0e-8a4e-4b43-9a55-0b1fb0a7c001")


def template_row(**kwargs) -> SimpleNamespace:
    data = {
        "id": 1,
        "template_id": TEMPLATE_ID,
        "category_id": 3,
        "type": "individual",
        "name": "Dental Basic",
        "description": "Preventive care",
        "version": "1.0",
        "major_version": 1,
        "minor_version": 0,
        "field_schema": {"fields": []},
        "default_values": {},
        "status": "draft",
    }
    data.update(kwargs)
    return SimpleNamespace(**data)


class TestVersionArithmetic:

    def test_minor_bump(self):
        assert bump_version(1, 0, "minor") == (1, 1)
        assert bump_version(1, 9, "minor") == (1, 10)

    def test_major_bump_resets_minor(self):
        assert bump_version(1, 4, "major") == (2, 0)

    def test_unknown_bump_is_minor(self):
        assert bump_version(2, 3, "patch") == (2, 4)

    def test_latest_versions_compares_numerically(self):
        other = uuid.uuid4()
        rows = [
            template_row(id=1, major_version=1, minor_version=9),
            template_row(id=2, template_id=other, major_version=1, minor_version=0),
            template_row(id=3, major_version=1, minor_version=10),
            template_row(id=4, major_version=1, minor_version=2),
        ]
        latest = latest_versions(rows)
        assert [r.id for r in latest] == [3, 2]

    def test_latest_versions_with_key(self):
        rows = [(template_row(id=1), "cat"), (template_row(id=2, major_version=2), "cat")]
        assert latest_versions(rows, key=lambda row: row[0])[0][0].id == 2


class TestPlanRevision:

    def test_draft_is_edited_in_place(self):
        plan = plan_revision(template_row(), {"name": "Dental Plus", "field_schema": None})
        assert plan.in_place
        assert plan.version == "1.0"
        assert plan.values == {"name": "Dental Plus"}

    def test_draft_description_can_be_cleared(self):
        plan = plan_revision(template_row(), {"description": None})
        assert plan.values == {"description": None}

    def test_active_forks_minor_version_as_draft(self):
        existing = template_row(status="active", minor_version=3, version="1.3")
        plan = plan_revision(existing, {"name": "Dental Plus"})
        assert not plan.in_place
        assert plan.archive_existing
        assert plan.version == "1.4"
        assert plan.values["status"] == "draft"
        assert plan.values["name"] == "Dental Plus"
        assert plan.values["description"] == "Preventive care"
        assert plan.values["template_id"] == TEMPLATE_ID

    def test_archived_forks_major_version_without_archiving(self):
        existing = template_row(status="archived", major_version=2, minor_version=5)
        plan = plan_revision(existing, {"status": "active"}, "major")
        assert plan.version == "3.0"
        assert not plan.archive_existing
        assert plan.activates

    def test_category_and_type_are_not_revisable(self):
        plan = plan_revision(template_row(status="active"), {"category_id": 99, "type": "group"})
        assert plan.values["category_id"] == 3
        assert plan.values["type"] == "individual"


@pytest.fixture
def repo(monkeypatch):
    """Replace the template repository's data access with mocks."""
    mocks = SimpleNamespace(
        get_template=AsyncMock(),
        insert_template=AsyncMock(side_effect=lambda db, **fields: SimpleNamespace(id=50, **fields)),
        archive_active_versions=AsyncMock(return_value=1),
    )
    for name, mock in vars(mocks).items():
        monkeypatch.setattr(template_repository, name, mock)
    return mocks


class TestReviseTemplate:

    @pytest.mark.asyncio
    async def test_missing_template(self, mock_db, repo):
        repo.get_template.return_value = None
        with pytest.raises(NotFoundError):
            await versioning.revise_template(mock_db, 1, {"name": "x"})

    @pytest.mark.asyncio
    async def test_draft_update_keeps_row(self, mock_db, repo):
        existing = template_row()
        repo.get_template.return_value = existing

        template, created = await versioning.revise_template(mock_db, 1, {"name": "Dental Plus"})

        assert created is False
        assert template is existing
        assert existing.name == "Dental Plus"
        assert existing.version == "1.0"
        repo.insert_template.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_draft_activation_archives_other_versions(self, mock_db, repo):
        existing = template_row(id=7)
        repo.get_template.return_value = existing

        template, created = await versioning.revise_template(mock_db, 7, {"status": "active"})

        assert created is False
        assert template.status == "active"
        repo.archive_active_versions.assert_awaited_once_with(mock_db, TEMPLATE_ID, exclude_id=7)

    @pytest.mark.asyncio
    async def test_active_revision_archives_source_and_inserts(self, mock_db, repo):
        existing = template_row(status="active", version="1.2", minor_version=2)
        repo.get_template.return_value = existing

        template, created = await versioning.revise_template(
            mock_db, 1, {"default_values": {"max": 1000}}, "minor"
        )

        assert created is True
        assert existing.status == "archived"
        assert template.version == "1.3"
        assert template.status == "draft"
        assert template.default_values == {"max": 1000}
        repo.archive_active_versions.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fork_straight_to_active_archives_first(self, mock_db, repo):
        existing = template_row(status="archived", major_version=1, minor_version=0)
        repo.get_template.return_value = existing

        template, created = await versioning.revise_template(mock_db, 1, {"status": "active"}, "major")

        assert created is True
        assert template.version == "2.0"
        assert template.status == "active"
        repo.archive_active_versions.assert_awaited_once_with(mock_db, TEMPLATE_ID)

    @pytest.mark.asyncio
    async def test_invalid_schema_rejected_before_write(self, mock_db, repo):
        repo.get_template.return_value = template_row(status="active")
        with pytest.raises(ValidationError):
            await versioning.revise_template(
                mock_db, 1, {"field_schema": {"fields": [{"id": "a", "name": "A", "type": "dropdown"}]}}
            )
        repo.insert_template.assert_not_awaited()


class TestCreateAndStatus:

    @pytest.mark.asyncio
    async def test_create_requires_category_support(self, mock_db, repo, monkeypatch):
        category = SimpleNamespace(id=3, name="Dental", applies_to=["group"])
        monkeypatch.setattr(category_repository, "get_category", AsyncMock(return_value=category))

        with pytest.raises(ValidationError, match='Category "Dental" does not support individual benefits'):
            await versioning.create_template(
                mock_db, category_id=3, benefit_type="individual", name="Dental Basic"
            )

    @pytest.mark.asyncio
    async def test_create_starts_at_one_zero(self, mock_db, repo, monkeypatch):
        category = SimpleNamespace(id=3, name="Dental", applies_to=["group", "individual"])
        monkeypatch.setattr(category_repository, "get_category", AsyncMock(return_value=category))

        template = await versioning.create_template(
            mock_db, category_id=3, benefit_type="individual", name="Dental Basic"
        )

        assert (template.version, template.major_version, template.minor_version) == ("1.0", 1, 0)
        assert template.field_schema == {"fields": []}
        assert template.status == "draft"
        assert isinstance(template.template_id, uuid.UUID)

    @pytest.mark.asyncio
    async def test_create_with_unknown_category(self, mock_db, repo, monkeypatch):
        monkeypatch.setattr(category_repository, "get_category", AsyncMock(return_value=None))
        with pytest.raises(NotFoundError, match="Category not found"):
            await versioning.create_template(mock_db, category_id=9, benefit_type="group", name="X")

    @pytest.mark.asyncio
    async def test_archiving_does_not_touch_other_versions(self, mock_db, repo):
        existing = template_row(status="active")
        repo.get_template.return_value = existing

        template = await versioning.set_template_status(mock_db, 1, "archived")

        assert template.status == "archived"
        repo.archive_active_versions.assert_not_awaited()
