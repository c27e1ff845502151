"""Each service's migration branch builds exactly the tables its models declare."""

from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect

from apogee.core.constants import ServiceName
from apogee.db.models import SERVICE_METADATA

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "apogee" / "db" / "migrations"


@pytest.fixture(scope="module")
def scripts() -> ScriptDirectory:
    return ScriptDirectory(str(MIGRATIONS_DIR))


def test_one_branch_per_service(scripts):
    labels = set()
    for head in scripts.get_heads():
        labels.update(scripts.get_revision(head).branch_labels)
    assert labels == {service.value for service in ServiceName}


@pytest.mark.parametrize("service", list(ServiceName))
def test_branch_matches_models(scripts, service):
    metadata = SERVICE_METADATA[service]
    engine = create_engine("sqlite://")

    with engine.begin() as connection:
        context = MigrationContext.configure(connection)
        with Operations.context(context):
            for revision in reversed(list(scripts.walk_revisions("base", f"{service.value}@head"))):
                revision.module.upgrade()

        inspector = inspect(connection)
        assert set(inspector.get_table_names()) == set(metadata.tables)
        for name, table in metadata.tables.items():
            columns = {column["name"] for column in inspector.get_columns(name)}
            assert columns == set(table.columns.keys()), name

    engine.dispose()
