# This project was developed with assistance from AI tools.
"""The initial Alembic revision builds the same schema as the ORM models.

Runs the revision against an in-memory SQLite database, so no server is needed.
"""

from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from alembic.script import ScriptDirectory
from db import Base
from sqlalchemy import create_engine, inspect

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _upgraded_inspector(connection):
    head = ScriptDirectory(str(ALEMBIC_DIR)).get_revision("head")
    with Operations.context(MigrationContext.configure(connection)):
        head.module.upgrade()
    return inspect(connection)


def test_single_head_revision():
    script = ScriptDirectory(str(ALEMBIC_DIR))
    assert len(script.get_heads()) == 1


def test_upgrade_creates_model_tables_and_columns():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        inspector = _upgraded_inspector(conn)
        assert set(inspector.get_table_names()) == set(Base.metadata.tables)
        for name, table in Base.metadata.tables.items():
            columns = {c["name"] for c in inspector.get_columns(name)}
            assert columns == {c.name for c in table.columns}, name


def test_upgrade_creates_model_indexes():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        inspector = _upgraded_inspector(conn)
        for name, table in Base.metadata.tables.items():
            created = {i["name"] for i in inspector.get_indexes(name)}
            assert created == {i.name for i in table.indexes}, name
