import io
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from admin_core.db import models

ROOT = Path(__file__).resolve().parents[2]


def _config(**kwargs) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"), **kwargs)
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    return cfg


def test_upgrade_creates_every_mapped_table(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", url)
    cfg = _config()

    command.upgrade(cfg, "head")
    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names()) - {"alembic_version"}
        assert tables == set(models.Base.metadata.tables)
        for name, table in models.Base.metadata.tables.items():
            migrated = {column["name"] for column in inspector.get_columns(name)}
            assert migrated == {column.name for column in table.columns}, name
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")
    engine = create_engine(url)
    try:
        assert set(inspect(engine).get_table_names()) == {"alembic_version"}
    finally:
        engine.dispose()


def test_offline_sql_uses_url_composed_from_postgres_parts(monkeypatch):
    for name in ("TEST_DATABASE_URL", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    for name, value in {
        "POSTGRES_USER": "admin",
        "POSTGRES_PASSWORD": "secret",
        "POSTGRES_HOST": "db",
        "POSTGRES_PORT": "5432",
        "POSTGRES_DB": "equity",
    }.items():
        monkeypatch.setenv(name, value)
    buffer = io.StringIO()

    command.upgrade(_config(output_buffer=buffer), "head", sql=True)

    sql = buffer.getvalue()
    assert "CREATE TABLE sliders" in sql
    assert "TIMESTAMP WITH TIME ZONE" in sql
