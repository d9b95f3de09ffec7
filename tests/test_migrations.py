"""Alembic revisions against a file-backed SQLite database."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from core.db.base import Base
import models  # noqa: F401

ROOT = Path(__file__).resolve().parents[1]


def _alembic_config(url: str) -> Config:
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.attributes["db_url"] = url
    return config


def _current_revision(engine):
    with engine.connect() as connection:
        return connection.execute(text("SELECT version_num FROM alembic_version")).scalar()


def test_upgrade_creates_every_table(tmp_path):
    url = f"sqlite:///{tmp_path / 'fresh.db'}"

    command.upgrade(_alembic_config(url), "head")

    engine = create_engine(url)
    assert set(Base.metadata.tables) <= set(inspect(engine).get_table_names())
    assert _current_revision(engine) == "0001_initial_schema"
    engine.dispose()


def test_upgrade_after_create_all(tmp_path):
    url = f"sqlite:///{tmp_path / 'started.db'}"
    engine = create_engine(url)
    # Same as the app does on startup
    Base.metadata.create_all(bind=engine)

    command.upgrade(_alembic_config(url), "head")

    assert _current_revision(engine) == "0001_initial_schema"
    engine.dispose()
