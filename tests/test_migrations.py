"""The alembic history must build the same tables the models declare."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from stockwatch.database import Base

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _alembic_config(url: str) -> Config:
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", url)
    config.attributes["configure_logger"] = False
    return config


def test_upgrade_head_creates_every_model_table(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    command.upgrade(_alembic_config(url), "head")

    engine = create_engine(url)
    try:
        migrated = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert set(Base.metadata.tables) <= migrated


def test_downgrade_base_drops_everything(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = _alembic_config(url)

    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = create_engine(url)
    try:
        remaining = set(inspect(engine).get_table_names()) - {"alembic_version"}
    finally:
        engine.dispose()

    assert remaining == set()
