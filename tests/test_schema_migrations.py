"""
Tests for the Alembic schema revision
"""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from boardstore.core.boards import open_store
from boardstore.db.base import Base

ROOT = Path(__file__).resolve().parent.parent


def alembic_config(db_path):
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    return config


class TestInitialRevision:
    """Test that the Alembic history matches the models"""

    def test_upgrade_creates_model_tables(self, tmp_path):
        """Should create every table the models declare"""
        db_path = tmp_path / "boards.db"

        command.upgrade(alembic_config(db_path), "head")

        engine = create_engine(f"sqlite:///{db_path}")
        tables = set(inspect(engine).get_table_names()) - {"alembic_version"}
        engine.dispose()
        assert tables == set(Base.metadata.tables)

    def test_upgraded_database_is_usable(self, data_dir):
        """Should serve a store opened on an Alembic-managed file"""
        boards_dir = data_dir / "boards"
        boards_dir.mkdir(parents=True)
        command.upgrade(alembic_config(boards_dir / "boards.db"), "head")

        with open_store(data_dir) as store:
            board = store.create_board("Managed")
            assert store.get_boards().active_board_id == board.id

    def test_downgrade_drops_tables(self, tmp_path):
        """Should remove the schema again"""
        db_path = tmp_path / "boards.db"
        config = alembic_config(db_path)
        command.upgrade(config, "head")

        command.downgrade(config, "base")

        engine = create_engine(f"sqlite:///{db_path}")
        tables = set(inspect(engine).get_table_names()) - {"alembic_version"}
        engine.dispose()
        assert tables == set()
