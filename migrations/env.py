from logging.config import fileConfig
from sqlalchemy import pool, engine_from_config
from alembic import context
from boardstore.core.config import get_data_dir
from boardstore.db.base import Base
from boardstore.db.session import get_boards_dir, get_db_path
from boardstore.db import models  # noqa: F401
import os

# Alembic Config object
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def get_url():
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    return os.getenv(
        "DATABASE_URL", f"sqlite:///{get_db_path(get_boards_dir(get_data_dir()))}"
    )


config.set_main_option("sqlalchemy.url", get_url())

target_metadata = Base.metadata


def run_migrations_offline():
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),  # type: ignore
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
