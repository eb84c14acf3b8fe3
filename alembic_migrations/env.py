"""
Alembic environment.

Uses the URL set by apply_db_migration, or builds one from the config file
named by $ENVIRONMENT when run from the command line.
"""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from app.core.config import get_environment_config
from app.database import Base
from app.database.base import SYNC_DRIVER, get_db_url
from app.database.schemas import *  # noqa: F401,F403  register models on Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if not config.get_main_option("sqlalchemy.url"):
    url = get_db_url(get_environment_config(), SYNC_DRIVER)
    config.set_main_option(
        "sqlalchemy.url", url.render_as_string(hide_password=False)
    )

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
