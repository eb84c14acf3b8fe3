"""
Engine settings, database bootstrap and migrations following kkb_fastapi pattern.

The ``[db]`` config section holds the connection fields plus two optional
keys: ``migrate_on_startup`` (bool) and a ``[db.pool]`` table overriding
``engine_kw``.
"""
import asyncio
import functools
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import text
from sqlalchemy.engine.url import URL
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import Config

PROJECT_ROOT = Path(__file__).resolve().parents[2]

ASYNC_DRIVER = "postgresql+asyncpg"
# Alembic runs synchronously
SYNC_DRIVER = "postgresql+psycopg2"

DB_URL_FIELDS = ("host", "port", "username", "password", "database")

# 42P04 duplicate_database
DUPLICATE_DATABASE = "42P04"

engine_kw = {
    "pool_pre_ping": True,
    "pool_size": 2,
    "max_overflow": 4,
    "pool_recycle": 3600,
    # asyncpg statement caches break behind pgbouncer
    "connect_args": {
        "prepared_statement_cache_size": 0,
        "statement_cache_size": 0,
    },
}


def get_db_url(config: Config, drivername: str = ASYNC_DRIVER) -> URL:
    """Build the database URL from the connection fields of ``[db]``."""
    db = config.section("db")
    return URL.create(
        drivername=drivername,
        **{key: db[key] for key in DB_URL_FIELDS if key in db},
    )


def get_engine_kw(config: Config) -> dict:
    """``engine_kw`` with the pool sizes from ``[db.pool]`` applied."""
    overrides = config.section("db").get("pool", {})
    return {**engine_kw, **overrides}


async def create_database(config: Config) -> bool:
    """
    Create the configured database if it does not exist yet.

    CREATE DATABASE cannot run in a transaction, so the statement is issued
    on an AUTOCOMMIT connection to the ``postgres`` maintenance database.

    Returns:
        True if the database was created, False if it already existed

    Raises:
        ValueError: If ``[db]`` has no database name
    """
    database = config.section("db").get("database")
    if not database:
        raise ValueError("[db] database is not configured")

    maintenance_url = get_db_url(config).set(database="postgres")
    maintenance_engine = create_async_engine(maintenance_url, poolclass=NullPool)
    try:
        async with maintenance_engine.connect() as connection:
            connection = await connection.execution_options(isolation_level="AUTOCOMMIT")
            await connection.execute(text(f'CREATE DATABASE "{database}"'))
    except DBAPIError as e:
        if getattr(e.orig, "pgcode", None) == DUPLICATE_DATABASE:
            logging.info(f"Database '{database}' already exists")
            return False
        logging.error(f"Could not create database '{database}': {e}")
        raise
    finally:
        await maintenance_engine.dispose()

    logging.info(f"Created database '{database}'")
    return True


async def apply_db_migration(config: Config):
    """
    Create the database if needed and upgrade it to the latest revision.

    Returns once every migration is applied, so the schema is in place
    before the first request.
    """
    await create_database(config)

    alembic_cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic_migrations"))
    alembic_cfg.set_main_option(
        "sqlalchemy.url",
        get_db_url(config, SYNC_DRIVER).render_as_string(hide_password=False),
    )

    logging.info(f"Upgrading '{config.section('db')['database']}' to head")
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, functools.partial(command.upgrade, alembic_cfg, "head"))
    logging.info("Database migration completed")
