"""
Postgres fixtures for the SQLAlchemy repositories

The rest of the suite runs on the in-memory store. These tests build their own
Settings pointing at a dedicated test database (POSTGRES_TEST_DB, default
`restaurant_reservation_test`), recreate its schema with Alembic once per
session and truncate every table before each test.

When no Postgres server answers within a few seconds the whole package is
skipped; any failure after the server answered is a real error.
"""

import asyncio
from collections.abc import AsyncGenerator
import os
from pathlib import Path

from alembic import command
from alembic.config import Config
import anyio
import asyncpg
import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import Settings, settings
from src.platform.database.orm_db_setting import Database, ini_safe_url


ALEMBIC_INI = Path(__file__).resolve().parents[5] / 'src' / 'platform' / 'alembic' / 'alembic.ini'
CONNECT_TIMEOUT_SECONDS = 3
TABLES = ('reservation', 'restaurant', '"user"')


def _maintenance_url(pg_settings: Settings) -> str:
    return pg_settings.model_copy(update={'POSTGRES_DB': 'postgres'}).DATABASE_URL_ASYNC


async def _ensure_test_database(pg_settings: Settings) -> None:
    engine = create_async_engine(_maintenance_url(pg_settings), isolation_level='AUTOCOMMIT')
    try:
        with anyio.fail_after(CONNECT_TIMEOUT_SECONDS):
            async with engine.connect() as conn:
                result = await conn.execute(
                    text('SELECT 1 FROM pg_database WHERE datname = :name'),
                    {'name': pg_settings.POSTGRES_DB},
                )
                if not result.scalar():
                    await conn.execute(text(f'CREATE DATABASE "{pg_settings.POSTGRES_DB}"'))
    finally:
        await engine.dispose()


async def _reset_schema(pg_settings: Settings) -> None:
    engine = create_async_engine(pg_settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
    finally:
        await engine.dispose()


@pytest.fixture(scope='session')
def pg_settings() -> Settings:
    test_settings = settings.model_copy(
        update={
            'STORE_BACKEND': 'postgres',
            'POSTGRES_DB': os.environ.get('POSTGRES_TEST_DB', 'restaurant_reservation_test'),
        }
    )

    try:
        asyncio.run(_ensure_test_database(test_settings))
    except (OSError, SQLAlchemyError, asyncpg.PostgresError) as e:  # TimeoutError is an OSError
        pytest.skip(f'Postgres not reachable at {test_settings.POSTGRES_SERVER}: {e}')

    asyncio.run(_reset_schema(test_settings))

    # env.py keeps a preset URL instead of reading the process settings
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option('sqlalchemy.url', ini_safe_url(test_settings.DATABASE_URL_ASYNC))
    command.upgrade(alembic_cfg, 'head')

    return test_settings


@pytest.fixture
async def database(pg_settings: Settings) -> AsyncGenerator[Database, None]:
    database = Database(settings=pg_settings)
    async with database.engine.begin() as conn:
        await conn.execute(text(f'TRUNCATE {", ".join(TABLES)}'))

    yield database

    await database.dispose()
