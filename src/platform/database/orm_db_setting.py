"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: lazily builds one engine per event loop from Settings
2. Base: declarative base shared by all ORM models
3. Database: session provider injected into repositories through the DI container

Engines are always bound to the current event loop to prevent
"Task got Future attached to a different loop" errors under test clients.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger


def ini_safe_url(url: str) -> str:
    """Escape `%` for configparser interpolation (alembic Config.set_main_option)"""
    return url.replace('%', '%%')


class AsyncEngineManager:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engine...')
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        assert self._engine is not None
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            self._loop = None

    def _create_engine(self) -> AsyncEngine:
        timeout = self._settings.STORE_CALL_TIMEOUT_SECONDS
        return create_async_engine(
            self._settings.DATABASE_URL_ASYNC,
            echo=False,
            pool_size=self._settings.DB_POOL_SIZE,
            max_overflow=self._settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=self._settings.DB_POOL_TIMEOUT,
            pool_recycle=self._settings.DB_POOL_RECYCLE,
            pool_pre_ping=self._settings.DB_POOL_PRE_PING,
            # Server-side guard in addition to the client-side deadline in store_call
            connect_args={'command_timeout': timeout, 'timeout': timeout},
        )


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    """Session provider for repositories, built once from the process Settings."""

    def __init__(self, *, settings: Settings) -> None:
        self._engine_manager = AsyncEngineManager(settings)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine_manager.get_engine()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: the session rolls back any open transaction on exit, so a
        cancelled or timed-out call never leaves a partial write committed.
        """
        session_maker = self._engine_manager.get_session_maker()
        async with session_maker() as session:
            yield session

    async def create_tables(self) -> None:
        """Create database tables if they don't exist (local runs without Alembic)"""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        except Exception as e:
            error_msg = str(e).lower()
            if any(keyword in error_msg for keyword in ['already exists', 'duplicate key']):
                Logger.base.info('Tables already exist, skipping creation')
            else:
                Logger.base.error(f'Error creating tables: {e}')
                raise

    async def dispose(self) -> None:
        await self._engine_manager.dispose()
