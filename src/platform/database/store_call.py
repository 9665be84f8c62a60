"""
Deadline and error translation for store calls.

Every repository method runs its I/O inside `store_call(...)`. The block is
cancelled once the deadline elapses; the caller gets `StoreTimeoutError`, and
driver failures surface as `StoreError`. Domain errors raised inside the
block pass through untouched.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from sqlalchemy.exc import SQLAlchemyError

from src.platform.exception.exceptions import CustomBaseError, StoreError, StoreTimeoutError
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def store_call(operation: str, *, timeout_seconds: float) -> AsyncIterator[None]:
    try:
        with anyio.fail_after(timeout_seconds):
            yield
    except CustomBaseError:
        raise
    except TimeoutError as e:
        Logger.base.warning(f'⏱️ [STORE] {operation} exceeded {timeout_seconds}s')
        raise StoreTimeoutError(f'{operation} timed out') from e
    except SQLAlchemyError as e:
        Logger.base.error(f'💥 [STORE] {operation} failed: {type(e).__name__}')
        raise StoreError(f'{operation} failed') from e
