"""
Loguru sinks and stdlib interception for the reservation service.

Importing this module configures logging once per process:
- console sink at DEBUG when settings.DEBUG is on, INFO otherwise
- hourly rotated file sink under LOG_DIR, DEBUG mode only
- stdlib `logging` (uvicorn, sqlalchemy, asyncpg, alembic) routed into loguru
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import re
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

# Argument names (and `name=value` fragments in reprs) whose values are never logged
SENSITIVE_KEYWORDS = frozenset(
    {
        'password',
        'plain_password',
        'hashed_password',
        'token',
        'authorization',
        'secret_key',
    }
)

TRUNCATE_LIMIT = 512

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


DEFAULT_EXTRA: dict[str, Any] = {
    ExtraField.SERVICE_CONTEXT: get_service_context(),
    ExtraField.CHAIN_START_TIME: '',
    ExtraField.CALL_TARGET: '',
}

# uvicorn access line: '127.0.0.1:51234 - "POST /reservation/<id> HTTP/1.1" 409'
_ACCESS_STATUS = re.compile(r' HTTP/[\d.]+" (\d{3})\b')

# Chatty below INFO and never useful here
_MUTED_DEBUG_LOGGERS = ('asyncio', 'httpcore', 'httpx', 'multipart')


def access_log_level(message: str) -> str | None:
    """Level for a uvicorn access line by response status; None for other messages"""
    match = _ACCESS_STATUS.search(message)
    if not match:
        return None

    status_code = int(match.group(1))
    if status_code >= 500:
        return 'CRITICAL'
    if status_code >= 400:
        return 'ERROR'
    if status_code >= 300:
        return 'WARNING'
    if status_code >= 200:
        return 'SUCCESS'
    return 'INFO'


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(_MUTED_DEBUG_LOGGERS):
            return

        message = record.getMessage()
        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Point {file}::{function}:{line} at the code that called logging, not at logging itself
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_name(now: datetime) -> str:
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    return f'{prefix}{now:%Y-%m-%d_%H}.log'


def _add_sinks(target: 'LoguruLogger', *, level: str) -> None:
    target.add(sys.stdout, format=io_log_format, level=level, enqueue=True)

    # Production ships stdout to the collector; files are for local debugging
    if settings.DEBUG:
        target.add(
            f'{LOG_DIR}/{_log_file_name(datetime.now(timezone.utc))}',
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=level,
        )


loguru_logger.remove()  # drop loguru's default stderr handler
custom_logger = loguru_logger.bind(**DEFAULT_EXTRA)
_add_sinks(custom_logger, level='DEBUG' if settings.DEBUG else 'INFO')

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
