"""
HTTP mapping for errors raised anywhere below the controllers.

Every error response has the body `{"error": <kind>, "detail": <message>}`.
Kinds for framework errors (unknown route, wrong method, body validation) use
the same vocabulary as the domain errors so clients can switch on one field.
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from src.platform.exception.exceptions import (
    AuthenticationError,
    CustomBaseError,
    StoreError,
)
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

# Kinds for errors raised by Starlette itself rather than by this service
_HTTP_STATUS_KINDS = {
    status.HTTP_401_UNAUTHORIZED: 'Unauthorized',
    status.HTTP_403_FORBIDDEN: 'Forbidden',
    status.HTTP_404_NOT_FOUND: 'NotFound',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'MethodNotAllowed',
}

STORE_RETRY_AFTER_SECONDS = '1'


def error_response(
    status_code: int, kind: str, detail: Any, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={'error': kind, 'detail': detail}, headers=headers
    )


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))

    headers = None
    if isinstance(error, AuthenticationError):
        headers = {'WWW-Authenticate': 'Bearer'}
    elif isinstance(error, StoreError):  # includes StoreTimeoutError
        headers = {'Retry-After': STORE_RETRY_AFTER_SECONDS}

    return error_response(error.status_code, error.error_kind, error.message, headers)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = getattr(exc, 'status_code', status.HTTP_500_INTERNAL_SERVER_ERROR)
    kind = _HTTP_STATUS_KINDS.get(status_code, 'HTTPError')
    return error_response(
        status_code, kind, getattr(exc, 'detail', 'Error'), getattr(exc, 'headers', None)
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    problems = [
        {'loc': '.'.join(str(part) for part in e.get('loc', ())), 'msg': e.get('msg')}
        for e in error.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, 'InvalidArgument', problems)


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, 'InvalidArgument', str(exc))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Logged with the traceback here; the client never sees internals
    Logger.base.opt(exception=exc).error(
        f'💥 Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, 'InternalError', 'Internal server error'
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    StarletteHTTPException: http_exception_handler,
    RequestValidationError: validation_error_handler,
    ValueError: value_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
