"""
`Logger.io`: call tracing for use cases, repositories and routes.

With DEBUG on, every decorated call logs its masked arguments and its return
value, tagged with the call target and the start time of the outermost
decorated call in the chain. An exception is logged once, by the innermost
decorated call that sees it:
- CustomBaseError with a 4xx status: WARNING, no traceback (an expected refusal
  such as LimitExceeded or OutOfHours)
- CustomBaseError with a 5xx status: ERROR, no traceback (store timeout/failure)
- anything else: ERROR with traceback
"""

from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import (
    ExtraField,
    call_depth_var,
    custom_logger,
)
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])

# _emit <- _enter/_leave/_fail <- wrapper <- decorated call site
_CALLER_DEPTH = 3


class LoguruIO:
    def __init__(self, bound_logger: 'LoguruLogger', *, truncate: bool = True) -> None:
        self._logger = bound_logger
        self.truncate = truncate

    def _emit(
        self, extra: dict[str, Any], level: str, message: str, *, exception: bool = False
    ) -> None:
        self._logger.bind(**extra).opt(depth=_CALLER_DEPTH, exception=exception).log(
            level, message
        )

    def _enter(self, call_target: str, args: Any, kwargs: Any) -> dict[str, Any]:
        call_depth_var.set(call_depth_var.get() + 1)
        extra = {
            ExtraField.CALL_TARGET: call_target,
            ExtraField.CHAIN_START_TIME: get_chain_start_time(),
        }
        if settings.DEBUG:  # masking is skipped when nothing would be printed
            self._emit(extra, 'DEBUG', f'args: {self._scrub(args)}, kwargs: {self._scrub(kwargs)}')
        return extra

    def _leave(self, extra: dict[str, Any], return_value: Any) -> None:
        if settings.DEBUG:
            self._emit(extra, 'DEBUG', f'return: {self._scrub(return_value)}')

    def _fail(self, extra: dict[str, Any], e: Exception) -> None:
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]

        if isinstance(e, CustomBaseError):
            level = 'WARNING' if e.status_code < 500 else 'ERROR'
            self._emit(extra, level, f'{type(e).__name__}: {e.message}')
        else:
            self._emit(extra, 'ERROR', f'{type(e).__name__}: {e}', exception=True)

    def _scrub(self, data: Any) -> Any:
        if isinstance(data, dict):
            cleaned: Any = {
                key: self._scrub(should_mask_keyword(key, value)) for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            cleaned = type(data)(self._scrub(item) for item in data)
        else:
            cleaned = mask_sensitive(data)
        return truncate_content(cleaned) if self.truncate else cleaned

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        # Loguru's `catch` frames are elided from rendered tracebacks; borrow its filename
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        call_target = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                extra = self._enter(call_target, args, kwargs)
                try:
                    call_args, call_kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    return_value = await func(*call_args, **call_kwargs)
                except Exception as e:
                    self._fail(extra, e)
                    raise
                finally:
                    reset_call_depth()
                self._leave(extra, return_value)
                return return_value

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            extra = self._enter(call_target, args, kwargs)
            try:
                call_args, call_kwargs = normalize_args_kwargs(func, *args, **kwargs)
                return_value = func(*call_args, **call_kwargs)
            except Exception as e:
                self._fail(extra, e)
                raise
            finally:
                reset_call_depth()
            self._leave(extra, return_value)
            return return_value

        return cast(_F, self._hide_from_traceback(sync_wrapper))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, truncate: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, truncate: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(custom_logger, truncate=truncate)
        return decorator(func) if func else decorator
