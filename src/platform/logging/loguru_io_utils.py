from functools import lru_cache
from inspect import Parameter, getfile, getsourcelines, signature
from os.path import basename
from re import IGNORECASE, compile as re_compile
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    TRUNCATE_LIMIT,
    call_depth_var,
    chain_start_time_var,
)


MASK = '********'

# Matches `password='...'` style fragments in reprs (attrs/pydantic/dict output)
_SENSITIVE_PATTERN = re_compile(
    r"""(['"]?)({keys})(['"]?\s*[=:]\s*)(['"])(.*?)\4""".format(
        keys='|'.join(sorted(SENSITIVE_KEYWORDS, key=len, reverse=True))
    ),
    IGNORECASE,
)


def get_chain_start_time() -> float:
    """Start time of the outermost decorated call on this task"""
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def reset_call_depth() -> None:
    depth = call_depth_var.get() - 1
    call_depth_var.set(depth)
    if not depth:
        chain_start_time_var.set(0)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(target))}::{func.__qualname__}:{lineno}'


@lru_cache(maxsize=None)
def _accepted_parameters(func: Callable[..., Any]) -> tuple[int | None, frozenset[str] | None]:
    """(max positional count or None for *args, accepted keyword names or None for **kwargs)"""
    params = signature(func).parameters.values()

    positional: int | None = 0
    keywords: set[str] | None = set()
    for param in params:
        if param.kind is Parameter.VAR_POSITIONAL:
            positional = None
        elif param.kind is Parameter.VAR_KEYWORD:
            keywords = None
        else:
            if positional is not None and param.kind in (
                Parameter.POSITIONAL_ONLY,
                Parameter.POSITIONAL_OR_KEYWORD,
            ):
                positional += 1
            if keywords is not None and param.kind is not Parameter.POSITIONAL_ONLY:
                keywords.add(param.name)

    return positional, None if keywords is None else frozenset(keywords)


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Drop arguments `func` cannot accept (DI and routing layers may pass extras)"""
    max_positional, keywords = _accepted_parameters(getattr(func, '__wrapped__', func))
    if keywords is not None:
        kwargs = {name: value for name, value in kwargs.items() if name in keywords}
    if max_positional is not None:
        args = args[:max_positional]
    return args, kwargs


def mask_sensitive(data: Any) -> Any:
    try:
        text = str(data)
    except Exception:  # a broken __str__ must not break the call being logged
        return data
    masked = _SENSITIVE_PATTERN.sub(rf'\1\2\3\4{MASK}\4', text)
    return data if masked == text else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    if isinstance(keyword, str) and keyword.lower() in SENSITIVE_KEYWORDS:
        return MASK
    return value


def truncate_content(data: Any) -> Any:
    text = data if isinstance(data, str) else str(data)
    if len(text) <= TRUNCATE_LIMIT:
        return data
    return f'{text[:TRUNCATE_LIMIT]}...(+{len(text) - TRUNCATE_LIMIT} chars)'
