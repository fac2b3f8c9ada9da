from __future__ import annotations

import functools
import inspect
from typing import Any

from redismodules.config import Config
from redismodules.exceptions import CommandSyntaxError
from redismodules.typing import (
    Callable,
    Iterable,
    ParamSpec,
    TypeVar,
)

R = TypeVar("R")
P = ParamSpec("P")


class MutuallyExclusiveParametersError(CommandSyntaxError):
    def __init__(self, arguments: set[str], details: str | None):
        message = (
            f"The [{','.join(sorted(arguments))}] parameters are mutually exclusive."
            f"{' ' + details if details else ''}"
        )
        super().__init__(arguments, message)


class MutuallyInclusiveParametersMissing(CommandSyntaxError):
    def __init__(self, arguments: set[str], leaders: set[str], details: str | None):
        if leaders:
            message = (
                f"The [{','.join(sorted(arguments))}] parameters(s)"
                f" must be provided together with [{','.join(sorted(leaders))}]."
                f"{' ' + details if details else ''}"
            )
        else:
            message = (
                f"The [{','.join(sorted(arguments))}] parameters are mutually"
                " inclusive and must be provided together."
                f"{' ' + details if details else ''}"
            )
        super().__init__(arguments, message)


def _provided(sig: inspect.Signature, names: Iterable[str], *args: Any, **kwargs: Any) -> set[str]:
    call_args = sig.bind_partial(*args, **kwargs)
    return {
        k
        for k in names
        if k in call_args.arguments
        and call_args.arguments[k] is not getattr(sig.parameters.get(k), "default")
    }


def mutually_exclusive_parameters(
    *exclusive_params: str,
    details: str | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    _exclusive_params = set(exclusive_params)

    def wrapper(
        func: Callable[P, R],
    ) -> Callable[P, R]:
        sig = inspect.signature(func)

        @functools.wraps(func)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
            if not Config.optimized:
                params = _provided(sig, _exclusive_params, *args, **kwargs)
                if len(params) > 1:
                    raise MutuallyExclusiveParametersError(params, details)
            return func(*args, **kwargs)

        return wrapped

    return wrapper


def mutually_inclusive_parameters(
    *inclusive_params: str,
    leaders: Iterable[str] | None = None,
    details: str | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    _leaders = set(leaders or [])
    _inclusive_params = set(inclusive_params)

    def wrapper(
        func: Callable[P, R],
    ) -> Callable[P, R]:
        sig = inspect.signature(func)

        @functools.wraps(func)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
            if not Config.optimized:
                params = _provided(sig, _inclusive_params | _leaders, *args, **kwargs)
                if _leaders and _leaders & params != _leaders and len(params) > 0:
                    raise MutuallyInclusiveParametersMissing(_inclusive_params, _leaders, details)
                elif not _leaders and params and len(params) != len(_inclusive_params):
                    raise MutuallyInclusiveParametersMissing(_inclusive_params, _leaders, details)
            return func(*args, **kwargs)

        return wrapped

    return wrapper


def ensure_iterable_valid(
    argument: str,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Rejects a bare :class:`str` or :class:`bytes` where a batch of values
    is expected.
    """

    def iterable_valid(value: Any) -> bool:
        return isinstance(value, Iterable) and not isinstance(value, (str, bytes))

    def wrapper(
        func: Callable[P, R],
    ) -> Callable[P, R]:
        sig = inspect.signature(func)

        @functools.wraps(func)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
            if not Config.optimized:
                value = sig.bind_partial(*args, **kwargs).arguments.get(argument)
                if not iterable_valid(value):
                    raise TypeError(
                        f"{func.__name__} parameter {argument}={value!r} "
                        "must be a collection of values"
                    )
            return func(*args, **kwargs)

        return wrapped

    return wrapper
