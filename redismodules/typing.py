from __future__ import annotations

import warnings
from collections.abc import (
    Awaitable,
    Callable,
    Coroutine,
    Iterable,
    Iterator,
    Mapping,
    Sequence,
    Set,
    ValuesView,
)
from typing import (
    TYPE_CHECKING,
    Any,
    AnyStr,
    ClassVar,
    Generic,
    Literal,
    ParamSpec,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from typing_extensions import Self

from redismodules.config import Config

_runtime_checks = False
_beartype_found = False

try:
    import beartype

    _beartype_found = True
except ImportError:  # pragma: no cover
    pass

if Config.runtime_checks and not TYPE_CHECKING:  # pragma: no cover
    if _beartype_found:
        _runtime_checks = True
    else:
        warnings.warn(
            "Runtime checks were enabled via environment variable REDISMODULES_RUNTIME_CHECKS"
            " but could not import beartype"
        )

RUNTIME_TYPECHECKS = _runtime_checks

P = ParamSpec("P")
T_co = TypeVar("T_co", covariant=True)
R = TypeVar("R")


def safe_beartype(func: Callable[P, R]) -> Callable[P, R]:
    if TYPE_CHECKING:
        return func

    return beartype.beartype(func) if _beartype_found else func


def add_runtime_checks(func: Callable[P, R]) -> Callable[P, R]:
    if RUNTIME_TYPECHECKS and not TYPE_CHECKING:
        return safe_beartype(func)

    return func


#: Represents the acceptable types of a redis key
KeyT = str | bytes

#: Represents the different python primitives that are accepted
#: as input parameters for module commands (items, labels, tensor values).
#: These are encoded by the transport before being transmitted.
ValueT = str | bytes | int | float

#: The canonical type used for input parameters that represent "strings"
#: that are transmitted to redis.
StringT = str | bytes

#: Flat, ordered list of tokens that follow the command name on the wire
CommandArgList = list[ValueT]

#: Restricted union of container types accepted as arguments to apis
#: that accept a variable number of values for an argument (such as items).
#: This is used instead of :class:`typing.Iterable` as the latter allows
#: :class:`str` to be passed in as a valid value for :class:`Iterable[str]`
#: which is never the actual expectation for a batch of sketch items.
#: For example::
#:
#:     await client.topk.add("sketch", ["a", 1, 2.5])   # valid
#:     await client.topk.add("sketch", ("a", "b"))      # valid
#:     await client.topk.add("sketch", "ab")            # invalid
Parameters = list[T_co] | Set[T_co] | tuple[T_co, ...] | ValuesView[T_co] | Iterator[T_co]

#: Mapping of primitives returned by redis
ResponsePrimitive = StringT | int | float | bool | None

if TYPE_CHECKING:
    ResponseType = (
        ResponsePrimitive
        | list["ResponseType"]
        | dict[ResponsePrimitive, "ResponseType"]
        | BaseException
    )
else:
    ResponseType = ResponsePrimitive | list[Any] | dict[Any, Any] | BaseException

__all__ = [
    "Any",
    "AnyStr",
    "Awaitable",
    "Callable",
    "ClassVar",
    "CommandArgList",
    "Coroutine",
    "Generic",
    "Iterable",
    "Iterator",
    "KeyT",
    "Literal",
    "Mapping",
    "P",
    "Parameters",
    "ParamSpec",
    "Protocol",
    "R",
    "ResponsePrimitive",
    "ResponseType",
    "runtime_checkable",
    "Self",
    "Sequence",
    "StringT",
    "TypeVar",
    "ValueT",
    "ValuesView",
    "TYPE_CHECKING",
    "RUNTIME_TYPECHECKS",
]
