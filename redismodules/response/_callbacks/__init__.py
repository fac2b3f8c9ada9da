"""
redismodules.response.callbacks
-------------------------------
"""

from __future__ import annotations

from abc import ABC, ABCMeta, abstractmethod
from typing import SupportsInt, cast

from redismodules._utils import b, pairs_to_flat_list
from redismodules.response._utils import flat_pairs_to_dict
from redismodules.typing import (
    Generic,
    ResponsePrimitive,
    ResponseType,
    StringT,
    TypeVar,
    ValueT,
    add_runtime_checks,
)

R = TypeVar("R")
CR_co = TypeVar("CR_co", covariant=True)
CK_co = TypeVar("CK_co", covariant=True)

RESP = TypeVar("RESP")


class ResponseCallbackMeta(ABCMeta):
    def __new__(
        cls, name: str, bases: tuple[type, ...], namespace: dict[str, object]
    ) -> ResponseCallbackMeta:
        kls = super().__new__(cls, name, bases, namespace)
        setattr(kls, "transform", add_runtime_checks(getattr(kls, "transform")))
        return kls


class ResponseCallback(ABC, Generic[RESP, R], metaclass=ResponseCallbackMeta):
    """
    Transforms the raw reply delivered by the transport into the value
    returned by a module command method. Replies may arrive decoded
    (:class:`str`) or raw (:class:`bytes`) depending on how the
    connection was configured so every callback accepts both.
    """

    def __call__(self, response: RESP, **options: ValueT | None) -> R:
        return self.transform(response, **options)

    @abstractmethod
    def transform(self, response: RESP, **options: ValueT | None) -> R:
        pass


class NoopCallback(ResponseCallback[R, R]):
    def transform(self, response: R, **options: ValueT | None) -> R:
        return response


class SimpleStringCallback(ResponseCallback[ResponsePrimitive, bool]):
    def __init__(self, ok_values: set[str] = {"OK"}):
        self.ok_values: set[StringT] = {*ok_values, *(b(v) for v in ok_values)}

    def transform(self, response: ResponsePrimitive, **options: ValueT | None) -> bool:
        if isinstance(response, bool):
            return response
        if isinstance(response, (str, bytes)):
            return response in self.ok_values
        return False


class BoolCallback(ResponseCallback[ResponsePrimitive, bool]):
    def transform(self, response: ResponsePrimitive, **options: ValueT | None) -> bool:
        if isinstance(response, bool):
            return response
        if isinstance(response, (str, bytes)):
            return response not in ("0", b"0", "", b"")
        return bool(response)


class BoolsCallback(ResponseCallback[ResponseType, tuple[bool, ...]]):
    def transform(self, response: ResponseType, **options: ValueT | None) -> tuple[bool, ...]:
        if isinstance(response, list):
            return tuple(BoolCallback()(r) for r in response)
        raise ValueError(f"Unable to map {response!r} to tuple of bools")


class IntsCallback(ResponseCallback[ResponseType, tuple[int, ...]]):
    def transform(self, response: ResponseType, **options: ValueT | None) -> tuple[int, ...]:
        if isinstance(response, list):
            return tuple(int(cast(SupportsInt, r)) for r in response)
        raise ValueError(f"Unable to map {response!r} to tuple of ints")


class TupleCallback(ResponseCallback[ResponseType, tuple[CR_co, ...]]):
    def transform(self, response: ResponseType, **options: ValueT | None) -> tuple[CR_co, ...]:
        if isinstance(response, (list, tuple)):
            return cast(tuple[CR_co, ...], tuple(response))
        raise ValueError(f"Unable to map {response!r} to tuple")


class FlatPairsCallback(ResponseCallback[ResponseType, tuple[ResponseType, ...]]):
    """
    Keeps field/value replies as a flat alternating sequence, flattening
    map replies from RESP3 connections into the same shape.
    """

    def transform(
        self, response: ResponseType, **options: ValueT | None
    ) -> tuple[ResponseType, ...]:
        if isinstance(response, dict):
            return tuple(pairs_to_flat_list(response))
        return TupleCallback[ResponseType]()(response)


class DictCallback(ResponseCallback[ResponseType, dict[CK_co, CR_co]]):
    def transform(self, response: ResponseType, **options: ValueT | None) -> dict[CK_co, CR_co]:
        if isinstance(response, (list, dict)):
            return cast(dict[CK_co, CR_co], flat_pairs_to_dict(response))
        raise ValueError(f"Unable to map {response!r} to mapping")

