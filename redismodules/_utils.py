from __future__ import annotations

import enum
import logging
from typing import Any

from wrapt import ObjectProxy

from redismodules.typing import (
    Callable,
    Iterable,
    Mapping,
    ResponseType,
    StringT,
    TypeVar,
    ValueT,
)

logger = logging.getLogger("redismodules")

T = TypeVar("T")
U = TypeVar("U")


@enum.unique
class CaseAndEncodingInsensitiveEnum(bytes, enum.Enum):
    """
    Module command names and tokens are case insensitive on the server,
    so members compare equal to any casing of their value, as either
    :class:`str` or :class:`bytes`.
    """

    @property
    def variants(self) -> set[StringT]:
        decoded = str(self)
        return {
            self.value.lower(),
            self.value,
            decoded.lower(),
            decoded.upper(),
        }

    def __eq__(self, other: object) -> bool:
        if other:
            if isinstance(other, self.__class__):
                return bool(self.value == other.value)
            return other in self.variants
        return False

    def __str__(self) -> str:
        return self.decode("latin-1")

    def __hash__(self) -> int:
        return hash(self.value)


class EncodingInsensitiveDict(ObjectProxy):  # type: ignore
    """
    Read-mostly view over a mapping decoded from a redis reply that allows
    lookups with either :class:`str` or :class:`bytes` keys irrespective
    of whether the transport decodes responses.
    """

    def __init__(
        self,
        dict: Mapping[Any, Any] | None = None,
        encoding: str = "utf-8",
    ):
        super().__init__(dict or {})
        self._self_encoding = encoding

    def _alternate(self, item: StringT) -> StringT:
        if isinstance(item, str):
            return item.encode(self._self_encoding)
        return item.decode(self._self_encoding)

    def __getitem__(self, item: StringT) -> Any:
        if item not in self.__wrapped__ and isinstance(item, (str, bytes)):
            return self.__wrapped__[self._alternate(item)]
        return self.__wrapped__[item]

    def get(self, item: StringT, default: object | None = None) -> Any:
        try:
            return self.__getitem__(item)
        except KeyError:
            return default

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, bytes)):
            return key in self.__wrapped__ or self._alternate(key) in self.__wrapped__
        return key in self.__wrapped__

    def __repr__(self) -> str:
        return repr(self.__wrapped__)


def b(x: ResponseType, encoding: str | None = None) -> bytes:
    if isinstance(x, bytes):
        return x
    _v = x if isinstance(x, str) else str(x)
    return _v.encode(encoding) if encoding else _v.encode()


def nativestr(x: ResponseType, encoding: str = "utf-8") -> str:
    if isinstance(x, (str, bytes)):
        return x if isinstance(x, str) else x.decode(encoding, "replace")
    elif isinstance(x, (int, float, bool)):
        return str(x)
    raise ValueError(f"Unable to cast {x} to string")


def as_token(value: ValueT) -> StringT:
    """
    Renders a label as a wire token, keeping :class:`str` and :class:`bytes`
    untouched and formatting everything else with :func:`str`
    """
    if isinstance(value, (str, bytes)):
        return value
    return str(value)


def pairs_to_flat_list(
    pairs: Mapping[T, U] | Iterable[tuple[T, U]],
    key_transform: Callable[[T], Any] | None = None,
    value_transform: Callable[[U], Any] | None = None,
) -> list[Any]:
    """
    Flattens ``{a: 1, b: 2}`` or ``[(a, 1), (b, 2)]`` into
    ``[a, 1, b, 2]`` preserving the input order
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    ret: list[Any] = []
    for key, value in items:
        ret.append(key_transform(key) if key_transform else key)
        ret.append(value_transform(value) if value_transform else value)
    return ret
