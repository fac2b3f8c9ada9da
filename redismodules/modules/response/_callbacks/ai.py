from __future__ import annotations

from typing import Any, cast

from redismodules._utils import EncodingInsensitiveDict, b, nativestr
from redismodules.modules.response.types import Tensor
from redismodules.response._callbacks import (
    ResponseCallback,
    SimpleStringCallback,
)
from redismodules.response._utils import flat_pairs_to_dict
from redismodules.typing import (
    AnyStr,
    ResponsePrimitive,
    ResponseType,
    StringT,
    ValueT,
)

_FLOAT_TYPES = {"FLOAT", "DOUBLE"}
_INTEGER_TYPES = {"INT8", "INT16", "INT32", "INT64", "UINT8", "UINT16"}


def _coerce(dtype: str | None, value: ResponsePrimitive) -> ResponsePrimitive:
    if dtype in _FLOAT_TYPES and isinstance(value, (str, bytes, int)):
        return float(value)
    if dtype in _INTEGER_TYPES and isinstance(value, (str, bytes)):
        return int(value)
    if dtype == "BOOL" and not isinstance(value, bool):
        return bool(int(cast(Any, value)))
    return value


def _is_field_reply(response: ResponseType, first_field: str) -> bool:
    if isinstance(response, dict):
        return True
    return (
        isinstance(response, list)
        and len(response) % 2 == 0
        and bool(response)
        and isinstance(response[0], (str, bytes))
        and nativestr(response[0]).lower() == first_field
    )


class TensorCallback(ResponseCallback[ResponseType, Tensor[AnyStr]]):
    def transform(self, response: ResponseType, **options: ValueT | None) -> Tensor[AnyStr]:
        fmt = nativestr(options["format"]).upper() if options.get("format") else None
        if _is_field_reply(response, "dtype"):
            fields = EncodingInsensitiveDict(flat_pairs_to_dict(cast(list[Any], response)))
            dtype = fields.get("dtype")
            native_dtype = nativestr(dtype).upper() if dtype is not None else None
            values = fields.get("values")
            blob = fields.get("blob")
            return Tensor(
                dtype=cast(AnyStr, dtype),
                shape=tuple(int(d) for d in fields.get("shape") or ()),
                values=(
                    tuple(_coerce(native_dtype, v) for v in values) if values is not None else None
                ),
                blob=b(blob) if blob is not None else None,
            )
        if fmt == "BLOB" and isinstance(response, (str, bytes)):
            return Tensor(dtype=None, shape=(), blob=b(response))
        if isinstance(response, list):
            return Tensor(dtype=None, shape=(), values=tuple(response))
        raise ValueError(f"Unable to map {response!r} to a tensor")


class FieldsCallback(ResponseCallback[ResponseType, dict[AnyStr, ResponseType] | ResponseType]):
    """
    Maps field/value replies (``AI.MODELGET``, ``AI.SCRIPTGET``, ``AI.INFO``)
    to a mapping that accepts both :class:`str` and :class:`bytes` keys.
    Any other reply (for example a bare model blob or script source)
    is returned as is.
    """

    def __init__(self, first_field: str) -> None:
        self.first_field = first_field

    def transform(
        self, response: ResponseType, **options: ValueT | None
    ) -> dict[AnyStr, ResponseType] | ResponseType:
        if _is_field_reply(response, self.first_field):
            return cast(
                dict[AnyStr, ResponseType],
                EncodingInsensitiveDict(flat_pairs_to_dict(cast(list[Any], response))),
            )
        return response


class InfoCallback(FieldsCallback):
    def __init__(self) -> None:
        super().__init__("key")

    def transform(
        self, response: ResponseType, **options: ValueT | None
    ) -> dict[AnyStr, ResponseType] | ResponseType:
        if options.get("resetstat"):
            return SimpleStringCallback()(cast(ResponsePrimitive, response))
        return super().transform(response, **options)


class ScanCallback(ResponseCallback[ResponseType, tuple[tuple[StringT, StringT | None], ...]]):
    def transform(
        self, response: ResponseType, **options: ValueT | None
    ) -> tuple[tuple[StringT, StringT | None], ...]:
        if isinstance(response, list):
            return tuple(
                (entry[0], entry[1] if len(entry) > 1 else None)
                if isinstance(entry, list)
                else (entry, None)
                for entry in response
            )
        raise ValueError(f"Unable to map {response!r} to scan results")
