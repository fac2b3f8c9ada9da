from __future__ import annotations

import dataclasses

from redismodules.typing import (
    AnyStr,
    Generic,
    ResponsePrimitive,
)


@dataclasses.dataclass
class Tensor(Generic[AnyStr]):
    """
    Tensor as returned by `AI.TENSORGET <https://oss.redis.com/redisai/commands/#aitensorget>`__
    """

    #: Data type of the tensor (``FLOAT``, ``INT64`` etc). Only populated when the
    #: metadata was requested.
    dtype: AnyStr | None
    #: Dimensions of the tensor. Empty if the metadata was not requested.
    shape: tuple[int, ...]
    #: Flattened values of the tensor if they were requested in ``VALUES`` format.
    #: Converted to :class:`float`, :class:`int` or :class:`bool` according to
    #: :attr:`dtype` only when the metadata was requested, otherwise as sent by the server.
    values: tuple[ResponsePrimitive, ...] | None = None
    #: Raw contents of the tensor if they were requested in ``BLOB`` format
    blob: bytes | None = None
