from __future__ import annotations

from redismodules.typing import (
    Callable,
    Iterable,
    TypeVar,
)

T_co = TypeVar("T_co")


def flat_pairs_to_dict(
    response: Iterable[T_co] | dict[T_co, T_co],
    value_transform: Callable[..., T_co] | None = None,
) -> dict[T_co, T_co]:
    """Creates a dict given a flat list of key/value pairs"""
    if isinstance(response, dict):
        if value_transform:
            return {k: value_transform(v) for k, v in response.items()}
        return response
    it = iter(response)
    if value_transform:
        return dict(zip(it, map(value_transform, it)))
    else:
        return dict(zip(it, it))
