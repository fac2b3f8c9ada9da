from __future__ import annotations

from redismodules.typing import (
    Any,
    Awaitable,
    Protocol,
    ResponseType,
    ValueT,
    runtime_checkable,
)


@runtime_checkable
class AbstractExecutor(Protocol):
    """
    The transport seam used by module command groups. Anything that can
    send a flat command (``name, *tokens``) and await the raw reply
    satisfies it, for example :class:`redis.asyncio.Redis` or
    :class:`redismodules.Client`.
    """

    def execute_command(self, *args: ValueT, **options: Any) -> Awaitable[ResponseType]: ...
