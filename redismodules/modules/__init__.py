from __future__ import annotations

from deprecated.sphinx import versionadded

from redismodules.typing import AnyStr, Generic

from .ai import AI, RedisAI
from .base import Module, ModuleGroup
from .filters import RedisBloom, TopK


class ModuleMixin(Generic[AnyStr]):
    @property
    @versionadded(version="0.1.0")
    def topk(self) -> TopK[AnyStr]:
        """
        Property to access :class:`~redismodules.modules.filters.TopK` commands.
        """
        return TopK(self)  # type: ignore[arg-type]

    @property
    @versionadded(version="0.1.0")
    def ai(self) -> AI[AnyStr]:
        """
        Property to access :class:`~redismodules.modules.ai.AI` commands.
        """
        return AI(self)  # type: ignore[arg-type]


__all__ = [
    "AI",
    "Module",
    "ModuleGroup",
    "ModuleMixin",
    "RedisAI",
    "RedisBloom",
    "TopK",
]
