"""
redismodules
------------

redismodules provides typed asyncio bindings for redis module commands
(RedisBloom Top-K and RedisAI).
"""

from __future__ import annotations

import logging

from redismodules.client import Client
from redismodules.config import Config
from redismodules.exceptions import (
    CommandSyntaxError,
    ModuleCommandError,
    ModuleCommandNotSupportedError,
    RedisModuleError,
)
from redismodules.modules import AI, TopK
from redismodules.modules.response.types import Tensor
from redismodules.tokens import PrefixToken, PureToken

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "AI",
    "Client",
    "CommandSyntaxError",
    "Config",
    "ModuleCommandError",
    "ModuleCommandNotSupportedError",
    "PrefixToken",
    "PureToken",
    "RedisModuleError",
    "Tensor",
    "TopK",
]

__version__ = "0.1.0"
