from __future__ import annotations

import os

_TRUTHY = ["1", "true", "t"]


class __Config:
    def __init__(self) -> None:
        self.__optimized: bool = False

    @property
    def runtime_checks(self) -> bool:
        """
        Whether runtime type checks are to be enabled.
        Can be enabled by setting the environment variable
        ``REDISMODULES_RUNTIME_CHECKS`` to ``true`` (requires :pypi:`beartype`)
        """
        return os.environ.get("REDISMODULES_RUNTIME_CHECKS", "").lower() in _TRUTHY

    @property
    def optimized(self) -> bool:
        """
        When ``optimized`` is ``True`` client side argument validation and
        module version checks are skipped.
        This can be enabled in any of the following ways:

          - By running python in optimized mode using the ``-O`` flag
          - By setting the environment variable ``REDISMODULES_OPTIMIZED`` to ``true``
          - By explicitly setting ``redismodules.Config.optimized = True``

        """
        return (
            not __debug__
            or os.environ.get("REDISMODULES_OPTIMIZED", "").lower() in _TRUTHY
            or self.__optimized
        )

    @optimized.setter
    def optimized(self, value: bool) -> None:
        self.__optimized = value


#: Used to configure global behaviors of the redismodules library
Config = __Config()
