from __future__ import annotations

from redismodules.typing import StringT


class RedisModuleError(Exception):
    """
    Base exception from which all other exceptions in redismodules
    derive from.
    """


class ModuleCommandError(RedisModuleError):
    """
    Raised when a module command could not be completed, either because the
    transport failed or because the server replied with an error.
    Only raised when the client was created with ``raise_errors=True``.
    """

    def __init__(self, operation: str, command: StringT, error: BaseException) -> None:
        #: Qualified name of the binding method that failed (e.g. ``TopK.reserve``)
        self.operation = operation
        #: Name of the module command that was sent (e.g. ``TOPK.RESERVE``)
        self.command = command
        #: The underlying transport or server error
        self.error = error
        super().__init__(f"{operation}: {error}")


class CommandSyntaxError(RedisModuleError):
    """
    Raised when a module command is called with an invalid combination
    of arguments
    """

    def __init__(self, arguments: set[str], message: str) -> None:
        self.arguments: set[str] = arguments
        super().__init__(message)


class ModuleCommandNotSupportedError(RedisModuleError):
    """
    Raised when the module loaded on the server is older than the version
    that introduced the command
    """

    def __init__(self, cmd: str, module: str, current_version: str) -> None:
        super().__init__(
            f"{cmd} is not supported by {module} version {current_version or 'unknown'}"
        )
