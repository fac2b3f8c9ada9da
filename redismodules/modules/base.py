from __future__ import annotations

import dataclasses
import functools
import textwrap
from abc import ABCMeta
from typing import Any, cast

from packaging import version

from redismodules._protocols import AbstractExecutor
from redismodules._utils import logger
from redismodules.commands.constants import CommandFlag, CommandGroup, CommandName
from redismodules.config import Config
from redismodules.exceptions import ModuleCommandError, ModuleCommandNotSupportedError
from redismodules.globals import MODULE_GROUPS, MODULES, READONLY_COMMANDS
from redismodules.response._callbacks import NoopCallback
from redismodules.typing import (
    AnyStr,
    Callable,
    ClassVar,
    Coroutine,
    Generic,
    P,
    R,
    ValueT,
    add_runtime_checks,
)

#: Qualified name of the binding method for each module command,
#: populated by :func:`module_command`
COMMAND_OPERATIONS: dict[bytes, str] = {}


@dataclasses.dataclass
class CommandDetails:
    command: CommandName
    group: CommandGroup
    version_introduced: version.Version | None
    version_deprecated: version.Version | None
    flags: set[CommandFlag]


async def ensure_compatibility(
    client: AbstractExecutor,
    module: str,
    command_details: CommandDetails,
) -> None:
    if (
        Config.optimized
        or not command_details.version_introduced
        or not getattr(client, "verify_version", False)
    ):
        return
    module_version: version.Version | None = await client.get_server_module_version(  # type: ignore[attr-defined]
        module
    )
    if module_version is None or command_details.version_introduced <= module_version:
        return
    raise ModuleCommandNotSupportedError(
        str(command_details.command),
        module,
        str(module_version),
    )


def report_failure(
    operation: str, command: CommandName, error: Exception, raise_errors: bool
) -> None:
    """
    Single exit point for failed commands. Raises
    :exc:`~redismodules.exceptions.ModuleCommandError` if :paramref:`raise_errors`
    is set, otherwise logs the failure and returns ``None``.
    """
    failure = ModuleCommandError(operation, str(command), error)
    if raise_errors:
        raise failure from error
    logger.error(str(failure))
    return None


def module_command_link(command: CommandName, module: type[Module[Any]]) -> str:
    name = str(command).lower()
    url = module.COMMAND_DOCUMENTATION_URL.format(
        command=name, anchor=name.replace(".", "").replace("_", "")
    )
    return f"`{command} <{url}>`_"


def module_command(
    command_name: CommandName,
    module: type[Module[Any]],
    group: CommandGroup,
    flags: set[CommandFlag] | None = None,
    version_introduced: str | None = None,
    version_deprecated: str | None = None,
) -> Callable[
    [Callable[P, Coroutine[Any, Any, R]]],
    Callable[P, Coroutine[Any, Any, R]],
]:
    command_details = CommandDetails(
        command_name,
        group,
        version.Version(version_introduced) if version_introduced else None,
        version.Version(version_deprecated) if version_deprecated else None,
        flags or set(),
    )

    def wrapper(
        func: Callable[P, Coroutine[Any, Any, R]],
    ) -> Callable[P, Coroutine[Any, Any, R]]:
        runtime_checkable = add_runtime_checks(func)
        if flags and CommandFlag.READONLY in flags:
            READONLY_COMMANDS.add(command_name)
        COMMAND_OPERATIONS[command_name] = func.__qualname__

        @functools.wraps(func)
        async def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
            mg = cast(ModuleGroup[Any], args[0])
            await ensure_compatibility(mg.client, module.NAME, command_details)
            return await runtime_checkable(*args, **kwargs)

        wrapped.__doc__ = textwrap.dedent(wrapped.__doc__ or "")
        wrapped.__doc__ = f"""
{wrapped.__doc__}

{module.FULL_NAME} command documentation: {module_command_link(command_name, module)}
        """
        if (version_introduced and version_introduced != "1.0.0") or version_deprecated:
            wrapped.__doc__ += """
Compatibility:
"""
            if version_introduced and version_introduced != "1.0.0":
                wrapped.__doc__ += f"""
- New in {module.FULL_NAME} version: `{version_introduced}`
                """
            if version_deprecated:
                wrapped.__doc__ += f"""
- Deprecated in {module.FULL_NAME} version: `{version_deprecated}`
                """
        setattr(wrapped, "__redismodules_command", command_details)
        setattr(wrapped, "__redismodules_module", module)
        return wrapped

    return wrapper


class ModuleRegistry(ABCMeta):
    """
    :meta private:
    """

    NAME: str
    FULL_NAME: str
    DESCRIPTION: str
    DOCUMENTATION_URL: str
    COMMAND_DOCUMENTATION_URL: str
    COMMAND_GROUPS: dict[CommandGroup, type[ModuleGroup[Any]]]

    def __new__(
        cls, name: str, bases: tuple[type, ...], namespace: dict[str, object]
    ) -> ModuleRegistry:
        if "COMMAND_GROUPS" not in namespace:
            namespace["COMMAND_GROUPS"] = {}
        kls = super().__new__(cls, name, bases, namespace)
        if getattr(kls, "NAME", None):
            MODULES[kls.NAME] = kls
            kls.__doc__ = textwrap.dedent(kls.__doc__ or "")
            kls.__doc__ += f"""
Type representation of the `{kls.FULL_NAME} <{kls.DOCUMENTATION_URL}>`__ module.
The class isn't meant to be used directly and exists as a convenient way to capture
module attributes for documentation & internal use.
            """
        return kls


class ModuleGroupRegistry(ABCMeta):
    """
    :meta private:
    """

    MODULE: type[Module[Any]]
    COMMAND_GROUP: CommandGroup

    def __new__(
        cls, name: str, bases: tuple[type, ...], namespace: dict[str, object]
    ) -> ModuleGroupRegistry:
        kls = super().__new__(cls, name, bases, namespace)
        if getattr(kls, "MODULE", None):
            MODULE_GROUPS.add(kls)
            kls.MODULE.COMMAND_GROUPS[kls.COMMAND_GROUP] = cast(type[ModuleGroup[Any]], kls)
            original_doc = textwrap.dedent(kls.__doc__ or "")
            kls.__doc__ = f"""
Container for the commands in the ``{kls.COMMAND_GROUP.value}`` command group of the
`{kls.MODULE.FULL_NAME} <{kls.MODULE.DOCUMENTATION_URL}>`__ module.

{original_doc}
            """
        return kls


class Module(Generic[AnyStr], metaclass=ModuleRegistry):
    """
    Base class for Redis module implementations.
    This class isn't meant to be used directly by the end
    user, and exists to provide a convenient way to document and group
    redis modules and the command groups that they expose.
    """

    NAME: ClassVar[str]
    """
    The name of the module as reported by ``MODULE LIST``
    """
    FULL_NAME: ClassVar[str]
    """
    The common name used to refer to the module if it differs from
    the internal name
    """
    DESCRIPTION: ClassVar[str]
    """
    A brief description of what the module does
    """
    DOCUMENTATION_URL: ClassVar[str]
    """
    A link to the module documentation
    """
    COMMAND_DOCUMENTATION_URL: ClassVar[str]
    """
    Template (with ``{command}`` and ``{anchor}`` placeholders) for links to the
    documentation of individual commands
    """

    COMMAND_GROUPS: ClassVar[dict[CommandGroup, type[ModuleGroup[Any]]]]
    """
    Mapping of command groups that implement this module. This is auto
    populated by the :class:`ModuleGroupRegistry` metaclass.
    """


class ModuleGroup(Generic[AnyStr], metaclass=ModuleGroupRegistry):
    """
    Base class for Redis module command groups

    :param client: The connection used to send commands. Any object with an
     ``execute_command(*args)`` coroutine works (for example
     :class:`redismodules.Client` or :class:`redis.asyncio.Redis`).
    :param raise_errors: Whether failed commands raise
     :exc:`~redismodules.exceptions.ModuleCommandError`. When ``False`` the
     failure is logged and the command returns ``None``. Defaults to the
     ``raise_errors`` setting of :paramref:`client` (or ``True`` if it has none).
    """

    MODULE: ClassVar[type[Module[Any]]]
    """
    The module to which this command group belongs to

    :meta private:
    """
    COMMAND_GROUP: ClassVar[CommandGroup]
    """
    The command group this class implements

    :meta private:
    """

    def __init__(self, client: AbstractExecutor, raise_errors: bool | None = None):
        self.client = client
        self.raise_errors: bool = (
            raise_errors if raise_errors is not None else getattr(client, "raise_errors", True)
        )

    async def execute_module_command(
        self,
        command: CommandName,
        *args: ValueT,
        callback: Callable[..., R] = NoopCallback(),
        **options: ValueT | None,
    ) -> R:
        """
        Sends :paramref:`command` followed by :paramref:`args` exactly as given
        and transforms the reply with :paramref:`callback`.
        Any failure while sending or on the server is handed to
        :meth:`handle_error`.
        """
        try:
            response = await self.client.execute_command(str(command), *args)
        except Exception as error:
            return self.handle_error(command, error)
        return callback(response, **options)

    def handle_error(self, command: CommandName, error: Exception) -> Any:
        operation = COMMAND_OPERATIONS.get(command, f"{type(self).__name__}.{command}")
        return report_failure(operation, command, error, self.raise_errors)
