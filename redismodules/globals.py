from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from redismodules.modules.base import ModuleGroupRegistry, ModuleRegistry

#: Populated by the @module_command wrapper
READONLY_COMMANDS: set[bytes] = set()

#: Populated by ModuleGroupRegistry
MODULE_GROUPS: set[ModuleGroupRegistry] = set()

#: Populated by ModuleRegistry
MODULES: dict[str, ModuleRegistry] = {}
