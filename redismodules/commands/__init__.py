from __future__ import annotations

from .constants import CommandFlag, CommandGroup, CommandName

__all__ = ["CommandFlag", "CommandGroup", "CommandName"]
