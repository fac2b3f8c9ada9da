"""
redismodules.commands.constants
-------------------------------
Constants relating to module command names and groups
"""

from __future__ import annotations

import enum

from redismodules._utils import CaseAndEncodingInsensitiveEnum


class CommandName(CaseAndEncodingInsensitiveEnum):
    """
    Enum for listing all supported module commands
    """

    #: Server commands used for module introspection
    MODULE_LIST = b"MODULE LIST"  # Since redis: 4.0.0
    PING = b"PING"  # Since redis: 1.0.0

    #: Commands for topk
    TOPK_RESERVE = b"TOPK.RESERVE"  # Since bf: 2.0.0
    TOPK_ADD = b"TOPK.ADD"  # Since bf: 2.0.0
    TOPK_INCRBY = b"TOPK.INCRBY"  # Since bf: 2.0.0
    TOPK_QUERY = b"TOPK.QUERY"  # Since bf: 2.0.0
    TOPK_LIST = b"TOPK.LIST"  # Since bf: 2.0.0
    TOPK_INFO = b"TOPK.INFO"  # Since bf: 2.0.0
    TOPK_COUNT = b"TOPK.COUNT"  # Deprecated in bf: 2.4

    #: Commands for ai
    AI_TENSORSET = b"AI.TENSORSET"  # Since ai: 1.0.0
    AI_TENSORGET = b"AI.TENSORGET"  # Since ai: 1.0.0
    AI_MODELSET = b"AI.MODELSET"  # Deprecated in ai: 1.2.5
    AI_MODELGET = b"AI.MODELGET"  # Since ai: 1.0.0
    AI_MODELDEL = b"AI.MODELDEL"  # Since ai: 1.0.0
    AI_MODELRUN = b"AI.MODELRUN"  # Deprecated in ai: 1.2.5
    AI_MODELSCAN = b"AI._MODELSCAN"  # Since ai: 1.0.0
    AI_SCRIPTSET = b"AI.SCRIPTSET"  # Deprecated in ai: 1.2.5
    AI_SCRIPTGET = b"AI.SCRIPTGET"  # Since ai: 1.0.0
    AI_SCRIPTDEL = b"AI.SCRIPTDEL"  # Since ai: 1.0.0
    AI_SCRIPTRUN = b"AI.SCRIPTRUN"  # Deprecated in ai: 1.2.5
    AI_SCRIPTSCAN = b"AI._SCRIPTSCAN"  # Since ai: 1.0.0
    AI_INFO = b"AI.INFO"  # Since ai: 1.0.0
    AI_CONFIG = b"AI.CONFIG"  # Since ai: 1.0.0
    AI_DAGRUN = b"AI.DAGRUN"  # Since ai: 1.0.0
    AI_DAGRUN_RO = b"AI.DAGRUN_RO"  # Since ai: 1.0.0


class CommandGroup(enum.Enum):
    AI = "ai"
    TOPK = "topk"


class CommandFlag(enum.Enum):
    READONLY = "readonly"
