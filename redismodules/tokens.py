from __future__ import annotations

from redismodules._utils import CaseAndEncodingInsensitiveEnum


class PureToken(CaseAndEncodingInsensitiveEnum):
    """
    Enum for using pure-tokens with module commands.
    """

    #: Used by:
    #:
    #:  - ``TOPK.LIST``
    WITHCOUNT = b"WITHCOUNT"

    #: Used by:
    #:
    #:  - ``AI.TENSORGET``
    #:  - ``AI.MODELGET``
    #:  - ``AI.SCRIPTGET``
    META = b"META"

    #: Used by:
    #:
    #:  - ``AI.TENSORSET``
    #:  - ``AI.TENSORGET``
    #:  - ``AI.MODELSET``
    #:  - ``AI.MODELGET``
    BLOB = b"BLOB"

    #: Used by:
    #:
    #:  - ``AI.TENSORSET``
    #:  - ``AI.TENSORGET``
    VALUES = b"VALUES"

    #: Used by:
    #:
    #:  - ``AI.SCRIPTSET``
    #:  - ``AI.SCRIPTGET``
    SOURCE = b"SOURCE"

    #: Used by:
    #:
    #:  - ``AI.INFO``
    RESETSTAT = b"RESETSTAT"

    #: Separates chained commands of:
    #:
    #:  - ``AI.DAGRUN``
    #:  - ``AI.DAGRUN_RO``
    DAG_SEPARATOR = b"|>"


class PrefixToken(CaseAndEncodingInsensitiveEnum):
    """
    Enum for internal use when adding prefixes to arguments
    """

    #: Used by:
    #:
    #:  - ``AI.MODELSET``
    #:  - ``AI.SCRIPTSET``
    TAG = b"TAG"

    #: Used by:
    #:
    #:  - ``AI.MODELSET``
    BATCHSIZE = b"BATCHSIZE"

    #: Used by:
    #:
    #:  - ``AI.MODELSET``
    MINBATCHSIZE = b"MINBATCHSIZE"

    #: Used by:
    #:
    #:  - ``AI.MODELSET``
    #:  - ``AI.MODELRUN``
    #:  - ``AI.SCRIPTRUN``
    INPUTS = b"INPUTS"

    #: Used by:
    #:
    #:  - ``AI.MODELSET``
    #:  - ``AI.MODELRUN``
    #:  - ``AI.SCRIPTRUN``
    OUTPUTS = b"OUTPUTS"

    #: Used by:
    #:
    #:  - ``AI.DAGRUN``
    #:  - ``AI.DAGRUN_RO``
    LOAD = b"LOAD"

    #: Used by:
    #:
    #:  - ``AI.DAGRUN``
    PERSIST = b"PERSIST"

    #: Used by:
    #:
    #:  - ``AI.CONFIG``
    BACKENDSPATH = b"BACKENDSPATH"

    #: Used by:
    #:
    #:  - ``AI.CONFIG``
    LOADBACKEND = b"LOADBACKEND"
