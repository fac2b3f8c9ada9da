from __future__ import annotations

from deprecated.sphinx import versionadded

from ..commands._validators import (
    ensure_iterable_valid,
    mutually_exclusive_parameters,
    mutually_inclusive_parameters,
)
from ..commands.constants import CommandFlag, CommandGroup, CommandName
from ..response._callbacks import SimpleStringCallback, TupleCallback
from ..tokens import PrefixToken, PureToken
from ..typing import (
    AnyStr,
    CommandArgList,
    KeyT,
    Literal,
    Parameters,
    ResponseType,
    Sequence,
    StringT,
    ValueT,
)
from .base import Module, ModuleGroup, module_command
from .response._callbacks.ai import (
    FieldsCallback,
    InfoCallback,
    ScanCallback,
    TensorCallback,
)
from .response.types import Tensor

#: A single command in a DAG, either as a command string
#: (``"AI.TENSORSET a FLOAT 1 2 VALUES 5 10"``) or as a sequence of tokens
DagCommand = StringT | Sequence[ValueT]


def _dag_pieces(
    commands: Parameters[DagCommand],
    load: Parameters[KeyT] | None = None,
    persist: Parameters[KeyT] | None = None,
) -> CommandArgList:
    pieces: CommandArgList = []
    if load:
        _load = list(load)
        pieces.extend([PrefixToken.LOAD, len(_load), *_load])
    if persist:
        _persist = list(persist)
        pieces.extend([PrefixToken.PERSIST, len(_persist), *_persist])
    for command in commands:
        pieces.append(PureToken.DAG_SEPARATOR)
        if isinstance(command, (str, bytes)):
            pieces.extend(command.split())
        else:
            pieces.extend(command)
    return pieces


def _io_pieces(inputs: Parameters[KeyT], outputs: Parameters[KeyT]) -> CommandArgList:
    return [PrefixToken.INPUTS, *inputs, PrefixToken.OUTPUTS, *outputs]


class RedisAI(Module[AnyStr]):
    NAME = "ai"
    FULL_NAME = "RedisAI"
    DESCRIPTION = """RedisAI is a Redis module for executing Deep Learning/Machine Learning models
and managing their data.
    """
    DOCUMENTATION_URL = "https://oss.redis.com/redisai/"
    COMMAND_DOCUMENTATION_URL = "https://oss.redis.com/redisai/commands/#{anchor}"


@versionadded(version="0.1.0")
class AI(ModuleGroup[AnyStr]):
    MODULE = RedisAI
    COMMAND_GROUP = CommandGroup.AI

    @mutually_exclusive_parameters("values", "blob")
    @module_command(
        CommandName.AI_TENSORSET,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
    )
    async def tensorset(
        self,
        key: KeyT,
        dtype: StringT,
        shape: Parameters[int],
        values: Parameters[int | float | StringT] | None = None,
        blob: bytes | None = None,
    ) -> bool:
        """
        Stores a tensor

        :param key: Key to store the tensor under.
        :param dtype: Data type of the tensor (``FLOAT``, ``DOUBLE``, ``INT8``,
         ``INT16``, ``INT32``, ``INT64``, ``UINT8``, ``UINT16``, ``BOOL`` or ``STRING``).
        :param shape: Dimensions of the tensor.
        :param values: Flattened numeric values of the tensor.
        :param blob: Raw contents of the tensor. Sent unmodified.
        """
        pieces: CommandArgList = [key, dtype, *shape]
        if values is not None:
            pieces.extend([PureToken.VALUES, *values])
        elif blob is not None:
            pieces.extend([PureToken.BLOB, blob])
        return await self.execute_module_command(
            CommandName.AI_TENSORSET, *pieces, callback=SimpleStringCallback()
        )

    @module_command(
        CommandName.AI_TENSORGET,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def tensorget(
        self,
        key: KeyT,
        format: Literal[PureToken.VALUES, PureToken.BLOB] | StringT | None = None,
        meta: bool | None = None,
    ) -> Tensor[AnyStr]:
        """
        Returns a tensor

        :param key: Key the tensor is stored under.
        :param format: ``VALUES`` to fetch the values or ``BLOB`` to fetch the
         raw contents.
        :param meta: Whether to include the data type and shape. Values
         are only converted to numbers when the data type is included,
         otherwise they are returned as sent by the server.
        """
        pieces: CommandArgList = [key]
        if meta:
            pieces.append(PureToken.META)
        if format is not None:
            pieces.append(format)
        return await self.execute_module_command(
            CommandName.AI_TENSORGET,
            *pieces,
            callback=TensorCallback(),
            format=format,
        )

    @mutually_inclusive_parameters("min_batch_size", leaders=("batch_size",))
    @module_command(
        CommandName.AI_MODELSET,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        version_deprecated="1.2.5",
        module=MODULE,
    )
    async def modelset(
        self,
        key: KeyT,
        backend: StringT,
        device: StringT,
        model: bytes,
        tag: StringT | None = None,
        batch_size: int | None = None,
        min_batch_size: int | None = None,
        inputs: Parameters[StringT] | None = None,
        outputs: Parameters[StringT] | None = None,
    ) -> bool:
        """
        Stores a model

        :param key: Key to store the model under.
        :param backend: The backend of the model (``TF``, ``TFLITE``, ``TORCH`` or ``ONNX``).
        :param device: The device to run the model on (``CPU``, ``GPU`` or ``GPU:<n>``).
        :param model: The serialized model. Sent unmodified.
        :param tag: Arbitrary string to tag the model with.
        :param batch_size: Batch incoming requests on multiple clients
         into batches of up to this size.
        :param min_batch_size: Minimum number of requests to batch before running the model.
        :param inputs: Names of the graph input nodes (``TF`` only).
        :param outputs: Names of the graph output nodes (``TF`` only).
        """
        pieces: CommandArgList = [key, backend, device]
        if tag is not None:
            pieces.extend([PrefixToken.TAG, tag])
        if batch_size is not None:
            pieces.extend([PrefixToken.BATCHSIZE, batch_size])
            if min_batch_size is not None:
                pieces.extend([PrefixToken.MINBATCHSIZE, min_batch_size])
        if inputs:
            pieces.extend([PrefixToken.INPUTS, *inputs])
        if outputs:
            pieces.extend([PrefixToken.OUTPUTS, *outputs])
        pieces.extend([PureToken.BLOB, model])
        return await self.execute_module_command(
            CommandName.AI_MODELSET, *pieces, callback=SimpleStringCallback()
        )

    @module_command(
        CommandName.AI_MODELGET,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def modelget(
        self, key: KeyT, meta: bool | None = None, blob: bool | None = None
    ) -> dict[AnyStr, ResponseType] | bytes:
        """
        Returns a model's metadata and/or blob

        :param key: Key the model is stored under.
        :param meta: Whether to include the model's metadata.
        :param blob: Whether to include the serialized model.
        :return: A mapping of the metadata fields (``backend``, ``device``,
         ``tag``, ``batchsize``, ``minbatchsize``, ``inputs``, ``outputs``
         and ``blob`` if requested) or the bare serialized model if only
         :paramref:`blob` was requested.
        """
        pieces: CommandArgList = [key]
        if meta:
            pieces.append(PureToken.META)
        if blob:
            pieces.append(PureToken.BLOB)
        return await self.execute_module_command(
            CommandName.AI_MODELGET, *pieces, callback=FieldsCallback("backend")
        )

    @module_command(
        CommandName.AI_MODELDEL,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
    )
    async def modeldel(self, key: KeyT) -> bool:
        """
        Deletes a model

        :param key: Key the model is stored under.
        """
        return await self.execute_module_command(
            CommandName.AI_MODELDEL, key, callback=SimpleStringCallback()
        )

    @ensure_iterable_valid("inputs")
    @ensure_iterable_valid("outputs")
    @module_command(
        CommandName.AI_MODELRUN,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        version_deprecated="1.2.5",
        module=MODULE,
    )
    async def modelrun(
        self, key: KeyT, inputs: Parameters[KeyT], outputs: Parameters[KeyT]
    ) -> bool:
        """
        Runs a model

        :param key: Key the model is stored under.
        :param inputs: Keys of the input tensors.
        :param outputs: Keys to store the output tensors under.
        """
        return await self.execute_module_command(
            CommandName.AI_MODELRUN,
            key,
            *_io_pieces(inputs, outputs),
            callback=SimpleStringCallback(),
        )

    @module_command(
        CommandName.AI_MODELSCAN,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def modelscan(self) -> tuple[tuple[StringT, StringT | None], ...]:
        """
        Returns all the models in the database

        :return: ``(key, tag)`` pairs
        """
        return await self.execute_module_command(CommandName.AI_MODELSCAN, callback=ScanCallback())

    @module_command(
        CommandName.AI_SCRIPTSET,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        version_deprecated="1.2.5",
        module=MODULE,
    )
    async def scriptset(
        self, key: KeyT, device: StringT, script: StringT, tag: StringT | None = None
    ) -> bool:
        """
        Stores a TorchScript script

        :param key: Key to store the script under.
        :param device: The device to run the script on (``CPU``, ``GPU`` or ``GPU:<n>``).
        :param script: Source of the script.
        :param tag: Arbitrary string to tag the script with.
        """
        pieces: CommandArgList = [key, device]
        if tag is not None:
            pieces.extend([PrefixToken.TAG, tag])
        pieces.extend([PureToken.SOURCE, script])
        return await self.execute_module_command(
            CommandName.AI_SCRIPTSET, *pieces, callback=SimpleStringCallback()
        )

    @module_command(
        CommandName.AI_SCRIPTGET,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def scriptget(
        self, key: KeyT, meta: bool | None = None, source: bool | None = None
    ) -> dict[AnyStr, ResponseType] | AnyStr:
        """
        Returns a script's metadata and/or source

        :param key: Key the script is stored under.
        :param meta: Whether to include the script's metadata.
        :param source: Whether to include the script's source.
        :return: A mapping of the metadata fields (``device``, ``tag`` and
         ``source`` if requested) or the bare source if only
         :paramref:`source` was requested.
        """
        pieces: CommandArgList = [key]
        if meta:
            pieces.append(PureToken.META)
        if source:
            pieces.append(PureToken.SOURCE)
        return await self.execute_module_command(
            CommandName.AI_SCRIPTGET, *pieces, callback=FieldsCallback("device")
        )

    @module_command(
        CommandName.AI_SCRIPTDEL,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
    )
    async def scriptdel(self, key: KeyT) -> bool:
        """
        Deletes a script

        :param key: Key the script is stored under.
        """
        return await self.execute_module_command(
            CommandName.AI_SCRIPTDEL, key, callback=SimpleStringCallback()
        )

    @ensure_iterable_valid("inputs")
    @ensure_iterable_valid("outputs")
    @module_command(
        CommandName.AI_SCRIPTRUN,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        version_deprecated="1.2.5",
        module=MODULE,
    )
    async def scriptrun(
        self,
        key: KeyT,
        function: StringT,
        inputs: Parameters[KeyT],
        outputs: Parameters[KeyT],
    ) -> bool:
        """
        Runs a function of a stored script

        :param key: Key the script is stored under.
        :param function: Name of the function to run.
        :param inputs: Keys of the input tensors.
        :param outputs: Keys to store the output tensors under.
        """
        return await self.execute_module_command(
            CommandName.AI_SCRIPTRUN,
            key,
            function,
            *_io_pieces(inputs, outputs),
            callback=SimpleStringCallback(),
        )

    @module_command(
        CommandName.AI_SCRIPTSCAN,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def scriptscan(self) -> tuple[tuple[StringT, StringT | None], ...]:
        """
        Returns all the scripts in the database

        :return: ``(key, tag)`` pairs
        """
        return await self.execute_module_command(
            CommandName.AI_SCRIPTSCAN, callback=ScanCallback()
        )

    @module_command(
        CommandName.AI_INFO,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
    )
    async def info(
        self, key: KeyT, resetstat: bool | None = None
    ) -> dict[AnyStr, ResponseType] | bool:
        """
        Returns runtime statistics of a model or script

        :param key: Key of the model or script.
        :param resetstat: Reset the statistics instead of returning them.
        :return: A mapping of the statistics (``key``, ``type``, ``backend``,
         ``device``, ``tag``, ``duration``, ``samples``, ``calls``, ``errors``)
         or ``True`` if :paramref:`resetstat` was requested.
        """
        pieces: CommandArgList = [key]
        if resetstat:
            pieces.append(PureToken.RESETSTAT)
        return await self.execute_module_command(
            CommandName.AI_INFO, *pieces, callback=InfoCallback(), resetstat=resetstat
        )

    @module_command(
        CommandName.AI_CONFIG,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
    )
    async def config(self, path: StringT, backend: StringT | None = None) -> bool:
        """
        Configures the backends of the module

        :param path: The default path for backend libraries, or the path of
         the library to load if :paramref:`backend` is given.
        :param backend: The backend to load (``TF``, ``TFLITE``, ``TORCH`` or ``ONNX``).
        """
        pieces: CommandArgList
        if backend is not None:
            pieces = [PrefixToken.LOADBACKEND, backend, path]
        else:
            pieces = [PrefixToken.BACKENDSPATH, path]
        return await self.execute_module_command(
            CommandName.AI_CONFIG, *pieces, callback=SimpleStringCallback()
        )

    @ensure_iterable_valid("commands")
    @module_command(
        CommandName.AI_DAGRUN,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
    )
    async def dagrun(
        self,
        commands: Parameters[DagCommand],
        load: Parameters[KeyT] | None = None,
        persist: Parameters[KeyT] | None = None,
    ) -> tuple[ResponseType, ...]:
        """
        Runs a directed acyclic graph of commands in a single request

        :param commands: The ``AI.TENSORSET``, ``AI.TENSORGET``, ``AI.MODELRUN``
         and ``AI.SCRIPTRUN`` commands to chain, in order.
        :param load: Keys of tensors to load into the DAG's local context.
        :param persist: Keys of tensors from the DAG's local context to store.
        :return: One reply per chained command, in order
        """
        return await self.execute_module_command(
            CommandName.AI_DAGRUN,
            *_dag_pieces(commands, load, persist),
            callback=TupleCallback[ResponseType](),
        )

    @ensure_iterable_valid("commands")
    @module_command(
        CommandName.AI_DAGRUN_RO,
        group=COMMAND_GROUP,
        version_introduced="1.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def dagrun_ro(
        self,
        commands: Parameters[DagCommand],
        load: Parameters[KeyT] | None = None,
    ) -> tuple[ResponseType, ...]:
        """
        Read-only variant of :meth:`dagrun`

        :param commands: The ``AI.TENSORSET``, ``AI.TENSORGET``, ``AI.MODELRUN``
         and ``AI.SCRIPTRUN`` commands to chain, in order.
        :param load: Keys of tensors to load into the DAG's local context.
        :return: One reply per chained command, in order
        """
        return await self.execute_module_command(
            CommandName.AI_DAGRUN_RO,
            *_dag_pieces(commands, load),
            callback=TupleCallback[ResponseType](),
        )
