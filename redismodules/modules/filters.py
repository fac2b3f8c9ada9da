from __future__ import annotations

from deprecated.sphinx import versionadded

from .._utils import as_token, pairs_to_flat_list
from ..commands._validators import ensure_iterable_valid, mutually_inclusive_parameters
from ..commands.constants import CommandFlag, CommandGroup, CommandName
from ..response._callbacks import (
    BoolsCallback,
    DictCallback,
    FlatPairsCallback,
    IntsCallback,
    SimpleStringCallback,
    TupleCallback,
)
from ..tokens import PureToken
from ..typing import (
    AnyStr,
    CommandArgList,
    Iterable,
    KeyT,
    Mapping,
    Parameters,
    ResponseType,
    ValueT,
)
from .base import Module, ModuleGroup, module_command


class RedisBloom(Module[AnyStr]):
    NAME = "bf"
    FULL_NAME = "RedisBloom"
    DESCRIPTION = """RedisBloom is a Redis module that implements various probabilistic
data structures such as the Top-K sketch.
    """
    DOCUMENTATION_URL = "https://redis.io/docs/stack/bloom/"
    COMMAND_DOCUMENTATION_URL = "https://redis.io/commands/{command}/"


@versionadded(version="0.1.0")
class TopK(ModuleGroup[AnyStr]):
    """
    Items are sent to the server in the order they are given and every
    per-item reply is returned in that same order.

    Example::

        async with redismodules.Client(decode_responses=True) as client:
            await client.topk.reserve("visits", 50, 8, 7, 0.9)
            await client.topk.add("visits", ["home", "about"])
            await client.topk.query("visits", ["home", "about", "blog"])
            # (True, True, False)
    """

    MODULE = RedisBloom
    COMMAND_GROUP = CommandGroup.TOPK

    @mutually_inclusive_parameters("width", "depth", "decay")
    @module_command(
        CommandName.TOPK_RESERVE,
        group=COMMAND_GROUP,
        version_introduced="2.0.0",
        module=MODULE,
    )
    async def reserve(
        self,
        key: KeyT,
        topk: int,
        width: int | None = None,
        depth: int | None = None,
        decay: int | float | None = None,
    ) -> bool:
        """
        Reserve a TopK sketch with specified parameters.
        The parameters are sent as given and are only validated by the server.

        :param key: Name of the TOP-K sketch.
        :param topk: Number of top occurring items to keep.
        :param width: Number of counters kept in each array.
        :param depth: Number of arrays.
        :param decay: The probability of reducing a counter in an occupied bucket.
         It is raised to power of it's counter (``decay ^ bucket[i].counter``).
         Therefore, as the counter gets higher, the chance of a reduction is being reduced.
        """
        pieces: CommandArgList = [key, topk]
        if width is not None and depth is not None and decay is not None:
            pieces.extend([width, depth, decay])
        return await self.execute_module_command(
            CommandName.TOPK_RESERVE, *pieces, callback=SimpleStringCallback()
        )

    @ensure_iterable_valid("items")
    @module_command(
        CommandName.TOPK_ADD,
        group=COMMAND_GROUP,
        version_introduced="2.0.0",
        module=MODULE,
    )
    async def add(self, key: KeyT, items: Parameters[ValueT]) -> tuple[AnyStr | None, ...]:
        """
        Adds one or more items to a sketch

        :param key: Name of the TOP-K sketch.
        :param items: Item(s) to be added.
        :return: For each item (in the order given) the item that was expelled
         from the sketch to make room for it or ``None``
        """
        pieces: CommandArgList = [key, *items]
        return await self.execute_module_command(
            CommandName.TOPK_ADD,
            *pieces,
            callback=TupleCallback[AnyStr | None](),
        )

    @ensure_iterable_valid("items")
    @module_command(
        CommandName.TOPK_INCRBY,
        group=COMMAND_GROUP,
        version_introduced="2.0.0",
        module=MODULE,
    )
    async def incrby(
        self,
        key: KeyT,
        items: Mapping[ValueT, int] | Iterable[tuple[ValueT, int]],
    ) -> tuple[AnyStr | None, ...]:
        """
        Increases the count of one or more items by increment

        :param key: Name of the TOP-K sketch.
        :param items: Ordered ``(item, increment)`` pairs, or a mapping of
         items to their corresponding increment values.
        :return: For each item (in the order given) the item that was expelled
         from the sketch or ``None``
        """
        return await self.execute_module_command(
            CommandName.TOPK_INCRBY,
            key,
            *pairs_to_flat_list(items, key_transform=as_token, value_transform=str),
            callback=TupleCallback[AnyStr | None](),
        )

    @ensure_iterable_valid("items")
    @module_command(
        CommandName.TOPK_QUERY,
        group=COMMAND_GROUP,
        version_introduced="2.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def query(self, key: KeyT, items: Parameters[ValueT]) -> tuple[bool, ...]:
        """
        Checks whether an item is one of Top-K items.
        Multiple items can be checked at once.

        :param key: Name of the TOP-K sketch.
        :param items: Item(s) to be queried.
        :return: One flag per item, in the order given
        """
        pieces: CommandArgList = [key, *items]

        return await self.execute_module_command(
            CommandName.TOPK_QUERY, *pieces, callback=BoolsCallback()
        )

    @ensure_iterable_valid("items")
    @module_command(
        CommandName.TOPK_COUNT,
        group=COMMAND_GROUP,
        version_introduced="2.0.0",
        version_deprecated="2.4.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def count(self, key: KeyT, items: Parameters[ValueT]) -> tuple[int, ...]:
        """
        Return the count for one or more items are in a sketch

        :param key: The name of the TOP-K sketch.
        :param items: One or more items to count.
        :return: One (estimated) count per item, in the order given
        """
        pieces: CommandArgList = [key, *items]

        return await self.execute_module_command(
            CommandName.TOPK_COUNT, *pieces, callback=IntsCallback()
        )

    @module_command(
        CommandName.TOPK_LIST,
        group=COMMAND_GROUP,
        version_introduced="2.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def list(
        self, key: KeyT, withcount: bool | None = None
    ) -> dict[AnyStr, int] | tuple[AnyStr, ...]:
        """
        Return full list of items in Top K list

        :param key: Name of the TOP-K sketch.
        :param withcount: Whether to include counts of each element.
        :return: The tracked items in the order the server reports them,
         or a mapping of item to count if :paramref:`withcount` is ``True``
        """
        pieces: CommandArgList = [key]
        if withcount:
            pieces.append(PureToken.WITHCOUNT)
            return await self.execute_module_command(
                CommandName.TOPK_LIST, *pieces, callback=DictCallback[AnyStr, int]()
            )
        else:
            return await self.execute_module_command(
                CommandName.TOPK_LIST, *pieces, callback=TupleCallback[AnyStr]()
            )

    @module_command(
        CommandName.TOPK_INFO,
        group=COMMAND_GROUP,
        version_introduced="2.0.0",
        module=MODULE,
        flags={CommandFlag.READONLY},
    )
    async def info(self, key: KeyT) -> tuple[ResponseType, ...]:
        """
        Returns information about a sketch

        :param key: Name of the TOP-K sketch.
        :return: Alternating field names and values as sent by the server
         (``k``, ``width``, ``depth`` and ``decay``).
        """

        return await self.execute_module_command(
            CommandName.TOPK_INFO,
            key,
            callback=FlatPairsCallback(),
        )
