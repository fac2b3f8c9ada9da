from __future__ import annotations

import asyncio
import logging

import pytest

from redismodules import Client, TopK
from redismodules.commands._validators import MutuallyInclusiveParametersMissing
from redismodules.exceptions import ModuleCommandError

pytestmark = pytest.mark.anyio


class TestTopKCommands:
    async def test_reserve(self, client, executor):
        assert await client.topk.reserve("k", 50, 8, 7, 0.9)
        assert executor.last_command == ["TOPK.RESERVE", "k", 50, 8, 7, 0.9]

    async def test_reserve_default_dimensions(self, client, executor):
        assert await client.topk.reserve("k", 3)
        assert executor.last_command == ["TOPK.RESERVE", "k", 3]

    async def test_reserve_partial_dimensions(self, client, executor):
        with pytest.raises(MutuallyInclusiveParametersMissing):
            await client.topk.reserve("k", 3, width=8)
        assert executor.commands == []

    async def test_reserve_not_acknowledged(self, client, executor):
        executor.reply("TOPK.RESERVE", b"QUEUED")
        assert not await client.topk.reserve("k", 3)

    async def test_add(self, client, executor):
        executor.reply("TOPK.ADD", [None, b"x", None])
        assert (None, b"x", None) == await client.topk.add("k", ["a", 1, 2.5])
        assert executor.last_command == ["TOPK.ADD", "k", "a", 1, 2.5]

    async def test_add_rejects_bare_string(self, client, executor):
        with pytest.raises(TypeError):
            await client.topk.add("k", "abc")
        assert executor.commands == []

    async def test_incrby_pairs(self, client, executor):
        executor.reply("TOPK.INCRBY", [None, None])
        assert (None, None) == await client.topk.incrby("k", [("a", 1), ("b", 2)])
        assert executor.last_command == ["TOPK.INCRBY", "k", "a", "1", "b", "2"]

    async def test_incrby_mapping(self, client, executor):
        executor.reply("TOPK.INCRBY", [None, None, None])
        await client.topk.incrby("k", {"z": 3, 7: 10, b"y": 1})
        assert executor.last_command == ["TOPK.INCRBY", "k", "z", "3", "7", "10", b"y", "1"]

    async def test_query(self, client, executor):
        executor.reply("TOPK.QUERY", [1, 0, 1], [b"1", b"0"])
        assert (True, False, True) == await client.topk.query("k", ["x", 2, "z"])
        assert executor.last_command == ["TOPK.QUERY", "k", "x", 2, "z"]
        assert (True, False) == await client.topk.query("k", ("x", "y"))

    async def test_count(self, client, executor):
        executor.reply("TOPK.COUNT", [4, 0, 1])
        assert (4, 0, 1) == await client.topk.count("k", ["c", "a", "b"])
        assert executor.last_command == ["TOPK.COUNT", "k", "c", "a", "b"]

    async def test_list(self, client, executor):
        executor.reply("TOPK.LIST", [b"b", b"a"], [b"b", 4, b"a", 2])
        assert (b"b", b"a") == await client.topk.list("k")
        assert executor.last_command == ["TOPK.LIST", "k"]
        assert {b"b": 4, b"a": 2} == await client.topk.list("k", withcount=True)
        assert executor.last_command == ["TOPK.LIST", "k", "WITHCOUNT"]

    async def test_info(self, client, executor):
        executor.reply(
            "TOPK.INFO",
            ["k", 50, "width", 8, "depth", 7, "decay", "0.9"],
            {"k": 50, "width": 8},
        )
        assert ("k", 50, "width", 8, "depth", 7, "decay", "0.9") == await client.topk.info("k")
        assert executor.last_command == ["TOPK.INFO", "k"]
        assert ("k", 50, "width", 8) == await client.topk.info("k")

    async def test_standalone_group(self, executor):
        topk = TopK(executor)
        executor.reply("TOPK.QUERY", [0])
        assert (False,) == await topk.query("k", ["x"])


class TestTopKErrors:
    async def test_raises_with_operation_name(self, client, executor):
        failure = ConnectionError("connection reset")
        executor.fail_with(failure)
        with pytest.raises(ModuleCommandError, match="TopK.reserve") as exc_info:
            await client.topk.reserve("k", 50, 8, 7, 0.9)
        assert exc_info.value.operation == "TopK.reserve"
        assert exc_info.value.command == "TOPK.RESERVE"
        assert exc_info.value.error is failure
        assert exc_info.value.__cause__ is failure
        assert "connection reset" in str(exc_info.value)

    @pytest.mark.parametrize(
        "operation, args",
        [
            ("reserve", ("k", 50, 8, 7, 0.9)),
            ("add", ("k", ["x"])),
            ("incrby", ("k", [("x", 1)])),
            ("query", ("k", ["x"])),
            ("count", ("k", ["x"])),
            ("list", ("k",)),
            ("info", ("k",)),
        ],
    )
    async def test_no_raise_returns_none(self, quiet_client, executor, caplog, operation, args):
        executor.fail_with(TimeoutError("timed out"))
        with caplog.at_level(logging.ERROR, logger="redismodules"):
            assert await getattr(quiet_client.topk, operation)(*args) is None
        assert f"TopK.{operation}" in caplog.text
        assert "timed out" in caplog.text

    async def test_group_overrides_client_policy(self, client, executor):
        executor.fail_with(OSError("unreachable"))
        assert await TopK(client, raise_errors=False).list("k") is None


class TestTopKIntegration:
    async def test_reserve_add_query(self, redis_stack: Client):
        assert await redis_stack.topk.reserve("k", 50, 8, 7, 0.9)
        assert (None, None) == await redis_stack.topk.add("k", ["x", "y"])
        assert (True, True, False) == await redis_stack.topk.query("k", ["x", "y", "z"])

    async def test_reserve_info(self, redis_stack: Client):
        assert await redis_stack.topk.reserve("topk", 3)
        assert await redis_stack.topk.reserve("topkcustom", 3, 16, 14, 0.8)
        infos = await asyncio.gather(
            redis_stack.topk.info("topk"), redis_stack.topk.info("topkcustom")
        )
        default, custom = (dict(zip(info[::2], info[1::2])) for info in infos)
        assert default["width"] == 8
        assert default["depth"] == 7
        assert custom["width"] == 16
        assert custom["depth"] == 14

    async def test_list_bounded_by_topk(self, redis_stack: Client):
        assert await redis_stack.topk.reserve("topk", 3)
        items = {f"item-{i}": i + 1 for i in range(6)}
        await redis_stack.topk.incrby("topk", items)
        tracked = await redis_stack.topk.list("topk")
        assert 0 < len(tracked) <= 3
        assert set(tracked) <= set(items)
        assert len(await redis_stack.topk.count("topk", list(items))) == len(items)

    async def test_counts(self, redis_stack: Client):
        assert await redis_stack.topk.reserve("topk", 3)
        await redis_stack.topk.add("topk", ["4", "5", "6", "4", "5", "6"])
        assert (2, 2, 2) == await redis_stack.topk.count("topk", ["4", "5", "6"])
        assert {"4": 2, "5": 2, "6": 2} == await redis_stack.topk.list("topk", withcount=True)

    async def test_missing_key_raises(self, redis_stack: Client):
        with pytest.raises(ModuleCommandError, match="TopK.query"):
            await redis_stack.topk.query("missing", ["x"])
