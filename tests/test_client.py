from __future__ import annotations

import logging

import pytest
from packaging.version import Version
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from redismodules import AI, Client, Config, TopK
from redismodules.commands import CommandGroup
from redismodules.exceptions import ModuleCommandError, ModuleCommandNotSupportedError
from redismodules.globals import MODULE_GROUPS, MODULES, READONLY_COMMANDS
from redismodules.modules import RedisAI, RedisBloom

pytestmark = pytest.mark.anyio


@pytest.fixture
def optimized():
    Config.optimized = True
    yield
    Config.optimized = False


class TestConnection:
    async def test_caller_connection_left_open(self, executor):
        async with Client(connection=executor) as client:
            assert client.connection is executor
        assert not executor.closed
        assert executor.commands == [("PING",)]

    async def test_owned_connection_created_lazily(self):
        client = Client("redis.local", 6380, 2, decode_responses=True)
        assert not client.connected
        connection = client.connection
        assert isinstance(connection, Redis)
        assert client.connection is connection
        assert connection.connection_pool.connection_kwargs["host"] == "redis.local"
        assert connection.connection_pool.connection_kwargs["port"] == 6380
        await client.disconnect()
        assert not client.connected

    async def test_from_url(self):
        client = Client.from_url("redis://localhost:6390/1", raise_errors=False)
        assert not client.raise_errors
        assert repr(client) == "Client<redis://localhost:6390/1>"
        assert isinstance(client.connection, Redis)
        await client.disconnect()

    def test_repr(self, executor):
        assert repr(Client("localhost", 7000)) == "Client<localhost:7000/0>"
        assert repr(Client(connection=executor)).startswith("Client<<")

    async def test_connect_failure_raises(self, executor):
        executor.fail_with(ConnectionRefusedError("refused"))
        with pytest.raises(ModuleCommandError, match="Client.connect: refused"):
            await Client(connection=executor).connect()

    async def test_connect_failure_logged(self, executor, caplog):
        executor.fail_with(ConnectionRefusedError("refused"))
        client = Client(connection=executor, raise_errors=False)
        with caplog.at_level(logging.ERROR, logger="redismodules"):
            assert await client.connect() is client
        assert "Client.connect: refused" in caplog.text

    async def test_execute_command(self, client, executor):
        executor.reply("TOPK.LIST", [b"a"])
        assert [b"a"] == await client.execute_command("TOPK.LIST", "k")


class TestGroups:
    def test_group_properties(self, client):
        assert isinstance(client.topk, TopK)
        assert isinstance(client.ai, AI)
        assert client.topk.client is client
        assert client.ai.raise_errors

    def test_group_inherits_policy(self, quiet_client):
        assert not quiet_client.topk.raise_errors
        assert TopK(quiet_client, raise_errors=True).raise_errors

    def test_registries(self):
        assert MODULES["bf"] is RedisBloom
        assert MODULES["ai"] is RedisAI
        assert RedisBloom.COMMAND_GROUPS[CommandGroup.TOPK] is TopK
        assert {TopK, AI} <= MODULE_GROUPS
        assert b"TOPK.QUERY" in READONLY_COMMANDS
        assert b"TOPK.RESERVE" not in READONLY_COMMANDS

    def test_command_documentation(self):
        assert "https://redis.io/commands/topk.reserve/" in TopK.reserve.__doc__
        assert "Deprecated in RedisBloom version: `2.4.0`" in TopK.count.__doc__
        assert "https://oss.redis.com/redisai/commands/#aitensorset" in AI.tensorset.__doc__


class TestVersionVerification:
    @pytest.mark.parametrize(
        "modules",
        [
            [[b"name", b"bf", b"ver", 10000]],
            [{b"name": b"bf", b"ver": 10000}],
            [["name", "bf", "ver", 10000], ["name", "ai", "ver", 10207]],
        ],
    )
    async def test_module_too_old(self, executor, modules):
        executor.reply("MODULE LIST", modules)
        client = Client(connection=executor, verify_version=True)
        assert await client.get_server_module_version("bf") == Version("1.0.0")
        with pytest.raises(ModuleCommandNotSupportedError, match="TOPK.RESERVE"):
            await client.topk.reserve("k", 3)
        assert executor.commands == [("MODULE LIST",)]

    async def test_module_recent_enough(self, executor):
        executor.reply("MODULE LIST", [[b"name", b"bf", b"ver", 20803], [b"name", b"ai", b"ver", 10207]])
        client = Client(connection=executor, verify_version=True)
        assert await client.topk.reserve("k", 3)
        assert await client.ai.modeldel("m")
        assert await client.get_server_module_version("bf") == Version("2.8.3")
        assert await client.get_server_module_version("ai") == Version("1.2.7")
        assert executor.commands == [("MODULE LIST",), ("TOPK.RESERVE", "k", 3), ("AI.MODELDEL", "m")]

    async def test_module_not_listed(self, executor):
        executor.reply("MODULE LIST", [])
        client = Client(connection=executor, verify_version=True)
        assert await client.topk.reserve("k", 3)
        assert await client.get_server_module_version("bf") is None

    async def test_module_list_not_permitted(self, executor):
        executor.reply("MODULE LIST", ResponseError("NOPERM"))
        client = Client(connection=executor, verify_version=True)
        assert await client.topk.reserve("k", 3)
        assert await client.get_server_module_version("bf") is None
        assert executor.commands.count(("MODULE LIST",)) == 1

    async def test_connection_failure_raises_command_error(self, executor):
        failure = RedisConnectionError("connection refused")
        executor.fail_with(failure)
        client = Client(connection=executor, verify_version=True)
        with pytest.raises(ModuleCommandError, match="TopK.query") as exc_info:
            await client.topk.query("k", ["x"])
        assert exc_info.value.error is failure

    async def test_connection_failure_not_raised(self, executor, caplog):
        executor.fail_with(RedisConnectionError("connection refused"))
        client = Client(connection=executor, verify_version=True, raise_errors=False)
        with caplog.at_level(logging.ERROR, logger="redismodules"):
            assert await client.topk.query("k", ["x"]) is None
        assert "TopK.query: connection refused" in caplog.text

    async def test_module_list_retried_after_timeout(self, executor):
        executor.reply(
            "MODULE LIST", TimeoutError("timed out"), [[b"name", b"bf", b"ver", 10000]]
        )
        client = Client(connection=executor, verify_version=True)
        assert await client.topk.reserve("k", 3)
        with pytest.raises(ModuleCommandNotSupportedError):
            await client.topk.reserve("k", 3)
        assert executor.commands == [
            ("MODULE LIST",),
            ("TOPK.RESERVE", "k", 3),
            ("MODULE LIST",),
        ]

    async def test_not_verified_by_default(self, client, executor):
        assert await client.topk.reserve("k", 3)
        assert executor.commands == [("TOPK.RESERVE", "k", 3)]

    async def test_optimized_skips_verification(self, executor, optimized):
        executor.reply("MODULE LIST", [[b"name", b"bf", b"ver", 10000]])
        client = Client(connection=executor, verify_version=True)
        assert await client.topk.reserve("k", 3)
        assert executor.commands == [("TOPK.RESERVE", "k", 3)]


class TestOptimized:
    async def test_validation_skipped(self, client, executor, optimized):
        assert await client.topk.reserve("k", 3, width=8)
        assert executor.last_command == ["TOPK.RESERVE", "k", 3]

    def test_environment(self, monkeypatch):
        assert not Config.optimized
        monkeypatch.setenv("REDISMODULES_OPTIMIZED", "true")
        assert Config.optimized
