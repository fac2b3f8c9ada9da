from __future__ import annotations

import collections
import os

import pytest

import redismodules
from redismodules._utils import nativestr
from redismodules.exceptions import ModuleCommandError


class RecordingExecutor:
    """
    Stands in for a redis connection. Records every command sent and
    replies with canned responses queued per command name.
    """

    def __init__(self) -> None:
        self.commands: list[tuple] = []
        self.replies: dict[str, collections.deque] = collections.defaultdict(collections.deque)
        self.error: Exception | None = None
        self.closed = False

    def reply(self, command: str, *responses) -> None:
        self.replies[command.upper()].extend(responses)

    def fail_with(self, error: Exception) -> None:
        self.error = error

    async def execute_command(self, *args, **options):
        self.commands.append(args)
        if self.error is not None:
            raise self.error
        queued = self.replies[nativestr(args[0]).upper()]
        response = queued.popleft() if queued else b"OK"
        if isinstance(response, Exception):
            raise response
        return response

    async def aclose(self) -> None:
        self.closed = True

    @property
    def last_command(self) -> list:
        return list(self.commands[-1])


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def client(executor):
    return redismodules.Client(connection=executor)


@pytest.fixture
def quiet_client(executor):
    return redismodules.Client(connection=executor, raise_errors=False)


@pytest.fixture
def redis_stack_url():
    return os.environ.get("REDIS_STACK_URL", "redis://localhost:6379")


async def _stack_client(url: str, module: str):
    client = redismodules.Client.from_url(url, decode_responses=True, socket_timeout=1)
    try:
        await client.connect()
    except ModuleCommandError:
        await client.disconnect()
        pytest.skip(f"No redis server at {url}")
    if not await client.get_server_module_version(module):
        await client.disconnect()
        pytest.skip(f"Module {module} not loaded at {url}")
    await client.connection.execute_command("FLUSHDB")
    return client


@pytest.fixture
async def redis_stack(redis_stack_url):
    client = await _stack_client(redis_stack_url, "bf")
    yield client
    await client.disconnect()


@pytest.fixture
async def redis_ai(redis_stack_url):
    client = await _stack_client(redis_stack_url, "ai")
    yield client
    await client.disconnect()
