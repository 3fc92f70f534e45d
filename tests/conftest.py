import asyncio
from typing import Any

from aiohttp import web
from aiohttp.test_utils import TestServer
import pytest
import pytest_asyncio

from shared.apis import dadjokes
from Shell import Bot, Settings


class FakeJokeApi:
    """Stands in for icanhazdadjoke.com; tests tweak the response before calling it"""

    def __init__(self) -> None:
        self.status = 200
        self.body: Any = {"id": "R7UfaahVfFd", "joke": "My dog used to chase people on a bike a lot.", "status": 200}
        self.content_type = "application/json"
        self.delay = 0.0
        self.requests: list[web.Request] = []
        self.url = ""

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(self.body, (dict, list)):
            return web.json_response(self.body, status=self.status)
        return web.Response(text=self.body, status=self.status, content_type=self.content_type)


@pytest_asyncio.fixture
async def joke_api():
    api = FakeJokeApi()
    app = web.Application()
    app.router.add_get("/", api.handle)
    server = TestServer(app)
    await server.start_server()
    api.url = str(server.make_url("/"))
    yield api
    await server.close()


@pytest_asyncio.fixture
async def session():
    session = dadjokes.create_session(timeout=2)
    yield session
    await session.close()


@pytest.fixture
def output() -> list[str]:
    return []


@pytest_asyncio.fixture
async def bot(joke_api: FakeJokeApi, output: list[str]):
    bot = Bot(Settings(joke_api_url=joke_api.url, joke_api_timeout=2), output=output.append)
    await bot.setup()
    yield bot
    await bot.close()


@pytest.fixture
def line_reader():
    """Feeds the given lines to Bot.start; exceptions in the list are raised instead"""

    def make(lines: list[str | BaseException]):
        remaining = iter(lines)

        async def read_line() -> str:
            line = next(remaining, None)
            if line is None:
                raise EOFError
            if isinstance(line, BaseException):
                raise line
            return line

        return read_line

    return make
