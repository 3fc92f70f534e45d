import importlib
import inspect
import os
import shlex
import traceback
from typing import Any, Awaitable, Callable

import aiohttp
import click
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from shared.apis import dadjokes
from shared.apis.exceptions import APIRequestError
from Shell.commands import Cog, Command, Context, ShellGroup, split_command
from Shell.config import Settings
from Shell.exceptions import CommandNotFound
from Shell.logger import logger


LineReader = Callable[[], Awaitable[str]]


class Bot:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        output: Callable[[str], Any] = print,
    ) -> None:
        self.settings = settings or Settings()
        self.session = session
        self._owns_session = session is None
        self._output = output
        self.cogs: dict[str, Cog] = {}
        self.group = ShellGroup("shell")
        self.history: list[str] = []
        self.last_error: BaseException | None = None
        self.running = False

    async def setup(self) -> None:
        """Creates the http session and loads every cog; must be awaited inside the event loop"""
        if self.session is None:
            self.session = dadjokes.create_session(self.settings.joke_api_timeout)
        for filename in sorted(os.listdir(f"{os.path.realpath(os.path.dirname(__file__))}/cogs")):
            if filename.endswith(".py") and not filename.startswith("_"):
                self.load_module(f"Shell.cogs.{filename[:-3]}")

    async def close(self) -> None:
        self.running = False
        if self._owns_session and self.session is not None and not self.session.closed:
            await self.session.close()
        logger.debug("Shell closed")

    def load_module(self, name: str) -> None:
        module = importlib.import_module(name)
        module.prepare(self)

    def add_cog(self, cog: Cog) -> None:
        if cog.name in self.cogs:
            raise ValueError(f"Cog '{cog.name}' is already loaded")
        commands = cog.get_commands()
        for cmd in commands:
            for key in (cmd.name, *cmd.aliases):
                if self.group.get_command(None, key) is not None:
                    raise ValueError(f"Command name '{key}' is already registered")
        for cmd in commands:
            self.group.add_command(cmd)
        self.cogs[cog.name] = cog
        logger.debug("Loaded cog %s with %d commands", cog.name, len(commands))

    def get_command(self, name: str) -> Command | None:
        cmd = self.group.get_command(None, name)
        return cmd if isinstance(cmd, Command) else None

    def unique_commands(self) -> list[Command]:
        """Registered commands in registration order"""
        return [cmd for cmd in self.group.commands.values() if isinstance(cmd, Command)]

    def send(self, content: str) -> None:
        self._output(content)

    async def handle_commands(self, message: str) -> bool:
        """Dispatches a single line; returns False if the command failed"""
        message = message.strip()
        if message == "":
            return True
        self.history.append(message)

        ctx = Context(self, message)
        try:
            tokens = split_command(message)
        except ValueError as e:
            await self.event_command_error(ctx, click.UsageError(f"Could not parse the command: {e}"))
            return False
        return await self.invoke(tokens, message)

    async def invoke(self, tokens: list[str], message: str | None = None) -> bool:
        """Dispatches an already split command; returns False if the command failed"""
        if len(tokens) == 0:
            return True

        ctx = Context(self, message if message is not None else shlex.join(tokens), tokens[0])
        try:
            ctx.command = self.get_command(tokens[0])
            if ctx.command is None:
                raise CommandNotFound(tokens[0])
            logger.debug("Invoking %s with %s", ctx.command.name, tokens[1:])
            with self.group.make_context(self.group.name, tokens, obj=self) as click_ctx:
                # Command callbacks are coroutines; click hands back the unawaited coroutine
                result = self.group.invoke(click_ctx)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            await self.event_command_error(ctx, e)
            return False

        if result is not None:
            self.send(str(result))
        return True

    async def event_command_error(self, context: Context, error: Exception) -> None:
        self.last_error = error

        if isinstance(error, CommandNotFound):
            self.send(error.message)

        elif isinstance(error, click.UsageError):
            if context.command is not None:
                self.send(f'{error.format_message()}; see "help {context.command.name}"')
            else:
                self.send(error.format_message())

        elif isinstance(error, APIRequestError):
            logger.debug("Api request failed in %s: %r", context.invoked_with, error.source)
            self.send(error.message)

        elif isinstance(error, click.ClickException):
            self.send(error.format_message())

        else:
            logger.exception("Unexpected error in command %s", context.invoked_with, exc_info=error)
            self.send("An unexpected error occurred")

    def format_last_error(self) -> str | None:
        if self.last_error is None:
            return None
        return "".join(traceback.format_exception(self.last_error)).rstrip()

    async def start(self, read_line: LineReader | None = None) -> None:
        """Reads and dispatches lines until exit or end of input"""
        if read_line is None:
            prompt_session: PromptSession[str] = PromptSession(history=InMemoryHistory())

            async def read_line() -> str:
                return await prompt_session.prompt_async(f"{self.settings.prompt} ")

        self.running = True
        logger.debug("Shell started")
        while self.running:
            try:
                line = await read_line()
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            await self.handle_commands(line)
        self.running = False
