from typing import TYPE_CHECKING

import aiohttp
import click

from shared.apis import dadjokes
from Shell import commands

if TYPE_CHECKING:
    from Shell.shellbot import Bot


class Basic(commands.Cog, name="Basic Commands"):
    def __init__(self, session: aiohttp.ClientSession, endpoint: str) -> None:
        self.session = session
        self.endpoint = endpoint

    @commands.command()
    @click.argument("name", default="World")
    @click.option("--arg", help="Name to greet, takes precedence over NAME")
    async def hello(self, name: str, arg: str | None) -> str:
        """This command prints hello"""
        return f"Hello {name if arg is None else arg}!"

    @commands.command("joke-me", aliases=("joke", "dadjoke"))
    async def joke_me(self) -> str:
        """The command provides you a random joke!"""
        dadjoke = await dadjokes.random_dadjoke(self.session, self.endpoint)
        return dadjoke.joke


def prepare(bot: "Bot"):
    assert bot.session is not None
    bot.add_cog(Basic(bot.session, bot.settings.joke_api_url))
