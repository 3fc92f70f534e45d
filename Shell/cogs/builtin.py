from typing import TYPE_CHECKING

import click
from prompt_toolkit.shortcuts import clear as clear_screen

from Shell import commands
from Shell.exceptions import CommandNotFound

if TYPE_CHECKING:
    from Shell.shellbot import Bot


class Builtin(commands.Cog, name="Built-In Commands"):
    def __init__(self, bot: "Bot") -> None:
        self.bot = bot

    @commands.command()
    @click.argument("command", required=False)
    async def help(self, command: str | None) -> str:
        """Display help about available commands"""
        if command is not None:
            cmd = self.bot.get_command(command)
            if cmd is None:
                raise CommandNotFound(command)
            return cmd.get_usage_help()

        lines = ["AVAILABLE COMMANDS"]
        for cog in self.bot.cogs.values():
            lines.append("")
            lines.append(cog.name)
            for cmd in self.bot.unique_commands():
                if cmd.cog is cog:
                    names = ", ".join((cmd.name, *cmd.aliases))
                    lines.append(f"\t{names}: {cmd.get_short_help_str(limit=100)}")
        return "\n".join(lines)

    @commands.command(aliases=("quit",))
    async def exit(self) -> None:
        """Exit the shell"""
        self.bot.running = False

    @commands.command()
    async def clear(self) -> None:
        """Clear the shell screen"""
        clear_screen()

    @commands.command()
    async def history(self) -> str:
        """Display the commands entered in this session"""
        return "\n".join(f"{i:>4}  {line}" for i, line in enumerate(self.bot.history, 1))

    @commands.command()
    async def stacktrace(self) -> str:
        """Display the full stacktrace of the last error"""
        return self.bot.format_last_error() or "No error has occurred yet"


def prepare(bot: "Bot"):
    bot.add_cog(Builtin(bot))
