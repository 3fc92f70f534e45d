import inspect
import shlex
from typing import Any, Callable, Coroutine, TYPE_CHECKING

import click

if TYPE_CHECKING:
    from Shell.shellbot import Bot


__all__ = ("Cog", "Command", "Context", "ShellGroup", "command", "split_command")


Callback = Callable[..., Coroutine[Any, Any, Any]]


class Context:
    """What the dispatcher knows about the line being handled, passed to the error hook"""

    def __init__(self, bot: "Bot", message: str, invoked_with: str | None = None) -> None:
        self.bot = bot
        self.message = message
        self.invoked_with = invoked_with
        self.command: Command | None = None


class Command(click.Command):
    def __init__(self, *args: Any, aliases: tuple[str, ...] = (), cog: "Cog | None" = None, **kwargs: Any) -> None:
        # The shell has its own help command
        kwargs.setdefault("add_help_option", False)
        super().__init__(*args, **kwargs)
        self.aliases = tuple(aliases)
        self.cog = cog

    def get_usage_help(self) -> str:
        ctx = click.Context(self, info_name=self.name)
        text = self.get_help(ctx)
        if self.aliases:
            text += f"\n\nAliases: {', '.join(self.aliases)}"
        return text


class ShellGroup(click.Group):
    """Click group resolving commands case-insensitively and by alias"""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("add_help_option", False)
        super().__init__(*args, **kwargs)
        self.aliases: dict[str, str] = {}

    def add_command(self, cmd: click.Command, name: str | None = None) -> None:
        name = name or cmd.name
        assert name is not None
        aliases = getattr(cmd, "aliases", ())
        for key in (name, *aliases):
            if key in self.commands or key in self.aliases:
                raise ValueError(f"Command name '{key}' is already registered")
        super().add_command(cmd, name)
        for alias in aliases:
            self.aliases[alias] = name

    def get_command(self, ctx: click.Context | None, cmd_name: str) -> click.Command | None:
        cmd_name = cmd_name.lower()
        return self.commands.get(self.aliases.get(cmd_name, cmd_name))

    def list_commands(self, ctx: click.Context | None) -> list[str]:
        # Registration order instead of alphabetical
        return list(self.commands)


class Cog:
    __cog_name__: str

    def __init_subclass__(cls, *, name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__cog_name__ = name or cls.__name__

    @property
    def name(self) -> str:
        return self.__cog_name__

    def get_commands(self) -> list[Command]:
        """Click commands calling this instance's methods, in definition order"""
        commands = {}
        for klass in reversed(type(self).__mro__):
            for attr, value in vars(klass).items():
                attrs = getattr(value, "__shell_command__", None)
                if attrs is None:
                    continue
                commands[attr] = Command(
                    callback=getattr(self, attr),
                    params=list(reversed(getattr(value, "__click_params__", []))),
                    help=inspect.getdoc(value),
                    cog=self,
                    **attrs,
                )
        return list(commands.values())


def command(name: str | None = None, *, aliases: tuple[str, ...] = (), **attrs: Any):
    """
    Marks a cog coroutine as a command; stack click.argument/click.option below it.
    The click command is built per cog instance so the callback is the bound method.
    """

    def decorator(func: Callback) -> Callback:
        if not inspect.iscoroutinefunction(func):
            raise TypeError("Command callback must be a coroutine")
        func.__shell_command__ = {  # type: ignore[attr-defined]
            "name": name or func.__name__.replace("_", "-"),
            "aliases": tuple(aliases),
            **attrs,
        }
        return func

    return decorator


def split_command(message: str) -> list[str]:
    """
    Splits a line like a shell would, except that a quote only opens a quoted string at the
    start of a word; inside a word (O'Brien, don't) it is a literal character.
    Raises ValueError for an unclosed quote.
    """
    escaped = []
    quote = None
    previous = " "
    chars = iter(message)
    for char in chars:
        if quote is None and char == "\\":
            char += next(chars, "")
        elif quote is None and char in "'\"":
            if previous.isspace():
                quote = char
            else:
                escaped.append("\\")
        elif quote == '"' and char == "\\":
            char += next(chars, "")
        elif char == quote:
            quote = None
        escaped.append(char)
        previous = char[-1]
    return shlex.split("".join(escaped))
