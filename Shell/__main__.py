import asyncio
import sys

from dotenv import load_dotenv

from Shell.config import Settings
from Shell.logger import setup_logger
from Shell.shellbot import Bot


async def run(argv: list[str], settings: Settings) -> int:
    bot = Bot(settings)
    try:
        await bot.setup()
        if argv:
            # Non-interactive: the arguments are already split by the calling shell
            return 0 if await bot.invoke(argv) else 1
        await bot.start()
        return 0
    finally:
        await bot.close()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = Settings.from_env()
    setup_logger(settings.log_level)
    return asyncio.run(run(sys.argv[1:] if argv is None else argv, settings))


if __name__ == "__main__":
    sys.exit(main())
