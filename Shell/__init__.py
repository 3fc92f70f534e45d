from .shellbot import Bot
from .config import Settings


__all__ = ("Bot", "Settings")
