import os
from typing import Self

from pydantic import BaseModel, ConfigDict

from shared.apis.dadjokes import ENDPOINT
from Shell.logger import logger


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    joke_api_url: str = ENDPOINT
    joke_api_timeout: float = 7
    prompt: str = "shell:>"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Self:
        """Reads the settings from the environment; call load_dotenv() first to include a .env file"""
        defaults = cls()
        timeout = os.environ.get("JOKE_API_TIMEOUT")
        try:
            joke_api_timeout = float(timeout) if timeout else defaults.joke_api_timeout
            if joke_api_timeout <= 0:
                raise ValueError(timeout)
        except ValueError:
            logger.warning("Invalid JOKE_API_TIMEOUT %r, using %s", timeout, defaults.joke_api_timeout)
            joke_api_timeout = defaults.joke_api_timeout

        return cls(
            joke_api_url=os.environ.get("JOKE_API_URL") or defaults.joke_api_url,
            joke_api_timeout=joke_api_timeout,
            prompt=os.environ.get("SHELL_PROMPT") or defaults.prompt,
            log_level=os.environ.get("LOG_LEVEL") or defaults.log_level,
        )
