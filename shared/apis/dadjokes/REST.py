import aiohttp

from .models import Dadjoke
from shared.apis.exceptions import aiohttp_error_handler


__all__ = ("ENDPOINT", "HEADERS", "create_session", "random_dadjoke")


ENDPOINT = "https://icanhazdadjoke.com/"
HEADERS = {"Accept": "application/json"}


def create_session(timeout: float = 7) -> aiohttp.ClientSession:
    """Must be called inside a running event loop; the caller owns closing it"""
    return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout), headers=HEADERS)


@aiohttp_error_handler
async def random_dadjoke(session: aiohttp.ClientSession, endpoint: str = ENDPOINT) -> Dadjoke:
    # Headers per request as the session may come from anywhere
    async with session.get(endpoint, headers=HEADERS, raise_for_status=True) as resp:
        response = await resp.json()
        if not isinstance(response, dict):
            raise ValueError(f"Expected a json object, got {type(response).__name__}")
        joke = Dadjoke(**response)
        return joke
