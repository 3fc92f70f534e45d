import asyncio
from functools import wraps

import aiohttp
from pydantic import ValidationError


class APIRequestError(Exception):
    def __init__(self, message: str, source: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.source = source


def aiohttp_error_handler(func):
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        # aiohttp's timeout errors are also connection errors so they go first
        except asyncio.TimeoutError as e:
            raise APIRequestError("Request timed out. Try again later", e)
        # InvalidURL is also a ValueError
        except (aiohttp.InvalidURL, aiohttp.NonHttpUrlClientError) as e:
            raise APIRequestError("Invalid api url", e)
        except aiohttp.ClientConnectionError as e:
            raise APIRequestError("Connection error", e)
        # Raised by resp.json() when the body isn't json; a subclass of ClientResponseError
        except aiohttp.ContentTypeError as e:
            raise APIRequestError("Malformed response from the api", e)
        except aiohttp.ClientResponseError as e:
            raise APIRequestError(f"An api request failed: {e.message} (status: {e.status})", e)
        except (aiohttp.ClientPayloadError, ValidationError, ValueError) as e:
            raise APIRequestError("Malformed response from the api", e)
        # Propagate already handled exception
        except APIRequestError as e:
            raise e
        except Exception as e:
            raise APIRequestError("An unexpected error occurred", e)

    return wrapper
