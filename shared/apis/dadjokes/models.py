from pydantic import BaseModel


__all__ = ("Dadjoke",)


class Dadjoke(BaseModel):
    joke: str
    id: str | None = None
    status: int | None = None
