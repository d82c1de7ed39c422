"""Domain models for the player roster."""

from pydantic import BaseModel


class RosterEntry(BaseModel):
    """Single player as reported by the arbiter."""

    name: str
    hp: int
