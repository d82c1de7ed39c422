"""Domain models for the client session."""

from dataclasses import dataclass
from enum import Enum


class SessionState(Enum):
    """Connection and registration state of the local client."""

    DISCONNECTED = "disconnected"
    CONNECTED_UNREGISTERED = "connected_unregistered"
    CONNECTED_REGISTERED = "connected_registered"


class ActionOutcome(Enum):
    """Result of a join or shoot intent."""

    SENT = "sent"
    REJECTED = "rejected"
    BUSY = "busy"
    NO_FACE = "no_face"
    DROPPED = "dropped"
    CONNECT_FAILED = "connect_failed"


@dataclass(frozen=True)
class CaptureBudget:
    """Retry budget for one kind of capture."""

    max_attempts: int
    retry_delay: float


@dataclass(frozen=True)
class ChannelClosed:
    """Emitted once when a channel connection ends.

    ``generation`` identifies the connection, so a close that is processed
    after a newer connection was opened can be recognised as stale.
    """

    generation: int
    reason: str | None = None
