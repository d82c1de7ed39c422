"""Wire messages exchanged with the arbiter over the session channel."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from face_duel.domain.roster import RosterEntry
from face_duel.errors import MessageDecodeError


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class WhoMessage(_WireModel):
    """Identity query sent right after the channel opens."""

    type: Literal["who"] = "who"


class RegisterMessage(_WireModel):
    """Request to join the game under a display name."""

    type: Literal["register"] = "register"
    name: str
    embedding: list[float]


class ShootMessage(_WireModel):
    """Shot attempt carrying a freshly captured signature."""

    type: Literal["shoot"] = "shoot"
    embedding: list[float]


class RegisteredEvent(_WireModel):
    """Registration accepted by the arbiter."""

    type: Literal["registered"] = "registered"
    name: str
    hp: int


class PlayersEvent(_WireModel):
    """Full roster snapshot."""

    type: Literal["players"] = "players"
    players: list[RosterEntry] = Field(alias="list")


class HitEvent(_WireModel):
    """A shot struck a player."""

    type: Literal["hit"] = "hit"
    shooter: str = Field(alias="from")
    target: str
    hp: int
    score: float


class MissEvent(_WireModel):
    """A shot struck nobody."""

    type: Literal["miss"] = "miss"
    score: float


class ErrorEvent(_WireModel):
    """Rejection or fault reported by the arbiter."""

    type: Literal["error"] = "error"
    message: str = Field(alias="msg")


OutboundMessage = WhoMessage | RegisterMessage | ShootMessage

InboundMessage = RegisteredEvent | PlayersEvent | HitEvent | MissEvent | ErrorEvent

InboundEvent = Annotated[InboundMessage, Field(discriminator="type")]

_INBOUND_ADAPTER: TypeAdapter[InboundEvent] = TypeAdapter(InboundEvent)
_ROSTER_ADAPTER: TypeAdapter[list[RosterEntry]] = TypeAdapter(list[RosterEntry])


def encode_message(message: OutboundMessage) -> str:
    """Serialize an outbound message to its JSON wire form."""
    return message.model_dump_json(by_alias=True)


def decode_event(raw: str | bytes) -> InboundMessage:
    """Parse a JSON frame into a typed inbound event."""
    try:
        return _INBOUND_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise MessageDecodeError(f"Invalid arbiter event: {exc}") from exc


def decode_roster(payload: object) -> list[RosterEntry]:
    """Validate a roster list as returned by the players endpoint."""
    try:
        return _ROSTER_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise MessageDecodeError(f"Invalid roster payload: {exc}") from exc
