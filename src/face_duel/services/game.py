"""Client protocol state machine for joining and firing."""

import logging
from dataclasses import dataclass, field
from typing import Protocol, assert_never

from face_duel.adapters.session_channel import ChannelEvent, SessionChannel
from face_duel.domain.capture import NotFound, Signature
from face_duel.domain.messages import (
    ErrorEvent,
    HitEvent,
    MissEvent,
    PlayersEvent,
    RegisteredEvent,
    RegisterMessage,
    ShootMessage,
    WhoMessage,
)
from face_duel.domain.roster import RosterEntry
from face_duel.domain.session import (
    ActionOutcome,
    CaptureBudget,
    ChannelClosed,
    SessionState,
)
from face_duel.errors import ChannelError
from face_duel.services.capture import CaptureLoop
from face_duel.services.roster import RosterProjection

_logger = logging.getLogger(__name__)

_JOIN = "join"
_SHOOT = "shoot"


class Presenter(Protocol):
    """Interface for user-facing side effects."""

    def log(self, text: str) -> None:
        """Append an advisory line to the activity log."""

    def notice(self, text: str) -> None:
        """Show a blocking notice for a rejected action."""

    def show_roster(self, entries: list[RosterEntry]) -> None:
        """Display the current roster snapshot."""

    def distress(self) -> None:
        """Signal that the local player was hit."""

    def state_changed(self, state: SessionState) -> None:
        """Enable or disable controls for the new session state."""


@dataclass
class GameSession:
    """Owns the session state and applies intents and arbiter events to it."""

    channel: SessionChannel
    capture_loop: CaptureLoop
    roster: RosterProjection
    presenter: Presenter
    join_budget: CaptureBudget = field(
        default_factory=lambda: CaptureBudget(max_attempts=10, retry_delay=0.3)
    )
    shoot_budget: CaptureBudget = field(
        default_factory=lambda: CaptureBudget(max_attempts=1, retry_delay=0.3)
    )
    state: SessionState = SessionState.DISCONNECTED
    identity: str | None = None
    _generation: int = 0
    _in_flight: set[str] = field(default_factory=set)

    async def connect(self) -> bool:
        """Open the channel and ask the arbiter who we are."""
        if self.state is not SessionState.DISCONNECTED and self.channel.is_open:
            return True
        try:
            await self.channel.open()
        except ChannelError as exc:
            _logger.warning("Connect failed: %s", exc)
            self.presenter.log(f"Connection failed: {exc}")
            return False
        if self.channel.generation != self._generation:
            # New connection: nothing is registered on it yet.
            self.identity = None
            self._generation = self.channel.generation
        self._set_state(SessionState.CONNECTED_UNREGISTERED)
        self.presenter.log("Connected to arbiter")
        await self.channel.send(WhoMessage())
        return True

    async def join(self, name: str) -> ActionOutcome:
        """Capture a signature and ask the arbiter to register ``name``."""
        name = name.strip()
        if not name:
            self.presenter.notice("Please enter a name")
            return ActionOutcome.REJECTED
        if self.state is SessionState.CONNECTED_REGISTERED:
            self.presenter.notice(f"Already registered as {self.identity}")
            return ActionOutcome.REJECTED
        if _JOIN in self._in_flight:
            return ActionOutcome.BUSY

        self._in_flight.add(_JOIN)
        try:
            if self.state is SessionState.DISCONNECTED and not await self.connect():
                return ActionOutcome.CONNECT_FAILED
            self.presenter.log("Detecting face, look at the camera...")
            result = await self.capture_loop.capture(
                self.join_budget.max_attempts, self.join_budget.retry_delay
            )
            if isinstance(result, NotFound):
                self.presenter.log("No face detected, please try again")
                return ActionOutcome.NO_FACE
            return await self._send_register(name, result)
        finally:
            self._in_flight.discard(_JOIN)

    async def shoot(self) -> ActionOutcome:
        """Capture a fresh signature and submit it as a shot."""
        if self.state is not SessionState.CONNECTED_REGISTERED:
            self.presenter.notice("Join the game before firing")
            return ActionOutcome.REJECTED
        if _SHOOT in self._in_flight:
            return ActionOutcome.BUSY

        self._in_flight.add(_SHOOT)
        try:
            result = await self.capture_loop.capture(
                self.shoot_budget.max_attempts, self.shoot_budget.retry_delay
            )
            if isinstance(result, NotFound):
                self.presenter.log("No face in the current frame")
                return ActionOutcome.NO_FACE
            # The channel may have closed while capturing.
            if self.state is not SessionState.CONNECTED_REGISTERED:
                _logger.info("Shot dropped: session is %s", self.state.value)
                return ActionOutcome.DROPPED
            sent = await self.channel.send(ShootMessage(embedding=result.as_list()))
            return ActionOutcome.SENT if sent else ActionOutcome.DROPPED
        finally:
            self._in_flight.discard(_SHOOT)

    async def process_events(self) -> None:
        """Apply channel events in arrival order, forever."""
        while True:
            event = await self.channel.next_event()
            self.handle(event)

    def handle(self, event: ChannelEvent) -> None:
        """Apply a single inbound event to local state."""
        if isinstance(event, RegisteredEvent):
            self._on_registered(event)
        elif isinstance(event, PlayersEvent):
            self.roster.replace(event.players)
        elif isinstance(event, HitEvent):
            self._on_hit(event)
        elif isinstance(event, MissEvent):
            self.presenter.log(f"Missed (score={event.score})")
        elif isinstance(event, ErrorEvent):
            self.presenter.log(f"Error: {event.message}")
        elif isinstance(event, ChannelClosed):
            self._on_closed(event)
        else:
            assert_never(event)

    async def close(self) -> None:
        """Tear down the channel; the close event resets the state."""
        await self.channel.close()

    async def _send_register(self, name: str, signature: Signature) -> ActionOutcome:
        if self.state is SessionState.DISCONNECTED:
            _logger.info("Registration dropped: channel closed during capture")
            return ActionOutcome.DROPPED
        self.identity = name
        sent = await self.channel.send(
            RegisterMessage(name=name, embedding=signature.as_list())
        )
        return ActionOutcome.SENT if sent else ActionOutcome.DROPPED

    def _on_registered(self, event: RegisteredEvent) -> None:
        if self.state is SessionState.DISCONNECTED:
            _logger.info("Ignoring registration while disconnected: %s", event.name)
            return
        self.identity = event.name
        self.roster.set_hp(event.name, event.hp)
        if self.state is SessionState.CONNECTED_REGISTERED:
            return
        self._set_state(SessionState.CONNECTED_REGISTERED)
        self.presenter.log(f"Registered: {event.name} ({event.hp} HP)")

    def _on_hit(self, event: HitEvent) -> None:
        self.presenter.log(
            f"{event.shooter} hit {event.target} -> {event.hp} HP "
            f"(score={event.score})"
        )
        self.roster.set_hp(event.target, event.hp)
        if self.identity is not None and event.target == self.identity:
            self.presenter.distress()

    def _on_closed(self, event: ChannelClosed) -> None:
        if event.generation != self._generation:
            _logger.debug("Ignoring stale close for generation %s", event.generation)
            return
        self.identity = None
        self._set_state(SessionState.DISCONNECTED)
        self.presenter.log("Connection lost")

    def _set_state(self, state: SessionState) -> None:
        if state is self.state:
            return
        _logger.info("Session state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.presenter.state_changed(state)
