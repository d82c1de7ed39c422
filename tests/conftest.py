"""Shared test fixtures."""

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import pytest

from face_duel.adapters.roster_client import RosterClient
from face_duel.adapters.session_channel import ChannelEvent, SessionChannel
from face_duel.config import Settings
from face_duel.domain.messages import OutboundMessage
from face_duel.domain.roster import RosterEntry
from face_duel.domain.session import CaptureBudget, ChannelClosed, SessionState
from face_duel.errors import ChannelError
from face_duel.services.capture import CaptureLoop, SignatureExtractor
from face_duel.services.game import GameSession, Presenter
from face_duel.services.roster import RosterProjection

FACE = [0.1, 0.2, 0.3, 0.4]


class EventsExhausted(Exception):
    """Raised by the fake channel when no queued events remain."""


@dataclass
class FakeExtractor(SignatureExtractor):
    """Extractor returning scripted results; None means no face."""

    results: list[Sequence[float] | Exception | None] = field(
        default_factory=lambda: [FACE]
    )
    calls: int = 0
    on_extract: Callable[[], None] | None = None

    async def extract(self) -> Sequence[float] | None:
        index = min(self.calls, len(self.results) - 1)
        self.calls += 1
        if self.on_extract is not None:
            self.on_extract()
        result = self.results[index]
        if isinstance(result, Exception):
            raise result
        return result


@dataclass
class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@dataclass
class FakeSessionChannel(SessionChannel):
    """In-memory channel that records sent messages."""

    sent: list[OutboundMessage] = field(default_factory=list)
    events: list[ChannelEvent] = field(default_factory=list)
    open_error: ChannelError | None = None
    opened: int = 0
    connected: bool = False

    @property
    def is_open(self) -> bool:
        return self.connected

    @property
    def generation(self) -> int:
        return self.opened

    async def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        if self.connected:
            return
        self.opened += 1
        self.connected = True

    async def send(self, message: OutboundMessage) -> bool:
        if not self.connected:
            return False
        self.sent.append(message)
        return True

    async def next_event(self) -> ChannelEvent:
        if not self.events:
            raise EventsExhausted
        return self.events.pop(0)

    async def close(self) -> None:
        self.drop()

    def drop(self) -> ChannelClosed | None:
        """Simulate the connection ending and queue its close event."""
        if not self.connected:
            return None
        self.connected = False
        closed = ChannelClosed(generation=self.opened)
        self.events.append(closed)
        return closed

    def sent_types(self) -> list[str]:
        return [message.type for message in self.sent]


@dataclass
class QueueSessionChannel(FakeSessionChannel):
    """Channel whose events arrive while the consumer is waiting."""

    inbox: asyncio.Queue[ChannelEvent] = field(default_factory=asyncio.Queue)

    def push(self, event: ChannelEvent) -> None:
        self.inbox.put_nowait(event)

    async def next_event(self) -> ChannelEvent:
        return await self.inbox.get()

    def drop(self) -> ChannelClosed | None:
        if not self.connected:
            return None
        self.connected = False
        closed = ChannelClosed(generation=self.opened)
        self.push(closed)
        return closed


@dataclass
class RecordingPresenter(Presenter):
    """Presenter that records every side effect."""

    lines: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    rosters: list[list[RosterEntry]] = field(default_factory=list)
    states: list[SessionState] = field(default_factory=list)
    distress_count: int = 0

    def log(self, text: str) -> None:
        self.lines.append(text)

    def notice(self, text: str) -> None:
        self.notices.append(text)

    def show_roster(self, entries: list[RosterEntry]) -> None:
        self.rosters.append(entries)

    def distress(self) -> None:
        self.distress_count += 1

    def state_changed(self, state: SessionState) -> None:
        self.states.append(state)


@dataclass
class FakeRosterClient(RosterClient):
    """Roster client returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: [{"name": "Alice", "hp": 100}, {"name": "Bob", "hp": 90}]
    )
    error: Exception | None = None
    before_return: Callable[[], None] | None = None
    calls: int = 0

    async def fetch_players(self) -> object:
        self.calls += 1
        if self.before_return is not None:
            self.before_return()
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        arbiter_ws_url="ws://arbiter.test:8765",
        arbiter_api_url="http://arbiter.test:8080/",
        _env_file=None,
    )


@pytest.fixture
def channel() -> FakeSessionChannel:
    return FakeSessionChannel()


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def roster(presenter: RecordingPresenter) -> RosterProjection:
    return RosterProjection(listeners=[presenter.show_roster])


@pytest.fixture
def game_session(
    channel: FakeSessionChannel,
    extractor: FakeExtractor,
    sleep: RecordingSleep,
    roster: RosterProjection,
    presenter: RecordingPresenter,
) -> GameSession:
    return GameSession(
        channel=channel,
        capture_loop=CaptureLoop(extractor, sleep=sleep),
        roster=roster,
        presenter=presenter,
        join_budget=CaptureBudget(max_attempts=10, retry_delay=0.3),
        shoot_budget=CaptureBudget(max_attempts=1, retry_delay=0.3),
    )
