"""Websocket session channel to the arbiter."""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from face_duel.domain.messages import (
    InboundMessage,
    OutboundMessage,
    decode_event,
    encode_message,
)
from face_duel.domain.session import ChannelClosed
from face_duel.errors import ChannelError, MessageDecodeError

_logger = logging.getLogger(__name__)

ChannelEvent = InboundMessage | ChannelClosed


class Connection(Protocol):
    """Minimal view of an open websocket connection."""

    async def send(self, message: str) -> None:
        """Send a text frame."""

    async def close(self) -> None:
        """Close the connection."""

    def __aiter__(self) -> AsyncIterator[str | bytes]:
        """Iterate inbound frames until the connection closes."""


Connector = Callable[[str], Awaitable[Connection]]


class SessionChannel(Protocol):
    """Interface for the persistent connection to the arbiter."""

    @property
    def is_open(self) -> bool:
        """Return True while a connection is established."""

    @property
    def generation(self) -> int:
        """Return the number of connections opened so far."""

    async def open(self) -> None:
        """Open a connection unless one is already open."""

    async def send(self, message: OutboundMessage) -> bool:
        """Send a message; return False if it was dropped."""

    async def next_event(self) -> ChannelEvent:
        """Return the next inbound event in arrival order."""

    async def close(self) -> None:
        """Close the current connection, if any."""


async def _websocket_connect(url: str) -> Connection:
    return await connect(url, open_timeout=10)


@dataclass
class WebsocketSessionChannel:
    """Session channel implemented with the websockets client."""

    url: str
    connector: Connector = _websocket_connect
    _events: asyncio.Queue[ChannelEvent] = field(default_factory=asyncio.Queue)
    _connection: Connection | None = None
    _reader: asyncio.Task[None] | None = None
    _generation: int = 0

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def generation(self) -> int:
        return self._generation

    async def open(self) -> None:
        """Connect and start delivering inbound frames to the event queue."""
        if self._connection is not None:
            return
        try:
            connection = await self.connector(self.url)
        except (OSError, TimeoutError, WebSocketException) as exc:
            raise ChannelError(f"Could not connect to {self.url}: {exc}") from exc
        self._generation += 1
        self._connection = connection
        self._reader = asyncio.create_task(self._read(connection, self._generation))
        _logger.info(
            "Session channel connected: url=%s generation=%s",
            self.url,
            self._generation,
        )

    async def send(self, message: OutboundMessage) -> bool:
        """Send a message, dropping it when the channel is not open."""
        connection = self._connection
        if connection is None:
            _logger.warning("Dropped %s message: channel is closed", message.type)
            return False
        try:
            await connection.send(encode_message(message))
        except ConnectionClosed as exc:
            _logger.warning("Dropped %s message: %s", message.type, exc)
            return False
        return True

    async def next_event(self) -> ChannelEvent:
        """Wait for the next inbound event."""
        return await self._events.get()

    async def close(self) -> None:
        """Close the connection and wait for its close event to be queued."""
        connection = self._connection
        if connection is not None:
            await connection.close()
        if self._reader is not None:
            await self._reader
            self._reader = None

    async def _read(self, connection: Connection, generation: int) -> None:
        reason: str | None = None
        try:
            async for frame in connection:
                self._deliver(frame)
        except (ConnectionClosed, OSError) as exc:
            reason = str(exc)
        finally:
            if self._connection is connection:
                self._connection = None
            _logger.info(
                "Session channel closed: generation=%s reason=%s", generation, reason
            )
            self._events.put_nowait(ChannelClosed(generation=generation, reason=reason))

    def _deliver(self, frame: str | bytes) -> None:
        try:
            event = decode_event(frame)
        except MessageDecodeError as exc:
            _logger.warning("Ignoring malformed frame: %s", exc)
            return
        self._events.put_nowait(event)
