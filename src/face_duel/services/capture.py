"""Bounded-retry signature capture."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from face_duel.domain.capture import NotFound, Signature

_logger = logging.getLogger(__name__)


class SignatureExtractor(Protocol):
    """Interface for turning the current camera frame into a face descriptor."""

    async def extract(self) -> Sequence[float] | None:
        """Return a descriptor for the detected face, or None if no face."""


Sleep = Callable[[float], Awaitable[None]]


@dataclass
class CaptureLoop:
    """Invoke the extractor until a face is found or the budget runs out."""

    extractor: SignatureExtractor
    sleep: Sleep = field(default=asyncio.sleep)

    async def capture(
        self, max_attempts: int, retry_delay: float
    ) -> Signature | NotFound:
        """Capture a fresh signature with at most ``max_attempts`` tries."""
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        for attempt in range(1, max_attempts + 1):
            signature = await self._attempt(attempt, max_attempts)
            if signature is not None:
                return signature
            if attempt < max_attempts:
                await self.sleep(retry_delay)
        _logger.info("No face detected after %s attempts", max_attempts)
        return NotFound(attempts=max_attempts)

    async def _attempt(self, attempt: int, max_attempts: int) -> Signature | None:
        try:
            vector = await self.extractor.extract()
        except Exception as exc:
            _logger.warning(
                "Signature extraction failed (attempt %s/%s): %s",
                attempt,
                max_attempts,
                exc,
            )
            return None
        if vector is None:
            return None
        return Signature.from_vector(vector)
