"""HTTP client for the arbiter's roster endpoint."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class RosterClient(Protocol):
    """Interface for stateless roster reads."""

    async def fetch_players(self) -> object:
        """Return the raw roster payload."""


@dataclass
class HttpxRosterClient(RosterClient):
    """HTTPX-backed roster client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 5.0

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float = 5.0) -> "HttpxRosterClient":
        """Create a roster client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_players(self) -> object:
        """Fetch the full player list."""
        url = f"{self.base_url}/api/players"
        response = await self.http_client.get(url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
