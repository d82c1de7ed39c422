"""Periodic roster pull used as a backstop for missed push events."""

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from face_duel.adapters.roster_client import RosterClient
from face_duel.domain.messages import decode_roster
from face_duel.services.capture import Sleep
from face_duel.services.roster import RosterProjection

_logger = logging.getLogger(__name__)


@dataclass
class RosterReconciler:
    """Best-effort roster refresh independent of the session channel."""

    client: RosterClient
    roster: RosterProjection
    interval_seconds: float = 4.0
    sleep: Sleep = field(default=asyncio.sleep)

    async def reconcile_once(self) -> bool:
        """Pull the roster and apply it unless a newer snapshot arrived meanwhile."""
        started_at = self.roster.revision
        try:
            payload = await self.client.fetch_players()
            entries = decode_roster(payload)
        # ValueError covers undecodable bodies, invalid JSON and bad roster shapes.
        except (httpx.HTTPError, ValueError) as exc:
            _logger.debug("Roster pull failed: %s", exc)
            return False
        applied = self.roster.replace_if_current(entries, started_at)
        if not applied:
            _logger.debug("Roster pull discarded: newer snapshot already applied")
        return applied

    async def run(self) -> None:
        """Reconcile forever at a fixed interval."""
        while True:
            try:
                await self.reconcile_once()
            except Exception:
                _logger.exception("Roster pull crashed; retrying next interval")
            await self.sleep(self.interval_seconds)
