"""Terminal presentation of game activity."""

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TextIO

from face_duel.domain.roster import RosterEntry
from face_duel.domain.session import SessionState
from face_duel.services.game import Presenter
from face_duel.services.roster import format_roster

_DISTRESS = "\x1b[41m  YOU WERE HIT  \x1b[0m"


@dataclass
class ConsolePresenter(Presenter):
    """Presenter that writes timestamped lines to a text stream."""

    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)
    clock: Callable[[], datetime] = datetime.now
    last_roster: str = "(none)"
    can_fire: bool = False

    def log(self, text: str) -> None:
        """Write a timestamped activity line."""
        self._write(self.out, text)

    def notice(self, text: str) -> None:
        """Write a notice to the error stream."""
        self._write(self.err, f"! {text}")

    def show_roster(self, entries: list[RosterEntry]) -> None:
        """Print the roster when it differs from the last one shown."""
        rendered = format_roster(entries)
        if rendered == self.last_roster:
            return
        self.last_roster = rendered
        self._write(self.out, f"Players: {rendered}")

    def distress(self) -> None:
        self._write(self.out, _DISTRESS)

    def state_changed(self, state: SessionState) -> None:
        """Track whether firing is currently allowed."""
        self.can_fire = state is SessionState.CONNECTED_REGISTERED

    def _write(self, stream: TextIO, text: str) -> None:
        timestamp = self.clock().strftime("%H:%M:%S")
        stream.write(f"[{timestamp}] {text}\n")
        stream.flush()
