"""Read-only projection of the arbiter's player roster."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from face_duel.domain.roster import RosterEntry

RosterListener = Callable[[list[RosterEntry]], None]


@dataclass
class RosterProjection:
    """Latest roster snapshot, replaced wholesale from arbiter data.

    ``revision`` increases on every change so that slower pulls can detect
    that a newer snapshot was applied while they were in flight.
    """

    listeners: list[RosterListener] = field(default_factory=list)
    _entries: list[RosterEntry] = field(default_factory=list)
    _revision: int = 0

    @property
    def entries(self) -> list[RosterEntry]:
        """Return a copy of the current snapshot."""
        return list(self._entries)

    @property
    def revision(self) -> int:
        return self._revision

    def get(self, name: str) -> RosterEntry | None:
        """Return the entry for a player name, if present."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def replace(self, entries: Iterable[RosterEntry]) -> None:
        """Overwrite the whole snapshot."""
        self._entries = list(entries)
        self._changed()

    def replace_if_current(
        self, entries: Iterable[RosterEntry], revision: int
    ) -> bool:
        """Replace only if nothing changed since ``revision`` was observed."""
        if self._revision != revision:
            return False
        self.replace(entries)
        return True

    def set_hp(self, name: str, hp: int) -> None:
        """Apply an arbiter-reported health value for one player."""
        updated = RosterEntry(name=name, hp=hp)
        for index, entry in enumerate(self._entries):
            if entry.name == name:
                self._entries[index] = updated
                break
        else:
            self._entries.append(updated)
        self._changed()

    def _changed(self) -> None:
        self._revision += 1
        snapshot = self.entries
        for listener in self.listeners:
            listener(snapshot)


def format_roster(entries: list[RosterEntry]) -> str:
    """Render a roster as ``name(hp), name(hp)`` or ``(none)``."""
    if not entries:
        return "(none)"
    return ", ".join(f"{entry.name}({entry.hp})" for entry in entries)
