"""Domain models for signature capture."""

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Signature:
    """Face descriptor produced for a single registration or shot."""

    values: tuple[float, ...]

    @classmethod
    def from_vector(cls, vector: Iterable[float]) -> "Signature | None":
        """Build a signature, or return None for an empty or non-finite vector."""
        values = tuple(float(value) for value in vector)
        if not values or not all(math.isfinite(value) for value in values):
            return None
        return cls(values=values)

    def as_list(self) -> list[float]:
        """Return the values in wire order."""
        return list(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class NotFound:
    """No face was detected within the capture budget."""

    attempts: int
