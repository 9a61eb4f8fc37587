"""Airport slot model."""

from dataclasses import dataclass, field
from typing import List

from models.clock import to_minutes


@dataclass
class Slot:
    """A block of airport capacity starting at ``time`` (``HH:MM``)."""
    time: str
    duration_minutes: int
    is_occupied: bool = False

    @property
    def start(self) -> int:
        return to_minutes(self.time)

    @property
    def end(self) -> int:
        return self.start + self.duration_minutes


@dataclass
class Airport:
    """An airport and its published slots."""
    code: str
    slots: List[Slot] = field(default_factory=list)

    def occupied_slots(self) -> List[Slot]:
        return [s for s in self.slots if s.is_occupied]

    def __repr__(self) -> str:
        return f"Airport({self.code}, slots={len(self.slots)})"
