"""Crew data model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Crew:
    """
    Represents a crew and its most recent duty.

    Attributes:
        id: Unique crew identifier (matches ``Flight.crew``)
        name: Crew name
        base: Home base airport code
        last_duty_end: End of the most recent duty period, if any
        required_rest_hours: Minimum rest between duties
    """
    id: str
    name: str = ""
    base: Optional[str] = None
    last_duty_end: Optional[datetime] = None
    required_rest_hours: float = 10.0

    def hours_rested(self, until: datetime) -> Optional[float]:
        """Hours between the end of the last duty and ``until``."""
        if self.last_duty_end is None:
            return None
        return (until - self.last_duty_end).total_seconds() / 3600

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Crew):
            return self.id == other.id
        return False

    def __repr__(self) -> str:
        return f"Crew({self.id}: {self.name}, Base={self.base})"
