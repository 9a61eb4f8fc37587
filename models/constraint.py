"""Declarative constraint model and parsed rule objects."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ConstraintType(Enum):
    """Constraint categories supplied by the constraint editor."""
    AIRCRAFT = "Aircraft"
    CREW = "Crew"
    AIRPORT = "Airport"
    CARGO = "Cargo"
    TIME = "Time"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: Any) -> 'ConstraintType':
        """Map a type tag to a member; unknown tags become OTHER."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).strip().lower() == member.value.lower():
                return member
        return cls.OTHER


@dataclass(frozen=True)
class ConstraintSpec:
    """
    A scheduling constraint as authored by a user.

    Operands are embedded in the free-text description, e.g.
    "B737 requires 45min turnaround time" or
    "JFK has limited slots between 18:00-22:00".
    """
    id: str
    type: ConstraintType
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConstraintSpec':
        return cls(
            id=data["id"],
            type=ConstraintType.parse(data.get("type", "Other")),
            description=data.get("description") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class AircraftRule:
    """Turnaround rule for every flight flown by one aircraft type."""
    constraint_id: str
    aircraft: str


@dataclass(frozen=True)
class CrewRule:
    """Daily duty limit for one crew."""
    constraint_id: str
    crew: str


@dataclass(frozen=True)
class AirportRule:
    """
    Slot-capacity rule for one airport.

    Without a window the rule places no restriction.
    """
    constraint_id: str
    airport: str
    window: Optional[Tuple[str, str]] = None
