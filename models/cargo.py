"""Cargo data model."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class CargoPriority(Enum):
    """Shipping priority, ordered High before Medium before Low."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort key: lower ranks are loaded first."""
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: Any) -> 'CargoPriority':
        """Accept an enum member or its label in any case."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).strip().lower() == member.value.lower():
                return member
        raise ValueError(f"Unknown cargo priority {value!r}")


_PRIORITY_RANK = {
    CargoPriority.HIGH: 0,
    CargoPriority.MEDIUM: 1,
    CargoPriority.LOW: 2,
}

# Cargo type tags with special handling requirements
PERISHABLE = "Perishable"
HAZARDOUS = "Hazardous"


@dataclass
class Cargo:
    """
    Represents a cargo shipment waiting to be loaded.

    Attributes:
        id: Unique cargo identifier
        weight: Shipment weight (same unit as flight payload)
        priority: Shipping priority
        type: Type tag (e.g., "Perishable", "Hazardous", "Electronics")
        assigned_flight: Flight carrying the shipment, if any
        efficiency: Payload utilization of the carrying flight at load time (%)
    """
    id: str
    weight: float
    priority: CargoPriority = CargoPriority.MEDIUM
    type: str = "General"
    assigned_flight: Optional[str] = None
    efficiency: Optional[float] = None

    def __post_init__(self) -> None:
        self.priority = CargoPriority.parse(self.priority)
        if self.weight < 0:
            raise ValueError(f"Cargo {self.id} has negative weight {self.weight}")

    @property
    def is_assigned(self) -> bool:
        """Check if the shipment is loaded on a flight."""
        return self.assigned_flight is not None

    @property
    def needs_cooling(self) -> bool:
        return self.type == PERISHABLE

    @property
    def is_hazardous(self) -> bool:
        return self.type == HAZARDOUS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Cargo':
        """Build a cargo item from a record using snake_case or camelCase keys."""
        assigned = data.get("assigned_flight", data.get("assignedFlight"))
        return cls(
            id=data["id"],
            weight=float(data["weight"]),
            priority=CargoPriority.parse(data.get("priority", "Medium")),
            type=data.get("type", "General"),
            assigned_flight=assigned,
            efficiency=data.get("efficiency"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the collaborator-facing record format."""
        return {
            "id": self.id,
            "weight": self.weight,
            "priority": self.priority.value,
            "type": self.type,
            "assignedFlight": self.assigned_flight,
            "efficiency": self.efficiency,
        }

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Cargo):
            return self.id == other.id
        return False

    def __repr__(self) -> str:
        return (
            f"Cargo({self.id}: {self.weight:g} {self.priority.value} "
            f"{self.type} -> {self.assigned_flight or 'unassigned'})"
        )
