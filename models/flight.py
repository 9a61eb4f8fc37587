"""Flight data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.clock import to_minutes


@dataclass
class Flight:
    """
    Represents a single scheduled flight leg.

    Times are ``HH:MM`` strings within one rolling 24-hour cycle.

    Attributes:
        id: Unique flight identifier
        origin: Departure airport code
        destination: Arrival airport code
        departure_time: Scheduled departure (``HH:MM``)
        aircraft: Aircraft type tag (e.g., "B737")
        arrival_time: Scheduled arrival (``HH:MM``), recomputed after solving
        crew: Identifier of the crew operating the flight
        max_payload: Cargo capacity
        current_payload: Cargo weight currently loaded
        assigned_cargo: Identifiers of cargo loaded on this flight
        has_cooled_cargo: Hold can carry perishable goods
        can_carry_hazardous: Certified for hazardous goods
    """
    id: str
    origin: str
    destination: str
    departure_time: str
    aircraft: str
    arrival_time: Optional[str] = None
    crew: Optional[str] = None
    max_payload: float = 0.0
    current_payload: float = 0.0
    assigned_cargo: List[str] = field(default_factory=list)
    has_cooled_cargo: bool = False
    can_carry_hazardous: bool = False

    # Derived by the heuristic optimizer
    cruise_altitude: Optional[int] = None
    cruise_speed: Optional[float] = None
    fuel_savings: Optional[float] = None
    fuel_efficiency_score: Optional[float] = None
    weather_penalty: Optional[float] = None
    suggested_time_adjustment: Optional[int] = None
    potential_fuel_savings: Optional[float] = None
    score: Optional[float] = None

    def __post_init__(self) -> None:
        # Fail early on malformed times rather than deep inside the search
        to_minutes(self.departure_time)
        if self.arrival_time is not None:
            to_minutes(self.arrival_time)

    @property
    def departure_minutes(self) -> int:
        """Departure as minutes since midnight."""
        return to_minutes(self.departure_time)

    @property
    def remaining_capacity(self) -> float:
        """Payload still available on this flight."""
        return self.max_payload - self.current_payload

    @property
    def capacity_utilization(self) -> float:
        """Loaded payload as a percentage of capacity."""
        if self.max_payload <= 0:
            return 0.0
        return self.current_payload / self.max_payload * 100

    def serves(self, airport: str) -> bool:
        """Check if the flight departs from or arrives at an airport."""
        return airport in (self.origin, self.destination)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Flight':
        """Build a flight from a record using snake_case or camelCase keys."""
        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            id=data["id"],
            origin=data["origin"],
            destination=data["destination"],
            departure_time=pick("departure_time", "departureTime"),
            aircraft=data["aircraft"],
            arrival_time=pick("arrival_time", "arrivalTime"),
            crew=data.get("crew"),
            max_payload=float(pick("max_payload", "maxPayload", 0.0)),
            current_payload=float(pick("current_payload", "currentPayload", 0.0)),
            assigned_cargo=list(pick("assigned_cargo", "assignedCargo", None) or []),
            has_cooled_cargo=bool(pick("has_cooled_cargo", "hasCooledCargo", False)),
            can_carry_hazardous=bool(
                pick("can_carry_hazardous", "canCarryHazardous", False)
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the collaborator-facing record format."""
        return {
            "id": self.id,
            "origin": self.origin,
            "destination": self.destination,
            "departureTime": self.departure_time,
            "arrivalTime": self.arrival_time,
            "aircraft": self.aircraft,
            "crew": self.crew,
            "maxPayload": self.max_payload,
            "currentPayload": self.current_payload,
            "assignedCargo": list(self.assigned_cargo),
            "hasCooledCargo": self.has_cooled_cargo,
            "canCarryHazardous": self.can_carry_hazardous,
            "cruiseAltitude": self.cruise_altitude,
            "cruiseSpeed": self.cruise_speed,
            "fuelSavings": self.fuel_savings,
            "fuelEfficiencyScore": self.fuel_efficiency_score,
            "weatherPenalty": self.weather_penalty,
            "suggestedTimeAdjustment": self.suggested_time_adjustment,
            "potentialFuelSavings": self.potential_fuel_savings,
            "score": self.score,
        }

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Flight):
            return self.id == other.id
        return False

    def __repr__(self) -> str:
        return (
            f"Flight({self.id}: {self.origin}→{self.destination} "
            f"{self.departure_time}-{self.arrival_time or '??:??'} {self.aircraft})"
        )
