"""Named boolean predicates over scheduling objects.

A declarative layer for authoring constraints; the backtracking search
does not call into it.
"""

from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Union
import logging

from models import Airport, Cargo, Crew, Flight
from models.clock import to_minutes

logger = logging.getLogger(__name__)

Predicate = Callable[..., bool]


class UnknownPredicateError(LookupError):
    """Raised when evaluating a predicate that was never defined."""

    def __init__(self, name: str):
        super().__init__(f"Unknown predicate: {name}")
        self.name = name


class PredicateRegistry:
    """Mapping of predicate names to evaluator functions."""

    def __init__(self):
        self._predicates: Dict[str, Predicate] = {}

    @classmethod
    def with_airline_predicates(cls) -> 'PredicateRegistry':
        """Registry pre-populated with the airline scheduling predicates."""
        registry = cls()
        registry.define("has_capacity_for", has_capacity_for)
        registry.define("has_available_slot", has_available_slot)
        registry.define("has_rested_crew", has_rested_crew)
        return registry

    def define(self, name: str, evaluator: Predicate) -> None:
        """Register (or replace) a predicate."""
        if not callable(evaluator):
            raise TypeError(f"Evaluator for predicate {name!r} is not callable")
        if name in self._predicates:
            logger.debug(f"Redefining predicate {name}")
        self._predicates[name] = evaluator

    def evaluate(self, name: str, *args: Any) -> bool:
        """
        Evaluate a predicate.

        Raises:
            UnknownPredicateError: If ``name`` is not registered
        """
        try:
            evaluator = self._predicates[name]
        except KeyError:
            raise UnknownPredicateError(name) from None
        return bool(evaluator(*args))

    @property
    def names(self) -> List[str]:
        return sorted(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        return f"PredicateRegistry({', '.join(self.names)})"


def has_capacity_for(flight: Flight, cargo: Cargo) -> bool:
    """The flight's payload capacity can hold the shipment."""
    return flight.max_payload >= cargo.weight


def has_available_slot(airport: Airport, time: str, duration_minutes: int) -> bool:
    """
    No occupied slot at the airport overlaps ``[time, time + duration)``.

    A zero-length request only checks the instant ``time``.
    """
    start = to_minutes(time)
    end = start + max(duration_minutes, 0)

    for slot in airport.occupied_slots():
        if slot.start <= start < slot.end:
            return False
        if start < slot.start < end:
            return False
    return True


def flight_departure(flight: Flight, after: datetime, on_date: Optional[date] = None) -> datetime:
    """
    Resolve a flight's ``HH:MM`` departure to a datetime.

    With ``on_date`` the departure falls on that day; otherwise it is the
    first occurrence of the departure time after ``after``.
    """
    minutes = to_minutes(flight.departure_time)
    day = on_date or after.date()
    midnight = datetime.combine(day, datetime.min.time(), tzinfo=after.tzinfo)
    departure = midnight + timedelta(minutes=minutes)
    if on_date is None and departure <= after:
        departure += timedelta(days=1)
    return departure


def has_rested_crew(
    crew: Crew,
    departure: Union[datetime, Flight],
    on_date: Optional[date] = None
) -> bool:
    """
    Enough time has passed since the crew's last duty ended.

    ``departure`` is either a datetime or the crew's next flight. A flight
    departs on ``on_date`` when given, otherwise at the next occurrence of
    its departure time after the last duty.
    """
    if crew.last_duty_end is None:
        return True
    if isinstance(departure, Flight):
        departure = flight_departure(departure, crew.last_duty_end, on_date)
    return crew.hours_rested(departure) >= crew.required_rest_hours
