"""Translate declarative constraints into CSP constraints."""

from collections import defaultdict
from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Sequence, Union
import logging
import re

from models import (
    AircraftRule,
    AirportRule,
    ConstraintSpec,
    ConstraintType,
    CrewRule,
    Flight,
    SchedulingRules,
)
from models.clock import MINUTES_PER_DAY, from_minutes, is_time_in_window, parse_window, to_minutes
from optimization.csp import CSPConstraint

logger = logging.getLogger(__name__)

Rule = Union[AircraftRule, CrewRule, AirportRule]

_WINDOW_PATTERN = re.compile(r"(\d{1,2}:\d{2})-(\d{1,2}:\d{2})")

SEPARATION_CONSTRAINT = "minimum_separation"


class ConstraintParseError(ValueError):
    """A constraint description is missing a required operand."""

    def __init__(self, spec: ConstraintSpec, reason: str):
        super().__init__(
            f"Cannot parse {spec.type.value} constraint {spec.id} "
            f"({spec.description!r}): {reason}"
        )
        self.spec = spec


def _token(spec: ConstraintSpec, position: int, what: str) -> str:
    tokens = (spec.description or "").split()
    if len(tokens) <= position:
        raise ConstraintParseError(spec, f"expected {what} as word {position + 1}")
    return tokens[position]


def parse_constraint(spec: ConstraintSpec) -> Optional[Rule]:
    """
    Extract a typed rule from a constraint description.

    Aircraft descriptions start with the aircraft tag, crew descriptions
    carry the crew id as the second word ("Crew C1 ..."), and airport
    descriptions start with the airport code and may contain an
    ``HH:MM-HH:MM`` window.

    Returns:
        The parsed rule, or None for constraint types that are not compiled
    """
    if spec.type is ConstraintType.AIRCRAFT:
        return AircraftRule(spec.id, _token(spec, 0, "an aircraft type"))

    if spec.type is ConstraintType.CREW:
        return CrewRule(spec.id, _token(spec, 1, "a crew id"))

    if spec.type is ConstraintType.AIRPORT:
        airport = _token(spec, 0, "an airport code")
        match = _WINDOW_PATTERN.search(spec.description or "")
        if not match:
            return AirportRule(spec.id, airport)
        try:
            window = parse_window(f"{match.group(1)}-{match.group(2)}")
        except ValueError as e:
            raise ConstraintParseError(spec, str(e)) from e
        return AirportRule(spec.id, airport, window)

    return None


def _gaps_at_least(times: List[int], minimum: int) -> bool:
    """Every consecutive pair of sorted times is at least ``minimum`` apart."""
    return all(later - earlier >= minimum for earlier, later in zip(times, times[1:]))


class ConstraintCompiler:
    """
    Builds CSP constraints and candidate departure slots for a flight set.

    Compiled predicates close over the parsed operands and the flight ids
    in scope; they never look at description text.
    """

    def __init__(
        self,
        flights: Sequence[Flight],
        rules: Optional[SchedulingRules] = None
    ):
        self.flights = list(flights)
        self.rules = rules or SchedulingRules()

    def flights_by_aircraft(self, aircraft: str) -> List[str]:
        return [f.id for f in self.flights if f.aircraft == aircraft]

    def flights_by_crew(self, crew: str) -> List[str]:
        return [f.id for f in self.flights if f.crew == crew]

    def flights_by_airport(self, airport: str) -> List[str]:
        return [f.id for f in self.flights if f.serves(airport)]

    def compile(self, specs: Iterable[ConstraintSpec]) -> List[CSPConstraint]:
        """
        Compile every supported constraint plus the global separation rule.

        Raises:
            ConstraintParseError: If a description lacks a required operand
        """
        constraints: List[CSPConstraint] = []

        for spec in specs:
            rule = parse_constraint(spec)
            if rule is None:
                logger.debug(f"Skipping {spec.type.value} constraint {spec.id}")
                continue
            constraint = self.compile_rule(rule)
            logger.debug(
                f"Compiled {spec.id} into {constraint.name} "
                f"over {sorted(constraint.scope)}"
            )
            constraints.append(constraint)

        constraints.append(self.separation_constraint())

        logger.info(f"Compiled {len(constraints)} constraints")
        return constraints

    def compile_rule(self, rule: Rule) -> CSPConstraint:
        if isinstance(rule, AircraftRule):
            return self.aircraft_constraint(rule)
        if isinstance(rule, CrewRule):
            return self.crew_constraint(rule)
        if isinstance(rule, AirportRule):
            return self.airport_constraint(rule)
        raise TypeError(f"Unsupported rule {rule!r}")

    def aircraft_constraint(self, rule: AircraftRule) -> CSPConstraint:
        """Consecutive departures of one aircraft type need the minimum turnaround."""
        scope = self.flights_by_aircraft(rule.aircraft)
        turnaround = self.rules.min_turnaround_minutes

        def predicate(assignment: Mapping) -> bool:
            times = sorted(to_minutes(assignment[f]) for f in scope if f in assignment)
            return _gaps_at_least(times, turnaround)

        return CSPConstraint(
            name=f"{rule.constraint_id}:turnaround:{rule.aircraft}",
            scope=frozenset(scope),
            predicate=predicate
        )

    def crew_constraint(self, rule: CrewRule) -> CSPConstraint:
        """Estimated duty of one crew stays within the daily maximum."""
        scope = self.flights_by_crew(rule.crew)
        duty_per_flight = self.rules.duty_per_flight_hours
        max_duty = self.rules.max_duty_hours

        def predicate(assignment: Mapping) -> bool:
            assigned = sum(1 for f in scope if f in assignment)
            return assigned * duty_per_flight <= max_duty

        return CSPConstraint(
            name=f"{rule.constraint_id}:duty:{rule.crew}",
            scope=frozenset(scope),
            predicate=predicate
        )

    def airport_constraint(self, rule: AirportRule) -> CSPConstraint:
        """At most N operations of an airport's flights inside its restricted window."""
        scope = self.flights_by_airport(rule.airport)
        window = rule.window
        max_operations = self.rules.max_window_operations

        def predicate(assignment: Mapping) -> bool:
            if window is None:
                return True
            start, end = window
            in_window = sum(
                1 for f in scope
                if f in assignment and is_time_in_window(assignment[f], start, end)
            )
            return in_window <= max_operations

        return CSPConstraint(
            name=f"{rule.constraint_id}:slots:{rule.airport}",
            scope=frozenset(scope),
            predicate=predicate
        )

    def separation_constraint(self) -> CSPConstraint:
        """
        Departures and estimated arrivals at each airport stay apart.

        Arrivals are estimated as departure plus the placeholder flight
        duration, wrapping past midnight.
        """
        flights = list(self.flights)
        duration = self.rules.flight_duration_minutes
        min_separation = self.rules.min_separation_minutes

        def predicate(assignment: Mapping) -> bool:
            operations: Dict[str, List[int]] = defaultdict(list)
            for flight in flights:
                value = assignment.get(flight.id)
                if value is None:
                    continue
                departure = to_minutes(value)
                operations[flight.origin].append(departure)
                operations[flight.destination].append(
                    (departure + duration) % MINUTES_PER_DAY
                )

            return all(
                _gaps_at_least(sorted(times), min_separation)
                for times in operations.values()
            )

        return CSPConstraint(
            name=SEPARATION_CONSTRAINT,
            scope=frozenset(f.id for f in flights),
            predicate=predicate
        )

    def generate_domain(self, flight: Flight) -> List[str]:
        """
        Candidate departures around the scheduled time.

        With the default rules: nine values from -2h to +2h in 30 minute
        steps, wrapped into one day.
        """
        step = self.rules.slot_step_minutes
        steps = self.rules.departure_window_minutes // step
        base = flight.departure_minutes
        return [from_minutes(base + k * step) for k in range(-steps, steps + 1)]

    def build_domains(self) -> Dict[str, List[str]]:
        return {f.id: self.generate_domain(f) for f in self.flights}
