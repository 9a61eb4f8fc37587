"""Heuristic post-optimization of a solved schedule."""

from typing import Dict, List, Optional, Tuple
import logging

import pulp

from models import Cargo, CargoStrategy, Flight
from models.clock import hour_of
from optimization.cargo_loading import (
    ROUTE_SUITABILITY_BONUS,
    UTILIZATION_WEIGHT,
    CargoLoadingProblem,
    is_route_suitable,
    special_handling_bonus,
)

logger = logging.getLogger(__name__)

# Great-circle distances (miles) for known directed routes
AIRPORT_DISTANCES: Dict[Tuple[str, str], float] = {
    ("JFK", "LAX"): 2475,
    ("LAX", "ORD"): 1745,
    ("ORD", "JFK"): 740,
}
DEFAULT_DISTANCE = 1000

# (aircraft tag, cruise altitude ft, cruise Mach), first substring match wins
CRUISE_PROFILES: List[Tuple[str, int, float]] = [
    ("B737", 35000, 0.78),
    ("A320", 36000, 0.76),
    ("B777", 40000, 0.84),
]

# Gallons per passenger-mile
FUEL_BURN_RATES: List[Tuple[str, float]] = [
    ("B737", 0.032),
    ("A320", 0.031),
    ("B777", 0.028),
    ("A350", 0.027),
]
DEFAULT_BURN_RATE = 0.032
TYPICAL_PASSENGERS = 150
CRUISE_OPTIMIZATION_FACTOR = 0.95

# Fuel penalty by time of day
WEATHER_PENALTIES: Dict[str, float] = {
    "morning": 0.05,
    "afternoon": 0.02,
    "evening": 0.08,
    "night": 0.03,
}
DEPARTURE_SHIFTS = (-1, 0, 1, 2)


def calculate_distance(origin: str, destination: str) -> float:
    return AIRPORT_DISTANCES.get((origin, destination), DEFAULT_DISTANCE)


def time_of_day(hour: int) -> str:
    """Weather bucket for a departure hour."""
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def _burn_rate(aircraft: str) -> float:
    for tag, rate in FUEL_BURN_RATES:
        if tag in aircraft:
            return rate
    return DEFAULT_BURN_RATE


class HeuristicOptimizer:
    """
    Refines a solved schedule.

    Works in place on the flights and cargo it is given; the caller is
    expected to pass working copies it owns.
    """

    def __init__(
        self,
        flights: List[Flight],
        cargo: List[Cargo],
        cargo_strategy: CargoStrategy = CargoStrategy.GREEDY
    ):
        self.flights = flights
        self.cargo = cargo
        self.cargo_strategy = cargo_strategy

    # ------------------------------------------------------------------
    # Fuel
    # ------------------------------------------------------------------

    def optimize_for_fuel(self) -> List[Flight]:
        """
        Score weather and fuel efficiency for every flight.

        Longer flights are handled first since they have the most to gain.
        """
        ordered = sorted(
            self.flights,
            key=lambda f: calculate_distance(f.origin, f.destination),
            reverse=True
        )

        for flight in ordered:
            self.optimize_departure_for_weather(flight)
            self.adjust_for_optimal_fuel_consumption(flight)

        logger.info(f"Fuel heuristics applied to {len(ordered)} flights")
        return self.flights

    def adjust_cruise_parameters(self, flight: Flight) -> bool:
        """Set cruise altitude and speed from the aircraft profile table."""
        for tag, altitude, mach in CRUISE_PROFILES:
            if tag in flight.aircraft:
                flight.cruise_altitude = altitude
                flight.cruise_speed = mach
                return True

        logger.debug(f"No cruise profile for {flight.aircraft} on {flight.id}")
        return False

    def adjust_for_optimal_fuel_consumption(self, flight: Flight) -> None:
        """Apply the cruise profile and record fuel savings against the baseline."""
        self.adjust_cruise_parameters(flight)

        baseline = self.calculate_base_fuel_consumption(flight)
        optimized = self.calculate_optimized_fuel_consumption(flight)
        flight.fuel_savings = baseline - optimized
        flight.fuel_efficiency_score = (1 - optimized / baseline) * 100

    def optimize_departure_for_weather(self, flight: Flight) -> None:
        """
        Record the weather penalty and suggest a departure shift when one
        of the nearby hours falls in a strictly better bucket.
        """
        hour = hour_of(flight.departure_time)
        flight.weather_penalty = WEATHER_PENALTIES[time_of_day(hour)]

        best_shift = 0
        min_penalty = flight.weather_penalty
        for shift in DEPARTURE_SHIFTS:
            penalty = WEATHER_PENALTIES[time_of_day((hour + shift) % 24)]
            if penalty < min_penalty:
                min_penalty = penalty
                best_shift = shift

        if best_shift != 0:
            flight.suggested_time_adjustment = best_shift
            flight.potential_fuel_savings = (
                (flight.weather_penalty - min_penalty)
                * self.calculate_base_fuel_consumption(flight)
            )
        else:
            flight.suggested_time_adjustment = None
            flight.potential_fuel_savings = None

    def calculate_base_fuel_consumption(self, flight: Flight) -> float:
        distance = calculate_distance(flight.origin, flight.destination)
        return distance * _burn_rate(flight.aircraft) * TYPICAL_PASSENGERS

    def calculate_optimized_fuel_consumption(self, flight: Flight) -> float:
        base = self.calculate_base_fuel_consumption(flight)
        weather_factor = 1 + (flight.weather_penalty or 0)
        return base * CRUISE_OPTIMIZATION_FACTOR * weather_factor

    # ------------------------------------------------------------------
    # Cargo
    # ------------------------------------------------------------------

    def optimize_cargo_distribution(self) -> List[Cargo]:
        """
        Rebuild every cargo assignment from scratch.

        Shipments that fit on no flight stay unassigned.
        """
        prioritized = self.prioritize_cargo()
        self.clear_cargo_assignments()

        if self.cargo_strategy is CargoStrategy.EXACT:
            try:
                self._load_exact(prioritized)
                return self.cargo
            except (RuntimeError, pulp.PulpError) as e:
                logger.warning(f"Exact cargo loading failed, using greedy: {e}")
                self.clear_cargo_assignments()

        for item in prioritized:
            flight = self.find_best_flight_for_cargo(item)
            if flight is None:
                logger.debug(f"No flight can take {item.id} ({item.weight:g})")
                continue
            self.assign_cargo_to_flight(item, flight)

        self._log_cargo_summary()
        return self.cargo

    def _load_exact(self, prioritized: List[Cargo]) -> None:
        plan = CargoLoadingProblem(self.flights, self.cargo).solve()
        flights = {f.id: f for f in self.flights}
        for item in prioritized:
            if item.id in plan:
                self.assign_cargo_to_flight(item, flights[plan[item.id]])
        self._log_cargo_summary()

    def _log_cargo_summary(self) -> None:
        loaded = sum(1 for c in self.cargo if c.is_assigned)
        logger.info(
            f"Cargo heuristics ({self.cargo_strategy.value}) loaded "
            f"{loaded}/{len(self.cargo)} shipments"
        )

    def prioritize_cargo(self) -> List[Cargo]:
        """High before Medium before Low, heaviest first within a priority."""
        return sorted(self.cargo, key=lambda c: (c.priority.rank, -c.weight))

    def clear_cargo_assignments(self) -> None:
        for flight in self.flights:
            flight.assigned_cargo = []
            flight.current_payload = 0.0

        for item in self.cargo:
            item.assigned_flight = None
            item.efficiency = None

    def score_flight_for_cargo(self, item: Cargo, flight: Flight) -> Optional[float]:
        """
        Desirability of loading ``item`` on ``flight``.

        Returns None when the flight cannot take the shipment.
        """
        if flight.max_payload <= 0 or flight.remaining_capacity < item.weight:
            return None

        utilization_after = (flight.current_payload + item.weight) / flight.max_payload
        score = utilization_after * UTILIZATION_WEIGHT

        if is_route_suitable(item, flight):
            score += ROUTE_SUITABILITY_BONUS

        score += special_handling_bonus(item, flight)
        return score

    def find_best_flight_for_cargo(self, item: Cargo) -> Optional[Flight]:
        best_flight = None
        best_score = float('-inf')

        for flight in self.flights:
            score = self.score_flight_for_cargo(item, flight)
            if score is not None and score > best_score:
                best_score = score
                best_flight = flight

        return best_flight

    def assign_cargo_to_flight(self, item: Cargo, flight: Flight) -> None:
        item.assigned_flight = flight.id
        flight.assigned_cargo.append(item.id)
        flight.current_payload += item.weight
        item.efficiency = round(flight.current_payload / flight.max_payload * 100, 1)
        logger.debug(f"Loaded {item.id} on {flight.id} ({item.efficiency}%)")
