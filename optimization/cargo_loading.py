"""Exact cargo loading as a binary program."""

from typing import Dict, List, Optional, Tuple
import logging

import pulp

from models import Cargo, CargoPriority, Flight

logger = logging.getLogger(__name__)

# Flight scoring shared with the greedy heuristic
UTILIZATION_WEIGHT = 10.0
ROUTE_SUITABILITY_BONUS = 5.0
SPECIAL_HANDLING_BONUS = 3.0

# Objective multipliers so that a higher priority always wins a contested hold
PRIORITY_WEIGHTS: Dict[CargoPriority, float] = {
    CargoPriority.HIGH: 100.0,
    CargoPriority.MEDIUM: 10.0,
    CargoPriority.LOW: 1.0,
}


def is_route_suitable(cargo: Cargo, flight: Flight) -> bool:
    """Whether the flight's route suits the shipment. Cargo has no routing yet."""
    return True


def special_handling_bonus(cargo: Cargo, flight: Flight) -> float:
    """Bonus when the flight offers the handling the shipment needs."""
    if cargo.needs_cooling and flight.has_cooled_cargo:
        return SPECIAL_HANDLING_BONUS
    if cargo.is_hazardous and flight.can_carry_hazardous:
        return SPECIAL_HANDLING_BONUS
    return 0.0


class CargoLoadingProblem:
    """
    Assigns every shipment to at most one flight without exceeding payload.

    Maximises the priority-weighted sum of each shipment's share of the
    flight's capacity plus route and special-handling bonuses, i.e. the
    same factors the greedy heuristic scores, solved jointly.
    """

    def __init__(self, flights: List[Flight], cargo: List[Cargo]):
        self.flights = {f.id: f for f in flights}
        self.cargo = {c.id: c for c in cargo}

        self.model: Optional[pulp.LpProblem] = None
        self.variables: Dict[Tuple[str, str], pulp.LpVariable] = {}

    def assignment_value(self, cargo: Cargo, flight: Flight) -> float:
        """Objective coefficient for loading ``cargo`` on ``flight``."""
        value = UTILIZATION_WEIGHT * cargo.weight / flight.max_payload
        if is_route_suitable(cargo, flight):
            value += ROUTE_SUITABILITY_BONUS
        value += special_handling_bonus(cargo, flight)
        return PRIORITY_WEIGHTS[cargo.priority] * value

    def build_model(self) -> pulp.LpProblem:
        """Build the binary loading model."""
        self.model = pulp.LpProblem("CargoLoading", pulp.LpMaximize)
        self.variables = {}

        # Only pairs where the shipment could fit an empty hold; names are
        # positional since pulp rewrites characters in ids
        for i, (cargo_id, item) in enumerate(self.cargo.items()):
            for j, (flight_id, flight) in enumerate(self.flights.items()):
                if flight.max_payload <= 0 or item.weight > flight.max_payload:
                    continue
                self.variables[(cargo_id, flight_id)] = pulp.LpVariable(
                    f"x_{i}_{j}", cat=pulp.LpBinary
                )

        self.model += pulp.lpSum(
            self.assignment_value(self.cargo[c], self.flights[f]) * var
            for (c, f), var in self.variables.items()
        ), "LoadingValue"

        # Each shipment on at most one flight
        for i, cargo_id in enumerate(self.cargo):
            candidates = [
                var for (c, _), var in self.variables.items() if c == cargo_id
            ]
            if candidates:
                self.model += pulp.lpSum(candidates) <= 1, f"SingleFlight_{i}"

        # Payload capacity
        for j, (flight_id, flight) in enumerate(self.flights.items()):
            loads = [
                self.cargo[c].weight * var
                for (c, f), var in self.variables.items() if f == flight_id
            ]
            if loads:
                self.model += pulp.lpSum(loads) <= flight.max_payload, f"Capacity_{j}"

        return self.model

    def solve(self) -> Dict[str, str]:
        """
        Solve the loading model with CBC.

        Returns:
            Mapping of cargo id to flight id for loaded shipments

        Raises:
            RuntimeError: If CBC does not report an optimal solution
            pulp.PulpError: If the solver cannot be run
        """
        if self.model is None:
            self.build_model()

        if not self.variables:
            return {}

        self.model.solve(pulp.PULP_CBC_CMD(msg=0))

        if self.model.status != pulp.LpStatusOptimal:
            status_name = pulp.LpStatus[self.model.status]
            raise RuntimeError(
                f"Cargo loading did not find optimal solution. Status: {status_name}"
            )

        loaded = {}
        for (cargo_id, flight_id), var in self.variables.items():
            value = pulp.value(var)
            if value is not None and value > 0.5:
                loaded[cargo_id] = flight_id

        logger.debug(f"Exact loading placed {len(loaded)}/{len(self.cargo)} shipments")
        return loaded

    def __repr__(self) -> str:
        return (
            f"CargoLoadingProblem(flights={len(self.flights)}, "
            f"cargo={len(self.cargo)}, variables={len(self.variables)})"
        )
