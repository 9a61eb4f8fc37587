"""Scheduling orchestrator: CSP search followed by heuristic refinement."""

from collections.abc import Mapping
from typing import Dict, List, Optional, Sequence, Union
import copy
import logging

from models import (
    Cargo,
    ConstraintSpec,
    Flight,
    ScheduleResult,
    SchedulingRules,
    SearchOutcome,
    SearchStatistics,
    Settings,
)
from models.clock import add_minutes
from optimization.compiler import ConstraintCompiler
from optimization.csp import CSPEngine
from optimization.heuristics import HeuristicOptimizer
from optimization.predicates import PredicateRegistry

logger = logging.getLogger(__name__)

DEFAULT_COMPONENT_SCORE = 50.0


class AirlineScheduler:
    """
    Main scheduling orchestrator.

    Formulates the slot assignment as a CSP, solves it with bounded
    backtracking, applies the solved departures and then runs the
    heuristics selected by the optimization preference.

    The caller's flights and cargo are never modified. Each run works on
    its own deep copies, which are handed over in the result on success.
    """

    def __init__(
        self,
        flights: Sequence[Flight],
        cargo: Sequence[Cargo],
        constraints: Sequence[ConstraintSpec],
        settings: Optional[Settings] = None,
        rules: Optional[SchedulingRules] = None
    ):
        self.flights = list(flights)
        self.cargo = list(cargo)
        self.constraints = list(constraints)
        self.settings = settings or Settings()
        self.rules = rules or SchedulingRules()

        # Declarative predicates for constraint authoring and result checks
        self.predicates = PredicateRegistry.with_airline_predicates()

        self.engine: Optional[CSPEngine] = None

    def formulate_csp(self, flights: List[Flight]) -> CSPEngine:
        """One variable per flight, candidate departures as domains."""
        compiler = ConstraintCompiler(flights, self.rules)
        return CSPEngine(
            variables=[f.id for f in flights],
            domains=compiler.build_domains(),
            constraints=compiler.compile(self.constraints)
        )

    def optimize_schedule(self) -> ScheduleResult:
        """
        Run the full pipeline.

        Returns:
            A successful result with annotated copies, or a failed result
            carrying the original flights and cargo plus search statistics
        """
        flights = copy.deepcopy(self.flights)
        cargo = copy.deepcopy(self.cargo)

        logger.info(
            f"Scheduling {len(flights)} flights and {len(cargo)} cargo items "
            f"(preference={self.settings.optimization_preference.value})"
        )

        # Step 1: Formulate and solve the CSP
        self.engine = self.formulate_csp(flights)
        solution = self.engine.backtracking_search(
            self.settings.max_backtracking_iterations
        )
        stats = self.engine.stats

        if solution is None:
            message = self._failure_message(stats)
            logger.warning(message)
            return ScheduleResult(
                success=False,
                message=message,
                flights=self.flights,
                cargo=self.cargo,
                statistics=stats
            )

        # Step 2: Apply solved departures
        self.apply_csp_solution(flights, solution)

        # Step 3: Heuristics and scores
        self.apply_heuristic_optimizations(flights, cargo)

        return ScheduleResult(
            success=True,
            message="Schedule successfully optimized",
            flights=flights,
            cargo=cargo,
            statistics=stats
        )

    def _failure_message(self, stats: SearchStatistics) -> str:
        if stats.outcome is SearchOutcome.ITERATION_LIMIT:
            return (
                f"Could not find a valid schedule within {stats.max_iterations} "
                "iterations. Try relaxing constraints or raising the iteration limit."
            )
        return "Could not find a valid schedule. Try relaxing constraints."

    def apply_csp_solution(self, flights: List[Flight], solution: Dict[str, str]) -> None:
        """Set departures from the solution and re-estimate arrivals."""
        duration = self.rules.flight_duration_minutes
        for flight in flights:
            if flight.id not in solution:
                continue
            if flight.departure_time != solution[flight.id]:
                logger.debug(
                    f"{flight.id}: {flight.departure_time} -> {solution[flight.id]}"
                )
            flight.departure_time = solution[flight.id]
            flight.arrival_time = add_minutes(flight.departure_time, duration)

    def apply_heuristic_optimizations(self, flights: List[Flight], cargo: List[Cargo]) -> None:
        """Run the preferred heuristics, then score every flight."""
        optimizer = HeuristicOptimizer(flights, cargo, self.settings.cargo_strategy)

        if self.settings.runs_fuel_heuristic:
            optimizer.optimize_for_fuel()
        if self.settings.runs_cargo_heuristic:
            optimizer.optimize_cargo_distribution()

        fuel_weight, capacity_weight = self.settings.score_weights
        for flight in flights:
            flight.score = self.composite_score(flight, fuel_weight, capacity_weight)

    @staticmethod
    def composite_score(flight: Flight, fuel_weight: float, capacity_weight: float) -> float:
        """
        Weighted average of fuel efficiency and capacity utilization.

        Either component defaults to 50 when it has not been computed.
        """
        fuel_score = flight.fuel_efficiency_score
        if fuel_score is None:
            fuel_score = DEFAULT_COMPONENT_SCORE

        capacity_score = (
            flight.capacity_utilization if flight.current_payload
            else DEFAULT_COMPONENT_SCORE
        )

        return round(fuel_score * fuel_weight + capacity_score * capacity_weight, 1)

    def verify(self, result: ScheduleResult) -> Dict[str, bool]:
        """
        Re-check a successful result.

        Returns dict of check name -> satisfied, one entry per compiled
        constraint plus a cargo capacity check.
        """
        if not result.success:
            return {}

        compiler = ConstraintCompiler(result.flights, self.rules)
        assignment = {f.id: f.departure_time for f in result.flights}

        checks = {
            constraint.name: constraint.is_satisfied(assignment)
            for constraint in compiler.compile(self.constraints)
        }

        cargo_by_id = {c.id: c for c in result.cargo}
        checks["cargo_capacity"] = all(
            flight.current_payload <= flight.max_payload and all(
                self.predicates.evaluate("has_capacity_for", flight, cargo_by_id[cid])
                for cid in flight.assigned_cargo if cid in cargo_by_id
            )
            for flight in result.flights
        )
        return checks


def optimize_schedule(
    flights: Sequence[Flight],
    cargo: Sequence[Cargo],
    constraints: Sequence[ConstraintSpec],
    settings: Union[Settings, Mapping, None] = None,
    rules: Optional[SchedulingRules] = None
) -> ScheduleResult:
    """
    Service entry point for callers that want a result object in all cases.

    Invalid settings and unparseable constraint descriptions are reported
    as a failed result. Anything else propagates.
    """
    try:
        if isinstance(settings, Mapping):
            settings = Settings.from_dict(settings)
        scheduler = AirlineScheduler(flights, cargo, constraints, settings, rules)
        return scheduler.optimize_schedule()
    except ValueError as e:
        logger.error(f"Optimization failed: {e}")
        return ScheduleResult(
            success=False,
            message=str(e),
            flights=list(flights),
            cargo=list(cargo),
            statistics=SearchStatistics()
        )
