"""Search statistics and scheduling result models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from models.cargo import Cargo
from models.flight import Flight


class SearchOutcome(Enum):
    """How a backtracking search ended."""
    NOT_STARTED = "not_started"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    ITERATION_LIMIT = "iteration_limit"


@dataclass
class SearchStatistics:
    """Counters collected during one backtracking search."""
    iterations: int = 0
    backtracks: int = 0
    outcome: SearchOutcome = SearchOutcome.NOT_STARTED
    max_iterations: Optional[int] = None
    solve_time_seconds: float = 0.0

    @property
    def solved(self) -> bool:
        return self.outcome is SearchOutcome.SOLVED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "outcome": self.outcome.value,
            "maxIterations": self.max_iterations,
            "solveTimeSeconds": self.solve_time_seconds,
        }


@dataclass
class ScheduleResult:
    """
    Outcome of one scheduling run.

    On success ``flights`` and ``cargo`` are the annotated working copies.
    On failure they are the caller's original, unmodified collections.
    """
    success: bool
    message: str
    flights: List[Flight]
    cargo: List[Cargo]
    statistics: SearchStatistics
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def iterations(self) -> int:
        return self.statistics.iterations

    @property
    def backtracks(self) -> int:
        return self.statistics.backtracks

    @property
    def unassigned_cargo(self) -> List[Cargo]:
        return [c for c in self.cargo if not c.is_assigned]

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        for flight in self.flights:
            if flight.id == flight_id:
                return flight
        return None

    def to_dict(self) -> dict:
        """Serialize result to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "success": self.success,
            "message": self.message,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "statistics": self.statistics.to_dict(),
            "flights": [f.to_dict() for f in self.flights],
            "cargo": [c.to_dict() for c in self.cargo],
        }

    def print_summary(self) -> None:
        """Print a formatted summary of the result."""
        print("\n" + "=" * 60)
        print("                  OPTIMIZED SCHEDULE" if self.success
              else "                  NO VALID SCHEDULE")
        print("=" * 60)
        print(self.message)
        print(f"Iterations: {self.iterations}")
        print(f"Backtracks: {self.backtracks}")
        print(f"Solve Time: {self.statistics.solve_time_seconds:.2f} seconds")

        if not self.success:
            print("=" * 60)
            return

        print("\nFLIGHTS:")
        print("-" * 60)
        print(f"{'ID':<6} {'Route':<8} {'Dep':<6} {'Arr':<6} {'Payload':>14} {'Score':>6}")
        print("-" * 60)
        for f in sorted(self.flights, key=lambda x: (x.departure_minutes, x.id)):
            payload = f"{f.current_payload:g}/{f.max_payload:g}"
            score = f"{f.score:.1f}" if f.score is not None else "-"
            print(
                f"{f.id:<6} {f.origin + '-' + f.destination:<8} "
                f"{f.departure_time:<6} {f.arrival_time or '':<6} "
                f"{payload:>14} {score:>6}"
            )

        print("\nCARGO:")
        print("-" * 60)
        for c in self.cargo:
            eff = f"{c.efficiency:.1f}%" if c.efficiency is not None else "-"
            print(
                f"  {c.id:<6} {c.priority.value:<7} {c.weight:>8g} "
                f"-> {c.assigned_flight or 'unassigned':<10} {eff}"
            )
        print("=" * 60)

    def __repr__(self) -> str:
        return (
            f"ScheduleResult(success={self.success}, "
            f"flights={len(self.flights)}, "
            f"iterations={self.iterations}, backtracks={self.backtracks})"
        )
