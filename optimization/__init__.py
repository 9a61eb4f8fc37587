"""Search and optimization engine for flight slot scheduling."""

from optimization.predicates import PredicateRegistry, UnknownPredicateError
from optimization.csp import CSPEngine, CSPConstraint
from optimization.compiler import ConstraintCompiler, ConstraintParseError, parse_constraint
from optimization.cargo_loading import CargoLoadingProblem
from optimization.heuristics import HeuristicOptimizer
from optimization.scheduler import AirlineScheduler, optimize_schedule

__all__ = [
    "PredicateRegistry",
    "UnknownPredicateError",
    "CSPEngine",
    "CSPConstraint",
    "ConstraintCompiler",
    "ConstraintParseError",
    "parse_constraint",
    "CargoLoadingProblem",
    "HeuristicOptimizer",
    "AirlineScheduler",
    "optimize_schedule",
]
