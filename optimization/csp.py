"""Backtracking constraint-satisfaction engine."""

from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from itertools import combinations
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple
import logging
import time

import networkx as nx

from models.result import SearchOutcome, SearchStatistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CSPConstraint:
    """
    A predicate over a (possibly partial) assignment.

    The predicate receives a read-only mapping of variable id to value
    holding only assigned variables, so it must treat missing scope
    variables as not yet decided.

    Attributes:
        name: Human readable identifier
        scope: Variables the predicate depends on
        predicate: Returns True when the assignment satisfies the constraint
    """
    name: str
    scope: FrozenSet[str]
    predicate: Callable[[Mapping], bool]

    def involves(self, variable: str) -> bool:
        return variable in self.scope

    def is_satisfied(self, assignment: Mapping) -> bool:
        return bool(self.predicate(assignment))

    def __repr__(self) -> str:
        return f"CSPConstraint({self.name}, scope={len(self.scope)})"


class AssignmentView(Mapping):
    """Read-only mapping over the engine's slot array; unset slots are absent."""

    def __init__(self, variables: List[str], index: Dict[str, int], slots: List[Optional[str]]):
        self._variables = variables
        self._index = index
        self._slots = slots

    def __getitem__(self, variable: str) -> str:
        idx = self._index.get(variable)
        if idx is None or self._slots[idx] is None:
            raise KeyError(variable)
        return self._slots[idx]

    def __iter__(self) -> Iterator[str]:
        for idx, value in enumerate(self._slots):
            if value is not None:
                yield self._variables[idx]

    def __len__(self) -> int:
        return sum(1 for value in self._slots if value is not None)


class CSPEngine:
    """
    Backtracking search with MRV variable ordering and LCV value ordering.

    The partial assignment lives in an index-addressed slot array.
    Consistency and conflict checks bind slots tentatively and restore
    them afterwards instead of copying the assignment.

    A constraint graph (networkx) links every pair of variables that share
    a constraint; edges carry the indices of the shared constraints so that
    conflict counting only visits relevant variable pairs.
    """

    def __init__(
        self,
        variables: Sequence[str],
        domains: Dict[str, List[str]],
        constraints: List[CSPConstraint]
    ):
        self.variables: List[str] = list(variables)
        if len(set(self.variables)) != len(self.variables):
            raise ValueError("CSP variables must be unique")

        missing = [v for v in self.variables if v not in domains]
        if missing:
            raise ValueError(f"No domain given for variables: {', '.join(missing)}")

        self.domains: Dict[str, List[str]] = {
            v: list(domains[v]) for v in self.variables
        }
        self.constraints: List[CSPConstraint] = list(constraints)

        self._index: Dict[str, int] = {v: i for i, v in enumerate(self.variables)}
        self._slots: List[Optional[str]] = [None] * len(self.variables)
        self._view = AssignmentView(self.variables, self._index, self._slots)

        # Constraint indices touching each variable
        self._constraints_by_variable: Dict[str, List[int]] = {
            v: [] for v in self.variables
        }
        for ci, constraint in enumerate(self.constraints):
            unknown = constraint.scope.difference(self._index)
            if unknown:
                raise ValueError(
                    f"Constraint {constraint.name} references unknown "
                    f"variables: {', '.join(sorted(unknown))}"
                )
            for variable in constraint.scope:
                self._constraints_by_variable[variable].append(ci)

        self.constraint_graph = self._build_constraint_graph()
        self.stats = SearchStatistics()

    def _build_constraint_graph(self) -> nx.Graph:
        """Connect variables that appear together in a constraint scope."""
        graph = nx.Graph()
        graph.add_nodes_from(self.variables)

        for ci, constraint in enumerate(self.constraints):
            for a, b in combinations(sorted(constraint.scope), 2):
                if graph.has_edge(a, b):
                    graph[a][b]["constraints"].append(ci)
                else:
                    graph.add_edge(a, b, constraints=[ci])

        return graph

    # ------------------------------------------------------------------
    # Assignment state
    # ------------------------------------------------------------------

    @property
    def assignment(self) -> Dict[str, str]:
        """Copy of the current (partial) assignment."""
        return dict(self._view)

    def is_assigned(self, variable: str) -> bool:
        return self._slots[self._index[variable]] is not None

    def assign(self, variable: str, value: str) -> None:
        self._slots[self._index[variable]] = value

    def unassign(self, variable: str) -> None:
        self._slots[self._index[variable]] = None

    def is_complete(self) -> bool:
        """True when every variable holds a value."""
        return all(value is not None for value in self._slots)

    def reset(self) -> None:
        """Clear the assignment and statistics."""
        for idx in range(len(self._slots)):
            self._slots[idx] = None
        self.stats = SearchStatistics()

    @contextmanager
    def _tentative(self, *bindings: Tuple[str, str]) -> Iterator[Mapping]:
        """Bind slots for the duration of the block, then restore them."""
        saved = []
        for variable, value in bindings:
            idx = self._index[variable]
            saved.append((idx, self._slots[idx]))
            self._slots[idx] = value
        try:
            yield self._view
        finally:
            for idx, previous in reversed(saved):
                self._slots[idx] = previous

    # ------------------------------------------------------------------
    # Consistency and heuristics
    # ------------------------------------------------------------------

    def neighbors(self, variable: str) -> List[str]:
        """Variables sharing at least one constraint with ``variable``, in variable order."""
        adjacent = set(self.constraint_graph.neighbors(variable))
        return [v for v in self.variables if v in adjacent]

    def shared_constraints(self, a: str, b: str) -> List[CSPConstraint]:
        """Constraints whose scope holds both variables."""
        data = self.constraint_graph.get_edge_data(a, b, default={})
        return [self.constraints[ci] for ci in data.get("constraints", [])]

    def is_consistent(self, variable: str, value: str) -> bool:
        """
        Check ``variable = value`` against the current partial assignment.

        Only constraints whose scope includes ``variable`` are evaluated.
        """
        with self._tentative((variable, value)) as assignment:
            for ci in self._constraints_by_variable[variable]:
                if not self.constraints[ci].is_satisfied(assignment):
                    return False
        return True

    def domain_size(self, variable: str) -> int:
        """Number of domain values consistent with the current assignment."""
        return sum(
            1 for value in self.domains[variable]
            if self.is_consistent(variable, value)
        )

    def select_unassigned_variable(self) -> Optional[str]:
        """
        Minimum Remaining Values: the unassigned variable with the fewest
        consistent values. Ties go to the earliest variable.
        """
        best_variable = None
        min_domain_size = float('inf')

        for variable in self.variables:
            if self.is_assigned(variable):
                continue
            size = self.domain_size(variable)
            if size < min_domain_size:
                min_domain_size = size
                best_variable = variable

        return best_variable

    def count_conflicts(self, variable: str, value: str) -> int:
        """
        Count (other variable, other value) pairs ruled out by ``variable = value``.

        A pair is ruled out when any constraint covering both variables
        fails with both bound on top of the current assignment.
        """
        conflicts = 0

        for other in self.neighbors(variable):
            if self.is_assigned(other):
                continue
            shared = self.shared_constraints(variable, other)

            for other_value in self.domains[other]:
                with self._tentative((variable, value), (other, other_value)) as assignment:
                    if any(not c.is_satisfied(assignment) for c in shared):
                        conflicts += 1

        return conflicts

    def order_domain_values(self, variable: str) -> List[str]:
        """
        Least Constraining Value: domain values sorted ascending by the
        conflicts they cause. Equal counts keep domain order.
        """
        scored = [
            (self.count_conflicts(variable, value), position, value)
            for position, value in enumerate(self.domains[variable])
        ]
        scored.sort()
        return [value for _, _, value in scored]

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def backtracking_search(self, max_iterations: int = 1000) -> Optional[Dict[str, str]]:
        """
        Find a complete assignment satisfying every constraint.

        Each search node visited counts as one iteration. When the next node
        would exceed ``max_iterations`` the search stops.

        Returns:
            The assignment, or None when the search space is exhausted or the
            iteration budget ran out (see ``stats.outcome``)
        """
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

        self.reset()
        self.stats.max_iterations = max_iterations
        start_time = time.time()

        logger.info(
            f"Starting backtracking search: {len(self.variables)} variables, "
            f"{len(self.constraints)} constraints, budget {max_iterations}"
        )

        solution = self._backtrack(max_iterations)

        if solution is not None:
            self.stats.outcome = SearchOutcome.SOLVED
        elif self.stats.outcome is not SearchOutcome.ITERATION_LIMIT:
            self.stats.outcome = SearchOutcome.EXHAUSTED

        self.stats.solve_time_seconds = time.time() - start_time

        logger.info(
            f"Search {self.stats.outcome.value}: "
            f"iterations={self.stats.iterations}, backtracks={self.stats.backtracks}"
        )
        return solution

    def _backtrack(self, max_iterations: int) -> Optional[Dict[str, str]]:
        """Recursive depth-first search over the slot array."""
        if self.stats.iterations >= max_iterations:
            self.stats.outcome = SearchOutcome.ITERATION_LIMIT
            return None
        self.stats.iterations += 1

        if self.is_complete():
            return {v: self._slots[self._index[v]] for v in self.variables}

        variable = self.select_unassigned_variable()

        for value in self.order_domain_values(variable):
            if not self.is_consistent(variable, value):
                continue

            self.assign(variable, value)
            result = self._backtrack(max_iterations)
            if result is not None:
                return result

            self.unassign(variable)
            if self.stats.outcome is SearchOutcome.ITERATION_LIMIT:
                return None

            self.stats.backtracks += 1
            logger.debug(f"Backtrack on {variable}={value}")

        return None

    def __repr__(self) -> str:
        return (
            f"CSPEngine(variables={len(self.variables)}, "
            f"constraints={len(self.constraints)}, "
            f"edges={self.constraint_graph.number_of_edges()})"
        )
