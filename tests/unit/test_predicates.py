"""Unit tests for the predicate registry."""

import pytest
from datetime import date, datetime
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from models import Airport, Cargo, Crew, Flight, Slot
from optimization.predicates import (
    PredicateRegistry,
    UnknownPredicateError,
    has_available_slot,
    has_capacity_for,
    has_rested_crew,
)


class TestPredicateRegistry:
    """Tests for defining and evaluating predicates."""

    def test_airline_predicates_registered(self):
        registry = PredicateRegistry.with_airline_predicates()
        assert registry.names == ["has_available_slot", "has_capacity_for", "has_rested_crew"]
        assert "has_capacity_for" in registry
        assert len(registry) == 3

    def test_define_and_evaluate(self):
        registry = PredicateRegistry()
        registry.define("is_long_haul", lambda miles: miles > 2000)
        assert registry.evaluate("is_long_haul", 2475)
        assert not registry.evaluate("is_long_haul", 740)

    def test_redefine_replaces(self):
        registry = PredicateRegistry()
        registry.define("always", lambda: False)
        registry.define("always", lambda: True)
        assert registry.evaluate("always")
        assert len(registry) == 1

    def test_unknown_predicate(self):
        """Evaluating an undefined name raises a lookup error naming it."""
        registry = PredicateRegistry()
        with pytest.raises(UnknownPredicateError, match="Unknown predicate: missing") as exc:
            registry.evaluate("missing")
        assert exc.value.name == "missing"
        assert isinstance(exc.value, LookupError)

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            PredicateRegistry().define("bad", 42)


class TestCapacity:
    """Tests for has_capacity_for."""

    def test_exact_fit(self, single_flight):
        assert has_capacity_for(single_flight, Cargo(id="C", weight=5000))

    def test_too_heavy(self, single_flight):
        assert not has_capacity_for(single_flight, Cargo(id="C", weight=5001))


class TestAvailableSlot:
    """Tests for has_available_slot."""

    @pytest.fixture
    def airport(self):
        """JFK with 10:00-11:00 occupied and 12:00-13:00 free."""
        return Airport(code="JFK", slots=[
            Slot(time="10:00", duration_minutes=60, is_occupied=True),
            Slot(time="12:00", duration_minutes=60),
        ])

    def test_instant_inside_occupied_slot(self, airport):
        assert not has_available_slot(airport, "10:30", 0)

    def test_slot_end_is_exclusive(self, airport):
        assert has_available_slot(airport, "11:00", 0)

    def test_overlapping_request(self, airport):
        """A request running into an occupied slot is rejected."""
        assert not has_available_slot(airport, "09:30", 60)

    def test_adjacent_request(self, airport):
        assert has_available_slot(airport, "09:00", 60)

    def test_free_slots_ignored(self, airport):
        assert has_available_slot(airport, "12:15", 30)


class TestRestedCrew:
    """Tests for has_rested_crew."""

    def test_rest_boundary(self):
        crew = Crew(id="C1", last_duty_end=datetime(2024, 1, 1, 20, 0))
        assert has_rested_crew(crew, datetime(2024, 1, 2, 6, 0))
        assert not has_rested_crew(crew, datetime(2024, 1, 2, 5, 59))

    def test_no_previous_duty(self):
        assert has_rested_crew(Crew(id="C1"), datetime(2024, 1, 2, 6, 0))

    def test_evaluated_through_registry(self):
        registry = PredicateRegistry.with_airline_predicates()
        crew = Crew(id="C1", last_duty_end=datetime(2024, 1, 1, 20, 0),
                    required_rest_hours=12)
        assert not registry.evaluate("has_rested_crew", crew, datetime(2024, 1, 2, 6, 0))

    def test_next_flight(self):
        """A flight's departure resolves to its next occurrence after the last duty."""
        crew = Crew(id="C1", last_duty_end=datetime(2024, 1, 1, 20, 0))
        early = Flight(id="F1", origin="JFK", destination="LAX",
                       departure_time="05:00", aircraft="B737")
        late = Flight(id="F2", origin="JFK", destination="LAX",
                      departure_time="06:30", aircraft="B737")

        registry = PredicateRegistry.with_airline_predicates()
        assert not registry.evaluate("has_rested_crew", crew, early)
        assert registry.evaluate("has_rested_crew", crew, late)

    def test_flight_on_given_date(self):
        crew = Crew(id="C1", last_duty_end=datetime(2024, 1, 1, 20, 0))
        flight = Flight(id="F1", origin="JFK", destination="LAX",
                        departure_time="05:00", aircraft="B737")
        assert has_rested_crew(crew, flight, date(2024, 1, 3))
        assert not has_rested_crew(crew, flight, date(2024, 1, 2))
