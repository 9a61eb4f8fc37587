"""Unit tests for data models."""

import pytest
from datetime import datetime, timedelta
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from models import (
    Cargo,
    CargoPriority,
    CargoStrategy,
    ConstraintSpec,
    ConstraintType,
    Crew,
    Flight,
    OptimizationPreference,
    ScheduleResult,
    SchedulingRules,
    SearchStatistics,
    Settings,
)


class TestFlight:
    """Tests for Flight model."""

    def test_capacity(self, single_flight):
        """Remaining capacity and utilization follow the loaded payload."""
        single_flight.current_payload = 3000
        assert single_flight.remaining_capacity == 2000
        assert single_flight.capacity_utilization == 60.0

    def test_zero_capacity_utilization(self):
        f = Flight(id="F0", origin="JFK", destination="LAX",
                   departure_time="08:00", aircraft="B737")
        assert f.capacity_utilization == 0.0

    def test_invalid_departure_rejected(self):
        with pytest.raises(ValueError):
            Flight(id="F0", origin="JFK", destination="LAX",
                   departure_time="25:00", aircraft="B737")

    def test_serves(self, single_flight):
        assert single_flight.serves("JFK")
        assert single_flight.serves("LAX")
        assert not single_flight.serves("ORD")

    def test_from_dict_camel_case(self):
        """Records from the scheduling front end use camelCase keys."""
        f = Flight.from_dict({
            "id": "FL001",
            "origin": "JFK",
            "destination": "LAX",
            "departureTime": "08:00",
            "arrivalTime": "11:30",
            "aircraft": "B737",
            "crew": "C1",
            "maxPayload": 5000,
            "hasCooledCargo": True,
        })
        assert f.departure_time == "08:00"
        assert f.arrival_time == "11:30"
        assert f.max_payload == 5000.0
        assert f.has_cooled_cargo
        assert f.assigned_cargo == []

    def test_to_dict(self, single_flight):
        data = single_flight.to_dict()
        assert data["departureTime"] == "08:00"
        assert data["maxPayload"] == 5000
        assert data["score"] is None

    def test_equality_by_id(self, single_flight):
        other = Flight(id="F1", origin="ORD", destination="MIA",
                       departure_time="12:00", aircraft="A320")
        assert single_flight == other
        assert len({single_flight, other}) == 1


class TestCargo:
    """Tests for Cargo model."""

    def test_priority_parsing(self):
        """Priority labels are accepted in any case."""
        assert Cargo(id="C", weight=1, priority="high").priority is CargoPriority.HIGH
        assert CargoPriority.parse("Low") is CargoPriority.LOW

    def test_unknown_priority(self):
        with pytest.raises(ValueError):
            Cargo(id="C", weight=1, priority="Urgent")

    def test_priority_rank(self):
        ranks = [p.rank for p in (CargoPriority.HIGH, CargoPriority.MEDIUM, CargoPriority.LOW)]
        assert ranks == sorted(ranks)

    def test_negative_weight(self):
        with pytest.raises(ValueError):
            Cargo(id="C", weight=-1)

    def test_special_handling_flags(self):
        assert Cargo(id="P", weight=1, type="Perishable").needs_cooling
        assert Cargo(id="H", weight=1, type="Hazardous").is_hazardous
        assert not Cargo(id="G", weight=1).needs_cooling

    def test_round_trip_record(self):
        record = {"id": "CG001", "weight": 2500, "priority": "High",
                  "type": "Perishable", "assignedFlight": "FL001"}
        item = Cargo.from_dict(record)
        assert item.is_assigned
        assert item.to_dict()["assignedFlight"] == "FL001"
        assert item.to_dict()["priority"] == "High"


class TestCrew:
    """Tests for Crew model."""

    def test_hours_rested(self):
        crew = Crew(id="C1", last_duty_end=datetime(2024, 1, 1, 20, 0))
        assert crew.hours_rested(datetime(2024, 1, 2, 8, 0)) == 12.0

    def test_no_previous_duty(self):
        assert Crew(id="C1").hours_rested(datetime(2024, 1, 2, 8, 0)) is None


class TestConstraintSpec:
    """Tests for constraint records."""

    def test_unknown_type_maps_to_other(self):
        assert ConstraintType.parse("Weather") is ConstraintType.OTHER
        assert ConstraintType.parse("aircraft") is ConstraintType.AIRCRAFT

    def test_from_dict(self):
        spec = ConstraintSpec.from_dict({
            "id": "CS001", "type": "Aircraft",
            "description": "B737 requires 45min turnaround time",
        })
        assert spec.type is ConstraintType.AIRCRAFT
        assert spec.to_dict()["type"] == "Aircraft"

    def test_null_description(self):
        spec = ConstraintSpec.from_dict({"id": "CS001", "type": "Aircraft", "description": None})
        assert spec.description == ""


class TestSchedulingRules:
    """Tests for SchedulingRules."""

    def test_defaults(self, default_rules):
        assert default_rules.min_turnaround_minutes == 45
        assert default_rules.min_separation_minutes == 15
        assert default_rules.duty_per_flight_hours == 3.0
        assert default_rules.max_duty_hours == 8.0
        assert default_rules.max_window_operations == 2
        assert default_rules.flight_duration_minutes == 180
        assert default_rules.departure_window_minutes == 120
        assert default_rules.slot_step_minutes == 30

    def test_custom_rules(self):
        rules = SchedulingRules(min_turnaround_time=timedelta(minutes=30))
        assert rules.min_turnaround_minutes == 30

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            SchedulingRules(slot_step=timedelta(0))


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.optimization_preference is OptimizationPreference.FUEL
        assert settings.max_backtracking_iterations == 1000
        assert settings.cargo_strategy is CargoStrategy.GREEDY

    def test_from_dict_camel_case(self):
        """Form-only keys such as heuristicWeight are ignored."""
        settings = Settings.from_dict({
            "optimizationPreference": "balanced",
            "maxBacktrackingIterations": 250,
            "heuristicWeight": 0.7,
            "constraintStrictness": "high",
        })
        assert settings.optimization_preference is OptimizationPreference.BALANCED
        assert settings.max_backtracking_iterations == 250

    def test_invalid_preference(self):
        with pytest.raises(ValueError, match="optimization preference"):
            Settings(optimization_preference="speed")

    def test_invalid_iterations(self):
        with pytest.raises(ValueError):
            Settings(max_backtracking_iterations=0)

    @pytest.mark.parametrize("value", [None, True, "many", 2.5, -3])
    def test_non_integer_iterations(self, value):
        """Budgets that are not whole numbers raise ValueError, not TypeError."""
        with pytest.raises(ValueError, match="max_backtracking_iterations"):
            Settings.from_dict({"maxBacktrackingIterations": value})

    def test_numeric_iteration_strings(self):
        assert Settings(max_backtracking_iterations="250").max_backtracking_iterations == 250
        assert Settings(max_backtracking_iterations=300.0).max_backtracking_iterations == 300

    @pytest.mark.parametrize("preference,fuel,cargo,weights", [
        ("fuel", True, False, (0.8, 0.2)),
        ("capacity", False, True, (0.2, 0.8)),
        ("balanced", True, True, (0.5, 0.5)),
        ("time", True, False, (0.5, 0.5)),
    ])
    def test_preference_behaviour(self, preference, fuel, cargo, weights):
        settings = Settings(optimization_preference=preference)
        assert settings.runs_fuel_heuristic is fuel
        assert settings.runs_cargo_heuristic is cargo
        assert settings.score_weights == weights


class TestScheduleResult:
    """Tests for ScheduleResult."""

    def test_counters_and_lookup(self, single_flight):
        stats = SearchStatistics(iterations=7, backtracks=2)
        result = ScheduleResult(
            success=True, message="ok", flights=[single_flight],
            cargo=[Cargo(id="C", weight=1)], statistics=stats
        )
        assert result.iterations == 7
        assert result.backtracks == 2
        assert result.get_flight("F1") is single_flight
        assert result.get_flight("missing") is None
        assert [c.id for c in result.unassigned_cargo] == ["C"]
