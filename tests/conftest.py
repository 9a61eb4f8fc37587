"""Pytest fixtures for flight slot scheduling tests."""

import pytest
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import (
    Cargo,
    CargoPriority,
    ConstraintSpec,
    ConstraintType,
    Flight,
    SchedulingRules,
    Settings,
)
from data.generators.sample_schedule import (
    generate_congested_schedule,
    generate_sample_schedule,
)


@pytest.fixture
def shared_aircraft_flights():
    """Two B737 departures 8 minutes apart plus an unrelated A320 flight."""
    return [
        Flight(id="F1", origin="JFK", destination="LAX",
               departure_time="08:00", aircraft="B737", max_payload=5000),
        Flight(id="F2", origin="ORD", destination="MIA",
               departure_time="08:08", aircraft="B737", max_payload=5000),
        Flight(id="F3", origin="SEA", destination="BOS",
               departure_time="12:00", aircraft="A320", max_payload=6000),
    ]


@pytest.fixture
def turnaround_constraint():
    """B737 turnaround rule."""
    return [
        ConstraintSpec("CS001", ConstraintType.AIRCRAFT,
                       "B737 requires 45min turnaround time")
    ]


@pytest.fixture
def overworked_crew_flights():
    """Three flights for crew C1: 9 estimated duty hours, never schedulable."""
    return [
        Flight(id="W1", origin="JFK", destination="LAX", departure_time="06:00",
               aircraft="B737", crew="C1", max_payload=5000),
        Flight(id="W2", origin="ORD", destination="MIA", departure_time="12:00",
               aircraft="A320", crew="C1", max_payload=5000),
        Flight(id="W3", origin="SEA", destination="BOS", departure_time="18:00",
               aircraft="B777", crew="C1", max_payload=5000),
    ]


@pytest.fixture
def crew_constraint():
    """Duty limit for crew C1."""
    return [
        ConstraintSpec("CS002", ConstraintType.CREW,
                       "Crew C1 can only fly 8 hours per day")
    ]


@pytest.fixture
def single_flight():
    """One empty flight with 5000 payload."""
    return Flight(id="F1", origin="JFK", destination="LAX",
                  departure_time="08:00", aircraft="B737", max_payload=5000)


@pytest.fixture
def mixed_priority_cargo():
    """High, Medium and Low shipments that cannot all fit on one 5000 flight."""
    return [
        Cargo(id="LOW", weight=1000, priority=CargoPriority.LOW),
        Cargo(id="MED", weight=4000, priority=CargoPriority.MEDIUM),
        Cargo(id="HIGH", weight=2000, priority=CargoPriority.HIGH),
    ]


@pytest.fixture
def default_rules():
    """Standard scheduling rules."""
    return SchedulingRules()


@pytest.fixture
def balanced_settings():
    """Settings that run both fuel and cargo heuristics."""
    return Settings(optimization_preference="balanced")


@pytest.fixture
def sample_instance():
    """The four-flight demo instance."""
    return generate_sample_schedule()


@pytest.fixture
def congested_instance():
    """The six-flight congested instance."""
    return generate_congested_schedule()
