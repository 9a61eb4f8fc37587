"""Core data models for the flight slot scheduler."""

from models.flight import Flight
from models.cargo import Cargo, CargoPriority
from models.crew import Crew
from models.airport import Airport, Slot
from models.constraint import (
    ConstraintSpec,
    ConstraintType,
    AircraftRule,
    CrewRule,
    AirportRule,
)
from models.rules import SchedulingRules
from models.settings import Settings, OptimizationPreference, CargoStrategy
from models.result import ScheduleResult, SearchStatistics, SearchOutcome

__all__ = [
    "Flight",
    "Cargo",
    "CargoPriority",
    "Crew",
    "Airport",
    "Slot",
    "ConstraintSpec",
    "ConstraintType",
    "AircraftRule",
    "CrewRule",
    "AirportRule",
    "SchedulingRules",
    "Settings",
    "OptimizationPreference",
    "CargoStrategy",
    "ScheduleResult",
    "SearchStatistics",
    "SearchOutcome",
]
