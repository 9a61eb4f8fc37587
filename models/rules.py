"""Operational rules used when compiling constraints."""

from dataclasses import dataclass
from datetime import timedelta


def _minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


@dataclass
class SchedulingRules:
    """
    Operational limits and planning placeholders.

    These values parameterise the compiled constraints and the
    candidate departure slots for each flight.
    """
    # Aircraft rules
    min_turnaround_time: timedelta = timedelta(minutes=45)

    # Crew rules
    duty_per_flight: timedelta = timedelta(hours=3)  # Placeholder until real block times
    max_duty_period: timedelta = timedelta(hours=8)

    # Airport rules
    max_window_operations: int = 2
    min_separation: timedelta = timedelta(minutes=15)

    # Planning
    flight_duration: timedelta = timedelta(hours=3)  # Placeholder for arrival estimates
    departure_window: timedelta = timedelta(hours=2)
    slot_step: timedelta = timedelta(minutes=30)

    def __post_init__(self) -> None:
        if self.slot_step <= timedelta(0):
            raise ValueError("slot_step must be positive")
        if self.departure_window < timedelta(0):
            raise ValueError("departure_window must not be negative")
        if self.max_window_operations < 0:
            raise ValueError("max_window_operations must not be negative")

    @property
    def min_turnaround_minutes(self) -> int:
        return _minutes(self.min_turnaround_time)

    @property
    def min_separation_minutes(self) -> int:
        return _minutes(self.min_separation)

    @property
    def duty_per_flight_hours(self) -> float:
        return self.duty_per_flight.total_seconds() / 3600

    @property
    def max_duty_hours(self) -> float:
        return self.max_duty_period.total_seconds() / 3600

    @property
    def flight_duration_minutes(self) -> int:
        return _minutes(self.flight_duration)

    @property
    def departure_window_minutes(self) -> int:
        return _minutes(self.departure_window)

    @property
    def slot_step_minutes(self) -> int:
        return _minutes(self.slot_step)
