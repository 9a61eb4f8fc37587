"""Sample scheduling instances.

``generate_sample_schedule`` is the four-flight demo network with its
three demo constraints. ``generate_congested_schedule`` packs six flights
into two busy banks so that turnaround and separation rules force the
solver to move departures.
"""

from typing import List, Tuple

from models import Cargo, CargoPriority, ConstraintSpec, ConstraintType, Flight

Instance = Tuple[List[Flight], List[Cargo], List[ConstraintSpec]]


def generate_sample_schedule() -> Instance:
    """
    Generate the demo instance.

    Returns:
        Tuple of (flights, cargo, constraints)
    """
    flights = [
        Flight(
            id="FL001", origin="JFK", destination="LAX",
            departure_time="08:00", arrival_time="11:30",
            aircraft="B737", crew="C1", max_payload=5000
        ),
        Flight(
            id="FL002", origin="LAX", destination="ORD",
            departure_time="12:00", arrival_time="18:00",
            aircraft="A320", crew="C2", max_payload=6000
        ),
        Flight(
            id="FL003", origin="ORD", destination="MIA",
            departure_time="19:00", arrival_time="22:30",
            aircraft="B777", crew="C3", max_payload=7000
        ),
        Flight(
            id="FL004", origin="MIA", destination="JFK",
            departure_time="23:00", arrival_time="02:30",
            aircraft="A330", crew="C4", max_payload=8000
        ),
    ]

    cargo = [
        Cargo(id="CG001", weight=2500, priority=CargoPriority.HIGH,
              type="Perishable", assigned_flight="FL001"),
        Cargo(id="CG002", weight=3000, priority=CargoPriority.MEDIUM,
              type="Electronics", assigned_flight="FL002"),
        Cargo(id="CG003", weight=4000, priority=CargoPriority.LOW,
              type="Furniture", assigned_flight="FL003"),
        Cargo(id="CG004", weight=5000, priority=CargoPriority.HIGH,
              type="Clothing", assigned_flight="FL004"),
    ]

    constraints = [
        ConstraintSpec("CS001", ConstraintType.AIRCRAFT,
                       "B737 requires 45min turnaround time"),
        ConstraintSpec("CS002", ConstraintType.CREW,
                       "Crew C1 can only fly 8 hours per day"),
        ConstraintSpec("CS003", ConstraintType.AIRPORT,
                       "JFK has limited slots between 18:00-22:00"),
    ]

    return flights, cargo, constraints


def generate_congested_schedule() -> Instance:
    """
    Generate a busier instance with clashing departures.

    Returns:
        Tuple of (flights, cargo, constraints)

    Instance Details:
        - Two B737 departures 10 minutes apart out of JFK
        - Two A320 departures 20 minutes apart
        - Special-handling holds for perishable and hazardous cargo
        - One shipment too heavy for any flight
    """
    flights = [
        Flight(id="CG01", origin="JFK", destination="LAX", departure_time="08:00",
               aircraft="B737", crew="C1", max_payload=5000, has_cooled_cargo=True),
        Flight(id="CG02", origin="JFK", destination="ORD", departure_time="08:10",
               aircraft="B737", crew="C1", max_payload=4500),
        Flight(id="CG03", origin="LAX", destination="ORD", departure_time="12:00",
               aircraft="A320", crew="C2", max_payload=6000, can_carry_hazardous=True),
        Flight(id="CG04", origin="ORD", destination="JFK", departure_time="12:20",
               aircraft="A320", crew="C2", max_payload=6000),
        Flight(id="CG05", origin="ORD", destination="MIA", departure_time="19:00",
               aircraft="B777", crew="C3", max_payload=7000,
               has_cooled_cargo=True, can_carry_hazardous=True),
        Flight(id="CG06", origin="MIA", destination="JFK", departure_time="20:00",
               aircraft="A330", crew="C4", max_payload=8000),
    ]

    cargo = [
        Cargo(id="K001", weight=3000, priority=CargoPriority.HIGH, type="Perishable"),
        Cargo(id="K002", weight=2500, priority=CargoPriority.HIGH, type="Hazardous"),
        Cargo(id="K003", weight=4000, priority=CargoPriority.MEDIUM, type="Electronics"),
        Cargo(id="K004", weight=1500, priority=CargoPriority.MEDIUM, type="Perishable"),
        Cargo(id="K005", weight=6000, priority=CargoPriority.LOW, type="Furniture"),
        Cargo(id="K006", weight=9000, priority=CargoPriority.LOW, type="Machinery"),
        Cargo(id="K007", weight=800, priority=CargoPriority.LOW, type="Mail"),
    ]

    constraints = [
        ConstraintSpec("CS001", ConstraintType.AIRCRAFT,
                       "B737 requires 45min turnaround time"),
        ConstraintSpec("CS002", ConstraintType.AIRCRAFT,
                       "A320 requires 45min turnaround time"),
        ConstraintSpec("CS003", ConstraintType.CREW,
                       "Crew C1 can only fly 8 hours per day"),
        ConstraintSpec("CS004", ConstraintType.AIRPORT,
                       "JFK has limited slots between 18:00-22:00"),
        ConstraintSpec("CS005", ConstraintType.CARGO,
                       "Hazardous goods only on certified aircraft"),
    ]

    return flights, cargo, constraints


def print_instance_summary(
    flights: List[Flight],
    cargo: List[Cargo],
    constraints: List[ConstraintSpec]
) -> None:
    """Print a summary of the instance."""
    print("\n" + "=" * 60)
    print("              SCHEDULING INSTANCE")
    print("=" * 60)

    print("\nFLIGHTS:")
    print("-" * 60)
    print(f"{'ID':<6} {'From':<4} {'To':<4} {'Dep':<6} {'Aircraft':<8} {'Crew':<5} {'Payload':>8}")
    print("-" * 60)
    for f in sorted(flights, key=lambda x: (x.departure_minutes, x.id)):
        print(
            f"{f.id:<6} {f.origin:<4} {f.destination:<4} {f.departure_time:<6} "
            f"{f.aircraft:<8} {f.crew or '-':<5} {f.max_payload:>8g}"
        )

    print("\nCARGO:")
    print("-" * 60)
    for c in cargo:
        print(f"  {c.id:<6} {c.weight:>8g} {c.priority.value:<7} {c.type}")

    print("\nCONSTRAINTS:")
    print("-" * 60)
    for spec in constraints:
        print(f"  {spec.id} [{spec.type.value}] {spec.description}")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    print_instance_summary(*generate_sample_schedule())
