"""Load scheduling instances from JSON files.

The file holds one object with ``flights``, ``cargo`` and ``constraints``
arrays and an optional ``settings`` object, using the same record keys as
the scheduling front end (``departureTime``, ``maxPayload``, ...).
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union
import json
import logging

from models import Cargo, ConstraintSpec, Flight, Settings

logger = logging.getLogger(__name__)

LoadedInstance = Tuple[List[Flight], List[Cargo], List[ConstraintSpec], Settings]


def parse_instance(data: Dict[str, Any]) -> LoadedInstance:
    """
    Build model objects from a decoded instance.

    Raises:
        ValueError: If a record is missing a required field or holds an
            invalid value
    """
    try:
        flights = [Flight.from_dict(r) for r in data.get("flights", [])]
        cargo = [Cargo.from_dict(r) for r in data.get("cargo", [])]
        constraints = [ConstraintSpec.from_dict(r) for r in data.get("constraints", [])]
    except KeyError as e:
        raise ValueError(f"Instance record is missing field {e}") from e

    settings = Settings.from_dict(data.get("settings") or {})
    return flights, cargo, constraints, settings


def load_instance(path: Union[str, Path]) -> LoadedInstance:
    """Read and parse an instance file."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")

    flights, cargo, constraints, settings = parse_instance(data)
    logger.info(
        f"Loaded {len(flights)} flights, {len(cargo)} cargo items and "
        f"{len(constraints)} constraints from {path}"
    )
    return flights, cargo, constraints, settings
