"""Integration tests for instance loading and the command-line interface."""

import pytest
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from api.cli.main import main, run_scheduler
from data.loader import load_instance, parse_instance
from models import CargoPriority, ConstraintType, OptimizationPreference


@pytest.fixture
def instance_record():
    """A two-flight instance in the front end's record format."""
    return {
        "flights": [
            {"id": "FL001", "origin": "JFK", "destination": "LAX",
             "departureTime": "08:00", "aircraft": "B737", "crew": "C1",
             "maxPayload": 5000},
            {"id": "FL002", "origin": "ORD", "destination": "MIA",
             "departureTime": "08:08", "aircraft": "B737", "crew": "C2",
             "maxPayload": 6000},
        ],
        "cargo": [
            {"id": "CG001", "weight": 2500, "priority": "High", "type": "Perishable"},
        ],
        "constraints": [
            {"id": "CS001", "type": "Aircraft",
             "description": "B737 requires 45min turnaround time"},
        ],
        "settings": {"optimizationPreference": "balanced",
                     "maxBacktrackingIterations": 500},
    }


@pytest.fixture
def instance_file(tmp_path, instance_record):
    path = tmp_path / "instance.json"
    path.write_text(json.dumps(instance_record))
    return path


class TestLoader:
    """Tests for instance files."""

    def test_load_instance(self, instance_file):
        flights, cargo, constraints, settings = load_instance(instance_file)

        assert [f.id for f in flights] == ["FL001", "FL002"]
        assert flights[1].departure_time == "08:08"
        assert cargo[0].priority is CargoPriority.HIGH
        assert constraints[0].type is ConstraintType.AIRCRAFT
        assert settings.optimization_preference is OptimizationPreference.BALANCED
        assert settings.max_backtracking_iterations == 500

    def test_missing_settings_use_defaults(self, instance_record):
        del instance_record["settings"]
        _, _, _, settings = parse_instance(instance_record)
        assert settings.optimization_preference is OptimizationPreference.FUEL

    def test_missing_field(self, instance_record):
        del instance_record["flights"][0]["origin"]
        with pytest.raises(ValueError, match="origin"):
            parse_instance(instance_record)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ValueError):
            load_instance(path)


class TestRunScheduler:
    """Tests for run_scheduler()."""

    def test_builtin_instance(self):
        result = run_scheduler(instance="sample", verbose=False)
        assert result.success

    def test_overrides_file_settings(self, instance_file):
        result = run_scheduler(input_file=str(instance_file), preference="capacity",
                               verbose=False)
        assert result.success
        assert all(f.fuel_efficiency_score is None for f in result.flights)
        assert result.cargo[0].is_assigned


class TestMain:
    """Tests for the CLI entry point."""

    def test_writes_result(self, tmp_path):
        output = tmp_path / "out" / "result.json"
        exit_code = main(["--instance", "congested", "--preference", "balanced",
                          "-q", "--output", str(output)])

        assert exit_code == 0
        data = json.loads(output.read_text())
        assert data["success"] is True
        assert len(data["flights"]) == 6

    def test_input_file(self, instance_file):
        assert main(["--input", str(instance_file), "-q"]) == 0

    def test_search_failure_exit_code(self, tmp_path, instance_record):
        """Three flights for one crew cannot fit the duty limit."""
        instance_record["flights"] = [
            {"id": f"W{i}", "origin": origin, "destination": "BOS",
             "departureTime": "08:00", "aircraft": "B737", "crew": "C1"}
            for i, origin in enumerate(["JFK", "ORD", "SEA"])
        ]
        instance_record["constraints"] = [
            {"id": "CS002", "type": "Crew",
             "description": "Crew C1 can only fly 8 hours per day"},
        ]
        path = tmp_path / "overworked.json"
        path.write_text(json.dumps(instance_record))

        assert main(["--input", str(path), "-q", "--max-iterations", "5"]) == 1

    def test_invalid_input_exit_code(self, tmp_path, instance_record):
        instance_record["settings"]["optimizationPreference"] = "speed"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(instance_record))

        assert main(["--input", str(path), "-q"]) == 2

    def test_missing_input_file(self, tmp_path):
        assert main(["--input", str(tmp_path / "missing.json"), "-q"]) == 2

    def test_rejects_unknown_preference(self):
        with pytest.raises(SystemExit):
            main(["--preference", "speed"])
