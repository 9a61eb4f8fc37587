"""Command-line interface for the flight slot scheduler."""

import argparse
import logging
import json
import sys
from pathlib import Path
from typing import Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from data.generators.sample_schedule import (
    generate_congested_schedule,
    generate_sample_schedule,
    print_instance_summary
)
from data.loader import load_instance
from models import ScheduleResult, Settings
from optimization.scheduler import AirlineScheduler

INSTANCES = {
    "sample": generate_sample_schedule,
    "congested": generate_congested_schedule,
}


def setup_logging(level: str = "INFO", log_file: str = None) -> None:
    """Configure logging."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=handlers
    )


def run_scheduler(
    instance: str = "sample",
    input_file: Optional[str] = None,
    preference: Optional[str] = None,
    max_iterations: Optional[int] = None,
    cargo_strategy: Optional[str] = None,
    verbose: bool = True,
    output_file: Optional[str] = None
) -> ScheduleResult:
    """Run the scheduler on a built-in instance or an instance file."""
    logger = logging.getLogger(__name__)

    if input_file:
        logger.info(f"Loading instance from {input_file}...")
        flights, cargo, constraints, settings = load_instance(input_file)
    else:
        logger.info(f"Generating {instance} instance...")
        flights, cargo, constraints = INSTANCES[instance]()
        settings = Settings()

    # Command-line options override file settings
    overrides = settings.to_dict()
    if preference:
        overrides["optimizationPreference"] = preference
    if max_iterations is not None:
        overrides["maxBacktrackingIterations"] = max_iterations
    if cargo_strategy:
        overrides["cargoStrategy"] = cargo_strategy
    settings = Settings.from_dict(overrides)

    if verbose:
        print_instance_summary(flights, cargo, constraints)

    scheduler = AirlineScheduler(flights, cargo, constraints, settings)

    logger.info("Starting optimization...")
    result = scheduler.optimize_schedule()

    result.print_summary()

    if result.success:
        print("\nConstraint Verification:")
        print("-" * 40)
        for check, satisfied in scheduler.verify(result).items():
            status = "PASS" if satisfied else "FAIL"
            print(f"  {check}: {status}")

    # Save result if requested
    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info(f"Result saved to {output_file}")

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Flight slot scheduling with backtracking CSP and heuristics"
    )

    parser.add_argument(
        "--instance",
        type=str,
        default="sample",
        choices=sorted(INSTANCES),
        help="Built-in instance to solve (default: sample)"
    )

    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="JSON instance file (overrides --instance)"
    )

    parser.add_argument(
        "--preference",
        type=str,
        default=None,
        choices=["fuel", "capacity", "balanced", "time"],
        help="Optimization preference (default: fuel, or the file's setting)"
    )

    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Maximum backtracking iterations (default: 1000)"
    )

    parser.add_argument(
        "--cargo-strategy",
        type=str,
        default=None,
        choices=["greedy", "exact"],
        help="Cargo loading strategy (default: greedy)"
    )

    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file for result JSON"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress verbose output"
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        result = run_scheduler(
            instance=args.instance,
            input_file=args.input,
            preference=args.preference,
            max_iterations=args.max_iterations,
            cargo_strategy=args.cargo_strategy,
            verbose=not args.quiet,
            output_file=args.output
        )
    except ValueError as e:
        logging.getLogger(__name__).error(f"Invalid input: {e}")
        return 2
    except OSError as e:
        logging.getLogger(__name__).error(f"Cannot access file: {e}")
        return 2

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
