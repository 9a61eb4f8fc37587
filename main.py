#!/usr/bin/env python3
"""
Flight Slot Scheduler

Main entry point: backtracking CSP slot assignment with heuristic refinement.
"""

import sys
from pathlib import Path

# Ensure the package is in the path
sys.path.insert(0, str(Path(__file__).parent))

from api.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
