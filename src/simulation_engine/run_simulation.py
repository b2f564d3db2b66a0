"""Run a closed-auction dry run from the command line.

Usage:
    python -m src.simulation_engine.run_simulation [seed] [output_dir]

Examples:
    python -m src.simulation_engine.run_simulation 42
    python -m src.simulation_engine.run_simulation 7 data/simulations

With an output_dir the run log is written there as well.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.logging_config import LOG_FILE_NAME, setup_logging
from src.simulation_engine.config import DEFAULT_SEED, SimulationConfig
from src.simulation_engine.engine import SimulationEngine
from src.simulation_engine.models import SimulationResult
from src.simulation_engine.reporting import format_report, write_results

logger = logging.getLogger(__name__)


def run_dry_run(
    seed: int = DEFAULT_SEED,
    output_dir: Optional[Path] = None,
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """Run one simulation, print its report and optionally save it.

    Args:
        seed: Simulation seed.
        output_dir: When given, CSV and JSON results are written here.
        config: Simulation settings. Defaults to the reference configuration.
    """
    config = config or SimulationConfig(seed=seed)
    result = SimulationEngine(config).run(seed)

    print(format_report(result, config))

    if output_dir is not None:
        output_file = write_results(result, output_dir)
        print(f"\nResults written: {output_file}")

    return result


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    output_dir = Path(argv[1]) if len(argv) > 1 else None

    # A saved run keeps its log next to its results
    setup_logging(log_file=output_dir / LOG_FILE_NAME if output_dir is not None else None)

    try:
        seed = int(argv[0]) if len(argv) > 0 else DEFAULT_SEED
    except ValueError:
        logger.error("Seed must be an integer, got %r", argv[0])
        return 2

    try:
        run_dry_run(seed, output_dir)
    except Exception:
        logger.exception("Simulation failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
