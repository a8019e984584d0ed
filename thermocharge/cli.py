"""
Command-line interface for ThermoCharge.

Runs the regulator driver with randomized starting readings and writes
run artifacts.

Usage:
    # One Start -> Finish cycle
    thermocharge --name smoke --seed 42

    # Five cycles, quiet, with a plot (requires matplotlib)
    thermocharge --name long --cycles 5 --quiet --plot

Entry points:
    - thermocharge: Direct CLI command (from pyproject.toml)
    - python -m thermocharge.cli: Module execution
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from .config import RegulatorConfig, SimConfig
from .engine.driver import RegulatorDriver
from .engine.initializer import RandomInitializer
from .engine.metrics import write_run_artifacts
from .regulator.errors import PhaseAborted

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for the CLI.

    Returns:
        Configured ArgumentParser with all supported options.
    """
    p = argparse.ArgumentParser(
        prog="thermocharge",
        description="ThermoCharge: thermal/battery regulator simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  thermocharge --name smoke --seed 42
      Run one Start -> Finish cycle

  thermocharge --name bounded --cycles 0 --max-transitions 500
      Stop after 500 driver iterations whatever the state
""",
    )

    p.add_argument(
        "--name",
        type=str,
        default="default",
        help="Run name for artifact directory (default: %(default)s)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for starting readings (default: %(default)s)",
    )
    p.add_argument(
        "--cycles",
        type=int,
        default=1,
        help="Finish -> Start cycles to run, 0 for no cycle limit (default: %(default)s)",
    )
    p.add_argument(
        "--max-transitions",
        type=int,
        default=None,
        help="Stop after this many driver iterations (default: no limit)",
    )
    p.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="Output directory (default: artifacts/runs/<timestamp>_<name>)",
    )
    p.add_argument(
        "--plot",
        action="store_true",
        help="Write plot.png into the output directory (requires matplotlib)",
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print report lines",
    )
    p.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s)",
    )
    return p


def _discard(line: str) -> None:
    pass


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 for success, 1 when a phase was aborted, 2 for
        invalid arguments
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # --cycles 0 means "no cycle limit"; the transition limit then has to bound the run
    max_cycles = args.cycles if args.cycles != 0 else None
    try:
        config = SimConfig.from_args(
            name=args.name,
            seed=args.seed,
            out_dir=args.out_dir,
            max_cycles=max_cycles,
            max_transitions=args.max_transitions,
        )
    except ValueError as e:
        parser.error(str(e))

    driver = RegulatorDriver(
        RandomInitializer(config.seed),
        config=RegulatorConfig(),
        reporter=_discard if args.quiet else print,
        scenario_name=config.name,
        seed=config.seed,
    )

    # Ctrl-C finishes the current iteration, then the run returns normally
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: driver.stop())
    try:
        result = driver.run(
            max_transitions=config.max_transitions,
            max_cycles=config.max_cycles,
        )
    except PhaseAborted as e:
        print(f"Run aborted: {e}", file=sys.stderr)
        return 1
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    write_run_artifacts(
        out_path=config.out_dir,
        metrics=result.metrics,
        transitions=result.transitions,
    )
    metrics_file = config.out_dir / "metrics.json"

    if args.plot:
        from .engine.plotting import plot_run_result

        try:
            plot_run_result(result, output_path=config.out_dir / "plot.png")
        except RuntimeError as e:
            print(f"Plot skipped: {e}", file=sys.stderr)

    final = result.final_snapshot
    print(f"{result.metrics.scenario_name}: ", end="")
    print(f"transitions={result.metrics.total_transitions} ", end="")
    print(f"cycles={result.metrics.total_cycles} ", end="")
    print(f"stop={result.metrics.stop_reason}", end="")
    if final is not None:
        print(f" temperature={final.temperature:.2f} battery={final.battery_charge:.2f}", end="")
    print(f" -> {metrics_file}")

    return 0


# Allow module execution: python -m thermocharge.cli
if __name__ == "__main__":
    sys.exit(main())
