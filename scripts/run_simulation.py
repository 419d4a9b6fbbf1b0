#!/usr/bin/env python3
"""Run one collection simulation from the command line."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from collector.core.errors import CollectorError, InputError
from collector.core.logging_config import setup_logging
from collector.core.settings import get_settings
from collector.services.calculator import DEFAULT_TARGETS, DEFAULT_WEIGHTS, Calculator

EXIT_INPUT_ERROR = 2
EXIT_RUN_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate draws needed to collect target items from a weighted pool"
    )
    parser.add_argument(
        "--weights",
        type=str,
        default=DEFAULT_WEIGHTS,
        help=f"Comma-separated item weights (default: '{DEFAULT_WEIGHTS}')",
    )
    parser.add_argument(
        "--targets",
        type=str,
        default=DEFAULT_TARGETS,
        help=f"Comma-separated 1-based indices to collect (default: '{DEFAULT_TARGETS}')",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=None,
        help="Number of trials (default: SIM_DEFAULT_TRIALS)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log simulation progress to the console",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(
        log_level="DEBUG" if args.verbose else settings.log_level,
        enable_console=args.verbose,
        enable_file=False,
    )

    calculator = Calculator(settings)
    try:
        summary = calculator.calculate(args.weights, args.targets, args.trials, args.seed)
    except InputError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except CollectorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUN_ERROR

    average = "n/a" if summary.average is None else f"{summary.average:.4f}"
    print(f"Avg: {average}")
    print(f"Duration: {summary.duration_ms:.0f}ms")
    print(f"Trials: {summary.n_trials}  Min: {summary.minimum}  Median: {summary.median}  Max: {summary.maximum}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
