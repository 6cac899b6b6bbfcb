"""
CLI entry point for the advent harness.

Parses arguments, resolves configuration once, and wires components.

Usage:
    python -m advent_harness scaffold 1 --download
    python -m advent_harness solve 1 --time
    python -m advent_harness time --max-iterations 100
"""

import argparse
import math
import sys
from argparse import Namespace
from collections.abc import Sequence

from .config import HarnessConfig
from .data.locator import DataLocator
from .entrypoint import day_argument, part_argument
from .exceptions import (
    ConfigurationError,
    ExternalToolError,
    HarnessError,
    ToolNotFound,
    ToolNotInvocable,
)
from .logging_config import get_logger, setup_logging
from .orchestrator import Harness, SessionSummary
from .registry import load_solutions
from .runners.benchmarker import NANOS_PER_SECOND, BenchmarkBudget
from .scaffold import scaffold
from .tools.aoc_cli import INSTALL_HINT, AocCli


def seconds_argument(text: str) -> float:
    """argparse type for a finite, positive number of seconds."""
    try:
        seconds = float(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Not a number of seconds: {text!r}") from e
    if not math.isfinite(seconds) or seconds <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive, finite number of seconds, got {text!r}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    """Build the parser with one subcommand per operation."""
    # Global options are inherited by every subcommand
    parent = argparse.ArgumentParser(add_help=False)
    _ = parent.add_argument(
        "--root",
        help="Project root (default: searched upward from the working directory)",
    )
    _ = parent.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    _ = parent.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    _ = parent.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )

    parser = argparse.ArgumentParser(
        prog="advent-harness",
        description="Advent Harness - run, benchmark and submit puzzle solutions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scaffold_parser = subparsers.add_parser(
        "scaffold", parents=[parent], help="Create a solution module and data files"
    )
    _ = scaffold_parser.add_argument("day", type=day_argument)
    _ = scaffold_parser.add_argument(
        "--overwrite", action="store_true", help="Replace an existing solution module"
    )
    _ = scaffold_parser.add_argument(
        "--download", action="store_true", help="Download input and puzzle afterwards"
    )

    download_parser = subparsers.add_parser(
        "download", parents=[parent], help="Download input and puzzle via aoc-cli"
    )
    _ = download_parser.add_argument("day", type=day_argument)

    read_parser = subparsers.add_parser(
        "read", parents=[parent], help="Read the puzzle description via aoc-cli"
    )
    _ = read_parser.add_argument("day", type=day_argument)

    solve_parser = subparsers.add_parser(
        "solve", parents=[parent], help="Run a day's solution"
    )
    _ = solve_parser.add_argument("day", type=day_argument)
    _ = solve_parser.add_argument(
        "--time", action="store_true", help="Benchmark and store the results"
    )
    _ = solve_parser.add_argument(
        "--submit",
        type=part_argument,
        metavar="PART",
        help="Submit the answer of PART (1 or 2) via aoc-cli",
    )

    all_parser = subparsers.add_parser(
        "all", parents=[parent], help="Run every solution"
    )
    _ = all_parser.add_argument(
        "--time", action="store_true", help="Benchmark and store the results"
    )

    time_parser = subparsers.add_parser(
        "time", parents=[parent], help="Benchmark solutions and update the README table"
    )
    _ = time_parser.add_argument(
        "days", type=day_argument, nargs="*", help="Days to benchmark (default: all)"
    )
    _ = time_parser.add_argument(
        "--max-iterations", type=int, help="Number of measured iterations per part"
    )
    _ = time_parser.add_argument(
        "--max-wall-time",
        type=seconds_argument,
        metavar="SECONDS",
        help="Stop iterating once this much time has been measured",
    )
    _ = time_parser.add_argument(
        "--warmup", type=int, default=0, help="Unmeasured iterations before sampling"
    )

    return parser


def budget_from_args(args: Namespace) -> BenchmarkBudget | None:
    """Budget from the time command's flags; None derives one per part."""
    max_iterations = getattr(args, "max_iterations", None)
    max_wall_time = getattr(args, "max_wall_time", None)
    warmup = getattr(args, "warmup", 0)

    if max_iterations is None and max_wall_time is None:
        if warmup:
            raise ConfigurationError("--warmup requires --max-iterations or --max-wall-time")
        return None

    return BenchmarkBudget(
        max_iterations=max_iterations,
        max_wall_time_ns=None if max_wall_time is None else int(max_wall_time * NANOS_PER_SECOND),
        warmup_iterations=warmup,
    )


def exit_code(summary: SessionSummary) -> int:
    return 0 if summary.ok else 1


def run_command(args: Namespace, config: HarnessConfig) -> int:
    """Dispatch a parsed command."""
    logger = get_logger("main")
    locator = DataLocator(config.root)

    if args.command in ("download", "read"):
        aoc = AocCli(locator, year=config.year)
        aoc.check()
        if args.command == "download":
            _ = aoc.download(args.day)
        else:
            _ = aoc.read(args.day)
        return 0

    if args.command == "scaffold":
        _ = scaffold(config, args.day, overwrite=args.overwrite, locator=locator)
        if args.download:
            aoc = AocCli(locator, year=config.year)
            aoc.check()
            _ = aoc.download(args.day)
        return 0

    if args.command == "solve":
        registry = load_solutions(config.solutions_dir, days=[args.day])
        harness = Harness(config, registry, locator=locator)
        return exit_code(harness.solve(args.day, time=args.time, submit_part=args.submit))

    if args.command == "all":
        registry = load_solutions(config.solutions_dir)
        harness = Harness(config, registry, locator=locator)
        return exit_code(harness.run_days(time=args.time))

    if args.command == "time":
        days = args.days or None
        budget = budget_from_args(args)
        registry = load_solutions(config.solutions_dir, days=days)
        harness = Harness(config, registry, locator=locator)
        return exit_code(harness.run_days(days, time=True, budget=budget))

    logger.error(f"Unknown command: {args.command}")
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level, debug=args.debug, log_file=args.log_file)
    logger = get_logger("main")
    logger.info(f"Running command {args.command}")

    try:
        config = HarnessConfig.load(root=args.root)
        return run_command(args, config)
    except (ToolNotFound, ToolNotInvocable) as e:
        logger.error(f"aoc-cli unavailable: {e}")
        print(f"Error: {e} {INSTALL_HINT}", file=sys.stderr)
        return 1
    except ExternalToolError as e:
        logger.error(f"aoc-cli failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (HarnessError, FileExistsError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
