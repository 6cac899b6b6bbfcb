"""
Per-puzzle entry point.

A solution module ends with::

    if __name__ == "__main__":
        raise SystemExit(solution(DAY, part_one, part_two))

and can then be run directly (`python solutions/day01.py --time`).
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from .config import HarnessConfig
from .data.locator import DataLocator
from .exceptions import (
    ExternalToolError,
    HarnessError,
    InvalidDay,
    InvalidPart,
    ToolNotFound,
    ToolNotInvocable,
)
from .interfaces import Solution
from .logging_config import get_logger, setup_logging
from .models import DataFile, DataFolder, Day, parse_part
from .orchestrator import Harness
from .registry import SolutionRegistry
from .tools.aoc_cli import INSTALL_HINT


def day_argument(text: str) -> Day:
    """argparse type for a day number."""
    try:
        return Day.parse(text)
    except InvalidDay as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def part_argument(text: str) -> int:
    """argparse type for a part number."""
    try:
        return parse_part(text)
    except InvalidPart as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the flags a solution module accepts."""
    parser = argparse.ArgumentParser(description="Run this day's solution")
    _ = parser.add_argument(
        "--time",
        action="store_true",
        help="Benchmark each part and store the results",
    )
    _ = parser.add_argument(
        "--submit",
        type=part_argument,
        metavar="PART",
        help="Submit the answer of PART (1 or 2) via aoc-cli",
    )
    _ = parser.add_argument(
        "--root",
        help="Project root (default: located from the script's directory)",
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    _ = parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def script_directory() -> Path | None:
    """Directory of the running script, when started from a file."""
    script = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if script is not None and script.is_file():
        return script.resolve().parent
    return None


def solution(
    day: int,
    part_one: Solution | None = None,
    part_two: Solution | None = None,
    argv: Sequence[str] | None = None,
    stream: TextIO | None = None,
) -> int:
    """
    Run the given parts of a day on its input.

    Returns:
        Process exit code: 0 when every part ran, 1 otherwise
    """
    args = parse_args(argv)
    setup_logging(level=args.log_level, debug=args.debug)
    logger = get_logger("solution")

    registry = SolutionRegistry()
    try:
        for part, func in ((1, part_one), (2, part_two)):
            if func is not None:
                _ = registry.register(day, part, func)
        config = HarnessConfig.load(root=args.root, cwd=script_directory())
        harness = Harness(config, registry, stream=stream)
        summary = harness.solve(Day(day), time=args.time, submit_part=args.submit)
    except (ToolNotFound, ToolNotInvocable) as e:
        logger.error(f"aoc-cli unavailable: {e}")
        print(f"{e} {INSTALL_HINT}", file=sys.stderr)
        return 1
    except ExternalToolError as e:
        logger.error(f"aoc-cli failed: {e}")
        print(str(e), file=sys.stderr)
        return 1
    except HarnessError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0 if summary.ok else 1


def read_example(day: int, part: int | None = None, root: str | Path | None = None) -> str:
    """
    Read data/examples/NN.txt (or NN-P.txt) for use in a solution's tests.

    Raises:
        DataNotFound: If the example file does not exist
    """
    config = HarnessConfig.load(root=root)
    locator = DataLocator(config.root)
    return locator.read(
        DataFolder.EXAMPLES,
        DataFile(Day(day), None if part is None else parse_part(part)),
    )
