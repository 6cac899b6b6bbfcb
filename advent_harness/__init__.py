"""
Advent Harness - Puzzle Execution & Benchmarking

Runs puzzle solutions (pure functions from input text to an answer), benchmarks
them, keeps a cumulative timing report in the README, and wraps aoc-cli for
downloading puzzles and submitting answers.
"""

from .config import HarnessConfig
from .entrypoint import read_example, solution
from .models import BenchmarkReport, Day, Identifier, TimingStats
from .orchestrator import Harness
from .registry import SolutionRegistry

__version__ = "0.1.0"
__all__ = [
    "BenchmarkReport",
    "Day",
    "Harness",
    "HarnessConfig",
    "Identifier",
    "SolutionRegistry",
    "TimingStats",
    "read_example",
    "solution",
]
