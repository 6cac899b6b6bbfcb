"""
Abstract base classes defining the interfaces for the advent harness.

All interfaces are synchronous; the harness is a short-lived, single-threaded
command-line process.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from typing_extensions import TypedDict

from .models import BenchmarkReport, CommandResult

# A solution takes the raw puzzle input and returns an answer, or None when the
# part is not solved yet. Failures are raised.
Solution = Callable[[str], Any]


class TimingEntry(TypedDict):
    """TypedDict for one persisted report row."""
    day: int
    part: int | None
    count: int
    total_ns: int
    mean_ns: float
    min_ns: int
    max_ns: int


class TimingsDocument(TypedDict):
    """TypedDict for the persisted benchmark report."""
    version: int
    entries: list[TimingEntry]


class CommandRunner(ABC):
    """Interface for invoking external programs."""

    @abstractmethod
    def run(self, args: Sequence[str], *, capture: bool = False) -> CommandResult:
        """
        Run a command to completion.

        Args:
            args: Program name followed by its arguments
            capture: If True, capture stdout/stderr instead of forwarding them

        Returns:
            CommandResult with the exit status and any captured output

        Raises:
            OSError: If the program could not be started
        """
        pass


class ReportStore(ABC):
    """Interface for persisting the cumulative benchmark report."""

    @abstractmethod
    def load(self) -> BenchmarkReport:
        """Load the report; a missing report is an empty one."""
        pass

    @abstractmethod
    def save(self, report: BenchmarkReport) -> None:
        """Replace the persisted report with `report`."""
        pass
