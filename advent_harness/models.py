"""
Core dataclasses for the advent harness.

Defines the day/part identifier, data file references, execution outcomes,
timing statistics and the cumulative benchmark report.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

from .exceptions import InvalidDay, InvalidPart

FIRST_DAY = 1
LAST_DAY = 25
PARTS = (1, 2)


@dataclass(frozen=True)
class Day:
    """A validated puzzle day in 1..=25."""

    value: int

    def __post_init__(self) -> None:
        """Reject days outside of the calendar."""
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidDay(self.value)
        if not (FIRST_DAY <= self.value <= LAST_DAY):
            raise InvalidDay(self.value)

    @classmethod
    def parse(cls, text: str | int) -> "Day":
        """Parse a day from command-line input such as "1" or "01"."""
        if isinstance(text, int):
            return cls(text)
        try:
            value = int(text.strip(), 10)
        except ValueError as e:
            raise InvalidDay(text) from e
        return cls(value)

    def __str__(self) -> str:
        return f"{self.value:02}"

    def __lt__(self, other: "Day") -> bool:
        return self.value < other.value


def parse_part(value: object) -> int:
    """
    Validate a part number coming from outside the program (CLI flags, files).

    Raises:
        InvalidPart: If the value is not 1 or 2
    """
    if isinstance(value, bool):
        raise InvalidPart(value)
    if isinstance(value, str):
        try:
            value = int(value.strip(), 10)
        except ValueError as e:
            raise InvalidPart(value) from e
    if value not in PARTS:
        raise InvalidPart(value)
    return int(value)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Identifier:
    """A (day, part) pair addressing one unit of runnable work."""

    day: Day
    part: int | None = None

    def __post_init__(self) -> None:
        if self.part is not None:
            object.__setattr__(self, "part", parse_part(self.part))

    @classmethod
    def of(cls, day: int, part: int | None = None) -> "Identifier":
        return cls(Day(day), part)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.day.value, self.part or 0)

    def __str__(self) -> str:
        if self.part is None:
            return f"Day {self.day}"
        return f"Day {self.day} / Part {self.part}"


class DataFolder(Enum):
    """Data folder roles; each maps to a fixed directory and file extension."""

    EXAMPLES = "examples"
    INPUTS = "inputs"
    PUZZLES = "puzzles"

    @property
    def sub_directory(self) -> PurePosixPath:
        """Directory of this folder, relative to the project root."""
        return PurePosixPath("data") / self.value

    @property
    def extension(self) -> str:
        """Extension of the files expected in this folder."""
        if self is DataFolder.PUZZLES:
            return "md"
        return "txt"


@dataclass(frozen=True)
class DataFile:
    """Reference to a data file for a day and, optionally, a part."""

    day: Day
    part: int | None = None

    def file_name(self, extension: str) -> str:
        if self.part is None:
            return f"{self.day}.{extension}"
        return f"{self.day}-{self.part}.{extension}"


@dataclass
class ExecutionOutcome:
    """Result of invoking a solution function once."""

    identifier: Identifier
    value: Any = None
    rendered: str = ""
    error: Exception | None = None
    cause_chain: list[str] = field(default_factory=list)
    elapsed_ns: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def solved(self) -> bool:
        """True when the solution returned an answer."""
        return self.ok and self.value is not None


@dataclass(frozen=True)
class TimingStats:
    """Summary statistics of one benchmark session, in nanoseconds."""

    count: int
    total_ns: int
    mean_ns: float
    min_ns: int
    max_ns: int

    def to_dict(self) -> dict[str, int | float]:
        return {
            "count": self.count,
            "total_ns": self.total_ns,
            "mean_ns": self.mean_ns,
            "min_ns": self.min_ns,
            "max_ns": self.max_ns,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimingStats":
        return cls(
            count=int(data["count"]),
            total_ns=int(data["total_ns"]),
            mean_ns=float(data["mean_ns"]),
            min_ns=int(data["min_ns"]),
            max_ns=int(data["max_ns"]),
        )


@dataclass(frozen=True)
class BenchmarkReport:
    """
    Ordered mapping from identifier to timing statistics.

    Immutable; see reporting.readme_table.update for the merge operation.
    """

    entries: tuple[tuple[Identifier, TimingStats], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Identifier]:
        return (identifier for identifier, _ in self.entries)

    def __contains__(self, identifier: object) -> bool:
        return any(existing == identifier for existing, _ in self.entries)

    def get(self, identifier: Identifier) -> TimingStats | None:
        for existing, stats in self.entries:
            if existing == identifier:
                return stats
        return None

    def items(self) -> list[tuple[Identifier, TimingStats]]:
        return list(self.entries)


@dataclass
class CommandResult:
    """Outcome of one external command invocation."""

    args: list[str]
    returncode: int
    stdout: str | None = None
    stderr: str | None = None

    @property
    def success(self) -> bool:
        return self.returncode == 0
