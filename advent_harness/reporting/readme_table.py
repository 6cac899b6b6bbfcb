"""
Benchmark report merging and rendering.

The report is merged purely in memory, then rendered to a Markdown table that
lives between two marker comments in the project README. Rendering contains no
wall-clock dependent content, so repeated runs stay diff-clean.
"""

from collections.abc import Mapping
from pathlib import Path

from ..exceptions import ReportFormatError
from ..logging_config import get_logger
from ..models import BenchmarkReport, Identifier, TimingStats
from ..storage.files import atomic_write
from ..timings.aggregator import format_duration

MARKER = "<!--- benchmarking table --->"
NANOS_PER_MILLI = 1_000_000

logger = get_logger("readme_table")


def update(report: BenchmarkReport, identifier: Identifier, stats: TimingStats) -> BenchmarkReport:
    """
    Replace (or insert) the entry for `identifier`.

    Other entries keep their values and relative order; a new identifier is
    appended at the end.
    """
    entries = list(report.entries)
    for index, (existing, _) in enumerate(entries):
        if existing == identifier:
            entries[index] = (identifier, stats)
            break
    else:
        entries.append((identifier, stats))
    return BenchmarkReport(tuple(entries))


def merge(report: BenchmarkReport, updates: Mapping[Identifier, TimingStats]) -> BenchmarkReport:
    """Apply several updates; identifiers new to the report are appended in order."""
    merged = report
    for identifier in sorted(updates, key=lambda i: i.sort_key):
        merged = update(merged, identifier, updates[identifier])
    return merged


def solution_link(identifier: Identifier) -> str:
    return f"./solutions/day{identifier.day}.py"


def render(report: BenchmarkReport, heading: str = "## Benchmarks") -> str:
    """Render the report as a Markdown block delimited by the table markers."""
    lines = [
        MARKER,
        heading,
        "",
        "| Day | Part | Mean | Samples |",
        "| :---: | :---: | :---: | :---: |",
    ]
    total_ns = 0.0
    for identifier, stats in report.items():
        part = "-" if identifier.part is None else str(identifier.part)
        lines.append(
            f"| [Day {identifier.day.value}]({solution_link(identifier)}) | {part} "
            f"| `{format_duration(stats.mean_ns)}` | {stats.count} |"
        )
        total_ns += stats.mean_ns
    lines.append("")
    lines.append(f"**Total: {total_ns / NANOS_PER_MILLI:.2f}ms**")
    lines.append(MARKER)
    return "\n".join(lines)


def replace_table(document: str, table: str) -> str:
    """
    Put `table` in place of the marked region of `document`.

    The region spans from the first to the last marker. Documents without a
    marker get the table appended.

    Raises:
        ReportFormatError: If the marker occurs more than twice
    """
    occurrences = document.count(MARKER)
    if occurrences > 2:
        raise ReportFormatError(f"{MARKER}: too many occurrences of marker in README")
    if occurrences == 0:
        if document and not document.endswith("\n"):
            document += "\n"
        separator = "\n" if document else ""
        return f"{document}{separator}{table}\n"

    start = document.index(MARKER)
    end = document.rindex(MARKER) + len(MARKER)
    return document[:start] + table + document[end:]


class ReadmeReport:
    """Writes the rendered benchmark table into a README file."""

    def __init__(self, path: Path):
        self.path: Path = Path(path)

    def write(self, report: BenchmarkReport) -> None:
        """
        Read the README (missing means empty), replace the table, write it back.

        Raises:
            ReportFormatError: If the README carries more than two markers
        """
        if self.path.exists():
            document = self.path.read_text(encoding="utf-8")
        else:
            logger.info(f"README not found, creating {self.path}")
            document = ""

        atomic_write(self.path, replace_table(document, render(report)))
        logger.info(f"Updated benchmark table in {self.path} ({len(report)} rows)")
