"""
JSON timings storage implementation.

Persists the cumulative benchmark report to a single JSON document
(.timings.json at the project root). The document is rewritten as a whole on
every save; there is no locking, so report-updating sessions must not overlap.
"""

import json
from pathlib import Path
from typing import cast

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from typing_extensions import override

from ..exceptions import InvalidDay, InvalidPart, ReportFormatError
from ..interfaces import ReportStore, TimingEntry, TimingsDocument
from ..logging_config import get_logger
from ..models import BenchmarkReport, Identifier, TimingStats
from .files import atomic_write

DOCUMENT_VERSION = 1

# Module-level logger
logger = get_logger("timings_storage")


def report_to_document(report: BenchmarkReport) -> TimingsDocument:
    """Convert a report to its JSON-serializable form, preserving order."""
    entries = list[TimingEntry]()
    for identifier, stats in report.items():
        entry = {"day": identifier.day.value, "part": identifier.part, **stats.to_dict()}
        entries.append(cast(TimingEntry, entry))
    return TimingsDocument(version=DOCUMENT_VERSION, entries=entries)


def document_to_report(document: TimingsDocument) -> BenchmarkReport:
    """
    Convert a validated document back into a report.

    Raises:
        ReportFormatError: If an entry carries an invalid day/part or repeats an
            identifier
    """
    pairs = list[tuple[Identifier, TimingStats]]()
    seen = set[Identifier]()
    for entry in document["entries"]:
        try:
            identifier = Identifier.of(entry["day"], entry["part"])
        except (InvalidDay, InvalidPart) as e:
            raise ReportFormatError(f"Invalid timings entry {entry}: {e}") from e
        if identifier in seen:
            raise ReportFormatError(f"Duplicate timings entry for {identifier}")
        seen.add(identifier)
        pairs.append((identifier, TimingStats.from_dict(dict(entry))))
    return BenchmarkReport(tuple(pairs))


class TimingsStore(ReportStore):
    """
    JSON-file report store.

    A missing file is an empty report; a malformed file is an error rather than
    being silently replaced.
    """

    path: Path

    def __init__(self, path: Path):
        """
        Initialize timings store.

        Args:
            path: Path of the JSON document
        """
        self.path = Path(path)

    @override
    def load(self) -> BenchmarkReport:
        """Load the report from JSON."""
        if not self.path.exists():
            logger.debug(f"No timings file at {self.path}, starting empty")
            return BenchmarkReport()

        logger.info(f"Loading timings from {self.path}")
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            document = TypeAdapter(TimingsDocument).validate_python(raw)
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.error(f"Failed to load timings from {self.path}: {e}")
            raise ReportFormatError(f"Malformed timings file {self.path}: {e}") from e

        if document["version"] != DOCUMENT_VERSION:
            raise ReportFormatError(
                f"Unsupported timings file version {document['version']} in {self.path}"
            )

        report = document_to_report(document)
        logger.debug(f"Loaded {len(report)} timing entries")
        return report

    @override
    def save(self, report: BenchmarkReport) -> None:
        """Write the report as JSON, replacing the previous file atomically."""
        document = report_to_document(report)
        atomic_write(self.path, json.dumps(document, indent=2, ensure_ascii=False) + "\n")
        logger.info(f"Saved {len(report)} timing entries to {self.path}")
