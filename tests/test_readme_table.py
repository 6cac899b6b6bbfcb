"""
Tests for benchmark report merging and README rendering.
"""

import os
import stat
import tempfile
from pathlib import Path

import pytest

from advent_harness.exceptions import ReportFormatError
from advent_harness.models import BenchmarkReport, Identifier, TimingStats
from advent_harness.reporting.readme_table import (
    MARKER,
    ReadmeReport,
    merge,
    render,
    replace_table,
    update,
)

MILLIS = 1_000_000


def stats(mean_ms: float, count: int = 10) -> TimingStats:
    mean_ns = mean_ms * MILLIS
    return TimingStats(
        count=count,
        total_ns=int(mean_ns * count),
        mean_ns=mean_ns,
        min_ns=int(mean_ns),
        max_ns=int(mean_ns),
    )


class TestUpdate:
    """Test the report update operation."""

    def test_update_is_idempotent(self) -> None:
        """Applying the same update twice equals applying it once."""
        # Arrange
        report = BenchmarkReport(((Identifier.of(1, 1), stats(1.0)),))
        identifier = Identifier.of(1, 2)

        # Act
        once = update(report, identifier, stats(2.0))
        twice = update(once, identifier, stats(2.0))

        # Assert
        assert once == twice

    def test_last_write_wins(self) -> None:
        identifier = Identifier.of(3, 1)
        report = update(update(BenchmarkReport(), identifier, stats(1.0)), identifier, stats(5.0))

        assert len(report) == 1
        assert report.get(identifier) == stats(5.0)

    def test_unrelated_entries_are_preserved(self) -> None:
        """Updating one entry leaves the others and their order untouched."""
        # Arrange
        report = BenchmarkReport(
            (
                (Identifier.of(1, 1), stats(1.0)),
                (Identifier.of(1, 2), stats(2.0)),
                (Identifier.of(2, 1), stats(3.0)),
            )
        )

        # Act
        updated = update(report, Identifier.of(1, 2), stats(9.0))

        # Assert
        assert list(updated) == [Identifier.of(1, 1), Identifier.of(1, 2), Identifier.of(2, 1)]
        assert updated.get(Identifier.of(1, 1)) == stats(1.0)
        assert updated.get(Identifier.of(2, 1)) == stats(3.0)
        assert updated.get(Identifier.of(1, 2)) == stats(9.0)

    def test_new_identifier_is_appended(self) -> None:
        report = BenchmarkReport(((Identifier.of(5, 1), stats(1.0)),))

        updated = update(report, Identifier.of(2, 1), stats(1.0))

        assert list(updated) == [Identifier.of(5, 1), Identifier.of(2, 1)]
        assert Identifier.of(5, 1) in updated

    def test_merge_appends_new_identifiers_in_order(self) -> None:
        report = BenchmarkReport(((Identifier.of(3, 1), stats(1.0)),))

        merged = merge(
            report,
            {
                Identifier.of(2, 2): stats(2.0),
                Identifier.of(3, 1): stats(3.0),
                Identifier.of(2, 1): stats(4.0),
            },
        )

        assert list(merged) == [Identifier.of(3, 1), Identifier.of(2, 1), Identifier.of(2, 2)]
        assert merged.get(Identifier.of(3, 1)) == stats(3.0)


class TestRender:
    """Test Markdown rendering."""

    def test_render_layout(self) -> None:
        # Arrange
        report = BenchmarkReport(
            (
                (Identifier.of(1, 1), stats(10.0, count=3)),
                (Identifier.of(1, 2), stats(0.5, count=20)),
            )
        )

        # Act
        table = render(report)

        # Assert
        assert table.splitlines() == [
            MARKER,
            "## Benchmarks",
            "",
            "| Day | Part | Mean | Samples |",
            "| :---: | :---: | :---: | :---: |",
            "| [Day 1](./solutions/day01.py) | 1 | `10.0ms` | 3 |",
            "| [Day 1](./solutions/day01.py) | 2 | `500.0µs` | 20 |",
            "",
            "**Total: 10.50ms**",
            MARKER,
        ]

    def test_render_is_deterministic(self) -> None:
        report = BenchmarkReport(((Identifier.of(7, 1), stats(1.25)),))
        assert render(report) == render(report)

    def test_render_empty_report(self) -> None:
        table = render(BenchmarkReport())
        assert "**Total: 0.00ms**" in table
        assert table.startswith(MARKER)
        assert table.endswith(MARKER)


class TestReplaceTable:
    """Test splicing the table into a README."""

    def test_replaces_marked_region(self) -> None:
        document = f"# Title\n\n{MARKER}\nold table\n{MARKER}\n\nFooter\n"

        result = replace_table(document, f"{MARKER}\nnew\n{MARKER}")

        assert result == f"# Title\n\n{MARKER}\nnew\n{MARKER}\n\nFooter\n"

    def test_appends_when_no_marker(self) -> None:
        result = replace_table("# Title", f"{MARKER}\nnew\n{MARKER}")

        assert result == f"# Title\n\n{MARKER}\nnew\n{MARKER}\n"

    def test_empty_document(self) -> None:
        assert replace_table("", "table") == "table\n"

    def test_single_marker_is_replaced(self) -> None:
        result = replace_table(f"before\n{MARKER}\nafter\n", "table")
        assert result == "before\ntable\nafter\n"

    def test_too_many_markers(self) -> None:
        document = "\n".join([MARKER] * 3)
        with pytest.raises(ReportFormatError):
            _ = replace_table(document, "table")

    def test_repeated_writes_are_stable(self) -> None:
        """Rendering the same report twice leaves the README unchanged."""
        table = render(BenchmarkReport(((Identifier.of(1, 1), stats(1.0)),)))
        once = replace_table("# Title\n", table)
        assert replace_table(once, table) == once


class TestReadmeReport:
    """Test writing the table to a README file."""

    def test_creates_missing_readme(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            path = Path(temp_dir) / "README.md"
            report = BenchmarkReport(((Identifier.of(2, 1), stats(3.0)),))

            # Act
            ReadmeReport(path).write(report)

            # Assert
            assert path.read_text() == render(report) + "\n"

    def test_keeps_surrounding_text(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            path = Path(temp_dir) / "README.md"
            _ = path.write_text(f"# Solutions\n\n{MARKER}\n{MARKER}\n\nNotes\n")
            report = BenchmarkReport(((Identifier.of(2, 1), stats(3.0)),))

            # Act
            ReadmeReport(path).write(report)

            # Assert
            content = path.read_text()
            assert content.startswith("# Solutions\n\n")
            assert content.endswith("\n\nNotes\n")
            assert "| [Day 2](./solutions/day02.py) | 1 | `3.0ms` | 10 |" in content
            assert list(Path(temp_dir).iterdir()) == [path]

    def test_rejects_malformed_readme(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "README.md"
            original = "\n".join([MARKER] * 4)
            _ = path.write_text(original)

            with pytest.raises(ReportFormatError):
                ReadmeReport(path).write(BenchmarkReport())

            assert path.read_text() == original

    @pytest.mark.parametrize("mode", [0o644, 0o640, 0o664])
    def test_write_keeps_file_mode(self, mode: int) -> None:
        """Rewriting the README leaves its permissions as they were."""
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            path = Path(temp_dir) / "README.md"
            _ = path.write_text("# Solutions\n")
            os.chmod(path, mode)

            # Act
            ReadmeReport(path).write(BenchmarkReport(((Identifier.of(1, 1), stats(1.0)),)))

            # Assert
            assert stat.S_IMODE(path.stat().st_mode) == mode

    def test_new_readme_follows_umask(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            path = Path(temp_dir) / "README.md"
            previous = os.umask(0o022)

            # Act
            try:
                ReadmeReport(path).write(BenchmarkReport())
            finally:
                _ = os.umask(previous)

            # Assert
            assert stat.S_IMODE(path.stat().st_mode) == 0o644
