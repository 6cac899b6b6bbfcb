"""
Orchestrator for solution runs and benchmark sessions.

Coordinates registry, locator, executor, benchmarker, report storage and the
aoc-cli bridge. Single-threaded: parts and days run strictly one after another.
"""

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from prettytable import PrettyTable

if TYPE_CHECKING:
    from loguru import Logger

from .config import HarnessConfig
from .data.locator import DataLocator
from .exceptions import BenchmarkError, DataError
from .interfaces import ReportStore
from .logging_config import get_logger
from .models import (
    CommandResult,
    DataFile,
    DataFolder,
    Day,
    ExecutionOutcome,
    Identifier,
    TimingStats,
)
from .registry import SolutionRegistry
from .reporting.readme_table import ReadmeReport, merge
from .runners.benchmarker import Benchmarker, BenchmarkBudget
from .runners.executor import Executor
from .storage.timings_storage import TimingsStore
from .timings.aggregator import format_duration
from .tools.aoc_cli import AocCli


@dataclass
class SessionSummary:
    """What happened during one harness invocation."""

    outcomes: list[ExecutionOutcome] = field(default_factory=list)
    timings: dict[Identifier, TimingStats] = field(default_factory=dict)
    failures: list[str] = field(default_factory=list)
    submissions: list[CommandResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class Harness:
    """Main orchestrator for running and benchmarking solutions."""

    def __init__(
        self,
        config: HarnessConfig,
        registry: SolutionRegistry,
        locator: DataLocator | None = None,
        executor: Executor | None = None,
        store: ReportStore | None = None,
        readme: ReadmeReport | None = None,
        aoc: AocCli | None = None,
        stream: TextIO | None = None,
    ):
        """Initialize harness; unspecified components are built from `config`."""
        self.config: HarnessConfig = config
        self.registry: SolutionRegistry = registry
        self.stream: TextIO = stream if stream is not None else sys.stdout
        self.locator: DataLocator = locator or DataLocator(config.root)
        self.executor: Executor = executor or Executor(self.stream)
        self.benchmarker: Benchmarker = Benchmarker(self.executor)
        self.store: ReportStore = store or TimingsStore(config.timings_path)
        self.readme: ReadmeReport = readme or ReadmeReport(config.readme_path)
        self.aoc: AocCli = aoc or AocCli(self.locator, year=config.year, stream=self.stream)

        # Setup logger
        self.logger: Logger = get_logger("harness")

    def solve(
        self,
        day: Day,
        time: bool = False,
        budget: BenchmarkBudget | None = None,
        submit_part: int | None = None,
        summary: SessionSummary | None = None,
        persist: bool = True,
    ) -> SessionSummary:
        """
        Run every registered part of a day.

        Args:
            day: Day to run
            time: Benchmark each part after its first run
            budget: Benchmark budget (default: derived from the first run)
            submit_part: Submit this part's answer through aoc-cli
            summary: Summary to add to (a new one by default)
            persist: Store benchmark results once the day is done
        """
        if summary is None:
            summary = SessionSummary()

        identifiers = self.registry.parts(day)
        if not identifiers:
            message = f"No solution registered for Day {day}"
            self.logger.error(message)
            print(message, file=self.stream)
            summary.failures.append(message)
            return summary

        try:
            input = self.locator.read(DataFolder.INPUTS, DataFile(day))
        except DataError as e:
            message = f"Day {day}: {e}"
            self.logger.error(f"Skipping Day {day}: {e}")
            print(message, file=self.stream)
            summary.failures.append(message)
            return summary

        for identifier in identifiers:
            outcome = self._run_part(identifier, input, time, budget, summary)
            if submit_part is not None and identifier.part == submit_part:
                self._submit(outcome, summary)

        if submit_part is not None and Identifier(day, submit_part) not in self.registry:
            message = f"{Identifier(day, submit_part)} has no solution to submit"
            self.logger.error(message)
            print(message, file=self.stream)
            summary.failures.append(message)

        if time and persist:
            self.persist(summary.timings)
        return summary

    def run_days(
        self,
        days: list[Day] | None = None,
        time: bool = False,
        budget: BenchmarkBudget | None = None,
    ) -> SessionSummary:
        """Run several days (default: every registered day), then print a summary."""
        summary = SessionSummary()
        for day in days if days is not None else self.registry.days():
            print(f"Day {day}", file=self.stream)
            print("------", file=self.stream)
            _ = self.solve(day, time=time, budget=budget, summary=summary, persist=False)
            print("", file=self.stream)

        if time:
            self.persist(summary.timings)

        self.print_summary(summary)
        return summary

    def persist(self, timings: dict[Identifier, TimingStats]) -> None:
        """Merge session timings into the stored report and re-render the README."""
        if not timings:
            self.logger.info("No benchmark results to store")
            return

        report = merge(self.store.load(), timings)
        self.store.save(report)
        self.readme.write(report)
        self.logger.info(f"Stored {len(timings)} benchmark results")
        print(f"Stored updated benchmarks for {len(timings)} parts.", file=self.stream)

    def print_summary(self, summary: SessionSummary) -> None:
        """Print a table with one row per executed part."""
        if not summary.outcomes:
            return

        table = PrettyTable()
        table.field_names = ["Day", "Part", "Result", "Time", "Samples"]
        table.align["Result"] = "l"
        table.align["Time"] = "r"
        table.align["Samples"] = "r"

        for outcome in summary.outcomes:
            identifier = outcome.identifier
            if not outcome.ok:
                result = "failed"
            elif outcome.value is None:
                result = "✖"
            else:
                result = outcome.rendered.splitlines()[0] if outcome.rendered else ""

            stats = summary.timings.get(identifier)
            if stats is not None:
                time, samples = format_duration(stats.mean_ns), stats.count
            else:
                time, samples = format_duration(outcome.elapsed_ns), 1

            table.add_row([str(identifier.day), identifier.part, result, time, samples])

        print(table, file=self.stream)

    def _run_part(
        self,
        identifier: Identifier,
        input: str,
        time: bool,
        budget: BenchmarkBudget | None,
        summary: SessionSummary,
    ) -> ExecutionOutcome:
        """Run one part once, and benchmark it in time mode."""
        solve = self.registry.get(identifier)

        if not time:
            outcome = self.executor.run(identifier, input, solve)
        else:
            outcome = self.executor.measure(identifier, input, solve)
            if outcome.ok:
                self._benchmark_part(identifier, input, outcome, budget, summary)
            else:
                self.executor.report(outcome)

        summary.outcomes.append(outcome)
        if not outcome.ok:
            summary.failures.append(f"{identifier}: {' <- '.join(outcome.cause_chain)}")
        return outcome

    def _benchmark_part(
        self,
        identifier: Identifier,
        input: str,
        outcome: ExecutionOutcome,
        budget: BenchmarkBudget | None,
        summary: SessionSummary,
    ) -> None:
        session_budget = budget or BenchmarkBudget.from_baseline(outcome.elapsed_ns)
        self.executor.notice(f"{identifier}: benchmarking...")
        solve = self.registry.get(identifier)

        try:
            stats = self.benchmarker.session(identifier, input, solve, session_budget)
        except BenchmarkError as e:
            self.executor.report(outcome)
            print(f"  benchmark aborted: {e}", file=self.stream)
            summary.failures.append(str(e))
            return

        summary.timings[identifier] = stats
        self.executor.report(outcome, stats.mean_ns, stats.count)

    def _submit(self, outcome: ExecutionOutcome, summary: SessionSummary) -> None:
        """Submit an answer; tool errors propagate to the caller."""
        identifier = outcome.identifier
        if not outcome.solved:
            message = f"{identifier} has no answer to submit"
            self.logger.error(message)
            print(message, file=self.stream)
            summary.failures.append(message)
            return

        assert identifier.part is not None
        self.aoc.check()
        print("Submitting result via aoc-cli...", file=self.stream)
        result = self.aoc.submit(identifier.day, identifier.part, outcome.rendered)
        summary.submissions.append(result)
