"""
Tests for the benchmarker and its budget.
"""

import io
from itertools import repeat

import pytest

from advent_harness.exceptions import BenchmarkAborted, ConfigurationError
from advent_harness.models import Identifier
from advent_harness.runners.benchmarker import BenchmarkBudget, Benchmarker
from advent_harness.runners.executor import Executor

from .fakes import SteppingClock

MILLIS = 1_000_000


def make_benchmarker(durations=None) -> Benchmarker:
    clock = SteppingClock(durations if durations is not None else repeat(100))
    return Benchmarker(Executor(io.StringIO(), clock=clock, color=False))


class CountingSolution:
    """Solution that counts its calls and optionally fails on one of them."""

    def __init__(self, fail_on: int | None = None):
        self.calls = 0
        self.fail_on = fail_on

    def __call__(self, input: str) -> int:
        self.calls += 1
        if self.calls == self.fail_on:
            raise ValueError(f"failure on call {self.calls}")
        return len(input)


class TestBenchmarkBudget:
    """Test budget validation and derivation."""

    def test_requires_a_bound(self) -> None:
        with pytest.raises(ConfigurationError):
            _ = BenchmarkBudget()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_iterations": 0},
            {"max_iterations": -3},
            {"max_wall_time_ns": 0},
            {"max_iterations": 5, "warmup_iterations": -1},
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ConfigurationError):
            _ = BenchmarkBudget(**kwargs)

    @pytest.mark.parametrize(
        "base_ns, expected",
        [
            (1 * MILLIS, 1_000),
            (0, 10_000),
            (50_000, 10_000),
            (2_000 * MILLIS, 10),
            (200 * MILLIS, 10),
        ],
    )
    def test_from_baseline(self, base_ns: int, expected: int) -> None:
        """Derived iteration counts aim for one second, clamped to 10..=10000."""
        budget = BenchmarkBudget.from_baseline(base_ns)
        assert budget.max_iterations == expected
        assert budget.max_wall_time_ns is None
        assert budget.warmup_iterations == 0

    def test_exhausted(self) -> None:
        budget = BenchmarkBudget(max_iterations=3, max_wall_time_ns=100)
        assert not budget.exhausted(2, 99)
        assert budget.exhausted(3, 0)
        assert budget.exhausted(0, 100)


class TestBenchmarker:
    """Test Benchmarker behavior through public interface."""

    def test_warmup_is_executed_but_not_sampled(self) -> None:
        """5 measured iterations after 2 warm-ups yield exactly 5 samples."""
        # Arrange
        benchmarker = make_benchmarker()
        solve = CountingSolution()
        budget = BenchmarkBudget(max_iterations=5, warmup_iterations=2)

        # Act
        samples = benchmarker.benchmark(Identifier.of(1, 1), "abc", solve, budget)

        # Assert
        assert len(samples) == 5
        assert solve.calls == 7
        assert samples == [100] * 5

    def test_session_aggregates_samples(self) -> None:
        benchmarker = make_benchmarker([5 * MILLIS, 10 * MILLIS, 15 * MILLIS])

        stats = benchmarker.session(
            Identifier.of(1, 1), "", CountingSolution(), BenchmarkBudget(max_iterations=3)
        )

        assert stats.count == 3
        assert stats.mean_ns == 10 * MILLIS
        assert stats.min_ns == 5 * MILLIS
        assert stats.max_ns == 15 * MILLIS

    def test_failure_aborts_session(self) -> None:
        """A failure on iteration 3 aborts with no statistics."""
        # Arrange
        benchmarker = make_benchmarker()
        solve = CountingSolution(fail_on=3)
        budget = BenchmarkBudget(max_iterations=5)

        # Act / Assert
        with pytest.raises(BenchmarkAborted) as exc_info:
            _ = benchmarker.session(Identifier.of(4, 2), "", solve, budget)

        error = exc_info.value
        assert error.iteration == 3
        assert not error.warmup
        assert isinstance(error.cause, ValueError)
        assert solve.calls == 3

    def test_warmup_failure_aborts_session(self) -> None:
        benchmarker = make_benchmarker()
        budget = BenchmarkBudget(max_iterations=5, warmup_iterations=2)

        with pytest.raises(BenchmarkAborted) as exc_info:
            _ = benchmarker.benchmark(Identifier.of(1, 1), "", CountingSolution(fail_on=1), budget)

        assert exc_info.value.warmup
        assert exc_info.value.iteration == 1

    def test_wall_time_bound_stops_between_iterations(self) -> None:
        """Iteration stops once the measured time reaches the bound."""
        # Arrange - every call takes 4ms, the bound is 10ms
        benchmarker = make_benchmarker(repeat(4 * MILLIS))
        budget = BenchmarkBudget(max_wall_time_ns=10 * MILLIS)

        # Act
        samples = benchmarker.benchmark(Identifier.of(1, 1), "", CountingSolution(), budget)

        # Assert - 4 + 4 < 10, the third call overruns by less than one iteration
        assert samples == [4 * MILLIS] * 3

    def test_iteration_bound_wins_when_reached_first(self) -> None:
        benchmarker = make_benchmarker(repeat(1))
        budget = BenchmarkBudget(max_iterations=4, max_wall_time_ns=10 * MILLIS)

        samples = benchmarker.benchmark(Identifier.of(1, 1), "", CountingSolution(), budget)

        assert len(samples) == 4
