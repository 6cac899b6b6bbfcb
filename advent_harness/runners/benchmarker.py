"""
Multi-run benchmarker.

Re-runs a solution under an iteration/time budget and collects one duration
sample per measured iteration. Budgets are only checked between iterations, so
a single slow call can overrun the time bound by up to one iteration.
"""

from dataclasses import dataclass

from ..exceptions import BenchmarkAborted, ConfigurationError
from ..interfaces import Solution
from ..logging_config import get_logger
from ..models import Identifier, TimingStats
from ..timings.aggregator import aggregate
from .executor import Executor

NANOS_PER_SECOND = 1_000_000_000

# Bounds of the iteration count derived from a baseline run
MIN_BASELINE_ITERATIONS = 10
MAX_BASELINE_ITERATIONS = 10_000
MIN_BASELINE_NANOS = 10

logger = get_logger("benchmarker")


@dataclass(frozen=True)
class BenchmarkBudget:
    """Configuration bounding one benchmark session."""

    max_iterations: int | None = None  # measured iterations, warm-up excluded
    max_wall_time_ns: int | None = None  # stop once measured time exceeds this
    warmup_iterations: int = 0  # executed but not sampled

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_iterations is None and self.max_wall_time_ns is None:
            raise ConfigurationError(
                "A benchmark budget needs max_iterations or max_wall_time_ns"
            )
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise ConfigurationError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )
        if self.max_wall_time_ns is not None and self.max_wall_time_ns <= 0:
            raise ConfigurationError(
                f"max_wall_time_ns must be positive, got {self.max_wall_time_ns}"
            )
        if self.warmup_iterations < 0:
            raise ConfigurationError(
                f"warmup_iterations must not be negative, got {self.warmup_iterations}"
            )

    @classmethod
    def from_baseline(
        cls,
        base_ns: int,
        max_wall_time_ns: int | None = None,
        warmup_iterations: int = 0,
    ) -> "BenchmarkBudget":
        """
        Derive a budget from a single run: aim for about one second of samples,
        with at least 10 and at most 10000 iterations.
        """
        iterations = NANOS_PER_SECOND // max(base_ns, MIN_BASELINE_NANOS)
        iterations = min(MAX_BASELINE_ITERATIONS, max(iterations, MIN_BASELINE_ITERATIONS))
        return cls(
            max_iterations=iterations,
            max_wall_time_ns=max_wall_time_ns,
            warmup_iterations=warmup_iterations,
        )

    def exhausted(self, iterations: int, elapsed_ns: int) -> bool:
        """Whether no further iteration may be started."""
        if self.max_iterations is not None and iterations >= self.max_iterations:
            return True
        if self.max_wall_time_ns is not None and elapsed_ns >= self.max_wall_time_ns:
            return True
        return False


class Benchmarker:
    """Repeatedly measures a solution through the executor's timing core."""

    def __init__(self, executor: Executor):
        """
        Initialize benchmarker.

        Args:
            executor: Executor whose `measure` is used for every iteration
        """
        self.executor: Executor = executor

    def benchmark(
        self,
        identifier: Identifier,
        input: str,
        solve: Solution,
        budget: BenchmarkBudget,
    ) -> list[int]:
        """
        Run a benchmark session.

        Returns:
            One duration (ns) per measured iteration

        Raises:
            BenchmarkAborted: If the solution fails on any iteration; samples
                collected so far are discarded
        """
        logger.info(f"Benchmarking {identifier} with {budget}")

        for iteration in range(1, budget.warmup_iterations + 1):
            outcome = self.executor.measure(identifier, input, solve)
            if outcome.error is not None:
                logger.error(f"{identifier} failed during warm-up iteration {iteration}")
                raise BenchmarkAborted(identifier, iteration, outcome.error, warmup=True) from outcome.error

        samples = list[int]()
        elapsed = 0
        while not budget.exhausted(len(samples), elapsed):
            outcome = self.executor.measure(identifier, input, solve)
            if outcome.error is not None:
                iteration = len(samples) + 1
                logger.error(
                    f"{identifier} failed on iteration {iteration}, discarding {len(samples)} samples"
                )
                raise BenchmarkAborted(identifier, iteration, outcome.error) from outcome.error
            samples.append(outcome.elapsed_ns)
            elapsed += outcome.elapsed_ns

        logger.info(f"Collected {len(samples)} samples for {identifier} in {elapsed}ns")
        return samples

    def session(
        self,
        identifier: Identifier,
        input: str,
        solve: Solution,
        budget: BenchmarkBudget,
    ) -> TimingStats:
        """Benchmark and aggregate in one step."""
        return aggregate(self.benchmark(identifier, input, solve, budget))
