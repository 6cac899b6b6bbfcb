"""
Single-run executor.

Invokes a solution once, timing strictly around the call, and prints a one-line
result. Solution failures are captured into the outcome, never raised.
"""

import sys
import time
from collections.abc import Callable
from typing import TextIO

from ..interfaces import Solution
from ..logging_config import get_logger
from ..models import ExecutionOutcome, Identifier
from ..timings.aggregator import format_duration

ANSI_ITALIC = "\x1b[3m"
ANSI_BOLD = "\x1b[1m"
ANSI_RESET = "\x1b[0m"

# Module-level logger
logger = get_logger("executor")


def cause_chain(error: BaseException) -> list[str]:
    """Messages of an exception and of everything it was raised from."""
    chain = list[str]()
    seen = set[int]()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        message = str(current)
        chain.append(f"{type(current).__name__}: {message}" if message else type(current).__name__)
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None
    return chain


def format_timing(duration_ns: float, samples: int = 1) -> str:
    if samples == 1:
        return f"({format_duration(duration_ns)})"
    return f"({format_duration(duration_ns)} @ {samples} samples)"


def format_result_line(
    outcome: ExecutionOutcome,
    duration_ns: float | None = None,
    samples: int = 1,
    color: bool = False,
) -> str:
    """
    Render an outcome for the terminal.

    Args:
        outcome: Outcome of a measured call
        duration_ns: Duration to show (defaults to the outcome's own elapsed time)
        samples: Number of samples `duration_ns` was averaged over
        color: Emphasize the answer with ANSI bold
    """
    label = str(outcome.identifier)
    timing = format_timing(outcome.elapsed_ns if duration_ns is None else duration_ns, samples)

    if not outcome.ok:
        lines = [f"{label}: failed {timing}"]
        chain = outcome.cause_chain
        if chain:
            lines.append(f"  {chain[0]}")
            lines.extend(f"  caused by: {cause}" for cause in chain[1:])
        return "\n".join(lines)

    if outcome.value is None:
        return f"{label}: ✖"

    if "\n" in outcome.rendered:
        return f"{label}: ▼ {timing}\n{outcome.rendered}"

    if color:
        return f"{label}: {ANSI_BOLD}{outcome.rendered}{ANSI_RESET} {timing}"
    return f"{label}: {outcome.rendered} {timing}"


class Executor:
    """
    Runs a solution function once and reports the result.

    The measuring core (`measure`) is shared with the benchmarker so both paths
    time solutions identically.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
        color: bool | None = None,
    ):
        """
        Initialize executor.

        Args:
            stream: Where results are printed (default: sys.stdout)
            clock: Monotonic nanosecond clock
            color: Use ANSI styling (default: only when the stream is a TTY)
        """
        self.stream: TextIO = stream if stream is not None else sys.stdout
        self.clock: Callable[[], int] = clock
        if color is None:
            isatty = getattr(self.stream, "isatty", None)
            color = bool(isatty and isatty())
        self.color: bool = color

    def measure(self, identifier: Identifier, input: str, solve: Solution) -> ExecutionOutcome:
        """
        Call `solve(input)` once and time the call.

        Returns:
            ExecutionOutcome carrying either the value or the captured exception
        """
        start = self.clock()
        try:
            value = solve(input)
        except Exception as e:
            elapsed = self.clock() - start
            return self._failed(identifier, e, elapsed)
        elapsed = self.clock() - start

        # str() of the answer may raise as well
        try:
            rendered = "" if value is None else str(value)
        except Exception as e:
            return self._failed(identifier, e, elapsed)

        return ExecutionOutcome(
            identifier=identifier,
            value=value,
            rendered=rendered,
            elapsed_ns=elapsed,
        )

    def _failed(self, identifier: Identifier, error: Exception, elapsed_ns: int) -> ExecutionOutcome:
        return ExecutionOutcome(
            identifier=identifier,
            error=error,
            cause_chain=cause_chain(error),
            elapsed_ns=elapsed_ns,
        )

    def run(self, identifier: Identifier, input: str, solve: Solution) -> ExecutionOutcome:
        """Measure a single call and print its result line."""
        outcome = self.measure(identifier, input, solve)
        self.report(outcome)
        return outcome

    def report(
        self,
        outcome: ExecutionOutcome,
        duration_ns: float | None = None,
        samples: int = 1,
    ) -> None:
        """Print the result line for an outcome."""
        if not outcome.ok:
            logger.error(
                f"Solution for {outcome.identifier} failed: {' <- '.join(outcome.cause_chain)}"
            )
        else:
            logger.debug(f"{outcome.identifier} finished in {outcome.elapsed_ns}ns")

        print(
            format_result_line(outcome, duration_ns, samples, color=self.color),
            file=self.stream,
        )

    def notice(self, message: str) -> None:
        """Print an intermediate status line, in italics when styled."""
        if self.color:
            message = f"{ANSI_ITALIC}{message}{ANSI_RESET}"
        print(message, file=self.stream)
