"""
Timing aggregation.

Reduces a benchmark's duration samples to count/total/mean/min/max and formats
durations with a unit that keeps the mantissa readable.
"""

from collections.abc import Sequence

from ..exceptions import EmptySampleSet
from ..models import TimingStats

UNITS = ("ns", "µs", "ms", "s")
UNIT_STEP = 1000


def aggregate(samples: Sequence[int]) -> TimingStats:
    """
    Summarize duration samples (nanoseconds).

    Raises:
        EmptySampleSet: If `samples` is empty
    """
    if not samples:
        raise EmptySampleSet()

    # Python ints are unbounded, so the running total cannot overflow.
    total = sum(samples)
    count = len(samples)
    return TimingStats(
        count=count,
        total_ns=total,
        mean_ns=total / count,
        min_ns=min(samples),
        max_ns=max(samples),
    )


def scale_duration(nanos: float) -> tuple[float, str]:
    """
    Pick the unit for a duration.

    Moves to the next unit once the value would round to 1000 or more (at one
    decimal) in the current one; seconds are the largest unit.
    """
    value = float(nanos)
    index = 0
    while index < len(UNITS) - 1 and round(value, 1) >= UNIT_STEP:
        value /= UNIT_STEP
        index += 1
    return value, UNITS[index]


def format_duration(nanos: float) -> str:
    """Format a duration such as 12.3µs."""
    value, unit = scale_duration(nanos)
    return f"{value:.1f}{unit}"
