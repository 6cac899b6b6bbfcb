"""
Test doubles shared by the test modules.
"""

from collections.abc import Iterable, Sequence

from typing_extensions import override

from advent_harness.interfaces import CommandRunner
from advent_harness.models import CommandResult


class SteppingClock:
    """Clock where each start/stop pair is one of `durations` apart."""

    def __init__(self, durations: Iterable[int]):
        self.durations = iter(durations)
        self.now = 0
        self.started = False

    def __call__(self) -> int:
        if self.started:
            self.now += next(self.durations)
        else:
            self.now += 1
        self.started = not self.started
        return self.now


class RecordingRunner(CommandRunner):
    """CommandRunner that records calls instead of starting processes."""

    def __init__(
        self,
        returncode: int = 0,
        stderr: str | None = None,
        error: OSError | None = None,
        error_on_capture: OSError | None = None,
    ):
        self.calls = list[tuple[list[str], bool]]()
        self.returncode = returncode
        self.stderr = stderr
        self.error = error
        self.error_on_capture = error_on_capture

    @override
    def run(self, args: Sequence[str], *, capture: bool = False) -> CommandResult:
        self.calls.append((list(args), capture))
        if capture and self.error_on_capture is not None:
            raise self.error_on_capture
        if not capture and self.error is not None:
            raise self.error
        return CommandResult(args=list(args), returncode=self.returncode, stderr=self.stderr)
