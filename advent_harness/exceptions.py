"""
Exception classes for the advent harness.

Centralized location for all custom exceptions to avoid circular imports.
"""

from pathlib import Path


class HarnessError(Exception):
    """Base exception for everything raised by the harness."""
    pass


class ValidationError(HarnessError):
    """Base exception for validation-related errors."""
    pass


class InvalidDay(ValidationError):
    """Raised when a day is outside of 1..=25."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Not a valid day: {value!r} (expected an integer in 1..=25)")


class InvalidPart(ValidationError):
    """Raised when a part is not 1 or 2."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Not a valid part: {value!r} (expected 1 or 2)")


class ConfigurationError(HarnessError):
    """Base exception for configuration-related errors."""
    pass


class DataError(HarnessError):
    """Base exception for data file access."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class DataNotFound(DataError):
    """Raised when a data file does not exist."""

    def __init__(self, path: Path):
        super().__init__(f"couldn't get data from path '{path}': file does not exist", path)


class DataUnreadable(DataError):
    """Raised when a data file exists but cannot be read."""

    def __init__(self, path: Path, cause: BaseException):
        self.cause = cause
        super().__init__(f"couldn't get data from path '{path}': {cause}", path)


class BenchmarkError(HarnessError):
    """Base exception for benchmarking errors."""
    pass


class EmptySampleSet(BenchmarkError):
    """Raised when aggregating a benchmark that produced no measurement."""

    def __init__(self) -> None:
        super().__init__("Cannot aggregate an empty sample set")


class BenchmarkAborted(BenchmarkError):
    """Raised when the solution fails during a benchmark session."""

    def __init__(
        self,
        identifier: object,
        iteration: int,
        cause: BaseException,
        warmup: bool = False,
    ):
        self.identifier = identifier
        self.iteration = iteration
        self.cause = cause
        self.warmup = warmup
        phase = "warm-up iteration" if warmup else "iteration"
        super().__init__(
            f"Benchmark of {identifier} aborted on {phase} {iteration}: {cause}"
        )


class ReportFormatError(HarnessError):
    """Raised when a persisted report cannot be parsed or updated."""
    pass


class ExternalToolError(HarnessError):
    """Base exception for errors from the aoc-cli bridge."""
    pass


class ToolNotFound(ExternalToolError):
    """The external program is not present in the environment."""

    def __init__(self, program: str):
        self.program = program
        super().__init__(f"{program} is not present in environment.")


class ToolNotInvocable(ExternalToolError):
    """The external program was found but could not be started."""

    def __init__(self, program: str, cause: BaseException):
        self.program = program
        self.cause = cause
        super().__init__(f"{program} could not be called: {cause}")


class ToolFailed(ExternalToolError):
    """The external program ran but exited with a non-zero status."""

    def __init__(
        self,
        program: str,
        returncode: int,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.program = program
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        message = f"{program} exited with a non-zero status ({returncode})."
        captured = "\n".join(part for part in (stdout, stderr) if part)
        if captured:
            message += f"\n{captured}"
        super().__init__(message)
