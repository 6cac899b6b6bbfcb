"""
Wrapper around the "aoc" command line (aoc-cli).

Builds argument lists for its read/download/submit subcommands and maps the ways
an invocation can fail onto ToolNotFound, ToolNotInvocable and ToolFailed.
Nothing is retried.
"""

import sys
from collections.abc import Sequence
from typing import TextIO

from ..data.locator import DataLocator
from ..exceptions import ToolFailed, ToolNotFound, ToolNotInvocable
from ..interfaces import CommandRunner
from ..logging_config import get_logger
from ..models import CommandResult, DataFile, DataFolder, Day, parse_part
from .process import SubprocessRunner

DEFAULT_PROGRAM = "aoc"
INSTALL_HINT = 'Try running "cargo install aoc-cli" to install it.'

# Module-level logger
logger = get_logger("aoc_cli")


class AocCli:
    """
    Bridge to the aoc-cli program.

    Input and puzzle paths passed to the tool are absolute, so the tool writes
    into the project's data/ directory wherever the process was started.
    """

    def __init__(
        self,
        locator: DataLocator,
        runner: CommandRunner | None = None,
        year: int | None = None,
        program: str = DEFAULT_PROGRAM,
        stream: TextIO | None = None,
    ):
        """
        Initialize the bridge.

        Args:
            locator: Resolves where inputs and puzzle descriptions live
            runner: Runs the program (default: SubprocessRunner inheriting stdio)
            year: Puzzle year passed as --year when set
            program: Executable name
            stream: Where the bridge's own messages are printed (default: stdout)
        """
        self.locator: DataLocator = locator
        self.runner: CommandRunner = runner if runner is not None else SubprocessRunner()
        self.year: int | None = year
        self.program: str = program
        self.stream: TextIO = stream if stream is not None else sys.stdout

    def build_args(self, command: str, args: Sequence[str], day: Day) -> list[str]:
        """
        Assemble the argument list (without the program name).

        Subcommand flags come first, then the common --year/--day flags and the
        subcommand itself.
        """
        common = list[str]()
        if self.year is not None:
            common += ["--year", str(self.year)]
        common += ["--day", str(day), command]
        return [*args, *common]

    def check(self) -> None:
        """
        Verify that the program can be found with a no-op invocation.

        Raises:
            ToolNotFound: If the program could not be started at all
        """
        try:
            self.runner.run([self.program, "-V"], capture=True)
        except OSError as e:
            logger.error(f"{self.program} not found: {e}")
            raise ToolNotFound(self.program) from e

    def read(self, day: Day) -> CommandResult:
        """Print the puzzle description and save it to data/puzzles."""
        puzzle_path = self.locator.resolve(DataFolder.PUZZLES, DataFile(day))
        args = self.build_args(
            "read",
            ["--description-only", "--puzzle-file", str(puzzle_path)],
            day,
        )
        return self._call(args)

    def download(self, day: Day) -> CommandResult:
        """Download the input and puzzle description for a day."""
        input_path = self.locator.resolve(DataFolder.INPUTS, DataFile(day))
        puzzle_path = self.locator.resolve(DataFolder.PUZZLES, DataFile(day))
        input_path.parent.mkdir(parents=True, exist_ok=True)
        puzzle_path.parent.mkdir(parents=True, exist_ok=True)

        args = self.build_args(
            "download",
            [
                "--overwrite",
                "--input-file",
                str(input_path),
                "--puzzle-file",
                str(puzzle_path),
            ],
            day,
        )
        result = self._call(args)

        print("---", file=self.stream)
        print(f'🎄 Successfully wrote input to "{input_path}".', file=self.stream)
        print(f'🎄 Successfully wrote puzzle to "{puzzle_path}".', file=self.stream)
        return result

    def submit(self, day: Day, part: int, answer: str) -> CommandResult:
        """
        Submit an answer.

        The tool's submit grammar takes part and answer as trailing positional
        arguments after the subcommand.
        """
        part = parse_part(part)
        args = self.build_args("submit", [], day) + [str(part), str(answer)]
        return self._call(args)

    def _call(self, args: list[str]) -> CommandResult:
        """
        Invoke the program.

        Raises:
            ToolNotInvocable: If the subprocess could not be started
            ToolFailed: If it exited with a non-zero status
        """
        cmd = [self.program, *args]
        logger.info(f"Calling {' '.join(cmd)}")
        try:
            result = self.runner.run(cmd)
        except OSError as e:
            logger.error(f"{self.program} could not be called: {e}")
            raise ToolNotInvocable(self.program, e) from e

        if not result.success:
            logger.error(f"{self.program} exited with status {result.returncode}")
            raise ToolFailed(self.program, result.returncode, result.stdout, result.stderr)

        return result
