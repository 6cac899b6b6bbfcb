"""
Subprocess command runner.

By default the child inherits the parent's stdout/stderr so the operator sees the
tool's own output; other handles (a file, subprocess.PIPE) can be supplied.
"""

import subprocess
from collections.abc import Sequence
from typing import IO

from typing_extensions import override

from ..interfaces import CommandRunner
from ..logging_config import get_logger
from ..models import CommandResult

logger = get_logger("process")

StreamTarget = IO[str] | int | None


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by subprocess.run."""

    def __init__(self, stdout: StreamTarget = None, stderr: StreamTarget = None):
        """
        Initialize subprocess runner.

        Args:
            stdout: Handle for the child's stdout (None inherits the parent's)
            stderr: Handle for the child's stderr (None inherits the parent's)
        """
        self.stdout: StreamTarget = stdout
        self.stderr: StreamTarget = stderr

    @override
    def run(self, args: Sequence[str], *, capture: bool = False) -> CommandResult:
        """Run a command to completion; OSError propagates if it cannot start."""
        cmd = [str(arg) for arg in args]
        logger.info(f"Running command: {' '.join(cmd)}")

        if capture:
            completed = subprocess.run(cmd, capture_output=True, text=True, check=False)
        else:
            completed = subprocess.run(
                cmd, stdout=self.stdout, stderr=self.stderr, text=True, check=False
            )

        logger.debug(f"{cmd[0]} exited with status {completed.returncode}")
        return CommandResult(
            args=cmd,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
