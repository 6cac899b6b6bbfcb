"""
External tool bridges.

Available implementations:
- AocCli: wraps the aoc-cli program (read, download, submit)
- SubprocessRunner: CommandRunner used by the bridges
"""

from .aoc_cli import AocCli
from .process import SubprocessRunner

__all__ = ["AocCli", "SubprocessRunner"]
