"""
Scaffolding for a new day: a solution module and empty data files.
"""

import sys
from pathlib import Path
from typing import TextIO

from .config import HarnessConfig
from .data.locator import DataLocator
from .logging_config import get_logger
from .models import DataFile, DataFolder, Day
from .registry import module_file_name
from .storage.files import atomic_write

MODULE_TEMPLATE = '''"""Day {day}."""

from advent_harness import solution

DAY = {number}


def part_one(input: str) -> int | None:
    return None


def part_two(input: str) -> int | None:
    return None


if __name__ == "__main__":
    raise SystemExit(solution(DAY, part_one, part_two))
'''

logger = get_logger("scaffold")


def render_module(day: Day) -> str:
    return MODULE_TEMPLATE.format(day=day, number=day.value)


def scaffold(
    config: HarnessConfig,
    day: Day,
    overwrite: bool = False,
    locator: DataLocator | None = None,
    stream: TextIO | None = None,
) -> Path:
    """
    Create solutions/dayNN.py and empty input/example files.

    Existing data files are left untouched.

    Raises:
        FileExistsError: If the module exists and `overwrite` is False
    """
    if stream is None:
        stream = sys.stdout
    if locator is None:
        locator = DataLocator(config.root)

    module_path = config.solutions_dir / module_file_name(day)
    if module_path.exists() and not overwrite:
        logger.error(f"Module file already exists: {module_path}")
        raise FileExistsError(f"Module file already exists: {module_path}")

    atomic_write(module_path, render_module(day))
    logger.info(f"Created module file {module_path}")
    print(f'Created module file "{module_path}"', file=stream)

    for folder in (DataFolder.INPUTS, DataFolder.EXAMPLES):
        _, created = locator.ensure_file(folder, DataFile(day))
        shown = locator.relative_path(folder, DataFile(day))
        if created:
            print(f'Created empty file "{shown}"', file=stream)
        else:
            print(f'Kept existing file "{shown}"', file=stream)

    print("---", file=stream)
    print(f"🎄 Type `python -m advent_harness solve {day}` to run your solution.", file=stream)
    return module_path
