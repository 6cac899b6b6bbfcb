"""
Solution registry.

An explicit table from (day, part) to solution function, built once at startup
either by registering functions directly or by loading solution modules
(solutions/dayNN.py defining part_one and/or part_two).
"""

import importlib.util
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from types import ModuleType

from .exceptions import ConfigurationError, InvalidDay
from .interfaces import Solution
from .logging_config import get_logger
from .models import Day, Identifier

PART_FUNCTIONS = {1: "part_one", 2: "part_two"}
MODULE_PATTERN = "day[0-9][0-9].py"
MODULE_PACKAGE = "advent_solutions"

logger = get_logger("registry")


def module_file_name(day: Day) -> str:
    return f"day{day}.py"


class SolutionRegistry:
    """Mapping from identifier to solution function."""

    def __init__(self) -> None:
        self._solutions = dict[Identifier, Solution]()

    def register(self, day: Day | int, part: int, func: Solution) -> Identifier:
        """
        Register a solution for one part of a day.

        Raises:
            ConfigurationError: If the part is already registered
        """
        if not isinstance(day, Day):
            day = Day(day)
        identifier = Identifier(day, part)
        if identifier in self._solutions:
            raise ConfigurationError(f"Solution already registered for {identifier}")
        self._solutions[identifier] = func
        logger.debug(f"Registered {identifier}: {getattr(func, '__qualname__', func)}")
        return identifier

    def part(self, day: Day | int, part: int) -> Callable[[Solution], Solution]:
        """Decorator form of `register`."""

        def decorator(func: Solution) -> Solution:
            self.register(day, part, func)
            return func

        return decorator

    def register_module(self, day: Day, module: ModuleType) -> list[Identifier]:
        """Register the part_one/part_two functions a module defines."""
        registered = list[Identifier]()
        for part, name in PART_FUNCTIONS.items():
            func = getattr(module, name, None)
            if callable(func):
                registered.append(self.register(day, part, func))
        if not registered:
            logger.warning(f"Module {module.__name__} defines no part_one/part_two")
        return registered

    def get(self, identifier: Identifier) -> Solution:
        """Get the solution for an identifier."""
        if identifier not in self._solutions:
            raise KeyError(f"No solution registered for {identifier}")
        return self._solutions[identifier]

    def parts(self, day: Day) -> list[Identifier]:
        """Registered identifiers of a day, in part order."""
        return sorted(
            (identifier for identifier in self._solutions if identifier.day == day),
            key=lambda identifier: identifier.sort_key,
        )

    def days(self) -> list[Day]:
        return sorted({identifier.day for identifier in self._solutions})

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._solutions

    def __iter__(self) -> Iterator[Identifier]:
        return iter(sorted(self._solutions, key=lambda identifier: identifier.sort_key))

    def __len__(self) -> int:
        return len(self._solutions)


def load_module(path: Path) -> ModuleType:
    """
    Import a solution module from its file path.

    Raises:
        ConfigurationError: If the module cannot be imported
    """
    name = f"{MODULE_PACKAGE}.{path.stem}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Cannot import solution module {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[name]
        logger.error(f"Importing {path} failed: {e}")
        raise ConfigurationError(f"Importing solution module {path} failed: {e}") from e
    return module


def day_of_module(path: Path) -> Day:
    """Day encoded in a dayNN.py file name."""
    try:
        return Day.parse(path.stem.removeprefix("day"))
    except InvalidDay as e:
        raise ConfigurationError(f"Solution module {path.name} does not name a valid day") from e


def discover_modules(solutions_dir: Path) -> list[Path]:
    if not solutions_dir.is_dir():
        logger.warning(f"Solutions directory does not exist: {solutions_dir}")
        return []
    return sorted(solutions_dir.glob(MODULE_PATTERN))


def load_solutions(solutions_dir: Path, days: list[Day] | None = None) -> SolutionRegistry:
    """
    Build a registry from the solution modules in a directory.

    Args:
        solutions_dir: Directory holding dayNN.py modules
        days: Only load these days (default: every module found)
    """
    registry = SolutionRegistry()
    for path in discover_modules(solutions_dir):
        day = day_of_module(path)
        if days is not None and day not in days:
            continue
        registry.register_module(day, load_module(path))

    logger.info(f"Loaded {len(registry)} solutions from {solutions_dir}")
    return registry
