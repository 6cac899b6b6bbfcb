"""
Process-wide configuration for the advent harness.

Everything that depends on the environment (project root, puzzle year) is
resolved once here and passed to the components that need it.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigurationError
from .logging_config import get_logger

YEAR_ENV_VAR = "AOC_YEAR"
ROOT_ENV_VAR = "AOC_ROOT"

TIMINGS_FILE = ".timings.json"
README_FILE = "README.md"
SOLUTIONS_DIR = "solutions"

logger = get_logger("config")


def find_project_root(start: Path | None = None) -> Path:
    """
    Walk upward from `start` until a project marker is found.

    A directory is the project root when it contains a pyproject.toml, or a
    data/ directory next to a solutions/ directory.

    Raises:
        ConfigurationError: If no ancestor directory carries a marker
    """
    start = Path(start or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if (candidate / "pyproject.toml").is_file():
            return candidate
        if (candidate / "data").is_dir() and (candidate / SOLUTIONS_DIR).is_dir():
            return candidate
    raise ConfigurationError(
        f"Could not locate the project root from {start} "
        f"(looked for pyproject.toml, or data/ and {SOLUTIONS_DIR}/ directories)"
    )


def parse_year(raw: str | None) -> int | None:
    """Parse the year variable; absent or unparsable values give None."""
    if raw is None:
        return None
    try:
        year = int(raw.strip(), 10)
    except ValueError:
        logger.debug(f"Ignoring unparsable {YEAR_ENV_VAR}={raw!r}")
        return None
    if year < 0:
        logger.debug(f"Ignoring negative {YEAR_ENV_VAR}={raw!r}")
        return None
    return year


@dataclass(frozen=True)
class HarnessConfig:
    """Resolved configuration shared by every harness component."""

    root: Path
    year: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not self.root.is_dir():
            raise ConfigurationError(f"Project root is not a directory: {self.root}")

    @property
    def timings_path(self) -> Path:
        return self.root / TIMINGS_FILE

    @property
    def readme_path(self) -> Path:
        return self.root / README_FILE

    @property
    def solutions_dir(self) -> Path:
        return self.root / SOLUTIONS_DIR

    @classmethod
    def load(
        cls,
        root: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> "HarnessConfig":
        """
        Resolve the configuration once at process start.

        Args:
            root: Explicit project root (e.g. from --root); wins over everything
            environ: Environment to read (defaults to os.environ)
            cwd: Directory to start the marker search from (defaults to cwd)
        """
        if environ is None:
            environ = os.environ

        if root is not None:
            resolved_root = Path(root).resolve()
        elif environ.get(ROOT_ENV_VAR):
            resolved_root = Path(environ[ROOT_ENV_VAR]).resolve()
        else:
            resolved_root = find_project_root(cwd)

        config = cls(root=resolved_root, year=parse_year(environ.get(YEAR_ENV_VAR)))
        logger.info(f"Project root: {config.root}, year: {config.year}")
        return config
