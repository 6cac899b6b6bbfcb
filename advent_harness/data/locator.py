"""
Data locator implementation.

Resolves day/part identifiers to files under the project's data/ directory.
Paths are anchored to the configured project root, never to the working
directory.
"""

from pathlib import Path

from ..exceptions import DataNotFound, DataUnreadable
from ..logging_config import get_logger
from ..models import DataFile, DataFolder


class DataLocator:
    """
    Resolves and reads data files for a project root.

    Treats data files as opaque text; no per-puzzle parsing happens here.
    """

    def __init__(self, root: Path):
        """
        Initialize data locator.

        Args:
            root: Absolute project root that contains the data/ directory
        """
        self.root: Path = Path(root).resolve()

        # Setup logger
        self.logger = get_logger("data_locator")

    def folder_path(self, folder: DataFolder) -> Path:
        """Absolute path of a data folder."""
        return self.root.joinpath(*folder.sub_directory.parts)

    def relative_path(self, folder: DataFolder, file: DataFile) -> Path:
        """Path of a data file relative to the project root, for display."""
        return Path(*folder.sub_directory.parts) / file.file_name(folder.extension)

    def resolve(self, folder: DataFolder, file: DataFile) -> Path:
        """Absolute path of a data file."""
        return self.folder_path(folder) / file.file_name(folder.extension)

    def read(self, folder: DataFolder, file: DataFile) -> str:
        """
        Read a data file as text.

        Raises:
            DataNotFound: If the file does not exist
            DataUnreadable: If the file exists but cannot be read
        """
        path = self.resolve(folder, file)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            self.logger.error(f"Data file not found: {path}")
            raise DataNotFound(path) from e
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Data file unreadable: {path}: {e}")
            raise DataUnreadable(path, e) from e

        self.logger.debug(f"Read {len(text)} chars from {path}")
        return text

    def ensure_file(self, folder: DataFolder, file: DataFile) -> tuple[Path, bool]:
        """
        Create an empty data file if it does not exist yet.

        Returns:
            The absolute path and whether the file was created
        """
        path = self.resolve(folder, file)
        if path.exists():
            return path, False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        self.logger.info(f"Created empty data file: {path}")
        return path, True
