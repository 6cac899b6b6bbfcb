"""
Atomic file writes.

Writes go to a temporary file in the target's directory which then replaces the
target, so readers see either the old or the new content, never a partial file.
The replacement keeps the target's permissions, or the umask default for new files.
"""

import os
import stat
import tempfile
from pathlib import Path


def default_file_mode() -> int:
    """Mode a regular file created with open() would get under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write text to `target_path` atomically.

    Raises:
        OSError: If the write or the rename fails; the target is left untouched
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    temp_file = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=str(target_path.parent),
        prefix=f".{target_path.name}.",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_file.name)

    try:
        temp_file.write(content)
        temp_file.flush()
        temp_file.close()
        # NamedTemporaryFile creates 0600 files
        if target_path.exists():
            mode = stat.S_IMODE(target_path.stat().st_mode)
        else:
            mode = default_file_mode()
        os.chmod(temp_path, mode)
        os.replace(temp_path, target_path)
    except BaseException:
        temp_file.close()
        if temp_path.exists():
            temp_path.unlink()
        raise
