"""Output directory bootstrap and cleanup.

The output directory is a git working copy that is rebuilt from scratch on
every export. Hidden entries (``.git``, ``.gitignore``, ...) survive the
cleanup so that version control keeps seeing removed documents as deletions.
"""

import logging
import shutil
from pathlib import Path

from .errors import FilesystemError
from .tree_renderer import ensure_directory

logger = logging.getLogger(__name__)


def prepare_output_directory(path: Path) -> Path:
    """Create the output directory if needed and empty it.

    Args:
        path: Output directory

    Returns:
        The output directory

    Raises:
        PathConflictError: If the path exists as a plain file
        FilesystemError: If an entry cannot be deleted
    """
    directory = ensure_directory(path)
    clear_directory(directory)
    return directory


def clear_directory(directory: Path) -> None:
    """Delete every non-hidden entry of a directory.

    Args:
        directory: Directory to clear

    Raises:
        FilesystemError: If an entry cannot be deleted
    """
    for entry in sorted(directory.iterdir()):
        if entry.name.startswith('.'):
            continue

        try:
            if entry.is_dir() and not entry.is_symlink():
                logger.info(f"Deleting {entry}")
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as e:
            raise FilesystemError(str(entry), 'delete', str(e))
