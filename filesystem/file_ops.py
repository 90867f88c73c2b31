"""
Pathlib-based filesystem operations for placing sorted files.

Each operation raises FilesystemError with a user-facing reason instead of
leaking raw OSError instances, so the pipeline can report the failure for
the file at hand and move on.
"""

import shutil
import logging
from pathlib import Path

from utils.exceptions import FilesystemError

logger = logging.getLogger(__name__)


class FileSystemOperations:
    """Handles all filesystem operations with proper error handling."""

    def ensure_parent_dirs(self, target: Path) -> Path:
        """
        Create every missing ancestor directory of a target file.

        Args:
            target: Destination file path

        Returns:
            The parent directory of the target

        Raises:
            FilesystemError: If the target has no parent or a directory
                cannot be created
        """
        parent_dir = target.parent
        if parent_dir == target:
            raise FilesystemError(
                str(target), "copy",
                f"Unexpected error while copying file to target '{target}'"
            )

        try:
            # Directories are shared between files of the same album.
            parent_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                str(parent_dir), "mkdir",
                f"Cannot create directory '{parent_dir}': {e}"
            )

        return parent_dir

    def copy_file(self, source: Path, target: Path) -> None:
        """
        Copy a file to its target, creating directories as needed.

        An existing file at the target is overwritten. Directories created
        before a failed copy are left in place.

        Args:
            source: Source file path
            target: Destination file path

        Raises:
            FilesystemError: If directory creation or the copy fails
        """
        self.ensure_parent_dirs(target)

        try:
            shutil.copyfile(source, target)
            shutil.copymode(source, target)
        except OSError as e:
            raise FilesystemError(str(source), "copy", f"Failed to copy file: {e}")

        logger.info(f"Copied file: {source} -> {target}")

    def remove_file(self, path: Path) -> None:
        """
        Delete a source file after it has been copied.

        Raises:
            FilesystemError: If the file cannot be removed
        """
        try:
            path.unlink()
        except OSError as e:
            raise FilesystemError(str(path), "remove", str(e))

        logger.info(f"Removed source file: {path}")
