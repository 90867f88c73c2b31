"""
Pipeline orchestrator that sorts audio files one at a time.

Every file goes through validate -> build target path -> copy -> optional
source removal. A failure affects only the file it happened on; the batch
always attempts every file.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional

from api.schemas import BatchResult, ErrorKind, FileError, FileOutcome
from filesystem.file_ops import FileSystemOperations
from filesystem.path_builder import build_target_path
from filesystem.tag_reader import read_tags
from pipeline.tag_validator import TagReader, validate_file
from utils.exceptions import FilesystemError

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[FileOutcome], None]


class SortingPipeline:
    """
    Main pipeline orchestrator for sorting files into artist/album/title.
    """

    def __init__(
        self,
        target_dir: Path,
        remove_source: bool = False,
        tag_reader: TagReader = read_tags,
        filesystem_ops: Optional[FileSystemOperations] = None
    ):
        """
        Initialize the sorting pipeline.

        Args:
            target_dir: Root of the destination tree
            remove_source: Whether to delete each source after a successful copy
            tag_reader: Callable returning the tags of a file
            filesystem_ops: Filesystem operations to use
        """
        self.target_dir = target_dir
        self.remove_source = remove_source
        self.tag_reader = tag_reader
        self.filesystem_ops = filesystem_ops or FileSystemOperations()

        self.stats = {
            'files_copied': 0,
            'files_failed': 0,
            'sources_removed': 0,
            'removal_warnings': 0,
        }

    def process_file(self, file_path: Path) -> FileOutcome:
        """
        Sort a single file.

        Args:
            file_path: Path to the source file

        Returns:
            FileOutcome with either no errors (success) or the errors that
            stopped the file
        """
        logger.debug(f"Processing file: {file_path}")

        validated = validate_file(file_path, self.tag_reader)
        if isinstance(validated, list):
            self.stats['files_failed'] += 1
            return FileOutcome(source_path=file_path, errors=validated)

        target_path = build_target_path(file_path, self.target_dir, validated)

        try:
            self.filesystem_ops.copy_file(file_path, target_path)
        except FilesystemError as e:
            logger.error(f"Failed to copy {file_path} to {target_path}: {e}")
            self.stats['files_failed'] += 1
            return FileOutcome(
                source_path=file_path,
                target_path=target_path,
                errors=[FileError(kind=ErrorKind.IO, message=str(e))]
            )

        self.stats['files_copied'] += 1
        outcome = FileOutcome(source_path=file_path, target_path=target_path)

        if self.remove_source:
            outcome.warning = self._remove_source(file_path)

        return outcome

    def _remove_source(self, file_path: Path) -> Optional[str]:
        """Remove a copied source file, returning a warning if that fails."""
        try:
            self.filesystem_ops.remove_file(file_path)
        except FilesystemError as e:
            logger.warning(f"Could not remove {file_path}: {e}")
            self.stats['removal_warnings'] += 1
            return f"Original file wasn't removed due to error: {e}"

        self.stats['sources_removed'] += 1
        return None

    def process_files(
        self,
        file_paths: Iterable[Path],
        on_outcome: Optional[OutcomeCallback] = None
    ) -> BatchResult:
        """
        Sort files sequentially, in the given order.

        Args:
            file_paths: Source files
            on_outcome: Called with each outcome before the next file starts

        Returns:
            BatchResult with one outcome per input file
        """
        start_time = time.time()
        result = BatchResult()

        for file_path in file_paths:
            outcome = self.process_file(file_path)
            result.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

        logger.info(
            f"Processed {result.total_files} files in {time.time() - start_time:.2f} seconds: "
            f"{result.succeeded} copied, {result.failed} failed, {result.warnings} warnings"
        )
        return result
