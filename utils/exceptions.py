"""
Custom exception hierarchy for the audio tag sorter.

Filesystem and metadata operations raise these exceptions; the sorting
pipeline catches them per file and turns them into reportable errors so
that one bad file never stops the batch.
"""


class TagSorterError(Exception):
    """Base class for all application-specific errors."""
    pass


class ConfigurationError(TagSorterError):
    """Raised when there are configuration-related issues."""
    pass


class FileProcessingError(TagSorterError):
    """Base class for errors while handling a single source file."""
    pass


class MetadataExtractionError(FileProcessingError):
    """Raised when the tag block of an audio file cannot be read."""

    def __init__(self, file_path: str, reason: str = None):
        self.file_path = file_path
        self.reason = reason

        message = reason or f"Failed to read tags from file: {file_path}"
        super().__init__(message)


class FilesystemError(FileProcessingError):
    """Raised when filesystem operations fail."""

    def __init__(self, path: str, operation: str, reason: str = None):
        self.path = path
        self.operation = operation
        self.reason = reason

        message = reason or f"Filesystem error during {operation} on {path}"
        super().__init__(message)
