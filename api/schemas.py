"""
Pydantic schemas for the tag sorting pipeline.

These models define the records passed between the tag validator, the
target path builder, the copier and the status reporter.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Category of a per-file error. The value is what users see."""

    READ_FAILURE = "ReadFailure"
    MISSING_FIELD = "MissingField"
    IO = "IOError"


class TagField(str, Enum):
    """The three tags every file needs before it can be sorted."""

    ARTIST = "artist"
    ALBUM = "album"
    TITLE = "title"


class FileError(BaseModel):
    """A single problem found while handling one source file."""

    kind: ErrorKind
    field: Optional[TagField] = None
    message: str

    model_config = ConfigDict(frozen=True)

    def format_message(self) -> str:
        return f"{self.kind.value}: {self.message}"


class RequiredTags(BaseModel):
    """Validated album artist, album and title of one file.

    Values are kept exactly as read; an empty tag value is still a value.
    """

    artist: str
    album: str
    title: str

    model_config = ConfigDict(frozen=True)


class FileOutcome(BaseModel):
    """Result of pushing one source file through the pipeline."""

    source_path: Path
    target_path: Optional[Path] = None
    errors: List[FileError] = Field(default_factory=list)
    warning: Optional[str] = Field(
        default=None,
        description="Non-fatal problem, e.g. the source file could not be removed"
    )

    @property
    def success(self) -> bool:
        return not self.errors


class BatchResult(BaseModel):
    """Outcomes of a whole run, in input order."""

    outcomes: List[FileOutcome] = Field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return self.total_files - self.succeeded

    @property
    def warnings(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.warning)
