"""
Extraction and validation of the tags needed to sort a file.

All missing tags of a file are reported together, in album artist, album,
title order, so a user can fix every problem in one pass.
"""

import logging
from functools import reduce
from pathlib import Path
from typing import Callable, List, NamedTuple, Tuple, Union

from api.schemas import ErrorKind, FileError, RequiredTags, TagField
from filesystem.tag_reader import TagSource, read_tags
from utils.exceptions import MetadataExtractionError

logger = logging.getLogger(__name__)

TagReader = Callable[[Path], TagSource]

# (field, lookup name, message when absent), in reporting order.
REQUIRED_FIELDS = (
    (TagField.ARTIST, "album artist", "No album artist found"),
    (TagField.ALBUM, "album", "No album found"),
    (TagField.TITLE, "title", "No title found"),
)


class _TagFold(NamedTuple):
    """Either every field so far was found (values), or some were not (errors)."""

    values: Tuple[str, ...] = ()
    errors: Tuple[FileError, ...] = ()

    @property
    def failed(self) -> bool:
        return bool(self.errors)


def validate_tags(source: TagSource) -> Union[RequiredTags, List[FileError]]:
    """
    Extract album artist, album and title from a tag source.

    Args:
        source: Tags of one file

    Returns:
        RequiredTags when all three are present, otherwise one
        MissingField error per absent tag
    """

    def step(state: _TagFold, field_spec) -> _TagFold:
        field, name, missing_message = field_spec
        value = source.get(name)

        if value is None:
            error = FileError(kind=ErrorKind.MISSING_FIELD, field=field, message=missing_message)
            return _TagFold(errors=state.errors + (error,))
        if state.failed:
            return state
        return _TagFold(values=state.values + (value,))

    result = reduce(step, REQUIRED_FIELDS, _TagFold())
    if result.failed:
        return list(result.errors)

    artist, album, title = result.values
    return RequiredTags(artist=artist, album=album, title=title)


def validate_file(
    file_path: Path,
    tag_reader: TagReader = read_tags
) -> Union[RequiredTags, List[FileError]]:
    """
    Read a file's tags and validate them.

    A file whose tags cannot be read yields a single ReadFailure error and
    no field checks are made.
    """
    try:
        source = tag_reader(file_path)
    except MetadataExtractionError as e:
        logger.debug(f"Cannot read tags of {file_path}: {e}")
        return [FileError(kind=ErrorKind.READ_FAILURE, message=str(e))]

    result = validate_tags(source)
    if isinstance(result, list):
        logger.debug(f"{file_path} is missing {len(result)} required tag(s)")
    return result
