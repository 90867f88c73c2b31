"""
Read the tag block of an audio file with mutagen.

Only the lookups the sorter needs are exposed: album artist, album and
title. Every failure to open or parse the file is raised as a
MetadataExtractionError so callers can report it as a read failure.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import mutagen
from mutagen import MutagenError

from utils.exceptions import MetadataExtractionError

logger = logging.getLogger(__name__)

# Lookup names used by the sorter mapped to candidate tag keys: mutagen
# "easy" keys first, then raw ID3 frames (AIFF/WAV carry no easy wrapper)
# and MP4 atoms.
TAG_KEYS = {
    "album artist": ["albumartist", "TPE2", "aART"],
    "album": ["album", "TALB", "\xa9alb"],
    "title": ["title", "TIT2", "\xa9nam"],
}


class TagSource:
    """Read-only view over the tags of one file."""

    def __init__(self, tags: Mapping[str, Any]):
        self._tags = tags

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "TagSource":
        """Build a source from lookup names, e.g. ``{"album": "Highway to Hell"}``."""
        return cls({
            TAG_KEYS[name][0]: [value]
            for name, value in values.items()
            if value is not None
        })

    def get(self, name: str) -> Optional[str]:
        """
        Look up a tag by name.

        Args:
            name: One of ``"album artist"``, ``"album"`` or ``"title"``

        Returns:
            The first value of the first candidate key present, or None if
            the tag is absent
        """
        for key in TAG_KEYS[name]:
            try:
                value = self._tags.get(key)
            except (ValueError, KeyError, TypeError) as key_error:
                logger.debug(f"Error reading tag {key}: {key_error}")
                continue

            # ID3 frames keep their values in .text
            value = getattr(value, "text", value)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                if not value:
                    continue
                return str(value[0])
            return str(value)

        return None


def read_tags(file_path: Path) -> TagSource:
    """
    Open an audio file and return its tags.

    Args:
        file_path: Path to the audio file

    Returns:
        TagSource over the file's tags

    Raises:
        MetadataExtractionError: If the file cannot be opened, is not a
            recognized audio format or carries no tags at all
    """
    try:
        audio_file = mutagen.File(str(file_path), easy=True)
    except (MutagenError, OSError) as e:
        logger.debug(f"Mutagen failed to load {file_path}: {e}")
        raise MetadataExtractionError(str(file_path), str(e))

    if audio_file is None:
        raise MetadataExtractionError(
            str(file_path), "Unsupported or unrecognized audio format"
        )

    if audio_file.tags is None:
        raise MetadataExtractionError(str(file_path), "No tag found")

    return TagSource(audio_file.tags)
