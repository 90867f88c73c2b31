"""
Turn tag values into filesystem-safe path segments and compose the
`artist/album/title.ext` destination of a source file.
"""

import logging
from pathlib import Path
from typing import Optional

from api.schemas import RequiredTags

logger = logging.getLogger(__name__)

FORBIDDEN_CHARACTERS = frozenset('<>:"/\\|?*')

RESERVED_DEVICE_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

# Forbidden characters become "_", ASCII control codes 0-31 are dropped.
_SEGMENT_TRANSLATION = {ord(char): "_" for char in FORBIDDEN_CHARACTERS}
_SEGMENT_TRANSLATION.update({code: None for code in range(32)})

EXTENSION_SEPARATOR = "."


def sanitize_path_segment(value: str) -> str:
    """
    Make an arbitrary string safe to use as a single file or directory name.

    Args:
        value: Raw tag value

    Returns:
        The value with forbidden characters replaced by ``_``, control
        characters removed and a reserved device name prefix neutralized.
        Nothing else is touched: no trimming, no case folding, no length limit.
    """
    result = value.translate(_SEGMENT_TRANSLATION)

    prefix = result.split(EXTENSION_SEPARATOR, 1)[0]
    if prefix in RESERVED_DEVICE_NAMES:
        # First occurrence anywhere in the string, not necessarily the prefix.
        result = result.replace(prefix, "_", 1)

    return result


def source_extension(source: Path) -> Optional[str]:
    """
    Return the extension of the source file name without the dot.

    A name ending in a dot has an empty extension; dotfiles such as
    ``.hidden`` and names without a dot have none.
    """
    name = source.name
    if name in ("", ".", ".."):
        return None

    stem, separator, extension = name.rpartition(EXTENSION_SEPARATOR)
    if not separator or not stem:
        return None
    return extension


def build_target_path(source: Path, root_dir: Path, tags: RequiredTags) -> Path:
    """
    Compute where a source file belongs inside the target tree.

    Args:
        source: Original file path, only its extension is used
        root_dir: Root of the destination tree
        tags: Validated tags of the file

    Returns:
        ``root_dir / artist / album / title[.ext]`` with all three tag
        components sanitized and the extension copied verbatim
    """
    filename = sanitize_path_segment(tags.title)
    extension = source_extension(source)
    if extension is not None:
        filename = f"{filename}{EXTENSION_SEPARATOR}{extension}"

    target = (
        root_dir
        / sanitize_path_segment(tags.artist)
        / sanitize_path_segment(tags.album)
        / filename
    )
    logger.debug(f"Target for {source}: {target}")
    return target
