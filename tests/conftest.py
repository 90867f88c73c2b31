"""Shared pytest fixtures for the sorter tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Optional, Union

import pytest

from filesystem.tag_reader import TagSource
from utils.exceptions import MetadataExtractionError

TagValues = Mapping[str, Optional[str]]


class StubTagReader:
    """Tag reader returning canned tags per file name."""

    def __init__(self) -> None:
        self.tags: dict[str, Union[TagValues, Exception]] = {}
        self.calls: list[Path] = []

    def add(self, name: str, tags: Union[TagValues, Exception]) -> None:
        self.tags[name] = tags

    def __call__(self, file_path: Path) -> TagSource:
        self.calls.append(file_path)
        tags = self.tags.get(file_path.name)
        if tags is None:
            raise MetadataExtractionError(str(file_path), "No tag found")
        if isinstance(tags, Exception):
            raise tags
        return TagSource.from_mapping(tags)


@pytest.fixture
def tag_reader() -> StubTagReader:
    """Provide an empty stub tag reader."""
    return StubTagReader()


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "incoming"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    return tmp_path / "music"


@pytest.fixture
def make_source(source_dir: Path) -> Callable[..., Path]:
    """Factory writing a source file with the given content."""

    def _make(name: str, content: bytes = b"ID3 fake audio data") -> Path:
        path = source_dir / name
        _ = path.write_bytes(content)
        return path

    return _make


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by setup_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
