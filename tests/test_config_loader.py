"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from utils.config_loader import get_config_template, load_config, write_config_template
from utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for name in list(os.environ):
        if name.startswith("AUDIO_TAG_SORTER_"):
            monkeypatch.delenv(name)


def _write(path: Path, text: str) -> Path:
    _ = path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yaml")

    assert config["logging"]["level"] == "WARNING"
    assert config["output"] == {"dot_gap": 10, "color": True}
    assert config["organizer"]["remove_source_file"] is False


def test_defaults_with_no_path() -> None:
    assert load_config()["output"]["dot_gap"] == 10


def test_file_values_are_merged(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.yaml", "output:\n  color: false\n")

    config = load_config(path)

    assert config["output"] == {"dot_gap": 10, "color": False}
    assert config["logging"]["level"] == "WARNING"


def test_environment_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path / "config.yaml", "output:\n  dot_gap: 4\n")
    monkeypatch.setenv("AUDIO_TAG_SORTER_OUTPUT__DOT_GAP", "2")
    monkeypatch.setenv("AUDIO_TAG_SORTER_ORGANIZER__REMOVE_SOURCE_FILE", "yes")
    monkeypatch.setenv("AUDIO_TAG_SORTER_LOGGING__LEVEL", "DEBUG")

    config = load_config(path)

    assert config["output"]["dot_gap"] == 2
    assert config["organizer"]["remove_source_file"] is True
    assert config["logging"]["level"] == "DEBUG"


def test_invalid_yaml(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.yaml", "output: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        _ = load_config(path)


def test_non_mapping_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.yaml", "- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        _ = load_config(path)


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("logging:\n  level: LOUD\n", "logging.level"),
        ("output:\n  dot_gap: -1\n", "output.dot_gap"),
        ("output:\n  dot_gap: true\n", "output.dot_gap"),
        ("output:\n  color: maybe\n", "output.color"),
        ("organizer:\n  remove_source_file: 1\n", "organizer.remove_source_file"),
    ],
)
def test_invalid_values(tmp_path: Path, text: str, message: str) -> None:
    path = _write(tmp_path / "config.yaml", text)

    with pytest.raises(ConfigurationError, match=message):
        _ = load_config(path)


def test_template_matches_defaults() -> None:
    assert yaml.safe_load(get_config_template()) == load_config(None)


def test_written_template_loads_as_defaults(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.yaml"

    write_config_template(path)

    assert load_config(path) == load_config(None)


def test_template_is_not_written_over_existing_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.yaml", "output:\n  color: false\n")

    with pytest.raises(ConfigurationError, match="already exists"):
        write_config_template(path)

    assert path.read_text(encoding="utf-8") == "output:\n  color: false\n"
