"""
Configuration management for the audio tag sorter.

This module handles loading and validating configuration from YAML files
with sensible defaults and environment variable support.
"""

import json
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from utils.exceptions import ConfigurationError

ENV_PREFIX = "AUDIO_TAG_SORTER_"
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class OutputConfig:
    # Dots printed after the longest file name in the batch
    dot_gap: int = 10
    color: bool = True


@dataclass
class OrganizerConfig:
    remove_source_file: bool = False


@dataclass
class SorterConfig:
    """Structured configuration class with defaults."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    organizer: OrganizerConfig = field(default_factory=OrganizerConfig)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file with defaults and environment variable support.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config_dict = _dataclass_to_dict(SorterConfig())

    if config_path and config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}")

        if file_config:
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"Config file {config_path} must contain a mapping")
            config_dict = _merge_configs(config_dict, file_config)

    config_dict = _apply_env_overrides(config_dict)

    _validate_config(config_dict)

    return config_dict


def _dataclass_to_dict(obj) -> Any:
    """Convert dataclass to dictionary recursively."""
    if hasattr(obj, '__dataclass_fields__'):
        return {
            field_name: _dataclass_to_dict(getattr(obj, field_name))
            for field_name in obj.__dataclass_fields__
        }
    elif isinstance(obj, dict):
        return {k: _dataclass_to_dict(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_dataclass_to_dict(item) for item in obj]
    else:
        return obj


def _merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge configuration dictionaries.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables are prefixed with AUDIO_TAG_SORTER_ and use
    double underscores to represent nested keys.

    Examples:
        AUDIO_TAG_SORTER_LOGGING__LEVEL=DEBUG
        AUDIO_TAG_SORTER_OUTPUT__COLOR=false
    """
    for env_var, value in os.environ.items():
        if not env_var.startswith(ENV_PREFIX):
            continue

        key_path = env_var[len(ENV_PREFIX):].lower().split('__')
        _set_nested_value(config, key_path, _convert_env_value(value))

    return config


def _convert_env_value(value: str) -> Any:
    """Convert environment variable string to appropriate Python type."""
    if value.lower() in ('true', 'yes', 'on'):
        return True
    elif value.lower() in ('false', 'no', 'off'):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    if value.startswith(('[', '{')):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def _set_nested_value(config: Dict[str, Any], key_path: list, value: Any):
    """Set a value in a nested dictionary using a list of keys."""
    current = config

    for key in key_path[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]

    current[key_path[-1]] = value


def _validate_config(config: Dict[str, Any]):
    """
    Validate configuration values.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: If configuration is invalid
    """
    logging_config = config.get('logging', {})

    log_level = logging_config.get('level', 'WARNING')
    if not isinstance(log_level, str) or log_level.upper() not in VALID_LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of {VALID_LOG_LEVELS}")

    output_config = config.get('output', {})

    dot_gap = output_config.get('dot_gap', 10)
    if isinstance(dot_gap, bool) or not isinstance(dot_gap, int) or dot_gap < 0:
        raise ConfigurationError("output.dot_gap must be a non-negative integer")

    if not isinstance(output_config.get('color', True), bool):
        raise ConfigurationError("output.color must be true or false")

    organizer_config = config.get('organizer', {})

    if not isinstance(organizer_config.get('remove_source_file', False), bool):
        raise ConfigurationError("organizer.remove_source_file must be true or false")


def get_config_template() -> str:
    """
    Get a YAML template for the configuration file.

    Returns:
        YAML configuration template as string
    """
    return """# Configuration for audio-tag-sorter
logging:
  level: WARNING      # DEBUG shows every decision made per file
  format: "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

output:
  dot_gap: 10         # dots printed after the longest file name
  color: true

organizer:
  remove_source_file: false   # the -r flag always enables removal
"""


def write_config_template(config_path: Path) -> None:
    """
    Write the configuration template to a new file.

    Raises:
        ConfigurationError: If the file already exists or cannot be written
    """
    if config_path.exists():
        raise ConfigurationError(f"Config file already exists: {config_path}")

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(get_config_template(), encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Cannot write config file {config_path}: {e}")
