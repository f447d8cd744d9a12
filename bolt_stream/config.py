"""
Configuration management for bolt_stream.
Handles loading and saving parser settings from a JSON file and environment variables.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .constants import (
    CONFIG_FILE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MARKDOWN_EXTENSIONS,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_LOG_LEVEL = "BOLT_STREAM_LOG_LEVEL"
ENV_CHUNK_SIZE = "BOLT_STREAM_CHUNK_SIZE"
ENV_MARKDOWN_EXTENSIONS = "BOLT_STREAM_MARKDOWN_EXTENSIONS"


@dataclass
class ParserConfig:
    """Settings for the streaming parser and the replay CLI.

    Attributes:
        log_level: Level the CLI configures logging with
        chunk_size: Characters appended per step when replaying a transcript
        markdown_extensions: File suffixes whose content skips sanitization
        stream_previews: Whether partial action content is sent to
            the stream callback
    """
    log_level: str = DEFAULT_LOG_LEVEL
    chunk_size: int = DEFAULT_CHUNK_SIZE
    markdown_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS))
    stream_previews: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "log_level": self.log_level,
            "chunk_size": self.chunk_size,
            "markdown_extensions": list(self.markdown_extensions),
            "stream_previews": self.stream_previews,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParserConfig":
        """Create a ParserConfig from a dictionary.

        Raises:
            ConfigError: If the dictionary fails validation
        """
        is_valid, errors = validate_config(data)
        if not is_valid:
            raise ConfigError("Invalid configuration: " + "; ".join(errors))

        defaults = cls()
        return cls(
            log_level=data.get("log_level", defaults.log_level).upper(),
            chunk_size=data.get("chunk_size", defaults.chunk_size),
            markdown_extensions=list(data.get("markdown_extensions", defaults.markdown_extensions)),
            stream_previews=data.get("stream_previews", defaults.stream_previews),
        )


def validate_config(data: Any) -> tuple[bool, list[str]]:
    """Validate a configuration dictionary.

    Returns:
        A tuple of (is_valid, errors) where errors lists every problem found
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        return False, ["Configuration must be a dictionary"]

    if "log_level" in data:
        level = data["log_level"]
        if not isinstance(level, str):
            errors.append("Field 'log_level' must be a string")
        elif level.upper() not in LOG_LEVELS:
            errors.append(f"Field 'log_level' must be one of {', '.join(LOG_LEVELS)}")

    if "chunk_size" in data:
        size = data["chunk_size"]
        if isinstance(size, bool) or not isinstance(size, int):
            errors.append("Field 'chunk_size' must be an integer")
        elif size < 1:
            errors.append("Field 'chunk_size' must be positive")

    if "markdown_extensions" in data:
        extensions = data["markdown_extensions"]
        if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
            errors.append("Field 'markdown_extensions' must be a list of strings")

    if "stream_previews" in data and not isinstance(data["stream_previews"], bool):
        errors.append("Field 'stream_previews' must be a boolean")

    return len(errors) == 0, errors


def _apply_env(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay environment variables on top of file values."""
    level = os.environ.get(ENV_LOG_LEVEL)
    if level:
        data["log_level"] = level.strip()

    chunk_size = os.environ.get(ENV_CHUNK_SIZE)
    if chunk_size:
        try:
            data["chunk_size"] = int(chunk_size)
        except ValueError:
            raise ConfigError(f"{ENV_CHUNK_SIZE} must be an integer, got '{chunk_size}'")

    extensions = os.environ.get(ENV_MARKDOWN_EXTENSIONS)
    if extensions:
        data["markdown_extensions"] = [e.strip() for e in extensions.split(",") if e.strip()]

    return data


def load_config(path: Optional[Union[str, Path]] = None) -> ParserConfig:
    """Load configuration from a JSON file and the environment.

    Environment variables take precedence over file values. A missing file
    is not an error; defaults are used instead.

    Args:
        path: Config file path, defaults to ~/.bolt_stream/config.json

    Raises:
        ConfigError: If the file is malformed or holds invalid values
    """
    config_path = Path(path) if path is not None else CONFIG_FILE
    data: dict[str, Any] = {}

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Malformed JSON at line {e.lineno}, column {e.colno}", str(config_path))
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}", str(config_path))

        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object", str(config_path))
        logger.debug(f"Loaded configuration from {config_path}")

    return ParserConfig.from_dict(_apply_env(data))


def save_config(config: ParserConfig, path: Optional[Union[str, Path]] = None) -> Path:
    """Write configuration to a JSON file, creating parent directories."""
    config_path = Path(path) if path is not None else CONFIG_FILE
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)

    return config_path
