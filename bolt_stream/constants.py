"""
Constants and configuration defaults for bolt_stream.
"""
from pathlib import Path
from typing import Final

APP_NAME: Final[str] = "bolt_stream"
APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = "Incremental parser for streamed assistant responses with artifact and action tags"

CONFIG_DIR: Final[Path] = Path.home() / ".bolt_stream"
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"

ARTIFACT_TAG_OPEN: Final[str] = "<boltArtifact"
ARTIFACT_TAG_CLOSE: Final[str] = "</boltArtifact>"
ARTIFACT_ACTION_TAG_OPEN: Final[str] = "<boltAction"
ARTIFACT_ACTION_TAG_CLOSE: Final[str] = "</boltAction>"
QUICK_ACTIONS_OPEN: Final[str] = "<bolt-quick-actions>"
QUICK_ACTIONS_CLOSE: Final[str] = "</bolt-quick-actions>"

ARTIFACT_ELEMENT_CLASS: Final[str] = "__boltArtifact__"
QUICK_ACTION_ELEMENT_CLASS: Final[str] = "__boltQuickAction__"

DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_CHUNK_SIZE: Final[int] = 64
DEFAULT_MARKDOWN_EXTENSIONS: Final[tuple] = (".md",)
