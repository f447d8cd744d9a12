"""
bolt_stream - incremental parser for streamed assistant responses.
"""
from .actions import (
    ActionType,
    Action,
    FileAction,
    ShellAction,
    StartAction,
    BuildAction,
    SupabaseAction,
    ScreenAction,
    NavigationAction,
    ComponentAction,
    UnknownAction,
    ArtifactData,
    QuickAction,
    ArtifactCallbackData,
    ActionCallbackData,
)
from .attributes import build_action, extract_attribute, parse_quick_actions
from .config import ParserConfig, load_config, save_config
from .constants import APP_NAME, APP_VERSION, APP_DESCRIPTION
from .errors import (
    BoltStreamError,
    ActionTagError,
    MissingAttributeError,
    InvalidAttributeError,
    ParserStateError,
    ConfigError,
)
from .parser import ParserCallbacks, StreamingMessageParser
from .screens import ScreenRegistry
from .state import MessageState, MessageStateStore

__version__ = APP_VERSION
__all__ = [
    'APP_NAME', 'APP_VERSION', 'APP_DESCRIPTION',
    # Parser
    'StreamingMessageParser', 'ParserCallbacks',
    'MessageState', 'MessageStateStore',
    # Action models
    'ActionType',
    'Action',
    'FileAction',
    'ShellAction',
    'StartAction',
    'BuildAction',
    'SupabaseAction',
    'ScreenAction',
    'NavigationAction',
    'ComponentAction',
    'UnknownAction',
    'ArtifactData',
    'QuickAction',
    'ArtifactCallbackData',
    'ActionCallbackData',
    'build_action', 'extract_attribute', 'parse_quick_actions',
    # Configuration
    'ParserConfig', 'load_config', 'save_config',
    # Errors
    'BoltStreamError',
    'ActionTagError',
    'MissingAttributeError',
    'InvalidAttributeError',
    'ParserStateError',
    'ConfigError',
    'ScreenRegistry',
]
