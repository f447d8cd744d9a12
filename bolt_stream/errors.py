"""
Exception types raised by bolt_stream.

Only malformed action tags abort a parse call. Everything else the parser
can recover from is logged instead of raised.
"""
from typing import Optional, Sequence


class BoltStreamError(Exception):
    """Base class for all bolt_stream errors."""


class ActionTagError(BoltStreamError, ValueError):
    """Raised when a recognized action tag cannot be turned into a record.

    Attributes:
        action_type: The declared ``type`` attribute of the offending tag
        tag: The raw open tag text, when known
    """

    def __init__(
        self,
        message: str,
        action_type: Optional[str] = None,
        tag: Optional[str] = None,
    ):
        self.action_type = action_type
        self.tag = tag
        super().__init__(message)


class MissingAttributeError(ActionTagError):
    """Raised when required attributes are absent from an action tag."""

    def __init__(
        self,
        message: str,
        attributes: Sequence[str] = (),
        action_type: Optional[str] = None,
        tag: Optional[str] = None,
    ):
        self.attributes = list(attributes)
        super().__init__(message, action_type=action_type, tag=tag)


class InvalidAttributeError(ActionTagError):
    """Raised when an attribute holds a value outside its allowed set."""

    def __init__(
        self,
        message: str,
        attribute: str,
        value: Optional[str],
        action_type: Optional[str] = None,
        tag: Optional[str] = None,
    ):
        self.attribute = attribute
        self.value = value
        super().__init__(message, action_type=action_type, tag=tag)


class ParserStateError(BoltStreamError):
    """Raised when per-message parse state is internally inconsistent."""


class ConfigError(BoltStreamError):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)
