"""
Action models for streamed artifact directives.

This module defines the typed records built from ``<boltAction>`` tags,
the artifact metadata carried by ``<boltArtifact>`` tags, the quick-action
buttons, and the payloads handed to parser callbacks.

Each action field that maps to a tag attribute declares the attribute name
and its coercion kind in the dataclass field metadata, so a single builder
can construct every variant and ``to_dict()`` can emit the wire names.
"""
import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from .errors import InvalidAttributeError, MissingAttributeError

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Action kinds recognized in the ``type`` attribute of a boltAction tag."""
    FILE = "file"
    SHELL = "shell"
    START = "start"
    BUILD = "build"
    SUPABASE = "supabase"
    SCREEN = "screen"
    NAVIGATION = "navigation"
    COMPONENT = "component"


SUPABASE_OPERATIONS = ("migration", "query")
SCREEN_TYPES = ("page", "modal", "drawer", "component")
NAVIGATION_TYPES = ("push", "replace", "modal", "drawer")
COMPONENT_TYPES = ("shared", "screen-specific", "layout")


def attribute(name: str, kind: str = "str", required: bool = False) -> Any:
    """Declare a dataclass field sourced from the tag attribute ``name``.

    Args:
        name: Attribute name as written in the tag (camelCase)
        kind: Coercion applied to the raw value: 'str', 'list' or 'json'
        required: Whether a missing value makes the tag malformed
    """
    return field(default=None, metadata={"attr": name, "kind": kind, "required": required})


def _join_names(names: List[str]) -> str:
    if len(names) < 3:
        return " and ".join(names)
    return ", ".join(names[:-1]) + f", and {names[-1]}"


def _warn_unless_choice(action: str, name: str, value: Optional[str], choices: tuple) -> None:
    if value is not None and value not in choices:
        logger.warning(f"Unexpected {name} '{value}' for {action} action, expected one of {', '.join(choices)}")


@dataclass
class Action:
    """
    Base model for all actions.

    Attributes:
        content: Text between the open and close tags, accumulated while streaming
        type: The action kind, fixed by the subclass
    """
    content: str = ""
    type: Optional[ActionType] = field(default=None, init=False)

    kind: ClassVar[Optional[ActionType]] = None

    def __post_init__(self) -> None:
        self.type = self.kind
        self.validate()

    @classmethod
    def attribute_fields(cls) -> list:
        """Dataclass fields that are read from tag attributes."""
        return [f for f in fields(cls) if "attr" in f.metadata]

    def validate(self) -> None:
        """Check required attributes.

        Raises:
            MissingAttributeError: If a required attribute is absent or empty
        """
        required = [f for f in self.attribute_fields() if f.metadata["required"]]
        missing = [f.metadata["attr"] for f in required if not getattr(self, f.name)]
        if missing:
            label = self.kind.value.capitalize() if self.kind else "Action"
            names = [f.metadata["attr"] for f in required]
            raise MissingAttributeError(
                f"{label} action requires {_join_names(names)}",
                attributes=missing,
                action_type=self.kind.value if self.kind else None,
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the tag's attribute names, omitting unset fields."""
        data: Dict[str, Any] = {
            "type": self.type.value if self.type else None,
            "content": self.content,
        }
        for f in self.attribute_fields():
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            data[f.metadata["attr"]] = value
        return data


@dataclass
class FileAction(Action):
    """
    Action writing ``content`` to a file.

    Attributes:
        file_path: Target path. Optional at the record level: a tag without
            it still captures content.
    """
    file_path: Optional[str] = attribute("filePath")

    kind: ClassVar[Optional[ActionType]] = ActionType.FILE


@dataclass
class ShellAction(Action):
    """Action running ``content`` as a shell command."""
    kind: ClassVar[Optional[ActionType]] = ActionType.SHELL


@dataclass
class StartAction(Action):
    """Action starting the application with ``content`` as the command."""
    kind: ClassVar[Optional[ActionType]] = ActionType.START


@dataclass
class BuildAction(Action):
    kind: ClassVar[Optional[ActionType]] = ActionType.BUILD


@dataclass
class SupabaseAction(Action):
    """
    Action running a Supabase migration or query.

    Attributes:
        operation: Either 'migration' or 'query'
        file_path: Migration file, required when operation is 'migration'
        project_id: Optional Supabase project reference
    """
    operation: Optional[str] = attribute("operation")
    file_path: Optional[str] = attribute("filePath")
    project_id: Optional[str] = attribute("projectId")

    kind: ClassVar[Optional[ActionType]] = ActionType.SUPABASE

    def validate(self) -> None:
        if not self.operation:
            raise MissingAttributeError(
                "Supabase action requires operation",
                attributes=["operation"],
                action_type=self.kind.value,
            )
        if self.operation not in SUPABASE_OPERATIONS:
            raise InvalidAttributeError(
                f"Invalid Supabase operation: {self.operation}",
                attribute="operation",
                value=self.operation,
                action_type=self.kind.value,
            )
        if self.operation == "migration" and not self.file_path:
            raise MissingAttributeError(
                "Migration requires a filePath",
                attributes=["filePath"],
                action_type=self.kind.value,
            )


@dataclass
class ScreenAction(Action):
    """
    Action declaring a UI screen.

    Attributes:
        screen_id: Stable screen identifier
        screen_name: Human readable name
        screen_type: One of page, modal, drawer, component
        parent_screen: Optional id of the enclosing screen
        navigation_trigger: Optional trigger that opens this screen
        dependencies: Package dependencies from a comma list
        props: Screen props decoded from a JSON object
    """
    screen_id: Optional[str] = attribute("screenId", required=True)
    screen_name: Optional[str] = attribute("screenName", required=True)
    screen_type: Optional[str] = attribute("screenType", required=True)
    parent_screen: Optional[str] = attribute("parentScreen")
    navigation_trigger: Optional[str] = attribute("navigationTrigger")
    dependencies: Optional[List[str]] = attribute("dependencies", kind="list")
    props: Optional[Dict[str, Any]] = attribute("props", kind="json")

    kind: ClassVar[Optional[ActionType]] = ActionType.SCREEN

    def validate(self) -> None:
        super().validate()
        _warn_unless_choice("screen", "screenType", self.screen_type, SCREEN_TYPES)


@dataclass
class NavigationAction(Action):
    """
    Action declaring a navigation edge between two screens.

    Attributes:
        from_screen: Source screen id
        to_screen: Target screen id
        trigger: UI event that performs the navigation
        navigation_type: One of push, replace, modal, drawer
        params: Navigation params decoded from a JSON object
    """
    from_screen: Optional[str] = attribute("fromScreen", required=True)
    to_screen: Optional[str] = attribute("toScreen", required=True)
    trigger: Optional[str] = attribute("trigger", required=True)
    navigation_type: Optional[str] = attribute("navigationType", required=True)
    params: Optional[Dict[str, Any]] = attribute("params", kind="json")

    kind: ClassVar[Optional[ActionType]] = ActionType.NAVIGATION

    def validate(self) -> None:
        super().validate()
        _warn_unless_choice("navigation", "navigationType", self.navigation_type, NAVIGATION_TYPES)


@dataclass
class ComponentAction(Action):
    """
    Action declaring a reusable UI component.

    Attributes:
        component_name: Component identifier
        component_type: One of shared, screen-specific, layout
        used_by_screens: Screen ids using the component
        exports: Exported symbols
        imports: Imported modules
    """
    component_name: Optional[str] = attribute("componentName", required=True)
    component_type: Optional[str] = attribute("componentType", required=True)
    used_by_screens: Optional[List[str]] = attribute("usedByScreens", kind="list")
    exports: Optional[List[str]] = attribute("exports", kind="list")
    imports: Optional[List[str]] = attribute("imports", kind="list")

    kind: ClassVar[Optional[ActionType]] = ActionType.COMPONENT

    def validate(self) -> None:
        super().validate()
        _warn_unless_choice("component", "componentType", self.component_type, COMPONENT_TYPES)


@dataclass
class UnknownAction(Action):
    """
    Action whose ``type`` attribute names no known kind.

    Attributes:
        declared_type: The raw ``type`` value, None when the tag had none
    """
    declared_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.declared_type, "content": self.content}


ACTION_CLASSES: Dict[ActionType, type] = {
    ActionType.FILE: FileAction,
    ActionType.SHELL: ShellAction,
    ActionType.START: StartAction,
    ActionType.BUILD: BuildAction,
    ActionType.SUPABASE: SupabaseAction,
    ActionType.SCREEN: ScreenAction,
    ActionType.NAVIGATION: NavigationAction,
    ActionType.COMPONENT: ComponentAction,
}


@dataclass
class ArtifactData:
    """Metadata of a ``<boltArtifact>`` container. Missing attributes stay None."""
    id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None


@dataclass
class QuickAction:
    """
    A suggestion button from a ``<bolt-quick-actions>`` block.

    Attributes:
        type: Button kind (e.g. 'message', 'file', 'link')
        message: Message to send when clicked
        path: File path to open
        href: Link target
        label: Text between the tags
    """
    type: str = ""
    message: str = ""
    path: str = ""
    href: str = ""
    label: str = ""


@dataclass
class ArtifactCallbackData:
    """Payload for artifact open/close callbacks."""
    message_id: str
    id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None


@dataclass
class ActionCallbackData:
    """
    Payload for action open/stream/close callbacks.

    Attributes:
        artifact_id: Id of the enclosing artifact
        message_id: Message the action belongs to
        action_id: Decimal sequence number, shared by the open, stream and
            close events of one action
        action: The action record
    """
    artifact_id: Optional[str]
    message_id: str
    action_id: str
    action: Action
