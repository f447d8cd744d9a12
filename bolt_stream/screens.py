"""Screen registry fed by screen, navigation and component actions.

The registry tracks the screens a response declares, the navigation graph
between them and the components they use. Attach it to a parser to keep it
in sync while the message streams:

    registry = ScreenRegistry()
    parser = StreamingMessageParser(callbacks=registry.callbacks())
"""

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from .actions import ActionCallbackData, ComponentAction, NavigationAction, ScreenAction
from .conventions import component_path, file_name, screen_path
from .parser import ParserCallbacks

logger = logging.getLogger(__name__)


@dataclass
class NavigationTrigger:
    """One navigation edge between two screens."""
    id: str
    from_screen: str
    to_screen: str
    trigger: str
    navigation_type: str
    params: Optional[dict[str, Any]] = None


@dataclass
class ScreenMetadata:
    """Registry entry for a declared screen.

    Attributes:
        id: Screen id
        name: Display name
        type: page, modal, drawer or component
        file_path: Main component file, derived by naming convention
        parent_screen: Id of the enclosing screen, if any
        children: Ids of screens declaring this one as parent
        dependencies: Package dependencies declared on the screen
        navigation_triggers: Outgoing navigation edges
        components: Names of components used by the screen
    """
    id: str
    name: str
    type: str
    file_path: str
    parent_screen: Optional[str] = None
    children: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    navigation_triggers: list[NavigationTrigger] = field(default_factory=list)
    components: list[str] = field(default_factory=list)
    props: Optional[dict[str, Any]] = None
    is_active: bool = False
    last_modified: float = field(default_factory=time.time)


@dataclass
class ComponentMetadata:
    """Registry entry for a declared component."""
    name: str
    file_path: str
    type: str
    used_by_screens: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    last_modified: float = field(default_factory=time.time)


class ScreenRegistry:
    """Tracks screens, components and the navigation graph of a project."""

    def __init__(self) -> None:
        self._screens: dict[str, ScreenMetadata] = {}
        self._components: dict[str, ComponentMetadata] = {}
        self._navigation_graph: dict[str, list[NavigationTrigger]] = {}
        self._active_screen: Optional[str] = None
        self._trigger_ids = itertools.count(1)

    @property
    def screens(self) -> dict[str, ScreenMetadata]:
        return dict(self._screens)

    @property
    def components(self) -> dict[str, ComponentMetadata]:
        return dict(self._components)

    @property
    def navigation_graph(self) -> dict[str, list[NavigationTrigger]]:
        return {k: list(v) for k, v in self._navigation_graph.items()}

    @property
    def active_screen(self) -> Optional[str]:
        return self._active_screen

    def callbacks(self) -> ParserCallbacks:
        """Parser callbacks that feed closed actions into this registry."""
        return ParserCallbacks(on_action_close=self.handle_action)

    def handle_action(self, data: ActionCallbackData) -> None:
        """Register the action carried by a callback payload, if it is UI related."""
        action = data.action
        if isinstance(action, ScreenAction):
            self.add_screen(action)
        elif isinstance(action, NavigationAction):
            self.add_navigation(action)
        elif isinstance(action, ComponentAction):
            self.add_component(action)

    def add_screen(self, action: ScreenAction) -> ScreenMetadata:
        """Register a screen and link it to its parent.

        The first registered screen becomes the active one.
        """
        folder = screen_path(action.screen_name, action.screen_type)
        screen = ScreenMetadata(
            id=action.screen_id,
            name=action.screen_name,
            type=action.screen_type,
            file_path=f"{folder}/{file_name(action.screen_name, 'screen')}",
            parent_screen=action.parent_screen,
            dependencies=list(action.dependencies or []),
            props=action.props,
        )

        if action.parent_screen:
            parent = self._screens.get(action.parent_screen)
            if parent is not None and action.screen_id not in parent.children:
                parent.children.append(action.screen_id)
            elif parent is None:
                logger.debug(f"Parent screen '{action.parent_screen}' not registered yet")

        self._screens[action.screen_id] = screen

        if len(self._screens) == 1:
            self.set_active_screen(action.screen_id)

        return screen

    def add_navigation(self, action: NavigationAction) -> NavigationTrigger:
        """Add a navigation edge to the graph and to the source screen."""
        trigger = NavigationTrigger(
            id=f"{action.from_screen}-{action.to_screen}-{next(self._trigger_ids)}",
            from_screen=action.from_screen,
            to_screen=action.to_screen,
            trigger=action.trigger,
            navigation_type=action.navigation_type,
            params=action.params,
        )

        self._navigation_graph.setdefault(action.from_screen, []).append(trigger)

        source = self._screens.get(action.from_screen)
        if source is not None:
            source.navigation_triggers.append(trigger)
            source.last_modified = time.time()

        return trigger

    def add_component(self, action: ComponentAction) -> ComponentMetadata:
        """Register a component and attach it to the screens using it."""
        component = ComponentMetadata(
            name=action.component_name,
            file_path=component_path(action.component_name, action.component_type),
            type=action.component_type,
            used_by_screens=list(action.used_by_screens or []),
            exports=list(action.exports or []),
            imports=list(action.imports or []),
        )
        self._components[action.component_name] = component

        for screen_id in component.used_by_screens:
            screen = self._screens.get(screen_id)
            if screen is not None and action.component_name not in screen.components:
                screen.components.append(action.component_name)

        return component

    def get_screen_dependencies(self, screen_id: str) -> list[str]:
        """Dependencies of a screen plus the imports of its components, de-duplicated."""
        screen = self._screens.get(screen_id)
        if screen is None:
            return []

        dependencies = list(screen.dependencies)
        for name in screen.components:
            component = self._components.get(name)
            if component is not None:
                dependencies.extend(component.imports)

        return list(dict.fromkeys(dependencies))

    def get_navigation_paths(self, from_screen: str) -> list[NavigationTrigger]:
        return list(self._navigation_graph.get(from_screen, []))

    def get_screens_by_type(self, screen_type: str) -> list[ScreenMetadata]:
        return [s for s in self._screens.values() if s.type == screen_type]

    def remove_screen(self, screen_id: str) -> None:
        """Remove a screen and every reference to it. Unknown ids are ignored."""
        screen = self._screens.pop(screen_id, None)
        if screen is None:
            return

        if screen.parent_screen:
            parent = self._screens.get(screen.parent_screen)
            if parent is not None:
                parent.children = [c for c in parent.children if c != screen_id]

        for child_id in screen.children:
            child = self._screens.get(child_id)
            if child is not None:
                child.parent_screen = None

        self._navigation_graph.pop(screen_id, None)
        for from_id, triggers in self._navigation_graph.items():
            self._navigation_graph[from_id] = [t for t in triggers if t.to_screen != screen_id]
        for remaining in self._screens.values():
            remaining.navigation_triggers = [
                t for t in remaining.navigation_triggers if t.to_screen != screen_id
            ]

        if self._active_screen == screen_id:
            self._active_screen = None
            next_screen = next(iter(self._screens), None)
            if next_screen is not None:
                self.set_active_screen(next_screen)

    def set_active_screen(self, screen_id: str) -> None:
        """Mark a registered screen as active; unknown ids are ignored."""
        if screen_id not in self._screens:
            return

        if self._active_screen in self._screens:
            self._screens[self._active_screen].is_active = False

        self._active_screen = screen_id
        self._screens[screen_id].is_active = True

    def reset(self) -> None:
        self._screens.clear()
        self._components.clear()
        self._navigation_graph.clear()
        self._active_screen = None
