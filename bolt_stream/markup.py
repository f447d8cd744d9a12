"""
Replacement markup emitted in place of recognized tags.

The host renderer mounts live views on these elements; they carry their
inputs as ``data-*`` attributes with JSON-encoded values.
"""
import json
import re
from typing import Callable, Iterable, Mapping

from .actions import QuickAction
from .constants import ARTIFACT_ELEMENT_CLASS, QUICK_ACTION_ELEMENT_CLASS

ElementFactory = Callable[[Mapping[str, str]], str]

_CAMEL_BOUNDARY = re.compile(r'([a-z])([A-Z])')


def camel_to_dash_case(name: str) -> str:
    """Convert ``messageId`` style names to ``message-id``."""
    return _CAMEL_BOUNDARY.sub(r'\1-\2', name).lower()


def _data_attributes(props: Mapping[str, str]) -> list[str]:
    return [
        f'data-{camel_to_dash_case(key)}={json.dumps(value, ensure_ascii=False)}'
        for key, value in props.items()
    ]


def create_artifact_element(props: Mapping[str, str]) -> str:
    """Default placeholder for an artifact container.

    Examples:
        >>> create_artifact_element({"messageId": "m1"})
        '<div class="__boltArtifact__" data-message-id="m1"></div>'
    """
    element_props = [f'class="{ARTIFACT_ELEMENT_CLASS}"', *_data_attributes(props)]
    return f'<div {" ".join(element_props)}></div>'


def create_quick_action_element(quick_action: QuickAction) -> str:
    """Render one quick action as a button carrying its fields as data attributes."""
    props = {
        "type": quick_action.type,
        "message": quick_action.message,
        "path": quick_action.path,
        "href": quick_action.href,
    }
    element_props = [
        f'class="{QUICK_ACTION_ELEMENT_CLASS}"',
        'data-bolt-quick-action="true"',
        *_data_attributes(props),
    ]
    return f'<button {" ".join(element_props)}>{quick_action.label}</button>'


def create_quick_action_group(buttons: Iterable[str]) -> str:
    """Wrap rendered quick-action buttons in their group element."""
    return (
        f'<div class="{QUICK_ACTION_ELEMENT_CLASS}" data-bolt-quick-action="true">'
        f'{"".join(buttons)}</div>'
    )
