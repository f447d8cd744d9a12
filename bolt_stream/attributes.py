"""
Attribute extraction and typed action construction.

Tags are produced by the model from a fixed grammar, so attributes are read
with a plain ``name="value"`` pattern instead of an HTML parser. A value
runs to the next double quote not preceded by a backslash.
"""
import json
import logging
import re
from functools import lru_cache
from typing import Any, Optional

from .actions import ACTION_CLASSES, Action, ActionType, QuickAction, UnknownAction
from .errors import ActionTagError

logger = logging.getLogger(__name__)

_QUICK_ACTION_PATTERN = re.compile(
    r'<bolt-quick-action([^>]*)>(.*?)</bolt-quick-action>',
    re.DOTALL
)


@lru_cache(maxsize=64)
def _attribute_pattern(name: str) -> re.Pattern:
    # The lookbehind keeps 'type' from matching inside 'screenType'
    return re.compile(
        rf'(?<![\w-]){re.escape(name)}="((?:[^"\\]|\\.)*)"',
        re.IGNORECASE | re.DOTALL
    )


def extract_attribute(tag: str, name: str) -> Optional[str]:
    """Return the value of attribute ``name`` in ``tag``, or None if absent.

    Examples:
        >>> extract_attribute('<boltAction type="file" filePath="a.ts">', 'filePath')
        'a.ts'
        >>> extract_attribute('<boltAction type="shell">', 'filePath') is None
        True
    """
    match = _attribute_pattern(name).search(tag)
    if match is None:
        return None
    return match.group(1).replace('\\"', '"')


def split_list(value: str) -> list[str]:
    """Split a comma-separated attribute into trimmed, non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_json_object(value: str, name: str) -> Optional[dict[str, Any]]:
    """Decode a JSON object attribute.

    Invalid JSON, or JSON that is not an object, is logged and yields None
    so the caller can omit the field.
    """
    try:
        decoded = json.loads(value.replace("&quot;", '"'))
    except json.JSONDecodeError:
        logger.warning(f"Invalid JSON in {name} attribute")
        return None

    if not isinstance(decoded, dict):
        logger.warning(f"Expected a JSON object in {name} attribute, got {type(decoded).__name__}")
        return None

    return decoded


def _coerce(raw: str, kind: str, name: str) -> Any:
    if kind == "list":
        return split_list(raw) if raw else None
    if kind == "json":
        return parse_json_object(raw, name) if raw else None
    return raw


def build_action(tag: str) -> Action:
    """Build a typed action record from a raw ``<boltAction ...>`` open tag.

    The ``type`` attribute selects the variant; the variant's declared
    attributes are extracted and coerced, and the record validates itself.

    Args:
        tag: Open tag text, from ``<boltAction`` through the closing ``>``

    Returns:
        The typed action with empty content. Unknown types yield an
        UnknownAction after logging a warning.

    Raises:
        ActionTagError: If required attributes are missing or invalid
    """
    declared_type = extract_attribute(tag, "type")

    try:
        action_type = ActionType(declared_type)
    except ValueError:
        logger.warning(f"Unknown action type '{declared_type}'")
        return UnknownAction(declared_type=declared_type)

    action_class = ACTION_CLASSES[action_type]
    kwargs: dict[str, Any] = {}

    for f in action_class.attribute_fields():
        name = f.metadata["attr"]
        raw = extract_attribute(tag, name)
        if raw is None:
            continue
        value = _coerce(raw, f.metadata["kind"], name)
        if value is not None:
            kwargs[f.name] = value

    if action_type is ActionType.FILE and not kwargs.get("file_path"):
        logger.debug("File path not specified")

    try:
        return action_class(**kwargs)
    except ActionTagError as e:
        logger.warning(str(e))
        e.tag = tag
        raise


def parse_quick_actions(block: str) -> list[QuickAction]:
    """Parse every ``<bolt-quick-action>`` entry inside a quick-actions block.

    Args:
        block: Text between ``<bolt-quick-actions>`` and its close marker

    Returns:
        QuickAction records in document order; missing attributes are ''
    """
    quick_actions: list[QuickAction] = []

    for match in _QUICK_ACTION_PATTERN.finditer(block):
        attrs, label = match.group(1), match.group(2)
        quick_actions.append(QuickAction(
            type=extract_attribute(attrs, "type") or "",
            message=extract_attribute(attrs, "message") or "",
            path=extract_attribute(attrs, "path") or "",
            href=extract_attribute(attrs, "href") or "",
            label=label,
        ))

    return quick_actions
