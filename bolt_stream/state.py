"""Per-message parse state and its keyed store.

The parser keeps one MessageState per message id. States are created lazily
and live until the owner resets them, typically when a stream is aborted or
a new chat session starts.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Iterator, Optional

from .actions import Action, ArtifactData


@dataclass
class MessageState:
    """Parse progress for one message.

    Attributes:
        position: Cursor into the cumulative message text; never decreases
        inside_artifact: Between a boltArtifact open tag and its close tag
        inside_action: Accumulating the content of one boltAction
        current_artifact: Metadata of the open artifact, if any
        current_action: The action being accumulated
        action_id: Sequence number the next opened action receives
        streamed_content: Last preview sent to the stream callback
    """
    position: int = 0
    inside_artifact: bool = False
    inside_action: bool = False
    current_artifact: Optional[ArtifactData] = None
    current_action: Action = field(default_factory=Action)
    action_id: int = 0
    streamed_content: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Plain snapshot of the state, suitable for JSON encoding."""
        data = asdict(self)
        data["current_action"] = self.current_action.to_dict()
        return data


class MessageStateStore:
    """Maps message ids to their MessageState.

    Example:
        store = MessageStateStore()
        state = store.get_or_create("msg-1")
        state.position = 10
        store.reset("msg-1")
    """

    def __init__(self) -> None:
        self._states: dict[str, MessageState] = {}

    def get_or_create(self, message_id: str) -> MessageState:
        """Return the state for ``message_id``, creating it on first use."""
        state = self._states.get(message_id)
        if state is None:
            state = MessageState()
            self._states[message_id] = state
        return state

    def get(self, message_id: str) -> Optional[MessageState]:
        return self._states.get(message_id)

    def reset(self, message_id: str) -> None:
        """Drop the state of one message; unknown ids are ignored."""
        self._states.pop(message_id, None)

    def reset_all(self) -> None:
        self._states.clear()

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._states))
