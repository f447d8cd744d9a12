"""Incremental parser for streamed assistant messages.

An assistant message arrives as a growing string containing prose,
``<boltArtifact>`` containers holding ``<boltAction>`` elements, and
standalone ``<bolt-quick-actions>`` blocks. StreamingMessageParser consumes
it call by call and:

- returns only the newly produced display text, with artifact open tags
  replaced by a placeholder element and quick-action blocks by buttons
- fires artifact and action lifecycle callbacks in document order
- builds typed action records from tag attributes

Callers always pass the full text received so far for a message, never a
delta. The parser resumes from a per-message cursor, so calling it again
with a longer text never re-emits output or callbacks.

Example:
    parser = StreamingMessageParser(callbacks=ParserCallbacks(
        on_action_close=lambda data: print(data.action),
    ))
    text = ""
    for chunk in stream:
        text += chunk
        display += parser.parse(message_id, text)
"""

import copy
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .actions import (
    Action,
    ActionCallbackData,
    ArtifactCallbackData,
    ArtifactData,
    FileAction,
)
from .attributes import build_action, extract_attribute, parse_quick_actions
from .config import ParserConfig
from .constants import (
    ARTIFACT_ACTION_TAG_CLOSE,
    ARTIFACT_ACTION_TAG_OPEN,
    ARTIFACT_TAG_CLOSE,
    ARTIFACT_TAG_OPEN,
    QUICK_ACTIONS_CLOSE,
    QUICK_ACTIONS_OPEN,
)
from .errors import ParserStateError
from .markup import (
    ElementFactory,
    create_artifact_element,
    create_quick_action_element,
    create_quick_action_group,
)
from .sanitize import sanitize_file_content, strip_partial_marker
from .state import MessageState, MessageStateStore

logger = logging.getLogger(__name__)

ArtifactCallback = Callable[[ArtifactCallbackData], None]
ActionCallback = Callable[[ActionCallbackData], None]


@dataclass
class ParserCallbacks:
    """Optional hooks fired while parsing.

    Attributes:
        on_artifact_open: An artifact open tag was recognized
        on_artifact_close: The open artifact was closed
        on_action_open: An action open tag was recognized and typed
        on_action_stream: Partial content of the open action changed
        on_action_close: An action was closed with its final content
    """
    on_artifact_open: Optional[ArtifactCallback] = None
    on_artifact_close: Optional[ArtifactCallback] = None
    on_action_open: Optional[ActionCallback] = None
    on_action_stream: Optional[ActionCallback] = None
    on_action_close: Optional[ActionCallback] = None


class StreamingMessageParser:
    """Parses artifact, action and quick-action tags out of streamed messages.

    Calls for different message ids are independent. Calls for the same
    message id must be serialized by the caller.
    """

    def __init__(
        self,
        callbacks: Optional[ParserCallbacks] = None,
        artifact_element: Optional[ElementFactory] = None,
        config: Optional[ParserConfig] = None,
        store: Optional[MessageStateStore] = None,
    ) -> None:
        """Initialize the parser.

        Args:
            callbacks: Lifecycle hooks, all optional
            artifact_element: Factory for the artifact placeholder markup,
                receiving ``{"messageId": ...}``
            config: Parser settings, defaults to ParserConfig()
            store: Per-message state store, a private one by default
        """
        self._callbacks = callbacks or ParserCallbacks()
        self._artifact_element = artifact_element or create_artifact_element
        self._config = config or ParserConfig()
        self._store = store if store is not None else MessageStateStore()

    @property
    def store(self) -> MessageStateStore:
        return self._store

    @property
    def callbacks(self) -> ParserCallbacks:
        return self._callbacks

    def parse(self, message_id: str, input: str) -> str:
        """Parse the unconsumed part of a message.

        Args:
            message_id: Stable id of the message being streamed
            input: Full text received so far for this message

        Returns:
            Display text produced since the previous call for this message

        Raises:
            ActionTagError: If an action tag lacks required attributes. The
                cursor stays just before the offending tag.
        """
        state = self._store.get_or_create(message_id)
        output: list[str] = []
        i = state.position

        try:
            while i < len(input):
                if input.startswith(QUICK_ACTIONS_OPEN, i):
                    block_end = input.find(QUICK_ACTIONS_CLOSE, i)
                    if block_end == -1:
                        break

                    block = input[i + len(QUICK_ACTIONS_OPEN):block_end]
                    output.append(self._render_quick_actions(block))
                    i = block_end + len(QUICK_ACTIONS_CLOSE)
                    continue

                if state.inside_artifact:
                    artifact = state.current_artifact
                    if artifact is None:
                        raise ParserStateError(f"Artifact not initialized for message {message_id}")

                    if state.inside_action:
                        next_i = self._scan_action(message_id, state, artifact, input, i)
                    else:
                        next_i = self._scan_artifact(message_id, state, artifact, input, i)

                    if next_i is None:
                        break
                    i = next_i

                elif input[i] == '<' and not input.startswith('/', i + 1):
                    next_i = self._scan_tag_start(message_id, state, input, i, output)
                    if next_i is None:
                        break
                    i = next_i

                else:
                    tag_start = input.find('<', i + 1)
                    if tag_start == -1:
                        tag_start = len(input)
                    output.append(input[i:tag_start])
                    i = tag_start
        finally:
            state.position = i

        return "".join(output)

    def reset(self, message_id: Optional[str] = None) -> None:
        """Drop the state of one message, or of all messages when no id is given."""
        if message_id is None:
            self._store.reset_all()
        else:
            self._store.reset(message_id)

    def _scan_action(
        self,
        message_id: str,
        state: MessageState,
        artifact: ArtifactData,
        input: str,
        i: int,
    ) -> Optional[int]:
        """Finish or stream the open action. Returns the new cursor, or None to wait."""
        action = state.current_action
        close_index = input.find(ARTIFACT_ACTION_TAG_CLOSE, i)

        if close_index == -1:
            partial = strip_partial_marker(input[i:], ARTIFACT_ACTION_TAG_CLOSE)
            self._stream(message_id, state, artifact, self._preview(action, partial))
            return None

        raw = input[i:close_index]
        self._stream(message_id, state, artifact, self._preview(action, raw))

        content = raw.strip()
        if isinstance(action, FileAction):
            content = sanitize_file_content(content, action.file_path, self._config.markdown_extensions)
        action.content = content + "\n"

        self._emit_action(self._callbacks.on_action_close, message_id, state, artifact, action)

        state.inside_action = False
        state.current_action = Action()
        state.streamed_content = ""

        return close_index + len(ARTIFACT_ACTION_TAG_CLOSE)

    def _scan_artifact(
        self,
        message_id: str,
        state: MessageState,
        artifact: ArtifactData,
        input: str,
        i: int,
    ) -> Optional[int]:
        """Open the next action or close the artifact. Returns the new cursor, or None to wait."""
        action_open = input.find(ARTIFACT_ACTION_TAG_OPEN, i)
        artifact_close = input.find(ARTIFACT_TAG_CLOSE, i)

        if action_open != -1 and (artifact_close == -1 or action_open < artifact_close):
            action_end = input.find('>', action_open)
            if action_end == -1:
                return None

            state.current_action = build_action(input[action_open:action_end + 1])
            state.inside_action = True
            state.streamed_content = ""
            state.action_id += 1

            self._emit_action(self._callbacks.on_action_open, message_id, state, artifact, state.current_action)
            return action_end + 1

        if artifact_close != -1:
            if self._callbacks.on_artifact_close:
                self._callbacks.on_artifact_close(ArtifactCallbackData(
                    message_id=message_id,
                    id=artifact.id,
                    title=artifact.title,
                    type=artifact.type,
                ))

            state.inside_artifact = False
            state.current_artifact = None
            return artifact_close + len(ARTIFACT_TAG_CLOSE)

        return None

    def _scan_tag_start(
        self,
        message_id: str,
        state: MessageState,
        input: str,
        i: int,
        output: list[str],
    ) -> Optional[int]:
        """Match an artifact open tag starting at ``input[i] == '<'``.

        Returns the new cursor, or None when the text ends before the tag
        can be decided.
        """
        remaining = input[i:]
        if len(remaining) < len(QUICK_ACTIONS_OPEN) and QUICK_ACTIONS_OPEN.startswith(remaining):
            return None

        j = i
        potential_tag = ""

        while j < len(input):
            potential_tag += input[j]

            if potential_tag == ARTIFACT_TAG_OPEN:
                next_char = input[j + 1:j + 2]
                if next_char and next_char != '>' and not next_char.isspace():
                    output.append(input[i:j + 1])
                    return j + 1

                open_tag_end = input.find('>', j)
                if open_tag_end == -1:
                    return None

                self._open_artifact(message_id, state, input[i:open_tag_end + 1], output)
                return open_tag_end + 1

            if not ARTIFACT_TAG_OPEN.startswith(potential_tag):
                output.append(input[i:j + 1])
                return j + 1

            j += 1

        return None

    def _open_artifact(self, message_id: str, state: MessageState, tag: str, output: list[str]) -> None:
        artifact = ArtifactData(
            id=extract_attribute(tag, "id"),
            title=extract_attribute(tag, "title"),
            type=extract_attribute(tag, "type"),
        )

        if not artifact.title:
            logger.warning("Artifact title missing")
        if not artifact.id:
            logger.warning("Artifact id missing")

        state.inside_artifact = True
        state.current_artifact = artifact

        if self._callbacks.on_artifact_open:
            self._callbacks.on_artifact_open(ArtifactCallbackData(
                message_id=message_id,
                id=artifact.id,
                title=artifact.title,
                type=artifact.type,
            ))

        output.append(self._artifact_element({"messageId": message_id}))

    def _preview(self, action: Action, content: str) -> str:
        if isinstance(action, FileAction):
            return sanitize_file_content(content, action.file_path, self._config.markdown_extensions)
        return content

    def _stream(self, message_id: str, state: MessageState, artifact: ArtifactData, preview: str) -> None:
        if not self._config.stream_previews or preview == state.streamed_content:
            return

        state.streamed_content = preview
        streamed = copy.copy(state.current_action)
        streamed.content = preview
        self._emit_action(self._callbacks.on_action_stream, message_id, state, artifact, streamed)

    def _emit_action(
        self,
        callback: Optional[ActionCallback],
        message_id: str,
        state: MessageState,
        artifact: ArtifactData,
        action: Action,
    ) -> None:
        if callback is None:
            return

        # action_id was advanced when the action opened
        callback(ActionCallbackData(
            artifact_id=artifact.id,
            message_id=message_id,
            action_id=str(state.action_id - 1),
            action=action,
        ))

    def _render_quick_actions(self, block: str) -> str:
        buttons = [create_quick_action_element(qa) for qa in parse_quick_actions(block)]
        logger.debug(f"Rendered {len(buttons)} quick actions")
        return create_quick_action_group(buttons)
