"""Shared fixtures for bolt_stream tests."""

import logging

import pytest

from bolt_stream.parser import ParserCallbacks, StreamingMessageParser


class EventLog:
    """Records parser callbacks as (event, payload) tuples.

    Action payloads are snapshotted with ``to_dict()`` at callback time,
    since the parser keeps mutating the action record until it closes.
    """

    def __init__(self):
        self.events = []

    def callbacks(self) -> ParserCallbacks:
        return ParserCallbacks(
            on_artifact_open=lambda d: self._artifact("artifact_open", d),
            on_artifact_close=lambda d: self._artifact("artifact_close", d),
            on_action_open=lambda d: self._action("action_open", d),
            on_action_stream=lambda d: self._action("action_stream", d),
            on_action_close=lambda d: self._action("action_close", d),
        )

    def _artifact(self, name, data):
        self.events.append((name, {
            "message_id": data.message_id,
            "id": data.id,
            "title": data.title,
            "type": data.type,
        }))

    def _action(self, name, data):
        self.events.append((name, {
            "artifact_id": data.artifact_id,
            "message_id": data.message_id,
            "action_id": data.action_id,
            "action": data.action.to_dict(),
            "record": data.action,
        }))

    @property
    def names(self):
        return [name for name, _ in self.events]

    def of(self, name):
        return [payload for event, payload in self.events if event == name]

    def without_streams(self):
        return [
            (name, {k: v for k, v in payload.items() if k != "record"})
            for name, payload in self.events
            if name != "action_stream"
        ]


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def parser(event_log):
    return StreamingMessageParser(callbacks=event_log.callbacks())


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by the CLI's logging setup."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
