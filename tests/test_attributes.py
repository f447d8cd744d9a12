"""
Tests for attribute extraction and typed action construction.
"""

import logging

import pytest

from bolt_stream.actions import (
    ActionType,
    BuildAction,
    ComponentAction,
    FileAction,
    NavigationAction,
    ScreenAction,
    ShellAction,
    StartAction,
    SupabaseAction,
    UnknownAction,
)
from bolt_stream.attributes import (
    build_action,
    extract_attribute,
    parse_json_object,
    parse_quick_actions,
    split_list,
)
from bolt_stream.errors import ActionTagError, InvalidAttributeError, MissingAttributeError


class TestExtractAttribute:

    def test_reads_value(self):
        assert extract_attribute('<boltAction type="file" filePath="src/a.ts">', "filePath") == "src/a.ts"

    def test_missing_attribute_is_none(self):
        assert extract_attribute('<boltAction type="shell">', "filePath") is None

    def test_empty_value(self):
        assert extract_attribute('<boltArtifact title="">', "title") == ""

    def test_name_is_case_insensitive(self):
        assert extract_attribute('<boltAction FILEPATH="x.ts">', "filePath") == "x.ts"

    def test_name_must_not_be_a_suffix(self):
        tag = '<boltAction screenType="page" type="screen">'
        assert extract_attribute(tag, "type") == "screen"

    def test_name_after_dash_is_not_matched(self):
        assert extract_attribute('<x data-id="1">', "id") is None

    def test_backslash_escaped_quote(self):
        assert extract_attribute('<x props="{\\"a\\":1}">', "props") == '{"a":1}'

    def test_value_stops_at_first_plain_quote(self):
        assert extract_attribute('<x props="{"a":1}">', "props") == "{"


class TestCoercion:

    def test_split_list_trims_and_drops_empty(self):
        assert split_list(" home, settings ,, profile ") == ["home", "settings", "profile"]

    def test_json_object(self):
        assert parse_json_object('{"a": [1, 2]}', "props") == {"a": [1, 2]}

    def test_json_entities(self):
        assert parse_json_object('{&quot;id&quot;: 7}', "params") == {"id": 7}

    def test_invalid_json_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bolt_stream"):
            assert parse_json_object("{nope", "params") is None
        assert "Invalid JSON in params attribute" in caplog.text

    def test_non_object_json_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bolt_stream"):
            assert parse_json_object("[1, 2]", "props") is None
        assert "Expected a JSON object in props attribute" in caplog.text


class TestBuildAction:

    @pytest.mark.parametrize("action_type, expected_class", [
        ("shell", ShellAction),
        ("start", StartAction),
        ("build", BuildAction),
    ])
    def test_plain_actions(self, action_type, expected_class):
        action = build_action(f'<boltAction type="{action_type}">')
        assert isinstance(action, expected_class)
        assert action.type is ActionType(action_type)
        assert action.content == ""

    def test_file_action(self):
        action = build_action('<boltAction type="file" filePath="src/main.py">')
        assert isinstance(action, FileAction)
        assert action.file_path == "src/main.py"
        assert action.to_dict() == {"type": "file", "content": "", "filePath": "src/main.py"}

    def test_file_action_without_path(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="bolt_stream"):
            action = build_action('<boltAction type="file">')
        assert action.file_path is None
        assert "File path not specified" in caplog.text

    def test_supabase_query(self):
        action = build_action('<boltAction type="supabase" operation="query" projectId="p1">')
        assert isinstance(action, SupabaseAction)
        assert action.operation == "query"
        assert action.project_id == "p1"
        assert action.file_path is None

    def test_supabase_migration(self):
        action = build_action(
            '<boltAction type="supabase" operation="migration" filePath="supabase/migrations/init.sql">'
        )
        assert action.file_path == "supabase/migrations/init.sql"

    def test_supabase_missing_operation(self):
        with pytest.raises(MissingAttributeError) as exc_info:
            build_action('<boltAction type="supabase">')
        assert exc_info.value.attributes == ["operation"]

    def test_supabase_invalid_operation(self):
        with pytest.raises(InvalidAttributeError) as exc_info:
            build_action('<boltAction type="supabase" operation="truncate">')
        assert exc_info.value.attribute == "operation"
        assert exc_info.value.value == "truncate"
        assert str(exc_info.value) == "Invalid Supabase operation: truncate"

    def test_supabase_migration_without_path(self):
        with pytest.raises(MissingAttributeError, match="Migration requires a filePath"):
            build_action('<boltAction type="supabase" operation="migration">')

    def test_screen_action(self):
        action = build_action(
            '<boltAction type="screen" screenId="profile" screenName="Profile" screenType="modal" '
            'parentScreen="home" navigationTrigger="avatar-click" dependencies="react,zod" '
            'props="{\\"userId\\":\\"u1\\"}">'
        )
        assert isinstance(action, ScreenAction)
        assert action.to_dict() == {
            "type": "screen",
            "content": "",
            "screenId": "profile",
            "screenName": "Profile",
            "screenType": "modal",
            "parentScreen": "home",
            "navigationTrigger": "avatar-click",
            "dependencies": ["react", "zod"],
            "props": {"userId": "u1"},
        }

    def test_screen_missing_fields(self):
        with pytest.raises(MissingAttributeError) as exc_info:
            build_action('<boltAction type="screen" screenId="profile">')
        assert exc_info.value.attributes == ["screenName", "screenType"]
        assert str(exc_info.value) == "Screen action requires screenId, screenName, and screenType"

    def test_screen_unexpected_type_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bolt_stream"):
            action = build_action(
                '<boltAction type="screen" screenId="s" screenName="S" screenType="popover">'
            )
        assert action.screen_type == "popover"
        assert "Unexpected screenType 'popover'" in caplog.text

    def test_navigation_action(self):
        action = build_action(
            '<boltAction type="navigation" fromScreen="home" toScreen="profile" '
            'trigger="avatar-click" navigationType="modal" params="{\\"id\\":3}">'
        )
        assert isinstance(action, NavigationAction)
        assert action.navigation_type == "modal"
        assert action.params == {"id": 3}

    def test_navigation_missing_type(self):
        with pytest.raises(MissingAttributeError) as exc_info:
            build_action('<boltAction type="navigation" fromScreen="a" toScreen="b" trigger="click">')
        assert exc_info.value.attributes == ["navigationType"]

    def test_component_action(self):
        action = build_action(
            '<boltAction type="component" componentName="NavBar" componentType="layout" '
            'usedByScreens="home, profile" exports="NavBar,NavItem" imports="react">'
        )
        assert isinstance(action, ComponentAction)
        assert action.used_by_screens == ["home", "profile"]
        assert action.exports == ["NavBar", "NavItem"]
        assert action.imports == ["react"]

    def test_component_missing_type(self):
        with pytest.raises(MissingAttributeError, match="componentName and componentType"):
            build_action('<boltAction type="component" componentName="NavBar">')

    def test_errors_carry_the_tag(self):
        tag = '<boltAction type="component">'
        with pytest.raises(ActionTagError) as exc_info:
            build_action(tag)
        assert exc_info.value.tag == tag
        assert isinstance(exc_info.value, ValueError)

    def test_unknown_type(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bolt_stream"):
            action = build_action('<boltAction type="deploy" target="prod">')
        assert isinstance(action, UnknownAction)
        assert action.type is None
        assert action.declared_type == "deploy"

    def test_missing_type(self):
        action = build_action('<boltAction>')
        assert isinstance(action, UnknownAction)
        assert action.declared_type is None


class TestQuickActions:

    def test_parses_entries_in_order(self):
        block = (
            '<bolt-quick-action type="message" message="Add tests">Add tests</bolt-quick-action>\n'
            '<bolt-quick-action type="file" path="src/App.tsx">Open App</bolt-quick-action>'
            '<bolt-quick-action type="link" href="https://example.com">Docs</bolt-quick-action>'
        )
        actions = parse_quick_actions(block)

        assert [a.label for a in actions] == ["Add tests", "Open App", "Docs"]
        assert actions[0].message == "Add tests"
        assert actions[1].path == "src/App.tsx"
        assert actions[1].message == ""
        assert actions[2].href == "https://example.com"

    def test_empty_block(self):
        assert parse_quick_actions("  ") == []
