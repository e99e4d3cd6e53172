"""Tests for keymap loading and schema validation using jsonschema."""

from __future__ import annotations

import json
import pathlib

import pytest
from jsonschema import ValidationError, validate

from keymatch.keymap import SCHEMA_PATH, Binding, Keymap, KeymapError, load_keymap
from keymatch.matcher import KeyEvent

EXAMPLE_PATH = SCHEMA_PATH.parent / "example.json"


def _apple():
    return True


def _other():
    return False


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def schema():
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(scope="module")
def example():
    with open(EXAMPLE_PATH, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def keymap_file(tmp_path):
    def write(data) -> pathlib.Path:
        path = tmp_path / "keys.json"
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return write


# ---------------------------------------------------------------------------
# Schema structure
# ---------------------------------------------------------------------------


class TestSchema:
    def test_schema_valid_json(self, schema):
        assert "$schema" in schema
        assert schema["type"] == "object"

    def test_required_fields(self, schema):
        assert set(schema["required"]) == {"version", "bindings"}
        assert set(schema["$defs"]["binding"]["required"]) == {"keys", "command"}

    def test_example_validates(self, schema, example):
        validate(instance=example, schema=schema)

    def test_rejects_unknown_version(self, schema, example):
        with pytest.raises(ValidationError):
            validate(instance={**example, "version": 2}, schema=schema)

    def test_rejects_missing_command(self, schema):
        with pytest.raises(ValidationError):
            validate(instance={"version": 1, "bindings": [{"keys": "a"}]}, schema=schema)

    def test_rejects_extra_binding_field(self, schema):
        doc = {"version": 1, "bindings": [{"keys": "a", "command": "x", "when": "focus"}]}
        with pytest.raises(ValidationError):
            validate(instance=doc, schema=schema)


# ---------------------------------------------------------------------------
# Keymap.from_dict
# ---------------------------------------------------------------------------


class TestFromDict:
    def test_example(self, example):
        keymap = Keymap.from_dict(example)
        assert keymap.commands == ["save", "save_as", "confirm", "dismiss", "find_next"]
        assert keymap.bindings[0] == Binding(
            keys="CmdOrCtrl+S", command="save", description="Save the current file"
        )
        assert keymap.bindings[1].description == ""

    def test_empty_bindings(self):
        assert Keymap.from_dict({"version": 1, "bindings": []}).bindings == ()

    def test_schema_violation(self):
        with pytest.raises(KeymapError, match="bindings/0"):
            Keymap.from_dict({"version": 1, "bindings": [{"keys": "a"}]}, source="k.json")

    def test_not_an_object(self):
        with pytest.raises(KeymapError):
            Keymap.from_dict(["ctrl+s"])

    def test_invalid_pattern(self):
        doc = {"version": 1, "bindings": [{"keys": "ctrl+", "command": "broken"}]}
        with pytest.raises(KeymapError, match="broken") as info:
            Keymap.from_dict(doc)
        assert "Invalid accelerator" in str(info.value)

    def test_binding_parse(self):
        pattern = Binding(keys="CmdOrCtrl+S", command="save").parse(is_apple=_apple)
        assert pattern.meta is True
        assert pattern.keys == ("s",)


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestCommandsFor:
    def test_single_command(self, example):
        keymap = Keymap.from_dict(example)
        event = KeyEvent(key="s", ctrl=True)
        assert keymap.commands_for(event, is_apple=_other) == ["save"]
        assert keymap.commands_for(event, is_apple=_apple) == []

    def test_alternatives(self, example):
        keymap = Keymap.from_dict(example)
        event = KeyEvent(key=" ", meta=True)
        assert keymap.commands_for(event, is_apple=_apple) == ["confirm"]

    def test_option_platform(self, example):
        keymap = Keymap.from_dict(example)
        event = KeyEvent(key="f", alt=True)
        assert keymap.commands_for(event, is_apple=_apple) == ["find_next"]
        assert keymap.commands_for(event, is_apple=_other) == []

    def test_file_order(self):
        doc = {
            "version": 1,
            "bindings": [
                {"keys": "Escape", "command": "close"},
                {"keys": "EscapeOrEnter", "command": "either"},
            ],
        }
        keymap = Keymap.from_dict(doc)
        assert keymap.commands_for(KeyEvent(key="Escape")) == ["close", "either"]


class TestDispatcher:
    def test_wires_handlers(self, example):
        calls = []
        keymap = Keymap.from_dict(example)
        dispatcher = keymap.dispatcher(
            {"save": lambda e: calls.append("save"), "dismiss": lambda e: calls.append("dismiss")},
            is_apple=_other,
        )
        assert dispatcher.patterns == ("CmdOrCtrl+S", "Escape")
        dispatcher.handle(KeyEvent(key="S", ctrl=True))
        dispatcher.handle(KeyEvent(key="Escape"))
        assert calls == ["save", "dismiss"]


# ---------------------------------------------------------------------------
# load_keymap
# ---------------------------------------------------------------------------


class TestLoadKeymap:
    def test_loads_file(self, keymap_file, example):
        path = keymap_file(example)
        keymap = load_keymap(path)
        assert keymap.source == str(path)
        assert len(keymap.bindings) == 5

    def test_accepts_str_path(self, keymap_file, example):
        assert load_keymap(str(keymap_file(example))).commands[0] == "save"

    def test_missing_file(self, tmp_path):
        with pytest.raises(KeymapError, match="cannot read"):
            load_keymap(tmp_path / "nope.json")

    def test_bad_json(self, keymap_file):
        with pytest.raises(KeymapError, match="invalid JSON"):
            load_keymap(keymap_file("{not json"))

    def test_error_names_file(self, keymap_file):
        path = keymap_file({"version": 1})
        with pytest.raises(KeymapError) as info:
            load_keymap(path)
        assert str(path) in str(info.value)
