"""Tests for the MCP server tools."""

from __future__ import annotations

import json

import pytest

pytest.importorskip("mcp")

from keymatch.mcp.server import match_accelerator, parse_accelerator  # noqa: E402


class TestParseAccelerator:
    def test_resolves_for_platform(self):
        result = json.loads(parse_accelerator("CmdOrCtrl+S", platform="macos"))
        assert result["meta"] is True
        assert result["ctrl"] is False
        assert result["keys"] == ["s"]
        assert result["platform"] == "macos"

    def test_invalid(self):
        assert parse_accelerator("ctrl+").startswith("Error: Invalid accelerator")


class TestMatchAccelerator:
    def test_match(self):
        assert match_accelerator("Ctrl+EnterOrSpace", " ", ctrl=True) == "match"

    def test_extra_modifier(self):
        assert match_accelerator("Ctrl+S", "s", ctrl=True, shift=True) == "no match"

    def test_platform(self):
        assert match_accelerator("Option+F", "f", alt=True, platform="windows") == "no match"
        assert match_accelerator("Option+F", "f", alt=True, platform="macos") == "match"

    def test_invalid(self):
        assert match_accelerator("+", "a").startswith("Error:")
