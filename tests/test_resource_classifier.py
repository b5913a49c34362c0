"""Tests for the protocol and source decision tables, independent of the filesystem."""

import pytest

from src.services.resource_classifier import (
    PROTOCOL_RULES,
    SOURCE_RULES,
    classify_protocol,
    classify_source,
    explain_protocol,
)


class TestClassifyProtocol:
    """Rule precedence for protocol inference."""

    @pytest.mark.parametrize(
        "folder_path, filename, expected",
        [
            (["role", "architect", "execution"], "plan.md", "execution"),
            (["role", "architect"], "notes.md", "role"),
            (["tool", "web-search"], "manual.md", "manual"),
            (["tool", "web-search"], "search.tool.js", "tool"),
            (["role", "architect", "thought"], "reflect.md", "thought"),
            (["role", "architect"], "architect.thought.md", "thought"),
            (["role", "architect"], "architect.execution.md", "execution"),
            (["role", "architect"], "architect.role.md", "role"),
            (["domain", "x"], "my-thought.md", "thought"),
            (["domain", "x"], "execution-notes.md", "execution"),
            (["domain", "x"], "user-manual.md", "manual"),
            (["domain", "x"], "readme.md", "role"),
            ([], "anything.thought.md", "role"),
        ],
    )
    def test_examples(self, folder_path, filename, expected):
        assert classify_protocol(folder_path, filename) == expected

    def test_filename_beats_subfolder_under_role(self):
        """A .role. filename wins over an execution subfolder."""
        assert classify_protocol(["role", "a", "execution"], "a.role.md") == "role"

    def test_bare_substring_not_special_under_role(self):
        """Under role/ only dotted markers count, not bare substrings."""
        assert classify_protocol(["role", "a"], "thoughtful.md") == "role"

    def test_tool_ignores_thought_in_filename(self):
        assert classify_protocol(["tool", "t"], "thought.md") == "tool"

    def test_thought_checked_before_manual(self):
        assert classify_protocol(["misc"], "thought-manual.md") == "thought"

    def test_explain_names_matching_rule(self):
        assert explain_protocol(["role", "a", "execution"], "plan.md") == "role: execution subfolder"

    def test_tables_end_with_default(self):
        assert PROTOCOL_RULES[-1].name == "default"
        assert SOURCE_RULES[-1].name == "default"


class TestClassifySource:
    """Provenance inference from path segments."""

    @pytest.mark.parametrize(
        "folder_path, expected",
        [
            (["role", "system", "x"], "system"),
            (["user", "role"], "user"),
            (["role", "architect"], "project"),
            ([], "project"),
            (["user", "system"], "system"),
            (["role", "systems"], "project"),
        ],
    )
    def test_examples(self, folder_path, expected):
        assert classify_source(folder_path) == expected
