"""Tests for interactive.py - Numbered-list prompts."""

from unittest.mock import patch

import pytest

from blue_gardener.core.platforms import Platform
from blue_gardener.interactive import (
    parse_selection,
    pick_agents,
    pick_installed,
    prompt_choice,
    prompt_for_platform,
    prompt_multi_choice,
)


@pytest.fixture(autouse=True)
def quiet():
    with patch("blue_gardener.interactive.message"):
        yield


class TestParseSelection:

    def test_numbers_and_ranges(self):
        assert parse_selection("3, 1,2-3", 4) == [0, 1, 2]

    def test_all(self):
        assert parse_selection("ALL", 3) == [0, 1, 2]

    @pytest.mark.parametrize("answer", ["0", "5", "x", "3-1", "1-9"])
    def test_invalid(self, answer):
        assert parse_selection(answer, 4) is None


class TestPromptChoice:

    def test_selects(self):
        with patch("builtins.input", return_value="2"):
            assert prompt_choice("Pick", ["a", "b"]) == 1

    def test_retries_after_bad_input(self):
        with patch("builtins.input", side_effect=["x", "9", "1"]):
            assert prompt_choice("Pick", ["a", "b"]) == 0

    def test_cancel(self):
        with patch("builtins.input", return_value="q"):
            assert prompt_choice("Pick", ["a"]) is None

    def test_end_of_input(self):
        with patch("builtins.input", side_effect=EOFError):
            assert prompt_choice("Pick", ["a"]) is None

    def test_no_options(self):
        assert prompt_choice("Pick", []) is None


class TestPromptMultiChoice:

    def test_selects_many(self):
        with patch("builtins.input", return_value="1,3"):
            assert prompt_multi_choice("Pick", ["a", "b", "c"]) == [0, 2]

    def test_empty_cancels(self):
        with patch("builtins.input", return_value=""):
            assert prompt_multi_choice("Pick", ["a"]) == []


class TestPickers:

    def test_pick_agents(self, catalog):
        # category 2 is "quality", then its only agent
        with patch("builtins.input", side_effect=["2", "1"]):
            assert pick_agents(catalog) == ["blue-code-reviewer"]

    def test_pick_agents_excludes_installed(self, catalog):
        with patch("builtins.input", side_effect=["1", "all"]):
            assert pick_agents(catalog, exclude=["blue-api-designer"]) == ["blue-code-reviewer"]

    def test_pick_agents_all_installed(self, catalog):
        assert pick_agents(catalog, exclude=catalog.names()) == []

    def test_pick_installed(self):
        with patch("builtins.input", return_value="2"):
            assert pick_installed(["blue-a", "blue-b"]) == ["blue-b"]

    def test_prompt_for_platform_lists_detected_first(self):
        with patch("builtins.input", return_value="1"):
            assert prompt_for_platform(Platform.CODEX) is Platform.CODEX

    def test_prompt_for_platform_table_order(self):
        with patch("builtins.input", return_value="2"):
            assert prompt_for_platform() is Platform.CLAUDE
