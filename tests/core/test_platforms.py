"""Tests for core/platforms.py and core/formatters.py."""

import pytest

from blue_gardener.core.errors import ConfigurationError
from blue_gardener.core.formatters import combined_section, copy_source, opencode_agent, windsurf_rule
from blue_gardener.core.markdown import split_frontmatter
from blue_gardener.core.platforms import (
    PLATFORMS,
    Platform,
    detect_platform,
    get_platform_spec,
    parse_platform,
    platform_ids,
)


class TestParsePlatform:

    def test_parses_ids(self):
        for platform in Platform:
            assert parse_platform(platform.value) is platform
            assert parse_platform(platform) is platform

    def test_case_and_whitespace(self):
        assert parse_platform("  Cursor ") is Platform.CURSOR

    def test_aliases(self):
        assert parse_platform("claude-desktop") is Platform.CLAUDE
        assert parse_platform("github-copilot") is Platform.COPILOT

    def test_unknown_lists_available(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_platform("emacs")
        assert "Unknown platform 'emacs'" in str(exc_info.value)
        assert "cursor" in str(exc_info.value)

    def test_str_is_value(self):
        assert str(Platform.CODEX) == "codex"


class TestPlatformTable:

    def test_every_platform_has_a_spec(self):
        assert set(PLATFORMS) == set(Platform)
        assert platform_ids()[0] == "cursor"

    def test_single_file_platforms(self):
        single = {p for p, spec in PLATFORMS.items() if spec.single_file}
        assert single == {Platform.CODEX, Platform.COPILOT}

    def test_codex_layout(self):
        spec = get_platform_spec("codex")
        assert spec.output_path == "AGENTS.md"
        assert spec.manifest_dir == "."


class TestDetectPlatform:

    def test_nothing_detected(self, project):
        assert detect_platform(project) is None

    @pytest.mark.parametrize(
        "marker, expected",
        [
            (".cursor/agents", Platform.CURSOR),
            (".claude/agents", Platform.CLAUDE),
            (".windsurf", Platform.WINDSURF),
            (".opencode/agents", Platform.OPENCODE),
        ],
    )
    def test_directory_markers(self, project, marker, expected):
        (project / marker).mkdir(parents=True)
        assert detect_platform(project) is expected

    def test_file_markers(self, project):
        (project / "AGENTS.md").write_text("# Agents\n")
        assert detect_platform(project) is Platform.CODEX

        (project / ".github").mkdir()
        (project / ".github" / "copilot-instructions.md").write_text("x")
        assert detect_platform(project) is Platform.COPILOT

    def test_detection_order(self, project):
        (project / ".claude" / "agents").mkdir(parents=True)
        (project / ".cursor" / "agents").mkdir(parents=True)
        assert detect_platform(project) is Platform.CURSOR

    def test_bare_github_dir_is_not_copilot(self, project):
        (project / ".github" / "workflows").mkdir(parents=True)
        assert detect_platform(project) is None


class TestFormatters:

    def test_copy_source_is_verbatim(self, catalog):
        agent = catalog.get("blue-code-reviewer")
        assert copy_source(agent) == agent.content

    def test_opencode(self, catalog):
        agent = catalog.get("blue-code-reviewer")
        meta, body = split_frontmatter(opencode_agent(agent))
        assert meta == {"description": "Reviews code changes.", "mode": "subagent"}
        assert body.strip() == agent.body

    def test_windsurf(self, catalog):
        text = windsurf_rule(catalog.get("blue-code-reviewer"))
        meta, body = split_frontmatter(text)

        assert meta == {"trigger": "model_decision", "description": "Reviews code changes."}
        assert "# Blue Code Reviewer" in body
        assert "## When This Rule Applies" in body
        assert "## Rules" in body
        assert "## Expected Output" in body
        assert "Delegation Guidelines" not in body
        assert "@blue-" not in body

    def test_windsurf_rule_phrasing(self, catalog):
        body = windsurf_rule(catalog.get("blue-api-designer"))
        # Intro is kept as written; only section content is rephrased
        assert "You design APIs." in body
        assert "the appropriate specialist" in body

    def test_combined_section(self, catalog):
        text = combined_section(catalog.get("blue-code-reviewer"))
        lines = text.split("\n")

        assert lines[0] == "## Blue Code Reviewer"
        assert "*Reviews code changes.*" in text
        assert "### Guidelines" in text
        assert "### Overview" in text
        assert "### Expected Output" in text
        assert "Delegation Guidelines" not in text
        assert "@blue-" not in text
        # The fenced "## not a heading" survives untouched
        assert "## not a heading" in lines

    def test_combined_section_has_one_top_heading(self, catalog):
        text = combined_section(catalog.get("blue-api-designer"))
        top = [line for line in text.split("\n") if line.startswith("## ")]
        assert top == ["## Blue Api Designer"]
        assert "#### Details" in text
