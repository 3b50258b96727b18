"""Render an agent definition in each platform's dialect."""

from __future__ import annotations

import re

from blue_gardener.core.catalog import AgentDefinition
from blue_gardener.core.markdown import (
    BodySection,
    demote_headings,
    join_body,
    map_outside_fences,
    remap_sections,
    remove_agent_references,
    render_frontmatter,
    split_body,
)

# Single-file platforms have no delegation between agents
COMBINED_HEADER_MAPPINGS: dict[str, str | None] = {
    "When Invoked": "Guidelines",
    "Core Responsibilities": "Overview",
    "Delegation Guidelines": None,
    "Output Format": "Expected Output",
}

WINDSURF_HEADER_MAPPINGS: dict[str, str | None] = {
    "When Invoked": "When This Rule Applies",
    "Core Responsibilities": "Rules",
    "Guidelines": "Rules",
    "Delegation Guidelines": None,
    "Output Format": "Expected Output",
}

# Cascade rules read as guidance rather than a persona
RULE_PHRASES = (
    (re.compile(r"\bdelegate to\b", re.IGNORECASE), "apply"),
    (re.compile(r"\byou are\b", re.IGNORECASE), "use"),
    (re.compile(r"\byour\b", re.IGNORECASE), "the"),
)


def copy_source(agent: AgentDefinition) -> str:
    """Cursor and Claude read the catalog format as-is."""
    return agent.content


def opencode_agent(agent: AgentDefinition) -> str:
    """OpenCode subagent: description plus ``mode: subagent`` front-matter."""
    meta = {"description": agent.description or agent.display_name, "mode": "subagent"}
    return f"{render_frontmatter(meta)}\n{agent.body}\n"


def _as_rule(line: str) -> str:
    for pattern, replacement in RULE_PHRASES:
        line = pattern.sub(replacement, line)
    return line


def windsurf_rule(agent: AgentDefinition) -> str:
    """Windsurf Cascade rule with ``trigger`` front-matter."""
    intro, sections = split_body(remove_agent_references(agent.body))
    sections = [
        BodySection(section.header, map_outside_fences(section.content, _as_rule))
        for section in remap_sections(sections, WINDSURF_HEADER_MAPPINGS)
    ]

    meta = {"trigger": "model_decision", "description": agent.description or agent.display_name}
    body = join_body(intro, sections)
    return f"{render_frontmatter(meta)}\n# {agent.display_name}\n\n{body}\n"


def combined_section(agent: AgentDefinition) -> str:
    """One ``## <display name>`` block for a combined instructions file.

    Body headings are demoted so that the only level-two heading in the
    block is the agent heading.
    """
    intro, sections = split_body(remove_agent_references(agent.body))
    body = demote_headings(join_body(intro, remap_sections(sections, COMBINED_HEADER_MAPPINGS)), 3)

    parts = [f"## {agent.display_name}"]
    if agent.description:
        parts.append(f"*{agent.description}*")
    if body:
        parts.append(body)
    return "\n\n".join(parts)
