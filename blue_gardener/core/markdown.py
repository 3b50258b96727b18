"""Markdown helpers for agent files.

Handles YAML front-matter, ``##`` body sections, heading demotion and
the ``---`` delimited sections of combined single-file outputs.  Lines
inside fenced code blocks are never treated as headings.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import yaml

FRONTMATTER_DELIMITER = "---"
AGENT_SEPARATOR = "\n---\n\n"
AGENT_REFERENCE_REPLACEMENT = "the appropriate specialist"

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.*?)[ \t]*$")
_AGENT_REFERENCE_RE = re.compile(r"@blue-[\w-]+")


@dataclass
class BodySection:
    """A ``##`` section of an agent body."""

    header: str
    content: str


@dataclass
class DocumentSection:
    """A span of a combined single-file output.

    Attributes:
        heading: Text of the agent's ``##`` heading, ``None`` for any other text
        text: Span text exactly as on disk
    """

    heading: str | None
    text: str

    @property
    def is_agent(self) -> bool:
        return self.heading is not None


# ------------------------------------------------------------------
# Front-matter
# ------------------------------------------------------------------
def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split *text* into YAML front-matter and body.

    Returns ``({}, text)`` when the text has no front-matter block.

    Raises:
        yaml.YAMLError: If the front-matter is not valid YAML
        ValueError: If the front-matter is not a mapping
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return {}, text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == FRONTMATTER_DELIMITER:
            meta = yaml.safe_load("".join(lines[1:idx])) or {}
            if not isinstance(meta, dict):
                raise ValueError("front-matter must be a mapping")
            return meta, "".join(lines[idx + 1:])

    return {}, text


def render_frontmatter(meta: dict[str, Any]) -> str:
    """Render *meta* as a ``---`` delimited YAML block."""
    dumped = yaml.safe_dump(meta, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return f"{FRONTMATTER_DELIMITER}\n{dumped}{FRONTMATTER_DELIMITER}\n"


# ------------------------------------------------------------------
# Line helpers
# ------------------------------------------------------------------
def iter_lines(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(line, in_fence)`` for every line of *text*.

    Fence opening and closing lines are reported as inside the fence.
    """
    fence: str | None = None
    for line in text.split("\n"):
        stripped = line.lstrip()
        marker = stripped[:3]
        if fence is None and marker in ("```", "~~~"):
            fence = marker
            yield line, True
        elif fence is not None:
            if marker == fence:
                fence = None
            yield line, True
        else:
            yield line, False


def map_outside_fences(text: str, func: Callable[[str], str]) -> str:
    """Apply *func* to every line of *text* that is not inside a code fence."""
    return "\n".join(line if in_fence else func(line) for line, in_fence in iter_lines(text))


def parse_heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, text)`` for a markdown heading line, else ``None``."""
    match = _HEADING_RE.match(line)
    if match is None:
        return None
    return len(match.group(1)), match.group(2)


def demote_headings(text: str, min_level: int) -> str:
    """Push every heading one level down and at least to *min_level*."""

    def demote(line: str) -> str:
        heading = parse_heading(line)
        if heading is None:
            return line
        level, title = heading
        level = min(max(level + 1, min_level), 6)
        return f"{'#' * level} {title}"

    return map_outside_fences(text, demote)


def remove_agent_references(text: str) -> str:
    """Replace ``@blue-*`` delegation references with a neutral phrase."""
    return _AGENT_REFERENCE_RE.sub(AGENT_REFERENCE_REPLACEMENT, text)


# ------------------------------------------------------------------
# Agent body sections
# ------------------------------------------------------------------
def split_body(body: str) -> tuple[str, list[BodySection]]:
    """Split an agent body into its intro and ``##`` sections.

    The intro is everything before the first level-two heading; deeper
    headings stay inside the content of the section they belong to.
    """
    intro: list[str] = []
    sections: list[tuple[str, list[str]]] = []

    for line, in_fence in iter_lines(body):
        heading = None if in_fence else parse_heading(line)
        if heading is not None and heading[0] == 2:
            sections.append((heading[1], []))
        elif sections:
            sections[-1][1].append(line)
        else:
            intro.append(line)

    return (
        "\n".join(intro).strip(),
        [BodySection(header, "\n".join(lines).strip()) for header, lines in sections],
    )


def remap_sections(
    sections: list[BodySection],
    mappings: dict[str, str | None],
) -> list[BodySection]:
    """Rename section headers; a ``None`` mapping drops the section."""
    result = []
    for section in sections:
        if section.header in mappings:
            new_header = mappings[section.header]
            if new_header is None:
                continue
            section = BodySection(new_header, section.content)
        result.append(section)
    return result


def join_body(intro: str, sections: list[BodySection]) -> str:
    """Reassemble an intro and ``##`` sections into markdown."""
    parts = [intro] if intro else []
    for section in sections:
        block = f"## {section.header}"
        if section.content:
            block += f"\n\n{section.content}"
        parts.append(block)
    return "\n\n".join(parts)


# ------------------------------------------------------------------
# Combined single-file documents
# ------------------------------------------------------------------
def split_document(text: str, is_agent_heading: Callable[[str], bool]) -> list[DocumentSection]:
    """Split a combined file into agent blocks and the text around them.

    A block starts at a ``##`` heading accepted by *is_agent_heading* and
    runs to the next ``##`` heading.  The ``---`` rule written before a
    block belongs to that block.  Joining the spans gives back *text*.
    """
    starts: list[tuple[int, str | None]] = [(0, None)]
    offset = 0
    for line, in_fence in iter_lines(text):
        heading = None if in_fence else parse_heading(line)
        if heading is not None and heading[0] == 2:
            starts.append((offset, heading[1] if is_agent_heading(heading[1]) else None))
        offset += len(line) + 1

    sections: list[DocumentSection] = []
    for idx, (start, heading) in enumerate(starts):
        end = starts[idx + 1][0] if idx + 1 < len(starts) else len(text)
        chunk = text[start:end]
        if not chunk:
            continue
        previous = sections[-1] if sections else None
        if heading is None and previous is not None and not previous.is_agent:
            previous.text += chunk
            continue
        if heading is not None and previous is not None and previous.text.endswith("\n" + AGENT_SEPARATOR):
            previous.text = previous.text[: -len(AGENT_SEPARATOR)]
            chunk = AGENT_SEPARATOR + chunk
        sections.append(DocumentSection(heading, chunk))

    return [section for section in sections if section.text]


def join_document(sections: list[DocumentSection]) -> str:
    """Inverse of :func:`split_document`."""
    return "".join(section.text for section in sections)


def replace_block(section: DocumentSection, block: str) -> DocumentSection:
    """Swap the agent block of *section* for *block*.

    The separator before the block and the blank lines after it are kept.
    """
    lead = AGENT_SEPARATOR if section.text.startswith(AGENT_SEPARATOR) else ""
    trailing = section.text[len(section.text.rstrip("\n")):] or "\n"
    return DocumentSection(section.heading, lead + block.rstrip("\n") + trailing)


def append_block(sections: list[DocumentSection], heading: str, block: str) -> list[DocumentSection]:
    """Append *block* after the last span, behind a ``---`` rule."""
    result = list(sections)
    if result and not result[-1].text.endswith("\n"):
        result[-1] = DocumentSection(result[-1].heading, result[-1].text + "\n")
    result.append(DocumentSection(heading, AGENT_SEPARATOR + block.rstrip("\n") + "\n"))
    return result
