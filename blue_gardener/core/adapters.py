"""Write, remove and discover agent output for one platform."""

from __future__ import annotations

from pathlib import Path

from blue_gardener.core.catalog import AgentDefinition, display_name, is_agent_name, name_from_display
from blue_gardener.core.fsutil import atomic_write_text, delete_file, read_text
from blue_gardener.core.markdown import DocumentSection, append_block, join_document, replace_block, split_document
from blue_gardener.core.platforms import Platform, get_platform_spec
from blue_gardener.output import MessageType, VerbosityLevel, message


class PlatformOutput:
    """On-disk agent output of one platform inside a project directory.

    Multi-file platforms get one ``<agent-id>.md`` per agent.  Single-file
    platforms keep one ``## <display name>`` block per agent in a shared
    file, behind a ``---`` rule.  Text around the blocks is never rewritten.
    """

    def __init__(self, platform: str | Platform, project_dir: Path):
        self.spec = get_platform_spec(platform)
        self.project_dir = project_dir

    @property
    def platform(self) -> Platform:
        return self.spec.platform

    @property
    def output_path(self) -> Path:
        return self.project_dir / self.spec.output_path

    def agent_path(self, name: str) -> Path:
        """Return the file that holds agent *name*."""
        if self.spec.single_file:
            return self.output_path
        return self.output_path / f"{name}.md"

    def render(self, agent: AgentDefinition) -> str:
        return self.spec.formatter(agent)

    # ------------------------------------------------------------------
    # Write / remove
    # ------------------------------------------------------------------
    def write(self, agent: AgentDefinition) -> bool:
        """Write (or overwrite) *agent*'s output.

        In a combined file only the agent's own block changes; a new
        block is appended after everything already in the file.

        Returns:
            ``True`` if anything on disk changed

        Raises:
            FilesystemError: If the output cannot be read or written
        """
        block = self.render(agent)
        if not self.spec.single_file:
            return atomic_write_text(self.agent_path(agent.name), block)

        sections = self._read_sections()
        if sections is None:
            new_file = [
                DocumentSection(None, f"{self.spec.preamble}\n\n"),
                DocumentSection(agent.display_name, block.rstrip("\n") + "\n"),
            ]
            return atomic_write_text(self.output_path, join_document(new_file))

        updated: list[DocumentSection] = []
        placed = False
        for section in sections:
            if not self._is_section_of(section, agent.name):
                updated.append(section)
            elif not placed:
                updated.append(replace_block(section, block))
                placed = True
        if not placed:
            updated = append_block(updated, agent.display_name, block)

        return atomic_write_text(self.output_path, join_document(updated))

    def remove(self, name: str) -> bool:
        """Remove agent *name*'s output, leaving everything else intact.

        Returns:
            ``True`` if a file or section was removed

        Raises:
            FilesystemError: If the output cannot be read, written or deleted
        """
        if not self.spec.single_file:
            return delete_file(self.agent_path(name))

        sections = self._read_sections()
        if sections is None:
            return False

        remaining = [s for s in sections if not self._is_section_of(s, name)]
        if len(remaining) == len(sections):
            message(
                f"No section '{display_name(name)}' in {self.output_path}",
                MessageType.DEBUG,
                VerbosityLevel.DEBUG,
            )
            return False

        text = join_document(remaining)
        if not any(s.is_agent for s in remaining) and text.strip() in ("", self.spec.preamble.strip()):
            return delete_file(self.output_path)

        atomic_write_text(self.output_path, text)
        return True

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------
    def installed_names(self) -> set[str]:
        """Agent identifiers present on disk, by naming convention."""
        if self.spec.single_file:
            sections = self._read_sections() or []
            return {name_from_display(s.heading) for s in sections if s.is_agent}
        if not self.output_path.is_dir():
            return set()
        return {path.stem for path in self.output_path.glob("*.md") if path.is_file() and is_agent_name(path.stem)}

    @staticmethod
    def _is_section_of(section: DocumentSection, name: str) -> bool:
        return section.is_agent and name_from_display(section.heading) == name

    def _read_sections(self) -> list[DocumentSection] | None:
        text = read_text(self.output_path)
        if not text:
            return None
        return split_document(text, lambda heading: is_agent_name(name_from_display(heading)))
