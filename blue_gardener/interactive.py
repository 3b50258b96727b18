"""Numbered-list prompts used when the CLI runs on a terminal."""

from __future__ import annotations

from collections.abc import Sequence

from blue_gardener.core.catalog import Catalog
from blue_gardener.core.platforms import PLATFORMS, Platform
from blue_gardener.output import MessageType, VerbosityLevel, message


def _ask(prompt: str) -> str | None:
    """Read one line, returning ``None`` on end of input."""
    try:
        return input(prompt).strip()
    except EOFError:
        return None


def prompt_choice(title: str, options: Sequence[str]) -> int | None:
    """Let the user pick one option.

    Args:
        title: Heading shown above the options
        options: Option labels

    Returns:
        Index of the selected option, or ``None`` if the user cancelled
        with an empty answer, ``q`` or end of input
    """
    if not options:
        return None

    message(f"\n{title}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
    for idx, option in enumerate(options, 1):
        message(f"  {idx}. {option}", MessageType.NORMAL, VerbosityLevel.ALWAYS)

    while True:
        choice = _ask(f"\nSelect (1-{len(options)}, q to cancel): ")
        if choice is None or choice.lower() in ("", "q"):
            return None
        try:
            choice_idx = int(choice) - 1
        except ValueError:
            message("Please enter a number.", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            continue
        if 0 <= choice_idx < len(options):
            return choice_idx
        message("Invalid selection. Please try again.", MessageType.NORMAL, VerbosityLevel.ALWAYS)


def parse_selection(answer: str, count: int) -> list[int] | None:
    """Parse ``"1,3-5"`` or ``"all"`` into zero-based indexes.

    Returns:
        Sorted unique indexes, or ``None`` if the answer is malformed or
        out of range
    """
    if answer.lower() == "all":
        return list(range(count))

    selected: set[int] = set()
    for part in answer.replace(" ", "").split(","):
        if not part:
            continue
        start, sep, end = part.partition("-")
        try:
            first = int(start)
            last = int(end) if sep else first
        except ValueError:
            return None
        if not (1 <= first <= last <= count):
            return None
        selected.update(range(first - 1, last))
    return sorted(selected)


def prompt_multi_choice(title: str, options: Sequence[str]) -> list[int]:
    """Let the user pick any number of options.

    Accepts comma-separated numbers, ranges such as ``2-4`` and ``all``.

    Returns:
        Selected indexes; empty if the user cancelled
    """
    if not options:
        return []

    message(f"\n{title}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
    for idx, option in enumerate(options, 1):
        message(f"  {idx}. {option}", MessageType.NORMAL, VerbosityLevel.ALWAYS)

    while True:
        answer = _ask("\nSelect (e.g. 1,3-4 or all; empty to cancel): ")
        if not answer:
            return []
        selection = parse_selection(answer, len(options))
        if selection:
            return selection
        message("Invalid selection. Please try again.", MessageType.NORMAL, VerbosityLevel.ALWAYS)


def pick_agents(catalog: Catalog, exclude: Sequence[str] = ()) -> list[str]:
    """Pick a category, then agents from it.

    Args:
        catalog: Catalog to pick from
        exclude: Identifiers not offered (e.g. already installed)

    Returns:
        Selected agent identifiers
    """
    groups = {
        category: [agent for agent in agents if agent.name not in exclude]
        for category, agents in catalog.by_category().items()
    }
    groups = {category: agents for category, agents in groups.items() if agents}
    if not groups:
        message("All agents are already installed.", MessageType.INFO, VerbosityLevel.ALWAYS)
        return []

    categories = list(groups)
    labels = [f"{category} ({len(groups[category])} agents)" for category in categories]
    picked = prompt_choice("Choose a category:", labels)
    if picked is None:
        return []

    agents = groups[categories[picked]]
    indexes = prompt_multi_choice(
        f"Choose agents from {categories[picked]}:",
        [f"{agent.name}: {agent.description}" for agent in agents],
    )
    return [agents[idx].name for idx in indexes]


def pick_installed(names: Sequence[str]) -> list[str]:
    """Pick agents from the installed ones."""
    if not names:
        message("No agents are installed.", MessageType.INFO, VerbosityLevel.ALWAYS)
        return []
    indexes = prompt_multi_choice("Choose agents to remove:", list(names))
    return [names[idx] for idx in indexes]


def prompt_for_platform(detected: Platform | None = None) -> Platform | None:
    """Ask which platform a new project targets.

    Args:
        detected: Platform guessed from the project, listed first

    Returns:
        The selected platform, or ``None`` if cancelled
    """
    platforms = list(PLATFORMS)
    if detected is not None:
        platforms.remove(detected)
        platforms.insert(0, detected)

    labels = []
    for platform in platforms:
        spec = PLATFORMS[platform]
        label = f"{spec.name} ({platform}): {spec.description}"
        if platform == detected:
            label += " [detected]"
        labels.append(label)

    picked = prompt_choice("Which AI tool should the agents be installed for?", labels)
    if picked is None:
        return None

    selected = platforms[picked]
    message(f"Selected: {selected}", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
    return selected
