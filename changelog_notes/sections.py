"""Default section map and helpers for resolving the configured sections."""

from typing import Iterable, List

from changelog_notes.constants import OTHERS_HEADING, OTHERS_TYPE
from changelog_notes.models import ChangelogSection

DEFAULT_SECTIONS: tuple[ChangelogSection, ...] = (
    ChangelogSection(type="feat", heading="Features"),
    ChangelogSection(type="fix", heading="Bug Fixes"),
    ChangelogSection(type="perf", heading="Performance Improvements"),
    ChangelogSection(type="revert", heading="Reverts"),
    ChangelogSection(type="chore", heading="Miscellaneous Chores", hidden=True),
    ChangelogSection(type="docs", heading="Documentation", hidden=True),
    ChangelogSection(type="style", heading="Styles", hidden=True),
    ChangelogSection(type="refactor", heading="Code Refactoring", hidden=True),
    ChangelogSection(type="test", heading="Tests", hidden=True),
    ChangelogSection(type="build", heading="Build System", hidden=True),
    ChangelogSection(type="ci", heading="Continuous Integration", hidden=True),
)
"""Sections used when no changelog sections are configured. Housekeeping types are hidden."""


def resolve_sections(changelog_sections: Iterable[ChangelogSection] | None = None) -> List[ChangelogSection]:
    """Return the effective section map, with a visible Others section appended when missing."""
    sections = list(changelog_sections) if changelog_sections is not None else list(DEFAULT_SECTIONS)
    if find_section(sections, OTHERS_TYPE) is None:
        sections.append(ChangelogSection(type=OTHERS_TYPE, heading=OTHERS_HEADING))
    return sections


def find_section(sections: Iterable[ChangelogSection], section_type: str | None) -> ChangelogSection | None:
    """Return the first section configured for ``section_type``, if any."""
    for section in sections:
        if section.type == section_type:
            return section
    return None


def section_types(sections: Iterable[ChangelogSection]) -> set[str]:
    """All commit types that have a configured section."""
    return {section.type for section in sections}
