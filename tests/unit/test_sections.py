"""Unit tests for resolving the section map."""

from changelog_notes.models import ChangelogSection
from changelog_notes.sections import DEFAULT_SECTIONS, find_section, resolve_sections, section_types


def test_default_sections_get_visible_others() -> None:
    """Test that the defaults gain a visible Others section at the end."""
    sections = resolve_sections(None)
    assert sections[: len(DEFAULT_SECTIONS)] == list(DEFAULT_SECTIONS)
    assert sections[-1] == ChangelogSection(type="others", heading="Others")


def test_custom_sections_replace_defaults() -> None:
    """Test that configured sections replace the defaults and still gain Others."""
    sections = resolve_sections([ChangelogSection(type="feat", heading="New")])
    assert [section.type for section in sections] == ["feat", "others"]


def test_configured_others_is_not_duplicated() -> None:
    """Test that an explicitly configured Others section is kept as-is."""
    others = ChangelogSection(type="others", heading="Misc", hidden=True)
    sections = resolve_sections([ChangelogSection(type="feat", heading="New"), others])
    assert sections == [ChangelogSection(type="feat", heading="New"), others]


def test_section_alias_for_heading() -> None:
    """Test that 'section' is accepted as the heading field name."""
    section = ChangelogSection.model_validate({"type": "fix", "section": "Bug Fixes"})
    assert section.heading == "Bug Fixes"
    assert section.hidden is False


def test_find_section_and_types() -> None:
    """Test section lookup helpers."""
    sections = resolve_sections(None)
    chore = find_section(sections, "chore")
    assert chore is not None
    assert chore.hidden is True
    assert find_section(sections, "unknown") is None
    assert {"feat", "fix", "others"} <= section_types(sections)
