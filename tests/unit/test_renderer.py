"""Unit tests for the Jinja2 section renderer."""

import pytest

from changelog_notes.exceptions import RenderError
from changelog_notes.models import BuildContext, ChangelogSection, ClassifiedEntry, Note, Reference
from changelog_notes.renderer import group_entries, preset_factory, render
from changelog_notes.sections import resolve_sections


def test_preset_factory_loads_bundled_templates() -> None:
    """Test that the preset carries the section map and all bundled templates."""
    sections = resolve_sections(None)
    writer_opts = preset_factory(sections)
    assert writer_opts.types == sections
    assert '{% include "header" %}' in writer_opts.main_template
    assert "commit.subject" in writer_opts.commit_partial
    assert "version" in writer_opts.header_partial


def test_group_entries_follows_section_order_and_skips_hidden_and_unknown() -> None:
    """Test grouping by heading in section map order."""
    entries = [
        ClassifiedEntry(subject="fixed", type="fix"),
        ClassifiedEntry(subject="chores", type="chore"),
        ClassifiedEntry(subject="added", type="feat"),
        ClassifiedEntry(subject="mystery", type="wip"),
    ]
    commit_groups, note_groups = group_entries(entries, resolve_sections(None))
    assert [group.title for group in commit_groups] == ["Features", "Bug Fixes"]
    assert [entry.subject for entry in commit_groups[0].commits] == ["added"]
    assert note_groups == []


def test_group_entries_merges_types_sharing_a_heading() -> None:
    """Test that several types mapped to one heading share a group."""
    sections = [ChangelogSection(type="feat", heading="Changes"), ChangelogSection(type="fix", heading="Changes")]
    commit_groups, _ = group_entries([ClassifiedEntry(subject="a", type="fix"), ClassifiedEntry(subject="b", type="feat")], sections)
    assert len(commit_groups) == 1
    assert [entry.subject for entry in commit_groups[0].commits] == ["a", "b"]


@pytest.mark.asyncio
async def test_render_single_feature(context: BuildContext) -> None:
    """Test the rendered layout for a single feature commit."""
    entries = [ClassifiedEntry(subject="add widget", type="feat", sha="abc1234def")]
    rendered = await render(entries, context, preset_factory(resolve_sections(None)))
    assert rendered.strip() == ("## 1.0.0 (2026-01-01)\n\n### Features\n\n* add widget ([abc1234](https://github.com/owner/repo/commit/abc1234def))")


@pytest.mark.asyncio
async def test_render_compare_link_header() -> None:
    """Test that the header links to the tag comparison when enabled."""
    context = BuildContext(
        owner="owner",
        repository="repo",
        version="1.1.0",
        previous_tag="v1.0.0",
        current_tag="v1.1.0",
        link_compare=True,
        date="2026-01-01",
    )
    rendered = await render([], context, preset_factory(resolve_sections(None)))
    assert rendered.strip() == "## [1.1.0](https://github.com/owner/repo/compare/v1.0.0...v1.1.0) (2026-01-01)"


@pytest.mark.asyncio
async def test_render_without_version_has_no_header() -> None:
    """Test that no header is rendered without a version."""
    context = BuildContext(owner="owner", repository="repo", date="2026-01-01")
    rendered = await render([ClassifiedEntry(subject="add widget", type="feat")], context, preset_factory(resolve_sections(None)))
    assert rendered.strip() == "### Features\n\n* add widget"


@pytest.mark.asyncio
async def test_render_scope_references_and_breaking_notes(context: BuildContext) -> None:
    """Test scopes, closing references and the breaking changes block."""
    entries = [
        ClassifiedEntry(
            subject="drop v1 endpoints",
            type="feat",
            scope="api",
            sha="abc1234def",
            notes=[Note(title="BREAKING CHANGE", text="old API removed")],
            references=[Reference(action="closes", issue="12", raw="#12")],
        )
    ]
    rendered = await render(entries, context, preset_factory(resolve_sections(None)))
    assert rendered.strip() == (
        "## 1.0.0 (2026-01-01)\n"
        "\n"
        "### ⚠ BREAKING CHANGES\n"
        "\n"
        "* **api:** old API removed\n"
        "\n"
        "### Features\n"
        "\n"
        "* **api:** drop v1 endpoints ([abc1234](https://github.com/owner/repo/commit/abc1234def)), "
        "closes [#12](https://github.com/owner/repo/issues/12)"
    )


@pytest.mark.asyncio
async def test_render_hides_hidden_sections_but_keeps_their_breaking_notes(context: BuildContext) -> None:
    """Test that hidden sections are not rendered while their breaking notes are."""
    entries = [
        ClassifiedEntry(subject="bump deps", type="chore", sha="c1", notes=[Note(title="BREAKING CHANGE", text="config format changed")]),
        ClassifiedEntry(subject="tidy docs", type="docs", sha="d1"),
        ClassifiedEntry(subject="add widget", type="feat", sha="f1"),
    ]
    rendered = await render(entries, context, preset_factory(resolve_sections(None)))
    assert "bump deps" not in rendered
    assert "tidy docs" not in rendered
    assert "Miscellaneous Chores" not in rendered
    assert "### ⚠ BREAKING CHANGES\n\n* config format changed" in rendered
    assert "### Features" in rendered


def test_group_entries_collects_notes_from_hidden_types_only_when_known() -> None:
    """Test that hidden types contribute notes while unknown types contribute nothing."""
    entries = [
        ClassifiedEntry(subject="rework", type="refactor", notes=[Note(title="BREAKING CHANGE", text="hidden breaking")]),
        ClassifiedEntry(subject="mystery", type="wip", notes=[Note(title="BREAKING CHANGE", text="unknown breaking")]),
    ]
    commit_groups, note_groups = group_entries(entries, resolve_sections(None))
    assert commit_groups == []
    assert [group.title for group in note_groups] == ["BREAKING CHANGES"]
    assert [note["text"] for note in note_groups[0].notes] == ["hidden breaking"]


@pytest.mark.asyncio
async def test_render_others_section(context: BuildContext) -> None:
    """Test that Others entries render under the Others heading by default."""
    entries = [ClassifiedEntry(subject="Fix typo", type="others", sha="deadbeef1234")]
    rendered = await render(entries, context, preset_factory(resolve_sections(None)))
    assert "### Others\n\n* Fix typo ([deadbee](https://github.com/owner/repo/commit/deadbeef1234))" in rendered


@pytest.mark.asyncio
async def test_render_syntax_error_raises_render_error(context: BuildContext) -> None:
    """Test that template syntax errors surface as RenderError."""
    writer_opts = preset_factory(resolve_sections(None))
    writer_opts.main_template = "{% for %}"
    with pytest.raises(RenderError) as exc_info:
        await render([], context, writer_opts)
    assert isinstance(exc_info.value.__cause__, Exception)


@pytest.mark.asyncio
async def test_render_undefined_variable_raises_render_error(context: BuildContext) -> None:
    """Test that undefined template variables surface as RenderError."""
    writer_opts = preset_factory(resolve_sections(None))
    writer_opts.commit_partial = "* {{ commit.no_such_field }}"
    with pytest.raises(RenderError):
        await render([ClassifiedEntry(subject="add widget", type="feat")], context, writer_opts)
