"""Renders classified entries into Markdown sections with Jinja2 templates.

The layout follows conventional-changelog: a release header, a breaking
changes block, then one ``###`` section per configured heading. Entries of hidden
types contribute only their notes, entries of unknown types are left out; the fallback
assembler takes care of Others commits a custom template may have dropped.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List

import jinja2
import structlog

from changelog_notes.constants import BREAKING_CHANGE_TITLE
from changelog_notes.exceptions import RenderError
from changelog_notes.models import BuildContext, ChangelogSection, ClassifiedEntry
from changelog_notes.sections import find_section

logger = structlog.get_logger(__name__)

TEMPLATES_DIRECTORY = Path(__file__).parent / "templates"

NOTE_GROUP_TITLES = {BREAKING_CHANGE_TITLE: "BREAKING CHANGES"}


def load_template_source(name: str) -> str:
    """Read a bundled template by file name."""
    with open(TEMPLATES_DIRECTORY / name, encoding="utf-8") as f:
        return f.read()


@dataclass
class WriterOptions:
    """Templates and section map consumed by ``render``."""

    types: List[ChangelogSection]
    main_template: str
    header_partial: str
    commit_partial: str
    footer_partial: str = ""
    environment_options: dict[str, Any] = field(default_factory=dict)


@dataclass
class CommitGroup:
    """Entries rendered under one heading."""

    title: str
    commits: List[ClassifiedEntry] = field(default_factory=list)


@dataclass
class NoteGroup:
    """Notes rendered under one note heading (e.g. BREAKING CHANGES)."""

    title: str
    notes: List[dict[str, Any]] = field(default_factory=list)


def preset_factory(types: Iterable[ChangelogSection]) -> WriterOptions:
    """Build writer options for a section map using the bundled templates."""
    return WriterOptions(
        types=list(types),
        main_template=load_template_source("template.j2"),
        header_partial=load_template_source("header.j2"),
        commit_partial=load_template_source("commit.j2"),
        footer_partial=load_template_source("footer.j2"),
    )


def construct_jinja2_environment(writer_opts: WriterOptions) -> jinja2.Environment:
    """Construct an async Jinja2 environment with the writer's templates registered."""
    loader = jinja2.DictLoader(
        {
            "template": writer_opts.main_template,
            "header": writer_opts.header_partial.rstrip("\n"),
            "commit": writer_opts.commit_partial.rstrip("\n"),
            "footer": writer_opts.footer_partial.rstrip("\n"),
        }
    )
    return jinja2.Environment(
        loader=loader,
        undefined=jinja2.StrictUndefined,
        enable_async=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
        **writer_opts.environment_options,
    )


def group_entries(entries: Iterable[ClassifiedEntry], sections: List[ChangelogSection]) -> tuple[List[CommitGroup], List[NoteGroup]]:
    """Group visible entries by heading and collect notes from every known type.

    Groups follow the section map order. Several types may share one heading.
    Hidden types still contribute their notes, so a breaking change is never lost.
    """
    commit_groups: dict[str, CommitGroup] = {}
    for section in sections:
        if not section.hidden and section.heading not in commit_groups:
            commit_groups[section.heading] = CommitGroup(title=section.heading)

    note_groups: dict[str, NoteGroup] = {}
    for entry in entries:
        section = find_section(sections, entry.type)
        if section is None:
            continue
        if not section.hidden:
            commit_groups[section.heading].commits.append(entry)
        for note in entry.notes:
            title = NOTE_GROUP_TITLES.get(note.title, note.title)
            note_groups.setdefault(title, NoteGroup(title=title)).notes.append({"text": note.text, "scope": entry.scope, "sha": entry.sha})

    return [group for group in commit_groups.values() if group.commits], list(note_groups.values())


async def render(entries: Iterable[ClassifiedEntry], context: BuildContext, writer_opts: WriterOptions) -> str:
    """Render classified entries into Markdown.

    Args:
        entries: Classified entries for the release
        context: Build context (host, repository, version, tags)
        writer_opts: Templates and section map from ``preset_factory``

    Returns:
        Rendered Markdown

    Raises:
        RenderError: If a template cannot be compiled or rendered.
    """
    commit_groups, note_groups = group_entries(entries, writer_opts.types)
    template_name = "template"
    try:
        environment = construct_jinja2_environment(writer_opts)
        template = environment.get_template(template_name)
        rendered = await template.render_async(
            **context.model_dump(),
            commit_groups=commit_groups,
            note_groups=note_groups,
        )
    except jinja2.TemplateError as exc:
        template_name = getattr(exc, "name", None) or template_name
        logger.error("Failed to render changelog notes", template_name=template_name, error=str(exc))
        raise RenderError(f"Failed to render changelog notes: {exc}", template_name=template_name) from exc
    logger.debug("Rendered changelog sections", sections=[group.title for group in commit_groups], note_groups=len(note_groups))
    return rendered
