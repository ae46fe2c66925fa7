"""Main changelog notes orchestration."""

from typing import List

import structlog

from changelog_notes.classifier import CommitClassifier
from changelog_notes.context import build_context
from changelog_notes.fallback import assemble
from changelog_notes.linkify import TrackerPatterns
from changelog_notes.models import BuildOptions, Commit
from changelog_notes.renderer import preset_factory, render
from changelog_notes.sections import resolve_sections

logger = structlog.get_logger(__name__)


class DefaultChangelogNotes:
    """Builds release notes from conventional commits.

    Commits are classified into sections, rendered with the Jinja2 preset and
    then passed through the fallback assembler so that Others commits are
    never lost. The bundled templates can be replaced per instance.
    """

    def __init__(
        self,
        commit_partial: str | None = None,
        header_partial: str | None = None,
        main_template: str | None = None,
    ) -> None:
        """Initialize with optional Jinja2 template overrides.

        Args:
            commit_partial: Template for a single commit bullet (``commit`` is in scope)
            header_partial: Template for the release header
            main_template: Template for the whole document; includes ``header``, ``commit`` and ``footer``
        """
        self.commit_partial = commit_partial
        self.header_partial = header_partial
        self.main_template = main_template

    async def build_notes(self, commits: List[Commit], options: BuildOptions) -> str:
        """Build release notes Markdown.

        Args:
            commits: Conventionally parsed commits in the release range
            options: Repository, version, section and tracker options

        Returns:
            Markdown text without a trailing newline

        Raises:
            ConfigurationError: If the tracker prefix list is malformed.
            RenderError: If the templates fail to render.
        """
        context = build_context(options)
        sections = resolve_sections(options.changelog_sections)
        tracker_patterns = TrackerPatterns.from_config(options.tracker_list)

        writer_opts = preset_factory(sections)
        writer_opts.commit_partial = self.commit_partial or writer_opts.commit_partial
        writer_opts.header_partial = self.header_partial or writer_opts.header_partial
        writer_opts.main_template = self.main_template or writer_opts.main_template

        classifier = CommitClassifier(
            sections=sections,
            tracker_patterns=tracker_patterns,
            tracker_url=options.tracker_url,
            host=context.host,
            owner=context.owner,
            repository=context.repository,
        )
        entries = classifier.classify(commits, options.raw_commits)

        rendered = await render(entries, context, writer_opts)
        notes = assemble(rendered, entries, context, sections)
        logger.info(
            "Built changelog notes",
            version=context.version,
            commits=len(commits),
            raw_commits=len(options.raw_commits),
            entries=len(entries),
            others=sum(1 for entry in entries if entry.is_others),
        )
        return notes


async def build_notes(commits: List[Commit], options: BuildOptions) -> str:
    """Build release notes with the default templates."""
    return await DefaultChangelogNotes().build_notes(commits, options)
