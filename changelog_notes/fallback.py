"""Guarantees that Others commits make it into the final notes.

A custom main template, or one that only renders the release header, may leave
out the catch-all section. When the rendered Markdown has no Others heading,
an Others block is built by hand and appended below whatever was rendered.
"""

import re
from typing import Iterable, List

import structlog

from changelog_notes.constants import OTHERS_HEADING, OTHERS_TYPE, SECTION_OR_BULLET_PATTERN, SHORT_SHA_LENGTH
from changelog_notes.models import BuildContext, ChangelogSection, ClassifiedEntry
from changelog_notes.sections import find_section

logger = structlog.get_logger(__name__)


def has_sections(markdown: str) -> bool:
    """Whether rendered Markdown contains a ``###`` heading or a ``*`` bullet."""
    return SECTION_OR_BULLET_PATTERN.search(markdown) is not None


def has_heading(markdown: str, heading: str) -> bool:
    """Whether rendered Markdown contains the ``### <heading>`` line."""
    return re.search(rf"^###\s+{re.escape(heading)}\s*$", markdown, re.MULTILINE) is not None


def format_others_entry(entry: ClassifiedEntry, context: BuildContext) -> str:
    """Format one Others bullet with a short SHA link when the SHA is known."""
    if not entry.sha:
        return f"* {entry.subject}".rstrip()
    return f"* {entry.subject} ([{entry.sha[:SHORT_SHA_LENGTH]}]({context.commit_url(entry.sha)}))"


def build_others_block(entries: Iterable[ClassifiedEntry], context: BuildContext, heading: str = OTHERS_HEADING) -> List[str]:
    """Build the lines of a hand-made Others section."""
    lines = [f"### {heading}", ""]
    lines.extend(format_others_entry(entry, context) for entry in entries)
    return lines


def assemble(
    rendered_markdown: str,
    classified_entries: Iterable[ClassifiedEntry],
    context: BuildContext,
    sections: Iterable[ChangelogSection] | None = None,
) -> str:
    """Produce the final Markdown from rendered output and classified entries.

    Args:
        rendered_markdown: Output of the section renderer
        classified_entries: Every entry passed to the renderer
        context: Build context, used for commit links
        sections: Effective section map; decides the Others heading and whether it is hidden

    Returns:
        Final Markdown without a trailing newline
    """
    rendered = rendered_markdown.strip()
    others = [entry for entry in classified_entries if entry.type == OTHERS_TYPE]
    if not others:
        return rendered

    others_section = find_section(sections or [], OTHERS_TYPE)
    if others_section is not None and others_section.hidden:
        logger.debug("Others section is hidden, not appending fallback", others=len(others))
        return rendered
    heading = others_section.heading if others_section is not None else OTHERS_HEADING

    if has_heading(rendered, heading):
        return rendered

    lines: List[str] = []
    if rendered:
        if not has_sections(rendered):
            logger.debug("Rendered notes contain only a header, appending Others below it")
        lines.extend([rendered, ""])
    lines.extend(build_others_block(others, context, heading))
    logger.info("Appended fallback Others section", others=len(others))
    return "\n".join(lines)
