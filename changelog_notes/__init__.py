"""Changelog notes generation from conventional commits."""

from .classifier import CommitClassifier, classify_commits
from .context import build_context
from .exceptions import ChangelogNotesError, ConfigurationError, RenderError
from .fallback import assemble
from .linkify import TrackerPatterns, linkify, replace_issue_link
from .models import (
    BuildContext,
    BuildOptions,
    ChangelogNotes,
    ChangelogSection,
    ClassifiedEntry,
    Commit,
    Note,
    PullRequest,
    RawCommit,
    Reference,
    TrackerConfig,
)
from .notes import DefaultChangelogNotes, build_notes
from .renderer import WriterOptions, preset_factory, render
from .sanitizer import sanitize
from .sections import DEFAULT_SECTIONS, resolve_sections

__all__ = [
    "BuildContext",
    "BuildOptions",
    "ChangelogNotes",
    "ChangelogNotesError",
    "ChangelogSection",
    "ClassifiedEntry",
    "Commit",
    "CommitClassifier",
    "ConfigurationError",
    "DEFAULT_SECTIONS",
    "DefaultChangelogNotes",
    "Note",
    "PullRequest",
    "RawCommit",
    "Reference",
    "RenderError",
    "TrackerConfig",
    "TrackerPatterns",
    "WriterOptions",
    "assemble",
    "build_context",
    "build_notes",
    "classify_commits",
    "linkify",
    "preset_factory",
    "render",
    "replace_issue_link",
    "resolve_sections",
    "sanitize",
]
