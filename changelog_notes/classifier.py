"""Classifies commits into changelog sections.

Each conventionally parsed commit becomes one ``ClassifiedEntry``. Commits whose
header starts with an issue tracker key (``ABC-123: ...``) always land in the
Others section with their raw header as subject. Raw commits that were never
parsed into conventional form are then scanned so that meaningful ones are not
silently dropped from the notes.
"""

from typing import Iterable, List

import structlog

from changelog_notes.constants import (
    BREAKING_CHANGE_TITLE,
    CONVENTIONAL_HEADER_PATTERN,
    DEFAULT_HOST,
    HAS_LETTERS_PATTERN,
    MERGE_HEADER_PATTERN,
    OTHERS_TYPE,
    RELEASE_AS_TITLE,
    RELEASE_AUTOMATION_PATTERN,
)
from changelog_notes.linkify import TrackerPatterns, replace_issue_link
from changelog_notes.models import ChangelogSection, ClassifiedEntry, Commit, Note, RawCommit, TrackerConfig, first_line
from changelog_notes.sanitizer import sanitize
from changelog_notes.sections import section_types

logger = structlog.get_logger(__name__)


class CommitClassifier:
    """Turns commits into classified entries for one build."""

    def __init__(
        self,
        sections: Iterable[ChangelogSection],
        tracker_patterns: TrackerPatterns,
        tracker_url: str | None = None,
        host: str = DEFAULT_HOST,
        owner: str = "",
        repository: str = "",
    ) -> None:
        """Initialize with the section map, tracker settings and repository coordinates.

        Args:
            sections: Effective section map for this build
            tracker_patterns: Compiled tracker key patterns
            tracker_url: Base URL for tracker key links; keys are not linked when unset
            host: Repository host used for issue links in breaking change notes
            owner: Repository owner
            repository: Repository name
        """
        self.known_types = section_types(sections)
        self.tracker_patterns = tracker_patterns
        self.tracker_url = tracker_url
        self.host = host
        self.owner = owner
        self.repository = repository

    def classify(self, commits: Iterable[Commit], raw_commits: Iterable[RawCommit] = ()) -> List[ClassifiedEntry]:
        """Classify parsed commits, then recover raw commits the parser did not cover.

        Args:
            commits: Conventionally parsed commits
            raw_commits: Commits known to be in range but not conventionally parsed

        Returns:
            One entry per included commit, parsed commits first, in input order
        """
        entries: List[ClassifiedEntry] = []
        consumed_shas: set[str] = set()

        for commit in commits:
            entries.append(self.classify_commit(commit))
            if commit.sha:
                consumed_shas.add(commit.sha)

        recovered = 0
        for raw in raw_commits:
            if raw.sha and raw.sha in consumed_shas:
                continue
            entry = self.recover_raw_commit(raw)
            if entry is None:
                continue
            if raw.sha:
                consumed_shas.add(raw.sha)
            entries.append(entry)
            recovered += 1

        logger.debug("Classified commits", entries=len(entries), recovered_raw_commits=recovered)
        return entries

    def classify_commit(self, commit: Commit) -> ClassifiedEntry:
        """Classify a single conventionally parsed commit."""
        header = commit.header
        if self.tracker_patterns.is_issue_header(header):
            commit_type: str | None = OTHERS_TYPE
            subject = header
        else:
            commit_type = commit.type
            subject = commit.bare_message
            if commit_type not in self.known_types and self.tracker_patterns.is_tracker_key(commit_type):
                logger.debug("Remapping tracker key type to others", sha=commit.sha, type=commit_type)
                commit_type = OTHERS_TYPE

        return ClassifiedEntry(
            subject=self._display_subject(subject),
            type=commit_type,
            scope=commit.scope,
            notes=self._breaking_notes(commit.notes),
            references=list(commit.references),
            mentions=[],
            merge=None,
            revert=None,
            header=commit.message,
            footer=self._footer(commit.notes),
            sha=commit.sha,
        )

    def recover_raw_commit(self, raw: RawCommit) -> ClassifiedEntry | None:
        """Return an Others entry for a raw commit worth listing, or None to skip it."""
        header = first_line(raw.message)
        if not header:
            return None
        if not self.tracker_patterns.is_issue_header(header):
            reason = _skip_reason(header)
            if reason is not None:
                logger.debug("Skipping raw commit", sha=raw.sha, header=header, reason=reason)
                return None

        logger.debug("Recovered raw commit", sha=raw.sha, header=header)
        return ClassifiedEntry(
            subject=self._display_subject(header),
            type=OTHERS_TYPE,
            scope=None,
            notes=[],
            references=[],
            mentions=[],
            merge=None,
            revert=None,
            header=header,
            footer="",
            sha=raw.sha,
        )

    def _display_subject(self, subject: str) -> str:
        subject = sanitize(subject)
        if self.tracker_url:
            subject = self.tracker_patterns.linkify(subject, self.tracker_url)
        return subject

    def _breaking_notes(self, notes: Iterable[Note]) -> List[Note]:
        return [replace_issue_link(note, self.host, self.owner, self.repository) for note in notes if note.title == BREAKING_CHANGE_TITLE]

    @staticmethod
    def _footer(notes: Iterable[Note]) -> str:
        return "\n".join(f"Release-As: {note.text}" for note in notes if note.title == RELEASE_AS_TITLE)


def _skip_reason(header: str) -> str | None:
    # Tracker-key headers never reach here.
    if not HAS_LETTERS_PATTERN.search(header):
        return "no letters"
    if CONVENTIONAL_HEADER_PATTERN.match(header):
        return "conventional header"
    if MERGE_HEADER_PATTERN.match(header):
        return "merge commit"
    if RELEASE_AUTOMATION_PATTERN.search(header):
        return "release automation"
    return None


def classify_commits(
    commits: Iterable[Commit],
    raw_commits: Iterable[RawCommit],
    sections: Iterable[ChangelogSection],
    tracker_config: TrackerConfig | None = None,
    host: str = DEFAULT_HOST,
    owner: str = "",
    repository: str = "",
) -> List[ClassifiedEntry]:
    """Classify commits against a section map and tracker configuration.

    Raises:
        ConfigurationError: If the tracker prefix list is malformed.
    """
    tracker_config = tracker_config or TrackerConfig()
    classifier = CommitClassifier(
        sections=sections,
        tracker_patterns=TrackerPatterns.from_config(tracker_config.tracker_list),
        tracker_url=tracker_config.tracker_url,
        host=host,
        owner=owner,
        repository=repository,
    )
    return classifier.classify(commits, raw_commits)
