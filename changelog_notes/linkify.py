"""Turns issue tracker keys and issue references into Markdown links.

Tracker keys look like ``ABC-123``. The set of accepted prefixes is either an
explicit allow-list or, when none is configured, any run of uppercase letters
and digits starting with a letter. Patterns are compiled once per prefix list
and shared through an immutable ``TrackerPatterns`` value.
"""

import functools
import re
from dataclasses import dataclass
from typing import Iterable

import structlog

from changelog_notes.constants import CODE_SPAN_PATTERN, DEFAULT_TRACKER_PREFIX_PATTERN, ISSUE_REFERENCE_PATTERN, MARKDOWN_LINK_PATTERN
from changelog_notes.exceptions import ConfigurationError
from changelog_notes.models import Note

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TrackerPatterns:
    """Compiled regular expressions for one tracker prefix configuration."""

    prefixes: tuple[str, ...] | None
    key: re.Pattern[str]
    issue_header: re.Pattern[str]
    linkable: re.Pattern[str]

    @classmethod
    def from_config(cls, tracker_list: Iterable[str] | None = None) -> "TrackerPatterns":
        """Build (or fetch from cache) the patterns for a tracker prefix list.

        Args:
            tracker_list: Allowed tracker key prefixes, e.g. ``["ABC", "WIDGET"]``.
                An empty or missing list accepts any uppercase prefix.

        Returns:
            The compiled patterns.

        Raises:
            ConfigurationError: If the prefix list is malformed.
        """
        prefixes = tuple(tracker_list) if tracker_list else None
        return _compile_tracker_patterns(prefixes)

    def is_tracker_key(self, value: str | None) -> bool:
        """Whether ``value`` is exactly one tracker key, e.g. a mis-parsed commit type."""
        if not value:
            return False
        return self.key.fullmatch(value) is not None

    def is_issue_header(self, header: str) -> bool:
        """Whether a commit header starts with a tracker key followed by a colon."""
        return self.issue_header.match(header) is not None

    def linkify(self, text: str, tracker_url: str) -> str:
        """Replace tracker keys in ``text`` with links below ``tracker_url``.

        Existing Markdown links and inline code spans are left alone, so the result
        can be fed back in.
        """

        def replace(match: re.Match[str]) -> str:
            if match.group("code") or match.group("link"):
                return match.group(0)
            key = match.group("bracketed") or match.group("key")
            return f"[{key}]({tracker_url}{key})"

        return self.linkable.sub(replace, text)


@functools.lru_cache(maxsize=32)
def _compile_tracker_patterns(prefixes: tuple[str, ...] | None) -> TrackerPatterns:
    if prefixes is None:
        prefix_pattern = DEFAULT_TRACKER_PREFIX_PATTERN
    else:
        for prefix in prefixes:
            if not isinstance(prefix, str) or not prefix or re.search(r"\s", prefix):
                logger.error("Malformed tracker prefix", prefix=prefix, tracker_list=list(prefixes))
                raise ConfigurationError(f"Malformed tracker prefix {prefix!r}", tracker_list=list(prefixes))
        prefix_pattern = "|".join(re.escape(prefix) for prefix in prefixes)
    key_pattern = rf"(?:{prefix_pattern})-\d+"
    try:
        patterns = TrackerPatterns(
            prefixes=prefixes,
            key=re.compile(key_pattern),
            issue_header=re.compile(rf"^\s*(?:\[{key_pattern}\]|{key_pattern})\s*:"),
            linkable=re.compile(
                rf"(?P<code>{CODE_SPAN_PATTERN})"
                rf"|(?P<link>{MARKDOWN_LINK_PATTERN})"
                rf"|\[(?P<bracketed>{key_pattern})\](?!\()"
                rf"|(?<![A-Za-z0-9])(?P<key>{key_pattern})"
            ),
        )
    except re.error as exc:
        raise ConfigurationError(f"Tracker prefixes do not form a valid pattern: {exc}", tracker_list=list(prefixes or [])) from exc
    logger.debug("Compiled tracker patterns", prefixes=prefixes, key_pattern=key_pattern)
    return patterns


def linkify(text: str, tracker_list: Iterable[str] | None, tracker_url: str) -> str:
    """Replace tracker keys in ``text`` with ``[KEY](tracker_url + KEY)`` links."""
    return TrackerPatterns.from_config(tracker_list).linkify(text, tracker_url)


def replace_issue_link(note: Note, host: str, owner: str, repository: str) -> Note:
    """Return a copy of ``note`` with its first ``(#N)`` turned into an issue link."""
    text = ISSUE_REFERENCE_PATTERN.sub(
        lambda match: f"([#{match.group(1)}]({host}/{owner}/{repository}/issues/{match.group(1)}))",
        note.text,
        count=1,
    )
    return note.model_copy(update={"text": text})
