"""Escapes HTML-like characters in commit text while preserving inline code."""

import re

from changelog_notes.constants import CODE_SPAN_PATTERN

_CODE_SPAN_OR_ANGLE = re.compile(rf"{CODE_SPAN_PATTERN}|<|>")

_ESCAPES = {"<": "&lt;", ">": "&gt;"}


def _escape_match(match: re.Match[str]) -> str:
    token = match.group(0)
    return _ESCAPES.get(token, token)


def sanitize(text: str) -> str:
    """Escape bare ``<`` and ``>`` outside of inline code spans.

    Code spans delimited by one or two backticks are passed through untouched so
    intentional formatting like ``Map<K, V>`` survives. Running the function on
    its own output is a no-op.
    """
    return _CODE_SPAN_OR_ANGLE.sub(_escape_match, text)
