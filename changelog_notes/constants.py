"""Shared constants used across the application."""

import re

# Defaults
# --------

DEFAULT_HOST = "https://github.com"
"""Host used to build repository links when none is configured."""

OTHERS_TYPE = "others"
"""Section type of the catch-all section for unclassified commits."""

OTHERS_HEADING = "Others"
"""Heading used for the catch-all section when the section map does not name one."""

BREAKING_CHANGE_TITLE = "BREAKING CHANGE"
"""Note title that marks a breaking change."""

RELEASE_AS_TITLE = "RELEASE AS"
"""Note title that forces the released version."""

SHORT_SHA_LENGTH = 7
"""Number of characters shown for abbreviated commit SHAs."""

# Regex Patterns
# --------------

DEFAULT_TRACKER_PREFIX_PATTERN = r"[A-Z][A-Z0-9]+"
"""Tracker key prefix accepted when no explicit prefix list is configured (e.g. ABC in ABC-123)."""

CONVENTIONAL_HEADER_PATTERN = re.compile(r"^[a-z]+(\(.*\))?!?:\s")
"""Pattern to match a conventional commit header such as ``feat(api)!: subject``."""

MERGE_HEADER_PATTERN = re.compile(r"^Merge\b")
"""Pattern to match merge commit headers."""

RELEASE_AUTOMATION_PATTERN = re.compile(r"release-please|^chore(\([^)]*\))?!?:\s*release\b", re.IGNORECASE)
"""Pattern to match commits created by release automation."""

HAS_LETTERS_PATTERN = re.compile(r"[A-Za-z]")
"""Pattern used to discard headers made only of digits and punctuation, such as bare versions."""

ISSUE_REFERENCE_PATTERN = re.compile(r"\(#(\d+)\)")
"""Pattern to match a trailing ``(#123)`` issue reference."""

MARKDOWN_LINK_PATTERN = r"\[[^\]]*\]\([^)]*\)"
"""Pattern to match an existing inline Markdown link."""

CODE_SPAN_PATTERN = r"``[^`]+(?:`[^`]+)*``|`[^`]*`"
"""Pattern to match an inline code span; a double-backtick span may contain single backticks."""

SECTION_OR_BULLET_PATTERN = re.compile(r"^(### |\* )", re.MULTILINE)
"""Pattern to detect rendered section headings or bullet items."""
