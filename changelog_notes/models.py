"""Data models for changelog notes generation."""

from datetime import datetime, timezone
from typing import List, Protocol

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from changelog_notes.constants import DEFAULT_HOST, OTHERS_TYPE


class Note(BaseModel):
    """A titled note extracted from a commit footer (e.g. BREAKING CHANGE)."""

    model_config = ConfigDict(frozen=True)

    title: str
    text: str


class Reference(BaseModel):
    """An issue reference parsed from a commit, such as ``closes #12``."""

    model_config = ConfigDict(frozen=True)

    action: str | None = None
    owner: str | None = None
    repository: str | None = None
    issue: str
    raw: str = ""
    prefix: str = "#"


class Commit(BaseModel):
    """A commit already parsed into conventional commit form.

    Input to the classifier; never mutated.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    sha: str | None = None
    message: str
    bare_message: str = ""
    type: str | None = None
    scope: str | None = None
    notes: List[Note] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    breaking: bool = False

    @property
    def header(self) -> str:
        """First line of the full commit message."""
        return first_line(self.message)


class PullRequest(BaseModel):
    """Pull request metadata attached to a raw commit."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    number: int
    title: str = ""
    body: str | None = None
    labels: List[str] = Field(default_factory=list)
    head_branch_name: str | None = None
    base_branch_name: str | None = None


class RawCommit(BaseModel):
    """A commit known from version control that was not parsed into conventional form."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    sha: str | None = None
    message: str
    pull_request: PullRequest | None = None
    files: List[str] | None = None


class ClassifiedEntry(BaseModel):
    """A commit after classification, shaped for the section renderer."""

    subject: str
    type: str | None = None
    scope: str | None = None
    notes: List[Note] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    mentions: List[str] = Field(default_factory=list)
    merge: str | None = None
    revert: str | None = None
    header: str = ""
    footer: str = ""
    body: str = ""
    sha: str | None = None

    @property
    def is_others(self) -> bool:
        """Whether the entry landed in the catch-all Others section."""
        return self.type == OTHERS_TYPE


class ChangelogSection(BaseModel):
    """Maps a commit type onto a rendered heading."""

    model_config = ConfigDict(frozen=True)

    type: str
    heading: str = Field(validation_alias=AliasChoices("heading", "section"))
    hidden: bool = False


class TrackerConfig(BaseModel):
    """Issue tracker settings used to detect and link tracker keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    tracker_list: List[str] | None = None
    tracker_url: str | None = None


class BuildContext(BaseModel):
    """Template context for a single build."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    host: str = DEFAULT_HOST
    owner: str = ""
    repository: str = ""
    version: str | None = None
    previous_tag: str | None = None
    current_tag: str | None = None
    link_compare: bool = False
    date: str = Field(default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%d"))

    @property
    def repository_url(self) -> str:
        """Base URL of the repository on its host."""
        return f"{self.host}/{self.owner}/{self.repository}"

    def commit_url(self, sha: str) -> str:
        """URL of a single commit."""
        return f"{self.repository_url}/commit/{sha}"


class BuildOptions(BaseModel):
    """Options accepted by ``build_notes``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    host: str | None = None
    owner: str | None = None
    repository: str | None = None
    version: str | None = None
    previous_tag: str | None = None
    current_tag: str | None = None
    changelog_sections: List[ChangelogSection] | None = None
    raw_commits: List[RawCommit] = Field(default_factory=list, alias="commits")
    tracker_list: List[str] | None = None
    tracker_url: str | None = None
    date: str | None = None

    @property
    def tracker(self) -> TrackerConfig:
        """Tracker settings carried by these options."""
        return TrackerConfig(tracker_list=self.tracker_list, tracker_url=self.tracker_url)


class ChangelogNotes(Protocol):
    """Protocol for changelog notes builders."""

    async def build_notes(self, commits: List[Commit], options: BuildOptions) -> str:
        """Build release notes Markdown.

        Args:
            commits: Conventionally parsed commits in the release range
            options: Repository, version and tracker options for the build

        Returns:
            Markdown text without a trailing newline
        """
        ...


def first_line(message: str) -> str:
    """Return the first line of a message, stripped of surrounding whitespace."""
    lines = message.splitlines()
    return lines[0].strip() if lines else ""
