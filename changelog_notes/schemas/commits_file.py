"""Pydantic schema for the commits YAML file read by the CLI."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from changelog_notes.models import ChangelogSection, Commit, RawCommit


class CommitsFileModel(BaseModel):
    """Pydantic model for a list of parsed commits, optional raw commits and section overrides."""

    model_config = ConfigDict(populate_by_name=True)

    commits: List[Commit] = Field(default_factory=list)
    raw_commits: List[RawCommit] = Field(default_factory=list, alias="rawCommits")
    changelog_sections: List[ChangelogSection] | None = Field(default=None, alias="changelogSections")
