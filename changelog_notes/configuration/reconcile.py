"""Reconciles build configuration between CLI arguments and environment variables."""

from typing import List

import structlog

from changelog_notes.configuration.env import Settings
from changelog_notes.configuration.exceptions import InvalidRepositoryFormatError
from changelog_notes.models import BuildOptions, ChangelogSection, RawCommit

logger = structlog.get_logger(__name__)


def split_repo(repo: str) -> tuple[str, str]:
    """Split an 'owner/repo' string into its two parts.

    Raises:
        InvalidRepositoryFormatError: If the value is not in 'owner/repo' form.
    """
    owner, _, repository = repo.strip().partition("/")
    if not owner or not repository or "/" in repository:
        raise InvalidRepositoryFormatError(repo)
    return owner, repository


def split_tracker_list(tracker_list: str | None) -> List[str] | None:
    """Split a comma separated tracker prefix list, e.g. 'ABC,WIDGET'."""
    if not tracker_list:
        return None
    prefixes = [prefix.strip() for prefix in tracker_list.split(",") if prefix.strip()]
    return prefixes or None


def reconcile_build_options(
    cli_version: str | None = None,
    cli_previous_tag: str | None = None,
    cli_current_tag: str | None = None,
    cli_repo: str | None = None,
    cli_host: str | None = None,
    cli_tracker_url: str | None = None,
    cli_tracker_prefixes: List[str] | None = None,
    changelog_sections: List[ChangelogSection] | None = None,
    raw_commits: List[RawCommit] | None = None,
    settings: Settings | None = None,
) -> BuildOptions:
    """Merge CLI arguments with environment settings into build options.

    CLI arguments take precedence over environment variables.

    Args:
        cli_version: Version being released
        cli_previous_tag: Tag of the previous release
        cli_current_tag: Tag of the release being built
        cli_repo: Repository in 'owner/repo' format
        cli_host: Repository host URL
        cli_tracker_url: Base URL for tracker key links
        cli_tracker_prefixes: Allowed tracker key prefixes
        changelog_sections: Section map overriding the defaults
        raw_commits: Raw commits used to recover unparsed entries
        settings: Environment settings; read from the environment when omitted

    Returns:
        BuildOptions: The reconciled build options.
    """
    if settings is None:
        settings = Settings()

    repo = cli_repo or settings.REPO
    owner, repository = split_repo(repo) if repo else (None, None)
    tracker_list = cli_tracker_prefixes or split_tracker_list(settings.TRACKER_LIST)

    options = BuildOptions(
        host=cli_host or settings.CHANGELOG_HOST,
        owner=owner,
        repository=repository,
        version=cli_version,
        previous_tag=cli_previous_tag,
        current_tag=cli_current_tag,
        changelog_sections=changelog_sections,
        raw_commits=raw_commits or [],
        tracker_list=tracker_list,
        tracker_url=cli_tracker_url or settings.TRACKER_URL,
    )
    logger.debug("Reconciled build options", repo=repo, version=cli_version, tracker_list=tracker_list)
    return options
