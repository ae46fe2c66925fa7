"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from changelog_notes.configuration.env import Settings
from changelog_notes.configuration.exceptions import InvalidRepositoryFormatError
from changelog_notes.configuration.reconcile import reconcile_build_options
from changelog_notes.exceptions import CommitsFileError, ConfigurationError, RenderError
from changelog_notes.notes import build_notes
from changelog_notes.utils.yaml import load_commits_file

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def configure_logging(debug: bool) -> None:
    """Send structlog output to stderr so that stdout only carries the notes.

    The whole processor chain is replaced so that a stdlib configuration set up
    by the caller cannot leak into the print logger used here.
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@typer_app.callback()
def main() -> None:
    """Build release notes from conventional commits."""


@typer_app.command(name="build")
def build_cli(
    commits_path: Annotated[Path, Argument(envvar="COMMITS_PATH", help="Path to YAML file with parsed (and optionally raw) commits.")],
    version: Annotated[str | None, Option(help="Version being released.")] = None,
    previous_tag: Annotated[str | None, Option(help="Tag of the previous release; enables compare links.")] = None,
    current_tag: Annotated[str | None, Option(help="Tag of the release being built.")] = None,
    repo: Annotated[str | None, Option(envvar="REPO", help="Repository name (owner/repo).")] = None,
    host: Annotated[str | None, Option(envvar="CHANGELOG_HOST", help="Repository host URL.")] = None,
    tracker_url: Annotated[str | None, Option(envvar="TRACKER_URL", help="Base URL for issue tracker key links.")] = None,
    tracker_prefix: Annotated[List[str] | None, Option(help="Allowed issue tracker key prefix; repeat for several.")] = None,
    output: Annotated[Path | None, Option("--output", "-o", help="Write the notes to this file instead of stdout.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Build release notes Markdown from a YAML file of commits."""
    settings = Settings()
    configure_logging(debug or settings.DEBUG)

    try:
        commits_file = load_commits_file(commits_path)
    except CommitsFileError as exc:
        typer.echo(str(exc), err=True)
        for error in exc.errors:
            typer.echo(f"  - {error}", err=True)
        sys.exit(1)

    try:
        options = reconcile_build_options(
            cli_version=version,
            cli_previous_tag=previous_tag,
            cli_current_tag=current_tag,
            cli_repo=repo,
            cli_host=host,
            cli_tracker_url=tracker_url,
            cli_tracker_prefixes=tracker_prefix,
            changelog_sections=commits_file.changelog_sections,
            raw_commits=commits_file.raw_commits,
            settings=settings,
        )
        notes = asyncio.run(build_notes(commits_file.commits, options))
    except (InvalidRepositoryFormatError, ConfigurationError, RenderError) as exc:
        typer.echo(f"Failed to build changelog notes: {exc}", err=True)
        sys.exit(1)

    if output is None:
        typer.echo(notes)
        return

    output.write_text(notes + "\n", encoding="utf-8")
    typer.echo(f"Wrote changelog notes to {output}", err=True)


if __name__ == "__main__":
    typer_app()
