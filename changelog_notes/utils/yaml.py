"""Contains utility functions for working with YAML files."""

from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from changelog_notes.exceptions import CommitsFileError
from changelog_notes.schemas.commits_file import CommitsFileModel

logger = structlog.get_logger(__name__)

yaml = YAML(typ="safe")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Loads a YAML file and returns a dictionary."""
    with open(path, encoding="utf-8") as f:
        return yaml.load(f)  # type: ignore[no-any-return]


def load_commits_file(path: Path) -> CommitsFileModel:
    """Load and validate a commits YAML file.

    The file holds a top-level ``commits`` list of parsed commits and may also
    hold ``raw_commits`` and ``changelog_sections``.

    Args:
        path: Path to the YAML file

    Returns:
        The validated commits file model

    Raises:
        CommitsFileError: If the file is missing, is not valid YAML, or does not match the schema.
    """
    if not path.exists():
        logger.error("Commits file not found", path=str(path))
        raise CommitsFileError(str(path), errors=[{"error": "File not found"}])
    try:
        data = load_yaml_file(path)
    except YAMLError as exc:
        logger.error("Failed to parse YAML file", path=str(path), error=str(exc))
        raise CommitsFileError(str(path), errors=[{"error": f"Failed to parse YAML file: {exc}"}]) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.error("Commits file does not contain a mapping", path=str(path), actual_type=type(data).__name__)
        raise CommitsFileError(str(path), errors=[{"error": "Top-level YAML value must be a mapping"}])

    try:
        model = CommitsFileModel.model_validate(data)
    except ValidationError as exc:
        errors = [{"location": ".".join(str(part) for part in error["loc"]), "error": error["msg"]} for error in exc.errors()]
        logger.error("Commits file failed validation", path=str(path), errors=errors)
        raise CommitsFileError(str(path), errors=errors) from exc

    logger.debug("Loaded commits file", path=str(path), commits=len(model.commits), raw_commits=len(model.raw_commits))
    return model
