"""Contains exceptions raised while building changelog notes."""


class ChangelogNotesError(Exception):
    """Base class for all changelog notes errors."""

    pass


class ConfigurationError(ChangelogNotesError):
    """Raised when tracker configuration cannot be turned into a usable pattern."""

    def __init__(self, message: str, tracker_list: list[str] | None = None) -> None:
        """Initializes the exception with the offending tracker prefix list."""
        super().__init__(message)
        self.tracker_list = tracker_list


class RenderError(ChangelogNotesError):
    """Raised when the section renderer fails to produce Markdown."""

    def __init__(self, message: str, template_name: str | None = None) -> None:
        """Initializes the exception with the name of the failing template."""
        super().__init__(message)
        self.template_name = template_name


class CommitsFileError(ChangelogNotesError):
    """Raised when a commits YAML file is missing or does not match the expected schema."""

    def __init__(self, path: str, errors: list[dict[str, str]] | None = None) -> None:
        """Initializes the exception with the path and any validation errors."""
        super().__init__(f"Failed to load commits from {path}")
        self.path = path
        self.errors = errors or []
