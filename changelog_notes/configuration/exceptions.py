"""Contains exceptions raised when reconciling application configuration."""


class InvalidRepositoryFormatError(Exception):
    """Raised when a repository is not given in 'owner/repo' form."""

    def __init__(self, repo: str) -> None:
        """Initializes the exception with the malformed repository value."""
        super().__init__(f"Repository must be in 'owner/repo' format, got: {repo!r}")
        self.repo = repo
