"""Exception hierarchy for gitaudit.

Library code raises these; the CLI maps them to exit codes.  Per-file
failures never surface here: sources and the engine log and skip them.
"""

from __future__ import annotations


class GitAuditError(Exception):
    """Base class for every error raised by gitaudit."""


class ConfigError(GitAuditError):
    """A configuration file or environment value is invalid."""


class RuleCatalogError(GitAuditError):
    """The bundled rule catalog failed validation or compilation."""


class TargetNotFoundError(GitAuditError):
    """The audit target is neither an existing path nor a repository reference."""

    def __init__(self, target: str) -> None:
        super().__init__(f"Target not found: {target}")
        self.target = target


class GitHubError(GitAuditError):
    """A GitHub API request failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(GitHubError):
    """The GitHub API rate limit is exhausted."""


class RepositoryUnreachableError(GitHubError):
    """The repository tree could not be listed; the run cannot start."""
