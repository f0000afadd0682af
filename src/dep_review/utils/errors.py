"""Error handling utilities for dep-review."""

from __future__ import annotations

import re
from typing import Any

from dep_review.models.common import ReviewError

_REPOSITORY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


class DepReviewError(Exception):
    """Base exception for dep-review."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_review_error(self) -> ReviewError:
        """Convert to ReviewError model."""
        return ReviewError(code=self.code, message=self.message, details=self.details)


class MalformedChangeError(DepReviewError):
    """A change record violates the change contract."""

    def __init__(self, message: str, name: str | None = None):
        details = {"name": name} if name else {}
        super().__init__(message, code="MALFORMED_CHANGE", details=details)


class ValidationError(DepReviewError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(DepReviewError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class DependencyGraphError(DepReviewError):
    """The dependency graph service returned an error."""

    def __init__(self, message: str, status_code: int | None = None, code: str = "GRAPH_ERROR"):
        details = {"status_code": status_code} if status_code else {}
        super().__init__(message, code=code, details=details)
        self.status_code = status_code


class DependencyGraphNotFoundError(DependencyGraphError):
    """No dependency data exists for the requested repository or revisions."""

    def __init__(self) -> None:
        super().__init__(
            "Dependency review could not obtain dependency data for the specified "
            "owner, repository, or revision range.",
            status_code=404,
            code="GRAPH_NOT_FOUND",
        )


class DependencyGraphForbiddenError(DependencyGraphError):
    """Dependency review is not enabled for the repository."""

    def __init__(self, owner: str, repo: str) -> None:
        super().__init__(
            "Dependency review is not supported on this repository. Please ensure "
            "that Dependency graph is enabled along with GitHub Advanced Security on "
            "private repositories, see "
            f"https://github.com/{owner}/{repo}/settings/security_analysis",
            status_code=403,
            code="GRAPH_FORBIDDEN",
        )


def validate_repository(repository: str) -> tuple[str, str]:
    """Validate an ``owner/repo`` string.

    Args:
        repository: Repository slug to validate

    Returns:
        Tuple of (owner, repo)

    Raises:
        ValidationError: If the slug is malformed
    """
    if not repository:
        raise ValidationError("Repository cannot be empty", field="repository")

    if not _REPOSITORY_PATTERN.match(repository):
        raise ValidationError(
            f"Repository must look like 'owner/repo': {repository}",
            field="repository",
        )

    owner, repo = repository.split("/", 1)
    return owner, repo
