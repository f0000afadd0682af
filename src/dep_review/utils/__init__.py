"""Utility functions for dep-review.

Configuration loading lives in ``dep_review.utils.config`` and is not
re-exported here because it depends on the models package.
"""

from dep_review.utils.logging import configure_logging, get_logger, get_logger_with_context
from dep_review.utils.errors import (
    DepReviewError,
    MalformedChangeError,
    ValidationError,
    ConfigurationError,
    DependencyGraphError,
    DependencyGraphNotFoundError,
    DependencyGraphForbiddenError,
    validate_repository,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "DepReviewError",
    "MalformedChangeError",
    "ValidationError",
    "ConfigurationError",
    "DependencyGraphError",
    "DependencyGraphNotFoundError",
    "DependencyGraphForbiddenError",
    "validate_repository",
]
