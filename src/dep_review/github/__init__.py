"""GitHub adapters: run context, dependency-graph retrieval and pull request comments."""

from dep_review.github.client import COMMENT_MARKER, GitHubClient
from dep_review.github.context import ActionsContext, Refs, get_refs

__all__ = [
    "COMMENT_MARKER",
    "GitHubClient",
    "ActionsContext",
    "Refs",
    "get_refs",
]
