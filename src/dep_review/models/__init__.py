"""Data models for dep-review.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from dep_review.models.common import ReviewError
from dep_review.models.change import (
    Change,
    ChangeSet,
    ChangeType,
    Scope,
    Severity,
    Vulnerability,
)
from dep_review.models.policy import ReviewPolicy
from dep_review.models.result import (
    LicenseCategory,
    LicenseIssues,
    ReviewReport,
    ReviewResult,
)

__all__ = [
    # Common
    "ReviewError",
    # Change
    "Change",
    "ChangeSet",
    "ChangeType",
    "Scope",
    "Severity",
    "Vulnerability",
    # Policy
    "ReviewPolicy",
    # Result
    "LicenseCategory",
    "LicenseIssues",
    "ReviewReport",
    "ReviewResult",
]
