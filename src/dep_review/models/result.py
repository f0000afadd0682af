"""Review result data models."""

from enum import Enum

from pydantic import BaseModel, Field

from dep_review.models.change import Change, ChangeSet, Severity
from dep_review.models.common import ReviewError


class LicenseCategory(str, Enum):
    """Non-compliant license outcomes."""

    FORBIDDEN = "forbidden"
    UNRESOLVED = "unresolved"
    UNLICENSED = "unlicensed"


class LicenseIssues(BaseModel):
    """License classification of a change set.

    Compliant changes appear in none of the buckets.
    """

    model_config = {"frozen": True}

    forbidden: list[Change] = Field(
        default_factory=list,
        description="Licenses rejected by the allow/deny policy",
    )
    unresolved: list[Change] = Field(
        default_factory=list,
        description="Licenses that are not a single evaluable SPDX identifier",
    )
    unlicensed: list[Change] = Field(
        default_factory=list,
        description="Changes without license information",
    )

    def categories(self) -> list[tuple[LicenseCategory, list[Change]]]:
        """Buckets in reporting order."""
        return [
            (LicenseCategory.FORBIDDEN, self.forbidden),
            (LicenseCategory.UNRESOLVED, self.unresolved),
            (LicenseCategory.UNLICENSED, self.unlicensed),
        ]

    def get(self, category: LicenseCategory) -> list[Change]:
        return getattr(self, category.value)

    @property
    def total(self) -> int:
        return len(self.forbidden) + len(self.unresolved) + len(self.unlicensed)

    @property
    def is_empty(self) -> bool:
        return self.total == 0


class ReviewReport(BaseModel):
    """Outcome of classifying one change set."""

    model_config = {"frozen": True}

    changes: ChangeSet = Field(description="All scanned changes")
    vulnerable_changes: list[Change] = Field(
        default_factory=list,
        description="Added changes with advisories at or above the threshold",
    )
    license_issues: LicenseIssues = Field(default_factory=LicenseIssues)
    min_severity: Severity = Field(default=Severity.LOW, description="Severity threshold used")
    passed: bool = Field(default=True, description="Whether the review passed")
    failure_reasons: list[str] = Field(
        default_factory=list,
        description="Why the review failed",
    )

    @property
    def vulnerability_count(self) -> int:
        """Advisories carried by the vulnerable changes, including ones below the threshold."""
        return sum(len(c.vulnerabilities) for c in self.vulnerable_changes)


class ReviewResult(BaseModel):
    """Result of a review operation."""

    model_config = {"frozen": True}

    success: bool = Field(description="Whether the review ran without errors")
    skipped: bool = Field(default=False, description="True when there was nothing to evaluate")
    report: ReviewReport | None = Field(default=None, description="The report if evaluated")
    errors: list[ReviewError] = Field(default_factory=list, description="Errors that occurred")

    @property
    def passed(self) -> bool:
        """A skipped review passes; a failed run never does."""
        if not self.success:
            return False
        return self.report is None or self.report.passed

    @classmethod
    def ok(cls, report: ReviewReport) -> "ReviewResult":
        """Create a successful result."""
        return cls(success=True, report=report)

    @classmethod
    def skip(cls) -> "ReviewResult":
        """Create a result for an empty or absent change set."""
        return cls(success=True, skipped=True)

    @classmethod
    def fail(cls, errors: list[ReviewError]) -> "ReviewResult":
        """Create a failed result."""
        return cls(success=False, errors=errors)
