"""dep-review: policy checks for dependency changes.

Given the dependencies added and removed between two revisions, dep-review
reports which changes introduce vulnerabilities at or above a severity
threshold and which introduce forbidden, unresolvable or missing licenses.

- **Filters**: scope, advisory allowlist and severity filters
- **License Resolver**: allow-list or deny-list license classification
- **Review Engine**: the pipeline combining both into a pass/fail verdict

Usage:
    # Library API
    from dep_review import ChangeSet, ReviewEngine, ReviewPolicy

    changes = ChangeSet.from_api(records)
    policy = ReviewPolicy(fail_on_severity="moderate", deny_licenses=["GPL-3.0"])

    result = ReviewEngine().review(changes, policy)
    print(result.passed, result.report.failure_reasons)

CLI:
    dep-review review --changes changes.json
    dep-review review --repo <owner/repo> --base <ref> --head <ref>
"""

__version__ = "0.1.0"

# Core
from dep_review.core.filters import (
    filter_allowed_advisories,
    filter_by_scopes,
    filter_by_severity,
)
from dep_review.core.licenses import LicenseResolver, resolve_licenses
from dep_review.core.review import ReviewEngine

# Models
from dep_review.models.change import Change, ChangeSet, ChangeType, Scope, Severity, Vulnerability
from dep_review.models.policy import ReviewPolicy
from dep_review.models.result import LicenseIssues, ReviewReport, ReviewResult

# Renderers
from dep_review.renderers.base import Renderer, RenderContext, OutputFormat

__all__ = [
    # Version
    "__version__",
    # Core
    "filter_allowed_advisories",
    "filter_by_scopes",
    "filter_by_severity",
    "LicenseResolver",
    "resolve_licenses",
    "ReviewEngine",
    # Models
    "Change",
    "ChangeSet",
    "ChangeType",
    "Scope",
    "Severity",
    "Vulnerability",
    "ReviewPolicy",
    "LicenseIssues",
    "ReviewReport",
    "ReviewResult",
    # Renderers
    "Renderer",
    "RenderContext",
    "OutputFormat",
]
