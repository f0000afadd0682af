"""Core classification logic for dep-review.

This module provides the main library API for reviewing dependency changes.
"""

from dep_review.core.filters import (
    filter_added,
    filter_allowed_advisories,
    filter_by_scopes,
    filter_by_severity,
)
from dep_review.core.licenses import LicenseMode, LicenseResolver, resolve_licenses
from dep_review.core.review import ReviewEngine

__all__ = [
    "filter_added",
    "filter_allowed_advisories",
    "filter_by_scopes",
    "filter_by_severity",
    "LicenseMode",
    "LicenseResolver",
    "resolve_licenses",
    "ReviewEngine",
]
