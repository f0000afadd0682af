"""License classification against allow/deny policies."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from dep_review.models.change import Change
from dep_review.models.result import LicenseCategory, LicenseIssues
from dep_review.utils.logging import get_logger
from dep_review.utils.spdx import is_evaluable_license

logger = get_logger("licenses")


class LicenseMode(str, Enum):
    """Which list decides whether a license is forbidden."""

    DENY = "deny"
    ALLOW = "allow"
    DISABLED = "disabled"


class LicenseResolver:
    """Classifies changes as compliant, forbidden, unresolved or unlicensed.

    When both lists are configured the deny-list is used and the allow-list
    is ignored, so a doubly configured policy is never more permissive than
    the deny-list alone.

    Example:
        resolver = LicenseResolver(deny=["GPL-3.0"])
        issues = resolver.resolve(changes)

        for change in issues.forbidden:
            print(f"{change.display_name}: {change.license}")
    """

    def __init__(
        self,
        allow: Iterable[str] | None = None,
        deny: Iterable[str] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            allow: SPDX identifiers that are compliant (allow-list mode)
            deny: SPDX identifiers that are forbidden (deny-list mode)
        """
        self._allow = frozenset(allow or ())
        self._deny = frozenset(deny or ())

    @property
    def mode(self) -> LicenseMode:
        if self._deny:
            return LicenseMode.DENY
        if self._allow:
            return LicenseMode.ALLOW
        return LicenseMode.DISABLED

    def classify(self, change: Change) -> LicenseCategory | None:
        """Classify a single change; None means compliant."""
        license = change.license
        if license is None:
            return LicenseCategory.UNLICENSED
        if not is_evaluable_license(license):
            return LicenseCategory.UNRESOLVED

        mode = self.mode
        if mode == LicenseMode.DENY and license in self._deny:
            return LicenseCategory.FORBIDDEN
        if mode == LicenseMode.ALLOW and license not in self._allow:
            return LicenseCategory.FORBIDDEN
        return None

    def resolve(self, changes: Iterable[Change]) -> LicenseIssues:
        """Classify added changes into license buckets.

        Removed dependencies cannot introduce a license and are skipped.

        Args:
            changes: Changes to classify, in report order

        Returns:
            LicenseIssues with each non-compliant change in exactly one bucket
        """
        buckets: dict[LicenseCategory, list[Change]] = {category: [] for category in LicenseCategory}

        for change in changes:
            if not change.is_added:
                continue
            category = self.classify(change)
            if category is not None:
                buckets[category].append(change)

        issues = LicenseIssues(
            forbidden=buckets[LicenseCategory.FORBIDDEN],
            unresolved=buckets[LicenseCategory.UNRESOLVED],
            unlicensed=buckets[LicenseCategory.UNLICENSED],
        )
        logger.debug(
            f"License check ({self.mode.value}): {len(issues.forbidden)} forbidden, "
            f"{len(issues.unresolved)} unresolved, {len(issues.unlicensed)} unlicensed"
        )
        return issues


def resolve_licenses(
    changes: Iterable[Change],
    allow: Iterable[str] | None = None,
    deny: Iterable[str] | None = None,
) -> LicenseIssues:
    """Classify changes against an allow or deny list."""
    return LicenseResolver(allow=allow, deny=deny).resolve(changes)
