"""ReviewEngine: the classification pipeline."""

from __future__ import annotations

from typing import Iterable

from dep_review.core.filters import (
    filter_added,
    filter_allowed_advisories,
    filter_by_scopes,
    filter_by_severity,
)
from dep_review.core.licenses import LicenseResolver
from dep_review.models.change import Change, ChangeSet, ChangeType
from dep_review.models.policy import ReviewPolicy
from dep_review.models.result import LicenseIssues, ReviewReport, ReviewResult
from dep_review.utils.errors import MalformedChangeError
from dep_review.utils.logging import get_logger

logger = get_logger("review")

_KNOWN_CHANGE_TYPES = (ChangeType.ADDED, ChangeType.REMOVED)


class ReviewEngine:
    """Classifies a change set against a review policy.

    The pipeline runs scope filtering, then advisory allowlisting, and feeds
    the result both to the severity filter and to the license resolver.
    Both classifications are always computed; the policy's check toggles
    only decide whether their findings fail the review.

    Example:
        engine = ReviewEngine()
        result = engine.review(changes, ReviewPolicy(fail_on_severity="high"))

        if not result.passed:
            for reason in result.report.failure_reasons:
                print(reason)
    """

    def review(
        self,
        changes: ChangeSet | Iterable[Change] | None,
        policy: ReviewPolicy | None = None,
    ) -> ReviewResult:
        """Review a change set.

        Args:
            changes: Changes to evaluate, or None when the comparison
                produced no dependency data
            policy: Policy to apply (defaults apply when omitted)

        Returns:
            ReviewResult; skipped when there is nothing to evaluate

        Raises:
            MalformedChangeError: If a change has an unknown change type
        """
        if changes is None:
            logger.info("No dependency changes found. Skipping dependency review.")
            return ReviewResult.skip()

        change_list = list(changes)
        if not change_list:
            logger.info("No dependency changes found. Skipping dependency review.")
            return ReviewResult.skip()

        for change in change_list:
            self._check_change_type(change)

        policy = policy or ReviewPolicy()
        change_set = changes if isinstance(changes, ChangeSet) else ChangeSet(change_list)

        filtered = self.filter_changes(change_list, policy)
        vulnerable = self._vulnerable(filtered, policy)
        license_issues = LicenseResolver(
            allow=policy.allow_licenses,
            deny=policy.deny_licenses,
        ).resolve(filtered)

        reasons = self._failure_reasons(vulnerable, license_issues, policy)
        report = ReviewReport(
            changes=change_set,
            vulnerable_changes=vulnerable,
            license_issues=license_issues,
            min_severity=policy.min_severity,
            passed=not reasons,
            failure_reasons=reasons,
        )
        return ReviewResult.ok(report)

    def filter_changes(self, changes: Iterable[Change], policy: ReviewPolicy) -> list[Change]:
        """Apply the scope filter and the advisory allowlist."""
        scoped = filter_by_scopes(policy.fail_on_scopes, changes)
        filtered = filter_allowed_advisories(policy.allow_ghsas, scoped)
        logger.debug(f"{len(filtered)} changes in scope after advisory allowlist")
        return filtered

    def vulnerable_changes(self, changes: Iterable[Change], policy: ReviewPolicy) -> list[Change]:
        """Added changes carrying an advisory at or above the policy threshold."""
        return self._vulnerable(self.filter_changes(changes, policy), policy)

    def _vulnerable(self, filtered: list[Change], policy: ReviewPolicy) -> list[Change]:
        vulnerable = filter_added(filter_by_severity(policy.min_severity, filtered))
        logger.debug(
            f"{len(vulnerable)} vulnerable changes at severity "
            f"'{policy.min_severity.value}' or higher"
        )
        return vulnerable

    def _failure_reasons(
        self,
        vulnerable: list[Change],
        license_issues: LicenseIssues,
        policy: ReviewPolicy,
    ) -> list[str]:
        reasons: list[str] = []
        findings: list[tuple[bool, str]] = []

        if vulnerable:
            findings.append((
                policy.vulnerability_check and policy.fail_on_vulnerability,
                "Dependency review detected vulnerable packages.",
            ))
        if policy.license_policy_configured:
            if license_issues.forbidden:
                findings.append((policy.license_check, "Dependency review detected incompatible licenses."))
            if license_issues.unresolved:
                findings.append((
                    policy.license_check,
                    "Dependency review could not detect the validity of all licenses.",
                ))

        # Findings the policy does not act on are reported as warnings only
        for fails, message in findings:
            if fails:
                reasons.append(message)
            else:
                logger.warning(message)

        return reasons

    def _check_change_type(self, change: Change) -> None:
        if change.change_type not in _KNOWN_CHANGE_TYPES:
            raise MalformedChangeError(
                f"Unexpected change type: {change.change_type}",
                name=change.name,
            )
