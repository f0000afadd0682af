"""Unit tests for the ReviewEngine."""

import logging

import pytest

from dep_review.core.review import ReviewEngine
from dep_review.models.change import Change, ChangeSet, Severity
from dep_review.models.policy import ReviewPolicy
from dep_review.utils.errors import MalformedChangeError


class TestReviewScenarios:
    """End-to-end classification scenarios."""

    def test_high_vuln_fails_moderate_threshold(self, change_factory, vuln_factory):
        change = change_factory(license="MIT", vulnerabilities=[vuln_factory(severity="high")])
        policy = ReviewPolicy(fail_on_severity="moderate", fail_on_scopes=["runtime"])

        result = ReviewEngine().review([change], policy)

        assert result.report.vulnerable_changes == [change]
        assert not result.passed

    def test_high_vuln_passes_critical_threshold(self, change_factory, vuln_factory):
        change = change_factory(license="MIT", vulnerabilities=[vuln_factory(severity="high")])
        policy = ReviewPolicy(fail_on_severity="critical", fail_on_scopes=["runtime"])

        result = ReviewEngine().review([change], policy)

        assert result.report.vulnerable_changes == []
        assert result.passed

    def test_denied_license_forbidden(self, change_factory):
        change = change_factory(license="GPL-3.0")
        result = ReviewEngine().review([change], ReviewPolicy(deny_licenses=["GPL-3.0"]))

        assert result.report.license_issues.forbidden == [change]
        assert not result.passed

    def test_missing_license_unlicensed(self, change_factory):
        change = change_factory(license=None)
        result = ReviewEngine().review([change], ReviewPolicy(deny_licenses=["GPL-3.0"]))

        issues = result.report.license_issues
        assert issues.unlicensed == [change]
        assert change not in issues.forbidden
        assert change not in issues.unresolved
        assert result.passed

    def test_allowlisted_advisory_not_vulnerable(self, change_factory, vuln_factory):
        change = change_factory(vulnerabilities=[vuln_factory("GHSA-x", "critical")])
        result = ReviewEngine().review([change], ReviewPolicy(allow_ghsas=["GHSA-x"]))

        assert result.report.vulnerable_changes == []
        assert result.passed


class TestReviewEngine:
    """Tests for pipeline behaviour."""

    def test_none_is_skipped(self):
        result = ReviewEngine().review(None)

        assert result.success
        assert result.skipped
        assert result.report is None
        assert result.passed

    def test_empty_is_skipped(self):
        result = ReviewEngine().review(ChangeSet([]))
        assert result.skipped
        assert result.passed

    def test_removed_never_vulnerable(self, change_factory, vuln_factory):
        change = change_factory(change_type="removed", vulnerabilities=[vuln_factory(severity="critical")])
        result = ReviewEngine().review([change], ReviewPolicy(fail_on_severity="low"))

        assert result.report.vulnerable_changes == []
        assert result.passed

    def test_scope_filter_applies_before_licenses(self, change_factory):
        """Out-of-scope changes are excluded from license findings too."""
        dev = change_factory(scope="development", license="GPL-3.0")
        policy = ReviewPolicy(fail_on_scopes=["runtime"], deny_licenses=["GPL-3.0"])

        result = ReviewEngine().review([dev], policy)

        assert result.report.license_issues.forbidden == []
        assert result.passed

    def test_scanned_changes_include_everything(self, sample_change_set):
        result = ReviewEngine().review(sample_change_set, ReviewPolicy(fail_on_scopes=["runtime"]))
        assert len(result.report.changes) == len(sample_change_set)

    def test_severity_none_reports_but_passes(self, change_factory, vuln_factory):
        """With fail-on-severity none, findings at LOW are kept for reporting only."""
        change = change_factory(vulnerabilities=[vuln_factory(severity="low")])
        result = ReviewEngine().review([change], ReviewPolicy(fail_on_severity="none"))

        assert result.report.min_severity == Severity.LOW
        assert result.report.vulnerable_changes == [change]
        assert result.passed

    def test_vulnerability_check_disabled_still_computes(self, change_factory, vuln_factory):
        change = change_factory(vulnerabilities=[vuln_factory(severity="critical")])
        policy = ReviewPolicy(vulnerability_check=False)

        result = ReviewEngine().review([change], policy)

        assert result.report.vulnerable_changes == [change]
        assert result.passed

    def test_license_check_disabled_still_computes(self, change_factory):
        change = change_factory(license="GPL-3.0")
        policy = ReviewPolicy(deny_licenses=["GPL-3.0"], license_check=False)

        result = ReviewEngine().review([change], policy)

        assert result.report.license_issues.forbidden == [change]
        assert result.passed

    def test_ignored_findings_are_warned(self, change_factory, caplog):
        change = change_factory(license="GPL-3.0")
        policy = ReviewPolicy(deny_licenses=["GPL-3.0"], license_check=False)

        with caplog.at_level(logging.WARNING, logger="dep_review"):
            ReviewEngine().review([change], policy)

        assert "Dependency review detected incompatible licenses." in caplog.text

    def test_unresolved_fails_only_with_license_policy(self, change_factory):
        change = change_factory(license="MIT AND BSD-2-Clause")

        without_policy = ReviewEngine().review([change], ReviewPolicy())
        with_policy = ReviewEngine().review([change], ReviewPolicy(allow_licenses=["MIT"]))

        assert without_policy.report.license_issues.unresolved == [change]
        assert without_policy.passed
        assert not with_policy.passed
        assert any("validity" in r for r in with_policy.report.failure_reasons)

    def test_failure_reasons(self, sample_changes):
        policy = ReviewPolicy(fail_on_severity="high", deny_licenses=["GPL-3.0"])
        result = ReviewEngine().review(sample_changes, policy)

        assert result.report.failure_reasons == [
            "Dependency review detected vulnerable packages.",
            "Dependency review detected incompatible licenses.",
            "Dependency review could not detect the validity of all licenses.",
        ]

    def test_vulnerable_changes_preserve_order(self, sample_changes):
        result = ReviewEngine().review(sample_changes, ReviewPolicy(fail_on_severity="low"))
        assert [c.name for c in result.report.vulnerable_changes] == ["lodash", "minimist", "jest"]

    def test_idempotent_on_own_output(self, sample_changes):
        """Reviewing the vulnerable output again yields the same list."""
        engine = ReviewEngine()
        policy = ReviewPolicy(fail_on_severity="moderate", allow_ghsas=["GHSA-jest-0001"])

        first = engine.vulnerable_changes(sample_changes, policy)
        second = engine.vulnerable_changes(first, policy)

        assert first == second
        assert [c.name for c in first] == ["lodash", "minimist"]

    def test_malformed_change_type_raises(self, change_factory):
        bad = Change.model_construct(
            change_type="modified",
            manifest="package.json",
            name="broken",
            version="1.0.0",
            scope="runtime",
            license="MIT",
            vulnerabilities=[],
        )

        with pytest.raises(MalformedChangeError) as exc_info:
            ReviewEngine().review([change_factory(), bad])

        assert exc_info.value.code == "MALFORMED_CHANGE"
        assert exc_info.value.details["name"] == "broken"


def test_vulnerability_count_includes_every_advisory(change_factory, vuln_factory):
    change = change_factory(
        vulnerabilities=[vuln_factory("GHSA-one", "critical"), vuln_factory("GHSA-two", "low")]
    )

    report = ReviewEngine().review([change], ReviewPolicy(fail_on_severity="high")).report

    assert report.vulnerable_changes == [change]
    assert report.vulnerability_count == 2
