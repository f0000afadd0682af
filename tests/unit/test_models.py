"""Unit tests for the data models."""

import pydantic
import pytest

from dep_review.models.change import Change, ChangeSet, ChangeType, Scope, Severity
from dep_review.models.policy import ReviewPolicy
from dep_review.models.result import LicenseCategory, LicenseIssues, ReviewResult
from dep_review.utils.errors import MalformedChangeError


class TestSeverity:
    """Tests for the Severity ordinal."""

    def test_total_order(self):
        assert Severity.LOW < Severity.MODERATE < Severity.HIGH < Severity.CRITICAL

    def test_order_ignores_string_value(self):
        assert Severity.MODERATE < Severity.HIGH
        assert "moderate" > "high"

    def test_sorted(self):
        shuffled = [Severity.HIGH, Severity.LOW, Severity.CRITICAL, Severity.MODERATE]
        assert sorted(shuffled) == [Severity.LOW, Severity.MODERATE, Severity.HIGH, Severity.CRITICAL]

    def test_comparison_with_other_types_fails(self):
        with pytest.raises(TypeError):
            Severity.LOW < 1

    def test_parse(self):
        assert Severity.parse("HIGH") == Severity.HIGH
        assert Severity.parse(Severity.LOW) is Severity.LOW
        with pytest.raises(ValueError):
            Severity.parse("severe")


class TestChange:
    """Tests for Change and ChangeSet."""

    def test_from_api(self, sample_api_records):
        change = Change.from_api(sample_api_records[0])

        assert change.change_type == ChangeType.ADDED
        assert change.scope == Scope.RUNTIME
        assert change.vulnerabilities[0].advisory_id == "GHSA-x84v-xcm2-53pg"
        assert change.vulnerabilities[0].severity == Severity.MODERATE
        assert change.display_name == "requests@2.19.0"

    def test_from_api_rejects_unknown_change_type(self, sample_api_records):
        record = dict(sample_api_records[0], change_type="modified")

        with pytest.raises(MalformedChangeError) as exc_info:
            Change.from_api(record)

        assert "modified" in str(exc_info.value)

    def test_from_api_rejects_invalid_record(self, sample_api_records):
        record = dict(sample_api_records[0])
        del record["version"]

        with pytest.raises(MalformedChangeError):
            Change.from_api(record)

    def test_scope_defaults_to_unknown(self):
        change = Change(change_type="added", manifest="go.mod", name="x", version="1")
        assert change.scope == Scope.UNKNOWN
        assert change.license is None
        assert not change.has_vulnerabilities

    def test_frozen(self, change_factory):
        change = change_factory()
        with pytest.raises(pydantic.ValidationError):
            change.name = "other"

    def test_with_vulnerabilities_copies(self, change_factory, vuln_factory):
        change = change_factory(vulnerabilities=[vuln_factory()])
        stripped = change.with_vulnerabilities([])

        assert stripped.vulnerabilities == []
        assert len(change.vulnerabilities) == 1
        assert stripped.name == change.name

    def test_change_set_accessors(self, sample_api_records):
        changes = ChangeSet.from_api(sample_api_records)

        assert len(changes) == 3
        assert [c.name for c in changes] == ["requests", "urllib3", "pytest"]
        assert [c.name for c in changes.added] == ["requests", "pytest"]
        assert [c.name for c in changes.removed] == ["urllib3"]
        assert changes[1].name == "urllib3"

    def test_by_manifest_keeps_first_seen_order(self, sample_api_records):
        grouped = ChangeSet.from_api(sample_api_records).by_manifest()

        assert list(grouped) == ["requirements.txt", "requirements-dev.txt"]
        assert [c.name for c in grouped["requirements.txt"]] == ["requests", "urllib3"]


class TestReviewPolicy:
    """Tests for ReviewPolicy parsing."""

    def test_defaults(self):
        policy = ReviewPolicy()

        assert policy.fail_on_severity == Severity.LOW
        assert policy.fail_on_scopes == []
        assert policy.fail_on_vulnerability
        assert not policy.license_policy_configured

    def test_none_severity(self):
        policy = ReviewPolicy(fail_on_severity="none")

        assert policy.fail_on_severity is None
        assert policy.min_severity == Severity.LOW
        assert not policy.fail_on_vulnerability

    def test_kebab_case_keys(self):
        policy = ReviewPolicy.model_validate(
            {"fail-on-severity": "critical", "deny-licenses": ["GPL-3.0"]}
        )
        assert policy.fail_on_severity == Severity.CRITICAL
        assert policy.deny_licenses == ["GPL-3.0"]

    def test_comma_separated_lists(self):
        policy = ReviewPolicy(fail_on_scopes="runtime, development", allow_ghsas="GHSA-1,GHSA-2")

        assert policy.fail_on_scopes == [Scope.RUNTIME, Scope.DEVELOPMENT]
        assert policy.allow_ghsas == ["GHSA-1", "GHSA-2"]

    def test_invalid_severity(self):
        with pytest.raises(pydantic.ValidationError):
            ReviewPolicy(fail_on_severity="urgent")

    def test_invalid_scope(self):
        with pytest.raises(pydantic.ValidationError):
            ReviewPolicy(fail_on_scopes=["production"])

    def test_invalid_license_identifier(self):
        with pytest.raises(pydantic.ValidationError):
            ReviewPolicy(allow_licenses=["MIT OR Apache-2.0"])

    def test_conflicting_lists_accepted(self):
        policy = ReviewPolicy(allow_licenses=["MIT"], deny_licenses=["GPL-3.0"])
        assert policy.has_conflicting_licenses


class TestResults:
    """Tests for result models."""

    def test_license_issues_categories(self, change_factory):
        change = change_factory(license=None)
        issues = LicenseIssues(unlicensed=[change])

        assert [c for c, _ in issues.categories()] == [
            LicenseCategory.FORBIDDEN,
            LicenseCategory.UNRESOLVED,
            LicenseCategory.UNLICENSED,
        ]
        assert issues.get(LicenseCategory.UNLICENSED) == [change]
        assert issues.total == 1
        assert not issues.is_empty

    def test_failed_result_never_passes(self):
        assert not ReviewResult.fail([]).passed
        assert ReviewResult.skip().passed
