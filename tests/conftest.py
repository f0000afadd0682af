"""Shared test fixtures for dep-review tests."""

import json
import logging
from typing import Any, Callable

import pytest

from dep_review.models.change import Change, ChangeSet, ChangeType, Scope, Severity, Vulnerability


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging so caplog sees dep_review records."""
    yield
    logger = logging.getLogger("dep_review")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch):
    """Keep a CI runner's own workflow variables out of the tests."""
    for name in (
        "GITHUB_ACTIONS",
        "GITHUB_EVENT_NAME",
        "GITHUB_EVENT_PATH",
        "GITHUB_REPOSITORY",
        "GITHUB_STEP_SUMMARY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def pull_request_event(tmp_path) -> str:
    """A pull_request webhook payload written where GITHUB_EVENT_PATH expects it."""
    payload = {
        "action": "synchronize",
        "number": 42,
        "pull_request": {
            "number": 42,
            "base": {"ref": "main", "sha": "1111111111111111111111111111111111111111"},
            "head": {"ref": "feature", "sha": "2222222222222222222222222222222222222222"},
        },
    }
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload))
    return str(path)


def make_vuln(advisory_id: str = "GHSA-aaaa-bbbb-cccc", severity: str = "high") -> Vulnerability:
    """Build a vulnerability with placeholder descriptive fields."""
    return Vulnerability(
        advisory_id=advisory_id,
        severity=Severity(severity),
        advisory_summary=f"Summary for {advisory_id}",
        advisory_url=f"https://github.com/advisories/{advisory_id}",
    )


def make_change(
    name: str = "lodash",
    version: str = "4.17.20",
    change_type: str = "added",
    scope: str = "runtime",
    license: str | None = "MIT",
    vulnerabilities: list[Vulnerability] | None = None,
    manifest: str = "package-lock.json",
) -> Change:
    """Build a change with sensible defaults."""
    return Change(
        change_type=ChangeType(change_type),
        manifest=manifest,
        name=name,
        version=version,
        scope=Scope(scope),
        license=license,
        ecosystem="npm",
        vulnerabilities=vulnerabilities or [],
    )


@pytest.fixture
def change_factory() -> Callable[..., Change]:
    return make_change


@pytest.fixture
def vuln_factory() -> Callable[..., Vulnerability]:
    return make_vuln


@pytest.fixture
def sample_changes() -> list[Change]:
    """A mixed change list covering scopes, types, severities and licenses."""
    return [
        make_change(
            name="lodash",
            vulnerabilities=[make_vuln("GHSA-lodash-0001", "critical")],
        ),
        make_change(
            name="minimist",
            version="1.2.5",
            license="Apache-2.0",
            vulnerabilities=[make_vuln("GHSA-mini-0001", "moderate")],
        ),
        make_change(
            name="jest",
            version="29.0.0",
            scope="development",
            vulnerabilities=[make_vuln("GHSA-jest-0001", "high")],
        ),
        make_change(
            name="left-pad",
            version="1.3.0",
            change_type="removed",
            license="WTFPL",
            vulnerabilities=[make_vuln("GHSA-pad-0001", "critical")],
        ),
        make_change(name="readline", version="1.0.0", license="GPL-3.0"),
        make_change(name="mystery", version="0.0.1", license=None),
        make_change(name="dual", version="2.0.0", license="MIT OR Apache-2.0"),
    ]


@pytest.fixture
def sample_change_set(sample_changes: list[Change]) -> ChangeSet:
    return ChangeSet(sample_changes)


@pytest.fixture
def sample_api_records() -> list[dict[str, Any]]:
    """Records shaped like the dependency-graph compare API response."""
    return [
        {
            "change_type": "added",
            "manifest": "requirements.txt",
            "ecosystem": "pip",
            "name": "requests",
            "version": "2.19.0",
            "package_url": "pkg:pypi/requests@2.19.0",
            "license": "Apache-2.0",
            "source_repository_url": "https://github.com/psf/requests",
            "scope": "runtime",
            "vulnerabilities": [
                {
                    "severity": "moderate",
                    "advisory_ghsa_id": "GHSA-x84v-xcm2-53pg",
                    "advisory_summary": "Insufficiently Protected Credentials in Requests",
                    "advisory_url": "https://github.com/advisories/GHSA-x84v-xcm2-53pg",
                }
            ],
        },
        {
            "change_type": "removed",
            "manifest": "requirements.txt",
            "ecosystem": "pip",
            "name": "urllib3",
            "version": "1.22",
            "package_url": "pkg:pypi/urllib3@1.22",
            "license": "MIT",
            "source_repository_url": None,
            "scope": "runtime",
            "vulnerabilities": [],
        },
        {
            "change_type": "added",
            "manifest": "requirements-dev.txt",
            "ecosystem": "pip",
            "name": "pytest",
            "version": "7.4.0",
            "package_url": "pkg:pypi/pytest@7.4.0",
            "license": None,
            "source_repository_url": None,
            "scope": "development",
            "vulnerabilities": [],
        },
    ]


@pytest.fixture
def sample_policy_file(tmp_path) -> str:
    """Create a sample policy YAML file for testing."""
    policy_content = """
fail-on-severity: high
fail-on-scopes:
  - runtime
allow-ghsas:
  - GHSA-aaaa-bbbb-cccc
deny-licenses:
  - GPL-3.0
  - AGPL-3.0
comment-summary-in-pr: true
"""
    policy_file = tmp_path / "dep-review.yaml"
    policy_file.write_text(policy_content)
    return str(policy_file)
