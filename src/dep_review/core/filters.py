"""Order-preserving filters over dependency changes.

Each filter is a pure function: it never mutates its input and surviving
changes keep their relative order.
"""

from __future__ import annotations

from typing import Iterable

from dep_review.models.change import Change, Scope, Severity


def filter_by_scopes(allowed_scopes: Iterable[Scope], changes: Iterable[Change]) -> list[Change]:
    """Keep changes whose scope is in ``allowed_scopes``.

    An empty ``allowed_scopes`` allows every scope.
    """
    scopes = set(allowed_scopes)
    if not scopes:
        return list(changes)
    return [c for c in changes if c.scope in scopes]


def filter_allowed_advisories(allowed_ids: Iterable[str], changes: Iterable[Change]) -> list[Change]:
    """Drop allowlisted advisories from each change.

    Changes whose advisories are all allowlisted are kept with an empty
    vulnerability list so their license data still reaches later stages.
    """
    allowed = set(allowed_ids)
    if not allowed:
        return list(changes)

    filtered: list[Change] = []
    for change in changes:
        remaining = [v for v in change.vulnerabilities if v.advisory_id not in allowed]
        if len(remaining) == len(change.vulnerabilities):
            filtered.append(change)
        else:
            filtered.append(change.with_vulnerabilities(remaining))
    return filtered


def filter_by_severity(min_severity: Severity, changes: Iterable[Change]) -> list[Change]:
    """Keep changes with at least one advisory at or above ``min_severity``."""
    return [
        c for c in changes
        if any(v.severity >= min_severity for v in c.vulnerabilities)
    ]


def filter_added(changes: Iterable[Change]) -> list[Change]:
    """Keep only added changes."""
    return [c for c in changes if c.is_added]
