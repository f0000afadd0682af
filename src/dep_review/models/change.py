"""Dependency change data models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator

from pydantic import AliasChoices, BaseModel, Field, RootModel, ValidationError

from dep_review.utils.errors import MalformedChangeError


class Severity(str, Enum):
    """Advisory severity on the ordinal scale low < moderate < high < critical.

    Comparisons use ``rank`` and never the string value, so
    ``Severity.MODERATE < Severity.HIGH`` even though ``"moderate" > "high"``.
    """

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Ordinal position of this severity."""
        return _SEVERITY_RANKS[self]

    @classmethod
    def parse(cls, value: "str | Severity") -> "Severity":
        """Parse a severity name, case-insensitively."""
        if isinstance(value, Severity):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid severity: {value}") from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANKS = {
    Severity.LOW: 0,
    Severity.MODERATE: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


class ChangeType(str, Enum):
    """Direction of a dependency change."""

    ADDED = "added"
    REMOVED = "removed"


class Scope(str, Enum):
    """Whether a dependency is needed at runtime or only during development."""

    RUNTIME = "runtime"
    DEVELOPMENT = "development"
    UNKNOWN = "unknown"


class Vulnerability(BaseModel):
    """A published advisory affecting a dependency."""

    model_config = {"frozen": True}

    advisory_id: str = Field(
        validation_alias=AliasChoices("advisory_id", "advisory_ghsa_id"),
        description="Stable advisory identifier (e.g. GHSA-xxxx-xxxx-xxxx)",
    )
    severity: Severity = Field(description="Advisory severity")
    advisory_summary: str = Field(default="", description="Short advisory summary")
    advisory_url: str = Field(default="", description="Link to the advisory")


class Change(BaseModel):
    """One dependency's addition or removal between two graph snapshots."""

    model_config = {"frozen": True}

    change_type: ChangeType = Field(description="Whether the dependency was added or removed")
    manifest: str = Field(description="Manifest or lockfile declaring the dependency")
    name: str = Field(description="Package name")
    version: str = Field(description="Package version")
    scope: Scope = Field(default=Scope.UNKNOWN, description="Dependency scope")
    license: str | None = Field(default=None, description="SPDX license expression")
    ecosystem: str | None = Field(default=None, description="Package ecosystem")
    package_url: str | None = Field(default=None, description="Package URL (purl)")
    source_repository_url: str | None = Field(
        default=None,
        description="Source repository of the package",
    )
    vulnerabilities: list[Vulnerability] = Field(
        default_factory=list,
        description="Advisories affecting this version",
    )

    @property
    def is_added(self) -> bool:
        return self.change_type == ChangeType.ADDED

    @property
    def has_vulnerabilities(self) -> bool:
        return len(self.vulnerabilities) > 0

    @property
    def display_name(self) -> str:
        return f"{self.name}@{self.version}"

    def with_vulnerabilities(self, vulnerabilities: list[Vulnerability]) -> "Change":
        """Return a copy of this change carrying a different advisory list."""
        return self.model_copy(update={"vulnerabilities": list(vulnerabilities)})

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Change":
        """Build a change from a dependency-graph compare record.

        Raises:
            MalformedChangeError: If the record has an unknown change type
                or does not match the change schema.
        """
        change_type = data.get("change_type")
        if change_type not in (ChangeType.ADDED.value, ChangeType.REMOVED.value):
            raise MalformedChangeError(
                f"Unexpected change type: {change_type}",
                name=data.get("name"),
            )
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedChangeError(
                f"Invalid change record: {e.error_count()} validation error(s)",
                name=data.get("name"),
            ) from e


class ChangeSet(RootModel[list[Change]]):
    """Ordered collection of changes produced by one comparison."""

    model_config = {"frozen": True}

    def __iter__(self) -> Iterator[Change]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Change:
        return self.root[index]

    @property
    def added(self) -> list[Change]:
        return [c for c in self.root if c.change_type == ChangeType.ADDED]

    @property
    def removed(self) -> list[Change]:
        return [c for c in self.root if c.change_type == ChangeType.REMOVED]

    def by_manifest(self) -> dict[str, list[Change]]:
        """Group changes by manifest, keeping first-seen manifest order."""
        grouped: dict[str, list[Change]] = {}
        for change in self.root:
            grouped.setdefault(change.manifest, []).append(change)
        return grouped

    @classmethod
    def from_api(cls, records: list[dict[str, Any]]) -> "ChangeSet":
        """Build a change set from the raw compare API payload."""
        return cls([Change.from_api(record) for record in records])
