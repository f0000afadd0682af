"""Review policy configuration model."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from dep_review.models.change import Scope, Severity
from dep_review.utils.spdx import is_spdx_identifier


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class ReviewPolicy(BaseModel):
    """Security and licensing policy applied to a change set.

    Keys may be given in snake_case or in the kebab-case used by
    dependency review configuration files (``fail-on-severity``).
    """

    model_config = {
        "frozen": True,
        "alias_generator": _kebab,
        "populate_by_name": True,
    }

    fail_on_severity: Severity | None = Field(
        default=Severity.LOW,
        description="Minimum severity that fails the review, None for 'none'",
    )
    fail_on_scopes: list[Scope] = Field(
        default_factory=list,
        description="Scopes to evaluate; empty means every scope",
    )
    allow_ghsas: list[str] = Field(
        default_factory=list,
        description="Advisory identifiers to ignore",
    )
    allow_licenses: list[str] = Field(
        default_factory=list,
        description="Only these SPDX identifiers are compliant",
    )
    deny_licenses: list[str] = Field(
        default_factory=list,
        description="These SPDX identifiers are forbidden",
    )
    vulnerability_check: bool = Field(default=True, description="Act on vulnerability findings")
    license_check: bool = Field(default=True, description="Act on license findings")
    comment_summary_in_pr: bool = Field(
        default=False,
        description="Post the summary as a pull request comment",
    )
    base_ref: str | None = Field(default=None, description="Base revision; defaults to the pull request base")
    head_ref: str | None = Field(default=None, description="Head revision; defaults to the pull request head")

    @field_validator("fail_on_severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            if value.strip().lower() == "none":
                return None
            return Severity.parse(value)
        return value

    @field_validator("fail_on_scopes", "allow_ghsas", "allow_licenses", "deny_licenses", mode="before")
    @classmethod
    def _split_lists(cls, value: Any) -> Any:
        # Action inputs arrive as comma separated strings
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if value is None:
            return []
        return value

    @field_validator("allow_licenses", "deny_licenses")
    @classmethod
    def _check_spdx(cls, value: list[str]) -> list[str]:
        invalid = [v for v in value if not is_spdx_identifier(v)]
        if invalid:
            raise ValueError(f"Invalid SPDX license identifiers: {', '.join(invalid)}")
        return value

    @property
    def min_severity(self) -> Severity:
        """Threshold used for filtering; LOW when failing on severity is off."""
        return self.fail_on_severity or Severity.LOW

    @property
    def fail_on_vulnerability(self) -> bool:
        return self.fail_on_severity is not None

    @property
    def license_policy_configured(self) -> bool:
        return bool(self.allow_licenses or self.deny_licenses)

    @property
    def has_conflicting_licenses(self) -> bool:
        """Both an allow-list and a deny-list are configured."""
        return bool(self.allow_licenses and self.deny_licenses)
