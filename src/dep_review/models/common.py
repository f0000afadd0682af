"""Model types shared across modules."""

from typing import Any

from pydantic import BaseModel, Field


class ReviewError(BaseModel):
    """A problem that stopped a review from producing a report.

    Built from a DepReviewError with ``to_review_error`` so failed runs can
    be serialised next to successful ones.
    """

    model_config = {"frozen": True}

    code: str = Field(description="Stable error code, e.g. GRAPH_NOT_FOUND")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
