"""Renderer protocol and shared rendering types."""

from enum import Enum
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from pydantic import BaseModel, Field

from dep_review.models.result import ReviewReport, ReviewResult

Renderable = Union[ReviewResult, ReviewReport]

SKIPPED_MESSAGE = "No dependency changes found. Skipping dependency review."


class OutputFormat(str, Enum):
    """Where a review ends up: a terminal, a job summary or comment, or a tool."""

    JSON = "json"
    MARKDOWN = "markdown"
    TERMINAL = "terminal"


class RenderContext(BaseModel):
    """Options shared by every renderer."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TERMINAL, description="Output format")
    output_path: Path | None = Field(default=None, description="Output file path")
    verbose: bool = Field(default=False, description="List every scanned change")
    color: bool = Field(default=True, description="Keep styles when writing terminal output to a file")
    show_vulnerabilities: bool = Field(default=True, description="Include the vulnerability section")
    show_licenses: bool = Field(default=True, description="Include the license section")
    indent: int = Field(default=2, description="JSON indentation")


@runtime_checkable
class Renderer(Protocol):
    """Anything that can present a review outcome."""

    @property
    def format(self) -> OutputFormat: ...

    def render(self, data: Renderable, context: RenderContext) -> str: ...

    def render_to_file(self, data: Renderable, context: RenderContext) -> None: ...


class BaseRenderer:
    """Shared behaviour for the bundled renderers.

    Subclasses provide ``format`` and ``render``. Both accept a full
    ReviewResult or a bare ReviewReport; ``report_of`` maps either to the
    report, or to None when the review was skipped.
    """

    @staticmethod
    def report_of(data: Renderable) -> ReviewReport | None:
        if isinstance(data, ReviewReport):
            return data
        if isinstance(data, ReviewResult):
            return None if data.skipped else data.report
        raise TypeError(f"Cannot render {type(data).__name__}")

    def render(self, data: Renderable, context: RenderContext) -> str:
        raise NotImplementedError

    def render_to_file(self, data: Renderable, context: RenderContext) -> None:
        """Write the rendered review to ``context.output_path``.

        Raises:
            ValueError: If context.output_path is not set
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")
        context.output_path.write_text(self.render(data, context))
