"""JSON renderer for dep-review output."""

from __future__ import annotations

import json
from typing import Any

from dep_review.models.result import ReviewResult
from dep_review.renderers.base import BaseRenderer, OutputFormat, Renderable, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output format.

    A ReviewResult is flattened so consumers get ``passed`` and ``skipped``
    at the top level next to the report. A bare ReviewReport is dumped as is.
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, data: Renderable, context: RenderContext) -> str:
        payload: dict[str, Any]
        if isinstance(data, ReviewResult):
            report = self.report_of(data)
            payload = {
                "passed": data.passed,
                "skipped": data.skipped,
                "report": report.model_dump(mode="json") if report else None,
                "errors": [e.model_dump(mode="json") for e in data.errors],
            }
        else:
            payload = self.report_of(data).model_dump(mode="json")

        return json.dumps(payload, indent=context.indent)
