"""Output renderers for review results."""

from dep_review.renderers.base import (
    SKIPPED_MESSAGE,
    BaseRenderer,
    OutputFormat,
    Renderable,
    RenderContext,
    Renderer,
)
from dep_review.renderers.json import JSONRenderer
from dep_review.renderers.markdown import MarkdownRenderer
from dep_review.renderers.terminal import TerminalRenderer

__all__ = [
    "SKIPPED_MESSAGE",
    "BaseRenderer",
    "OutputFormat",
    "Renderable",
    "RenderContext",
    "Renderer",
    "JSONRenderer",
    "MarkdownRenderer",
    "TerminalRenderer",
    "get_renderer",
]

_RENDERERS: dict[OutputFormat, type[BaseRenderer]] = {
    OutputFormat.JSON: JSONRenderer,
    OutputFormat.MARKDOWN: MarkdownRenderer,
    OutputFormat.TERMINAL: TerminalRenderer,
}


def get_renderer(format: OutputFormat | str) -> BaseRenderer:
    """Build the renderer for ``format``.

    Raises:
        ValueError: If format is not a known output format
    """
    return _RENDERERS[OutputFormat(format)]()
