"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from dep_review.models.change import ChangeSet
from dep_review.utils.errors import DepReviewError, MalformedChangeError
from dep_review.utils.logging import get_logger

logger = get_logger("cli")

# Shared console instance
console = Console()


def fail(message: str, code: int = 1, annotate: bool = False) -> typer.Exit:
    """Report an error and build the Exit to raise.

    With ``annotate`` the error goes through the logger instead, so a run
    configured for GitHub Actions turns it into an ``::error::`` annotation.
    """
    if annotate:
        logger.error(message)
    else:
        console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    return typer.Exit(code)


def handle_error(error: DepReviewError, annotate: bool = False) -> typer.Exit:
    """Report a dep-review error and build the Exit to raise."""
    return fail(str(error.to_review_error()), annotate=annotate)


def load_changes_file(path: Path) -> ChangeSet | None:
    """Load a change list saved from the dependency-graph compare API.

    A file containing ``null`` is the explicit "no changes" signal.

    Args:
        path: JSON file path

    Returns:
        The changes, or None

    Raises:
        MalformedChangeError: If the file is not a JSON array of changes
    """
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise MalformedChangeError(f"Invalid JSON in {path}: {e}") from e

    if data is None:
        return None
    if not isinstance(data, list):
        raise MalformedChangeError(f"Expected a JSON array of changes in {path}")
    return ChangeSet.from_api(data)


def output_text(content: str, output: Path | None = None) -> None:
    """Write rendered text to a file or stdout.

    Args:
        content: Rendered output
        output: Optional output file path
    """
    if output:
        output.write_text(content)
        console.print(f"Report written to {output}")
    else:
        typer.echo(content)


def append_step_summary(path: Path, content: str) -> None:
    """Append Markdown to a GitHub Actions job summary file."""
    with path.open("a") as f:
        f.write(content.rstrip("\n") + "\n")
