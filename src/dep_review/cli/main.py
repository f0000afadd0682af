"""Main CLI entry point for dep-review."""

import typer
from rich.console import Console

from dep_review.cli import review

app = typer.Typer(
    name="dep-review",
    help="Review dependency changes for vulnerabilities and license issues.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command(name="review")(review.review_cmd)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    actions: bool = typer.Option(
        False,
        "--actions",
        envvar="GITHUB_ACTIONS",
        help="Report warnings and errors as GitHub Actions annotations (on by default inside Actions)",
    ),
) -> None:
    """
    dep-review: policy checks for dependency changes.

    - [bold]review[/bold]: Classify added and removed dependencies against
      severity, scope, advisory and license rules
    """
    from dep_review.utils.logging import configure_logging

    ctx.obj = {"actions": actions}
    if verbose:
        configure_logging(level="DEBUG", actions=actions)
    elif quiet:
        configure_logging(level="WARNING", actions=actions)
    else:
        configure_logging(level="INFO", actions=actions)


@app.command()
def version() -> None:
    """Show the dep-review version."""
    from dep_review import __version__

    console.print(f"dep-review version {__version__}")


if __name__ == "__main__":
    app()
