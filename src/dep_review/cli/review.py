"""CLI command for reviewing dependency changes."""

from pathlib import Path
from typing import Optional

import typer

from dep_review.cli.utils import (
    append_step_summary,
    console,
    fail,
    handle_error,
    load_changes_file,
    logger,
    output_text,
)
from dep_review.utils.errors import DepReviewError


def review_cmd(
    ctx: typer.Context,
    changes: Optional[Path] = typer.Option(
        None,
        "--changes",
        "-c",
        help="JSON file with changes from the dependency-graph compare API",
        exists=True,
        dir_okay=False,
    ),
    repo: Optional[str] = typer.Option(
        None,
        "--repo",
        "-r",
        envvar="GITHUB_REPOSITORY",
        help="Repository as owner/repo (defaults to the workflow repository)",
    ),
    base: Optional[str] = typer.Option(
        None,
        "--base",
        help="Base revision to compare from (defaults to the pull request base)",
    ),
    head: Optional[str] = typer.Option(
        None,
        "--head",
        help="Head revision to compare to (defaults to the pull request head)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to policy YAML file"),
    fail_on_severity: Optional[str] = typer.Option(
        None,
        "--fail-on-severity",
        "-s",
        help="Minimum severity that fails the review (low, moderate, high, critical, none)",
    ),
    fail_on_scopes: Optional[str] = typer.Option(
        None,
        "--fail-on-scopes",
        help="Comma separated scopes to evaluate (runtime, development, unknown)",
    ),
    allow_ghsas: Optional[str] = typer.Option(
        None,
        "--allow-ghsas",
        help="Comma separated advisory IDs to ignore",
    ),
    allow_licenses: Optional[str] = typer.Option(
        None,
        "--allow-licenses",
        help="Comma separated SPDX identifiers to allow",
    ),
    deny_licenses: Optional[str] = typer.Option(
        None,
        "--deny-licenses",
        help="Comma separated SPDX identifiers to deny",
    ),
    vulnerability_check: Optional[bool] = typer.Option(
        None,
        "--vulnerability-check/--no-vulnerability-check",
        help="Fail on vulnerable packages",
    ),
    license_check: Optional[bool] = typer.Option(
        None,
        "--license-check/--no-license-check",
        help="Fail on license issues",
    ),
    format: str = typer.Option(
        "terminal",
        "--format",
        "-f",
        help="Output format (terminal, json, markdown)",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    pr: Optional[int] = typer.Option(
        None,
        "--pr",
        help="Pull request to comment on (defaults to the triggering pull request)",
    ),
    step_summary: Optional[Path] = typer.Option(
        None,
        "--step-summary",
        envvar="GITHUB_STEP_SUMMARY",
        dir_okay=False,
        help="Append the Markdown summary to this file (the Actions job summary)",
    ),
    show_all: bool = typer.Option(
        False,
        "--show-all",
        help="List every scanned change in Markdown output",
    ),
) -> None:
    """
    Review dependency changes against a security and license policy.

    Reads changes from a saved compare API response or fetches them from
    the GitHub dependency graph, then fails if vulnerable packages or
    disallowed licenses are introduced. Inside a pull request workflow the
    repository, revisions and pull request number come from the run.

    Example:
        dep-review review --repo octo-org/octo-repo --base main --head feature
    """
    from dep_review.core.review import ReviewEngine
    from dep_review.github.client import GitHubClient
    from dep_review.github.context import ActionsContext, get_refs
    from dep_review.renderers import OutputFormat, RenderContext, get_renderer
    from dep_review.renderers.terminal import TerminalRenderer
    from dep_review.utils.config import load_policy
    from dep_review.utils.errors import validate_repository

    annotate = bool(ctx.obj and ctx.obj.get("actions"))

    try:
        output_format = OutputFormat(format)
    except ValueError:
        raise fail(f"Invalid format: {format}", annotate=annotate)

    overrides = {
        "fail_on_severity": fail_on_severity,
        "fail_on_scopes": fail_on_scopes,
        "allow_ghsas": allow_ghsas,
        "allow_licenses": allow_licenses,
        "deny_licenses": deny_licenses,
        "vulnerability_check": vulnerability_check,
        "license_check": license_check,
        "base_ref": base,
        "head_ref": head,
    }

    try:
        policy = load_policy(config, overrides)

        client: GitHubClient | None = None
        owner = name = ""
        if changes is not None:
            change_set = load_changes_file(changes)
        elif repo:
            owner, name = validate_repository(repo)
            run = ActionsContext.from_env()
            refs = get_refs(policy, run)
            if pr is None:
                pr = run.pull_request_number
            client = GitHubClient()
            with console.status("Fetching dependency changes..."):
                change_set = client.compare(owner, name, refs.base, refs.head)
        else:
            raise fail(
                "Provide --changes, or --repo (or GITHUB_REPOSITORY) with refs from "
                "--base/--head or a pull request event",
                annotate=annotate,
            )

        result = ReviewEngine().review(change_set, policy)

    except FileNotFoundError as e:
        raise fail(str(e), annotate=annotate)
    except DepReviewError as e:
        raise handle_error(e, annotate=annotate)

    context = RenderContext(
        format=output_format,
        output_path=output,
        verbose=show_all,
        show_vulnerabilities=policy.vulnerability_check,
        show_licenses=policy.license_check,
    )

    if output_format == OutputFormat.TERMINAL:
        renderer = TerminalRenderer(console)
        if output:
            renderer.render_to_file(result, context)
            console.print(f"Report written to {output}")
        else:
            renderer.render(result, context)
    else:
        output_text(get_renderer(output_format).render(result, context), output)

    summary = get_renderer(OutputFormat.MARKDOWN).render(result, context)
    if step_summary is not None:
        append_step_summary(step_summary, summary)

    if pr is not None and policy.comment_summary_in_pr and not result.skipped:
        if client is None:
            raise fail("Commenting on a pull request requires --repo", annotate=annotate)
        try:
            url = client.upsert_comment(owner, name, pr, summary)
        except DepReviewError as e:
            raise handle_error(e, annotate=annotate)
        console.print(f"Summary posted to {url}")

    if not result.passed:
        if annotate and result.report is not None:
            for reason in result.report.failure_reasons:
                logger.error(reason)
        raise typer.Exit(1)
