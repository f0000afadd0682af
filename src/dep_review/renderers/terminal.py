"""Terminal renderer for dep-review output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dep_review.models.change import Change, ChangeType, Severity
from dep_review.models.result import LicenseIssues, ReviewReport
from dep_review.renderers.base import SKIPPED_MESSAGE, BaseRenderer, OutputFormat, Renderable, RenderContext
from dep_review.utils.errors import MalformedChangeError

SEVERITY_STYLES = {
    Severity.CRITICAL: "red",
    Severity.HIGH: "red",
    Severity.MODERATE: "yellow",
    Severity.LOW: "grey50",
}

CHANGE_STYLES = {
    ChangeType.ADDED: ("green", "+"),
    ChangeType.REMOVED: ("red", "-"),
}


def render_scanned_dependency(change: Change) -> Text:
    """Render one change as a coloured ``+ name@version`` line.

    Raises:
        MalformedChangeError: If the change type is neither added nor removed
    """
    try:
        style, icon = CHANGE_STYLES[change.change_type]
    except KeyError:
        raise MalformedChangeError(
            f"Unexpected change type: {change.change_type}",
            name=change.name,
        ) from None
    return Text(f"{icon} {change.display_name}", style=style)


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Example:
        renderer = TerminalRenderer()
        renderer.render(result, RenderContext())
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the terminal renderer.

        Args:
            console: Rich console to use. Creates a new one if None.
        """
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TERMINAL

    def render(self, data: Renderable, context: RenderContext) -> str:
        """Print a review result to the console.

        Returns:
            Empty string (output is printed to console)
        """
        report = self.report_of(data)
        if report is not None:
            self._render_report(report, context)
        elif data.errors:
            for error in data.errors:
                self._console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
        else:
            self._console.print(SKIPPED_MESSAGE)
        return ""

    def render_to_file(self, data: Renderable, context: RenderContext) -> None:
        """Capture terminal output and write it to a file."""
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, force_terminal=context.color, width=120)
        original_console = self._console
        self._console = file_console

        try:
            self.render(data, context)
            context.output_path.write_text(file_console.export_text(styles=context.color))
        finally:
            self._console = original_console

    def _render_report(self, report: ReviewReport, context: RenderContext) -> None:
        if context.show_vulnerabilities:
            self._render_vulnerabilities(report)
        if context.show_licenses:
            self._render_licenses(report.license_issues)
        self._render_scanned(report)

        self._console.print()
        status = "[bold green]PASSED[/bold green]" if report.passed else "[bold red]FAILED[/bold red]"
        lines = [f"[bold]Status:[/bold] {status}"]
        lines.extend(f"[red]![/red] {reason}" for reason in report.failure_reasons)
        self._console.print(Panel("\n".join(lines), title="Dependency Review"))

    def _render_vulnerabilities(self, report: ReviewReport) -> None:
        self._console.print()
        self._console.rule("Vulnerabilities")

        if not report.vulnerable_changes:
            self._console.print(
                "Dependency review did not detect any vulnerable packages with severity "
                f'level "{report.min_severity.value}" or higher.'
            )
            return

        for change in report.vulnerable_changes:
            for vuln in change.vulnerabilities:
                style = SEVERITY_STYLES[vuln.severity]
                line = Text()
                line.append(f"{change.manifest} » {change.display_name}", style="bold")
                line.append(f" – {vuln.advisory_summary} ")
                line.append(f"({vuln.severity.value} severity)", style=style)
                self._console.print(line)
                if vuln.advisory_url:
                    self._console.print(f"  ↪ {vuln.advisory_url}", highlight=False)

    def _render_licenses(self, issues: LicenseIssues) -> None:
        self._console.print()
        self._console.rule("Licenses")

        if issues.is_empty:
            self._console.print("No license issues found.")
            return

        if issues.forbidden:
            self._console.print("\nThe following dependencies have incompatible licenses:")
            self._print_license_table(issues.forbidden)

        if issues.unresolved:
            self._console.print(
                "\n[yellow]The validity of the licenses of the dependencies below could not be "
                "determined. Ensure that they are valid SPDX licenses:[/yellow]"
            )
            self._print_license_table(issues.unresolved)

        if issues.unlicensed:
            self._console.print("\nWe could not detect a license for the following dependencies:")
            for change in issues.unlicensed:
                self._console.print(f"[bold]{change.manifest} » {change.display_name}[/bold]")

    def _print_license_table(self, changes: list[Change]) -> None:
        table = Table(show_header=True)
        table.add_column("Manifest", style="dim")
        table.add_column("Package", style="bold")
        table.add_column("License", style="red")
        for change in changes:
            table.add_row(change.manifest, change.display_name, change.license or "-")
        self._console.print(table)

    def _render_scanned(self, report: ReviewReport) -> None:
        self._console.print()
        self._console.rule("Dependency Changes")

        for manifest, changes in report.changes.by_manifest().items():
            self._console.print(f"File: [bold]{manifest}[/bold]")
            for change in changes:
                self._console.print(render_scanned_dependency(change))
