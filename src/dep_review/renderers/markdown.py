"""Markdown renderer for job summaries and pull request comments."""

from __future__ import annotations

from dep_review.models.change import Change, ChangeType
from dep_review.models.result import LicenseIssues, ReviewReport
from dep_review.renderers.base import BaseRenderer, OutputFormat, Renderable, RenderContext

SEVERITY_ICONS = {
    "critical": ":red_circle:",
    "high": ":red_circle:",
    "moderate": ":yellow_circle:",
    "low": ":white_circle:",
}


class MarkdownRenderer(BaseRenderer):
    """Renderer for Markdown output format.

    Example:
        renderer = MarkdownRenderer()
        body = renderer.render(result, RenderContext(format=OutputFormat.MARKDOWN))
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.MARKDOWN

    def render(self, data: Renderable, context: RenderContext) -> str:
        """Render a review result to Markdown."""
        report = self.report_of(data)
        if report is None:
            if data.errors:
                return "\n".join(["# Dependency Review", ""] + [f":x: {e}" for e in data.errors]) + "\n"
            return "# Dependency Review\n\nNo dependency changes found.\n"

        lines = ["# Dependency Review", ""]
        lines.extend(self._render_summary(report))

        if context.show_vulnerabilities and report.vulnerable_changes:
            lines.extend(self._render_vulnerabilities(report))

        if context.show_licenses and not report.license_issues.is_empty:
            lines.extend(self._render_licenses(report.license_issues))

        if context.verbose:
            lines.extend(self._render_scanned(report))

        return "\n".join(lines)

    def _render_summary(self, report: ReviewReport) -> list[str]:
        if report.passed:
            lines = [":white_check_mark: No vulnerabilities or license issues found.", ""]
        else:
            lines = [f":x: {reason}" for reason in report.failure_reasons]
            lines.append("")

        issues = report.license_issues
        lines.extend(
            [
                "## Summary",
                "",
                f"- Scanned changes: **{len(report.changes)}** "
                f"({len(report.changes.added)} added, {len(report.changes.removed)} removed)",
                f"- Vulnerable packages: **{len(report.vulnerable_changes)}** "
                f"(severity `{report.min_severity.value}` or higher, "
                f"{report.vulnerability_count} advisories in total)",
                f"- Incompatible licenses: **{len(issues.forbidden)}**",
                f"- Unresolved licenses: **{len(issues.unresolved)}**",
                f"- Unknown licenses: **{len(issues.unlicensed)}**",
                "",
            ]
        )
        return lines

    def _render_vulnerabilities(self, report: ReviewReport) -> list[str]:
        lines = [
            "## Vulnerabilities",
            "",
            "| Manifest | Package | Severity | Advisory |",
            "|----------|---------|----------|----------|",
        ]
        for change in report.vulnerable_changes:
            for vuln in change.vulnerabilities:
                icon = SEVERITY_ICONS.get(vuln.severity.value, "")
                summary = self._escape_md(vuln.advisory_summary or vuln.advisory_id)
                advisory = f"[{summary}]({vuln.advisory_url})" if vuln.advisory_url else summary
                lines.append(
                    f"| `{change.manifest}` | {change.display_name} | "
                    f"{icon} {vuln.severity.value} | {advisory} |"
                )
        lines.append("")
        return lines

    def _render_licenses(self, issues: LicenseIssues) -> list[str]:
        titles = {
            "forbidden": "Incompatible Licenses",
            "unresolved": "Invalid SPDX License Definitions",
            "unlicensed": "Unknown Licenses",
        }
        lines = ["## License Issues", ""]
        for category, changes in issues.categories():
            if not changes:
                continue
            lines.extend(
                [
                    f"### {titles[category.value]}",
                    "",
                    "| Manifest | Package | License |",
                    "|----------|---------|---------|",
                ]
            )
            for change in changes:
                license = self._escape_md(change.license) if change.license else "-"
                lines.append(f"| `{change.manifest}` | {change.display_name} | {license} |")
            lines.append("")
        return lines

    def _render_scanned(self, report: ReviewReport) -> list[str]:
        lines = ["## Dependency Changes", ""]
        for manifest, changes in report.changes.by_manifest().items():
            lines.append(f"**{manifest}**")
            lines.append("")
            for change in changes:
                lines.append(f"- {self._change_icon(change)} {change.display_name}")
            lines.append("")
        return lines

    def _change_icon(self, change: Change) -> str:
        return "+" if change.change_type == ChangeType.ADDED else "-"

    def _escape_md(self, text: str) -> str:
        """Escape characters that break Markdown tables."""
        return text.replace("|", "\\|").replace("\n", " ")
