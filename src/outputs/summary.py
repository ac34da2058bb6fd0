"""
Human-readable summaries of a scan report.

The console table and the Markdown summary share the same layout so the
job log, the GitHub step summary and the HTML report read alike.
"""

import html
import logging
import re
from typing import Optional

from core.models import ScanReport, Severity
from utils.formatting import format_count, format_score, format_severity

logger = logging.getLogger(__name__)

_SAFE_URL = re.compile(r"^https?://[^\s()<>\"'|`]+$")


def format_counts_table(report: ScanReport) -> list[str]:
    """
    Build the console counts table.

    Returns:
        Lines of the table, one severity per line, then the total
    """
    lines = ["Vulnerabilities found:"]
    for level in Severity.ordered_levels():
        lines.append(f"{format_count(report.totals.get(level))} {format_severity(level.value)}")
    lines.append("=================")
    lines.append(f"{format_count(report.totals.total)} Total")
    if report.ignored.total:
        lines.append(f"{format_count(report.ignored.total)} Ignored")
    return lines


def log_report(report: ScanReport, log: Optional[logging.Logger] = None) -> None:
    """Log the counts table and the verdict."""
    log = log or logger
    for line in format_counts_table(report):
        log.info(line)

    threshold = report.verdict.threshold.value.lower()
    if report.verdict.passed:
        log.info(f"✓ No unignored vulnerabilities with severity >= {threshold}")
    else:
        log.info(
            f"✗ {report.verdict.failing_count} unignored vulnerabilities with severity >= {threshold}"
        )


def build_markdown_summary(report: ScanReport) -> str:
    """
    Render the report as Markdown.

    Includes the counts table, the verdict, missing ignore entries and,
    when findings were fetched, a findings table.
    """
    verdict = report.verdict
    status = "✅ Passed" if verdict.passed else "❌ Failed"
    lines = [
        f"## Image scan: `{report.image}`",
        "",
        f"**{status}**: {verdict.failing_count} unignored vulnerabilities with severity "
        f">= {verdict.threshold.value.lower()}",
        "",
        "| Severity | Found | Ignored |",
        "| --- | ---: | ---: |",
    ]
    for level in Severity.ordered_levels():
        lines.append(
            f"| {format_severity(level.value)} | {report.totals.get(level)} | {report.ignored.get(level)} |"
        )
    lines.append(f"| **Total** | **{report.totals.total}** | **{report.ignored.total}** |")

    if report.missing_ignores:
        lines += ["", "Ignore-list entries not found in findings:", ""]
        lines += [f"- `{identifier}`" for identifier in report.missing_ignores]

    if report.findings:
        ignored_ids = set(report.ignore_list)
        lines += [
            "",
            "| Vulnerability | Severity | Package | Version | Score | Ignored |",
            "| --- | --- | --- | --- | ---: | --- |",
        ]
        for finding in report.findings:
            lines.append(
                f"| {_link(finding.vulnerability_id, finding.uri)} "
                f"| {format_severity(finding.level.value)} "
                f"| {_cell(finding.package_name)} "
                f"| {_cell(finding.package_version)} "
                f"| {format_score(finding.score)} "
                f"| {'yes' if finding.vulnerability_id in ignored_ids else ''} |"
            )

    return "\n".join(lines) + "\n"


def _cell(value: Optional[str]) -> str:
    """Escape scanner-supplied text for a Markdown table cell."""
    return html.escape(value or "").replace("|", "\\|")


def _link(text: str, uri: Optional[str]) -> str:
    """Link text to uri; only plain http(s) URLs become links."""
    if uri and _SAFE_URL.match(uri):
        return f"[{_cell(text)}]({uri})"
    return _cell(text)
