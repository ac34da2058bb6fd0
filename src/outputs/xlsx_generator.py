"""
XLSX generator for scan gate reports.

Generates a workbook with a summary sheet (counts per severity, ignored
counts and the verdict) and a findings sheet listing every finding.
"""

import logging
from pathlib import Path

import xlsxwriter
from xlsxwriter.exceptions import FileCreateError

from core.exceptions import OutputException
from core.models import ScanReport, Severity
from outputs.base import OutputGenerator
from outputs.xlsx_formats import OutputFormatter
from utils.formatting import format_severity

logger = logging.getLogger(__name__)


class XLSXGenerator(OutputGenerator):
    """Image scan report generator (XLSX format)."""

    requires_findings = True

    FINDING_COLUMNS = [
        ("Vulnerability", 22),
        ("Severity", 14),
        ("Package", 28),
        ("Version", 20),
        ("Score", 8),
        ("Ignored", 9),
        ("Description", 80),
    ]

    def generate(self, report: ScanReport, output_path: Path) -> None:
        """
        Generate the XLSX report.

        Args:
            report: Scan report to write
            output_path: Output file path
        """
        logger.info(f"Generating XLSX report: {output_path}")

        workbook = xlsxwriter.Workbook(str(output_path))
        formatter = OutputFormatter(workbook)
        self._write_summary(workbook.add_worksheet("summary"), formatter, report)
        self._write_findings(workbook.add_worksheet("findings"), formatter, report)
        try:
            workbook.close()
        except (OSError, FileCreateError) as e:
            raise OutputException("xlsx", str(e))

        logger.info(f"XLSX report generated: {output_path}")

    def _write_summary(self, worksheet, formatter: OutputFormatter, report: ScanReport) -> None:
        worksheet.set_column(0, 0, 18)
        worksheet.set_column(1, 2, 12)

        worksheet.write(0, 0, "Image", formatter.get("label"))
        worksheet.merge_range(0, 1, 0, 2, report.image, formatter.get("body"))

        row = 2
        worksheet.write_row(row, 0, ["Severity", "Found", "Ignored"], formatter.get("header"))
        for level in Severity.ordered_levels():
            row += 1
            worksheet.write(row, 0, format_severity(level.value), formatter.for_severity(level))
            worksheet.write_number(row, 1, report.totals.get(level), formatter.get("body_count"))
            worksheet.write_number(row, 2, report.ignored.get(level), formatter.get("body_count"))
        row += 1
        worksheet.write(row, 0, "Total", formatter.get("label"))
        worksheet.write_number(row, 1, report.totals.total, formatter.get("body_count"))
        worksheet.write_number(row, 2, report.ignored.total, formatter.get("body_count"))

        verdict = report.verdict
        row += 2
        worksheet.write(row, 0, "Fail threshold", formatter.get("label"))
        worksheet.write(row, 1, verdict.threshold.value.lower(), formatter.get("body"))
        row += 1
        verdict_format = formatter.get("verdict_pass" if verdict.passed else "verdict_fail")
        worksheet.write(row, 0, "Verdict", formatter.get("label"))
        worksheet.write(row, 1, "PASS" if verdict.passed else "FAIL", verdict_format)
        worksheet.write_number(row, 2, verdict.failing_count, verdict_format)

    def _write_findings(self, worksheet, formatter: OutputFormatter, report: ScanReport) -> None:
        for col, (title, width) in enumerate(self.FINDING_COLUMNS):
            worksheet.set_column(col, col, width)
            worksheet.write(0, col, title, formatter.get("header"))

        ignored_ids = set(report.ignore_list)
        for row, finding in enumerate(report.findings, start=1):
            row_format = formatter.for_severity(finding.level)
            if finding.uri:
                worksheet.write_url(row, 0, finding.uri, row_format, string=finding.vulnerability_id)
            else:
                worksheet.write(row, 0, finding.vulnerability_id, row_format)
            worksheet.write(row, 1, format_severity(finding.level.value), row_format)
            worksheet.write(row, 2, finding.package_name or "", row_format)
            worksheet.write(row, 3, finding.package_version or "", row_format)
            if finding.score is not None:
                worksheet.write_number(row, 4, finding.score, formatter.get("body_score"))
            else:
                worksheet.write_blank(row, 4, None, formatter.get("body"))
            worksheet.write(
                row, 5, "yes" if finding.vulnerability_id in ignored_ids else "", row_format
            )
            worksheet.write(row, 6, finding.description or "", formatter.get("body"))

        worksheet.freeze_panes(1, 0)
        if report.findings:
            worksheet.autofilter(0, 0, len(report.findings), len(self.FINDING_COLUMNS) - 1)
