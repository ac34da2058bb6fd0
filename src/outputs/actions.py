"""
GitHub Actions step outputs and job summary.

Outputs are appended to the file named by GITHUB_OUTPUT; multi-line
values use the heredoc form with a random delimiter.
"""

import json
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from constants import GITHUB_OUTPUT_ENV, GITHUB_STEP_SUMMARY_ENV
from core.exceptions import OutputException
from core.models import ScanReport, Severity
from outputs.summary import build_markdown_summary

logger = logging.getLogger(__name__)

# Output names per severity; INDETERMINATE keeps ECR's "undefined" label
OUTPUT_NAMES = {level: level.value.lower() for level in Severity.ordered_levels()}


def build_action_outputs(report: ScanReport) -> dict[str, str]:
    """
    Build the step outputs for a report.

    Returns:
        Mapping of output name to string value; findingsDetails is only
        present when findings were fetched
    """
    outputs = {OUTPUT_NAMES[level]: str(report.totals.get(level)) for level in Severity.ordered_levels()}
    outputs["total"] = str(report.totals.total)
    outputs["ignored"] = str(report.ignored.total)
    outputs["failing"] = str(report.verdict.failing_count)
    if report.findings_fetched:
        outputs["findingsDetails"] = json.dumps([f.to_dict() for f in report.findings])
    return outputs


def _format_output(name: str, value: str) -> str:
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_action_outputs(report: ScanReport, output_file: Optional[Path] = None) -> bool:
    """
    Append step outputs to the GitHub Actions output file.

    Args:
        report: Scan report
        output_file: Output file (defaults to $GITHUB_OUTPUT)

    Returns:
        True if outputs were written, False when no output file is configured
    """
    output_file = output_file or os.environ.get(GITHUB_OUTPUT_ENV)
    if not output_file:
        logger.debug(f"{GITHUB_OUTPUT_ENV} not set, skipping step outputs")
        return False

    try:
        with open(output_file, "a", encoding="utf-8") as f:
            for name, value in build_action_outputs(report).items():
                f.write(_format_output(name, value))
    except OSError as e:
        raise OutputException("github-output", str(e))
    logger.debug(f"Wrote step outputs to {output_file}")
    return True


def write_step_summary(report: ScanReport, summary_file: Optional[Path] = None) -> bool:
    """
    Append the Markdown summary to the GitHub Actions job summary.

    Returns:
        True if the summary was written, False when no summary file is configured
    """
    summary_file = summary_file or os.environ.get(GITHUB_STEP_SUMMARY_ENV)
    if not summary_file:
        return False

    try:
        with open(summary_file, "a", encoding="utf-8") as f:
            f.write(build_markdown_summary(report))
    except OSError as e:
        raise OutputException("github-step-summary", str(e))
    return True
