"""
HTML generator for scan gate reports.

Renders the Markdown summary through the markdown library and wraps it in
a small standalone page suitable for attaching as a build artifact.
"""

import html
import logging
from datetime import datetime
from pathlib import Path

import markdown

from core.exceptions import OutputException
from core.models import ScanReport
from outputs.base import OutputGenerator
from outputs.summary import build_markdown_summary

logger = logging.getLogger(__name__)


class HTMLGenerator(OutputGenerator):
    """Image scan report generator (HTML format)."""

    CSS = """
    body { font-family: Arial, Helvetica, sans-serif; font-size: 14px; margin: 2em; color: #222; }
    h2 { border-bottom: 2px solid #ff9900; padding-bottom: 0.3em; }
    table { border-collapse: collapse; margin: 1em 0; }
    th, td { border: 1px solid #d9d9d9; padding: 4px 10px; }
    th { background: #f3f3f3; }
    footer { color: #666; font-size: 12px; margin-top: 2em; }
    """

    def generate(self, report: ScanReport, output_path: Path) -> None:
        """
        Generate the HTML report.

        Args:
            report: Scan report to render
            output_path: Output file path
        """
        logger.info(f"Generating HTML report: {output_path}")

        body = markdown.markdown(build_markdown_summary(report), extensions=["tables"])
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Image scan: {html.escape(report.image)}</title>
<style>{self.CSS}</style>
</head>
<body>
{body}
<footer>Generated {timestamp}</footer>
</body>
</html>
"""

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(html_content)
        except OSError as e:
            raise OutputException("html", str(e))

        logger.info(f"HTML report generated: {output_path}")
