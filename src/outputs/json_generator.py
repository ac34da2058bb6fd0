"""JSON generator for machine-readable scan reports."""

import json
import logging
from pathlib import Path

from core.exceptions import OutputException
from core.models import ScanReport
from outputs.base import OutputGenerator

logger = logging.getLogger(__name__)


class JSONGenerator(OutputGenerator):
    """Writes counts, verdict and finding details as JSON."""

    requires_findings = True

    def generate(self, report: ScanReport, output_path: Path) -> None:
        """Write the report as indented JSON."""
        logger.info(f"Generating JSON report: {output_path}")
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(report.to_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise OutputException("json", str(e))
