"""
Base output generator interface.

Defines the contract that all report file generators must implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from core.models import ScanReport


class OutputGenerator(ABC):
    """
    Abstract base class for report generators.

    All output generators (JSON, HTML, XLSX) must implement this interface.
    """

    # Whether the generator needs the full finding list to be useful
    requires_findings = False

    @abstractmethod
    def generate(self, report: ScanReport, output_path: Path) -> None:
        """
        Generate a report file from a scan report.

        Args:
            report: Scan report to write
            output_path: Where to write the output file

        Raises:
            OutputException: If the file cannot be written
        """
        pass
