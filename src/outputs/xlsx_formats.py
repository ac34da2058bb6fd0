"""
XLSX format definitions and factory.

Provides centralized format management for Excel workbooks,
eliminating duplication through a format factory pattern.
"""

import xlsxwriter

from core.models import Severity


class OutputFormatter:
    """Factory for creating consistent XLSX cell formats."""

    # Base format properties shared by all formats
    BASE_FORMAT = {
        "border": 1,
        "font_name": "Arial",
        "font_size": 10,
        "align": "left",
        "valign": "vcenter",
    }

    # Color schemes
    COLORS = {
        "orange": "#FF9900",
        "lightgrey": "#D9D9D9",
        "green": "#D9EAD3",
        "red": "#FFE5E5",
    }

    # Background per severity for finding rows
    SEVERITY_COLORS = {
        Severity.CRITICAL: "#F4CCCC",
        Severity.HIGH: "#FCE5CD",
        Severity.MEDIUM: "#FFF2CC",
        Severity.LOW: "#D9EAD3",
        Severity.INFORMATIONAL: "#CFE2F3",
        Severity.INDETERMINATE: "#F3F3F3",
    }

    NUM_FORMATS = {
        "count": "#,##0",
        "score": "0.0",
    }

    def __init__(self, workbook: xlsxwriter.Workbook):
        """
        Initialize formatter with workbook.

        Args:
            workbook: XlsxWriter workbook instance
        """
        self.workbook = workbook
        self.formats = self._create_all_formats()

    def _create_format(
        self,
        bg_color: str = None,
        font_color: str = "black",
        bold: bool = False,
        num_format: str = None,
    ) -> xlsxwriter.format.Format:
        """
        Create a format with base properties plus overrides.

        Args:
            bg_color: Background color (hex or color name)
            font_color: Font color (default: black)
            bold: Whether text should be bold
            num_format: Number format string (e.g., "#,##0")

        Returns:
            Configured format object
        """
        format_dict = self.BASE_FORMAT.copy()

        if bg_color:
            format_dict["bg_color"] = bg_color
        if font_color != "black":
            format_dict["font_color"] = font_color
        if bold:
            format_dict["bold"] = True
        if num_format:
            format_dict["num_format"] = num_format

        return self.workbook.add_format(format_dict)

    def _create_all_formats(self) -> dict:
        """Create all required formats using the factory method."""
        formats = {
            "header": self._create_format(
                bg_color=self.COLORS["orange"],
                font_color="white",
                bold=True,
            ),
            "label": self._create_format(
                bg_color=self.COLORS["lightgrey"],
                bold=True,
            ),
            "body": self._create_format(),
            "body_count": self._create_format(num_format=self.NUM_FORMATS["count"]),
            "body_score": self._create_format(num_format=self.NUM_FORMATS["score"]),
            "verdict_pass": self._create_format(bg_color=self.COLORS["green"], bold=True),
            "verdict_fail": self._create_format(bg_color=self.COLORS["red"], bold=True),
        }
        for severity, color in self.SEVERITY_COLORS.items():
            formats[f"severity_{severity.field_name}"] = self._create_format(bg_color=color)
        return formats

    def get(self, format_name: str) -> xlsxwriter.format.Format:
        """
        Get a format by name.

        Raises:
            KeyError: If format name doesn't exist
        """
        return self.formats[format_name]

    def for_severity(self, severity: Severity) -> xlsxwriter.format.Format:
        """Get the row format for a severity level."""
        return self.formats[f"severity_{severity.field_name}"]
