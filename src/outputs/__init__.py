"""Output generators for scan gate reports."""

from outputs.base import OutputGenerator
from outputs.html_generator import HTMLGenerator
from outputs.json_generator import JSONGenerator
from outputs.xlsx_generator import XLSXGenerator

__all__ = [
    "OutputGenerator",
    "HTMLGenerator",
    "JSONGenerator",
    "XLSXGenerator",
]
