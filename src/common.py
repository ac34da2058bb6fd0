"""
Common constants shared across the ECR Scan Gate application.
"""

from outputs.html_generator import HTMLGenerator
from outputs.json_generator import JSONGenerator
from outputs.xlsx_generator import XLSXGenerator

# Output configuration for all report types
OUTPUT_CONFIGS = {
    "json": {
        "description": "Findings Details (JSON)",
        "file_suffix": "scan.json",
        "generator": JSONGenerator,
    },
    "html": {
        "description": "Scan Summary (HTML)",
        "file_suffix": "scan.html",
        "generator": HTMLGenerator,
    },
    "xlsx": {
        "description": "Findings Workbook (XLSX)",
        "file_suffix": "scan.xlsx",
        "generator": XLSXGenerator,
    },
}
