"""
ECR Scan Gate - Container Image Vulnerability Gate

Scans container images stored in Amazon ECR and fails build pipelines
when unignored vulnerabilities reach a configurable severity threshold.
"""

__version__ = "1.0.0"

from core.models import (
    FindingRecord,
    ScanReport,
    Severity,
    SeverityCounts,
    Verdict,
)

__all__ = [
    "FindingRecord",
    "ScanReport",
    "Severity",
    "SeverityCounts",
    "Verdict",
]
