"""
Pytest fixtures and configuration for ECR Scan Gate tests.

Provides shared fixtures and test utilities across the test suite.
"""

import pytest
from unittest.mock import Mock

from core.models import (
    FindingRecord,
    FindingsPage,
    ScanReport,
    ScanSnapshot,
    Severity,
    SeverityCounts,
    Verdict,
)
from core.scanner_interface import ScanClient


def make_snapshot(status: str = "COMPLETE", counts: dict = None, description: str = None) -> ScanSnapshot:
    """Build a snapshot with ECR-style summary counts."""
    return ScanSnapshot(
        status=status,
        description=description,
        severity_counts=counts or {},
        image_digest="sha256:abc123",
    )


@pytest.fixture
def sample_counts():
    """Counts used by the threshold scenarios."""
    return SeverityCounts(
        critical=0,
        high=1,
        medium=2,
        low=0,
        informational=3,
        indeterminate=0,
    )


@pytest.fixture
def sample_findings():
    """Findings matching sample_counts."""
    return [
        FindingRecord("CVE-2023-0001", "HIGH", package_name="openssl", package_version="3.0.1", score=7.5,
                      uri="https://security-tracker.debian.org/tracker/CVE-2023-0001"),
        FindingRecord("CVE-2023-0002", "MEDIUM", package_name="zlib", package_version="1.2.11", score=5.3),
        FindingRecord("CVE-2023-0003", "MEDIUM", package_name="curl", package_version="7.88.1"),
        FindingRecord("CVE-2023-0004", "INFORMATIONAL", package_name="bash"),
        FindingRecord("CVE-2023-0005", "INFORMATIONAL", package_name="bash"),
        FindingRecord("CVE-2023-0006", "INFORMATIONAL", package_name="tar"),
    ]


@pytest.fixture
def complete_snapshot():
    """Terminal snapshot whose summary counts match sample_findings."""
    return make_snapshot(
        "COMPLETE",
        {"HIGH": 1, "MEDIUM": 2, "INFORMATIONAL": 3},
    )


@pytest.fixture
def mock_client(complete_snapshot, sample_findings):
    """Scan client that reports a completed scan with sample_findings on one page."""
    client = Mock(spec=ScanClient)
    client.name.return_value = "fake"
    client.get_scan_snapshot.return_value = complete_snapshot
    client.list_findings_page.return_value = FindingsPage(findings=sample_findings, next_token=None)
    return client


@pytest.fixture
def sample_report(complete_snapshot, sample_findings):
    """Failing report with one ignored finding."""
    return ScanReport(
        repository="myorg/app",
        tag="1.0",
        snapshot=complete_snapshot,
        totals=SeverityCounts(high=1, medium=2, informational=3),
        ignored=SeverityCounts(high=1),
        verdict=Verdict(failing_count=2, threshold=Severity.MEDIUM),
        findings=sample_findings,
        findings_fetched=True,
        ignore_list=["CVE-2023-0001"],
    )
