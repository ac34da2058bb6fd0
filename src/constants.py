"""
Centralized configuration constants for ECR Scan Gate.

This module provides a single source of truth for configuration values
that are used across multiple modules, making them easier to update
and maintain.
"""

# ============================================================================
# Scan Gate Defaults
# ============================================================================

DEFAULT_FAIL_THRESHOLD = "high"
"""Default severity at or above which unignored findings fail the build."""

MISSED_IGNORE_POLICIES = ("error", "warn")
"""Valid policies for ignore-list entries that match no finding."""

DEFAULT_MISSED_IGNORE_POLICY = "error"
"""Default policy: an unmatched ignore entry is fatal."""

# ============================================================================
# Polling and Pagination
# ============================================================================

POLL_INTERVAL_SECONDS = 5.0
"""Fixed delay between scan status polls."""

FINDINGS_PAGE_SIZE = 1000
"""Maximum findings requested per DescribeImageScanFindings page."""

STATUS_POLL_PAGE_SIZE = 1
"""Findings requested when only the scan status and summary counts are needed."""

DEFAULT_TIMEOUT_SECONDS = 0
"""Default wall-clock budget for the whole run (0 disables the deadline)."""

# ============================================================================
# Scan Status Values (as reported by ECR)
# ============================================================================

SCAN_STATUS_PENDING = "PENDING"
SCAN_STATUS_IN_PROGRESS = "IN_PROGRESS"
SCAN_STATUS_COMPLETE = "COMPLETE"
SCAN_STATUS_ACTIVE = "ACTIVE"
SCAN_STATUS_FAILED = "FAILED"

# ============================================================================
# ECR Error Codes
# ============================================================================

ECR_SCAN_NOT_FOUND = "ScanNotFoundException"
"""The only error code that means "no scan has been requested yet"."""

ECR_SCAN_ALREADY_REQUESTED = ("LimitExceededException",)
"""StartImageScan error codes that mean a scan already exists for the image."""

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIGURATION_ERROR = 2
EXIT_CANCELLED = 130

# ============================================================================
# GitHub Actions Integration
# ============================================================================

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"
"""Environment variable naming the file that receives step outputs."""

GITHUB_STEP_SUMMARY_ENV = "GITHUB_STEP_SUMMARY"
"""Environment variable naming the file that receives the Markdown job summary."""
