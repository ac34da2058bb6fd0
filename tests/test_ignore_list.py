"""Tests for ignore-list parsing and reconciliation."""

import logging

import pytest

from core.exceptions import IgnoreListMismatchException
from core.ignore_list import (
    IgnoreReconciliation,
    apply_missed_ignore_policy,
    parse_ignore_list,
    reconcile,
)
from core.models import FindingRecord


class TestParseIgnoreList:
    """Tests for parse_ignore_list function."""

    def test_none_and_empty(self):
        """Test absent input means no exclusions."""
        assert parse_ignore_list(None) == []
        assert parse_ignore_list("") == []
        assert parse_ignore_list([]) == []

    def test_mixed_separators(self):
        """Test commas, spaces and newlines all separate entries."""
        value = "CVE-2021-1, CVE-2021-2\nCVE-2021-3  CVE-2021-4,,\n"
        assert parse_ignore_list(value) == ["CVE-2021-1", "CVE-2021-2", "CVE-2021-3", "CVE-2021-4"]

    def test_list_input(self):
        """Test list items are themselves split."""
        assert parse_ignore_list(["CVE-1,CVE-2", "CVE-3"]) == ["CVE-1", "CVE-2", "CVE-3"]

    def test_duplicates_deduped(self):
        """Test duplicates keep their first position."""
        assert parse_ignore_list("CVE-2 CVE-1 CVE-2") == ["CVE-2", "CVE-1"]


class TestReconcile:
    """Tests for reconcile function."""

    def test_all_matched(self, sample_findings):
        """Test complete reconciliation reports nothing missing."""
        result = reconcile(["CVE-2023-0002", "CVE-2023-0001"], sample_findings)

        assert result.complete
        assert result.missing == []
        assert [f.vulnerability_id for f in result.matched] == ["CVE-2023-0001", "CVE-2023-0002"]

    def test_missing_identifiers(self, sample_findings):
        """Test unmatched entries are reported in ignore-list order."""
        result = reconcile(["CVE-X", "CVE-2023-0001", "CVE-Y"], sample_findings)

        assert result.missing == ["CVE-X", "CVE-Y"]
        assert len(result.matched) == 1

    def test_exact_match_only(self):
        """Test matching is exact string equality."""
        findings = [FindingRecord("CVE-2023-0001", "HIGH")]

        result = reconcile(["cve-2023-0001", "CVE-2023-000"], findings)

        assert result.matched == []
        assert result.missing == ["cve-2023-0001", "CVE-2023-000"]

    def test_identifier_matching_several_findings(self):
        """Test one identifier can match findings in several packages."""
        findings = [
            FindingRecord("CVE-1", "HIGH", package_name="libssl"),
            FindingRecord("CVE-1", "HIGH", package_name="openssl"),
        ]

        result = reconcile(["CVE-1"], findings)

        assert len(result.matched) == 2
        assert result.complete


class TestApplyMissedIgnorePolicy:
    """Tests for the missed-ignore policy."""

    def test_complete_is_silent(self, caplog):
        """Test nothing is logged when every entry matched."""
        with caplog.at_level(logging.WARNING):
            apply_missed_ignore_policy(IgnoreReconciliation(), "error")
        assert caplog.records == []

    def test_error_policy_raises(self, caplog):
        """Test missing entries are fatal by default."""
        reconciliation = IgnoreReconciliation(missing=["CVE-X", "CVE-Y"])

        with caplog.at_level(logging.ERROR):
            with pytest.raises(IgnoreListMismatchException) as exc:
                apply_missed_ignore_policy(reconciliation)

        assert exc.value.missing == ["CVE-X", "CVE-Y"]
        assert "CVE-X" in caplog.text
        assert "CVE-Y" in caplog.text

    def test_warn_policy_continues(self, caplog):
        """Test warn mode logs each entry and returns."""
        reconciliation = IgnoreReconciliation(missing=["CVE-X"])

        with caplog.at_level(logging.WARNING):
            apply_missed_ignore_policy(reconciliation, "warn")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any("CVE-X" in r.getMessage() for r in warnings)
