"""Tests for threshold evaluation."""

import pytest

from core.exceptions import ThresholdExceededException
from core.models import Severity, SeverityCounts, Verdict, count_at_or_above
from core.threshold import enforce_verdict, evaluate


class TestEvaluate:
    """Tests for evaluate function."""

    def test_medium_threshold_fails(self, sample_counts):
        """Test high + medium findings fail a medium threshold."""
        verdict = evaluate(sample_counts, SeverityCounts(), Severity.MEDIUM)

        assert verdict.failing_count == 3
        assert verdict.failed

    def test_critical_threshold_passes(self, sample_counts):
        """Test no critical findings passes a critical threshold."""
        verdict = evaluate(sample_counts, SeverityCounts(), Severity.CRITICAL)

        assert verdict.failing_count == 0
        assert verdict.passed

    def test_fully_ignored_findings_pass(self):
        """Test ignored findings do not fail the build."""
        totals = SeverityCounts(high=2)
        ignored = SeverityCounts(high=2)

        verdict = evaluate(totals, ignored, Severity.HIGH)

        assert verdict.failing_count == 0
        assert verdict.passed

    def test_ignored_below_threshold_do_not_offset(self):
        """Test ignores below the threshold don't reduce failing counts above it."""
        totals = SeverityCounts(high=1, low=3)
        ignored = SeverityCounts(low=3)

        assert evaluate(totals, ignored, Severity.HIGH).failing_count == 1

    def test_indeterminate_never_fails(self):
        """Test indeterminate findings never reach a threshold."""
        totals = SeverityCounts(indeterminate=10)

        verdict = evaluate(totals, SeverityCounts(), Severity.INFORMATIONAL)

        assert verdict.passed

    def test_never_negative(self):
        """Test a bucket never contributes a negative amount."""
        totals = SeverityCounts(high=1, medium=1)
        ignored = SeverityCounts(high=3)

        assert evaluate(totals, ignored, Severity.MEDIUM).failing_count == 1

    def test_monotonic_in_threshold(self):
        """Test lowering the threshold severity never decreases the count."""
        totals = SeverityCounts(2, 3, 5, 7, 11, 13)
        ignored = SeverityCounts(1, 0, 2, 0, 4, 6)

        counts = [
            evaluate(totals, ignored, level).failing_count
            for level in Severity.threshold_levels()
        ]

        assert counts == sorted(counts)
        assert counts == [1, 4, 7, 14, 21]

    def test_matches_cumulative_count_of_unignored(self):
        """Test the failing count is the cumulative count of what remains unignored."""
        totals = SeverityCounts(1, 4, 2, 0, 5, 3)
        ignored = SeverityCounts(0, 2, 3, 0, 1, 3)

        for level in Severity.threshold_levels():
            expected = count_at_or_above(totals.subtract(ignored), level)
            assert evaluate(totals, ignored, level).failing_count == expected

    def test_verdict_carries_threshold(self, sample_counts):
        """Test the verdict records the threshold."""
        assert evaluate(sample_counts, SeverityCounts(), Severity.LOW).threshold is Severity.LOW


class TestEnforceVerdict:
    """Tests for enforce_verdict function."""

    def test_pass_does_not_raise(self):
        """Test passing verdicts are accepted."""
        enforce_verdict(Verdict(failing_count=0, threshold=Severity.HIGH))

    def test_fail_raises_with_details(self):
        """Test failing verdicts raise with count and threshold."""
        with pytest.raises(ThresholdExceededException) as exc:
            enforce_verdict(Verdict(failing_count=3, threshold=Severity.MEDIUM))

        assert exc.value.failing_count == 3
        assert exc.value.threshold == "medium"
        assert "Detected 3 vulnerabilities with severity >= medium" in str(exc.value)
