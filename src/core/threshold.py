"""Threshold evaluation: turns counts into a pass/fail verdict."""

import logging

from core.exceptions import ThresholdExceededException
from core.models import Severity, SeverityCounts, Verdict, count_at_or_above

logger = logging.getLogger(__name__)


def evaluate(
    totals: SeverityCounts,
    ignored: SeverityCounts,
    threshold: Severity,
) -> Verdict:
    """
    Count unignored findings at or above the threshold.

    INDETERMINATE findings never count toward the threshold.

    Args:
        totals: Counts over all findings
        ignored: Counts over ignored findings
        threshold: Least severe level that fails the build

    Returns:
        Verdict with the failing count (0 on pass)
    """
    failing = count_at_or_above(totals.subtract(ignored), threshold)
    return Verdict(failing_count=failing, threshold=threshold)


def enforce_verdict(verdict: Verdict) -> None:
    """
    Raise if the verdict failed.

    Raises:
        ThresholdExceededException: If any unignored finding reaches the threshold
    """
    if verdict.failed:
        raise ThresholdExceededException(
            verdict.failing_count, verdict.threshold.value.lower()
        )
    logger.debug(f"No vulnerabilities at or above {verdict.threshold.value.lower()}")


__all__ = [
    "evaluate",
    "enforce_verdict",
]
