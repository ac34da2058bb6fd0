"""
Domain models for image scan gating.

This module defines the core data structures used throughout the application.
All models are immutable (frozen dataclasses) to prevent accidental mutation.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from constants import (
    SCAN_STATUS_ACTIVE,
    SCAN_STATUS_COMPLETE,
    SCAN_STATUS_FAILED,
    SCAN_STATUS_IN_PROGRESS,
    SCAN_STATUS_PENDING,
)


class Severity(str, Enum):
    """Finding severity levels as reported by ECR, most severe first."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFORMATIONAL = "INFORMATIONAL"
    INDETERMINATE = "UNDEFINED"

    @classmethod
    def ordered_levels(cls) -> list["Severity"]:
        """Return all severity levels in display order."""
        return [
            cls.CRITICAL,
            cls.HIGH,
            cls.MEDIUM,
            cls.LOW,
            cls.INFORMATIONAL,
            cls.INDETERMINATE,
        ]

    @classmethod
    def threshold_levels(cls) -> list["Severity"]:
        """Return the levels that take part in threshold comparisons."""
        return [level for level in cls.ordered_levels() if level is not cls.INDETERMINATE]

    @classmethod
    def at_or_above(cls, threshold: "Severity") -> list["Severity"]:
        """
        Return every ranked level at least as severe as the threshold.

        Args:
            threshold: Ranked severity level (not INDETERMINATE)

        Returns:
            Levels from CRITICAL down to threshold, inclusive

        Raises:
            ValueError: If threshold has no rank
        """
        if threshold.rank is None:
            raise ValueError(f"{threshold.name} cannot be used as a threshold")
        return cls.threshold_levels()[: threshold.rank + 1]

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Severity":
        """
        Normalize a reported severity label.

        Unrecognized or missing labels (including UNTRIAGED and UNKNOWN
        from enhanced scanning) map to INDETERMINATE.
        """
        label = (raw or "").strip().upper()
        try:
            return cls(label)
        except ValueError:
            return cls.INDETERMINATE

    @property
    def rank(self) -> Optional[int]:
        """Position in the threshold order (0 is most severe); None for INDETERMINATE."""
        if self is Severity.INDETERMINATE:
            return None
        return Severity.threshold_levels().index(self)

    @property
    def field_name(self) -> str:
        """Attribute name used by SeverityCounts."""
        return self.name.lower()


class ScanState(str, Enum):
    """States of the scan lifecycle as observed by the poll driver."""

    NOT_REQUESTED = "not_requested"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @classmethod
    def from_status(cls, status: Optional[str]) -> Optional["ScanState"]:
        """
        Map a raw service status to a lifecycle state.

        Returns:
            Matching ScanState, or None for statuses outside the known set
        """
        return {
            SCAN_STATUS_PENDING: cls.PENDING,
            SCAN_STATUS_IN_PROGRESS: cls.IN_PROGRESS,
            SCAN_STATUS_COMPLETE: cls.COMPLETE,
            SCAN_STATUS_ACTIVE: cls.COMPLETE,
            SCAN_STATUS_FAILED: cls.FAILED,
        }.get((status or "").upper())

    @property
    def is_waiting(self) -> bool:
        """Whether the remote scan still has to make progress."""
        return self in (ScanState.PENDING, ScanState.IN_PROGRESS)


@dataclass(frozen=True)
class SeverityCounts:
    """
    Finding counts broken down by severity level.

    All six buckets are always present; total is derived from them so it
    can never disagree with the per-level counts.

    Attributes:
        critical: Number of critical findings
        high: Number of high severity findings
        medium: Number of medium severity findings
        low: Number of low severity findings
        informational: Number of informational findings
        indeterminate: Number of findings without a usable severity
    """

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    informational: int = 0
    indeterminate: int = 0

    def __post_init__(self):
        for level in Severity.ordered_levels():
            if getattr(self, level.field_name) < 0:
                raise ValueError(f"{level.field_name} count cannot be negative")

    @property
    def total(self) -> int:
        """Sum of all six buckets."""
        return sum(self.get(level) for level in Severity.ordered_levels())

    def get(self, severity: Severity) -> int:
        """Return the count for a single severity level."""
        return getattr(self, severity.field_name)

    def increment(self, severity: Severity, amount: int = 1) -> "SeverityCounts":
        """Return a copy with one bucket increased by amount."""
        return replace(self, **{severity.field_name: self.get(severity) + amount})

    def subtract(self, other: "SeverityCounts") -> "SeverityCounts":
        """Return per-level differences, floored at zero."""
        return SeverityCounts(**{
            level.field_name: max(0, self.get(level) - other.get(level))
            for level in Severity.ordered_levels()
        })

    def to_list(self) -> list[int]:
        """Convert to ordered list for tabular output (total first)."""
        return [self.total] + [self.get(level) for level in Severity.ordered_levels()]

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        data = {level.field_name: self.get(level) for level in Severity.ordered_levels()}
        data["total"] = self.total
        return data


def count_at_or_above(counts: SeverityCounts, threshold: Severity) -> int:
    """
    Sum the counts for every level at least as severe as threshold.

    INDETERMINATE findings never contribute.
    """
    return sum(counts.get(level) for level in Severity.at_or_above(threshold))


@dataclass(frozen=True)
class ScanSnapshot:
    """
    One observation of a remote image scan.

    Attributes:
        status: Raw scan status reported by the service
        description: Status description (failure reason for FAILED scans)
        severity_counts: Raw summary counts keyed by reported severity label
        image_digest: Digest of the scanned image, when known
        completed_at: When the scan finished, when known
    """

    status: str
    description: Optional[str] = None
    severity_counts: dict[str, int] = field(default_factory=dict)
    image_digest: Optional[str] = None
    completed_at: Optional[datetime] = None

    @property
    def state(self) -> Optional[ScanState]:
        """Lifecycle state for the raw status, or None when unrecognized."""
        return ScanState.from_status(self.status)


@dataclass(frozen=True)
class FindingRecord:
    """
    A single vulnerability instance reported by the scan.

    Attributes:
        vulnerability_id: Vulnerability identifier (e.g. CVE-2023-1234)
        severity: Severity label exactly as reported
        package_name: Affected package, when reported
        package_version: Affected package version, when reported
        score: CVSS or Inspector score, when reported
        description: Short description of the vulnerability
        uri: Link to the vulnerability advisory
    """

    vulnerability_id: str
    severity: str
    package_name: Optional[str] = None
    package_version: Optional[str] = None
    score: Optional[float] = None
    description: Optional[str] = None
    uri: Optional[str] = None

    @property
    def level(self) -> Severity:
        """Normalized severity."""
        return Severity.parse(self.severity)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.vulnerability_id,
            "severity": self.level.value,
            "package_name": self.package_name,
            "package_version": self.package_version,
            "score": self.score,
            "description": self.description,
            "uri": self.uri,
        }


@dataclass(frozen=True)
class FindingsPage:
    """One page of findings plus the cursor for the next page."""

    findings: list[FindingRecord] = field(default_factory=list)
    next_token: Optional[str] = None


@dataclass(frozen=True)
class Verdict:
    """
    Pass/fail decision for a scanned image.

    Attributes:
        failing_count: Unignored findings at or above the threshold
        threshold: Configured fail threshold
    """

    failing_count: int
    threshold: Severity

    @property
    def passed(self) -> bool:
        """True when no unignored finding reaches the threshold."""
        return self.failing_count == 0

    @property
    def failed(self) -> bool:
        return not self.passed


@dataclass(frozen=True)
class ScanReport:
    """
    Complete outcome of gating one image.

    Attributes:
        repository: Repository name
        tag: Image tag
        snapshot: Terminal scan snapshot
        totals: Counts over all findings
        ignored: Counts over findings matched by the ignore list
        verdict: Threshold decision
        findings: Full finding list (empty unless fetched)
        findings_fetched: Whether the full finding list was enumerated
        ignore_list: Identifiers the operator asked to ignore
        missing_ignores: Ignore-list entries that matched no finding
    """

    repository: str
    tag: str
    snapshot: ScanSnapshot
    totals: SeverityCounts
    ignored: SeverityCounts
    verdict: Verdict
    findings: list[FindingRecord] = field(default_factory=list)
    findings_fetched: bool = False
    ignore_list: list[str] = field(default_factory=list)
    missing_ignores: list[str] = field(default_factory=list)

    @property
    def image(self) -> str:
        return f"{self.repository}:{self.tag}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "repository": self.repository,
            "tag": self.tag,
            "image_digest": self.snapshot.image_digest,
            "scan_status": self.snapshot.status,
            "counts": self.totals.to_dict(),
            "ignored": self.ignored.to_dict(),
            "fail_threshold": self.verdict.threshold.value,
            "failing_count": self.verdict.failing_count,
            "passed": self.verdict.passed,
            "ignore_list": list(self.ignore_list),
            "missing_ignores": list(self.missing_ignores),
            "findings": [finding.to_dict() for finding in self.findings],
        }
