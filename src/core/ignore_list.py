"""
Ignore-list parsing and reconciliation.

Operators exclude known vulnerabilities by identifier. Every excluded
identifier is expected to show up in the scan findings; entries that
don't are reported, and fail the run unless the policy says "warn".
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from constants import DEFAULT_MISSED_IGNORE_POLICY
from core.exceptions import IgnoreListMismatchException
from core.models import FindingRecord
from utils.logging_helpers import log_warning_section

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class IgnoreReconciliation:
    """
    Result of matching an ignore list against scan findings.

    Attributes:
        matched: Findings whose identifier is on the ignore list
        missing: Ignore-list identifiers that matched no finding
    """

    matched: list[FindingRecord] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every ignore-list entry matched at least one finding."""
        return not self.missing


def parse_ignore_list(value: Optional[Union[str, Iterable[str]]]) -> list[str]:
    """
    Parse vulnerability identifiers from free-form input.

    Commas, spaces and newlines all separate entries; empty entries are
    dropped and duplicates keep their first position.

    Args:
        value: String, iterable of strings, or None

    Returns:
        Unique identifiers in input order

    Examples:
        >>> parse_ignore_list("CVE-2021-1, CVE-2021-2\\nCVE-2021-3")
        ['CVE-2021-1', 'CVE-2021-2', 'CVE-2021-3']
        >>> parse_ignore_list(None)
        []
    """
    if not value:
        return []
    if isinstance(value, str):
        value = [value]

    identifiers = []
    for item in value:
        for token in _SEPARATORS.split(item or ""):
            if token and token not in identifiers:
                identifiers.append(token)
    return identifiers


def reconcile(
    ignore_list: Iterable[str],
    findings: Iterable[FindingRecord],
) -> IgnoreReconciliation:
    """
    Match ignore-list identifiers against findings by exact string equality.

    Args:
        ignore_list: Identifiers to ignore
        findings: All findings of the scan

    Returns:
        IgnoreReconciliation with matched findings (in finding order) and
        missing identifiers (in ignore-list order)
    """
    ignore_list = list(ignore_list)
    wanted = set(ignore_list)
    matched = []
    seen = set()
    for finding in findings:
        if finding.vulnerability_id in wanted:
            matched.append(finding)
            seen.add(finding.vulnerability_id)

    missing = [identifier for identifier in ignore_list if identifier not in seen]
    return IgnoreReconciliation(matched=matched, missing=missing)


def apply_missed_ignore_policy(
    reconciliation: IgnoreReconciliation,
    policy: str = DEFAULT_MISSED_IGNORE_POLICY,
) -> None:
    """
    Report ignore-list entries that matched nothing.

    Args:
        reconciliation: Result of reconcile()
        policy: "error" to fail, "warn" to log and continue

    Raises:
        IgnoreListMismatchException: If entries are missing and policy is "error"
    """
    if reconciliation.complete:
        return

    if policy == "error":
        for identifier in reconciliation.missing:
            logger.error(f"Ignored vulnerability not found in scan findings: {identifier}")
        raise IgnoreListMismatchException(reconciliation.missing)

    log_warning_section(
        f"{len(reconciliation.missing)} ignore-list entries were not found in scan findings; "
        "continuing because missed ignores are set to warn",
        reconciliation.missing,
        logger=logger,
    )


__all__ = [
    "IgnoreReconciliation",
    "parse_ignore_list",
    "reconcile",
    "apply_missed_ignore_policy",
]
