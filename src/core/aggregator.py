"""
Findings aggregation.

Turns the summary counts of a terminal scan snapshot and the raw finding
records into SeverityCounts, and pages through the full finding list.
"""

import logging
from functools import reduce
from typing import Iterable, Iterator, Optional

from constants import FINDINGS_PAGE_SIZE
from core.models import FindingRecord, ScanSnapshot, Severity, SeverityCounts
from core.scanner_interface import ScanClient

logger = logging.getLogger(__name__)


def aggregate(snapshot: ScanSnapshot) -> SeverityCounts:
    """
    Build severity counts from a snapshot's summary counts.

    Absent buckets count as zero. Labels outside the six known levels
    (e.g. UNTRIAGED from enhanced scanning) are folded into INDETERMINATE.

    Args:
        snapshot: Terminal scan snapshot

    Returns:
        SeverityCounts over all findings
    """
    counts = SeverityCounts()
    for label, count in (snapshot.severity_counts or {}).items():
        severity = Severity.parse(label)
        if severity is Severity.INDETERMINATE and label.upper() != Severity.INDETERMINATE.value:
            logger.debug(f"Counting {count} findings with severity {label!r} as {severity.value}")
        counts = counts.increment(severity, int(count or 0))
    return counts


def fetch_all(
    client: ScanClient,
    repository: str,
    tag: str,
    page_size: int = FINDINGS_PAGE_SIZE,
) -> Iterator[FindingRecord]:
    """
    Lazily enumerate every finding of a completed scan.

    Follows the continuation cursor until the service stops returning one,
    yielding records in the order the service returns them.

    Args:
        client: Scan service client
        repository: Repository name
        tag: Image tag
        page_size: Findings requested per page

    Yields:
        FindingRecord for each finding
    """
    next_token: Optional[str] = None
    pages = 0
    while True:
        page = client.list_findings_page(repository, tag, next_token, page_size)
        pages += 1
        logger.debug(f"Fetched findings page {pages} ({len(page.findings)} findings)")
        yield from page.findings
        next_token = page.next_token
        if not next_token:
            break


def tally_ignored(records: Iterable[FindingRecord]) -> SeverityCounts:
    """
    Count findings by normalized severity.

    Records with an unrecognized severity count as INDETERMINATE.

    Args:
        records: Findings matched by the ignore list

    Returns:
        SeverityCounts over the given records
    """
    return reduce(
        lambda counts, record: counts.increment(record.level),
        records,
        SeverityCounts(),
    )


__all__ = [
    "aggregate",
    "fetch_all",
    "tally_ignored",
]
