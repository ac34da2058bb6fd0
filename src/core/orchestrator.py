"""
Orchestrates the scan gate workflow for a single image.
"""

import logging
from typing import Optional

from core.aggregator import aggregate, fetch_all, tally_ignored
from core.cancellation import CancellationToken
from core.config import GateConfig
from core.ignore_list import apply_missed_ignore_policy, reconcile
from core.models import ScanReport, SeverityCounts
from core.poller import ScanPoller
from core.scanner_interface import ScanClient
from core.threshold import evaluate

logger = logging.getLogger(__name__)


class ScanGate:
    """
    Runs the gate pipeline: wait for the scan, count, reconcile, evaluate.

    The verdict is returned rather than enforced so callers can publish
    outputs before failing the build.
    """

    def __init__(
        self,
        client: ScanClient,
        config: GateConfig,
        poller: Optional[ScanPoller] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        """
        Initialize the gate.

        Args:
            client: Scan service client
            config: Validated gate configuration
            poller: Poll driver (built from config when omitted)
            cancel_token: Cancellation signal for the poll loop
        """
        self.client = client
        self.config = config
        self.poller = poller or ScanPoller(
            client,
            poll_interval=config.poll_interval,
            cancel_token=cancel_token or CancellationToken(timeout=config.timeout),
        )

    def run(self) -> ScanReport:
        """
        Execute the gate for the configured image.

        Returns:
            ScanReport with counts, findings and verdict

        Raises:
            ScanFailedException: If the remote scan failed
            UnrecognizedScanStateException: If the scan ended in an unknown state
            ScanCancelledException: If waiting was cancelled
            IgnoreListMismatchException: If ignore entries are missing under "error"
            TransientFetchException: If a remote call failed
        """
        config = self.config
        repository, tag = config.repository, config.tag
        logger.debug(f"Repository:{repository}, Tag:{tag}")

        _, snapshot = self.poller.resolve(repository, tag)
        totals = aggregate(snapshot)

        findings = []
        ignored = SeverityCounts()
        missing = []
        if config.needs_findings:
            findings = list(fetch_all(self.client, repository, tag))
            logger.debug(f"Fetched {len(findings)} findings for {repository}:{tag}")

        if config.ignore_list:
            reconciliation = reconcile(config.ignore_list, findings)
            apply_missed_ignore_policy(reconciliation, config.missed_ignore_policy)
            ignored = tally_ignored(reconciliation.matched)
            missing = reconciliation.missing
            logger.info(
                f"Ignoring {ignored.total} findings matching "
                f"{len(config.ignore_list) - len(missing)} ignore-list entries"
            )

        verdict = evaluate(totals, ignored, config.fail_threshold)

        return ScanReport(
            repository=repository,
            tag=tag,
            snapshot=snapshot,
            totals=totals,
            ignored=ignored,
            verdict=verdict,
            findings=findings,
            findings_fetched=config.needs_findings,
            ignore_list=list(config.ignore_list),
            missing_ignores=missing,
        )
