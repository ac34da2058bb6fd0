"""
Poll driver for remote image scans.

Drives a scan from "never requested" to a terminal state as an explicit
state machine. Sleep and cancellation are injected so the loop can be
exercised deterministically in tests.
"""

import logging
from typing import Callable, Optional

from constants import POLL_INTERVAL_SECONDS
from core.cancellation import CancellationToken
from core.exceptions import (
    ScanCancelledException,
    ScanFailedException,
    UnrecognizedScanStateException,
)
from core.models import ScanSnapshot, ScanState
from core.scanner_interface import ScanClient

logger = logging.getLogger(__name__)


class ScanPoller:
    """
    Waits for a remote image scan to reach a terminal state.

    Issues at most one start-scan request over the lifetime of the
    instance, and none when the service already knows about a scan.
    """

    def __init__(
        self,
        client: ScanClient,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        cancel_token: Optional[CancellationToken] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize poller.

        Args:
            client: Scan service client
            poll_interval: Seconds to wait between status polls
            cancel_token: Cancellation signal checked before every wait
            sleep: Sleep function (defaults to a cancellable wait on the token)
        """
        self.client = client
        self.poll_interval = poll_interval
        self.cancel_token = cancel_token or CancellationToken()
        self._sleep = sleep or self.cancel_token.wait
        self.scan_requested = False
        self.poll_count = 0

    def resolve(self, repository: str, tag: str) -> tuple[ScanState, ScanSnapshot]:
        """
        Wait until the scan for an image completes.

        Args:
            repository: Repository name
            tag: Image tag

        Returns:
            Tuple of (ScanState.COMPLETE, terminal snapshot)

        Raises:
            ScanFailedException: If the service reports the scan failed
            UnrecognizedScanStateException: If polling ends on an unknown status
            ScanCancelledException: If the cancel token fires while waiting
            TransientFetchException: If a status request fails
        """
        image = f"{repository}:{tag}"
        snapshot = self._poll(repository, tag)
        state = self._transition(image, ScanState.NOT_REQUESTED, snapshot)

        if state is ScanState.NOT_REQUESTED:
            self._request_scan(repository, tag)
            state = ScanState.PENDING
            delay_next_poll = False
        else:
            delay_next_poll = True

        while state.is_waiting:
            if self.cancel_token.is_cancelled():
                logger.debug(f"Scan wait for {image} ended in state {ScanState.CANCELLED.value}")
                raise ScanCancelledException(image, self.cancel_token.reason or "cancelled")

            if delay_next_poll:
                self._sleep(self.poll_interval)
                if self.cancel_token.is_cancelled():
                    raise ScanCancelledException(image, self.cancel_token.reason or "cancelled")
            delay_next_poll = True

            logger.info(f"Polling for image scan findings of {image}...")
            polled = self._poll(repository, tag)
            if polled is not None:
                snapshot = polled
            state = self._transition(image, state, polled)

        if state is not ScanState.COMPLETE:
            raise UnrecognizedScanStateException(
                image, snapshot.status if snapshot else None, snapshot
            )

        logger.debug(f"Scan of {image} complete after {self.poll_count} status polls")
        return state, snapshot

    def _poll(self, repository: str, tag: str) -> Optional[ScanSnapshot]:
        self.poll_count += 1
        return self.client.get_scan_snapshot(repository, tag)

    def _request_scan(self, repository: str, tag: str) -> None:
        """Issue the single start-scan request allowed per poller."""
        if self.scan_requested:
            logger.debug(f"Scan of {repository}:{tag} already requested, not starting another")
            return
        logger.info(f"Requesting image scan of {repository}:{tag}")
        self.client.start_scan(repository, tag)
        self.scan_requested = True
        logger.debug("Requested image scan")

    def _transition(
        self,
        image: str,
        current: ScanState,
        snapshot: Optional[ScanSnapshot],
    ) -> ScanState:
        """
        Compute the next state from an observed snapshot.

        A missing snapshot keeps a requested scan PENDING (the service has
        not made it visible yet) and leaves an unrequested one NOT_REQUESTED.
        """
        if snapshot is None:
            if current is ScanState.NOT_REQUESTED:
                return ScanState.NOT_REQUESTED
            return ScanState.PENDING

        logger.debug(f"Scan status: {snapshot.status}")
        state = snapshot.state
        if state is ScanState.FAILED:
            raise ScanFailedException(image, snapshot.description)
        if state is None:
            raise UnrecognizedScanStateException(image, snapshot.status, snapshot)
        return state
