"""
Cancellation support for long-running waits.

A CancellationToken combines an explicit cancel() with an optional
wall-clock deadline, so the pipeline that invokes the gate can bound
how long it waits on a remote scan.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Cooperative cancellation signal with an optional deadline.

    The clock is injectable so deadline behaviour can be tested without
    real time passing.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize token.

        Args:
            timeout: Seconds from now until the token expires (None or 0 disables)
            clock: Monotonic clock returning seconds
        """
        self._event = threading.Event()
        self._clock = clock
        self._reason: Optional[str] = None
        self.deadline = clock() + timeout if timeout else None

    def cancel(self, reason: str = "cancelled") -> None:
        """Request cancellation."""
        if not self._event.is_set():
            logger.debug(f"Cancellation requested: {reason}")
            self._reason = reason
            self._event.set()

    @property
    def reason(self) -> Optional[str]:
        """Why the token is cancelled, or None while it is still live."""
        if self._event.is_set():
            return self._reason
        if self._deadline_passed():
            return "timed out"
        return None

    def is_cancelled(self) -> bool:
        """Whether cancel() was called or the deadline has passed."""
        return self._event.is_set() or self._deadline_passed()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - self._clock())

    def wait(self, seconds: float) -> None:
        """
        Sleep for up to seconds, returning early on cancellation.

        Never sleeps past the deadline.
        """
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        self._event.wait(seconds)

    def _deadline_passed(self) -> bool:
        return self.deadline is not None and self._clock() >= self.deadline
