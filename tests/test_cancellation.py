"""Tests for CancellationToken."""

from core.cancellation import CancellationToken


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestCancellationToken:
    """Test explicit cancellation and deadlines."""

    def test_live_by_default(self):
        """Test a new token without timeout is never cancelled."""
        token = CancellationToken()

        assert not token.is_cancelled()
        assert token.reason is None
        assert token.remaining() is None

    def test_zero_timeout_disables_deadline(self):
        """Test timeout 0 means wait forever."""
        token = CancellationToken(timeout=0)

        assert token.deadline is None

    def test_cancel_records_first_reason(self):
        """Test only the first cancel reason is kept."""
        token = CancellationToken()

        token.cancel("received SIGTERM")
        token.cancel("received SIGINT")

        assert token.is_cancelled()
        assert token.reason == "received SIGTERM"

    def test_deadline_expires(self):
        """Test the token reports a timeout once the deadline passes."""
        clock = FakeClock()
        token = CancellationToken(timeout=30, clock=clock)

        clock.now += 29
        assert not token.is_cancelled()
        assert token.remaining() == 1

        clock.now += 1
        assert token.is_cancelled()
        assert token.reason == "timed out"
        assert token.remaining() == 0.0

    def test_wait_returns_immediately_when_cancelled(self):
        """Test wait does not block on a cancelled token."""
        token = CancellationToken()
        token.cancel()

        token.wait(60)

        assert token.is_cancelled()

    def test_wait_capped_at_deadline(self):
        """Test wait never sleeps past an expired deadline."""
        clock = FakeClock()
        token = CancellationToken(timeout=5, clock=clock)
        clock.now += 10

        token.wait(60)

        assert token.reason == "timed out"
