"""
Configuration for a scan gate run.

Replaces loose argparse attributes with a strongly-typed object that is
validated before any remote call is made.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from constants import (
    DEFAULT_FAIL_THRESHOLD,
    DEFAULT_MISSED_IGNORE_POLICY,
    DEFAULT_TIMEOUT_SECONDS,
    POLL_INTERVAL_SECONDS,
)
from core.models import Severity


@dataclass
class GateConfig:
    """Settings that decide how an image is scanned and judged."""

    repository: str
    tag: str
    fail_threshold: Union[str, Severity] = DEFAULT_FAIL_THRESHOLD
    ignore_list: list[str] = field(default_factory=list)
    missed_ignore_policy: str = DEFAULT_MISSED_IGNORE_POLICY
    registry_id: Optional[str] = None
    region: Optional[str] = None
    proxy: Optional[str] = None
    poll_interval: float = POLL_INTERVAL_SECONDS
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    fetch_findings: bool = False

    def validate(self) -> "GateConfig":
        """
        Validate and normalize configuration values in place.

        Returns:
            self, for chaining

        Raises:
            ConfigurationException: If any value is invalid
        """
        from core.ignore_list import parse_ignore_list
        from utils.validation import (
            validate_fail_threshold,
            validate_missed_ignore_policy,
            validate_positive_number,
            validate_registry_id,
            validate_repository_name,
            validate_tag,
        )

        self.repository = validate_repository_name(self.repository)
        self.tag = validate_tag(self.tag)
        self.fail_threshold = validate_fail_threshold(self.fail_threshold)
        self.missed_ignore_policy = validate_missed_ignore_policy(self.missed_ignore_policy)
        self.ignore_list = parse_ignore_list(self.ignore_list)
        self.registry_id = validate_registry_id(self.registry_id)
        self.poll_interval = validate_positive_number(
            self.poll_interval, "poll_interval", allow_zero=False
        )
        self.timeout = validate_positive_number(self.timeout, "timeout")
        return self

    @property
    def needs_findings(self) -> bool:
        """Whether the full finding list must be enumerated."""
        return bool(self.ignore_list) or self.fetch_findings
