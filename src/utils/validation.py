"""
Input validation utilities for ECR Scan Gate.

Provides validation functions for image coordinates, severity thresholds
and policy values, so that bad configuration fails before any remote call.
"""

import re
from typing import Optional

from constants import MISSED_IGNORE_POLICIES
from core.exceptions import ConfigurationException
from core.models import Severity

_REPOSITORY_PATTERN = re.compile(
    r"^(?:[a-z0-9]+(?:[._-][a-z0-9]+)*/)*[a-z0-9]+(?:[._-][a-z0-9]+)*$"
)
_TAG_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]{0,127}$")
_REGISTRY_ID_PATTERN = re.compile(r"^[0-9]{12}$")


def validate_repository_name(repository: Optional[str], field_name: str = "repository") -> str:
    """
    Validate and normalize an ECR repository name.

    Args:
        repository: Repository name (e.g. "myorg/myimage")
        field_name: Field name for error messages

    Returns:
        Normalized repository name

    Raises:
        ConfigurationException: If the name is empty or malformed

    Examples:
        >>> validate_repository_name("myorg/myimage")
        'myorg/myimage'
        >>> validate_repository_name("MyOrg")
        ConfigurationException: ...
    """
    if not repository or not repository.strip():
        raise ConfigurationException("Repository cannot be empty", field_name)

    repository = repository.strip()
    if len(repository) > 256 or not _REPOSITORY_PATTERN.match(repository):
        raise ConfigurationException(
            f"Invalid repository name format: {repository}", field_name
        )
    return repository


def validate_tag(tag: Optional[str], field_name: str = "tag") -> str:
    """
    Validate and normalize an image tag.

    Raises:
        ConfigurationException: If the tag is empty or malformed
    """
    if not tag or not tag.strip():
        raise ConfigurationException("Tag cannot be empty", field_name)

    tag = tag.strip()
    if not _TAG_PATTERN.match(tag):
        raise ConfigurationException(f"Invalid image tag format: {tag}", field_name)
    return tag


def validate_registry_id(registry_id: Optional[str]) -> Optional[str]:
    """Validate an optional AWS account ID owning the registry."""
    if not registry_id or not registry_id.strip():
        return None

    registry_id = registry_id.strip()
    if not _REGISTRY_ID_PATTERN.match(registry_id):
        raise ConfigurationException(
            f"Registry ID must be a 12-digit AWS account ID, got {registry_id}",
            "registry_id",
        )
    return registry_id


def validate_fail_threshold(threshold) -> Severity:
    """
    Validate the fail threshold.

    Accepts critical, high, medium, low or informational in any case.
    INDETERMINATE has no rank and is rejected.

    Args:
        threshold: Threshold name or Severity

    Returns:
        Ranked Severity

    Raises:
        ConfigurationException: If the threshold is not a ranked level

    Examples:
        >>> validate_fail_threshold("Medium")
        <Severity.MEDIUM: 'MEDIUM'>
    """
    if isinstance(threshold, Severity):
        level = threshold
    else:
        label = (threshold or "").strip().upper()
        level = Severity.__members__.get(label)

    if level is None or level.rank is None:
        valid = ", ".join(ranked.value.lower() for ranked in Severity.threshold_levels())
        raise ConfigurationException(
            f"Fail threshold {threshold!r} is invalid. Valid values: {valid}",
            "fail_threshold",
        )
    return level


def validate_missed_ignore_policy(policy: Optional[str]) -> str:
    """
    Validate the policy for ignore-list entries that match nothing.

    Raises:
        ConfigurationException: If the policy is not "error" or "warn"
    """
    normalized = (policy or "").strip().lower()
    if normalized not in MISSED_IGNORE_POLICIES:
        raise ConfigurationException(
            f"Missed ignore policy {policy!r} is invalid. "
            f"Valid values: {', '.join(MISSED_IGNORE_POLICIES)}",
            "missed_ignore_policy",
        )
    return normalized


def validate_positive_number(
    value: float,
    field_name: str,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    allow_zero: bool = True,
) -> float:
    """
    Validate numeric value is within acceptable range.

    Args:
        value: Value to validate
        field_name: Field name for error messages
        min_value: Minimum acceptable value
        max_value: Maximum acceptable value (optional)
        allow_zero: Whether exactly zero is acceptable

    Returns:
        Validated value

    Raises:
        ConfigurationException: If value is out of range
    """
    if value < min_value:
        raise ConfigurationException(
            f"Value must be >= {min_value}, got {value}",
            field_name
        )

    if not allow_zero and value == 0:
        raise ConfigurationException("Value must be greater than 0", field_name)

    if max_value is not None and value > max_value:
        raise ConfigurationException(
            f"Value must be <= {max_value}, got {value}",
            field_name
        )

    return value


__all__ = [
    "validate_repository_name",
    "validate_tag",
    "validate_registry_id",
    "validate_fail_threshold",
    "validate_missed_ignore_policy",
    "validate_positive_number",
]
