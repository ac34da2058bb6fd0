"""
Exception hierarchy for ECR Scan Gate.

Provides a standardized exception hierarchy for consistent error handling
across the application. All exceptions inherit from ScanGateException.
"""


class ScanGateException(Exception):
    """Base exception for all ECR Scan Gate errors."""
    pass


class ConfigurationException(ScanGateException):
    """Configuration is invalid or missing."""

    def __init__(self, message: str, field: str = None):
        """
        Initialize configuration exception.

        Args:
            message: Validation error message
            field: Configuration field that failed validation (optional)
        """
        self.field = field
        if field:
            super().__init__(f"Invalid configuration for {field}: {message}")
        else:
            super().__init__(f"Invalid configuration: {message}")


class ScanFailedException(ScanGateException):
    """The remote service reported that the image scan failed."""

    def __init__(self, image: str, description: str = None):
        """
        Initialize scan failure exception.

        Args:
            image: Image reference (repository:tag) that failed to scan
            description: Failure description provided by the service
        """
        self.image = image
        self.description = description
        super().__init__(
            f"Image scan failed for {image}: {description or 'no description provided'}"
        )


class UnrecognizedScanStateException(ScanGateException):
    """Polling ended on a scan status outside the known terminal set."""

    def __init__(self, image: str, status: str, snapshot=None):
        """
        Initialize unrecognized state exception.

        Args:
            image: Image reference (repository:tag) being scanned
            status: Raw status string reported by the service
            snapshot: Last ScanSnapshot observed, kept for diagnosis
        """
        self.image = image
        self.status = status
        self.snapshot = snapshot
        super().__init__(
            f"Unrecognized scan status {status!r} for {image}; last snapshot: {snapshot!r}"
        )


class IgnoreListMismatchException(ScanGateException):
    """One or more ignore-list entries matched no finding."""

    def __init__(self, missing: list[str]):
        """
        Initialize ignore-list mismatch exception.

        Args:
            missing: Ignore-list identifiers that were never observed
        """
        self.missing = list(missing)
        super().__init__(
            f"{len(self.missing)} ignored vulnerabilities were not found in the scan findings: "
            f"{', '.join(self.missing)}"
        )


class ThresholdExceededException(ScanGateException):
    """Unignored vulnerabilities were found at or above the fail threshold."""

    def __init__(self, failing_count: int, threshold: str):
        """
        Initialize threshold exception.

        Args:
            failing_count: Number of unignored vulnerabilities at or above threshold
            threshold: Configured fail threshold
        """
        self.failing_count = failing_count
        self.threshold = threshold
        super().__init__(
            f"Detected {failing_count} vulnerabilities with severity >= {threshold} "
            f"(the currently configured fail_threshold)."
        )


class ScanCancelledException(ScanGateException):
    """Waiting for the scan was cancelled or ran out of time."""

    def __init__(self, image: str, reason: str = "cancelled"):
        """
        Initialize cancellation exception.

        Args:
            image: Image reference (repository:tag) being waited on
            reason: Why waiting stopped
        """
        self.image = image
        self.reason = reason
        super().__init__(f"Stopped waiting for scan of {image}: {reason}")


class IntegrationException(ScanGateException):
    """External integration/API failed."""

    def __init__(self, service: str, reason: str):
        """
        Initialize integration exception.

        Args:
            service: Service name that failed
            reason: Reason for failure
        """
        self.service = service
        self.reason = reason
        super().__init__(f"{service} integration failed: {reason}")


class TransientFetchException(IntegrationException):
    """A single remote call failed for a reason other than "scan not found"."""

    def __init__(self, service: str, operation: str, reason: str):
        """
        Initialize fetch exception.

        Args:
            service: Service name that failed
            operation: Remote operation that was attempted
            reason: Reason for failure
        """
        self.operation = operation
        super().__init__(service, f"{operation} failed: {reason}")


class OutputException(ScanGateException):
    """Output generation failed."""

    def __init__(self, format_type: str, reason: str):
        """
        Initialize output exception.

        Args:
            format_type: Output format (html, xlsx, etc.)
            reason: Reason for failure
        """
        self.format_type = format_type
        self.reason = reason
        super().__init__(f"Failed to generate {format_type} output: {reason}")


__all__ = [
    "ScanGateException",
    "ConfigurationException",
    "ScanFailedException",
    "UnrecognizedScanStateException",
    "IgnoreListMismatchException",
    "ThresholdExceededException",
    "ScanCancelledException",
    "IntegrationException",
    "TransientFetchException",
    "OutputException",
]
