"""
Logging helper utilities for the scan gate CLI.

Provides consistent formatting for error messages, warnings, and informational output.
"""

import logging
from typing import List, Optional


def _log_section(
    log,
    title: str,
    messages: List[str],
    width: int,
) -> None:
    log("=" * width)
    log(title)
    for message in messages:
        log(message or "")
    log("=" * width)


def log_error_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = 60
) -> None:
    """
    Log an error section with separator lines and multiple messages.

    Args:
        title: Title message for the error section
        messages: List of error messages to display
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters

    Examples:
        >>> log_error_section(
        ...     "Image scan failed",
        ...     ["Image scan failed for myorg/app:1.0: UnsupportedImageError"]
        ... )
        ============================================================
        Image scan failed
        Image scan failed for myorg/app:1.0: UnsupportedImageError
        ============================================================
    """
    if logger is None:
        logger = logging.getLogger()
    _log_section(logger.error, title, messages, width)


def log_warning_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = 60
) -> None:
    """
    Log a warning section with separator lines and multiple messages.

    Args:
        title: Title message for the warning section
        messages: List of warning messages to display
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters
    """
    if logger is None:
        logger = logging.getLogger()
    _log_section(logger.warning, title, messages, width)


def log_info_header(
    message: str,
    logger: Optional[logging.Logger] = None,
    width: int = 60,
    char: str = "="
) -> None:
    """
    Log an informational header with separator lines.

    Examples:
        >>> log_info_header("ECR Scan Gate")
        ============================================================
        ECR Scan Gate
        ============================================================
    """
    if logger is None:
        logger = logging.getLogger()

    logger.info(char * width)
    logger.info(message)
    logger.info(char * width)
