"""
Formatting utilities for scan gate output.

Provides common formatting functions for counts, scores and other display values.
"""

from typing import Optional


def format_count(num: int, width: int = 3) -> str:
    """
    Right-align a count for the console summary table.

    Args:
        num: Count to format
        width: Minimum field width

    Returns:
        Padded count string

    Examples:
        >>> format_count(7)
        '  7'
        >>> format_count(1234)
        '1234'
    """
    return str(num).rjust(width)


def format_score(score: Optional[float]) -> str:
    """
    Format a vulnerability score, or an empty string when absent.

    Examples:
        >>> format_score(7.5)
        '7.5'
        >>> format_score(None)
        ''
    """
    if score is None:
        return ""
    return f"{score:.1f}"


def format_severity(label: str) -> str:
    """
    Title-case a severity label for display.

    Examples:
        >>> format_severity("INFORMATIONAL")
        'Informational'
    """
    return label.capitalize()
