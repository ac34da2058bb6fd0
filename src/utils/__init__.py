"""Utility modules for validation, formatting and logging."""

from utils.formatting import format_count, format_score, format_severity
from utils.logging_helpers import log_error_section, log_info_header, log_warning_section

__all__ = [
    "format_count",
    "format_score",
    "format_severity",
    "log_error_section",
    "log_info_header",
    "log_warning_section",
]
