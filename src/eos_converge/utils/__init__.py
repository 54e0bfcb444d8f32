"""Utility modules for retries, logging and audit trails."""
from .connection import with_retry, RETRYABLE_EXCEPTIONS
from .logging_config import (
    setup_logging,
    timed,
    timed_section,
    perf_logger,
)
from .audit_log import ChangeTracker, get_recent_changes, setup_audit_logging

__all__ = [
    "with_retry",
    "RETRYABLE_EXCEPTIONS",
    "setup_logging",
    "timed",
    "timed_section",
    "perf_logger",
    "ChangeTracker",
    "get_recent_changes",
    "setup_audit_logging",
]
