"""
Audit events for user-facing operations.

Searches, uploads, listings and administrative actions are written to the
"pdfsearch.audit" logger. Where they end up is decided by the configured
handlers; a failing handler never breaks the request that emitted the event.
"""

from typing import List, Optional

from .logger import AUDIT_LOGGER, get_logger

audit_logger = get_logger(AUDIT_LOGGER)


def log_search(user_id: str, query: str, results: int, duration_ms: float) -> None:
    """Record a search request and its outcome."""
    audit_logger.info(
        "search user=%s query=%r results=%d duration_ms=%.1f",
        user_id, query, results, duration_ms
    )


def log_upload(user_id: str, filename: str, tags: List[str], size: int) -> None:
    """Record a successful upload."""
    audit_logger.info(
        "upload user=%s filename=%r size=%d tags=%s",
        user_id, filename, size, ",".join(tags)
    )


def log_list(user_id: str, results: int) -> None:
    """Record a document listing."""
    audit_logger.info("list_docs user=%s results=%d", user_id, results)


def log_admin(user_id: str, action: str, target: Optional[str] = None) -> None:
    """Record an administrative or destructive action."""
    audit_logger.info("admin user=%s action=%s target=%s", user_id, action, target or "-")
