# ============================================================================
# ERRORS
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Foundation - Typed error outcomes
# PURPOSE: Exceptions raised by clients, validators and reporters
# CREATED: 19 OCT 2026
# ============================================================================
"""
Error taxonomy for status reporting.

An invalid session (parent build/release cancelled or deleted) is NOT
an exception: the validator returns False and the reporter logs and
returns. Everything below propagates unless stated otherwise.
"""

from typing import Any, Optional


class StatusReportingError(Exception):
    """Base class for status reporting errors."""
    pass


class UnsupportedHubError(StatusReportingError, ValueError):
    """Raised when a hub is neither Build nor Release. Never retried."""

    def __init__(self, hub: Any):
        self.hub = hub
        super().__init__(f"Hub {hub!r} is not supported")


class TransportError(StatusReportingError):
    """Raised when a backend call fails (non-2xx, connection error, timeout)."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ):
        self.status = status
        self.url = url
        super().__init__(message)


class PlanNotFoundError(TransportError):
    """
    Raised when the orchestration plan no longer exists.

    Only the progress log path treats this as benign.
    """
    pass


__all__ = [
    "StatusReportingError",
    "UnsupportedHubError",
    "TransportError",
    "PlanNotFoundError",
]
