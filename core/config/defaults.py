# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for backend clients and reporting
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the backend HTTP clients and the status reporter.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ClientDefaults:
    """
    Defaults for orchestration backend HTTP clients.

    Controls request timeout and REST api-versions.
    """
    # Total request timeout (seconds)
    timeout_seconds: float = 30.0

    # api-version query values
    build_api_version: str = "5.0"
    plan_api_version: str = "5.0-preview.1"
    release_api_version: str = "5.0"

    @classmethod
    def from_env(cls) -> "ClientDefaults":
        """Create from environment variables."""
        return cls(
            timeout_seconds=float(os.getenv("STATUS_HTTP_TIMEOUT", 30.0)),
            build_api_version=os.getenv("STATUS_API_VERSION", "5.0"),
            plan_api_version=os.getenv("STATUS_PLAN_API_VERSION", "5.0-preview.1"),
            release_api_version=os.getenv("STATUS_RELEASE_API_VERSION", "5.0"),
        )


@dataclass(frozen=True)
class ReportingDefaults:
    """
    Defaults for the job status reporter.

    timeline_record_name switches record selection from "the job's
    record and its children" to "every record with this name".
    """
    timeline_record_name: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "human"  # "human" or "json"

    @classmethod
    def from_env(cls) -> "ReportingDefaults":
        """Create from environment variables."""
        return cls(
            timeline_record_name=os.getenv("STATUS_TIMELINE_RECORD_NAME") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "human"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    client: ClientDefaults = field(default_factory=ClientDefaults)
    reporting: ReportingDefaults = field(default_factory=ReportingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            client=ClientDefaults.from_env(),
            reporting=ReportingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ClientDefaults",
    "ReportingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
