# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for status reporting.
"""

from core.config.defaults import (
    ClientDefaults,
    ReportingDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "ClientDefaults",
    "ReportingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
