"""
Ticketing Bootstrap — Platform Wiring + Self-Defense
======================================================
Builds the platform and ensures it never starts in an unsafe state.
"""

from core.bootstrap.errors import SystemBootstrapError
from core.bootstrap.platform import TicketingPlatform, build_ticketing_platform
from core.bootstrap.self_check import run_bootstrap_checks

__all__ = [
    "SystemBootstrapError",
    "TicketingPlatform",
    "build_ticketing_platform",
    "run_bootstrap_checks",
]
