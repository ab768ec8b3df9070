"""
Ticketing Django Adapter Wiring
===============================
Builds the TicketingPlatform for the live server from settings.TICKETING.

This module is adapter-only glue:
- no core contract changes
- in-memory journal, projections and value ledger
- one platform per process
"""

from __future__ import annotations

import threading

from django.conf import settings

from core.bootstrap import TicketingPlatform, build_ticketing_platform
from core.config import TicketingConfig

_PLATFORM_LOCK = threading.Lock()
_PLATFORM: TicketingPlatform | None = None


def _create_platform() -> TicketingPlatform:
    config = TicketingConfig.from_mapping(getattr(settings, "TICKETING", {}))
    return build_ticketing_platform(config)


def build_platform() -> TicketingPlatform:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _PLATFORM
    with _PLATFORM_LOCK:
        if _PLATFORM is None:
            _PLATFORM = _create_platform()
        return _PLATFORM


def install_platform(platform: TicketingPlatform | None) -> None:
    """Replace the process platform (tests inject one with a fixed clock)."""
    global _PLATFORM
    with _PLATFORM_LOCK:
        _PLATFORM = platform


def reset_platform() -> None:
    install_platform(None)
