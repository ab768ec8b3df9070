"""
Ticketing Core Config — Public API
====================================
Boot-time platform parameters.
Doctrine: No hardcoded policy values in engine logic.
"""

from core.config.rules import (
    DEFAULT_BLOCK_INTERVAL_SECONDS,
    DEFAULT_MIN_TICKET_PRICE,
    DEFAULT_PLATFORM_FEE_PERCENT,
    TicketingConfig,
)

__all__ = [
    "TicketingConfig",
    "DEFAULT_MIN_TICKET_PRICE",
    "DEFAULT_PLATFORM_FEE_PERCENT",
    "DEFAULT_BLOCK_INTERVAL_SECONDS",
]
