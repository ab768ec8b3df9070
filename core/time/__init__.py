"""
Ticketing Core Time — Public API
==================================
Explicit height clock protocol.
Doctrine: NO clock reads in engine logic.
"""

from core.time.clock import FixedHeightClock, HeightClock, SystemHeightClock

__all__ = [
    "HeightClock",
    "SystemHeightClock",
    "FixedHeightClock",
]
