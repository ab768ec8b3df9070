"""
Ticketing Core Time — Explicit Height Clock Protocol
======================================================
Doctrine: NO clock reads inside engine logic.

Time is a monotonic block height supplied by the surrounding ledger.
The TransactionEngine reads the clock exactly once per command and
hands the height to the engine service.
"""

from __future__ import annotations

import time
from typing import Callable, Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class HeightClock(Protocol):
    """Injectable height source."""

    def current_height(self) -> int:
        """Return the current block height."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemHeightClock:
    """
    Production stand-in — derives height from wall-clock seconds.

    height = (now - genesis_epoch) // block_interval_seconds
    """

    def __init__(
        self,
        block_interval_seconds: int,
        *,
        genesis_epoch: float = 0.0,
        time_source: Callable[[], float] = time.time,
    ) -> None:
        if block_interval_seconds <= 0:
            raise ValueError("block_interval_seconds must be positive.")
        self._interval = block_interval_seconds
        self._genesis = genesis_epoch
        self._time_source = time_source

    def current_height(self) -> int:
        elapsed = self._time_source() - self._genesis
        return max(0, int(elapsed // self._interval))


class FixedHeightClock:
    """
    Test clock — returns a fixed height until advanced.

    Usage:
        clock = FixedHeightClock(100)
        clock.advance(10)
        assert clock.current_height() == 110
    """

    def __init__(self, height: int = 0) -> None:
        if not isinstance(height, int) or height < 0:
            raise ValueError("FixedHeightClock requires a non-negative int height.")
        self._height = height

    def current_height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> None:
        """Mine `blocks` empty blocks. Height never decreases."""
        if blocks < 0:
            raise ValueError("Height is monotonic; cannot advance by a negative amount.")
        self._height += blocks
