"""
Ticketing Replay Engine
=========================
Projections are disposable; the journal is truth.
"""

from core.replay.errors import (
    ReplayChainBrokenError,
    ReplayError,
    UnknownReplayEventError,
)
from core.replay.journal_replayer import (
    KNOWN_EVENT_TYPES,
    ReplayResult,
    replay_journal,
)

__all__ = [
    "KNOWN_EVENT_TYPES",
    "ReplayChainBrokenError",
    "ReplayError",
    "ReplayResult",
    "UnknownReplayEventError",
    "replay_journal",
]
