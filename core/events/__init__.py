"""
Ticketing Event Journal — Public API
======================================
The journal seals truth. Projections are derived from it.
"""

from core.events.errors import (
    InvalidEventTypeFormat,
    JournalChainBrokenError,
    JournalError,
    UnknownEventTypeError,
)
from core.events.hashing import GENESIS_HASH, canonical_serialize, compute_event_hash
from core.events.journal import EventJournal, JournalEntry, verify_entries

__all__ = [
    "EventJournal",
    "JournalEntry",
    "verify_entries",
    "GENESIS_HASH",
    "canonical_serialize",
    "compute_event_hash",
    "JournalError",
    "InvalidEventTypeFormat",
    "UnknownEventTypeError",
    "JournalChainBrokenError",
]
