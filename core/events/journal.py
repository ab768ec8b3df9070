"""
Ticketing Event Journal — Append-Only, Hash-Chained
=====================================================
The journal is the single source of truth. Every accepted command
appends one or more entries; projection stores are derived from it.

Rules:
- Append-only during normal operation
- Every entry links to the previous one by hash
- Entries are applied to subscribed projections synchronously,
  in subscription order, inside the caller's transaction
- A projection failure propagates (the TransactionEngine rolls back)
- restore() exists only for transaction rollback
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Tuple

from core.events.errors import (
    InvalidEventTypeFormat,
    JournalChainBrokenError,
    UnknownEventTypeError,
)
from core.events.hashing import GENESIS_HASH, compute_event_hash

logger = logging.getLogger("ticketing.events")


class ProjectionProtocol(Protocol):
    def apply(self, event_type: str, payload: dict) -> None:
        ...


# ══════════════════════════════════════════════════════════════
# JOURNAL ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class JournalEntry:
    sequence: int
    event_id: uuid.UUID
    event_type: str
    source_engine: str
    actor_id: str
    command_id: uuid.UUID
    height: int
    payload: dict
    previous_hash: str
    event_hash: str

    def hash_body(self) -> dict:
        return entry_hash_body(
            sequence=self.sequence,
            event_type=self.event_type,
            actor_id=self.actor_id,
            height=self.height,
            payload=self.payload,
        )

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "source_engine": self.source_engine,
            "actor_id": self.actor_id,
            "command_id": str(self.command_id),
            "height": self.height,
            "payload": dict(self.payload),
            "previous_hash": self.previous_hash,
            "event_hash": self.event_hash,
        }


def entry_hash_body(*, sequence, event_type, actor_id, height, payload) -> dict:
    return {
        "sequence": sequence,
        "event_type": event_type,
        "actor_id": actor_id,
        "height": height,
        "payload": payload,
    }


# ══════════════════════════════════════════════════════════════
# EVENT JOURNAL
# ══════════════════════════════════════════════════════════════

class EventJournal:
    """
    In-memory, hash-chained event journal.

    Usage:
        journal = EventJournal()
        journal.register_event_type("event_registry.event.created.v1")
        journal.subscribe(registry_store)
        journal.append(event_type=..., payload=..., command=cmd, height=12)
    """

    def __init__(self) -> None:
        self._entries: List[JournalEntry] = []
        self._event_types: set[str] = set()
        self._subscribers: List[Any] = []

    # ── registration ──────────────────────────────────────────

    def register_event_type(self, event_type: str) -> None:
        parts = (event_type or "").split(".")
        if len(parts) < 4 or not parts[-1].startswith("v"):
            raise InvalidEventTypeFormat(event_type)
        self._event_types.add(event_type)

    def is_registered(self, event_type: str) -> bool:
        return event_type in self._event_types

    def subscribe(self, projection: ProjectionProtocol) -> None:
        if not hasattr(projection, "apply") or not callable(projection.apply):
            raise TypeError("Projection must have callable .apply() method.")
        if any(existing is projection for existing in self._subscribers):
            return
        self._subscribers.append(projection)

    # ── writes ────────────────────────────────────────────────

    def append(self, *, event_type: str, payload: dict, command, height: int) -> JournalEntry:
        """Seal one entry and apply it to every subscribed projection."""
        if event_type not in self._event_types:
            raise UnknownEventTypeError(event_type)

        sequence = len(self._entries) + 1
        previous_hash = self.last_hash
        body = entry_hash_body(
            sequence=sequence,
            event_type=event_type,
            actor_id=command.actor_id,
            height=height,
            payload=payload,
        )
        entry = JournalEntry(
            sequence=sequence,
            event_id=uuid.uuid4(),
            event_type=event_type,
            source_engine=command.source_engine,
            actor_id=command.actor_id,
            command_id=command.command_id,
            height=height,
            payload=dict(payload),
            previous_hash=previous_hash,
            event_hash=compute_event_hash(body, previous_hash),
        )
        self._entries.append(entry)

        for projection in self._subscribers:
            projection.apply(event_type, entry.payload)

        logger.debug(f"Journaled #{sequence} {event_type} (height {height})")
        return entry

    def checkpoint(self) -> int:
        return len(self._entries)

    def restore(self, checkpoint: int) -> None:
        """Drop entries appended after checkpoint (rollback only)."""
        if checkpoint < 0 or checkpoint > len(self._entries):
            raise ValueError(f"Invalid journal checkpoint {checkpoint}.")
        dropped = len(self._entries) - checkpoint
        del self._entries[checkpoint:]
        if dropped:
            logger.debug(f"Journal rolled back {dropped} entries to #{checkpoint}")

    # ── reads ─────────────────────────────────────────────────

    @property
    def last_hash(self) -> str:
        return self._entries[-1].event_hash if self._entries else GENESIS_HASH

    def entries(self, event_type: Optional[str] = None) -> Tuple[JournalEntry, ...]:
        if event_type is None:
            return tuple(self._entries)
        return tuple(e for e in self._entries if e.event_type == event_type)

    def __len__(self) -> int:
        return len(self._entries)

    def verify_chain(self) -> None:
        """Recompute every hash. Raises JournalChainBrokenError on mismatch."""
        verify_entries(self._entries)


def verify_entries(entries) -> None:
    previous_hash = GENESIS_HASH
    for expected_sequence, entry in enumerate(entries, start=1):
        if entry.sequence != expected_sequence:
            raise JournalChainBrokenError(
                entry.sequence, f"expected sequence {expected_sequence}."
            )
        if entry.previous_hash != previous_hash:
            raise JournalChainBrokenError(
                entry.sequence, "previous_hash does not link to prior entry."
            )
        recomputed = compute_event_hash(entry.hash_body(), previous_hash)
        if recomputed != entry.event_hash:
            raise JournalChainBrokenError(
                entry.sequence,
                f"stored hash '{entry.event_hash}' != recomputed '{recomputed}'.",
            )
        previous_hash = entry.event_hash
