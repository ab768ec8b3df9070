"""
Ticketing Replay Engine — Journal Replayer
============================================
Rebuilds every projection store from journal entries alone.

Replay doctrine:
- READ entries only — never append to the journal
- Never modify entries
- Deterministic order: sequence ASC
- Verify the hash chain before replay
- Apply through the same store.apply() path as live commands

Identical journals produce identical projections; tests compare
replayed snapshots with the live ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from core.config.rules import TicketingConfig
from core.events.errors import JournalChainBrokenError
from core.events.journal import verify_entries
from core.replay.errors import ReplayChainBrokenError, UnknownReplayEventError
from engines.event_registry.events import EVENT_REGISTRY_EVENT_TYPES
from engines.event_registry.services import EventRegistryProjectionStore
from engines.platform_policy.events import PLATFORM_POLICY_EVENT_TYPES
from engines.platform_policy.services import PlatformPolicyProjectionStore
from engines.ticket_ledger.events import TICKET_LEDGER_EVENT_TYPES
from engines.ticket_ledger.services import TicketLedgerProjectionStore

logger = logging.getLogger("ticketing.replay")

KNOWN_EVENT_TYPES = frozenset(
    PLATFORM_POLICY_EVENT_TYPES
    + EVENT_REGISTRY_EVENT_TYPES
    + TICKET_LEDGER_EVENT_TYPES
)


# ══════════════════════════════════════════════════════════════
# REPLAY RESULT
# ══════════════════════════════════════════════════════════════

@dataclass
class ReplayResult:
    """Structured result of a replay operation."""

    policy_store: PlatformPolicyProjectionStore
    registry_store: EventRegistryProjectionStore
    ticket_store: TicketLedgerProjectionStore
    entries_replayed: int = 0
    chain_verified: bool = False

    def snapshot(self) -> dict:
        return {
            "policy": self.policy_store.policy.to_dict(),
            "registry": self.registry_store.snapshot(),
            "tickets": self.ticket_store.snapshot(),
        }


# ══════════════════════════════════════════════════════════════
# REPLAY
# ══════════════════════════════════════════════════════════════

def replay_journal(
    entries: Iterable,
    config: TicketingConfig,
    *,
    verify_chain: bool = True,
) -> ReplayResult:
    """
    Apply `entries` in order to fresh projection stores.

    The policy store starts from `config`, exactly like a live boot,
    so the fee and minimum price end at whatever the journal says.

    Raises:
        ReplayChainBrokenError: hash chain does not verify
        UnknownReplayEventError: entry with an event type no engine owns
    """
    entries = tuple(entries)

    if verify_chain:
        try:
            verify_entries(entries)
        except JournalChainBrokenError as exc:
            raise ReplayChainBrokenError(exc.sequence, exc.detail) from exc

    result = ReplayResult(
        policy_store=PlatformPolicyProjectionStore.from_config(config),
        registry_store=EventRegistryProjectionStore(),
        ticket_store=TicketLedgerProjectionStore(),
        chain_verified=verify_chain,
    )
    stores = (result.policy_store, result.registry_store, result.ticket_store)

    for entry in entries:
        if entry.event_type not in KNOWN_EVENT_TYPES:
            raise UnknownReplayEventError(entry.sequence, entry.event_type)
        for store in stores:
            store.apply(entry.event_type, entry.payload)
        result.entries_replayed += 1

    logger.info(
        f"Replay complete: {result.entries_replayed} entries "
        f"(chain verified: {result.chain_verified})"
    )
    return result
