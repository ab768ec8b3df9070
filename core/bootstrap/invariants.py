"""
Ticketing Bootstrap — Invariant Checks
========================================
Each function verifies one system law against a freshly wired
platform. If any check fails → SystemBootstrapError is raised.

These checks do NOT:
- Auto-fix anything
- Silence failures
"""

import logging

from core.bootstrap.errors import SystemBootstrapError
from core.events.errors import JournalChainBrokenError
from core.replay import KNOWN_EVENT_TYPES
from engines.event_registry.commands import EVENT_REGISTRY_COMMAND_TYPES
from engines.platform_policy.commands import PLATFORM_POLICY_COMMAND_TYPES
from engines.ticket_ledger.commands import TICKET_LEDGER_COMMAND_TYPES

logger = logging.getLogger("ticketing.bootstrap")

EXPECTED_COMMAND_TYPES = (
    PLATFORM_POLICY_COMMAND_TYPES
    | EVENT_REGISTRY_COMMAND_TYPES
    | TICKET_LEDGER_COMMAND_TYPES
)


# ══════════════════════════════════════════════════════════════
# CHECK 1: Every command type has a handler
# ══════════════════════════════════════════════════════════════

def check_handler_coverage(transaction_engine):
    missing = EXPECTED_COMMAND_TYPES - transaction_engine.registered_command_types
    if missing:
        raise SystemBootstrapError(
            invariant="HANDLER_COVERAGE",
            detail=f"No handler for: {', '.join(sorted(missing))}.",
        )
    logger.debug("✓ Handler coverage")


# ══════════════════════════════════════════════════════════════
# CHECK 2: Every event type is registered with the journal
# ══════════════════════════════════════════════════════════════

def check_event_type_registration(journal):
    missing = sorted(et for et in KNOWN_EVENT_TYPES if not journal.is_registered(et))
    if missing:
        raise SystemBootstrapError(
            invariant="EVENT_TYPE_REGISTRATION",
            detail=f"Unregistered event types: {', '.join(missing)}.",
        )
    logger.debug("✓ Event type registration")


# ══════════════════════════════════════════════════════════════
# CHECK 3: Journal hash chain verifies
# ══════════════════════════════════════════════════════════════

def check_hash_chain_integrity(journal):
    try:
        journal.verify_chain()
    except JournalChainBrokenError as exc:
        raise SystemBootstrapError(
            invariant="HASH_CHAIN_INTEGRITY",
            detail=str(exc),
        ) from exc
    logger.debug(f"✓ Hash chain ({len(journal)} entries)")
