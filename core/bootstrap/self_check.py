"""
Ticketing Bootstrap — Self-Check Orchestrator
===============================================
Runs all invariant checks once the platform is wired.
If any check fails → SystemBootstrapError propagates → the platform
is never handed out.

Check order:
1. Handler coverage
2. Event type registration
3. Hash-chain structural integrity

No auto-fix. No fallback. No silence.
"""

import logging

from core.bootstrap.invariants import (
    check_event_type_registration,
    check_handler_coverage,
    check_hash_chain_integrity,
)

logger = logging.getLogger("ticketing.bootstrap")


def run_bootstrap_checks(*, transaction_engine, journal):
    logger.info("═══ Ticketing Bootstrap Self-Check Starting ═══")

    check_handler_coverage(transaction_engine)
    check_event_type_registration(journal)
    check_hash_chain_integrity(journal)

    logger.info("═══ Ticketing Bootstrap Self-Check PASSED ═══")
