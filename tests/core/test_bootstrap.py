"""
Tests for core.bootstrap — Platform wiring and self-check.
"""

from __future__ import annotations

import pytest

from core.bootstrap import SystemBootstrapError, build_ticketing_platform
from core.bootstrap.invariants import (
    check_event_type_registration,
    check_handler_coverage,
    check_hash_chain_integrity,
)
from core.config import TicketingConfig
from core.events.journal import EventJournal
from core.time.clock import SystemHeightClock


class StubEngine:
    def __init__(self, command_types):
        self.registered_command_types = frozenset(command_types)


class BrokenJournal:
    def verify_chain(self):
        from core.events.errors import JournalChainBrokenError
        raise JournalChainBrokenError(4, "tampered")

    def __len__(self):
        return 4


class TestInvariants:
    def test_missing_handler(self):
        with pytest.raises(SystemBootstrapError, match="HANDLER_COVERAGE"):
            check_handler_coverage(StubEngine({"ticket_ledger.ticket.purchase.request"}))

    def test_unregistered_event_types(self):
        with pytest.raises(SystemBootstrapError, match="EVENT_TYPE_REGISTRATION"):
            check_event_type_registration(EventJournal())

    def test_broken_chain(self):
        with pytest.raises(SystemBootstrapError) as exc_info:
            check_hash_chain_integrity(BrokenJournal())
        assert exc_info.value.invariant == "HASH_CHAIN_INTEGRITY"


class TestBuildTicketingPlatform:
    def test_defaults(self):
        config = TicketingConfig(admin_identity="admin", genesis_balance=500)
        platform = build_ticketing_platform(config)

        assert isinstance(platform.clock, SystemHeightClock)
        assert platform.value_ledger.balance_of("anyone") == 500
        assert platform.config is config
        assert len(platform.journal) == 0

    def test_policy_seeded_from_config(self):
        config = TicketingConfig(
            admin_identity="admin", min_ticket_price=42, platform_fee_percent=12,
        )
        platform = build_ticketing_platform(config)
        assert platform.get_min_price() == 42
        assert platform.get_fee_percent() == 12
