"""
Tests for core.replay — Rebuilding projections from the journal.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from core.bootstrap import build_ticketing_platform
from core.config import TicketingConfig
from core.primitives.ledger import InMemoryValueLedger
from core.replay import (
    ReplayChainBrokenError,
    UnknownReplayEventError,
    replay_journal,
)
from core.time.clock import FixedHeightClock

ADMIN = "platform-admin"
ORGANIZER = "organizer-1"


@pytest.fixture
def config():
    return TicketingConfig(admin_identity=ADMIN)


@pytest.fixture
def busy_platform(config):
    clock = FixedHeightClock(10)
    platform = build_ticketing_platform(
        config, clock=clock, value_ledger=InMemoryValueLedger(default_balance=10**10),
    )
    platform.update_platform_fee(ADMIN, 7)
    platform.update_min_ticket_price(ADMIN, 2_000_000)
    for name in ("A", "B"):
        platform.create_event(
            ORGANIZER, name=name, description="", venue="Hall", date=500,
            total_tickets=2, ticket_price=3_000_000, refund_window=10, category="x",
        )
    platform.purchase_ticket("alice", 1)
    platform.purchase_ticket("bob", 1)
    platform.purchase_ticket("bob", 1)  # sold out, rejected
    platform.purchase_ticket("carol", 2)
    platform.validate_ticket(ORGANIZER, 1)
    clock.advance(5)
    platform.refund_ticket("bob", 2)
    platform.deactivate_event(ORGANIZER, 2)
    return platform


class TestReplayJournal:
    def test_replay_matches_live_projections(self, busy_platform, config):
        result = replay_journal(busy_platform.journal.entries(), config)

        assert result.chain_verified is True
        assert result.entries_replayed == len(busy_platform.journal)
        assert result.snapshot() == busy_platform.snapshot()

    def test_platform_replay_shortcut(self, busy_platform):
        assert busy_platform.replay().snapshot() == busy_platform.snapshot()

    def test_replay_is_deterministic(self, busy_platform, config):
        entries = busy_platform.journal.entries()
        assert replay_journal(entries, config).snapshot() == replay_journal(entries, config).snapshot()

    def test_prefix_replay(self, busy_platform, config):
        entries = busy_platform.journal.entries()[:3]
        result = replay_journal(entries, config)
        assert result.registry_store.get_event(1) is not None
        assert result.registry_store.get_event(2) is None
        assert result.policy_store.get_fee_percent() == 7

    def test_empty_journal(self, config):
        result = replay_journal((), config)
        assert result.entries_replayed == 0
        assert result.policy_store.get_min_price() == config.min_ticket_price

    def test_tampered_journal_refused(self, busy_platform, config):
        entries = list(busy_platform.journal.entries())
        entries[2] = replace(entries[2], payload=dict(entries[2].payload, ticket_price=1))

        with pytest.raises(ReplayChainBrokenError) as exc_info:
            replay_journal(entries, config)
        assert exc_info.value.sequence == 3

    def test_unknown_event_type_refused(self, busy_platform, config):
        entries = list(busy_platform.journal.entries())
        entries[0] = replace(entries[0], event_type="loyalty.points.credited.v1")

        with pytest.raises(UnknownReplayEventError):
            replay_journal(entries, config, verify_chain=False)
