"""
Ticketing Bootstrap — Platform Wiring
=======================================
Composes the journal, value ledger, clock, three engine services and
the TransactionEngine into one facade.

Every state-changing method takes the caller identity first and
returns a CommandOutcome. Read methods never go through the
TransactionEngine.

Usage:
    platform = build_ticketing_platform(TicketingConfig(admin_identity="admin"))
    outcome = platform.create_event("alice", name="Gig", ...)
    if outcome.is_accepted:
        event_id = outcome.value
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.bootstrap.self_check import run_bootstrap_checks
from core.commands.bus import TransactionEngine
from core.commands.outcomes import CommandOutcome
from core.config.rules import TicketingConfig
from core.events.journal import EventJournal
from core.primitives.ledger import InMemoryValueLedger
from core.replay import ReplayResult, replay_journal
from core.time.clock import SystemHeightClock
from engines.event_registry.commands import CreateEventRequest, DeactivateEventRequest
from engines.event_registry.services import (
    EventRecord,
    EventRegistryProjectionStore,
    EventRegistryService,
    OrganizerRecord,
)
from engines.platform_policy.commands import (
    UpdateMinTicketPriceRequest,
    UpdatePlatformFeeRequest,
)
from engines.platform_policy.services import (
    PlatformPolicyProjectionStore,
    PlatformPolicyService,
)
from engines.ticket_ledger.commands import (
    PurchaseTicketRequest,
    RefundTicketRequest,
    ValidateTicketRequest,
)
from engines.ticket_ledger.services import (
    TicketLedgerProjectionStore,
    TicketLedgerService,
    TicketRecord,
)

logger = logging.getLogger("ticketing.bootstrap")


class TicketingPlatform:
    def __init__(self, *, config: TicketingConfig, clock, value_ledger,
                 journal: Optional[EventJournal] = None):
        self._config = config
        self._clock = clock
        self._value_ledger = value_ledger
        self._journal = journal or EventJournal()

        self._engine = TransactionEngine(
            clock=clock, value_ledger=value_ledger, journal=self._journal,
        )

        # Subscription order is apply order: policy, registry, tickets.
        self._policy_store = PlatformPolicyProjectionStore.from_config(config)
        self._registry_store = EventRegistryProjectionStore()
        self._ticket_store = TicketLedgerProjectionStore()

        self._policy_service = PlatformPolicyService(
            transaction_engine=self._engine,
            journal=self._journal,
            projection_store=self._policy_store,
        )
        self._registry_service = EventRegistryService(
            transaction_engine=self._engine,
            journal=self._journal,
            projection_store=self._registry_store,
            policy_lookup=lambda: self._policy_store.policy,
        )
        self._ticket_service = TicketLedgerService(
            transaction_engine=self._engine,
            journal=self._journal,
            value_ledger=value_ledger,
            projection_store=self._ticket_store,
            event_lookup=self._registry_store.get_event,
        )

        run_bootstrap_checks(transaction_engine=self._engine, journal=self._journal)

    # ══════════════════════════════════════════════════════════
    # STATE-CHANGING OPERATIONS
    # ══════════════════════════════════════════════════════════

    def create_event(self, caller: str, *, name: str, description: str,
                     venue: str, date: int, total_tickets: int,
                     ticket_price: int, refund_window: int,
                     category: str) -> CommandOutcome:
        request = CreateEventRequest(
            name=name,
            description=description,
            venue=venue,
            date=date,
            total_tickets=total_tickets,
            ticket_price=ticket_price,
            refund_window=refund_window,
            category=category,
        )
        return self._engine.handle(request.to_command(caller))

    def deactivate_event(self, caller: str, event_id: int) -> CommandOutcome:
        request = DeactivateEventRequest(event_id=event_id)
        return self._engine.handle(request.to_command(caller))

    def purchase_ticket(self, caller: str, event_id: int) -> CommandOutcome:
        request = PurchaseTicketRequest(event_id=event_id)
        return self._engine.handle(request.to_command(caller))

    def validate_ticket(self, caller: str, ticket_id: int) -> CommandOutcome:
        request = ValidateTicketRequest(ticket_id=ticket_id)
        return self._engine.handle(request.to_command(caller))

    def refund_ticket(self, caller: str, ticket_id: int) -> CommandOutcome:
        request = RefundTicketRequest(ticket_id=ticket_id)
        return self._engine.handle(request.to_command(caller))

    def update_platform_fee(self, caller: str, new_fee_percent: int) -> CommandOutcome:
        request = UpdatePlatformFeeRequest(new_fee_percent=new_fee_percent)
        return self._engine.handle(request.to_command(caller))

    def update_min_ticket_price(self, caller: str, new_min_price: int) -> CommandOutcome:
        request = UpdateMinTicketPriceRequest(new_min_price=new_min_price)
        return self._engine.handle(request.to_command(caller))

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def calculate_platform_fee(self, amount: int) -> int:
        return self._policy_store.calculate_platform_fee(amount)

    def get_min_price(self) -> int:
        return self._policy_store.get_min_price()

    def get_fee_percent(self) -> int:
        return self._policy_store.get_fee_percent()

    def get_event(self, event_id: int) -> Optional[EventRecord]:
        return self._registry_store.get_event(event_id)

    def get_organizer_revenue(self, identity: str) -> Optional[OrganizerRecord]:
        return self._registry_store.get_organizer(identity)

    def list_events_by_organizer(self, identity: str) -> List[EventRecord]:
        return self._registry_store.list_by_organizer(identity)

    def get_ticket(self, ticket_id: int) -> Optional[TicketRecord]:
        return self._ticket_store.get_ticket(ticket_id)

    def get_user_tickets(self, identity: str) -> Optional[dict]:
        return self._ticket_store.get_user_tickets(identity)

    # ══════════════════════════════════════════════════════════
    # INTROSPECTION
    # ══════════════════════════════════════════════════════════

    @property
    def config(self) -> TicketingConfig:
        return self._config

    @property
    def clock(self):
        return self._clock

    @property
    def value_ledger(self):
        return self._value_ledger

    @property
    def journal(self) -> EventJournal:
        return self._journal

    def snapshot(self) -> dict:
        """Same shape as ReplayResult.snapshot()."""
        return {
            "policy": self._policy_store.policy.to_dict(),
            "registry": self._registry_store.snapshot(),
            "tickets": self._ticket_store.snapshot(),
        }

    def replay(self) -> ReplayResult:
        """Rebuild fresh projections from this platform's journal."""
        return replay_journal(self._journal.entries(), self._config)


def build_ticketing_platform(
    config: TicketingConfig,
    *,
    clock=None,
    value_ledger=None,
) -> TicketingPlatform:
    """
    Wire a platform from config.

    Defaults: SystemHeightClock at config.block_interval_seconds and an
    InMemoryValueLedger handing unseen identities config.genesis_balance.
    """
    if clock is None:
        clock = SystemHeightClock(config.block_interval_seconds)
    if value_ledger is None:
        value_ledger = InMemoryValueLedger(default_balance=config.genesis_balance)

    platform = TicketingPlatform(config=config, clock=clock, value_ledger=value_ledger)
    logger.info(
        f"Ticketing platform ready (admin {config.admin_identity}, "
        f"min price {config.min_ticket_price}, fee {config.platform_fee_percent}%)"
    )
    return platform
