"""
Ticketing Ticket Ledger Engine — Projection Store + Service
=============================================================
Owns Ticket records and the per-owner ticket index.

Value moves through the injected ValueLedger before the journal entry
is written. A failed transfer is a TRANSFER_FAILED rejection; the
TransactionEngine restores every participant, so no partial state
survives either way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from core.commands.base import Command
from core.commands.bus import ExecutionResult
from core.primitives.ledger import TransferError
from engines.event_registry.policies import (
    event_must_be_active_policy,
    event_must_exist_policy,
)
from engines.ticket_ledger.commands import (
    TICKET_LEDGER_COMMAND_TYPES,
    TICKET_PURCHASE_REQUEST,
    TICKET_REFUND_REQUEST,
    TICKET_VALIDATE_REQUEST,
)
from engines.ticket_ledger.events import (
    TICKET_PURCHASED_V1,
    TICKET_REFUNDED_V1,
    TICKET_VALIDATED_V1,
    build_ticket_purchased_payload,
    build_ticket_refunded_payload,
    build_ticket_validated_payload,
    register_ticket_ledger_event_types,
    resolve_ticket_ledger_event_type,
)
from engines.ticket_ledger.policies import (
    caller_must_be_event_organizer_policy,
    caller_must_be_ticket_owner_policy,
    event_must_not_be_sold_out_policy,
    refund_window_must_be_open_policy,
    ticket_must_be_unspent_policy,
    ticket_must_exist_policy,
    transfer_failed_rejection,
)

logger = logging.getLogger("ticketing.engines.ticket_ledger")


TICKET_STATUS_ACTIVE   = "ACTIVE"
TICKET_STATUS_USED     = "USED"
TICKET_STATUS_REFUNDED = "REFUNDED"


# ── Data Records ──────────────────────────────────────────────

@dataclass(frozen=True)
class TicketRecord:
    ticket_id:       int
    event_id:        int
    owner:           str
    purchase_price:  int
    purchase_height: int
    is_used:         bool = False
    is_refunded:     bool = False

    @property
    def status(self) -> str:
        if self.is_used:
            return TICKET_STATUS_USED
        if self.is_refunded:
            return TICKET_STATUS_REFUNDED
        return TICKET_STATUS_ACTIVE

    def to_dict(self) -> dict:
        return {
            "ticket_id": self.ticket_id,
            "event_id": self.event_id,
            "owner": self.owner,
            "purchase_price": self.purchase_price,
            "purchase_height": self.purchase_height,
            "is_used": self.is_used,
            "is_refunded": self.is_refunded,
            "status": self.status,
        }


# ── Projection Store ──────────────────────────────────────────

class TicketLedgerProjectionStore:
    """
    Arena-style table of tickets keyed by a global integer id (from 1)
    and an append-only owner → [ticket_id] index.
    """

    def __init__(self):
        self._events: List[dict] = []
        self._tickets: Dict[int, TicketRecord] = {}
        self._owned: Dict[str, List[int]] = {}

    def apply(self, event_type: str, payload: dict) -> None:
        if event_type == TICKET_PURCHASED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            tid = payload["ticket_id"]
            owner = payload["owner"]
            self._tickets[tid] = TicketRecord(
                ticket_id=tid,
                event_id=payload["event_id"],
                owner=owner,
                purchase_price=payload["purchase_price"],
                purchase_height=payload["purchase_height"],
            )
            self._owned[owner] = self._owned.get(owner, []) + [tid]

        elif event_type == TICKET_VALIDATED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            ticket = self._tickets.get(payload["ticket_id"])
            if ticket:
                self._tickets[ticket.ticket_id] = replace(ticket, is_used=True)

        elif event_type == TICKET_REFUNDED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            ticket = self._tickets.get(payload["ticket_id"])
            if ticket:
                self._tickets[ticket.ticket_id] = replace(ticket, is_refunded=True)

    # ── queries ───────────────────────────────────────────────

    def get_ticket(self, ticket_id: int) -> Optional[TicketRecord]:
        return self._tickets.get(ticket_id)

    def get_user_tickets(self, owner: str) -> Optional[dict]:
        owned = self._owned.get(owner)
        if owned is None:
            return None
        return {"owned_tickets": list(owned)}

    @property
    def next_ticket_id(self) -> int:
        return len(self._tickets) + 1

    @property
    def event_count(self) -> int:
        return len(self._events)

    def snapshot(self) -> dict:
        return {
            "tickets": {tid: t.to_dict() for tid, t in sorted(self._tickets.items())},
            "owned": {owner: list(ids) for owner, ids in sorted(self._owned.items())},
        }

    # ── transaction participation ─────────────────────────────

    def checkpoint(self):
        return dict(self._tickets), dict(self._owned), len(self._events)

    def restore(self, checkpoint) -> None:
        tickets, owned, event_count = checkpoint
        self._tickets = dict(tickets)
        self._owned = dict(owned)
        del self._events[event_count:]


# ── Service ───────────────────────────────────────────────────

class _TicketLedgerCommandHandler:
    def __init__(self, service: "TicketLedgerService"):
        self._service = service

    def execute(self, command: Command, height: int) -> ExecutionResult:
        return self._service._execute_command(command, height)


class TicketLedgerService:
    """Ticket ledger engine service. All mutations are journaled."""

    def __init__(
        self,
        *,
        transaction_engine,
        journal,
        value_ledger,
        projection_store: TicketLedgerProjectionStore,
        event_lookup: Callable,
    ):
        self._journal = journal
        self._value_ledger = value_ledger
        self._projection = projection_store
        self._event_lookup = event_lookup

        register_ticket_ledger_event_types(journal)
        journal.subscribe(projection_store)
        transaction_engine.register_participant(projection_store)

        handler = _TicketLedgerCommandHandler(self)
        for command_type in sorted(TICKET_LEDGER_COMMAND_TYPES):
            transaction_engine.register_handler(command_type, handler)

    # ── purchase ──────────────────────────────────────────────

    def _purchase(self, command: Command, height: int, event_type: str) -> ExecutionResult:
        event_id = command.payload["event_id"]
        rejection = event_must_exist_policy(event_id, self._event_lookup)
        if rejection is not None:
            return ExecutionResult.reject(rejection)

        event = self._event_lookup(event_id)
        rejection = (
            event_must_be_active_policy(event)
            or event_must_not_be_sold_out_policy(event)
        )
        if rejection is not None:
            return ExecutionResult.reject(rejection)

        try:
            self._value_ledger.transfer(command.actor_id, event.organizer, event.ticket_price)
        except TransferError as exc:
            return ExecutionResult.reject(transfer_failed_rejection(exc))

        ticket_id = self._projection.next_ticket_id
        payload = build_ticket_purchased_payload(
            command, height, ticket_id=ticket_id, event=event
        )
        entry = self._journal.append(
            event_type=event_type, payload=payload, command=command, height=height,
        )
        logger.info(
            f"Ticket {ticket_id} issued for event {event_id} to {command.actor_id} "
            f"({event.tickets_sold + 1}/{event.total_tickets})"
        )
        return ExecutionResult.accept(ticket_id, (entry,))

    # ── validate ──────────────────────────────────────────────

    def _validate(self, command: Command, height: int, event_type: str) -> ExecutionResult:
        ticket_id = command.payload["ticket_id"]
        rejection = ticket_must_exist_policy(ticket_id, self._projection.get_ticket)
        if rejection is not None:
            return ExecutionResult.reject(rejection)

        ticket = self._projection.get_ticket(ticket_id)
        event = self._event_lookup(ticket.event_id)
        rejection = (
            caller_must_be_event_organizer_policy(command, event)
            or ticket_must_be_unspent_policy(ticket)
        )
        if rejection is not None:
            return ExecutionResult.reject(rejection)

        payload = build_ticket_validated_payload(command, height, ticket=ticket)
        entry = self._journal.append(
            event_type=event_type, payload=payload, command=command, height=height,
        )
        return ExecutionResult.accept(True, (entry,))

    # ── refund ────────────────────────────────────────────────

    def _refund(self, command: Command, height: int, event_type: str) -> ExecutionResult:
        ticket_id = command.payload["ticket_id"]
        rejection = ticket_must_exist_policy(ticket_id, self._projection.get_ticket)
        if rejection is not None:
            return ExecutionResult.reject(rejection)

        ticket = self._projection.get_ticket(ticket_id)
        event = self._event_lookup(ticket.event_id)
        rejection = (
            caller_must_be_ticket_owner_policy(command, ticket)
            or ticket_must_be_unspent_policy(ticket)
            or refund_window_must_be_open_policy(ticket, event, height)
        )
        if rejection is not None:
            return ExecutionResult.reject(rejection)

        try:
            self._value_ledger.transfer(event.organizer, ticket.owner, ticket.purchase_price)
        except TransferError as exc:
            return ExecutionResult.reject(transfer_failed_rejection(exc))

        payload = build_ticket_refunded_payload(command, height, ticket=ticket, event=event)
        entry = self._journal.append(
            event_type=event_type, payload=payload, command=command, height=height,
        )
        logger.info(f"Ticket {ticket_id} refunded to {ticket.owner} ({ticket.purchase_price})")
        return ExecutionResult.accept(True, (entry,))

    def _execute_command(self, command: Command, height: int) -> ExecutionResult:
        event_type = resolve_ticket_ledger_event_type(command.command_type)
        if event_type is None:
            raise ValueError(f"Unsupported ticket ledger command: {command.command_type}")

        if command.command_type == TICKET_PURCHASE_REQUEST:
            return self._purchase(command, height, event_type)
        if command.command_type == TICKET_VALIDATE_REQUEST:
            return self._validate(command, height, event_type)
        if command.command_type == TICKET_REFUND_REQUEST:
            return self._refund(command, height, event_type)

        raise ValueError(f"No execution path for: {command.command_type}")

    @property
    def projection_store(self) -> TicketLedgerProjectionStore:
        return self._projection
