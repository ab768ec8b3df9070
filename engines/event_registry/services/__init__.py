"""
Ticketing Event Registry Engine — Projection Store + Service
==============================================================
Owns Event records and Organizer records.

The store also follows ticket_ledger purchase/refund entries so that
tickets_sold, revenue and organizer totals stay derived from the
journal alone:
- purchase: tickets_sold +1, revenue +price, organizer revenue +price
- refund:   revenue −price, organizer revenue −price, tickets_sold unchanged
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from core.commands.base import Command
from core.commands.bus import ExecutionResult
from engines.event_registry.commands import (
    EVENT_CREATE_REQUEST,
    EVENT_DEACTIVATE_REQUEST,
    EVENT_REGISTRY_COMMAND_TYPES,
)
from engines.event_registry.events import (
    EVENT_CREATED_V1,
    EVENT_DEACTIVATED_V1,
    build_event_created_payload,
    build_event_deactivated_payload,
    register_event_registry_event_types,
    resolve_event_registry_event_type,
)
from engines.event_registry.policies import (
    caller_must_be_organizer_or_admin_policy,
    capacity_must_be_positive_policy,
    event_date_must_be_future_policy,
    event_must_be_active_policy,
    event_must_exist_policy,
    price_must_meet_minimum_policy,
    refund_window_must_be_positive_policy,
)
from engines.ticket_ledger.events import TICKET_PURCHASED_V1, TICKET_REFUNDED_V1

logger = logging.getLogger("ticketing.engines.event_registry")


# ── Data Records ──────────────────────────────────────────────

@dataclass(frozen=True)
class EventRecord:
    event_id:      int
    name:          str
    description:   str
    venue:         str
    organizer:     str
    date:          int
    total_tickets: int
    tickets_sold:  int
    ticket_price:  int
    is_active:     bool
    refund_window: int
    revenue:       int
    category:      str

    @property
    def remaining_tickets(self) -> int:
        return self.total_tickets - self.tickets_sold

    @property
    def is_sold_out(self) -> bool:
        return self.tickets_sold >= self.total_tickets

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "name": self.name,
            "description": self.description,
            "venue": self.venue,
            "organizer": self.organizer,
            "date": self.date,
            "total_tickets": self.total_tickets,
            "tickets_sold": self.tickets_sold,
            "ticket_price": self.ticket_price,
            "is_active": self.is_active,
            "refund_window": self.refund_window,
            "revenue": self.revenue,
            "category": self.category,
        }


@dataclass(frozen=True)
class OrganizerRecord:
    organizer:        str
    events_organized: int
    total_revenue:    int

    def to_dict(self) -> dict:
        return {
            "organizer": self.organizer,
            "events_organized": self.events_organized,
            "total_revenue": self.total_revenue,
        }


# ── Projection Store ──────────────────────────────────────────

class EventRegistryProjectionStore:
    """
    Arena-style table of events keyed by integer id (from 1),
    plus per-organizer records and event-id indexes.
    """

    def __init__(self):
        self._events: List[dict] = []
        self._records: Dict[int, EventRecord] = {}
        self._organizers: Dict[str, OrganizerRecord] = {}
        self._by_organizer: Dict[str, List[int]] = {}

    def apply(self, event_type: str, payload: dict) -> None:
        if event_type == EVENT_CREATED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            event_id = payload["event_id"]
            organizer = payload["organizer"]
            self._records[event_id] = EventRecord(
                event_id=event_id,
                name=payload["name"],
                description=payload["description"],
                venue=payload["venue"],
                organizer=organizer,
                date=payload["date"],
                total_tickets=payload["total_tickets"],
                tickets_sold=0,
                ticket_price=payload["ticket_price"],
                is_active=True,
                refund_window=payload["refund_window"],
                revenue=0,
                category=payload["category"],
            )
            self._by_organizer[organizer] = self._by_organizer.get(organizer, []) + [event_id]
            record = self._organizer_or_blank(organizer)
            self._organizers[organizer] = replace(
                record, events_organized=record.events_organized + 1
            )

        elif event_type == EVENT_DEACTIVATED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            event = self._records.get(payload["event_id"])
            if event:
                self._records[event.event_id] = replace(event, is_active=False)

        elif event_type == TICKET_PURCHASED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            event = self._records.get(payload["event_id"])
            if event:
                price = payload["purchase_price"]
                self._records[event.event_id] = replace(
                    event,
                    tickets_sold=event.tickets_sold + 1,
                    revenue=event.revenue + price,
                )
                self._accrue(event.organizer, price)

        elif event_type == TICKET_REFUNDED_V1:
            self._events.append({"event_type": event_type, "payload": payload})
            event = self._records.get(payload["event_id"])
            if event:
                amount = payload["refund_amount"]
                self._records[event.event_id] = replace(
                    event, revenue=event.revenue - amount
                )
                self._accrue(event.organizer, -amount)

    def _organizer_or_blank(self, organizer: str) -> OrganizerRecord:
        return self._organizers.get(
            organizer,
            OrganizerRecord(organizer=organizer, events_organized=0, total_revenue=0),
        )

    def _accrue(self, organizer: str, amount: int) -> None:
        record = self._organizer_or_blank(organizer)
        self._organizers[organizer] = replace(
            record, total_revenue=record.total_revenue + amount
        )

    # ── queries ───────────────────────────────────────────────

    def get_event(self, event_id: int) -> Optional[EventRecord]:
        return self._records.get(event_id)

    def get_organizer(self, organizer: str) -> Optional[OrganizerRecord]:
        return self._organizers.get(organizer)

    def list_by_organizer(self, organizer: str) -> List[EventRecord]:
        return [self._records[eid] for eid in self._by_organizer.get(organizer, [])]

    @property
    def next_event_id(self) -> int:
        return len(self._records) + 1

    @property
    def event_count(self) -> int:
        return len(self._events)

    def snapshot(self) -> dict:
        return {
            "events": {eid: r.to_dict() for eid, r in sorted(self._records.items())},
            "organizers": {
                key: r.to_dict() for key, r in sorted(self._organizers.items())
            },
        }

    # ── transaction participation ─────────────────────────────

    def checkpoint(self):
        return (
            dict(self._records),
            dict(self._organizers),
            dict(self._by_organizer),
            len(self._events),
        )

    def restore(self, checkpoint) -> None:
        records, organizers, by_organizer, event_count = checkpoint
        self._records = dict(records)
        self._organizers = dict(organizers)
        self._by_organizer = dict(by_organizer)
        del self._events[event_count:]


# ── Service ───────────────────────────────────────────────────

class _EventRegistryCommandHandler:
    def __init__(self, service: "EventRegistryService"):
        self._service = service

    def execute(self, command: Command, height: int) -> ExecutionResult:
        return self._service._execute_command(command, height)


class EventRegistryService:
    """Event registry engine service. All mutations are journaled."""

    def __init__(
        self,
        *,
        transaction_engine,
        journal,
        projection_store: EventRegistryProjectionStore,
        policy_lookup: Callable,
    ):
        self._journal = journal
        self._projection = projection_store
        self._policy_lookup = policy_lookup

        register_event_registry_event_types(journal)
        journal.subscribe(projection_store)
        transaction_engine.register_participant(projection_store)

        handler = _EventRegistryCommandHandler(self)
        for command_type in sorted(EVENT_REGISTRY_COMMAND_TYPES):
            transaction_engine.register_handler(command_type, handler)

    def _run_create_policies(self, command: Command, height: int):
        platform = self._policy_lookup()
        for check in (
            lambda: capacity_must_be_positive_policy(command),
            lambda: price_must_meet_minimum_policy(command, platform.min_ticket_price),
            lambda: event_date_must_be_future_policy(command, height),
            lambda: refund_window_must_be_positive_policy(command),
        ):
            rejection = check()
            if rejection is not None:
                return rejection
        return None

    def _run_deactivate_policies(self, command: Command):
        event_id = command.payload["event_id"]
        rejection = event_must_exist_policy(event_id, self._projection.get_event)
        if rejection is not None:
            return rejection

        event = self._projection.get_event(event_id)
        rejection = caller_must_be_organizer_or_admin_policy(
            command, event, self._policy_lookup().admin_identity
        )
        if rejection is not None:
            return rejection

        return event_must_be_active_policy(event)

    def _execute_command(self, command: Command, height: int) -> ExecutionResult:
        event_type = resolve_event_registry_event_type(command.command_type)
        if event_type is None:
            raise ValueError(f"Unsupported event registry command: {command.command_type}")

        if command.command_type == EVENT_CREATE_REQUEST:
            rejection = self._run_create_policies(command, height)
            if rejection is not None:
                return ExecutionResult.reject(rejection)

            event_id = self._projection.next_event_id
            payload = build_event_created_payload(command, height, event_id=event_id)
            entry = self._journal.append(
                event_type=event_type, payload=payload, command=command, height=height,
            )
            logger.info(f"Event {event_id} created by {command.actor_id}")
            return ExecutionResult.accept(event_id, (entry,))

        if command.command_type == EVENT_DEACTIVATE_REQUEST:
            rejection = self._run_deactivate_policies(command)
            if rejection is not None:
                return ExecutionResult.reject(rejection)

            payload = build_event_deactivated_payload(command, height)
            entry = self._journal.append(
                event_type=event_type, payload=payload, command=command, height=height,
            )
            return ExecutionResult.accept(True, (entry,))

        raise ValueError(f"No execution path for: {command.command_type}")

    @property
    def projection_store(self) -> EventRegistryProjectionStore:
        return self._projection
