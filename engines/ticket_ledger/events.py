"""
Ticketing Ticket Ledger Engine — Event Types and Payload Builders
===================================================================
Engine: ticket_ledger
Scope:  Ticket issuance against event capacity, door validation,
        self-service refunds inside the refund window.
        Lifecycle: ACTIVE → USED | ACTIVE → REFUNDED (both terminal).
"""

from __future__ import annotations

from core.commands.base import Command

TICKET_PURCHASED_V1  = "ticket_ledger.ticket.purchased.v1"
TICKET_VALIDATED_V1  = "ticket_ledger.ticket.validated.v1"
TICKET_REFUNDED_V1   = "ticket_ledger.ticket.refunded.v1"

TICKET_LEDGER_EVENT_TYPES = (
    TICKET_PURCHASED_V1,
    TICKET_VALIDATED_V1,
    TICKET_REFUNDED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "ticket_ledger.ticket.purchase.request": TICKET_PURCHASED_V1,
    "ticket_ledger.ticket.validate.request": TICKET_VALIDATED_V1,
    "ticket_ledger.ticket.refund.request":   TICKET_REFUNDED_V1,
}


def resolve_ticket_ledger_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_ticket_ledger_event_types(journal) -> None:
    for et in sorted(TICKET_LEDGER_EVENT_TYPES):
        journal.register_event_type(et)


def build_ticket_purchased_payload(cmd: Command, height: int, *, ticket_id: int, event) -> dict:
    return {
        "ticket_id":       ticket_id,
        "event_id":        event.event_id,
        "owner":           cmd.actor_id,
        "organizer":       event.organizer,
        "purchase_price":  event.ticket_price,
        "purchase_height": height,
    }


def build_ticket_validated_payload(cmd: Command, height: int, *, ticket) -> dict:
    return {
        "ticket_id":    ticket.ticket_id,
        "event_id":     ticket.event_id,
        "validated_by": cmd.actor_id,
        "validated_at": height,
    }


def build_ticket_refunded_payload(cmd: Command, height: int, *, ticket, event) -> dict:
    return {
        "ticket_id":     ticket.ticket_id,
        "event_id":      ticket.event_id,
        "owner":         ticket.owner,
        "organizer":     event.organizer,
        "refund_amount": ticket.purchase_price,
        "refunded_at":   height,
    }
