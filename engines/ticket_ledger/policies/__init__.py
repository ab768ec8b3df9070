"""
Ticketing Ticket Ledger Engine — Policies
===========================================
Used and refunded are both terminal: either one makes a ticket
unusable for validation and refund alike (same TICKET_USED code).
"""
from __future__ import annotations

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason


def event_must_not_be_sold_out_policy(event) -> Optional[RejectionReason]:
    if event is not None and event.is_sold_out:
        return RejectionReason(
            code=ReasonCode.SOLD_OUT,
            message=f"Event {event.event_id} is sold out "
                    f"({event.tickets_sold}/{event.total_tickets}).",
            policy_name="event_must_not_be_sold_out_policy",
        )
    return None


def ticket_must_exist_policy(ticket_id: int, ticket_lookup) -> Optional[RejectionReason]:
    if ticket_lookup(ticket_id) is None:
        return RejectionReason(
            code=ReasonCode.TICKET_NOT_FOUND,
            message=f"Ticket {ticket_id} not found.",
            policy_name="ticket_must_exist_policy",
        )
    return None


def caller_must_be_event_organizer_policy(command, event) -> Optional[RejectionReason]:
    """Only the organizer of the ticket's event redeems at the door."""
    if event is None or command.actor_id != event.organizer:
        return RejectionReason(
            code=ReasonCode.NOT_AUTHORIZED,
            message=f"'{command.actor_id}' is not the organizer of this event.",
            policy_name="caller_must_be_event_organizer_policy",
        )
    return None


def caller_must_be_ticket_owner_policy(command, ticket) -> Optional[RejectionReason]:
    if command.actor_id != ticket.owner:
        return RejectionReason(
            code=ReasonCode.NOT_AUTHORIZED,
            message=f"'{command.actor_id}' does not own ticket {ticket.ticket_id}.",
            policy_name="caller_must_be_ticket_owner_policy",
        )
    return None


def ticket_must_be_unspent_policy(ticket) -> Optional[RejectionReason]:
    if ticket.is_used or ticket.is_refunded:
        return RejectionReason(
            code=ReasonCode.TICKET_USED,
            message=f"Ticket {ticket.ticket_id} is already {ticket.status.lower()}.",
            policy_name="ticket_must_be_unspent_policy",
        )
    return None


def refund_window_must_be_open_policy(ticket, event, height: int) -> Optional[RejectionReason]:
    """Open through purchase_height + refund_window inclusive."""
    closes_at = ticket.purchase_height + event.refund_window
    if height > closes_at:
        return RejectionReason(
            code=ReasonCode.REFUND_WINDOW_CLOSED,
            message=f"Refund window closed at height {closes_at} "
                    f"(current {height}).",
            policy_name="refund_window_must_be_open_policy",
        )
    return None


def transfer_failed_rejection(exc: Exception) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.TRANSFER_FAILED,
        message=f"Value transfer failed: {exc}",
        policy_name="value_ledger_transfer",
    )
