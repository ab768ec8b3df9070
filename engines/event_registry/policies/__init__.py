"""
Ticketing Event Registry Engine — Policies
============================================
Creation checks run in a fixed order; the first failure wins:
capacity → price floor → future date → refund window.
"""
from __future__ import annotations

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason


def capacity_must_be_positive_policy(command) -> Optional[RejectionReason]:
    total = command.payload.get("total_tickets", 0)
    if total <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_CAPACITY,
            message="total_tickets must be greater than zero.",
            policy_name="capacity_must_be_positive_policy",
        )
    return None


def price_must_meet_minimum_policy(command, min_price: int) -> Optional[RejectionReason]:
    price = command.payload.get("ticket_price", 0)
    if price < min_price:
        return RejectionReason(
            code=ReasonCode.INVALID_PRICE,
            message=f"ticket_price {price} is below the minimum {min_price}.",
            policy_name="price_must_meet_minimum_policy",
        )
    return None


def event_date_must_be_future_policy(command, height: int) -> Optional[RejectionReason]:
    date = command.payload.get("date", 0)
    if date <= height:
        return RejectionReason(
            code=ReasonCode.EVENT_EXPIRED,
            message=f"Event date {date} is not after current height {height}.",
            policy_name="event_date_must_be_future_policy",
        )
    return None


def refund_window_must_be_positive_policy(command) -> Optional[RejectionReason]:
    window = command.payload.get("refund_window", 0)
    if window <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_REFUND_WINDOW,
            message="refund_window must be greater than zero.",
            policy_name="refund_window_must_be_positive_policy",
        )
    return None


def event_must_exist_policy(event_id: int, event_lookup) -> Optional[RejectionReason]:
    if event_lookup(event_id) is None:
        return RejectionReason(
            code=ReasonCode.EVENT_NOT_FOUND,
            message=f"Event {event_id} not found.",
            policy_name="event_must_exist_policy",
        )
    return None


def event_must_be_active_policy(event) -> Optional[RejectionReason]:
    if event is not None and not event.is_active:
        return RejectionReason(
            code=ReasonCode.EVENT_INACTIVE,
            message=f"Event {event.event_id} is not active.",
            policy_name="event_must_be_active_policy",
        )
    return None


def caller_must_be_organizer_or_admin_policy(
    command, event, admin_identity: str
) -> Optional[RejectionReason]:
    """Closing sales is reserved for the event organizer and the platform admin."""
    if event is None:
        return None
    if command.actor_id not in (event.organizer, admin_identity):
        return RejectionReason(
            code=ReasonCode.NOT_AUTHORIZED,
            message=f"'{command.actor_id}' may not close event {event.event_id}.",
            policy_name="caller_must_be_organizer_or_admin_policy",
        )
    return None
