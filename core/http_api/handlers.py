"""
Ticketing HTTP API - Framework-Agnostic Handlers
================================================
Pure handler functions over a TicketingPlatform.

Each handler returns (http_status, payload). Malformed input is a 400;
domain rejections keep their code and map through rejection_status().
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from core.commands.outcomes import CommandOutcome
from core.http_api.errors import (
    INVALID_REQUEST,
    NOT_FOUND,
    error_response,
    rejection_response,
    rejection_status,
    success_response,
)

logger = logging.getLogger("ticketing.http")

HandlerResult = tuple[int, dict[str, Any]]


def _invalid(message: str) -> HandlerResult:
    return 400, error_response(code=INVALID_REQUEST, message=message)


def _not_found(message: str) -> HandlerResult:
    return 404, error_response(code=NOT_FOUND, message=message)


def _outcome_result(outcome: CommandOutcome, data_key: Optional[str] = None) -> HandlerResult:
    if outcome.is_rejected:
        return rejection_status(outcome.reason), rejection_response(
            outcome.reason,
            extra_details={"height": outcome.height},
        )
    data: dict[str, Any] = {"height": outcome.height}
    if data_key is not None:
        data[data_key] = outcome.value
    return 200, success_response(data)


def _execute(call: Callable[[], CommandOutcome], data_key: Optional[str] = None) -> HandlerResult:
    try:
        outcome = call()
    except (KeyError, TypeError, ValueError) as exc:
        logger.info(f"Malformed request: {exc}")
        return _invalid(str(exc))
    return _outcome_result(outcome, data_key)


def _require_caller(caller: Optional[str]) -> Optional[HandlerResult]:
    if not caller:
        return _invalid("X-Caller-Identity header is required.")
    return None


# ══════════════════════════════════════════════════════════════
# WRITES
# ══════════════════════════════════════════════════════════════

def post_create_event(platform, *, caller: Optional[str], body: dict) -> HandlerResult:
    missing = _require_caller(caller)
    if missing:
        return missing
    return _execute(
        lambda: platform.create_event(
            caller,
            name=body["name"],
            description=body["description"],
            venue=body["venue"],
            date=body["date"],
            total_tickets=body["total_tickets"],
            ticket_price=body["ticket_price"],
            refund_window=body["refund_window"],
            category=body["category"],
        ),
        data_key="event_id",
    )


def post_deactivate_event(platform, *, caller: Optional[str], body: dict) -> HandlerResult:
    missing = _require_caller(caller)
    if missing:
        return missing
    return _execute(lambda: platform.deactivate_event(caller, body["event_id"]))


def post_purchase_ticket(platform, *, caller: Optional[str], body: dict) -> HandlerResult:
    missing = _require_caller(caller)
    if missing:
        return missing
    return _execute(
        lambda: platform.purchase_ticket(caller, body["event_id"]),
        data_key="ticket_id",
    )


def post_validate_ticket(platform, *, caller: Optional[str], body: dict) -> HandlerResult:
    missing = _require_caller(caller)
    if missing:
        return missing
    return _execute(lambda: platform.validate_ticket(caller, body["ticket_id"]))


def post_refund_ticket(platform, *, caller: Optional[str], body: dict) -> HandlerResult:
    missing = _require_caller(caller)
    if missing:
        return missing
    return _execute(lambda: platform.refund_ticket(caller, body["ticket_id"]))


def post_update_platform_fee(platform, *, caller: Optional[str], body: dict) -> HandlerResult:
    missing = _require_caller(caller)
    if missing:
        return missing
    return _execute(lambda: platform.update_platform_fee(caller, body["new_fee_percent"]))


def post_update_min_ticket_price(platform, *, caller: Optional[str], body: dict) -> HandlerResult:
    missing = _require_caller(caller)
    if missing:
        return missing
    return _execute(lambda: platform.update_min_ticket_price(caller, body["new_min_price"]))


# ══════════════════════════════════════════════════════════════
# READS
# ══════════════════════════════════════════════════════════════

def get_event(platform, *, event_id: int) -> HandlerResult:
    event = platform.get_event(event_id)
    if event is None:
        return _not_found(f"Event {event_id} not found.")
    return 200, success_response(event.to_dict())


def get_ticket(platform, *, ticket_id: int) -> HandlerResult:
    ticket = platform.get_ticket(ticket_id)
    if ticket is None:
        return _not_found(f"Ticket {ticket_id} not found.")
    return 200, success_response(ticket.to_dict())


def get_user_tickets(platform, *, identity: str) -> HandlerResult:
    owned = platform.get_user_tickets(identity)
    if owned is None:
        return _not_found(f"'{identity}' owns no tickets.")
    return 200, success_response(owned)


def get_organizer(platform, *, identity: str) -> HandlerResult:
    record = platform.get_organizer_revenue(identity)
    if record is None:
        return _not_found(f"'{identity}' has not organized any events.")
    data = record.to_dict()
    data["events"] = [e.event_id for e in platform.list_events_by_organizer(identity)]
    return 200, success_response(data)


def get_platform_fee(platform, *, amount_raw: Optional[str]) -> HandlerResult:
    if amount_raw is None:
        return 200, success_response({
            "fee_percent": platform.get_fee_percent(),
            "min_ticket_price": platform.get_min_price(),
        })
    try:
        amount = int(amount_raw)
    except ValueError:
        return _invalid("amount must be an integer.")
    if amount < 0:
        return _invalid("amount must be >= 0.")
    return 200, success_response({
        "amount": amount,
        "fee_percent": platform.get_fee_percent(),
        "fee": platform.calculate_platform_fee(amount),
    })
