"""
Ticketing Event Registry Engine — Event Types and Payload Builders
====================================================================
Engine: event_registry
Scope:  Event creation with capacity, price floor, future date and
        refund window; closing sales on an event.
"""

from __future__ import annotations

from core.commands.base import Command

EVENT_CREATED_V1      = "event_registry.event.created.v1"
EVENT_DEACTIVATED_V1  = "event_registry.event.deactivated.v1"

EVENT_REGISTRY_EVENT_TYPES = (
    EVENT_CREATED_V1,
    EVENT_DEACTIVATED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "event_registry.event.create.request":     EVENT_CREATED_V1,
    "event_registry.event.deactivate.request": EVENT_DEACTIVATED_V1,
}


def resolve_event_registry_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_event_registry_event_types(journal) -> None:
    for et in sorted(EVENT_REGISTRY_EVENT_TYPES):
        journal.register_event_type(et)


def build_event_created_payload(cmd: Command, height: int, *, event_id: int) -> dict:
    p = cmd.payload
    return {
        "event_id":      event_id,
        "name":          p["name"],
        "description":   p["description"],
        "venue":         p["venue"],
        "organizer":     cmd.actor_id,
        "date":          p["date"],
        "total_tickets": p["total_tickets"],
        "ticket_price":  p["ticket_price"],
        "refund_window": p["refund_window"],
        "category":      p["category"],
        "created_at":    height,
    }


def build_event_deactivated_payload(cmd: Command, height: int) -> dict:
    return {
        "event_id":       cmd.payload["event_id"],
        "deactivated_by": cmd.actor_id,
        "deactivated_at": height,
    }
