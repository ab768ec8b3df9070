"""
Ticketing Event Registry Engine — Request Commands
====================================================
Request dataclasses check shape only (types, non-negative ints).
Domain rules (capacity, price floor, future date) are policies and
surface as rejections, never as ValueError.
"""
from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import Command, require_text, require_uint

EVENT_CREATE_REQUEST      = "event_registry.event.create.request"
EVENT_DEACTIVATE_REQUEST  = "event_registry.event.deactivate.request"

EVENT_REGISTRY_COMMAND_TYPES = frozenset({
    EVENT_CREATE_REQUEST,
    EVENT_DEACTIVATE_REQUEST,
})

SOURCE_ENGINE = "event_registry"


@dataclass(frozen=True)
class CreateEventRequest:
    name:          str
    description:   str
    venue:         str
    date:          int
    total_tickets: int
    ticket_price:  int
    refund_window: int
    category:      str

    def __post_init__(self):
        for field_name in ("name", "description", "venue", "category"):
            require_text(getattr(self, field_name), field_name)
        for field_name in ("date", "total_tickets", "ticket_price", "refund_window"):
            require_uint(getattr(self, field_name), field_name)

    def to_command(self, actor_id: str, **kw) -> Command:
        return Command(
            command_type=EVENT_CREATE_REQUEST,
            actor_id=actor_id,
            payload={
                "name": self.name, "description": self.description,
                "venue": self.venue, "date": self.date,
                "total_tickets": self.total_tickets,
                "ticket_price": self.ticket_price,
                "refund_window": self.refund_window,
                "category": self.category,
            },
            source_engine=SOURCE_ENGINE,
            **kw,
        )


@dataclass(frozen=True)
class DeactivateEventRequest:
    event_id: int

    def __post_init__(self):
        require_uint(self.event_id, "event_id")

    def to_command(self, actor_id: str, **kw) -> Command:
        return Command(
            command_type=EVENT_DEACTIVATE_REQUEST,
            actor_id=actor_id,
            payload={"event_id": self.event_id},
            source_engine=SOURCE_ENGINE,
            **kw,
        )
