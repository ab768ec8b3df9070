"""
Ticketing Ticket Ledger Engine — Request Commands
"""
from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import Command, require_uint

TICKET_PURCHASE_REQUEST  = "ticket_ledger.ticket.purchase.request"
TICKET_VALIDATE_REQUEST  = "ticket_ledger.ticket.validate.request"
TICKET_REFUND_REQUEST    = "ticket_ledger.ticket.refund.request"

TICKET_LEDGER_COMMAND_TYPES = frozenset({
    TICKET_PURCHASE_REQUEST,
    TICKET_VALIDATE_REQUEST,
    TICKET_REFUND_REQUEST,
})

SOURCE_ENGINE = "ticket_ledger"


@dataclass(frozen=True)
class PurchaseTicketRequest:
    event_id: int

    def __post_init__(self):
        require_uint(self.event_id, "event_id")

    def to_command(self, actor_id: str, **kw) -> Command:
        return Command(
            command_type=TICKET_PURCHASE_REQUEST,
            actor_id=actor_id,
            payload={"event_id": self.event_id},
            source_engine=SOURCE_ENGINE,
            **kw,
        )


@dataclass(frozen=True)
class ValidateTicketRequest:
    ticket_id: int

    def __post_init__(self):
        require_uint(self.ticket_id, "ticket_id")

    def to_command(self, actor_id: str, **kw) -> Command:
        return Command(
            command_type=TICKET_VALIDATE_REQUEST,
            actor_id=actor_id,
            payload={"ticket_id": self.ticket_id},
            source_engine=SOURCE_ENGINE,
            **kw,
        )


@dataclass(frozen=True)
class RefundTicketRequest:
    ticket_id: int

    def __post_init__(self):
        require_uint(self.ticket_id, "ticket_id")

    def to_command(self, actor_id: str, **kw) -> Command:
        return Command(
            command_type=TICKET_REFUND_REQUEST,
            actor_id=actor_id,
            payload={"ticket_id": self.ticket_id},
            source_engine=SOURCE_ENGINE,
            **kw,
        )
