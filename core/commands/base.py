"""
Ticketing Command Layer — Command Base Contract
=================================================
Every state-changing call begins as a Command.

A Command is a frozen, auditable declaration of caller intent.
It carries identity, caller and payload — nothing else.

Rules:
- Immutable once created (frozen dataclass)
- No business logic inside
- No clock reads (height is assigned by the TransactionEngine)
- command_type must end with '.request'
- command_type follows engine.domain.action.request format
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Optional


# ══════════════════════════════════════════════════════════════
# CANONICAL COMMAND
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Command:
    """
    Canonical command — declaration of caller intent.

    Fields:
        command_type:   Namespaced type ending in '.request'
                        (e.g. 'ticket_ledger.ticket.purchase.request').
        actor_id:       Identity of the calling account.
        payload:        Intent data (dict).
        source_engine:  Engine that owns this command type.
        command_id:     Unique identifier (UUID).
        correlation_id: Groups related commands in a story.
    """

    command_type: str
    actor_id: str
    payload: dict
    source_engine: str
    command_id: uuid.UUID = field(default_factory=uuid.uuid4)
    correlation_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError(
                f"command_id must be UUID, got {type(self.command_id).__name__}"
            )

        if not self.command_type or not isinstance(self.command_type, str):
            raise ValueError("command_type must be a non-empty string.")

        if not self.command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{self.command_type}' must end with "
                f"'.request' (e.g. 'event_registry.event.create.request')."
            )

        parts = self.command_type.split(".")
        if len(parts) < 4:
            raise ValueError(
                f"command_type '{self.command_type}' must follow "
                f"engine.domain.action.request format (minimum 4 segments)."
            )

        if parts[0] != self.source_engine:
            raise ValueError(
                f"command_type namespace '{parts[0]}' does not match "
                f"source_engine '{self.source_engine}'."
            )

        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")

        if not isinstance(self.payload, dict):
            raise TypeError("payload must be a dict.")

        if self.correlation_id is not None and not isinstance(self.correlation_id, uuid.UUID):
            raise ValueError("correlation_id must be UUID.")


# ══════════════════════════════════════════════════════════════
# REQUEST FIELD CHECKS (shared by engine request dataclasses)
# ══════════════════════════════════════════════════════════════

def require_uint(value, field_name: str) -> None:
    """Reject anything that is not a non-negative int (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an int, got {type(value).__name__}.")
    if value < 0:
        raise ValueError(f"{field_name} must be >= 0.")


def require_text(value, field_name: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a str, got {type(value).__name__}.")


def require_identity(value, field_name: str) -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")


def derive_source_engine(command_type: str) -> str:
    """
    Extract source engine from command type.

    ticket_ledger.ticket.purchase.request → ticket_ledger
    """
    return command_type.split(".")[0]
