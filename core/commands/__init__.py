"""
Ticketing Command Layer — System Governance
=============================================
Every state-changing call begins as a Command.
Every Command produces exactly one Outcome.
REJECTED commands leave no trace in state.
"""

from core.commands.base import (
    Command,
    derive_source_engine,
    require_identity,
    require_text,
    require_uint,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandStatus,
)
from core.commands.rejection import (
    REASON_NUMBERS,
    ReasonCode,
    RejectionReason,
)
from core.commands.bus import (
    CommandBusError,
    DuplicateHandlerError,
    ExecutionResult,
    NoHandlerRegistered,
    TransactionEngine,
)

__all__ = [
    # ── Base ──────────────────────────────────────────────────
    "Command",
    "derive_source_engine",
    "require_identity",
    "require_text",
    "require_uint",
    # ── Outcomes ──────────────────────────────────────────────
    "CommandOutcome",
    "CommandStatus",
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    "REASON_NUMBERS",
    # ── Bus ────────────────────────────────────────────────────
    "TransactionEngine",
    "ExecutionResult",
    "CommandBusError",
    "DuplicateHandlerError",
    "NoHandlerRegistered",
]
