"""
Ticketing Command Layer — Command Outcome Contract
====================================================
Every Command produces exactly one Outcome. No exceptions.

ACCEPTED → effects committed, optional value (e.g. new event id).
REJECTED → nothing committed, reason is mandatory and auditable.

Rules:
- Exactly one outcome per command
- Outcome is immutable (frozen dataclass)
- REJECTED must contain reason (RejectionReason) and no value
- ACCEPTED must NOT contain reason
- height is the clock value the command was judged at
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
import uuid

from core.commands.rejection import RejectionReason


# ══════════════════════════════════════════════════════════════
# COMMAND STATUS
# ══════════════════════════════════════════════════════════════

class CommandStatus(Enum):
    """Binary command decision. No middle ground."""
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


# ══════════════════════════════════════════════════════════════
# COMMAND OUTCOME
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CommandOutcome:
    """
    Deterministic result of command execution.

    Fields:
        command_id: The command this outcome belongs to.
        status:     ACCEPTED or REJECTED.
        reason:     RejectionReason (mandatory if REJECTED, None if ACCEPTED).
        height:     Clock height at which the command was executed.
        value:      Operation result on success (new id, or True).
    """

    command_id: uuid.UUID
    status: CommandStatus
    reason: Optional[RejectionReason]
    height: int
    value: Any = None

    def __post_init__(self):
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError("command_id must be UUID.")

        if not isinstance(self.status, CommandStatus):
            raise ValueError(
                f"status must be CommandStatus, got {type(self.status).__name__}."
            )

        if self.status == CommandStatus.REJECTED and self.reason is None:
            raise ValueError(
                "REJECTED outcome must include a RejectionReason. "
                "No silent rejections allowed."
            )

        if self.status == CommandStatus.REJECTED and self.value is not None:
            raise ValueError("REJECTED outcome must NOT carry a value.")

        if self.status == CommandStatus.ACCEPTED and self.reason is not None:
            raise ValueError(
                "ACCEPTED outcome must NOT include a RejectionReason."
            )

        if not isinstance(self.height, int) or self.height < 0:
            raise ValueError("height must be a non-negative int.")

    @classmethod
    def accepted(cls, command_id: uuid.UUID, height: int, value: Any = True) -> CommandOutcome:
        return cls(
            command_id=command_id,
            status=CommandStatus.ACCEPTED,
            reason=None,
            height=height,
            value=value,
        )

    @classmethod
    def rejected(cls, command_id: uuid.UUID, height: int, reason: RejectionReason) -> CommandOutcome:
        return cls(
            command_id=command_id,
            status=CommandStatus.REJECTED,
            reason=reason,
            height=height,
        )

    @property
    def is_accepted(self) -> bool:
        return self.status == CommandStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == CommandStatus.REJECTED

    @property
    def error_code(self) -> Optional[str]:
        return None if self.reason is None else self.reason.code

    def to_dict(self) -> dict:
        return {
            "command_id": str(self.command_id),
            "status": self.status.value,
            "height": self.height,
            "value": self.value,
            "reason": None if self.reason is None else self.reason.to_dict(),
        }
