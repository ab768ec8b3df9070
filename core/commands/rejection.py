"""
Ticketing Command Layer — Rejection Model
===========================================
Structured rejection reasons for denied commands.

A rejection is a value, not an exception. It travels inside a
REJECTED CommandOutcome and is never raised.

Every rejection must be:
- Deterministic (same input → same rejection)
- Auditable (code + message + policy)
- Machine-readable (code, stable number)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE. Each code carries a stable
    number (see REASON_NUMBERS) that never changes once published.
    """

    # ── Authorization ─────────────────────────────────────────
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # ── Event registry ────────────────────────────────────────
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    SOLD_OUT = "SOLD_OUT"
    EVENT_INACTIVE = "EVENT_INACTIVE"
    INVALID_PRICE = "INVALID_PRICE"
    EVENT_EXPIRED = "EVENT_EXPIRED"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    INVALID_REFUND_WINDOW = "INVALID_REFUND_WINDOW"

    # ── Ticket ledger ─────────────────────────────────────────
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    TICKET_USED = "TICKET_USED"
    REFUND_WINDOW_CLOSED = "REFUND_WINDOW_CLOSED"

    # ── Platform policy ───────────────────────────────────────
    INVALID_FEE = "INVALID_FEE"

    # ── Value ledger ──────────────────────────────────────────
    TRANSFER_FAILED = "TRANSFER_FAILED"


REASON_NUMBERS = {
    ReasonCode.NOT_AUTHORIZED: 1,
    ReasonCode.EVENT_NOT_FOUND: 2,
    ReasonCode.SOLD_OUT: 3,
    ReasonCode.EVENT_INACTIVE: 4,
    ReasonCode.INVALID_PRICE: 5,
    ReasonCode.EVENT_EXPIRED: 6,
    ReasonCode.INVALID_CAPACITY: 7,
    ReasonCode.INVALID_REFUND_WINDOW: 8,
    ReasonCode.TICKET_NOT_FOUND: 9,
    ReasonCode.TICKET_USED: 10,
    ReasonCode.REFUND_WINDOW_CLOSED: 11,
    ReasonCode.INVALID_FEE: 12,
    ReasonCode.TRANSFER_FAILED: 13,
}


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for command rejection.

    Fields:
        code:        Machine-readable rejection code (one of ReasonCode).
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if self.code not in REASON_NUMBERS:
            raise ValueError(f"code '{self.code}' is not a known ReasonCode.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    @property
    def number(self) -> int:
        """Stable numeric error code."""
        return REASON_NUMBERS[self.code]

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "number": self.number,
            "message": self.message,
            "policy_name": self.policy_name,
        }
