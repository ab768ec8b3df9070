"""
Ticketing Ledger Primitive — Atomic Value Transfer
====================================================
The surrounding ledger owns balances. The core only asks it to move
value between two identities and to undo that move if the enclosing
transaction rolls back.

RULES (NON-NEGOTIABLE):
- All amounts are integer minimal currency units — NO floats
- A transfer either fully happens or raises TransferError
- Zero-amount and self transfers are refused (mirrors the native
  transfer primitive of the original ledger)
- checkpoint()/restore() give the TransactionEngine all-or-nothing
  semantics across the transfer and the state update
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple

logger = logging.getLogger("ticketing.ledger")


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

class TransferError(Exception):
    """Base error for value transfers. Carries no partial effects."""
    pass


class InsufficientFunds(TransferError):
    def __init__(self, identity: str, balance: int, amount: int):
        self.identity = identity
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"'{identity}' has balance {balance}, needs {amount}."
        )


class InvalidTransfer(TransferError):
    pass


# ══════════════════════════════════════════════════════════════
# RECEIPT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransferReceipt:
    sequence: int
    sender: str
    recipient: str
    amount: int

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "sender": self.sender,
            "recipient": self.recipient,
            "amount": self.amount,
        }


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════

class ValueLedger(Protocol):
    """Collaborator interface for the external ledger."""

    def transfer(self, sender: str, recipient: str, amount: int) -> TransferReceipt:
        ...  # pragma: no cover

    def balance_of(self, identity: str) -> int:
        ...  # pragma: no cover

    def checkpoint(self) -> object:
        ...  # pragma: no cover

    def restore(self, checkpoint: object) -> None:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY IMPLEMENTATION (dev server + tests)
# ══════════════════════════════════════════════════════════════

class InMemoryValueLedger:
    """
    Deterministic balance book.

    Identities never seen before hold `default_balance`, which lets a
    dev server hand every new account a starting allowance.
    """

    def __init__(
        self,
        balances: Optional[Dict[str, int]] = None,
        *,
        default_balance: int = 0,
    ) -> None:
        if default_balance < 0:
            raise ValueError("default_balance must be >= 0.")
        self._default_balance = default_balance
        self._balances: Dict[str, int] = {}
        self._receipts: List[TransferReceipt] = []
        for identity, amount in (balances or {}).items():
            self.credit(identity, amount)

    def credit(self, identity: str, amount: int) -> None:
        """Mint value to an identity (genesis allocation)."""
        _require_amount(amount, allow_zero=True)
        self._balances[identity] = self.balance_of(identity) + amount

    def balance_of(self, identity: str) -> int:
        return self._balances.get(identity, self._default_balance)

    def transfer(self, sender: str, recipient: str, amount: int) -> TransferReceipt:
        _require_amount(amount, allow_zero=False)
        if sender == recipient:
            raise InvalidTransfer(f"sender and recipient are both '{sender}'.")

        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientFunds(sender, balance, amount)

        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount
        receipt = TransferReceipt(
            sequence=len(self._receipts) + 1,
            sender=sender,
            recipient=recipient,
            amount=amount,
        )
        self._receipts.append(receipt)
        logger.debug(f"Transfer #{receipt.sequence}: {sender} → {recipient} ({amount})")
        return receipt

    @property
    def receipts(self) -> Tuple[TransferReceipt, ...]:
        return tuple(self._receipts)

    def checkpoint(self) -> Tuple[Dict[str, int], int]:
        return dict(self._balances), len(self._receipts)

    def restore(self, checkpoint: Tuple[Dict[str, int], int]) -> None:
        balances, receipt_count = checkpoint
        self._balances = dict(balances)
        del self._receipts[receipt_count:]


def _require_amount(amount, *, allow_zero: bool) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(
            f"amount must be int (minimal units), got {type(amount).__name__}."
        )
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidTransfer(f"amount must be positive, got {amount}.")
