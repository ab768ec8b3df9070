"""
Ticketing Core Primitives — Public API
"""

from core.primitives.ledger import (
    InMemoryValueLedger,
    InsufficientFunds,
    InvalidTransfer,
    TransferError,
    TransferReceipt,
    ValueLedger,
)

__all__ = [
    "ValueLedger",
    "InMemoryValueLedger",
    "TransferReceipt",
    "TransferError",
    "InsufficientFunds",
    "InvalidTransfer",
]
