"""
Ticketing Core Config — Platform Parameters
=============================================
Doctrine: No hardcoded policy values in engine logic.
The admin identity and the initial fee / minimum price come from
configuration; after boot only the admin may change the latter two.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


DEFAULT_MIN_TICKET_PRICE = 1_000_000
DEFAULT_PLATFORM_FEE_PERCENT = 5
DEFAULT_BLOCK_INTERVAL_SECONDS = 600


@dataclass(frozen=True)
class TicketingConfig:
    """
    Boot-time configuration.

    Fields:
        admin_identity:         Privileged account; fixed for the process lifetime.
        min_ticket_price:       Initial price floor (positive, minimal units).
        platform_fee_percent:   Initial fee percentage (0–100).
        block_interval_seconds: Wall-clock seconds per block (SystemHeightClock).
        genesis_balance:        Starting balance for unseen identities (dev ledger).
    """

    admin_identity: str
    min_ticket_price: int = DEFAULT_MIN_TICKET_PRICE
    platform_fee_percent: int = DEFAULT_PLATFORM_FEE_PERCENT
    block_interval_seconds: int = DEFAULT_BLOCK_INTERVAL_SECONDS
    genesis_balance: int = 0

    def __post_init__(self) -> None:
        if not self.admin_identity or not isinstance(self.admin_identity, str):
            raise ValueError("admin_identity must be a non-empty string.")
        for name in (
            "min_ticket_price",
            "platform_fee_percent",
            "block_interval_seconds",
            "genesis_balance",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be int, got {type(value).__name__}.")
        if self.min_ticket_price <= 0:
            raise ValueError("min_ticket_price must be positive.")
        if not 0 <= self.platform_fee_percent <= 100:
            raise ValueError(
                f"platform_fee_percent must be between 0 and 100, "
                f"got {self.platform_fee_percent}."
            )
        if self.block_interval_seconds <= 0:
            raise ValueError("block_interval_seconds must be positive.")
        if self.genesis_balance < 0:
            raise ValueError("genesis_balance must be >= 0.")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> TicketingConfig:
        """
        Build from a settings mapping (e.g. Django settings.TICKETING).

        Keys are upper-case; numeric values may arrive as strings
        from the environment.
        """
        if "ADMIN_IDENTITY" not in values:
            raise ValueError("ADMIN_IDENTITY is required.")
        return cls(
            admin_identity=str(values["ADMIN_IDENTITY"]),
            min_ticket_price=_as_int(
                values.get("MIN_TICKET_PRICE", DEFAULT_MIN_TICKET_PRICE),
                "MIN_TICKET_PRICE",
            ),
            platform_fee_percent=_as_int(
                values.get("PLATFORM_FEE_PERCENT", DEFAULT_PLATFORM_FEE_PERCENT),
                "PLATFORM_FEE_PERCENT",
            ),
            block_interval_seconds=_as_int(
                values.get("BLOCK_INTERVAL_SECONDS", DEFAULT_BLOCK_INTERVAL_SECONDS),
                "BLOCK_INTERVAL_SECONDS",
            ),
            genesis_balance=_as_int(
                values.get("GENESIS_BALANCE", 0), "GENESIS_BALANCE"
            ),
        )


def _as_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc
