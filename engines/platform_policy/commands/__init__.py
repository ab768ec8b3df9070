"""
Ticketing Platform Policy Engine — Request Commands
"""
from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import Command, require_uint

PLATFORM_FEE_UPDATE_REQUEST       = "platform_policy.fee.update.request"
MIN_TICKET_PRICE_UPDATE_REQUEST   = "platform_policy.min_price.update.request"

PLATFORM_POLICY_COMMAND_TYPES = frozenset({
    PLATFORM_FEE_UPDATE_REQUEST,
    MIN_TICKET_PRICE_UPDATE_REQUEST,
})

SOURCE_ENGINE = "platform_policy"


@dataclass(frozen=True)
class UpdatePlatformFeeRequest:
    new_fee_percent: int

    def __post_init__(self):
        require_uint(self.new_fee_percent, "new_fee_percent")

    def to_command(self, actor_id: str, **kw) -> Command:
        return Command(
            command_type=PLATFORM_FEE_UPDATE_REQUEST,
            actor_id=actor_id,
            payload={"new_fee_percent": self.new_fee_percent},
            source_engine=SOURCE_ENGINE,
            **kw,
        )


@dataclass(frozen=True)
class UpdateMinTicketPriceRequest:
    new_min_price: int

    def __post_init__(self):
        require_uint(self.new_min_price, "new_min_price")

    def to_command(self, actor_id: str, **kw) -> Command:
        return Command(
            command_type=MIN_TICKET_PRICE_UPDATE_REQUEST,
            actor_id=actor_id,
            payload={"new_min_price": self.new_min_price},
            source_engine=SOURCE_ENGINE,
            **kw,
        )
